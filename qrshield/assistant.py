# qrshield/assistant.py

from __future__ import annotations

import json
import logging
from typing import Optional

from qrshield import config
from qrshield.ai.groq_client import ForensicServiceError, groq_chat

logger = logging.getLogger("qrshield.assistant")

SYSTEM_MSG = "You are the QRShield Guardian Assistant. Keep answers short and safety-focused."

OFFLINE_REPLY = "The assistant is currently offline. Please check your connection."
EMPTY_REPLY = "I'm sorry, I couldn't process that request."


def assistant_reply(message: str, context: Optional[str] = None) -> str:
    """Short safety answer; never raises, falls back to a fixed reply."""
    prompt = f'User Query: "{message}". Context: {context or "General security help"}.'
    try:
        return groq_chat(
            [
                {"role": "system", "content": SYSTEM_MSG},
                {"role": "user", "content": prompt},
            ],
            model=config.ASSISTANT_MODEL,
        )
    except ForensicServiceError as exc:
        if exc.code == "EMPTY_RESPONSE":
            return EMPTY_REPLY
        logger.warning(json.dumps({"event": "assistant_error", "code": exc.code}))
        return OFFLINE_REPLY
