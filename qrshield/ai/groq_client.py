# qrshield/ai/groq_client.py

from __future__ import annotations

import os
from typing import Any, Dict, List, Optional

import groq
from groq import Groq

from qrshield import config

_client: Groq | None = None


class ForensicServiceError(RuntimeError):
    """Remote model call could not produce a usable answer."""

    def __init__(self, code: str, message: str = ""):
        super().__init__(message or code)
        self.code = code


def get_api_key() -> str:
    key = (os.getenv("GROQ_API_KEY") or "").strip()
    if not key:
        raise ForensicServiceError("API_KEY_MISSING", "GROQ_API_KEY is not set.")
    if any(ch.isspace() for ch in key):
        raise ForensicServiceError("API_KEY_MALFORMED", "GROQ_API_KEY contains whitespace.")
    return key


def get_client() -> Groq:
    global _client
    if _client is None:
        _client = Groq(
            api_key=get_api_key(),
            timeout=config.GROQ_TIMEOUT,
            max_retries=config.GROQ_MAX_RETRIES,
        )
    return _client


def reset_client() -> None:
    global _client
    _client = None


def groq_chat(
    messages: List[Dict[str, Any]],
    model: str,
    temperature: float = 0.2,
    json_mode: bool = False,
) -> str:
    """
    Chat completion with the SDK errors folded into ForensicServiceError.

    Retries and timeouts are handled by the SDK client (see get_client).
    """
    client = get_client()
    kwargs: Dict[str, Any] = {}
    if json_mode:
        kwargs["response_format"] = {"type": "json_object"}

    try:
        resp = client.chat.completions.create(
            model=model,
            messages=messages,
            temperature=temperature,
            **kwargs,
        )
    except (groq.AuthenticationError, groq.PermissionDeniedError) as exc:
        raise ForensicServiceError("UNAUTHORIZED", str(exc)) from exc
    except groq.NotFoundError as exc:
        raise ForensicServiceError("KEY_NOT_FOUND", str(exc)) from exc
    except groq.APIError as exc:
        raise ForensicServiceError("UPSTREAM_UNAVAILABLE", str(exc)) from exc

    content: Optional[str] = resp.choices[0].message.content if resp.choices else None
    if not content or not content.strip():
        raise ForensicServiceError("EMPTY_RESPONSE", "Model returned no content.")
    return content.strip()
