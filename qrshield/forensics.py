# qrshield/forensics.py

"""
Forensic model call.

    request_assessment(payload, image_bytes) -> dict

Sends the decoded QR payload (or the image-only marker) and, when available,
the captured image to the model and returns the first JSON object of its
reply. Nothing here is trusted downstream: the verdict engine re-derives the
score and level from the three probabilities.
"""

from __future__ import annotations

import base64
import json
import re
from typing import Any, Dict, List, Optional

from qrshield import config
from qrshield.ai.groq_client import ForensicServiceError, groq_chat
from qrshield.engine.types import IMAGE_ONLY_SENTINEL
from qrshield.qr_scanner.payload import describe_payload

SYSTEM_PROMPT = """
You are a QR code forensics analyst specialising in quishing (QR phishing).
Inspect the QR payload and, when given, the image of the code.

Score three independent dimensions from 0 to 100:
1. malicious_score: direct harmful intent. Obfuscated URLs, suspicious TLDs,
   known phishing paths, credential theft, malware, urgent redirection.
2. fake_score: deceptive or non-original structure. Dynamic QR redirectors
   (qrco.de, me-qr.com), link shorteners (bit.ly), brand mimicry, encoded
   or cloaked destinations.
3. authentic_score: a verified, legitimate, direct reference to a known
   root domain (google.com, microsoft.com, ...).

The three scores do not need to add up to 100. Be decisive.

Respond ONLY with a JSON object of this exact shape:
{
  "malicious_score": number,
  "fake_score": number,
  "authentic_score": number,
  "explanation": "one or two plain sentences",
  "recommendations": ["short action", "short action"]
}
"""


def _extract_json_block(text: str) -> str | None:
    """Extract the first JSON object from any AI output."""
    match = re.search(r"\{[\s\S]*\}", text)
    if match:
        return match.group(0)
    return None


def _image_data_url(image_bytes: bytes) -> str:
    mime = "image/png"
    if image_bytes[:3] == b"\xff\xd8\xff":
        mime = "image/jpeg"
    elif image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        mime = "image/webp"
    return f"data:{mime};base64,{base64.b64encode(image_bytes).decode('ascii')}"


def build_messages(payload: Optional[str], image_bytes: Optional[bytes]) -> List[Dict[str, Any]]:
    payload_text = payload or IMAGE_ONLY_SENTINEL
    if payload:
        kind = describe_payload(payload).qr_type
        hint = f"Payload type: {kind}."
    else:
        hint = "No payload could be decoded; judge the image itself."

    prompt = (
        f'Analyze this QR payload for security threats: "{payload_text}".\n'
        f"{hint}\n"
        "If it is a dynamic redirect or link shortener, set fake_score to 100."
    )

    if image_bytes:
        user_content: Any = [
            {"type": "text", "text": prompt},
            {"type": "image_url", "image_url": {"url": _image_data_url(image_bytes)}},
        ]
    else:
        user_content = prompt

    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": user_content},
    ]


def parse_assessment(raw: str) -> Dict[str, Any]:
    json_text = _extract_json_block(raw)
    if not json_text:
        raise ForensicServiceError("MALFORMED_RESPONSE", "No JSON object in model reply.")
    try:
        data = json.loads(json_text)
    except ValueError as exc:
        # JSONDecodeError, or an integer past the interpreter digit limit
        raise ForensicServiceError("MALFORMED_RESPONSE", f"Invalid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise ForensicServiceError("MALFORMED_RESPONSE", "Model reply is not a JSON object.")
    return data


def request_assessment(payload: Optional[str], image_bytes: Optional[bytes] = None) -> Dict[str, Any]:
    raw = groq_chat(
        build_messages(payload, image_bytes),
        model=config.FORENSIC_MODEL,
        temperature=0,
        json_mode=True,
    )
    return parse_assessment(raw)
