# qrshield/scan_service.py

"""
One scan, start to finish: forensic model call, then the verdict engine.

Upstream failures never reach the caller as exceptions; they come back as
the engine's fixed fallback result flagged as degraded.
"""

from __future__ import annotations

import json
import logging
from typing import Optional

import sentry_sdk

from qrshield.ai.groq_client import ForensicServiceError
from qrshield.engine import AnalysisResult, get_engine
from qrshield.engine.assembler import fallback_result
from qrshield.forensics import request_assessment

logger = logging.getLogger("qrshield.scan")


def run_scan(content: Optional[str], image_bytes: Optional[bytes] = None) -> AnalysisResult:
    payload = (content or "").strip() or None
    if payload is None and not image_bytes:
        raise ValueError("A scan needs decoded content or an image.")

    engine = get_engine()
    try:
        response = request_assessment(payload, image_bytes)
    except ForensicServiceError as exc:
        logger.warning(
            json.dumps({"event": "forensic_error", "code": exc.code, "error": str(exc)})
        )
        sentry_sdk.capture_exception(exc)
        result = fallback_result(payload, exc.code, engine.config)
    else:
        result = engine.analyze(response, payload)

    logger.info(
        json.dumps(
            {
                "event": "scan_complete",
                "mode": "content" if payload else "image_only",
                "with_image": bool(image_bytes),
                "score": result.risk_score,
                "level": result.risk_level.value,
                "flagged": bool(result.matched_rules),
                "degraded": result.degraded,
                "error_code": result.error_code,
            }
        )
    )
    return result
