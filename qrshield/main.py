# qrshield/main.py

from __future__ import annotations

import base64
import binascii
import json
import logging
import secrets
import time

import sentry_sdk
from fastapi import FastAPI, File, Request, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from qrshield import config
from qrshield.assistant import assistant_reply
from qrshield.engine import get_engine
from qrshield.models import AnalysisResponse, AnalyzeRequest, ChatRequest, ChatResponse
from qrshield.qr_scanner import decode_qr_image
from qrshield.scan_service import run_scan

# Init Sentry if configured
if config.SENTRY_DSN:
    sentry_sdk.init(dsn=config.SENTRY_DSN, traces_sample_rate=0.2)

logger = logging.getLogger("qrshield")
logging.basicConfig(level=config.LOG_LEVEL, format="%(message)s")

app = FastAPI(title="QRShield API")

IMAGE_TOO_LARGE = f"Image too large. Max {config.MAX_IMAGE_BYTES // (1024 * 1024)}MB."


# Return JSON for unexpected errors/validation failures to avoid empty/HTML responses
@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
    logger.error(json.dumps({"event": "error", "path": str(request.url), "error": str(exc)}))
    return JSONResponse({"error": "Internal server error."}, status_code=500)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse({"error": "Invalid request.", "detail": exc.errors()}, status_code=422)


# Global headers middleware for security headers + request id
@app.middleware("http")
async def security_headers(request: Request, call_next):
    request_id = secrets.token_hex(8)
    request.state.request_id = request_id
    start_time = time.time()
    response = await call_next(request)
    duration = round((time.time() - start_time) * 1000, 2)
    logger.info(
        json.dumps(
            {
                "event": "request",
                "request_id": request_id,
                "path": request.url.path,
                "method": request.method,
                "status": response.status_code,
                "duration_ms": duration,
            }
        )
    )
    response.headers["X-Request-ID"] = request_id
    response.headers["X-Frame-Options"] = "DENY"
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["Referrer-Policy"] = "no-referrer"
    return response


# ---------------------------------------------------------
# Helpers
# ---------------------------------------------------------
def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


def _decode_image_base64(data: str) -> bytes:
    # accept data URLs as produced by FileReader.readAsDataURL
    if data.startswith("data:") and "," in data:
        data = data.split(",", 1)[1]
    return base64.b64decode(data, validate=True)


def _respond(result) -> dict:
    response = AnalysisResponse.from_result(result, get_engine().config.version)
    return response.model_dump()


# ---------------------------------------------------------
# Routes
# ---------------------------------------------------------
@app.get("/health")
def health():
    engine = get_engine()
    return {
        "status": "ok",
        "engine_version": engine.config.version,
        "pattern_table_version": engine.patterns.version,
    }


@app.post("/analyze")
def analyze(body: AnalyzeRequest):
    content = (body.content or "").strip()
    image_data = (body.image_base64 or "").strip()

    if not content and not image_data:
        return _error("content or image_base64 is required", 400)
    if len(content) > config.MAX_CONTENT_CHARS:
        return _error(f"Input too large. Max {config.MAX_CONTENT_CHARS:,} characters.", 413)

    image_bytes = None
    if image_data:
        try:
            image_bytes = _decode_image_base64(image_data)
        except (binascii.Error, ValueError):
            return _error("image_base64 is not valid base64.", 400)
        if len(image_bytes) > config.MAX_IMAGE_BYTES:
            return _error(IMAGE_TOO_LARGE, 413)

    result = run_scan(content or None, image_bytes)
    return _respond(result)


@app.post("/qr")
def qr(image: UploadFile = File(...)):
    img_bytes = image.file.read()
    if not img_bytes:
        return _error("Uploaded image is empty.", 400)
    if len(img_bytes) > config.MAX_IMAGE_BYTES:
        return _error(IMAGE_TOO_LARGE, 413)

    # No decodable code still gets an image-only scan.
    payload = decode_qr_image(img_bytes)
    result = run_scan(payload, img_bytes)
    return _respond(result)


@app.post("/chat")
def chat(body: ChatRequest):
    message = body.message.strip()
    if not message:
        return _error("message is empty", 400)
    if len(message) > config.MAX_CONTENT_CHARS:
        return _error(f"Input too large. Max {config.MAX_CONTENT_CHARS:,} characters.", 413)
    return ChatResponse(reply=assistant_reply(message, body.context)).model_dump()
