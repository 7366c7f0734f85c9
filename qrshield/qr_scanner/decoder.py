# qrshield/qr_scanner/decoder.py

"""
Optical QR decoding: image bytes -> payload text, or None when no code
could be read.
"""

from __future__ import annotations

import io
import json
import logging
from typing import List, Optional

import cv2
import numpy as np
from PIL import Image, UnidentifiedImageError

logger = logging.getLogger("qrshield.decoder")


# ---------------------------------------------------------
# OPENCV
# ---------------------------------------------------------
def _decode_opencv(img: np.ndarray) -> List[str]:
    detector = cv2.QRCodeDetector()

    # Try Multi QR
    try:
        ret, data, _, _ = detector.detectAndDecodeMulti(img)
    except cv2.error:
        ret, data = False, None

    if ret and data:
        found = [txt.strip() for txt in data if txt and txt.strip()]
        if found:
            return found

    # Single fallback
    try:
        txt, _, _ = detector.detectAndDecode(img)
    except cv2.error:
        txt = ""
    return [txt.strip()] if txt and txt.strip() else []


# ---------------------------------------------------------
# PYZBAR (fallback for codes OpenCV misses)
# ---------------------------------------------------------
def _load_image(image_bytes: bytes) -> Optional[Image.Image]:
    try:
        img = Image.open(io.BytesIO(image_bytes))
        img.load()
    except (UnidentifiedImageError, OSError):
        return None
    if img.mode not in ("RGB", "L"):
        img = img.convert("RGB")
    return img


def _decode_zbar(image_bytes: bytes) -> List[str]:
    img = _load_image(image_bytes)
    if img is None:
        return []

    # pyzbar loads the system zbar library on import
    from pyzbar.pyzbar import decode as decode_zbar

    found = []
    for obj in decode_zbar(img):
        raw = obj.data.decode("utf-8", errors="replace").strip()
        if raw:
            found.append(raw)
    return found


# ---------------------------------------------------------
# MAIN ENTRY
# ---------------------------------------------------------
def decode_qr_image(image_bytes: bytes) -> Optional[str]:
    """Return the first decoded payload in the image, or None."""
    if not image_bytes:
        return None

    np_arr = np.frombuffer(image_bytes, np.uint8)
    img = cv2.imdecode(np_arr, cv2.IMREAD_COLOR)

    payloads: List[str] = []
    if img is not None:
        payloads = _decode_opencv(img)
    if not payloads:
        payloads = _decode_zbar(image_bytes)

    logger.info(
        json.dumps(
            {
                "event": "qr_decode",
                "image_bytes": len(image_bytes),
                "image_readable": img is not None,
                "found": len(payloads),
            }
        )
    )
    return payloads[0] if payloads else None
