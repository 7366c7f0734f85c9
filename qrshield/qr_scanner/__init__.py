# qrshield/qr_scanner/__init__.py

"""
QR capture helpers.

    decode_qr_image(image_bytes) -> str | None
    describe_payload(text) -> PayloadInfo
"""

from .decoder import decode_qr_image
from .payload import PayloadInfo, describe_payload
