# qrshield/qr_scanner/payload.py

"""
Coarse payload typing for decoded QR text (url, wifi, crypto, ...).

Used for the model prompt hint and echoed in API responses. It has no say
in the risk score.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

import tldextract
import validators

QRType = Literal[
    "url",
    "wifi",
    "payment",
    "crypto",
    "vcard",
    "text",
    "unknown",
]

# offline extractor: use the bundled suffix list, never fetch it
_extract = tldextract.TLDExtract(suffix_list_urls=())


@dataclass(frozen=True)
class PayloadInfo:
    raw_data: str
    qr_type: QRType
    normalized: Optional[str] = None   # e.g. normalized URL


def _looks_like_url(text: str) -> bool:
    if " " in text:
        return False
    if validators.url(text):
        return True
    # allow bare domains like "example.com"
    ext = _extract(text)
    return bool(ext.domain and ext.suffix)


def describe_payload(raw: str) -> PayloadInfo:
    s = raw.strip()
    lower = s.lower()

    # WiFi QR: WIFI:S:<ssid>;T:<WPA|WEP|nopass>;P:<password>;;
    if lower.startswith("wifi:"):
        return PayloadInfo(raw_data=s, qr_type="wifi")

    if lower.startswith(("btc:", "bitcoin:", "eth:", "ethereum:", "usdt:", "ltc:", "xrp:", "doge:")):
        return PayloadInfo(raw_data=s, qr_type="crypto", normalized=s.split(":", 1)[1])

    if lower.startswith("begin:vcard"):
        return PayloadInfo(raw_data=s, qr_type="vcard")

    # Payments: CashApp, PayPal.me, Venmo-style
    if "cash.app" in lower or "paypal.me" in lower or "venmo.com" in lower:
        return PayloadInfo(raw_data=s, qr_type="payment")

    if _looks_like_url(s):
        normalized = s if lower.startswith(("http://", "https://")) else "https://" + s
        return PayloadInfo(raw_data=s, qr_type="url", normalized=normalized)

    if " " in s or len(s.splitlines()) > 1:
        return PayloadInfo(raw_data=s, qr_type="text")

    return PayloadInfo(raw_data=s, qr_type="unknown")
