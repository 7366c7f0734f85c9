# qrshield/config.py

"""
Environment-driven settings. Secrets (GROQ_API_KEY) are read lazily by the
client so importing the app never fails on a missing key.
"""

from __future__ import annotations

import os

FORENSIC_MODEL = os.getenv("QRSHIELD_FORENSIC_MODEL", "meta-llama/llama-4-scout-17b-16e-instruct")
ASSISTANT_MODEL = os.getenv("QRSHIELD_ASSISTANT_MODEL", "llama-3.3-70b-versatile")

GROQ_TIMEOUT = float(os.getenv("QRSHIELD_GROQ_TIMEOUT", "30"))
GROQ_MAX_RETRIES = int(os.getenv("QRSHIELD_GROQ_MAX_RETRIES", "2"))

MAX_IMAGE_BYTES = int(os.getenv("QRSHIELD_MAX_IMAGE_BYTES", str(5 * 1024 * 1024)))
MAX_CONTENT_CHARS = int(os.getenv("QRSHIELD_MAX_CONTENT_CHARS", "10000"))

# Optional JSON overrides for the verdict engine
PATTERN_FILE = os.getenv("QRSHIELD_PATTERN_FILE", "")
ENGINE_CONFIG_FILE = os.getenv("QRSHIELD_ENGINE_CONFIG", "")

SENTRY_DSN = os.getenv("SENTRY_DSN", "")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
