# qrshield/engine/patterns.py

"""
Suspicious-pattern table used by the content classifier.

The table is a plain, versioned value. The default one below ships with the
package; deployments can point QRSHIELD_PATTERN_FILE at a JSON file instead:

    {"version": "2024.1-custom",
     "rules": [{"pattern": "bit.ly", "category": "shortener"}, ...]}

or simply ["bit.ly", "qrco.de", ...].
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Tuple

from .types import PatternRule

SHORTENER = "shortener"
REDIRECTOR = "redirector"
CREDENTIAL = "credential"
ENCODING = "encoding"


@dataclass(frozen=True)
class PatternTable:
    version: str
    rules: Tuple[PatternRule, ...]

    def __post_init__(self) -> None:
        for rule in self.rules:
            if not rule.pattern or not rule.pattern.strip():
                raise ValueError("Pattern rules must not be empty")

    def __len__(self) -> int:
        return len(self.rules)

    def __iter__(self):
        return iter(self.rules)

    @classmethod
    def from_strings(
        cls, patterns: Iterable[str], version: str = "custom", category: str = "generic"
    ) -> "PatternTable":
        return cls(version=version, rules=tuple(PatternRule(p, category) for p in patterns))

    @classmethod
    def from_data(cls, data: Any) -> "PatternTable":
        if isinstance(data, list):
            return cls.from_strings([str(p) for p in data])
        if not isinstance(data, dict):
            raise ValueError("Pattern table must be a JSON object or list")

        rules = []
        for item in data.get("rules", []):
            if isinstance(item, str):
                rules.append(PatternRule(item))
            elif isinstance(item, dict) and item.get("pattern"):
                rules.append(PatternRule(str(item["pattern"]), str(item.get("category", "generic"))))
            else:
                raise ValueError(f"Invalid pattern rule: {item!r}")
        return cls(version=str(data.get("version", "custom")), rules=tuple(rules))


def _rules(category: str, *patterns: str) -> Tuple[PatternRule, ...]:
    return tuple(PatternRule(p, category) for p in patterns)


DEFAULT_PATTERN_TABLE = PatternTable(
    version="2024.1",
    rules=(
        # link shorteners hide the real destination
        *_rules(
            SHORTENER,
            "bit.ly", "tinyurl.com", "t.co/", "goo.gl", "cutt.ly", "is.gd",
            "v.gd", "ow.ly", "shorturl.at", "rebrand.ly", "rb.gy", "tiny.cc",
        ),
        # dynamic QR hosting and open redirects
        *_rules(
            REDIRECTOR,
            "qrco.de", "me-qr.com", "qr-code-generator.com", "qrs.ly", "scnv.io",
            "l.ead.me", "url=http", "redirect=http", "redirect_uri=http", "next=http",
        ),
        *_rules(
            CREDENTIAL,
            "verify-account", "account-verify", "confirm-identity", "password-reset",
            "reset-password", "update-billing", "secure-login", "login-", "signin-",
            "wallet-connect", "seed-phrase",
        ),
        # obfuscated or non-web payloads
        *_rules(
            ENCODING,
            "xn--", "%2f%2f", "%00", "data:text/html", "javascript:", "base64,",
        ),
    ),
)


def load_pattern_table(path: str | Path | None) -> PatternTable:
    """Read a pattern table from JSON, or return the built-in table."""
    if not path:
        return DEFAULT_PATTERN_TABLE
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    return PatternTable.from_data(data)
