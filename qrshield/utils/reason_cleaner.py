# qrshield/utils/reason_cleaner.py

"""
Plain-English descriptions for the payload patterns that fired, so the
result screen can say why a code was flagged without exposing rule names.
"""

from __future__ import annotations

from typing import Iterable, List

from qrshield.engine.types import PatternRule

FRIENDLY_MAP = {
    "shortener": lambda p: (
        f"The code uses a link shortener ('{p}'), which hides the real destination."
    ),
    "redirector": lambda p: (
        f"The code goes through a redirect service ('{p}') before reaching the real website."
    ),
    "credential": lambda p: (
        f"The link contains '{p}', wording commonly used on fake login or account pages."
    ),
    "encoding": lambda p: (
        f"The content is disguised with unusual encoding ('{p}')."
    ),
}


def clean_reason(rule: PatternRule) -> str:
    """Return a human-friendly explanation for a single matched rule."""
    handler = FRIENDLY_MAP.get(rule.category)
    if handler is None:
        return f"The code contains a suspicious pattern ('{rule.pattern}')."
    return handler(rule.pattern)


def clean_reasons(rules: Iterable[PatternRule]) -> List[str]:
    """One sentence per category, using the first rule that matched in it."""
    cleaned = []
    seen = set()
    for rule in rules:
        if rule.category in seen:
            continue
        seen.add(rule.category)
        cleaned.append(clean_reason(rule))
    return cleaned
