# qrshield/engine/classifier.py

from __future__ import annotations

from typing import Optional

from .patterns import DEFAULT_PATTERN_TABLE, PatternTable
from .types import IMAGE_ONLY_SENTINEL, ContentSignal

_NO_SIGNAL = ContentSignal(flagged=False)


class ContentClassifier:
    """
    Existence-only substring scan of a decoded payload.

    A single matching rule is enough to flag the payload; rules carry no
    weight relative to each other. Matches are reported in table order.
    """

    def __init__(self, table: PatternTable = DEFAULT_PATTERN_TABLE):
        self.table = table

    def classify(self, payload: Optional[str]) -> ContentSignal:
        # Image-only captures have no text to inspect.
        if not payload or payload == IMAGE_ONLY_SENTINEL:
            return _NO_SIGNAL

        lowered = payload.lower()
        matches = tuple(rule for rule in self.table if rule.matches(lowered))
        if not matches:
            return _NO_SIGNAL
        return ContentSignal(flagged=True, matches=matches)
