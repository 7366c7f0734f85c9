# qrshield/engine/types.py

"""
Value objects shared by every stage of the verdict engine.

All of them are frozen: a stage never edits the triple it receives, it hands
back a new one.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, Optional, Tuple

# Payload marker used when only an image was captured and nothing decoded.
IMAGE_ONLY_SENTINEL = "IMAGE_FORENSICS_ONLY"

DIMENSIONS = ("malicious", "fake", "authentic")


class RiskLevel(str, Enum):
    LOW = "LOW"
    MODERATE = "MODERATE"
    SUSPICIOUS = "SUSPICIOUS"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"

    @property
    def rank(self) -> int:
        """Position in ascending severity order (LOW == 0)."""
        return _LEVEL_ORDER.index(self)


_LEVEL_ORDER = (
    RiskLevel.LOW,
    RiskLevel.MODERATE,
    RiskLevel.SUSPICIOUS,
    RiskLevel.HIGH,
    RiskLevel.CRITICAL,
)


@dataclass(frozen=True)
class ProbabilityTriple:
    malicious: float = 0
    fake: float = 0
    authentic: float = 0

    def get(self, dimension: str) -> float:
        return getattr(self, dimension)

    def with_values(self, **values: float) -> "ProbabilityTriple":
        return replace(self, **values)

    def clamped(self, low: float = 0, high: float = 100) -> "ProbabilityTriple":
        return ProbabilityTriple(
            malicious=min(high, max(low, self.malicious)),
            fake=min(high, max(low, self.fake)),
            authentic=min(high, max(low, self.authentic)),
        )

    def max_separation(self) -> float:
        m, f, a = self.malicious, self.fake, self.authentic
        return max(abs(m - f), abs(m - a), abs(f - a))

    def as_dict(self) -> Dict[str, float]:
        return {
            "malicious": self.malicious,
            "fake": self.fake,
            "authentic": self.authentic,
        }


@dataclass(frozen=True)
class PatternRule:
    pattern: str
    category: str = "generic"

    def matches(self, lowered_text: str) -> bool:
        return self.pattern.lower() in lowered_text


@dataclass(frozen=True)
class ContentSignal:
    """Outcome of the payload scan: flag plus the rules that fired."""

    flagged: bool
    matches: Tuple[PatternRule, ...] = ()

    @property
    def patterns(self) -> Tuple[str, ...]:
        return tuple(rule.pattern for rule in self.matches)


@dataclass(frozen=True)
class EngineVerdict:
    """Engine output before the upstream text fields are merged in."""

    risk_score: int
    risk_level: RiskLevel
    probabilities: ProbabilityTriple
    signal: ContentSignal


@dataclass(frozen=True)
class AnalysisResult:
    risk_score: int
    risk_level: RiskLevel
    probabilities: ProbabilityTriple
    explanation: str
    recommendations: Tuple[str, ...]
    original_content: str
    matched_rules: Tuple[PatternRule, ...] = field(default_factory=tuple)
    degraded: bool = False
    error_code: Optional[str] = None

    @property
    def matched_patterns(self) -> Tuple[str, ...]:
        return tuple(rule.pattern for rule in self.matched_rules)
