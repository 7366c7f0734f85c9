# qrshield/engine/scoring.py

from __future__ import annotations

import math

from .config import DEFAULT_ENGINE_CONFIG, EngineConfig
from .types import ProbabilityTriple, RiskLevel


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def composite_score(
    triple: ProbabilityTriple,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> int:
    """
    Collapse the triple into one 0-100 risk number.

        raw = wM * malicious + wF * fake - wA * authentic

    The raw value is amplified to make up for the subtractive term, clamped
    into [0, 100] and rounded half-up. Out-of-range triples are tolerated;
    only the clamp keeps the result in range.
    """
    raw = (
        config.weight_malicious * triple.malicious
        + config.weight_fake * triple.fake
        - config.weight_authentic * triple.authentic
    )
    amplified = raw * config.amplification
    return _round_half_up(min(100.0, max(0.0, amplified)))


def classify_level(score: int, config: EngineConfig = DEFAULT_ENGINE_CONFIG) -> RiskLevel:
    """Map a score onto its band. Pure function of the score."""
    score = min(100, max(0, score))
    for upper, level in config.bands:
        if score < upper:
            return level
    return config.top_level
