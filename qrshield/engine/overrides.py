# qrshield/engine/overrides.py

"""
Pattern-triggered safety net on top of the model's raw estimate.

When the payload contains a known-bad structure (shortener, dynamic redirect,
credential bait, obfuscated encoding) the model is not trusted to penalise
it: malicious gets a floor, fake is forced to its override value and
authentic is capped. Unflagged triples pass through untouched.
"""

from __future__ import annotations

from .config import DEFAULT_ENGINE_CONFIG, EngineConfig
from .types import ContentSignal, ProbabilityTriple


def apply_overrides(
    raw: ProbabilityTriple,
    signal: ContentSignal,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> ProbabilityTriple:
    if not signal.flagged:
        return raw

    return ProbabilityTriple(
        malicious=max(raw.malicious, config.malicious_floor),
        # replaces the estimate outright, not a bound
        fake=config.fake_override,
        authentic=min(raw.authentic, config.authentic_ceiling),
    )
