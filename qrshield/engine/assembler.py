# qrshield/engine/assembler.py

"""
Turn the upstream model's loose JSON into engine input, and fold the engine
verdict back together with the model's text into an AnalysisResult.

The upstream object is treated as untrusted:
- missing probability fields become 0
- non-numeric values (including booleans, NaN, inf) become 0
- numeric strings are parsed, everything is clamped to [0, 100] and rounded
- unknown fields are ignored, as are the model's own risk_score / risk_level
"""

from __future__ import annotations

import math
from typing import Any, List, Mapping, Optional, Tuple

from .config import DEFAULT_ENGINE_CONFIG, EngineConfig
from .scoring import classify_level, composite_score
from .types import (
    IMAGE_ONLY_SENTINEL,
    AnalysisResult,
    EngineVerdict,
    ProbabilityTriple,
)

DEFAULT_EXPLANATION = "Analysis complete."
DEFAULT_RECOMMENDATIONS: Tuple[str, ...] = ("Proceed with caution.",)

# Accepted field names per dimension, first match wins.
FIELD_ALIASES = {
    "malicious": ("malicious_score", "malicious"),
    "fake": ("fake_score", "fake"),
    "authentic": ("authentic_score", "authentic"),
}

FALLBACK_PROBABILITIES = ProbabilityTriple(malicious=30, fake=50, authentic=10)
FALLBACK_EXPLANATION = (
    "The forensic service could not complete this scan, so this code has not "
    "been verified. Treat it as untrusted."
)
FALLBACK_RECOMMENDATIONS: Tuple[str, ...] = (
    "Do not open the link or enter any details until the code has been verified.",
    "Try scanning again in a moment.",
)


def coerce_probability(value: Any) -> int:
    if isinstance(value, bool) or value is None:
        return 0
    if isinstance(value, str):
        value = value.strip().rstrip("%").strip()
    try:
        number = float(value)
    except OverflowError:
        # integer too large for a float; clamp by sign
        return 100 if value > 0 else 0
    except (TypeError, ValueError):
        return 0
    if math.isnan(number) or math.isinf(number):
        return 0
    number = min(100.0, max(0.0, number))
    return int(math.floor(number + 0.5))


def extract_triple(response: Mapping[str, Any]) -> ProbabilityTriple:
    values = {}
    for dimension, aliases in FIELD_ALIASES.items():
        raw = None
        for key in aliases:
            if key in response:
                raw = response[key]
                break
        values[dimension] = coerce_probability(raw)
    return ProbabilityTriple(**values)


def extract_explanation(response: Mapping[str, Any]) -> str:
    explanation = response.get("explanation")
    if not isinstance(explanation, str) or not explanation.strip():
        return DEFAULT_EXPLANATION
    return explanation.strip()


def extract_recommendations(response: Mapping[str, Any]) -> Tuple[str, ...]:
    recs = response.get("recommendations")
    if isinstance(recs, str):
        recs = [recs]
    if not isinstance(recs, (list, tuple)):
        return DEFAULT_RECOMMENDATIONS

    cleaned: List[str] = []
    for item in recs:
        if item is None:
            continue
        text = str(item).strip()
        if text:
            cleaned.append(text)
    return tuple(cleaned) or DEFAULT_RECOMMENDATIONS


def original_content(payload: Optional[str]) -> str:
    return payload if payload else IMAGE_ONLY_SENTINEL


def assemble_result(
    verdict: EngineVerdict,
    response: Mapping[str, Any],
    payload: Optional[str],
) -> AnalysisResult:
    return AnalysisResult(
        risk_score=verdict.risk_score,
        risk_level=verdict.risk_level,
        probabilities=verdict.probabilities,
        explanation=extract_explanation(response),
        recommendations=extract_recommendations(response),
        original_content=original_content(payload),
        matched_rules=verdict.signal.matches,
    )


def fallback_result(
    payload: Optional[str],
    error_code: str,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> AnalysisResult:
    """
    Fixed, renderable result for scans the upstream service could not answer.

    The probabilities are constant; score and level come from the same
    calculator so the record stays self-consistent under any config.
    """
    score = composite_score(FALLBACK_PROBABILITIES, config)
    return AnalysisResult(
        risk_score=score,
        risk_level=classify_level(score, config),
        probabilities=FALLBACK_PROBABILITIES,
        explanation=FALLBACK_EXPLANATION,
        recommendations=FALLBACK_RECOMMENDATIONS,
        original_content=original_content(payload),
        degraded=True,
        error_code=error_code,
    )
