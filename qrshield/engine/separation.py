# qrshield/engine/separation.py

"""
Dimensional separation enforcer.

Generative models like to answer 45/50/55, which reads as false neutrality.
After this step at least one pair of dimensions is at least
``config.min_separation`` points apart.

The correction is a single pass: the highest dimension moves up by
``separation_step`` (capped at 100), the lowest moves down by the same step
(floored at 0) and the middle one is left alone. EngineConfig guarantees
step >= min_separation, which is what makes one pass sufficient for any
triple within [0, 100].
"""

from __future__ import annotations

from typing import Tuple

from .config import DEFAULT_ENGINE_CONFIG, EngineConfig
from .types import DIMENSIONS, ProbabilityTriple

# Tie-break priority when two dimensions hold the same value.
PRIORITY = DIMENSIONS  # malicious > fake > authentic


def rank_dimensions(triple: ProbabilityTriple) -> Tuple[str, str, str]:
    """Dimension names ordered by value, highest first, ties by PRIORITY."""
    ordered = sorted(PRIORITY, key=lambda name: (-triple.get(name), PRIORITY.index(name)))
    return tuple(ordered)  # type: ignore[return-value]


def enforce_separation(
    triple: ProbabilityTriple,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> ProbabilityTriple:
    triple = triple.clamped()
    if triple.max_separation() >= config.min_separation:
        return triple

    highest, _, lowest = rank_dimensions(triple)
    step = config.separation_step
    separated = triple.with_values(
        **{
            highest: min(100, triple.get(highest) + step),
            lowest: max(0, triple.get(lowest) - step),
        }
    )

    assert separated.max_separation() >= config.min_separation, (
        f"separation pass left {separated} below {config.min_separation}"
    )
    return separated
