# qrshield/engine/config.py

"""
Policy constants for the verdict engine.

Every tunable number the engine uses lives in one versioned EngineConfig, so
two deployments that score differently differ by configuration only.

Default set (version 2024.1):

    override:    malicious floor 85, fake forced to 100, authentic capped at 5
    separation:  minimum spread 35, corrective step 35
    composite:   0.6 * malicious + 0.5 * fake - 0.4 * authentic, x1.2
    bands:       LOW <20, MODERATE <40, SUSPICIOUS <60, HIGH <80, CRITICAL
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Tuple

from .types import RiskLevel

DEFAULT_BANDS: Tuple[Tuple[int, RiskLevel], ...] = (
    (20, RiskLevel.LOW),
    (40, RiskLevel.MODERATE),
    (60, RiskLevel.SUSPICIOUS),
    (80, RiskLevel.HIGH),
)


@dataclass(frozen=True)
class EngineConfig:
    version: str = "2024.1"

    # heuristic override
    malicious_floor: float = 85
    fake_override: float = 100
    authentic_ceiling: float = 5

    # dimensional separation
    min_separation: float = 35
    separation_step: float = 35

    # composite score
    weight_malicious: float = 0.6
    weight_fake: float = 0.5
    weight_authentic: float = 0.4
    amplification: float = 1.2

    # (exclusive upper bound, level) pairs; scores past the last bound
    # fall into top_level
    bands: Tuple[Tuple[int, RiskLevel], ...] = field(default=DEFAULT_BANDS)
    top_level: RiskLevel = RiskLevel.CRITICAL

    def __post_init__(self) -> None:
        for name in ("malicious_floor", "fake_override", "authentic_ceiling"):
            value = getattr(self, name)
            if not 0 <= value <= 100:
                raise ValueError(f"{name} must be within [0, 100], got {value}")

        if not 0 < self.min_separation <= 100:
            raise ValueError("min_separation must be within (0, 100]")
        # a single corrective pass only guarantees the spread when the step
        # is at least the required separation
        if self.separation_step < self.min_separation:
            raise ValueError(
                "separation_step must be >= min_separation "
                f"({self.separation_step} < {self.min_separation})"
            )

        for name in ("weight_malicious", "weight_fake", "weight_authentic", "amplification"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive")

        _validate_bands(self.bands, self.top_level)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "EngineConfig":
        """
        Build a config from a plain mapping (e.g. parsed JSON).

        Unknown keys are rejected so typos do not silently fall back to
        defaults. Bands are given as [[upper, "LEVEL"], ...].
        """
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown engine config keys: {sorted(unknown)}")

        kwargs: Dict[str, Any] = dict(data)
        if "bands" in kwargs:
            kwargs["bands"] = tuple(
                (int(upper), RiskLevel(str(level).upper())) for upper, level in kwargs["bands"]
            )
        if "top_level" in kwargs:
            kwargs["top_level"] = RiskLevel(str(kwargs["top_level"]).upper())
        if "version" in kwargs:
            kwargs["version"] = str(kwargs["version"])
        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        for f in fields(self):
            out[f.name] = getattr(self, f.name)
        out["bands"] = [[upper, level.value] for upper, level in self.bands]
        out["top_level"] = self.top_level.value
        return out


def _validate_bands(bands: Tuple[Tuple[int, RiskLevel], ...], top_level: RiskLevel) -> None:
    if not bands:
        raise ValueError("At least one score band is required")

    previous_upper = 0
    previous_rank = -1
    for upper, level in bands:
        if not previous_upper < upper <= 100:
            raise ValueError(f"Band edges must be strictly ascending within (0, 100]: {upper}")
        if level.rank <= previous_rank:
            raise ValueError("Band levels must be strictly ascending in severity")
        previous_upper = upper
        previous_rank = level.rank

    if top_level.rank <= previous_rank:
        raise ValueError("top_level must be more severe than every band")


DEFAULT_ENGINE_CONFIG = EngineConfig()


def load_engine_config(path: str | Path | None) -> EngineConfig:
    """Read an EngineConfig from a JSON file, or return the defaults."""
    if not path:
        return DEFAULT_ENGINE_CONFIG
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError("Engine config file must contain a JSON object")
    return EngineConfig.from_mapping(data)
