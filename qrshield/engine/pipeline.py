# qrshield/engine/pipeline.py

from __future__ import annotations

import json
import logging
from typing import Any, Mapping, Optional

from qrshield import config as settings

from .assembler import assemble_result, extract_triple
from .classifier import ContentClassifier
from .config import DEFAULT_ENGINE_CONFIG, EngineConfig, load_engine_config
from .overrides import apply_overrides
from .patterns import DEFAULT_PATTERN_TABLE, PatternTable, load_pattern_table
from .scoring import classify_level, composite_score
from .separation import enforce_separation
from .types import AnalysisResult, EngineVerdict, ProbabilityTriple

logger = logging.getLogger("qrshield.engine")


class AnalysisEngine:
    """
    Deterministic post-processing of an upstream probability estimate.

    Steps run strictly in order: content classification, heuristic
    override, separation, composite score, level. No state is kept between
    calls, so one engine can serve concurrent scans.
    """

    def __init__(
        self,
        config: EngineConfig = DEFAULT_ENGINE_CONFIG,
        patterns: PatternTable = DEFAULT_PATTERN_TABLE,
    ):
        self.config = config
        self.classifier = ContentClassifier(patterns)

    @property
    def patterns(self) -> PatternTable:
        return self.classifier.table

    def evaluate(self, raw: ProbabilityTriple, payload: Optional[str]) -> EngineVerdict:
        signal = self.classifier.classify(payload)
        overridden = apply_overrides(raw, signal, self.config)
        final = enforce_separation(overridden, self.config)
        score = composite_score(final, self.config)
        level = classify_level(score, self.config)

        logger.debug(
            json.dumps(
                {
                    "event": "engine_verdict",
                    "engine_version": self.config.version,
                    "raw": raw.as_dict(),
                    "flagged": signal.flagged,
                    "patterns": list(signal.patterns),
                    "overridden": overridden != raw,
                    "separated": final != overridden.clamped(),
                    "final": final.as_dict(),
                    "score": score,
                    "level": level.value,
                }
            )
        )
        return EngineVerdict(risk_score=score, risk_level=level, probabilities=final, signal=signal)

    def analyze(self, response: Mapping[str, Any], payload: Optional[str]) -> AnalysisResult:
        """Run the whole pipeline on an upstream response object."""
        verdict = self.evaluate(extract_triple(response), payload)
        return assemble_result(verdict, response, payload)


_default_engine: AnalysisEngine | None = None


def get_engine() -> AnalysisEngine:
    """Engine built from QRSHIELD_ENGINE_CONFIG / QRSHIELD_PATTERN_FILE (or defaults)."""
    global _default_engine
    if _default_engine is None:
        _default_engine = AnalysisEngine(
            config=load_engine_config(settings.ENGINE_CONFIG_FILE),
            patterns=load_pattern_table(settings.PATTERN_FILE),
        )
        logger.info(
            json.dumps(
                {
                    "event": "engine_loaded",
                    "engine_version": _default_engine.config.version,
                    "pattern_table_version": _default_engine.patterns.version,
                    "pattern_count": len(_default_engine.patterns),
                }
            )
        )
    return _default_engine


def reset_engine() -> None:
    global _default_engine
    _default_engine = None


def compute_analysis(response: Mapping[str, Any], payload: Optional[str]) -> AnalysisResult:
    return get_engine().analyze(response, payload)
