# qrshield/engine/__init__.py

"""
QR verdict engine.

Exposes:

    AnalysisEngine(config, patterns).analyze(response, payload) -> AnalysisResult
    compute_analysis(response, payload) -> AnalysisResult

which turn the forensic model's raw malicious / fake / authentic estimate
into a bounded, reproducible risk score and level. compute_analysis runs on
the shared engine from get_engine(), which honours QRSHIELD_ENGINE_CONFIG and
QRSHIELD_PATTERN_FILE.
"""

from .config import DEFAULT_ENGINE_CONFIG, EngineConfig, load_engine_config
from .patterns import DEFAULT_PATTERN_TABLE, PatternTable, load_pattern_table
from .pipeline import AnalysisEngine, compute_analysis, get_engine, reset_engine
from .types import (
    IMAGE_ONLY_SENTINEL,
    AnalysisResult,
    ContentSignal,
    EngineVerdict,
    PatternRule,
    ProbabilityTriple,
    RiskLevel,
)
