import pytest

from qrshield.engine import ContentSignal, EngineConfig, PatternRule
from qrshield.engine.overrides import apply_overrides

FLAGGED = ContentSignal(flagged=True, matches=(PatternRule("bit.ly", "shortener"),))
CLEAN = ContentSignal(flagged=False)


@pytest.mark.parametrize(
    "raw",
    [(0, 0, 0), (20, 20, 20), (95, 10, 90), (50, 50, 100), (100, 100, 0)],
)
def test_flagged_triple_is_forced_to_deceptive(triple, raw):
    result = apply_overrides(triple(*raw), FLAGGED)
    assert result.fake == 100
    assert result.authentic <= 5
    assert result.malicious >= 85


def test_malicious_floor_keeps_higher_estimate(triple):
    result = apply_overrides(triple(97, 30, 2), FLAGGED)
    assert result.malicious == 97
    assert result.authentic == 2


def test_unflagged_triple_passes_through(triple):
    raw = triple(12, 34, 56)
    assert apply_overrides(raw, CLEAN) is raw


def test_override_constants_come_from_config(triple):
    config = EngineConfig(malicious_floor=70, fake_override=90, authentic_ceiling=10)
    result = apply_overrides(triple(0, 0, 60), FLAGGED, config)
    assert (result.malicious, result.fake, result.authentic) == (70, 90, 10)


def test_raw_triple_is_not_mutated(triple):
    raw = triple(20, 20, 20)
    apply_overrides(raw, FLAGGED)
    assert raw == triple(20, 20, 20)
