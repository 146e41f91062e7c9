import pytest

from fgos_engine.config.settings import ScoringPolicy
from fgos_engine.models import ConfidenceResult, FundamentalSnapshot, MoatResult, SectorBenchmark
from fgos_engine.scoring import FGOSEngine, NoQualityBrake


def _benchmark(confidence: str = "high", sample_size: int = 30) -> SectorBenchmark:
    return SectorBenchmark(
        p10=0.02,
        p25=0.05,
        p50=0.10,
        p75=0.15,
        p90=0.20,
        sample_size=sample_size,
        confidence=confidence,
    )


def _confidence(percent: int = 100) -> ConfidenceResult:
    return ConfidenceResult(confidence_percent=percent, confidence_label="High", status="Mature")


def _components(result):
    return {component.name: component.score for component in result.components}


def test_composite_averages_present_dimensions():
    engine = FGOSEngine()
    result = engine.score("acme", "Technology", FundamentalSnapshot(roic=0.12), {"roic": _benchmark()}, _confidence())

    assert result.ticker == "ACME"
    assert result.score == 75
    assert result.category == "High"
    assert result.confidence_percent == 100
    assert result.maturity_status == "Mature"
    components = _components(result)
    assert components["profitability"] == pytest.approx(75.0)
    assert components["efficiency"] == pytest.approx(75.0)
    assert components["growth"] is None
    assert components["solvency"] is None
    assert not result.benchmark_low_confidence


def test_low_confidence_benchmarks_cap_confidence():
    engine = FGOSEngine()
    result = engine.score(
        "ACME",
        "Technology",
        FundamentalSnapshot(roic=0.12),
        {"roic": _benchmark("low", 5)},
        _confidence(),
    )

    assert result.score == 56
    assert result.category == "Medium"
    assert result.benchmark_low_confidence
    # profitability and efficiency both carry a low-confidence impact
    assert result.confidence_percent == 59
    assert result.confidence_label == "Medium"


def test_quality_brake_lowers_score():
    engine = FGOSEngine()
    snapshot = FundamentalSnapshot(roic=0.12, altman_z=1.5)
    result = engine.score("ACME", "Technology", snapshot, {"roic": _benchmark()}, _confidence())

    assert result.score == 60
    assert result.quality_brakes.applied
    assert result.quality_brakes.reasons == ["altman_z_distress"]
    assert result.quality_warnings


def test_brake_can_be_disabled():
    engine = FGOSEngine(quality_brake=NoQualityBrake())
    snapshot = FundamentalSnapshot(roic=0.12, altman_z=1.5, piotroski=1)
    result = engine.score("ACME", "Technology", snapshot, {"roic": _benchmark()}, _confidence())

    assert result.score == 75
    assert not result.quality_brakes.applied


def test_missing_sector_or_benchmarks_is_pending():
    engine = FGOSEngine()
    for sector, benchmarks in ((None, {"roic": _benchmark()}), ("Technology", {})):
        result = engine.score("ACME", sector, FundamentalSnapshot(roic=0.12), benchmarks, _confidence())
        assert result.score is None
        assert result.category == "Pending"
        assert result.confidence_percent == 0
        assert result.maturity_status == "pending"


def test_no_scoreable_dimension_is_pending():
    engine = FGOSEngine()
    result = engine.score("ACME", "Technology", FundamentalSnapshot(), {"roic": _benchmark()}, _confidence())

    assert result.score is None
    assert result.category == "Pending"
    assert len(result.components) == 6


def test_weighted_moat_component_contributes():
    engine = FGOSEngine(policy=ScoringPolicy(weights={"profitability": 1.0, "moat": 1.0}))
    moat = MoatResult(score=25, status="computed", confidence=80)
    result = engine.score(
        "ACME", "Technology", FundamentalSnapshot(roic=0.12), {"roic": _benchmark()}, _confidence(), moat=moat
    )

    assert _components(result)["moat"] == 25
    assert result.score == 50
    assert result.category == "Medium"


def test_single_low_confidence_dimension_caps_at_79():
    engine = FGOSEngine(policy=ScoringPolicy(weights={"efficiency": 1.0, "growth": 1.0}))
    benchmarks = {"roic": _benchmark("low", 5), "fcf_margin": _benchmark(), "revenue_cagr": _benchmark()}

    clean = engine.score(
        "ACME", "Technology", FundamentalSnapshot(fcf_margin=0.12, revenue_cagr=0.12), benchmarks, _confidence()
    )
    capped = engine.score(
        "ACME", "Technology", FundamentalSnapshot(roic=0.12, revenue_cagr=0.12), benchmarks, _confidence()
    )

    assert clean.confidence_percent == 100
    assert capped.confidence_percent == 79
    assert capped.confidence_label == "Medium"
