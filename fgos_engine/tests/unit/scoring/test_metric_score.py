import pytest

from fgos_engine.models import SectorBenchmark
from fgos_engine.scoring import calculate_component, calculate_metric_score, percentile_bucket


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


@pytest.mark.parametrize(
    "value,bucket",
    [(0.01, 10), (0.02, 10), (0.04, 25), (0.10, 50), (0.12, 75), (0.18, 90), (0.50, 90)],
)
def test_percentile_bucket_boundaries_are_inclusive(value, bucket):
    assert percentile_bucket(value, _benchmark()) == bucket


def test_high_confidence_uses_raw_bucket():
    score = calculate_metric_score(0.12, _benchmark())

    assert score.effective == pytest.approx(75.0)
    assert score.weight == 1.0
    assert not score.is_low_confidence


def test_medium_confidence_applies_haircut():
    score = calculate_metric_score(0.12, _benchmark("medium", 15))
    assert score.effective == pytest.approx(71.25)


def test_low_confidence_is_pulled_toward_neutral():
    score = calculate_metric_score(0.12, _benchmark("low", 5))

    assert score.weight == pytest.approx(0.25)
    assert score.effective == pytest.approx(56.25)
    assert score.is_low_confidence


def test_missing_value_or_benchmark_is_skipped():
    assert calculate_metric_score(None, _benchmark()) is None
    assert calculate_metric_score(0.1, None) is None


def test_component_reports_low_confidence_impact():
    component = calculate_component([(0.12, _benchmark("low", 5)), (0.25, _benchmark())])

    assert component.score == pytest.approx((56.25 + 90.0) / 2)
    assert component.impact is not None
    assert component.impact.raw_percentile == pytest.approx((75.0 + 90.0) / 2)
    assert component.impact.sample_size == 5
    assert component.impact.weight == pytest.approx(0.25)


def test_component_without_metrics_is_absent():
    component = calculate_component([(None, _benchmark()), (0.1, None)])

    assert component.score is None
    assert component.impact is None
