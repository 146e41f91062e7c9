import math
import random

import pytest
from pydantic import ValidationError

from fgos_engine.benchmarks.builder import (
    BenchmarkBuilder,
    benchmark_confidence,
    build_sector_benchmark,
    trimmed_mean,
)
from fgos_engine.config.settings import BenchmarkPolicy
from fgos_engine.models import SectorBenchmark


def test_fewer_than_three_samples_returns_none():
    assert build_sector_benchmark([0.1, 0.2]) is None
    assert build_sector_benchmark([]) is None


def test_non_finite_samples_are_dropped():
    benchmark = build_sector_benchmark([0.1, math.nan, 0.2, math.inf, 0.3], rng=random.Random(1))

    assert benchmark is not None
    assert benchmark.sample_size == 3


def test_small_sample_carries_robust_estimators():
    benchmark = build_sector_benchmark([5, 1, 4, 2, 3], rng=random.Random(7))

    assert benchmark.confidence == "low"
    assert (benchmark.p10, benchmark.p25, benchmark.p50, benchmark.p75, benchmark.p90) == (1, 2, 3, 4, 4)
    assert benchmark.median == 3
    assert benchmark.trimmed_mean == pytest.approx(3.0)
    assert 1 <= benchmark.uncertainty_range.p5 <= benchmark.uncertainty_range.p95 <= 5


def test_medium_and_high_samples_skip_robust_estimators():
    medium = build_sector_benchmark([float(v) for v in range(12)])
    high = build_sector_benchmark([float(v) for v in range(25)])

    assert medium.confidence == "medium"
    assert high.confidence == "high"
    for benchmark in (medium, high):
        assert benchmark.median is None
        assert benchmark.trimmed_mean is None
        assert benchmark.uncertainty_range is None


def test_confidence_thresholds():
    assert benchmark_confidence(9) == "low"
    assert benchmark_confidence(10) == "medium"
    assert benchmark_confidence(19) == "medium"
    assert benchmark_confidence(20) == "high"


def test_trimmed_mean_drops_tails():
    values = [0, 1, 2, 3, 4, 5, 6, 7, 8, 100]
    assert trimmed_mean(values, 0.1, fallback=0.0) == pytest.approx(4.5)


def test_percentiles_are_non_decreasing():
    rng = random.Random(3)
    values = [rng.uniform(-1, 1) for _ in range(40)]
    benchmark = build_sector_benchmark(values)

    ordered = [benchmark.p10, benchmark.p25, benchmark.p50, benchmark.p75, benchmark.p90]
    assert ordered == sorted(ordered)


def test_reversed_percentiles_are_rejected():
    with pytest.raises(ValidationError):
        SectorBenchmark(p10=5, p25=4, p50=3, p75=2, p90=1, sample_size=5, confidence="low")


def test_seeded_builder_is_reproducible():
    values = [0.05, 0.11, 0.08, 0.21, 0.14, 0.09]
    first = BenchmarkBuilder(rng_seed=42).build(values)
    second = BenchmarkBuilder(rng_seed=42).build(values)

    assert first == second


def test_build_many_skips_thin_metrics():
    builder = BenchmarkBuilder(policy=BenchmarkPolicy(bootstrap_iterations=50), rng_seed=1)
    built = builder.build_many({"roic": [0.1, 0.2, 0.3, 0.4], "roe": [0.1]})

    assert list(built) == ["roic"]
    summary = builder.summary(built)
    assert summary["mean_sample_size"] == pytest.approx(4.0)
    assert summary["low_confidence_share"] == pytest.approx(1.0)
