"""Sector benchmark construction from peer metric samples."""
from __future__ import annotations

import logging
import math
import random
from typing import Dict, List, Optional, Sequence

from fgos_engine.calculators.utils import average, percentile_at
from fgos_engine.config.settings import BenchmarkPolicy
from fgos_engine.models import BenchmarkConfidence, SectorBenchmark, UncertaintyRange

logger = logging.getLogger(__name__)


def benchmark_confidence(sample_size: int, policy: Optional[BenchmarkPolicy] = None) -> BenchmarkConfidence:
    policy = policy or BenchmarkPolicy()
    if sample_size < policy.medium_confidence_min:
        return "low"
    if sample_size < policy.high_confidence_min:
        return "medium"
    return "high"


def trimmed_mean(sorted_values: Sequence[float], fraction: float, fallback: float) -> float:
    """Mean after dropping floor(n * fraction) values from each tail."""

    n = len(sorted_values)
    trim = math.floor(n * fraction)
    if 2 * trim >= n:
        return fallback
    return sum(sorted_values[trim : n - trim]) / (n - 2 * trim)


def bootstrap_mean_interval(
    values: Sequence[float],
    rng: random.Random,
    iterations: int = 500,
) -> UncertaintyRange:
    """5th/95th percentile of resampled means (sampling with replacement)."""

    n = len(values)
    means: List[float] = []
    for _ in range(iterations):
        total = 0.0
        for _ in range(n):
            total += values[math.floor(rng.random() * n)]
        means.append(total / n)
    means.sort()
    return UncertaintyRange(p5=percentile_at(means, 0.05), p95=percentile_at(means, 0.95))


def build_sector_benchmark(
    values: Sequence[float],
    rng: Optional[random.Random] = None,
    policy: Optional[BenchmarkPolicy] = None,
) -> Optional[SectorBenchmark]:
    """Build a percentile profile; None when fewer than three samples exist.

    Low-confidence profiles carry robust estimators (median, trimmed mean and a
    bootstrap interval). Larger samples leave those fields empty.
    """

    policy = policy or BenchmarkPolicy()
    sample = [float(v) for v in values if v is not None and math.isfinite(v)]
    n = len(sample)
    if n < policy.min_sample_size:
        logger.debug("Benchmark skipped: %s samples below minimum %s", n, policy.min_sample_size)
        return None

    ordered = sorted(sample)
    confidence = benchmark_confidence(n, policy)
    p50 = percentile_at(ordered, 0.50)

    median_value: Optional[float] = None
    trimmed: Optional[float] = None
    interval: Optional[UncertaintyRange] = None
    if confidence == "low":
        source = rng or random.Random(policy.rng_seed)
        median_value = p50
        trimmed = trimmed_mean(ordered, policy.trim_fraction, fallback=p50)
        interval = bootstrap_mean_interval(ordered, source, policy.bootstrap_iterations)

    return SectorBenchmark(
        p10=percentile_at(ordered, 0.10),
        p25=percentile_at(ordered, 0.25),
        p50=p50,
        p75=percentile_at(ordered, 0.75),
        p90=percentile_at(ordered, 0.90),
        sample_size=n,
        confidence=confidence,
        median=median_value,
        trimmed_mean=trimmed,
        uncertainty_range=interval,
    )


class BenchmarkBuilder:
    """Builds benchmarks for several metrics with a request-scoped random source.

    Each build gets a fresh ``random.Random`` seeded from ``rng_seed`` so the
    same inputs always produce the same bootstrap interval.
    """

    def __init__(self, policy: Optional[BenchmarkPolicy] = None, rng_seed: Optional[int] = None) -> None:
        self._policy = policy or BenchmarkPolicy()
        self._rng_seed = rng_seed if rng_seed is not None else self._policy.rng_seed

    def build(self, values: Sequence[float]) -> Optional[SectorBenchmark]:
        return build_sector_benchmark(values, rng=random.Random(self._rng_seed), policy=self._policy)

    def build_many(self, samples: Dict[str, Sequence[float]]) -> Dict[str, SectorBenchmark]:
        benchmarks: Dict[str, SectorBenchmark] = {}
        for metric in sorted(samples):
            benchmark = self.build(samples[metric])
            if benchmark is not None:
                benchmarks[metric] = benchmark
        return benchmarks

    def summary(self, benchmarks: Dict[str, SectorBenchmark]) -> Dict[str, float]:
        """Mean sample size and low-confidence share, for logging."""

        if not benchmarks:
            return {"mean_sample_size": 0.0, "low_confidence_share": 0.0}
        sizes = [b.sample_size for b in benchmarks.values()]
        low = [b for b in benchmarks.values() if b.confidence == "low"]
        return {
            "mean_sample_size": average(sizes) or 0.0,
            "low_confidence_share": len(low) / len(benchmarks),
        }
