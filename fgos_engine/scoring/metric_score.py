"""Percentile bucketing of single metrics and their aggregation into components."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from fgos_engine.calculators.utils import average
from fgos_engine.config.settings import ScoringPolicy
from fgos_engine.models import LowConfidenceImpact, SectorBenchmark


@dataclass
class MetricScore:
    effective: float
    raw: float
    weight: float
    sample_size: int
    is_low_confidence: bool


@dataclass
class ComponentScore:
    score: Optional[float]
    impact: Optional[LowConfidenceImpact] = None


def percentile_bucket(value: float, benchmark: SectorBenchmark) -> float:
    if value <= benchmark.p10:
        return 10.0
    if value <= benchmark.p25:
        return 25.0
    if value <= benchmark.p50:
        return 50.0
    if value <= benchmark.p75:
        return 75.0
    return 90.0


def calculate_metric_score(
    value: Optional[float],
    benchmark: Optional[SectorBenchmark],
    policy: Optional[ScoringPolicy] = None,
) -> Optional[MetricScore]:
    """Score one metric against its sector benchmark.

    Low-confidence benchmarks pull the bucket toward the neutral percentile in
    proportion to how far the sample is from full size; medium confidence
    applies a flat haircut; high confidence is used as-is.
    """

    if value is None or benchmark is None:
        return None
    policy = policy or ScoringPolicy()
    raw = percentile_bucket(value, benchmark)

    if benchmark.confidence == "low":
        weight = min(1.0, max(0.0, benchmark.sample_size / policy.full_weight_sample_size))
        effective = raw * weight + policy.neutral_percentile * (1 - weight)
        return MetricScore(
            effective=effective,
            raw=raw,
            weight=weight,
            sample_size=benchmark.sample_size,
            is_low_confidence=True,
        )

    effective = raw
    if benchmark.confidence == "medium":
        effective = raw * policy.medium_confidence_multiplier
    return MetricScore(
        effective=effective,
        raw=raw,
        weight=1.0,
        sample_size=benchmark.sample_size or policy.full_weight_sample_size,
        is_low_confidence=False,
    )


def calculate_component(
    items: Sequence[Tuple[Optional[float], Optional[SectorBenchmark]]],
    policy: Optional[ScoringPolicy] = None,
) -> ComponentScore:
    results: List[MetricScore] = []
    for value, benchmark in items:
        scored = calculate_metric_score(value, benchmark, policy)
        if scored is not None:
            results.append(scored)

    if not results:
        return ComponentScore(score=None)

    score = average([r.effective for r in results])
    low_confidence = [r for r in results if r.is_low_confidence]
    if not low_confidence:
        return ComponentScore(score=score)

    # smallest sample and weight across the component's metrics
    impact = LowConfidenceImpact(
        raw_percentile=average([r.raw for r in results]),
        effective_percentile=score,
        sample_size=min(r.sample_size for r in results),
        weight=min(r.weight for r in results),
    )
    return ComponentScore(score=score, impact=impact)
