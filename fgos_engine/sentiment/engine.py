"""Valuation sentiment: how far current multiples sit from their own history."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from fgos_engine.calculators.utils import average, clamp, median, round_half_up
from fgos_engine.config.settings import SentimentPolicy
from fgos_engine.models import (
    MultipleSentiment,
    SentimentResult,
    SentimentSignals,
    ValuationMultiples,
    ValuationTimeline,
)

logger = logging.getLogger(__name__)

MULTIPLES = ("pe_ratio", "ev_ebitda", "price_to_fcf", "price_to_sales")


@dataclass
class DeviationSummary:
    deviations: List[float]
    has_long_history: bool


def _multiple(snapshot: Optional[ValuationMultiples], key: str) -> Optional[float]:
    if snapshot is None:
        return None
    return getattr(snapshot, key)


def collect_deviations(timeline: ValuationTimeline, key: str) -> DeviationSummary:
    """Relative deviation of the current multiple from each positive historical base."""

    current = _multiple(timeline.current, key)
    if current is None or current <= 0:
        return DeviationSummary(deviations=[], has_long_history=False)

    deviations: List[float] = []
    for snapshot in (timeline.one_year, timeline.three_year, timeline.five_year):
        base = _multiple(snapshot, key)
        if base is None or base <= 0:
            continue
        deviations.append((current - base) / base)

    has_long = _multiple(timeline.three_year, key) is not None or _multiple(timeline.five_year, key) is not None
    return DeviationSummary(deviations=deviations, has_long_history=has_long)


class SentimentEngine:
    def __init__(self, policy: Optional[SentimentPolicy] = None) -> None:
        self._policy = policy or SentimentPolicy()

    def score_multiple(self, key: str, summary: DeviationSummary) -> Optional[MultipleSentiment]:
        policy = self._policy
        deviations = summary.deviations
        if not deviations:
            return None

        limit = policy.deviation_clamp
        base_score = average([50 + clamp(d, -limit, limit) / limit * 50 for d in deviations])

        rising = sum(1 for d in deviations if d > policy.direction_threshold)
        falling = sum(1 for d in deviations if d < -policy.direction_threshold)
        if len(deviations) == 1:
            consistency = policy.single_deviation_consistency
        elif rising > 0 and falling > 0:
            consistency = policy.mixed_direction_consistency
        else:
            consistency = 1.0
        score = 50 + (base_score - 50) * consistency

        largest_move = max(abs(d) for d in deviations)
        intensity = 1.0
        if largest_move > policy.intensity_floor:
            capped = min(largest_move, policy.intensity_ceiling)
            t = (capped - policy.intensity_floor) / (policy.intensity_ceiling - policy.intensity_floor)
            intensity = 1 - t * (1 - policy.min_intensity_factor)
        score = 50 + (score - 50) * intensity

        return MultipleSentiment(
            multiple=key,
            score=clamp(score),
            relative_deviation=median(deviations),
            directional_consistency=round_half_up(consistency * 100),
            intensity_penalty=round_half_up(intensity * 100),
        )

    def evaluate(self, timeline: Optional[ValuationTimeline]) -> SentimentResult:
        policy = self._policy
        if timeline is None or timeline.current is None or timeline.one_year is None:
            logger.debug("Sentiment pending: no current or one-year valuation snapshot")
            return SentimentResult(status="pending")

        components: List[MultipleSentiment] = []
        has_long_history = False
        total_deviations = 0
        for key in MULTIPLES:
            summary = collect_deviations(timeline, key)
            has_long_history = has_long_history or summary.has_long_history
            total_deviations += len(summary.deviations)
            scored = self.score_multiple(key, summary)
            if scored is not None:
                components.append(scored)

        if not components:
            logger.debug("Sentiment pending: no scoreable multiple")
            return SentimentResult(status="pending")

        status = "computed" if has_long_history and total_deviations >= 2 else "partial"
        horizons = sum(
            1 for snapshot in (timeline.one_year, timeline.three_year, timeline.five_year) if snapshot is not None
        )
        horizon_factor = min(1.0, horizons / 3)
        multiple_factor = min(1.0, len(components) / len(MULTIPLES))
        base_confidence = (
            policy.computed_base_confidence if status == "computed" else policy.partial_base_confidence
        )
        confidence = round_half_up(base_confidence * (0.5 * horizon_factor + 0.5 * multiple_factor))

        value = round_half_up(clamp(average([c.score for c in components])))
        return SentimentResult(
            value=value,
            band=self._band(value),
            confidence=confidence,
            status=status,
            signals=SentimentSignals(
                relative_deviation=average([c.relative_deviation for c in components]),
                directional_consistency=round_half_up(average([c.directional_consistency for c in components])),
                rerating_intensity_penalty=round_half_up(average([c.intensity_penalty for c in components])),
            ),
            components=components,
        )

    def _band(self, value: int) -> str:
        if value >= self._policy.optimistic_min:
            return "optimistic"
        if value <= self._policy.pessimistic_max:
            return "pessimistic"
        return "neutral"


def calculate_sentiment(
    timeline: Optional[ValuationTimeline],
    policy: Optional[SentimentPolicy] = None,
) -> SentimentResult:
    return SentimentEngine(policy).evaluate(timeline)
