"""FGOS composite quality score."""
from __future__ import annotations

import logging
from typing import Callable, Dict, List, Mapping, Optional, Tuple

from fgos_engine.calculators.utils import clamp, round_half_up
from fgos_engine.confidence.classifier import confidence_label
from fgos_engine.config.settings import ConfidencePolicy, ScoringPolicy
from fgos_engine.models import (
    CompositeScore,
    ConfidenceResult,
    FundamentalSnapshot,
    MoatResult,
    QualityBrakes,
    ScoreComponent,
    SectorBenchmark,
    SentimentResult,
)
from .metric_score import ComponentScore, calculate_component
from .quality_brakes import DistressQualityBrake, QualityBrake

logger = logging.getLogger(__name__)

Extractor = Callable[[FundamentalSnapshot], Optional[float]]


def _inverted_leverage(snapshot: FundamentalSnapshot) -> Optional[float]:
    if snapshot.debt_to_equity is None:
        return None
    return 100 - snapshot.debt_to_equity


class FGOSEngine:
    # dimension -> [(benchmark key, value extractor)]
    DIMENSIONS: Dict[str, List[Tuple[str, Extractor]]] = {
        "growth": [
            ("revenue_cagr", lambda s: s.revenue_cagr),
            ("earnings_cagr", lambda s: s.earnings_cagr),
            ("fcf_cagr", lambda s: s.fcf_cagr),
        ],
        "profitability": [
            ("roic", lambda s: s.roic),
            ("operating_margin", lambda s: s.operating_margin),
            ("net_margin", lambda s: s.net_margin),
        ],
        "efficiency": [
            ("roic", lambda s: s.roic),
            ("fcf_margin", lambda s: s.fcf_margin),
        ],
        "solvency": [
            ("debt_to_equity", _inverted_leverage),
            ("interest_coverage", lambda s: s.interest_coverage),
        ],
    }

    def __init__(
        self,
        policy: Optional[ScoringPolicy] = None,
        quality_brake: Optional[QualityBrake] = None,
        confidence_policy: Optional[ConfidencePolicy] = None,
    ) -> None:
        self._policy = policy or ScoringPolicy()
        self._quality_brake = quality_brake or DistressQualityBrake()
        self._confidence_policy = confidence_policy or ConfidencePolicy()

    def score(
        self,
        ticker: str,
        sector: Optional[str],
        snapshot: FundamentalSnapshot,
        benchmarks: Mapping[str, SectorBenchmark],
        confidence: ConfidenceResult,
        moat: Optional[MoatResult] = None,
        sentiment: Optional[SentimentResult] = None,
    ) -> CompositeScore:
        ticker = ticker.upper()
        if not sector or not benchmarks:
            logger.debug("FGOS pending for %s: sector or benchmarks unavailable", ticker)
            return self._pending(ticker, [], False)

        benchmark_low_confidence = any(b.confidence == "low" for b in benchmarks.values())
        results: Dict[str, ComponentScore] = {
            name: calculate_component(
                [(extract(snapshot), benchmarks.get(key)) for key, extract in constituents],
                self._policy,
            )
            for name, constituents in self.DIMENSIONS.items()
        }
        results["moat"] = ComponentScore(score=moat.score if moat else None)
        results["sentiment"] = ComponentScore(score=sentiment.value if sentiment else None)

        components = [
            ScoreComponent(name=name, score=result.score, impact=result.impact)
            for name, result in results.items()
        ]

        weighted = {
            name: (result, self._policy.weights.get(name, 0.0))
            for name, result in results.items()
            if result.score is not None and self._policy.weights.get(name, 0.0) > 0
        }
        if not weighted:
            logger.debug("FGOS pending for %s: no scoreable dimension", ticker)
            return self._pending(ticker, components, benchmark_low_confidence)

        total_weight = sum(weight for _, weight in weighted.values())
        raw_score = sum(result.score * weight for result, weight in weighted.values()) / total_weight

        brake = self._quality_brake(raw_score, snapshot)
        final_score = round_half_up(clamp(brake.adjusted_score))

        low_confidence_count = sum(1 for result, _ in weighted.values() if result.impact is not None)
        capped = confidence.confidence_percent
        if low_confidence_count > 0:
            capped = min(capped, self._policy.single_low_confidence_cap)
        if low_confidence_count > 1:
            capped = min(capped, self._policy.multiple_low_confidence_cap)

        return CompositeScore(
            ticker=ticker,
            score=final_score,
            category=self._category(final_score),
            confidence_percent=capped,
            confidence_label=confidence_label(capped, self._confidence_policy),
            maturity_status=confidence.status,
            components=components,
            benchmark_low_confidence=benchmark_low_confidence,
            quality_brakes=QualityBrakes(applied=brake.applied, reasons=brake.reasons),
            quality_warnings=brake.warnings,
        )

    def _category(self, score: float) -> str:
        if score >= self._policy.high_category_min:
            return "High"
        if score < self._policy.low_category_below:
            return "Low"
        return "Medium"

    @staticmethod
    def _pending(
        ticker: str,
        components: List[ScoreComponent],
        benchmark_low_confidence: bool,
    ) -> CompositeScore:
        return CompositeScore(
            ticker=ticker,
            score=None,
            category="Pending",
            confidence_percent=0,
            confidence_label="Low",
            maturity_status="pending",
            components=components,
            benchmark_low_confidence=benchmark_low_confidence,
        )
