"""Competitive durability (moat) scoring from multi-year fiscal history."""
from __future__ import annotations

import logging
from typing import List, Mapping, Optional, Sequence

from fgos_engine.benchmarks.sector_defaults import get_sector_defaults, is_reasonable_for_sector
from fgos_engine.calculators.utils import average, clamp, population_std, round_half_up, safe_div
from fgos_engine.config.settings import MoatPolicy
from fgos_engine.models import CoherenceCheck, FiscalRow, MoatDetails, MoatResult, SectorBenchmark

logger = logging.getLogger(__name__)


def calculate_coherence_check(
    revenue_growth: float,
    margin_change: float,
    policy: Optional[MoatPolicy] = None,
) -> CoherenceCheck:
    """Compare revenue growth with the change in operating margin.

    Growth at or below the threshold is not judged (neutral 50).
    """

    policy = policy or MoatPolicy()
    growing = revenue_growth > policy.revenue_growth_threshold

    if growing and margin_change >= 0:
        return CoherenceCheck(
            score=100,
            verdict="High Quality Growth",
            explanation="Revenue growth with stable or expanding margins indicates pricing power",
            revenue_growth=revenue_growth,
            margin_change=margin_change,
        )
    if growing and margin_change <= policy.margin_decline_threshold:
        return CoherenceCheck(
            score=30,
            verdict="Inefficient Growth",
            explanation="Revenue growth at the expense of margins suggests competitive pressure",
            revenue_growth=revenue_growth,
            margin_change=margin_change,
        )
    if growing:
        return CoherenceCheck(
            score=70,
            verdict="Neutral",
            explanation="Revenue growth with minor margin pressure",
            revenue_growth=revenue_growth,
            margin_change=margin_change,
        )
    return CoherenceCheck(
        score=50,
        verdict="Neutral",
        explanation="Coherence check not applicable: low revenue growth",
        revenue_growth=revenue_growth,
        margin_change=margin_change,
    )


def calculate_capital_discipline(rows: Sequence[FiscalRow]) -> Optional[float]:
    """Score capital growth against the ROIC trend between oldest and newest year.

    Returns None without at least three years of ROIC and invested capital.
    """

    usable = sorted(
        (row for row in rows if row.roic is not None and row.invested_capital is not None),
        key=lambda row: row.period_end_date,
        reverse=True,
    )
    if len(usable) < 3:
        return None

    latest, oldest = usable[0], usable[-1]
    growth_ratio = safe_div(latest.invested_capital - oldest.invested_capital, oldest.invested_capital)
    if growth_ratio is None:
        return None
    capital_growth = growth_ratio * 100
    roic_change = (latest.roic - oldest.roic) * 100

    if capital_growth > 20 and roic_change > 2:
        return 100.0
    if 10 < capital_growth <= 20 and -1 <= roic_change <= 2:
        return 80.0
    if 5 < capital_growth <= 10 and -3 <= roic_change < -1:
        return 60.0
    if capital_growth > 20 and roic_change < -3:
        return 30.0
    if capital_growth <= 5:
        return 50.0
    return 60.0


class MoatAnalyzer:
    def __init__(self, policy: Optional[MoatPolicy] = None) -> None:
        self._policy = policy or MoatPolicy()

    def analyze(
        self,
        history: Sequence[FiscalRow],
        benchmarks: Optional[Mapping[str, SectorBenchmark]] = None,
        sector: Optional[str] = None,
    ) -> MoatResult:
        policy = self._policy
        benchmarks = benchmarks or {}
        rows = sorted(
            (
                row
                for row in history
                if row.period_type == "FY" and row.roic is not None and row.gross_margin is not None
            ),
            key=lambda row: row.period_end_date,
            reverse=True,
        )[: policy.max_years]
        count = len(rows)

        if count < policy.partial_min_years:
            logger.debug("Moat pending: %s usable years", count)
            return MoatResult(score=None, status="pending", confidence=None)
        if count >= policy.computed_min_years:
            status, confidence = "computed", policy.computed_confidence
        else:
            status, confidence = "partial", policy.partial_confidence

        defaults = get_sector_defaults(sector)
        sector_roic = self._reference(benchmarks, "roic", defaults.roic, sector)
        sector_margin = self._reference(benchmarks, "gross_margin", defaults.gross_margin, sector)

        persistence = self._roic_persistence([row.roic for row in rows], sector_roic)
        margin_score = self._margin_stability([row.gross_margin for row in rows], sector_margin)

        coherence = self._coherence(rows)
        if coherence is not None and coherence.verdict == "Inefficient Growth":
            margin_score *= policy.inefficient_growth_multiplier

        capital = calculate_capital_discipline(rows)
        if capital is None:
            raw = policy.fallback_persistence_weight * persistence + policy.fallback_margin_weight * margin_score
        else:
            raw = (
                policy.persistence_weight * persistence
                + policy.margin_weight * margin_score
                + policy.capital_weight * capital
            )

        return MoatResult(
            score=round_half_up(clamp(raw)),
            status=status,
            confidence=confidence,
            coherence_check=coherence,
            details=MoatDetails(
                roic_persistence=persistence,
                margin_stability=margin_score,
                capital_discipline=capital,
                years_analyzed=count,
            ),
        )

    def _roic_persistence(self, values: List[float], sector_roic: float) -> float:
        policy = self._policy
        above = sum(1 for value in values if value > sector_roic)
        persistence = above / len(values) * 100
        deviation = population_std(values) or 0.0
        if deviation > policy.roic_volatility_threshold:
            penalty = min(
                policy.roic_volatility_penalty_cap,
                (deviation - policy.roic_volatility_threshold) * policy.roic_volatility_penalty_scale,
            )
            persistence = max(0.0, persistence - penalty)
        return persistence

    def _margin_stability(self, values: List[float], sector_margin: float) -> float:
        mean = average(values) or 0.0
        level_ratio = safe_div(mean, sector_margin)
        level = min(100.0, level_ratio * 50) if level_ratio is not None else 50.0
        deviation = population_std(values) or 0.0
        stability = max(0.0, 100 - deviation * self._policy.margin_stability_scale)
        return 0.5 * level + 0.5 * stability

    def _coherence(self, rows: List[FiscalRow]) -> Optional[CoherenceCheck]:
        if len(rows) < 2:
            return None
        latest, previous = rows[0], rows[1]
        if not latest.revenue or not previous.revenue:
            return None
        if latest.operating_margin is None or previous.operating_margin is None:
            return None
        revenue_growth = (latest.revenue - previous.revenue) / previous.revenue
        margin_change = latest.operating_margin - previous.operating_margin
        return calculate_coherence_check(revenue_growth, margin_change, self._policy)

    @staticmethod
    def _reference(
        benchmarks: Mapping[str, SectorBenchmark],
        metric: str,
        default: float,
        sector: Optional[str],
    ) -> float:
        benchmark = benchmarks.get(metric)
        if benchmark is None:
            return default
        if not is_reasonable_for_sector(metric, benchmark.p50, sector):
            logger.warning(
                "Benchmark %s median %.4f looks unusual for sector %r", metric, benchmark.p50, sector
            )
        return benchmark.p50


def calculate_moat(
    history: Sequence[FiscalRow],
    benchmarks: Optional[Mapping[str, SectorBenchmark]] = None,
    sector: Optional[str] = None,
    policy: Optional[MoatPolicy] = None,
) -> MoatResult:
    return MoatAnalyzer(policy).analyze(history, benchmarks, sector)
