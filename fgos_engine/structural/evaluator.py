"""Structural consistency signals from fiscal-year history."""
from __future__ import annotations

from typing import Callable, Dict, List, Optional, Sequence

from fgos_engine.calculators.utils import average, count_sign_flips, population_std
from fgos_engine.config.settings import StructuralPolicy
from fgos_engine.models import FiscalRow, StructuralSignal, StructuralSignalType

SIGNAL_PRIORITY: Dict[StructuralSignalType, int] = {
    StructuralSignalType.STRUCTURAL_FRAGILITY: 1,
    StructuralSignalType.EPISODIC_PERFORMANCE: 2,
    StructuralSignalType.STRUCTURAL_PROFITABILITY: 3,
    StructuralSignalType.STRUCTURAL_CASH_GENERATION: 4,
}


def fiscal_series(history: Sequence[FiscalRow], field: Callable[[FiscalRow], Optional[float]]) -> List[float]:
    """Fiscal-year values of one metric, oldest first, missing values dropped."""

    rows = sorted(
        (row for row in history if row.period_type == "FY" and field(row) is not None),
        key=lambda row: row.period_end_date,
    )
    return [field(row) for row in rows]


class StructuralEvaluator:
    def __init__(self, policy: Optional[StructuralPolicy] = None) -> None:
        self._policy = policy or StructuralPolicy()

    def evaluate(self, history: Sequence[FiscalRow]) -> List[StructuralSignal]:
        policy = self._policy
        roic = fiscal_series(history, lambda row: row.roic)
        fcf = fiscal_series(history, lambda row: row.free_cash_flow)
        operating_margin = fiscal_series(history, lambda row: row.operating_margin)

        if len(roic) < policy.min_roic_points:
            return []

        signals: List[StructuralSignal] = []
        fragile = any(self.is_fragile(series) for series in (roic, fcf, operating_margin))
        if fragile:
            signals.append(StructuralSignal(id=StructuralSignalType.STRUCTURAL_FRAGILITY))
        elif self.is_episodic(roic) or self.is_episodic(operating_margin):
            signals.append(StructuralSignal(id=StructuralSignalType.EPISODIC_PERFORMANCE))

        if self.is_structurally_profitable(roic):
            signals.append(StructuralSignal(id=StructuralSignalType.STRUCTURAL_PROFITABILITY))
        if self.generates_cash(fcf):
            signals.append(StructuralSignal(id=StructuralSignalType.STRUCTURAL_CASH_GENERATION))

        ordered = sorted(signals, key=lambda signal: SIGNAL_PRIORITY[signal.id])
        return ordered[: policy.max_signals]

    def is_fragile(self, series: Sequence[float]) -> bool:
        if len(series) < self._policy.pattern_min_points:
            return False
        return count_sign_flips(series) >= self._policy.fragility_sign_flips

    def is_episodic(self, series: Sequence[float]) -> bool:
        """One or two standout years in an otherwise high-variance series."""

        policy = self._policy
        if len(series) < policy.pattern_min_points:
            return False
        mean = average(series)
        deviation = population_std(series)
        if abs(mean) > policy.episodic_mean_floor and deviation / abs(mean) < policy.episodic_cv_threshold:
            return False
        threshold = mean + policy.strong_year_sigma * deviation
        strong_years = sum(1 for value in series if value > threshold)
        return 1 <= strong_years <= 2

    def is_structurally_profitable(self, roic: Sequence[float]) -> bool:
        policy = self._policy
        recent = list(roic[-policy.profitability_window :])
        if len(recent) < policy.profitability_min_points:
            return False
        positive = sum(1 for value in recent if value > 0)
        no_collapse = recent[-1] >= average(recent) * policy.collapse_fraction
        return positive >= policy.profitability_min_positive and no_collapse

    def generates_cash(self, fcf: Sequence[float]) -> bool:
        policy = self._policy
        recent = list(fcf[-policy.cash_window :])
        if len(recent) < policy.cash_min_points:
            return False
        return sum(1 for value in recent if value > 0) >= policy.cash_min_positive


def evaluate_structural_consistency(
    history: Sequence[FiscalRow],
    policy: Optional[StructuralPolicy] = None,
) -> List[StructuralSignal]:
    return StructuralEvaluator(policy).evaluate(history)
