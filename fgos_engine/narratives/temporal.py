"""Temporal context for narrative anchors: is the condition new, lasting or fading?"""
from __future__ import annotations

from operator import attrgetter
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from fgos_engine.models import FiscalRow, NarrativeAnchor, TemporalHint

Condition = Tuple[Callable[[FiscalRow], Optional[float]], Callable[[float], bool]]

_ROE = attrgetter("roe")
_ROIC = attrgetter("roic")
_COVERAGE = attrgetter("interest_coverage")
_LEVERAGE = attrgetter("debt_to_equity")
_YIELD = attrgetter("dividend_yield")
_FCF = attrgetter("free_cash_flow")
_GROWTH = attrgetter("revenue_growth")

TEMPORAL_CONDITIONS: Dict[str, Condition] = {
    "solid-profitability": (_ROE, lambda v: v > 0.15),
    "structural_profitability": (_ROIC, lambda v: v > 0.10),
    "financial-risk": (_COVERAGE, lambda v: v < 1.5),
    "requires-caution": (_COVERAGE, lambda v: v < 1.5),
    "increasing-leverage": (_LEVERAGE, lambda v: v > 2.0),
    "income_stability": (_YIELD, lambda v: v > 0),
    "dividend_consistent": (_YIELD, lambda v: v > 0),
    "income_growth": (_YIELD, lambda v: v > 0),
    "capital_consistency": (_FCF, lambda v: v > 0),
    "structural_cash_generation": (_FCF, lambda v: v > 0),
    "cashflow_pressure": (_FCF, lambda v: v < 0),
    "capital_constraints": (_FCF, lambda v: v < 0),
    "strong-growth": (_GROWTH, lambda v: v > 0.15),
}


def _recent_values(history: Sequence[FiscalRow], field: Callable[[FiscalRow], Optional[float]]) -> List[float]:
    rows = sorted(
        (row for row in history if row.period_type == "FY" and field(row) is not None),
        key=lambda row: row.period_end_date,
        reverse=True,
    )
    return [field(row) for row in rows]


def evaluate_temporal_context(anchor_id: str, history: Sequence[FiscalRow]) -> Optional[TemporalHint]:
    """Compare the latest fiscal year with the one before it for the anchor's condition."""

    condition = TEMPORAL_CONDITIONS.get(anchor_id)
    if condition is None:
        return None
    field, predicate = condition
    values = _recent_values(history, field)
    if len(values) < 2:
        return None

    current, prior = predicate(values[0]), predicate(values[1])
    if current and prior:
        return "persistent"
    if current:
        return "recent"
    if prior:
        return "fading"
    return None


def attach_temporal_context(
    anchors: Sequence[NarrativeAnchor],
    history: Sequence[FiscalRow],
) -> List[NarrativeAnchor]:
    """Return copies of the anchors with temporal hints where one can be derived."""

    attached: List[NarrativeAnchor] = []
    for anchor in anchors:
        hint = evaluate_temporal_context(anchor.id, history)
        attached.append(anchor.model_copy(update={"temporal_hint": hint}) if hint else anchor)
    return attached
