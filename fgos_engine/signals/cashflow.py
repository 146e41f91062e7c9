"""Cash-flow signals, partly conditioned on narratives already active."""
from __future__ import annotations

import math
from typing import Collection, Dict, List, Optional, Sequence

from fgos_engine.calculators.utils import count_sign_flips
from fgos_engine.config.settings import NarrativePolicy
from fgos_engine.models import CashFlowSignal, CashFlowSignalType, FiscalRow

SIGNAL_PRIORITY: Dict[CashFlowSignalType, int] = {
    CashFlowSignalType.CASHFLOW_PRESSURE: 1,
    CashFlowSignalType.CASHFLOW_VOLATILE: 2,
    CashFlowSignalType.REINVESTMENT_HEAVY: 3,
    CashFlowSignalType.SHAREHOLDER_FRIENDLY: 4,
    CashFlowSignalType.CASHFLOW_CONSISTENT: 5,
}


def evaluate_cashflow_signals(
    history: Sequence[FiscalRow],
    active_narrative_ids: Collection[str],
    policy: Optional[NarrativePolicy] = None,
) -> List[CashFlowSignal]:
    policy = policy or NarrativePolicy()
    recent = sorted(history, key=lambda row: row.period_end_date)[-policy.cashflow_window :]
    fcf = [row.free_cash_flow for row in recent if row.free_cash_flow is not None]
    if len(fcf) < 2:
        return []

    latest = recent[-1]
    latest_yield = latest.dividend_yield
    active = set(active_narrative_ids)
    signals: List[CashFlowSignal] = []

    positive = sum(1 for value in fcf if value > 0)
    if positive >= math.ceil(len(fcf) * policy.cashflow_consistency_ratio):
        signals.append(CashFlowSignal(id=CashFlowSignalType.CASHFLOW_CONSISTENT, score=positive / len(fcf)))

    if count_sign_flips(fcf) >= 2:
        signals.append(CashFlowSignal(id=CashFlowSignalType.CASHFLOW_VOLATILE))

    if latest_yield is not None:
        if latest_yield < policy.low_dividend_yield and any("growth" in narrative for narrative in active):
            signals.append(CashFlowSignal(id=CashFlowSignalType.REINVESTMENT_HEAVY))
        if latest_yield > policy.low_dividend_yield and "income_stability" in active:
            signals.append(CashFlowSignal(id=CashFlowSignalType.SHAREHOLDER_FRIENDLY))

    latest_fcf = latest.free_cash_flow
    if latest_fcf is not None and latest_fcf <= 0 and ({"income_pressure", "income_fragility"} & active):
        signals.append(CashFlowSignal(id=CashFlowSignalType.CASHFLOW_PRESSURE))

    ranked = sorted(signals, key=lambda signal: SIGNAL_PRIORITY[signal.id])
    return ranked[: policy.max_signals]
