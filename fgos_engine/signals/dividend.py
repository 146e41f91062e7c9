"""Dividend quality, growth and risk signals."""
from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from fgos_engine.calculators.utils import average
from fgos_engine.config.settings import NarrativePolicy
from fgos_engine.models import DividendRow, DividendSignal, DividendSignalType

CATEGORY_PRIORITY: Dict[str, int] = {"risk": 1, "growth": 2, "quality": 3}


def evaluate_dividend_signals(
    rows: Sequence[DividendRow],
    policy: Optional[NarrativePolicy] = None,
) -> List[DividendSignal]:
    """Evaluate the latest dividend year against its recent history.

    At most three signals are returned, risk first, then growth, then quality.
    """

    policy = policy or NarrativePolicy()
    if not rows:
        return []

    ordered = sorted(rows, key=lambda row: row.year)
    latest = ordered[-1]
    signals: List[DividendSignal] = []

    if latest.is_stable is True and len(ordered) >= 3:
        signals.append(
            DividendSignal(
                id=DividendSignalType.DIVIDEND_CONSISTENT,
                tone="positive",
                category="quality",
                message="Dividend payments show consistent historical pattern",
            )
        )

    previous = ordered[-4:-1]
    previous_mean = average([row.dividend_per_share for row in previous])
    latest_dps = latest.dividend_per_share
    if latest.is_growing is True and previous_mean is not None and latest_dps is not None:
        if latest_dps > previous_mean:
            signals.append(
                DividendSignal(
                    id=DividendSignalType.DIVIDEND_GROWING,
                    tone="positive",
                    category="growth",
                    message="Dividend per share shows upward trend",
                )
            )

    eps_stressed = latest.payout_eps is not None and latest.payout_eps > policy.payout_eps_stress
    fcf_stressed = latest.payout_fcf is not None and latest.payout_fcf > policy.payout_fcf_stress
    if eps_stressed:
        signals.append(
            DividendSignal(
                id=DividendSignalType.PAYOUT_EPS_STRESSED,
                tone="warning",
                category="risk",
                message="High earnings payout limits reinvestment capacity",
            )
        )
    if fcf_stressed:
        signals.append(
            DividendSignal(
                id=DividendSignalType.PAYOUT_FCF_STRESSED,
                tone="warning",
                category="risk",
                message="Dividend heavily dependent on free cash flow",
            )
        )

    weak_trend = latest.is_growing is False or latest.is_stable is False
    if (eps_stressed or fcf_stressed) and weak_trend:
        signals.append(
            DividendSignal(
                id=DividendSignalType.DIVIDEND_FRAGILE,
                tone="negative",
                category="risk",
                message="Dividend sustainability appears fragile",
            )
        )

    ranked = sorted(signals, key=lambda signal: CATEGORY_PRIORITY[signal.category])
    return ranked[: policy.max_signals]
