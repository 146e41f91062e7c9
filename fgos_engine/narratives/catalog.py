"""Fixed narrative anchor catalog, keyed by the signal that selects each anchor."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from fgos_engine.models import (
    CashFlowSignalType,
    DividendSignalType,
    FundamentalSnapshot,
    NarrativeAnchor,
    StructuralSignalType,
)

STRUCTURAL_ANCHORS: Dict[StructuralSignalType, NarrativeAnchor] = {
    StructuralSignalType.STRUCTURAL_PROFITABILITY: NarrativeAnchor(
        id="structural_profitability",
        label="Profitability appears structurally sustained over time",
        tone="positive",
        highlight=["ROIC sustained", "No collapse"],
    ),
    StructuralSignalType.STRUCTURAL_CASH_GENERATION: NarrativeAnchor(
        id="structural_cash_generation",
        label="Cash generation shows structural persistence",
        tone="positive",
        highlight=["Positive FCF"],
    ),
    StructuralSignalType.EPISODIC_PERFORMANCE: NarrativeAnchor(
        id="episodic_performance",
        label="Recent performance appears episodic rather than structural",
        tone="warning",
        highlight=["High variance", "Weak years"],
    ),
    StructuralSignalType.STRUCTURAL_FRAGILITY: NarrativeAnchor(
        id="structural_fragility",
        label="Financial profile shows instability across cycles",
        tone="negative",
        highlight=["Erratic", "No pattern"],
    ),
}

_INCOME_PRESSURE = NarrativeAnchor(
    id="income_pressure",
    label="Income distribution puts pressure on capital allocation",
    tone="warning",
    highlight=["Payout Ratio", "Capital Allocation"],
)

DIVIDEND_ANCHORS: Dict[DividendSignalType, NarrativeAnchor] = {
    DividendSignalType.DIVIDEND_CONSISTENT: NarrativeAnchor(
        id="income_stability",
        label="Income distribution shows structural stability",
        tone="positive",
        highlight=["Dividend Stability", "Payout History"],
    ),
    DividendSignalType.DIVIDEND_GROWING: NarrativeAnchor(
        id="income_growth",
        label="Income stream shows gradual expansion",
        tone="positive",
        highlight=["Dividend Growth", "DPS Trend"],
    ),
    DividendSignalType.PAYOUT_EPS_STRESSED: _INCOME_PRESSURE,
    DividendSignalType.PAYOUT_FCF_STRESSED: _INCOME_PRESSURE,
    DividendSignalType.DIVIDEND_FRAGILE: NarrativeAnchor(
        id="income_fragility",
        label="Income sustainability appears structurally fragile",
        tone="negative",
        highlight=["Payout Sustainability", "Cash Flow Coverage"],
    ),
}

CASHFLOW_ANCHORS: Dict[CashFlowSignalType, NarrativeAnchor] = {
    CashFlowSignalType.CASHFLOW_CONSISTENT: NarrativeAnchor(
        id="capital_consistency",
        label="Capital generation shows structural consistency",
        tone="positive",
        highlight=["Operational Discipline", "Internal Funding"],
    ),
    CashFlowSignalType.CASHFLOW_VOLATILE: NarrativeAnchor(
        id="capital_volatility",
        label="Internal capital generation appears variable",
        tone="warning",
        highlight=["Operational Stability", "Funding Predictability"],
    ),
    CashFlowSignalType.REINVESTMENT_HEAVY: NarrativeAnchor(
        id="capital_deployment_expansion",
        label="Capital deployment prioritized for structural expansion",
        tone="neutral",
        highlight=["Reinvestment Rate", "Growth Funding"],
    ),
    CashFlowSignalType.SHAREHOLDER_FRIENDLY: NarrativeAnchor(
        id="capital_allocation_distribution",
        label="Capital allocation favors shareholder distribution",
        tone="positive",
        highlight=["Distribution Policy", "Shareholder Yield"],
    ),
    CashFlowSignalType.CASHFLOW_PRESSURE: NarrativeAnchor(
        id="capital_constraints",
        label="Internal funding capacity appears constrained",
        tone="negative",
        highlight=["Funding Sustainability", "Capital Adequacy"],
    ),
}


def _value(value: Optional[float]) -> float:
    return value if value is not None else 0.0


def _solid_profitability(s: FundamentalSnapshot) -> bool:
    return _value(s.roe) > 0.15 and _value(s.roic) > 0.10 and _value(s.net_margin) > 0.05


def _increasing_leverage(s: FundamentalSnapshot) -> bool:
    return _value(s.debt_to_equity) > 2.0


def _sector_aligned_valuation(s: FundamentalSnapshot) -> bool:
    return s.pe_ratio is not None and 15 < s.pe_ratio < 25


def _demanding_valuation(s: FundamentalSnapshot) -> bool:
    return _value(s.pe_ratio) > 35


def _financial_risk(s: FundamentalSnapshot) -> bool:
    weak_coverage = s.interest_coverage is not None and s.interest_coverage < 1.5
    weak_liquidity = s.current_ratio is not None and s.current_ratio < 0.8
    return weak_coverage or weak_liquidity


def _strong_growth(s: FundamentalSnapshot) -> bool:
    return _value(s.revenue_cagr) > 0.15 and _value(s.earnings_cagr) > 0.15


@dataclass(frozen=True)
class BaseNarrativeRule:
    anchor: NarrativeAnchor
    when: Callable[[FundamentalSnapshot], bool]


BASE_NARRATIVES: List[BaseNarrativeRule] = [
    BaseNarrativeRule(
        NarrativeAnchor(
            id="solid-profitability",
            label="Solid and consistent profitability",
            tone="positive",
            highlight=["ROE", "ROIC", "Net margin", "Operating margin"],
        ),
        _solid_profitability,
    ),
    BaseNarrativeRule(
        NarrativeAnchor(
            id="increasing-leverage",
            label="Elevated leverage",
            tone="warning",
            highlight=["Debt/Equity", "Net Debt/EBITDA", "Current Ratio", "Quick Ratio"],
        ),
        _increasing_leverage,
    ),
    BaseNarrativeRule(
        NarrativeAnchor(
            id="sector-aligned-valuation",
            label="Valuation aligned with the sector",
            tone="neutral",
            highlight=["P/E Ratio", "EV/EBITDA", "P/B Ratio", "P/S Ratio"],
        ),
        _sector_aligned_valuation,
    ),
    BaseNarrativeRule(
        NarrativeAnchor(
            id="demanding-valuation",
            label="Demanding valuation",
            tone="warning",
            highlight=["P/E Ratio", "EV/EBITDA", "P/B Ratio", "PEG Ratio"],
        ),
        _demanding_valuation,
    ),
    BaseNarrativeRule(
        NarrativeAnchor(
            id="financial-risk",
            label="Latent financial risk",
            tone="negative",
            highlight=["Altman Z-Score", "Interest Coverage", "Current Ratio", "Debt/Equity"],
        ),
        _financial_risk,
    ),
    BaseNarrativeRule(
        NarrativeAnchor(
            id="strong-growth",
            label="Accelerated growth",
            tone="positive",
            highlight=["Revenue Growth", "Earnings Growth", "Revenue CAGR (5y)", "Net Income CAGR (5y)"],
        ),
        _strong_growth,
    ),
]
