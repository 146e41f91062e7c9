from fgos_engine.models import (
    CashFlowSignal,
    CashFlowSignalType,
    DividendSignal,
    DividendSignalType,
    FundamentalSnapshot,
    StructuralSignal,
    StructuralSignalType,
)
from fgos_engine.narratives import (
    evaluate_base_narratives,
    map_cashflow_signals,
    map_dividend_signals,
    map_structural_signals,
    merge_anchors,
)


def _dividend(signal_id: DividendSignalType) -> DividendSignal:
    return DividendSignal(id=signal_id, tone="warning", category="risk", message="")


def test_structural_mapping_keeps_order_and_caps_at_two():
    signals = [StructuralSignal(id=signal_id) for signal_id in StructuralSignalType]
    anchors = map_structural_signals(signals)

    assert [a.id for a in anchors] == ["structural_profitability", "structural_cash_generation"]
    assert all(a.dominance is None for a in anchors)


def test_dividend_mapping_deduplicates_shared_anchor():
    signals = [
        _dividend(DividendSignalType.PAYOUT_EPS_STRESSED),
        _dividend(DividendSignalType.PAYOUT_FCF_STRESSED),
        _dividend(DividendSignalType.DIVIDEND_FRAGILE),
    ]
    assert [a.id for a in map_dividend_signals(signals)] == ["income_pressure", "income_fragility"]


def test_cashflow_mapping():
    signals = [CashFlowSignal(id=CashFlowSignalType.CASHFLOW_PRESSURE)]
    assert [a.id for a in map_cashflow_signals(signals)] == ["capital_constraints"]
    assert map_cashflow_signals([]) == []


def test_base_narratives_from_snapshot():
    snapshot = FundamentalSnapshot(
        roe=0.2,
        roic=0.15,
        net_margin=0.1,
        pe_ratio=40,
        debt_to_equity=2.5,
        revenue_cagr=0.2,
        earnings_cagr=0.25,
    )
    ids = [a.id for a in evaluate_base_narratives(snapshot)]

    assert ids == ["solid-profitability", "increasing-leverage", "demanding-valuation", "strong-growth"]


def test_financial_risk_requires_a_reported_weakness():
    assert evaluate_base_narratives(FundamentalSnapshot()) == []
    ids = [a.id for a in evaluate_base_narratives(FundamentalSnapshot(current_ratio=0.5))]
    assert ids == ["financial-risk"]
    ids = [a.id for a in evaluate_base_narratives(FundamentalSnapshot(interest_coverage=1.2, pe_ratio=20))]
    assert ids == ["sector-aligned-valuation", "financial-risk"]


def test_merge_keeps_first_occurrence():
    first = map_structural_signals([StructuralSignal(id=StructuralSignalType.STRUCTURAL_FRAGILITY)])
    merged = merge_anchors(first, first)
    assert [a.id for a in merged] == ["structural_fragility"]
