from datetime import date

import pytest

from fgos_engine.models import CashFlowSignalType, FiscalRow
from fgos_engine.signals import evaluate_cashflow_signals


def _history(fcf, dividend_yield=None):
    return [
        FiscalRow(period_end_date=date(2019 + i, 12, 31), free_cash_flow=value, dividend_yield=dividend_yield)
        for i, value in enumerate(fcf)
    ]


def _ids(signals):
    return [signal.id for signal in signals]


def test_single_year_has_no_signals():
    assert evaluate_cashflow_signals(_history([10]), []) == []


def test_positive_cash_flow_is_consistent():
    signals = evaluate_cashflow_signals(_history([10, 11, 12, 13, 14]), [])

    assert _ids(signals) == [CashFlowSignalType.CASHFLOW_CONSISTENT]
    assert signals[0].score == pytest.approx(1.0)


def test_alternating_cash_flow_is_volatile():
    signals = evaluate_cashflow_signals(_history([10, -5, 10, -5, 10]), [])
    assert _ids(signals) == [CashFlowSignalType.CASHFLOW_VOLATILE]


def test_growth_narrative_with_low_yield_is_reinvestment_heavy():
    signals = evaluate_cashflow_signals(_history([10, 11, 12], dividend_yield=0.5), ["strong-growth"])
    assert CashFlowSignalType.REINVESTMENT_HEAVY in _ids(signals)


def test_income_stability_with_yield_is_shareholder_friendly():
    signals = evaluate_cashflow_signals(_history([10, 11, 12], dividend_yield=3.0), ["income_stability"])
    assert CashFlowSignalType.SHAREHOLDER_FRIENDLY in _ids(signals)


def test_negative_latest_fcf_under_income_pressure_ranks_first():
    signals = evaluate_cashflow_signals(_history([10, 11, 12, 13, -1]), ["income_pressure"])

    assert _ids(signals)[0] == CashFlowSignalType.CASHFLOW_PRESSURE
    assert CashFlowSignalType.CASHFLOW_CONSISTENT in _ids(signals)


def test_only_latest_window_is_considered():
    history = _history([-5, 10, -5, 10, 10, 10, 10])
    assert CashFlowSignalType.CASHFLOW_VOLATILE not in _ids(evaluate_cashflow_signals(history, []))


def test_unreported_latest_fcf_is_not_pressure():
    signals = evaluate_cashflow_signals(_history([10, 11, 12, 13, None]), ["income_pressure"])

    assert CashFlowSignalType.CASHFLOW_PRESSURE not in _ids(signals)
    assert _ids(signals) == [CashFlowSignalType.CASHFLOW_CONSISTENT]


def test_unreported_fcf_years_are_skipped():
    assert evaluate_cashflow_signals(_history([None, None, None, 10]), []) == []

    signals = evaluate_cashflow_signals(_history([10, None, 12, None, 14]), [])
    assert signals[0].score == pytest.approx(1.0)


def test_unreported_yield_is_not_low_yield():
    signals = evaluate_cashflow_signals(_history([10, 11, 12]), ["strong-growth"])
    assert CashFlowSignalType.REINVESTMENT_HEAVY not in _ids(signals)
