from datetime import date

from fgos_engine.models import FiscalRow, NarrativeAnchor
from fgos_engine.narratives import attach_temporal_context, evaluate_temporal_context


def _history(roe_by_year):
    return [FiscalRow(period_end_date=date(year, 12, 31), roe=roe) for year, roe in roe_by_year.items()]


def test_condition_in_both_years_is_persistent():
    assert evaluate_temporal_context("solid-profitability", _history({2022: 0.2, 2023: 0.18})) == "persistent"


def test_condition_in_latest_year_only_is_recent():
    assert evaluate_temporal_context("solid-profitability", _history({2023: 0.2, 2022: 0.1})) == "recent"


def test_condition_in_prior_year_only_is_fading():
    assert evaluate_temporal_context("solid-profitability", _history({2022: 0.2, 2023: 0.1})) == "fading"


def test_no_hint_without_two_values_or_rule():
    assert evaluate_temporal_context("solid-profitability", _history({2023: 0.2})) is None
    assert evaluate_temporal_context("solid-profitability", _history({2022: 0.1, 2023: 0.1})) is None
    assert evaluate_temporal_context("capital_volatility", _history({2022: 0.2, 2023: 0.2})) is None


def test_quarterly_and_missing_values_are_skipped():
    history = _history({2021: 0.2, 2023: 0.2}) + [
        FiscalRow(period_end_date=date(2022, 12, 31)),
        FiscalRow(period_end_date=date(2024, 3, 31), period_type="Q", roe=0.01),
    ]
    assert evaluate_temporal_context("solid-profitability", history) == "persistent"


def test_attach_returns_copies():
    anchor = NarrativeAnchor(id="solid-profitability", label="Solid", tone="positive")
    attached = attach_temporal_context([anchor], _history({2022: 0.2, 2023: 0.2}))

    assert attached[0].temporal_hint == "persistent"
    assert anchor.temporal_hint is None
