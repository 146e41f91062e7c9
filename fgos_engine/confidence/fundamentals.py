"""Fundamentals maturity: how many consecutive complete fiscal years exist."""
from __future__ import annotations

from typing import List, Sequence

from fgos_engine.models import FiscalRow, FundamentalsMaturity

ESTABLISHED_MIN_YEARS = 5
DEVELOPING_MIN_YEARS = 3


def _complete_fiscal_years(history: Sequence[FiscalRow]) -> List[int]:
    rows = [
        row
        for row in history
        if row.period_type == "FY"
        and row.revenue is not None
        and row.net_income is not None
        and row.free_cash_flow is not None
    ]
    rows = sorted(rows, key=lambda row: row.period_end_date, reverse=True)
    return [row.period_end_date.year for row in rows]


def classify_fundamentals_maturity(history: Sequence[FiscalRow]) -> FundamentalsMaturity:
    """Count the unbroken run of complete fiscal years ending at the newest one.

    A repeated year is ignored; the first missing year ends the run.
    """

    years = _complete_fiscal_years(history)
    if not years:
        return FundamentalsMaturity(fiscal_years_count=0, classification="early")

    block = [years[0]]
    for year in years[1:]:
        if year == block[-1]:
            continue
        if year != block[-1] - 1:
            break
        block.append(year)

    count = len(block)
    if count >= ESTABLISHED_MIN_YEARS:
        classification = "established"
    elif count >= DEVELOPING_MIN_YEARS:
        classification = "developing"
    else:
        classification = "early"

    return FundamentalsMaturity(
        fiscal_years_count=count,
        first_fiscal_year=block[-1],
        last_fiscal_year=block[0],
        classification=classification,
    )
