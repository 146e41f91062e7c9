"""Dividend and cash-flow signal exports."""
from .cashflow import evaluate_cashflow_signals
from .dividend import evaluate_dividend_signals

__all__ = ["evaluate_cashflow_signals", "evaluate_dividend_signals"]
