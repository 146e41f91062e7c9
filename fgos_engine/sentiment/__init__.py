"""Valuation sentiment exports."""
from .engine import MULTIPLES, DeviationSummary, SentimentEngine, calculate_sentiment, collect_deviations

__all__ = [
    "MULTIPLES",
    "DeviationSummary",
    "SentimentEngine",
    "calculate_sentiment",
    "collect_deviations",
]
