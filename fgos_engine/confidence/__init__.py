"""Confidence and maturity exports."""
from .classifier import (
    calculate_confidence,
    classify_entity,
    confidence_label,
    history_factor,
    listing_factor,
    maturity_status,
    missing_metrics_factor,
    volatility_factor,
)
from .fundamentals import classify_fundamentals_maturity

__all__ = [
    "calculate_confidence",
    "classify_entity",
    "confidence_label",
    "history_factor",
    "listing_factor",
    "maturity_status",
    "missing_metrics_factor",
    "volatility_factor",
    "classify_fundamentals_maturity",
]
