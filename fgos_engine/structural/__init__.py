"""Structural consistency exports."""
from .evaluator import SIGNAL_PRIORITY, StructuralEvaluator, evaluate_structural_consistency, fiscal_series

__all__ = [
    "SIGNAL_PRIORITY",
    "StructuralEvaluator",
    "evaluate_structural_consistency",
    "fiscal_series",
]
