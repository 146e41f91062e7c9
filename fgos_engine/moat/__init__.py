"""Moat analyzer exports."""
from .analyzer import MoatAnalyzer, calculate_capital_discipline, calculate_coherence_check, calculate_moat

__all__ = [
    "MoatAnalyzer",
    "calculate_capital_discipline",
    "calculate_coherence_check",
    "calculate_moat",
]
