"""Composite scoring exports."""
from .fgos import FGOSEngine
from .metric_score import (
    ComponentScore,
    MetricScore,
    calculate_component,
    calculate_metric_score,
    percentile_bucket,
)
from .quality_brakes import DistressQualityBrake, NoQualityBrake, QualityBrake, QualityBrakeOutcome

__all__ = [
    "FGOSEngine",
    "ComponentScore",
    "MetricScore",
    "calculate_component",
    "calculate_metric_score",
    "percentile_bucket",
    "DistressQualityBrake",
    "NoQualityBrake",
    "QualityBrake",
    "QualityBrakeOutcome",
]
