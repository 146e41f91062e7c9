"""Engine configuration exports."""
from .loader import EngineConfigLoader, load_engine_settings
from .settings import (
    BenchmarkPolicy,
    ConfidencePolicy,
    EngineSettings,
    MoatPolicy,
    NarrativePolicy,
    QualityBrakePolicy,
    ScoringPolicy,
    SentimentPolicy,
    StructuralPolicy,
    VerdictPolicy,
)

__all__ = [
    "EngineConfigLoader",
    "load_engine_settings",
    "BenchmarkPolicy",
    "ConfidencePolicy",
    "EngineSettings",
    "MoatPolicy",
    "NarrativePolicy",
    "QualityBrakePolicy",
    "ScoringPolicy",
    "SentimentPolicy",
    "StructuralPolicy",
    "VerdictPolicy",
]
