"""Policy constants for every engine component, grouped per component.

Each value is a named field so a deployment can override it from a JSON
profile without touching code.
"""
from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, Field


class BenchmarkPolicy(BaseModel):
    min_sample_size: int = 3
    medium_confidence_min: int = 10
    high_confidence_min: int = 20
    trim_fraction: float = 0.1
    bootstrap_iterations: int = 500
    rng_seed: Optional[int] = None


class ConfidencePolicy(BaseModel):
    # (minimum input, factor) pairs, highest threshold first
    history_steps: List[Tuple[float, float]] = Field(
        default_factory=lambda: [(10, 1.0), (7, 0.90), (5, 0.75), (3, 0.55)]
    )
    history_floor: float = 0.30
    listing_steps: List[Tuple[float, float]] = Field(
        default_factory=lambda: [(5, 1.0), (3, 0.85), (1, 0.60)]
    )
    listing_floor: float = 0.40
    volatility_factors: Dict[str, float] = Field(
        default_factory=lambda: {"LOW": 1.0, "MEDIUM": 0.85, "HIGH": 0.65}
    )
    missing_steps: List[Tuple[int, float]] = Field(default_factory=lambda: [(0, 1.0), (1, 0.85)])
    missing_floor: float = 0.65
    high_label_min: int = 80
    medium_label_min: int = 50
    incomplete_missing_min: int = 2
    mature_history_min: float = 7


class ScoringPolicy(BaseModel):
    weights: Dict[str, float] = Field(
        default_factory=lambda: {
            "growth": 0.25,
            "profitability": 0.30,
            "efficiency": 0.20,
            "solvency": 0.25,
            "moat": 0.0,
            "sentiment": 0.0,
        }
    )
    neutral_percentile: float = 50.0
    full_weight_sample_size: int = 20
    medium_confidence_multiplier: float = 0.95
    high_category_min: float = 70.0
    low_category_below: float = 40.0
    single_low_confidence_cap: int = 79
    multiple_low_confidence_cap: int = 59


class QualityBrakePolicy(BaseModel):
    altman_distress_below: float = 1.8
    altman_grey_below: float = 3.0
    altman_distress_penalty: float = 15.0
    altman_grey_penalty: float = 5.0
    piotroski_weak_max: int = 3
    piotroski_penalty: float = 10.0


class MoatPolicy(BaseModel):
    max_years: int = 5
    computed_min_years: int = 5
    partial_min_years: int = 3
    computed_confidence: int = 80
    partial_confidence: int = 50
    roic_volatility_threshold: float = 0.05
    roic_volatility_penalty_cap: float = 20.0
    roic_volatility_penalty_scale: float = 200.0
    margin_stability_scale: float = 200.0
    revenue_growth_threshold: float = 0.05
    margin_decline_threshold: float = -0.01
    inefficient_growth_multiplier: float = 0.6
    persistence_weight: float = 0.5
    margin_weight: float = 0.3
    capital_weight: float = 0.2
    fallback_persistence_weight: float = 0.7
    fallback_margin_weight: float = 0.3


class SentimentPolicy(BaseModel):
    deviation_clamp: float = 1.5
    direction_threshold: float = 0.05
    single_deviation_consistency: float = 0.7
    mixed_direction_consistency: float = 0.4
    intensity_floor: float = 0.5
    intensity_ceiling: float = 2.5
    min_intensity_factor: float = 0.6
    optimistic_min: int = 60
    pessimistic_max: int = 40
    computed_base_confidence: int = 40
    partial_base_confidence: int = 25


class StructuralPolicy(BaseModel):
    min_roic_points: int = 3
    pattern_min_points: int = 4
    fragility_sign_flips: int = 2
    episodic_cv_threshold: float = 0.3
    episodic_mean_floor: float = 0.01
    strong_year_sigma: float = 0.5
    profitability_window: int = 5
    profitability_min_points: int = 4
    profitability_min_positive: int = 4
    collapse_fraction: float = 0.5
    cash_window: int = 4
    cash_min_points: int = 3
    cash_min_positive: int = 3
    max_signals: int = 3


class NarrativePolicy(BaseModel):
    max_anchors_per_source: int = 2
    max_decisions: int = 2
    max_contrasts: int = 3
    max_dividend_contrasts: int = 2
    max_structural_contrasts: int = 2
    max_signals: int = 3
    payout_eps_stress: float = 80.0
    payout_fcf_stress: float = 90.0
    cashflow_window: int = 5
    cashflow_consistency_ratio: float = 0.75
    low_dividend_yield: float = 1.0
    max_insights: int = 2


class VerdictPolicy(BaseModel):
    moat_strong_min: int = 70
    moat_defendable_min: int = 40
    dividend_adjustment: int = 7
    sentiment_adjustment: int = 3
    base_coverage: float = 0.6
    coverage_step: float = 0.1
    tension_penalty: float = 10.0
    min_confidence: float = 20.0
    thin_coverage_modules: int = 2
    thin_coverage_confidence: float = 35.0


class EngineSettings(BaseModel):
    benchmark: BenchmarkPolicy = Field(default_factory=BenchmarkPolicy)
    confidence: ConfidencePolicy = Field(default_factory=ConfidencePolicy)
    scoring: ScoringPolicy = Field(default_factory=ScoringPolicy)
    quality_brake: QualityBrakePolicy = Field(default_factory=QualityBrakePolicy)
    moat: MoatPolicy = Field(default_factory=MoatPolicy)
    sentiment: SentimentPolicy = Field(default_factory=SentimentPolicy)
    structural: StructuralPolicy = Field(default_factory=StructuralPolicy)
    narrative: NarrativePolicy = Field(default_factory=NarrativePolicy)
    verdict: VerdictPolicy = Field(default_factory=VerdictPolicy)
