"""Pydantic data contracts for the FGOS scoring and narrative engine."""
from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


BenchmarkConfidence = Literal["low", "medium", "high"]
VolatilityClass = Literal["LOW", "MEDIUM", "HIGH"]
ConfidenceLabel = Literal["Low", "Medium", "High"]
MaturityStatus = Literal["Mature", "Developing", "Early-stage", "Incomplete"]
AnchorTone = Literal["positive", "warning", "neutral", "negative"]
DecisionTone = Literal["positive", "warning", "neutral"]
TemporalHint = Literal["recent", "persistent", "fading"]
Dominance = Literal["primary", "secondary"]
ContrastDimension = Literal["profitability", "risk", "valuation", "growth"]
ComputationStatus = Literal["computed", "partial", "pending"]
InsightTone = Literal["positive", "negative", "neutral"]
VerdictLabel = Literal["exceptional", "strong", "balanced", "fragile", "speculative", "inconclusive"]


class StructuralSignalType(str, Enum):
    STRUCTURAL_PROFITABILITY = "structural_profitability"
    STRUCTURAL_CASH_GENERATION = "structural_cash_generation"
    EPISODIC_PERFORMANCE = "episodic_performance"
    STRUCTURAL_FRAGILITY = "structural_fragility"


class DividendSignalType(str, Enum):
    DIVIDEND_CONSISTENT = "dividend_consistent"
    DIVIDEND_GROWING = "dividend_growing"
    PAYOUT_EPS_STRESSED = "payout_eps_stressed"
    PAYOUT_FCF_STRESSED = "payout_fcf_stressed"
    DIVIDEND_FRAGILE = "dividend_fragile"


class CashFlowSignalType(str, Enum):
    CASHFLOW_CONSISTENT = "cashflow_consistent"
    CASHFLOW_VOLATILE = "cashflow_volatile"
    REINVESTMENT_HEAVY = "reinvestment_heavy"
    SHAREHOLDER_FRIENDLY = "shareholder_friendly"
    CASHFLOW_PRESSURE = "cashflow_pressure"


class UncertaintyRange(BaseModel):
    p5: float
    p95: float


class SectorBenchmark(BaseModel):
    """Percentile profile of one metric across a sector's peers."""

    model_config = ConfigDict(frozen=True)

    p10: float
    p25: float
    p50: float
    p75: float
    p90: float
    sample_size: int = Field(..., ge=0)
    confidence: BenchmarkConfidence
    median: Optional[float] = None
    trimmed_mean: Optional[float] = None
    uncertainty_range: Optional[UncertaintyRange] = None

    @model_validator(mode="after")
    def _check_ordering(self) -> "SectorBenchmark":
        if not (self.p10 <= self.p25 <= self.p50 <= self.p75 <= self.p90):
            raise ValueError("benchmark percentiles must be non-decreasing")
        return self


class FiscalRow(BaseModel):
    """One reporting period for an entity. Metrics are decimals unless noted."""

    period_end_date: date
    period_type: Literal["FY", "Q", "TTM"] = "FY"
    revenue: Optional[float] = None
    revenue_growth: Optional[float] = None
    net_income: Optional[float] = None
    free_cash_flow: Optional[float] = None
    roic: Optional[float] = None
    roe: Optional[float] = None
    gross_margin: Optional[float] = None
    operating_margin: Optional[float] = None
    net_margin: Optional[float] = None
    invested_capital: Optional[float] = None
    debt_to_equity: Optional[float] = None
    interest_coverage: Optional[float] = None
    dividend_yield: Optional[float] = Field(None, description="Percent, e.g. 2.5 for 2.5%")


class DividendRow(BaseModel):
    year: int
    dividend_per_share: Optional[float] = None
    dividend_yield: Optional[float] = None
    payout_eps: Optional[float] = Field(None, description="Percent of EPS paid out")
    payout_fcf: Optional[float] = Field(None, description="Percent of FCF paid out")
    is_growing: Optional[bool] = None
    is_stable: Optional[bool] = None


class FundamentalSnapshot(BaseModel):
    """Point-in-time fundamentals used for the composite score and base narratives."""

    revenue_cagr: Optional[float] = None
    earnings_cagr: Optional[float] = None
    fcf_cagr: Optional[float] = None
    roic: Optional[float] = None
    roe: Optional[float] = None
    operating_margin: Optional[float] = None
    net_margin: Optional[float] = None
    fcf_margin: Optional[float] = None
    debt_to_equity: Optional[float] = None
    interest_coverage: Optional[float] = None
    current_ratio: Optional[float] = None
    pe_ratio: Optional[float] = None
    altman_z: Optional[float] = None
    piotroski: Optional[int] = Field(None, ge=0, le=9)


class ValuationMultiples(BaseModel):
    pe_ratio: Optional[float] = None
    ev_ebitda: Optional[float] = None
    price_to_fcf: Optional[float] = None
    price_to_sales: Optional[float] = None


class ValuationTimeline(BaseModel):
    """Valuation multiples observed today and one, three and five years ago."""

    current: Optional[ValuationMultiples] = None
    one_year: Optional[ValuationMultiples] = None
    three_year: Optional[ValuationMultiples] = None
    five_year: Optional[ValuationMultiples] = None


class EntityMetadata(BaseModel):
    ticker: str
    sector: Optional[str] = None
    history_years: float = Field(0, ge=0)
    years_since_listing: float = Field(0, ge=0)
    volatility: VolatilityClass = "MEDIUM"
    missing_core_metrics: int = Field(0, ge=0)


class ConfidenceResult(BaseModel):
    confidence_percent: int
    confidence_label: ConfidenceLabel
    status: MaturityStatus
    details: Dict[str, float] = Field(default_factory=dict)


class FundamentalsMaturity(BaseModel):
    fiscal_years_count: int
    first_fiscal_year: Optional[int] = None
    last_fiscal_year: Optional[int] = None
    classification: Literal["early", "developing", "established"]


class LowConfidenceImpact(BaseModel):
    raw_percentile: float
    effective_percentile: float
    sample_size: int
    weight: float
    low_confidence: Literal[True] = True


class ScoreComponent(BaseModel):
    name: Literal["growth", "profitability", "efficiency", "solvency", "moat", "sentiment"]
    score: Optional[float] = None
    impact: Optional[LowConfidenceImpact] = None


class QualityBrakes(BaseModel):
    applied: bool = False
    reasons: List[str] = Field(default_factory=list)


class CompositeScore(BaseModel):
    """FGOS composite quality score with its component breakdown."""

    ticker: str
    score: Optional[int] = None
    category: Literal["High", "Medium", "Low", "Pending"]
    confidence_percent: int
    confidence_label: ConfidenceLabel
    maturity_status: Literal["Mature", "Developing", "Early-stage", "Incomplete", "pending"]
    components: List[ScoreComponent] = Field(default_factory=list)
    benchmark_low_confidence: bool = False
    quality_brakes: QualityBrakes = Field(default_factory=QualityBrakes)
    quality_warnings: List[str] = Field(default_factory=list)


class CoherenceCheck(BaseModel):
    score: int
    verdict: Literal["High Quality Growth", "Neutral", "Inefficient Growth"]
    explanation: str
    revenue_growth: float
    margin_change: float


class MoatDetails(BaseModel):
    roic_persistence: float
    margin_stability: float
    capital_discipline: Optional[float] = None
    years_analyzed: int


class MoatResult(BaseModel):
    score: Optional[int] = None
    status: ComputationStatus
    confidence: Optional[int] = None
    coherence_check: Optional[CoherenceCheck] = None
    details: Optional[MoatDetails] = None


class SentimentSignals(BaseModel):
    relative_deviation: Optional[float] = None
    directional_consistency: Optional[int] = None
    rerating_intensity_penalty: Optional[int] = None


class MultipleSentiment(BaseModel):
    multiple: str
    score: float
    relative_deviation: float
    directional_consistency: int
    intensity_penalty: int


class SentimentResult(BaseModel):
    value: Optional[int] = None
    band: Optional[Literal["pessimistic", "neutral", "optimistic"]] = None
    confidence: Optional[int] = None
    status: ComputationStatus
    signals: SentimentSignals = Field(default_factory=SentimentSignals)
    components: List[MultipleSentiment] = Field(default_factory=list)


class StructuralSignal(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: StructuralSignalType
    strength: Optional[float] = None


class DividendSignal(BaseModel):
    id: DividendSignalType
    tone: AnchorTone
    category: Literal["quality", "growth", "risk"]
    message: str


class CashFlowSignal(BaseModel):
    id: CashFlowSignalType
    score: Optional[float] = None


class NarrativeAnchor(BaseModel):
    """Qualitative statement selected by a quantitative signal."""

    model_config = ConfigDict(frozen=True)

    id: str
    label: str
    tone: AnchorTone
    highlight: List[str] = Field(default_factory=list)
    temporal_hint: Optional[TemporalHint] = None
    dominance: Optional[Dominance] = None


class DecisionAnchor(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    label: str
    tone: DecisionTone


class PeerContrast(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    text: str
    tone: AnchorTone
    dimension: ContrastDimension


class CrossDomainInsight(BaseModel):
    """Observation drawn from a combination of active narratives, never from numbers."""

    model_config = ConfigDict(frozen=True)

    id: str
    text: str
    tone: InsightTone


class VerdictDrivers(BaseModel):
    positives: List[str] = Field(default_factory=list)
    negatives: List[str] = Field(default_factory=list)
    tensions: List[str] = Field(default_factory=list)


class Verdict(BaseModel):
    label: VerdictLabel
    score: Optional[int] = None
    confidence: Optional[float] = None
    drivers: VerdictDrivers = Field(default_factory=VerdictDrivers)


class EvaluationRequest(BaseModel):
    """Everything the engine needs to evaluate one entity at one as-of date."""

    metadata: EntityMetadata
    benchmarks: Dict[str, SectorBenchmark] = Field(default_factory=dict)
    samples: Dict[str, List[float]] = Field(default_factory=dict)
    history: List[FiscalRow] = Field(default_factory=list)
    valuation: ValuationTimeline = Field(default_factory=ValuationTimeline)
    snapshot: FundamentalSnapshot = Field(default_factory=FundamentalSnapshot)
    dividends: List[DividendRow] = Field(default_factory=list)
    rng_seed: Optional[int] = None


class EvaluationResult(BaseModel):
    ticker: str
    composite: CompositeScore
    confidence: ConfidenceResult
    fundamentals_maturity: FundamentalsMaturity
    moat: MoatResult
    sentiment: SentimentResult
    structural_signals: List[StructuralSignal] = Field(default_factory=list)
    narratives: List[NarrativeAnchor] = Field(default_factory=list)
    decisions: List[DecisionAnchor] = Field(default_factory=list)
    insights: List[CrossDomainInsight] = Field(default_factory=list)
    verdict: Verdict
    benchmarks: Dict[str, SectorBenchmark] = Field(default_factory=dict)


class PeerComparison(BaseModel):
    ticker: str
    peer_ticker: str
    contrasts: List[PeerContrast] = Field(default_factory=list)
    structural_contrasts: List[PeerContrast] = Field(default_factory=list)
