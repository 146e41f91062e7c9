"""Evaluation service that runs every scoring and narrative stage for one entity."""
from __future__ import annotations

import logging
from typing import Dict, List, Optional

from fgos_engine.benchmarks.builder import BenchmarkBuilder
from fgos_engine.config.settings import EngineSettings
from fgos_engine.confidence import classify_entity, classify_fundamentals_maturity
from fgos_engine.decisions import (
    VerdictResolver,
    evaluate_decision_anchors,
    evaluate_decision_peer_contrast,
    evaluate_structural_peer_contrast,
)
from fgos_engine.models import (
    EvaluationRequest,
    DividendSignal,
    EvaluationResult,
    FiscalRow,
    NarrativeAnchor,
    PeerComparison,
    SectorBenchmark,
)
from fgos_engine.moat import MoatAnalyzer
from fgos_engine.narratives import (
    apply_narrative_precedence,
    attach_temporal_context,
    evaluate_base_narratives,
    evaluate_cross_domain_consistency,
    map_cashflow_signals,
    map_dividend_signals,
    map_structural_signals,
    merge_anchors,
)
from fgos_engine.scoring import DistressQualityBrake, FGOSEngine, QualityBrake
from fgos_engine.sentiment import SentimentEngine
from fgos_engine.signals import evaluate_cashflow_signals, evaluate_dividend_signals
from fgos_engine.structural import StructuralEvaluator

logger = logging.getLogger(__name__)


class EvaluationService:
    def __init__(
        self,
        settings: Optional[EngineSettings] = None,
        quality_brake: Optional[QualityBrake] = None,
    ) -> None:
        self._settings = settings or EngineSettings()
        self._fgos = FGOSEngine(
            policy=self._settings.scoring,
            quality_brake=quality_brake or DistressQualityBrake(self._settings.quality_brake),
            confidence_policy=self._settings.confidence,
        )
        self._moat = MoatAnalyzer(self._settings.moat)
        self._sentiment = SentimentEngine(self._settings.sentiment)
        self._structural = StructuralEvaluator(self._settings.structural)
        self._verdict = VerdictResolver(self._settings.verdict)

    @property
    def settings(self) -> EngineSettings:
        return self._settings

    def build_benchmarks(self, request: EvaluationRequest) -> Dict[str, SectorBenchmark]:
        """Supplied benchmarks win; metrics only present as samples are built here."""

        benchmarks = dict(request.benchmarks)
        missing = {metric: values for metric, values in request.samples.items() if metric not in benchmarks}
        if missing:
            builder = BenchmarkBuilder(self._settings.benchmark, rng_seed=request.rng_seed)
            built = builder.build_many(missing)
            summary = builder.summary(built)
            logger.debug(
                "Built %d of %d sampled benchmarks (mean n=%.1f, low share=%.2f)",
                len(built),
                len(missing),
                summary["mean_sample_size"],
                summary["low_confidence_share"],
            )
            benchmarks.update(built)
        return benchmarks

    def evaluate(self, request: EvaluationRequest) -> EvaluationResult:
        settings = self._settings
        metadata = request.metadata
        ticker = metadata.ticker.upper()
        logger.info("Evaluating %s (sector=%s)", ticker, metadata.sector)

        benchmarks = self.build_benchmarks(request)
        confidence = classify_entity(metadata, settings.confidence)
        maturity = classify_fundamentals_maturity(request.history)
        moat = self._moat.analyze(request.history, benchmarks, metadata.sector)
        sentiment = self._sentiment.evaluate(request.valuation)
        composite = self._fgos.score(
            ticker,
            metadata.sector,
            request.snapshot,
            benchmarks,
            confidence,
            moat=moat,
            sentiment=sentiment,
        )

        structural_signals = self._structural.evaluate(request.history)
        dividend_signals = evaluate_dividend_signals(request.dividends, settings.narrative)
        narratives = self._narratives(request, structural_signals, dividend_signals)
        narrative_ids = [anchor.id for anchor in narratives]
        decisions = evaluate_decision_anchors(narrative_ids, settings.narrative)
        insights = evaluate_cross_domain_consistency(narrative_ids, settings.narrative)
        verdict = self._verdict.resolve(composite, moat, sentiment, dividend_signals)

        return EvaluationResult(
            ticker=ticker,
            composite=composite,
            confidence=confidence,
            fundamentals_maturity=maturity,
            moat=moat,
            sentiment=sentiment,
            structural_signals=structural_signals,
            narratives=narratives,
            decisions=decisions,
            insights=insights,
            verdict=verdict,
            benchmarks=benchmarks,
        )

    def compare(self, main: EvaluationRequest, peer: EvaluationRequest) -> PeerComparison:
        policy = self._settings.narrative
        main_result = self.evaluate(main)
        peer_result = self.evaluate(peer)
        contrasts = evaluate_decision_peer_contrast(
            main_result.decisions,
            peer_result.decisions,
            [anchor.id for anchor in main_result.narratives],
            [anchor.id for anchor in peer_result.narratives],
            policy,
        )
        structural = evaluate_structural_peer_contrast(
            main_result.structural_signals,
            peer_result.structural_signals,
            policy,
        )
        logger.info(
            "Compared %s with %s: %d contrasts, %d structural",
            main_result.ticker,
            peer_result.ticker,
            len(contrasts),
            len(structural),
        )
        return PeerComparison(
            ticker=main_result.ticker,
            peer_ticker=peer_result.ticker,
            contrasts=contrasts,
            structural_contrasts=structural,
        )

    def _narratives(
        self,
        request: EvaluationRequest,
        structural_signals,
        dividend_signals: List[DividendSignal],
    ) -> List[NarrativeAnchor]:
        policy = self._settings.narrative
        limit = policy.max_anchors_per_source
        anchors = merge_anchors(
            evaluate_base_narratives(request.snapshot),
            map_structural_signals(structural_signals, limit),
            map_dividend_signals(dividend_signals, limit),
        )
        fiscal_years: List[FiscalRow] = [row for row in request.history if row.period_type == "FY"]
        cashflow_signals = evaluate_cashflow_signals(fiscal_years, [anchor.id for anchor in anchors], policy)
        anchors = merge_anchors(anchors, map_cashflow_signals(cashflow_signals, limit))
        return apply_narrative_precedence(attach_temporal_context(anchors, request.history))
