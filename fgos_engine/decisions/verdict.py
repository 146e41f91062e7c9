"""Overall verdict combining business quality, moat, sentiment and dividend quality bands."""
from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence

from fgos_engine.calculators.utils import average, clamp, round_half_up
from fgos_engine.config.settings import VerdictPolicy
from fgos_engine.models import (
    CompositeScore,
    DividendSignal,
    DividendSignalType,
    MoatResult,
    SentimentResult,
    Verdict,
    VerdictDrivers,
)

logger = logging.getLogger(__name__)

QUALITY_BANDS: Dict[str, str] = {"High": "strong", "Medium": "defendable", "Low": "weak"}


def moat_band(moat: MoatResult, policy: Optional[VerdictPolicy] = None) -> Optional[str]:
    policy = policy or VerdictPolicy()
    if moat.score is None:
        return None
    if moat.score < policy.moat_defendable_min:
        return "weak"
    if moat.score < policy.moat_strong_min:
        return "defendable"
    return "strong"


def dividend_band(signals: Sequence[DividendSignal]) -> Optional[str]:
    """Fragile payers are weak, stressed payouts acceptable, consistent payers high."""

    ids = {signal.id for signal in signals}
    if not ids:
        return None
    if DividendSignalType.DIVIDEND_FRAGILE in ids:
        return "weak"
    if ids & {DividendSignalType.PAYOUT_EPS_STRESSED, DividendSignalType.PAYOUT_FCF_STRESSED}:
        return "acceptable"
    if DividendSignalType.DIVIDEND_CONSISTENT in ids:
        return "high"
    return "acceptable"


def _add(items: List[str], text: str) -> None:
    if text not in items:
        items.append(text)


class VerdictResolver:
    def __init__(self, policy: Optional[VerdictPolicy] = None) -> None:
        self._policy = policy or VerdictPolicy()

    def resolve(
        self,
        composite: CompositeScore,
        moat: Optional[MoatResult] = None,
        sentiment: Optional[SentimentResult] = None,
        dividend_signals: Sequence[DividendSignal] = (),
    ) -> Verdict:
        policy = self._policy
        quality = QUALITY_BANDS.get(composite.category)
        if composite.score is None or quality is None:
            logger.debug("Verdict inconclusive for %s: no composite score", composite.ticker)
            return Verdict(
                label="inconclusive",
                drivers=VerdictDrivers(negatives=["Insufficient core FGOS data to form a verdict"]),
            )

        advantage = moat_band(moat, policy) if moat is not None else None
        mood = sentiment.band if sentiment is not None else None
        dividends = dividend_band(dividend_signals)

        drivers = VerdictDrivers()
        if quality == "strong":
            _add(drivers.positives, "Strong business quality")
        elif quality == "defendable":
            _add(drivers.positives, "Defendable business quality")
        else:
            _add(drivers.negatives, "Weak business quality")

        if advantage == "strong":
            _add(drivers.positives, "Strong competitive advantage")
        elif advantage == "defendable":
            _add(drivers.positives, "Defendable competitive advantage")
        elif advantage == "weak":
            _add(drivers.negatives, "Weak competitive advantage")

        if dividends == "high":
            _add(drivers.positives, "High dividend quality")
        elif dividends == "acceptable":
            _add(drivers.positives, "Acceptable dividend quality")
        elif dividends == "weak":
            _add(drivers.negatives, "Unsustainable dividends")

        if quality in ("strong", "defendable") and mood == "pessimistic":
            _add(drivers.tensions, "Strong business with pessimistic sentiment")
        if quality == "weak" and mood == "optimistic":
            _add(drivers.tensions, "Weak business with optimistic sentiment")

        label = self._label(quality, advantage, mood, dividends)
        score = round_half_up(clamp(composite.score + self._adjustment(mood, dividends)))

        modules = 1
        confidences: List[Optional[float]] = [composite.confidence_percent]
        if advantage is not None:
            modules += 1
            confidences.append(moat.confidence)
        if mood is not None:
            modules += 1
            confidences.append(sentiment.confidence)
        if dividends is not None:
            modules += 1

        confidence: Optional[float] = None
        mean_confidence = average(confidences)
        if mean_confidence is not None:
            coverage = min(1.0, policy.base_coverage + policy.coverage_step * (modules - 1))
            confidence = clamp(mean_confidence * coverage - policy.tension_penalty * len(drivers.tensions))

        thin_coverage = modules <= policy.thin_coverage_modules
        if confidence is not None and (
            confidence < policy.min_confidence
            or (thin_coverage and confidence < policy.thin_coverage_confidence)
        ):
            label = "inconclusive"

        return Verdict(label=label, score=score, confidence=confidence, drivers=drivers)

    def _adjustment(self, mood: Optional[str], dividends: Optional[str]) -> int:
        policy = self._policy
        adjustment = 0
        if dividends == "high":
            adjustment += policy.dividend_adjustment
        elif dividends == "weak":
            adjustment -= policy.dividend_adjustment
        if mood == "optimistic":
            adjustment -= policy.sentiment_adjustment
        elif mood == "pessimistic":
            adjustment += policy.sentiment_adjustment
        return adjustment

    @staticmethod
    def _label(quality: str, advantage: Optional[str], mood: Optional[str], dividends: Optional[str]) -> str:
        weak_business = quality == "weak"
        if (
            quality == "strong"
            and advantage == "strong"
            and dividends in ("high", "acceptable")
            and mood != "optimistic"
        ):
            return "exceptional"
        if weak_business and mood == "optimistic":
            return "speculative"
        if (
            quality in ("strong", "defendable")
            and advantage != "weak"
            and dividends != "weak"
            and mood != "optimistic"
        ):
            return "strong"
        if weak_business or dividends == "weak":
            return "fragile"
        return "balanced"


def resolve_verdict(
    composite: CompositeScore,
    moat: Optional[MoatResult] = None,
    sentiment: Optional[SentimentResult] = None,
    dividend_signals: Sequence[DividendSignal] = (),
    policy: Optional[VerdictPolicy] = None,
) -> Verdict:
    return VerdictResolver(policy).resolve(composite, moat, sentiment, dividend_signals)
