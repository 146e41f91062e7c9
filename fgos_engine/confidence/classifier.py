"""Confidence percentage and lifecycle status from entity metadata."""
from __future__ import annotations

from typing import Optional, Sequence, Tuple

from fgos_engine.calculators.utils import round_half_up
from fgos_engine.config.settings import ConfidencePolicy
from fgos_engine.errors import InvalidInputError
from fgos_engine.models import ConfidenceLabel, ConfidenceResult, EntityMetadata, MaturityStatus


def _step_factor(value: float, steps: Sequence[Tuple[float, float]], floor: float) -> float:
    for minimum, factor in steps:
        if value >= minimum:
            return factor
    return floor


def history_factor(history_years: float, policy: Optional[ConfidencePolicy] = None) -> float:
    policy = policy or ConfidencePolicy()
    return _step_factor(history_years, policy.history_steps, policy.history_floor)


def listing_factor(years_since_listing: float, policy: Optional[ConfidencePolicy] = None) -> float:
    policy = policy or ConfidencePolicy()
    return _step_factor(years_since_listing, policy.listing_steps, policy.listing_floor)


def volatility_factor(volatility: str, policy: Optional[ConfidencePolicy] = None) -> float:
    policy = policy or ConfidencePolicy()
    try:
        return policy.volatility_factors[volatility.upper()]
    except KeyError as exc:
        raise InvalidInputError(f"Unknown volatility class: {volatility}") from exc


def missing_metrics_factor(missing: int, policy: Optional[ConfidencePolicy] = None) -> float:
    policy = policy or ConfidencePolicy()
    for count, factor in policy.missing_steps:
        if missing == count:
            return factor
    return policy.missing_floor


def confidence_label(percent: int, policy: Optional[ConfidencePolicy] = None) -> ConfidenceLabel:
    policy = policy or ConfidencePolicy()
    if percent >= policy.high_label_min:
        return "High"
    if percent >= policy.medium_label_min:
        return "Medium"
    return "Low"


def maturity_status(
    percent: int,
    history_years: float,
    missing_core_metrics: int,
    policy: Optional[ConfidencePolicy] = None,
) -> MaturityStatus:
    """Missing data overrides everything; a short history caps the status at Developing."""

    policy = policy or ConfidencePolicy()
    if missing_core_metrics >= policy.incomplete_missing_min:
        return "Incomplete"
    if percent >= policy.high_label_min and history_years >= policy.mature_history_min:
        return "Mature"
    if percent >= policy.medium_label_min:
        return "Developing"
    return "Early-stage"


def calculate_confidence(
    history_years: float,
    years_since_listing: float,
    volatility: str = "MEDIUM",
    missing_core_metrics: int = 0,
    policy: Optional[ConfidencePolicy] = None,
) -> ConfidenceResult:
    policy = policy or ConfidencePolicy()
    if history_years < 0 or years_since_listing < 0 or missing_core_metrics < 0:
        raise InvalidInputError("Confidence inputs must be non-negative")

    details = {
        "history": history_factor(history_years, policy),
        "ipo": listing_factor(years_since_listing, policy),
        "volatility": volatility_factor(volatility, policy),
        "missing_metrics": missing_metrics_factor(missing_core_metrics, policy),
    }
    product = 1.0
    for factor in details.values():
        product *= factor
    percent = round_half_up(product * 100)

    return ConfidenceResult(
        confidence_percent=percent,
        confidence_label=confidence_label(percent, policy),
        status=maturity_status(percent, history_years, missing_core_metrics, policy),
        details=details,
    )


def classify_entity(metadata: EntityMetadata, policy: Optional[ConfidencePolicy] = None) -> ConfidenceResult:
    return calculate_confidence(
        history_years=metadata.history_years,
        years_since_listing=metadata.years_since_listing,
        volatility=metadata.volatility,
        missing_core_metrics=metadata.missing_core_metrics,
        policy=policy,
    )
