"""Distress-driven adjustments applied to the raw composite score."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from fgos_engine.config.settings import QualityBrakePolicy
from fgos_engine.models import FundamentalSnapshot

logger = logging.getLogger(__name__)


@dataclass
class QualityBrakeOutcome:
    adjusted_score: float
    applied: bool = False
    reasons: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


class QualityBrake:
    """Abstract base class for adjustments applied to the raw composite score."""

    def __call__(self, raw_score: float, snapshot: FundamentalSnapshot) -> QualityBrakeOutcome:  # pragma: no cover - interface
        raise NotImplementedError


class NoQualityBrake(QualityBrake):
    """Leaves the score untouched."""

    def __call__(self, raw_score: float, snapshot: FundamentalSnapshot) -> QualityBrakeOutcome:
        return QualityBrakeOutcome(adjusted_score=raw_score)


class DistressQualityBrake(QualityBrake):
    """Lowers the composite for Altman Z distress/grey zones and weak Piotroski scores.

    Missing indicators never trigger a penalty and the score is never raised.
    """

    def __init__(self, policy: Optional[QualityBrakePolicy] = None) -> None:
        self._policy = policy or QualityBrakePolicy()

    def __call__(self, raw_score: float, snapshot: FundamentalSnapshot) -> QualityBrakeOutcome:
        policy = self._policy
        penalty = 0.0
        reasons: List[str] = []
        warnings: List[str] = []

        altman = snapshot.altman_z
        if altman is not None:
            if altman < policy.altman_distress_below:
                penalty += policy.altman_distress_penalty
                reasons.append("altman_z_distress")
                warnings.append(f"Altman Z-Score {altman:.2f} is in the distress zone")
            elif altman < policy.altman_grey_below:
                penalty += policy.altman_grey_penalty
                reasons.append("altman_z_grey_zone")
                warnings.append(f"Altman Z-Score {altman:.2f} is in the grey zone")

        piotroski = snapshot.piotroski
        if piotroski is not None and piotroski <= policy.piotroski_weak_max:
            penalty += policy.piotroski_penalty
            reasons.append("piotroski_weak")
            warnings.append(f"Piotroski F-Score {piotroski} signals weak fundamentals")

        if not reasons:
            return QualityBrakeOutcome(adjusted_score=raw_score)

        logger.warning("Quality brake applied (-%s): %s", penalty, ", ".join(reasons))
        return QualityBrakeOutcome(
            adjusted_score=raw_score - penalty,
            applied=True,
            reasons=reasons,
            warnings=warnings,
        )
