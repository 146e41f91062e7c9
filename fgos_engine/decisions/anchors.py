"""Decision anchors derived from the set of active narrative ids."""
from __future__ import annotations

from enum import Enum
from typing import AbstractSet, Callable, Dict, Iterable, List, Optional, Tuple

from fgos_engine.config.settings import NarrativePolicy
from fgos_engine.models import DecisionAnchor


class DecisionAnchorId(str, Enum):
    LONG_TERM_QUALITY = "long-term-quality"
    ENTRY_SENSITIVE_VALUATION = "entry-sensitive-valuation"
    REQUIRES_CAUTION = "requires-caution"
    MIXED_SIGNALS = "mixed-signals"


TONE_ORDER = {"positive": 1, "warning": 2, "neutral": 3}

Predicate = Callable[[AbstractSet[str]], bool]


def _long_term_quality(ids: AbstractSet[str]) -> bool:
    return "solid-profitability" in ids and "financial-risk" not in ids


def _entry_sensitive(ids: AbstractSet[str]) -> bool:
    return "demanding-valuation" in ids


def _requires_caution(ids: AbstractSet[str]) -> bool:
    return "financial-risk" in ids or "increasing-leverage" in ids


def _mixed_signals(ids: AbstractSet[str]) -> bool:
    return len(ids) > 1 and "solid-profitability" not in ids


DECISION_ANCHORS: Dict[DecisionAnchorId, Tuple[DecisionAnchor, Predicate]] = {
    DecisionAnchorId.LONG_TERM_QUALITY: (
        DecisionAnchor(id="long-term-quality", label="Long-term quality candidate", tone="positive"),
        _long_term_quality,
    ),
    DecisionAnchorId.ENTRY_SENSITIVE_VALUATION: (
        DecisionAnchor(id="entry-sensitive-valuation", label="Valuation-sensitive entry", tone="warning"),
        _entry_sensitive,
    ),
    DecisionAnchorId.REQUIRES_CAUTION: (
        DecisionAnchor(id="requires-caution", label="Requires financial caution", tone="warning"),
        _requires_caution,
    ),
    DecisionAnchorId.MIXED_SIGNALS: (
        DecisionAnchor(id="mixed-signals", label="Mixed signals: monitoring case", tone="neutral"),
        _mixed_signals,
    ),
}


def evaluate_decision_anchors(
    active_narrative_ids: Iterable[str],
    policy: Optional[NarrativePolicy] = None,
) -> List[DecisionAnchor]:
    """Return matching decision anchors, positive first, capped by policy."""

    policy = policy or NarrativePolicy()
    ids = frozenset(active_narrative_ids)
    matched = [anchor for anchor, predicate in DECISION_ANCHORS.values() if predicate(ids)]
    ordered = sorted(matched, key=lambda anchor: TONE_ORDER[anchor.tone])
    return ordered[: policy.max_decisions]
