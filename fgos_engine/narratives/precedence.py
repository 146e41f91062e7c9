"""Selecting the dominant narrative among co-active anchors."""
from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple

from fgos_engine.models import NarrativeAnchor

TEMPORAL_RANK: Dict[Optional[str], int] = {"persistent": 4, "recent": 3, "fading": 2, None: 1}

TONE_RANK: Dict[str, int] = {"negative": 4, "warning": 3, "positive": 2, "neutral": 1}

# (rank, substrings), checked from the most to the least dominant domain
DOMAIN_RANKS: List[Tuple[int, Tuple[str, ...]]] = [
    (6, ("structural", "episodic")),
    (5, ("risk", "leverage", "debt", "pressure", "fragility", "solvency", "demanding-valuation")),
    (4, ("cash", "fcf")),
    (3, ("profitability", "margin", "roe", "roic", "quality")),
    (2, ("growth", "revenue", "cagr", "valuation")),
    (1, ("dividend", "income", "yield", "payout")),
]


def domain_rank(anchor_id: str) -> int:
    lowered = anchor_id.lower()
    for rank, markers in DOMAIN_RANKS:
        if any(marker in lowered for marker in markers):
            return rank
    return 0


def precedence_key(anchor: NarrativeAnchor) -> Tuple[int, int, int]:
    return (
        TEMPORAL_RANK.get(anchor.temporal_hint, 1),
        domain_rank(anchor.id),
        TONE_RANK.get(anchor.tone, 0),
    )


def apply_narrative_precedence(anchors: Sequence[NarrativeAnchor]) -> List[NarrativeAnchor]:
    """Mark exactly one anchor primary and the rest secondary, keeping input order.

    Keys compare temporal hint, then domain, then tone. Full ties go to the
    anchor that appears first.
    """

    if not anchors:
        return []
    # max() returns the first maximal element, which keeps ties stable
    winner = max(range(len(anchors)), key=lambda index: precedence_key(anchors[index]))
    return [
        anchor.model_copy(update={"dominance": "primary" if index == winner else "secondary"})
        for index, anchor in enumerate(anchors)
    ]
