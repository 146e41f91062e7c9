"""Signal to narrative anchor mapping."""
from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Sequence, TypeVar

from fgos_engine.models import (
    CashFlowSignal,
    DividendSignal,
    FundamentalSnapshot,
    NarrativeAnchor,
    StructuralSignal,
)
from .catalog import BASE_NARRATIVES, CASHFLOW_ANCHORS, DIVIDEND_ANCHORS, STRUCTURAL_ANCHORS

MAX_ANCHORS_PER_SOURCE = 2

K = TypeVar("K")


def _map_signals(
    signal_ids: Iterable[K],
    table: Dict[K, NarrativeAnchor],
    limit: int,
) -> List[NarrativeAnchor]:
    anchors: List[NarrativeAnchor] = []
    seen = set()
    for signal_id in signal_ids:
        if len(anchors) >= limit:
            break
        anchor = table[signal_id]
        if anchor.id in seen:
            continue
        seen.add(anchor.id)
        anchors.append(anchor)
    return anchors


def map_structural_signals(
    signals: Sequence[StructuralSignal],
    limit: int = MAX_ANCHORS_PER_SOURCE,
) -> List[NarrativeAnchor]:
    return _map_signals((signal.id for signal in signals), STRUCTURAL_ANCHORS, limit)


def map_dividend_signals(
    signals: Sequence[DividendSignal],
    limit: int = MAX_ANCHORS_PER_SOURCE,
) -> List[NarrativeAnchor]:
    return _map_signals((signal.id for signal in signals), DIVIDEND_ANCHORS, limit)


def map_cashflow_signals(
    signals: Sequence[CashFlowSignal],
    limit: int = MAX_ANCHORS_PER_SOURCE,
) -> List[NarrativeAnchor]:
    return _map_signals((signal.id for signal in signals), CASHFLOW_ANCHORS, limit)


def evaluate_base_narratives(snapshot: Optional[FundamentalSnapshot]) -> List[NarrativeAnchor]:
    """Every catalog anchor whose rule holds for the snapshot, in catalog order."""

    if snapshot is None:
        return []
    return [rule.anchor for rule in BASE_NARRATIVES if rule.when(snapshot)]


def merge_anchors(*groups: Sequence[NarrativeAnchor]) -> List[NarrativeAnchor]:
    """Concatenate anchor groups, keeping the first occurrence of each id."""

    merged: List[NarrativeAnchor] = []
    seen = set()
    for group in groups:
        for anchor in group:
            if anchor.id in seen:
                continue
            seen.add(anchor.id)
            merged.append(anchor)
    return merged
