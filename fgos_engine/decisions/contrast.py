"""Peer contrasts: presence/absence comparisons between two evaluated entities."""
from __future__ import annotations

from dataclasses import dataclass
from typing import AbstractSet, List, Optional, Sequence

from fgos_engine.config.settings import NarrativePolicy
from fgos_engine.models import DecisionAnchor, PeerContrast, StructuralSignal, StructuralSignalType


@dataclass(frozen=True)
class ContrastRule:
    """One-sided presence test on an id.

    ``ahead`` is emitted when only the main entity carries the id, ``behind``
    when only the peer does.
    """

    marker: str
    ahead: PeerContrast
    behind: PeerContrast

    def evaluate(self, main: AbstractSet[str], peer: AbstractSet[str]) -> Optional[PeerContrast]:
        in_main, in_peer = self.marker in main, self.marker in peer
        if in_main and not in_peer:
            return self.ahead
        if in_peer and not in_main:
            return self.behind
        return None


DECISION_RULES: List[ContrastRule] = [
    ContrastRule(
        "requires-caution",
        PeerContrast(id="higher-risk", text="Higher financial risk relative to peer", tone="warning", dimension="risk"),
        PeerContrast(id="lower-risk", text="More stable financial profile than peer", tone="positive", dimension="risk"),
    ),
    ContrastRule(
        "long-term-quality",
        PeerContrast(
            id="stronger-quality",
            text="Stronger long-term quality profile than peer",
            tone="positive",
            dimension="profitability",
        ),
        PeerContrast(
            id="weaker-quality",
            text="Quality profile weaker relative to peer",
            tone="warning",
            dimension="profitability",
        ),
    ),
    ContrastRule(
        "entry-sensitive-valuation",
        PeerContrast(id="more-demanding", text="More demanding valuation than peer", tone="neutral", dimension="valuation"),
        PeerContrast(
            id="more-attractive-val",
            text="Valuation potentially more attractive",
            tone="positive",
            dimension="valuation",
        ),
    ),
]

DIVIDEND_RULES: List[ContrastRule] = [
    ContrastRule(
        "income_stability",
        PeerContrast(
            id="div-stability-better",
            text="More stable income distribution than peer",
            tone="positive",
            dimension="risk",
        ),
        PeerContrast(
            id="div-stability-worse",
            text="Peer shows more stable income distribution",
            tone="warning",
            dimension="risk",
        ),
    ),
    ContrastRule(
        "income_fragility",
        PeerContrast(
            id="div-fragility-worse",
            text="Income sustainability weaker than peer",
            tone="negative",
            dimension="risk",
        ),
        PeerContrast(
            id="div-fragility-better",
            text="Peer income sustainability appears weaker",
            tone="positive",
            dimension="risk",
        ),
    ),
    ContrastRule(
        "income_pressure",
        PeerContrast(
            id="div-pressure-worse",
            text="Higher capital allocation pressure than peer",
            tone="warning",
            dimension="risk",
        ),
        PeerContrast(
            id="div-pressure-better",
            text="Peer faces higher capital allocation pressure",
            tone="positive",
            dimension="risk",
        ),
    ),
]

MORE_UNCERTAINTY = PeerContrast(
    id="more-uncertainty",
    text="More mixed signals compared to peer",
    tone="neutral",
    dimension="profitability",
)


def evaluate_decision_peer_contrast(
    main_decisions: Sequence[DecisionAnchor],
    peer_decisions: Sequence[DecisionAnchor],
    main_narrative_ids: Sequence[str] = (),
    peer_narrative_ids: Sequence[str] = (),
    policy: Optional[NarrativePolicy] = None,
) -> List[PeerContrast]:
    policy = policy or NarrativePolicy()
    main = {anchor.id for anchor in main_decisions}
    peer = {anchor.id for anchor in peer_decisions}
    main_narratives, peer_narratives = set(main_narrative_ids), set(peer_narrative_ids)

    contrasts = [c for c in (rule.evaluate(main, peer) for rule in DECISION_RULES) if c is not None]
    dividend = [c for c in (rule.evaluate(main_narratives, peer_narratives) for rule in DIVIDEND_RULES) if c is not None]
    contrasts.extend(dividend[: policy.max_dividend_contrasts])

    if "mixed-signals" in main and "mixed-signals" not in peer and "long-term-quality" not in main:
        contrasts.append(MORE_UNCERTAINTY)
    return contrasts[: policy.max_contrasts]


_FRAGILE = {StructuralSignalType.STRUCTURAL_FRAGILITY, StructuralSignalType.EPISODIC_PERFORMANCE}
_STRONG = {StructuralSignalType.STRUCTURAL_PROFITABILITY, StructuralSignalType.STRUCTURAL_CASH_GENERATION}


def evaluate_structural_peer_contrast(
    main_signals: Sequence[StructuralSignal],
    peer_signals: Sequence[StructuralSignal],
    policy: Optional[NarrativePolicy] = None,
) -> List[PeerContrast]:
    policy = policy or NarrativePolicy()
    main = {signal.id for signal in main_signals}
    peer = {signal.id for signal in peer_signals}
    main_fragile, peer_fragile = bool(main & _FRAGILE), bool(peer & _FRAGILE)
    main_strong, peer_strong = bool(main & _STRONG), bool(peer & _STRONG)

    contrasts: List[PeerContrast] = []
    if main_fragile and peer_fragile:
        contrasts.append(
            PeerContrast(
                id="shared-fragility",
                text="Both profiles show limited structural consistency over time",
                tone="warning",
                dimension="risk",
            )
        )
    if peer_fragile and not main_fragile:
        contrasts.append(
            PeerContrast(
                id="relative-fragility",
                text="Peer exhibits higher structural instability across cycles",
                tone="positive",
                dimension="risk",
            )
        )
    if main_strong and not peer_strong:
        contrasts.append(
            PeerContrast(
                id="structural-divergence",
                text="Main profile shows stronger structural persistence than peer",
                tone="positive",
                dimension="profitability",
            )
        )
    if main_strong and peer_strong and not (main_fragile or peer_fragile):
        contrasts.append(
            PeerContrast(
                id="structural-symmetry",
                text="Both companies exhibit comparable structural consistency",
                tone="neutral",
                dimension="profitability",
            )
        )
    return contrasts[: policy.max_structural_contrasts]
