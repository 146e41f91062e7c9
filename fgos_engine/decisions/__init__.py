from .anchors import DECISION_ANCHORS, DecisionAnchorId, evaluate_decision_anchors
from .contrast import evaluate_decision_peer_contrast, evaluate_structural_peer_contrast
from .verdict import VerdictResolver, dividend_band, moat_band, resolve_verdict

__all__ = [
    "DECISION_ANCHORS",
    "DecisionAnchorId",
    "evaluate_decision_anchors",
    "evaluate_decision_peer_contrast",
    "evaluate_structural_peer_contrast",
    "VerdictResolver",
    "dividend_band",
    "moat_band",
    "resolve_verdict",
]
