"""Narrative mapping, temporal context, precedence and consistency exports."""
from .catalog import BASE_NARRATIVES, CASHFLOW_ANCHORS, DIVIDEND_ANCHORS, STRUCTURAL_ANCHORS
from .consistency import CONSISTENCY_RULES, ConsistencyRule, evaluate_cross_domain_consistency
from .mappers import (
    evaluate_base_narratives,
    map_cashflow_signals,
    map_dividend_signals,
    map_structural_signals,
    merge_anchors,
)
from .precedence import apply_narrative_precedence, domain_rank, precedence_key
from .temporal import attach_temporal_context, evaluate_temporal_context

__all__ = [
    "BASE_NARRATIVES",
    "CASHFLOW_ANCHORS",
    "DIVIDEND_ANCHORS",
    "STRUCTURAL_ANCHORS",
    "CONSISTENCY_RULES",
    "ConsistencyRule",
    "evaluate_cross_domain_consistency",
    "evaluate_base_narratives",
    "map_cashflow_signals",
    "map_dividend_signals",
    "map_structural_signals",
    "merge_anchors",
    "apply_narrative_precedence",
    "domain_rank",
    "precedence_key",
    "attach_temporal_context",
    "evaluate_temporal_context",
]
