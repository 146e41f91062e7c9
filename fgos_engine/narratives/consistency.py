"""Cross-domain consistency: insights read from combinations of active narratives."""
from __future__ import annotations

from dataclasses import dataclass
from typing import AbstractSet, FrozenSet, Iterable, List, Optional

from fgos_engine.config.settings import NarrativePolicy
from fgos_engine.models import CrossDomainInsight


@dataclass(frozen=True)
class ConsistencyRule:
    requires: FrozenSet[str]
    insight: CrossDomainInsight

    def matches(self, active: AbstractSet[str]) -> bool:
        return self.requires <= active


CONSISTENCY_RULES: List[ConsistencyRule] = [
    ConsistencyRule(
        frozenset({"income_stability", "capital_constraints"}),
        CrossDomainInsight(
            id="consistency_income_cashflow_divergence",
            text="Income distribution appears stable despite constrained internal funding.",
            tone="neutral",
        ),
    ),
    ConsistencyRule(
        frozenset({"structural_fragility", "solid-profitability"}),
        CrossDomainInsight(
            id="consistency_profit_structure_mismatch",
            text="Profitability is present but lacks structural persistence.",
            tone="neutral",
        ),
    ),
    ConsistencyRule(
        frozenset({"income_growth", "income_pressure"}),
        CrossDomainInsight(
            id="consistency_growth_payout_stress",
            text="Income expansion relies on elevated capital distribution.",
            tone="negative",
        ),
    ),
    ConsistencyRule(
        frozenset({"capital_consistency", "income_stability"}),
        CrossDomainInsight(
            id="consistency_cashflow_income_aligned",
            text="Capital generation and distribution appear aligned.",
            tone="positive",
        ),
    ),
    ConsistencyRule(
        frozenset({"strong-growth", "capital_constraints"}),
        CrossDomainInsight(
            id="consistency_growth_cashflow_tradeoff",
            text="Growth is prioritized over immediate cash generation.",
            tone="neutral",
        ),
    ),
]


def evaluate_cross_domain_consistency(
    narrative_ids: Iterable[str],
    policy: Optional[NarrativePolicy] = None,
) -> List[CrossDomainInsight]:
    """Rules fire in table order; only anchor ids are read, never metric values."""

    policy = policy or NarrativePolicy()
    active = frozenset(narrative_ids)
    if not active:
        return []
    insights = [rule.insight for rule in CONSISTENCY_RULES if rule.matches(active)]
    return insights[: policy.max_insights]
