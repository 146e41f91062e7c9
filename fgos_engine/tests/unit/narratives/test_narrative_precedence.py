from fgos_engine.models import NarrativeAnchor
from fgos_engine.narratives import apply_narrative_precedence, domain_rank


def _anchor(anchor_id, tone="positive", hint=None):
    return NarrativeAnchor(id=anchor_id, label=anchor_id, tone=tone, temporal_hint=hint)


def _dominance(anchors):
    return [(a.id, a.dominance) for a in anchors]


def test_empty_input():
    assert apply_narrative_precedence([]) == []


def test_single_anchor_is_primary():
    result = apply_narrative_precedence([_anchor("income_growth")])
    assert _dominance(result) == [("income_growth", "primary")]


def test_persistent_beats_recent_regardless_of_order():
    persistent = _anchor("income_growth", hint="persistent")
    recent = _anchor("structural_fragility", tone="negative", hint="recent")

    assert _dominance(apply_narrative_precedence([recent, persistent])) == [
        ("structural_fragility", "secondary"),
        ("income_growth", "primary"),
    ]
    assert _dominance(apply_narrative_precedence([persistent, recent])) == [
        ("income_growth", "primary"),
        ("structural_fragility", "secondary"),
    ]


def test_domain_then_tone_break_ties():
    anchors = [_anchor("strong-growth"), _anchor("financial-risk", tone="negative"), _anchor("increasing-leverage", "warning")]
    result = apply_narrative_precedence(anchors)

    assert [a.dominance for a in result] == ["secondary", "primary", "secondary"]


def test_full_tie_goes_to_first():
    result = apply_narrative_precedence([_anchor("solid-profitability"), _anchor("capital_quality")])
    assert [a.dominance for a in result] == ["primary", "secondary"]


def test_exactly_one_primary():
    anchors = [_anchor(name) for name in ("a", "b", "c", "d")]
    result = apply_narrative_precedence(anchors)
    assert sum(1 for a in result if a.dominance == "primary") == 1


def test_domain_ranks():
    assert domain_rank("structural_cash_generation") == 6
    assert domain_rank("demanding-valuation") == 5
    assert domain_rank("capital_consistency") == 0
    assert domain_rank("sector-aligned-valuation") == 2
    assert domain_rank("income_stability") == 1
    assert domain_rank("unknown") == 0
