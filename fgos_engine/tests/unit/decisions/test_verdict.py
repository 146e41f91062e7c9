import pytest

from fgos_engine.config.settings import VerdictPolicy
from fgos_engine.decisions import VerdictResolver, dividend_band, moat_band, resolve_verdict
from fgos_engine.models import (
    CompositeScore,
    DividendSignal,
    DividendSignalType,
    MoatResult,
    SentimentResult,
)


def _composite(score, category, confidence=85):
    return CompositeScore(
        ticker="ACME",
        score=score,
        category=category,
        confidence_percent=confidence,
        confidence_label="High",
        maturity_status="Mature",
    )


def _moat(score, confidence=80):
    if score is None:
        return MoatResult(status="pending")
    return MoatResult(score=score, status="computed", confidence=confidence)


def _sentiment(band, confidence=80):
    return SentimentResult(value=50, band=band, confidence=confidence, status="computed")


def _dividend(signal_id):
    return DividendSignal(id=signal_id, tone="neutral", category="quality", message="")


def test_strong_business_with_pessimistic_sentiment_is_exceptional_with_tension():
    dividends = [_dividend(DividendSignalType.DIVIDEND_CONSISTENT)]
    calm = resolve_verdict(_composite(85, "High", 90), _moat(80), _sentiment("neutral"), dividends)
    verdict = resolve_verdict(_composite(85, "High", 90), _moat(80), _sentiment("pessimistic"), dividends)

    assert verdict.label == "exceptional"
    assert verdict.drivers.positives == [
        "Strong business quality",
        "Strong competitive advantage",
        "High dividend quality",
    ]
    assert verdict.drivers.tensions == ["Strong business with pessimistic sentiment"]
    assert verdict.score == 95
    assert calm.score == 92
    assert calm.confidence == pytest.approx(75.0)
    assert verdict.confidence == pytest.approx(65.0)


def test_weak_business_with_optimistic_sentiment_is_speculative():
    verdict = resolve_verdict(_composite(35, "Low", 80), _moat(None), _sentiment("optimistic"))

    assert verdict.label == "speculative"
    assert verdict.drivers.negatives == ["Weak business quality"]
    assert verdict.drivers.tensions == ["Weak business with optimistic sentiment"]
    assert verdict.score == 32
    assert verdict.confidence == pytest.approx(46.0)


def test_mixed_bands_are_balanced_without_tension():
    verdict = resolve_verdict(
        _composite(60, "Medium"),
        _moat(30, confidence=50),
        _sentiment("neutral"),
        [_dividend(DividendSignalType.PAYOUT_EPS_STRESSED)],
    )

    assert verdict.label == "balanced"
    assert verdict.drivers.positives == ["Defendable business quality", "Acceptable dividend quality"]
    assert verdict.drivers.negatives == ["Weak competitive advantage"]
    assert verdict.drivers.tensions == []
    assert verdict.score == 60


def test_fragile_dividend_makes_a_fragile_verdict():
    verdict = resolve_verdict(
        _composite(60, "Medium"),
        _moat(55),
        _sentiment("neutral"),
        [_dividend(DividendSignalType.PAYOUT_FCF_STRESSED), _dividend(DividendSignalType.DIVIDEND_FRAGILE)],
    )

    assert verdict.label == "fragile"
    assert "Unsustainable dividends" in verdict.drivers.negatives
    assert verdict.score == 53


def test_pending_composite_is_inconclusive():
    verdict = resolve_verdict(_composite(None, "Pending", 0), _moat(80), _sentiment("neutral"))

    assert verdict.label == "inconclusive"
    assert verdict.score is None
    assert verdict.confidence is None
    assert verdict.drivers.negatives


def test_thin_low_confidence_coverage_is_inconclusive():
    verdict = VerdictResolver().resolve(_composite(30, "Low", 40))

    assert verdict.label == "inconclusive"
    assert verdict.score == 30
    assert verdict.confidence == pytest.approx(24.0)


def test_verdict_thresholds_come_from_policy():
    policy = VerdictPolicy(min_confidence=0.0, thin_coverage_confidence=0.0)
    verdict = VerdictResolver(policy).resolve(_composite(30, "Low", 40))
    assert verdict.label == "fragile"


def test_moat_band_boundaries():
    assert moat_band(_moat(None)) is None
    assert moat_band(_moat(39)) == "weak"
    assert moat_band(_moat(40)) == "defendable"
    assert moat_band(_moat(69)) == "defendable"
    assert moat_band(_moat(70)) == "strong"


def test_dividend_band_from_signals():
    assert dividend_band([]) is None
    assert dividend_band([_dividend(DividendSignalType.DIVIDEND_CONSISTENT)]) == "high"
    assert dividend_band([_dividend(DividendSignalType.DIVIDEND_GROWING)]) == "acceptable"
    assert (
        dividend_band([_dividend(DividendSignalType.DIVIDEND_CONSISTENT), _dividend(DividendSignalType.PAYOUT_EPS_STRESSED)])
        == "acceptable"
    )
    assert dividend_band([_dividend(DividendSignalType.DIVIDEND_FRAGILE)]) == "weak"
