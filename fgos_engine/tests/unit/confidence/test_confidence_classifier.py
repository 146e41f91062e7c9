import pytest
from pydantic import ValidationError

from fgos_engine.confidence import calculate_confidence, classify_entity, volatility_factor
from fgos_engine.errors import InvalidInputError
from fgos_engine.models import EntityMetadata


def test_long_history_low_volatility_is_mature():
    result = calculate_confidence(history_years=12, years_since_listing=20, volatility="LOW")

    assert result.confidence_percent == 100
    assert result.confidence_label == "High"
    assert result.status == "Mature"
    assert set(result.details) == {"history", "ipo", "volatility", "missing_metrics"}


def test_five_years_history_is_developing():
    result = calculate_confidence(history_years=5, years_since_listing=5, volatility="LOW")

    assert result.confidence_percent == 75
    assert result.confidence_label == "Medium"
    assert result.status == "Developing"


def test_short_history_high_volatility_is_early_stage():
    result = calculate_confidence(history_years=1, years_since_listing=0.5, volatility="HIGH")

    # 0.30 * 0.40 * 0.65 = 0.078
    assert result.confidence_percent == 8
    assert result.confidence_label == "Low"
    assert result.status == "Early-stage"


def test_two_missing_metrics_are_always_incomplete():
    result = calculate_confidence(history_years=15, years_since_listing=15, volatility="LOW", missing_core_metrics=2)

    assert result.confidence_percent == 65
    assert result.status == "Incomplete"


def test_high_percent_with_short_history_is_not_mature():
    result = calculate_confidence(history_years=5, years_since_listing=10, volatility="LOW")
    assert result.status != "Mature"


def test_confidence_is_monotonic_in_each_factor():
    def percent(**overrides):
        inputs = {"history_years": 5, "years_since_listing": 3, "volatility": "MEDIUM", "missing_core_metrics": 1}
        inputs.update(overrides)
        return calculate_confidence(**inputs).confidence_percent

    history = [percent(history_years=value) for value in (0, 3, 5, 7, 10, 15)]
    listing = [percent(years_since_listing=value) for value in (0, 1, 3, 5, 8)]
    volatility = [percent(volatility=value) for value in ("HIGH", "MEDIUM", "LOW")]
    missing = [percent(missing_core_metrics=value) for value in (4, 2, 1, 0)]

    for series in (history, listing, volatility, missing):
        assert series == sorted(series)


def test_negative_inputs_raise():
    with pytest.raises(InvalidInputError):
        calculate_confidence(history_years=-1, years_since_listing=2)


def test_unknown_volatility_raises():
    with pytest.raises(InvalidInputError):
        volatility_factor("EXTREME")


def test_metadata_rejects_negative_counts():
    with pytest.raises(ValidationError):
        EntityMetadata(ticker="ACME", missing_core_metrics=-1)


def test_classify_entity_reads_metadata():
    metadata = EntityMetadata(ticker="ACME", history_years=10, years_since_listing=6, volatility="LOW")
    assert classify_entity(metadata).confidence_percent == 100
