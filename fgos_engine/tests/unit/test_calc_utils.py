import pytest

from fgos_engine.calculators import utils


def test_safe_division_normal():
    assert utils.safe_div(10, 2) == 5


def test_safe_division_zero_denominator_returns_none():
    assert utils.safe_div(5, 0) is None


def test_safe_division_none_inputs_returns_none():
    assert utils.safe_div(None, 2) is None
    assert utils.safe_div(2, None) is None


def test_average_filters_none_values():
    assert utils.average([1, None, 3]) == pytest.approx(2.0)


def test_average_empty_returns_none():
    assert utils.average([]) is None


def test_population_std_divides_by_n():
    assert utils.population_std([2, 4, 4, 4, 5, 5, 7, 9]) == pytest.approx(2.0)


def test_median_even_length_averages_middle_pair():
    assert utils.median([4, 1, 3, 2]) == pytest.approx(2.5)
    assert utils.median([]) is None


def test_percentile_at_uses_floor_index():
    ordered = [1.0, 2.0, 3.0, 4.0, 5.0]
    assert utils.percentile_at(ordered, 0.10) == 1.0
    assert utils.percentile_at(ordered, 0.90) == 4.0
    assert utils.percentile_at(ordered, 0.50) == 3.0


def test_count_sign_flips_ignores_zero():
    assert utils.count_sign_flips([1, -1, 1, -1]) == 3
    assert utils.count_sign_flips([1, 0, -1]) == 0


def test_round_half_up_rounds_halves_upwards():
    assert utils.round_half_up(2.5) == 3
    assert utils.round_half_up(3.5) == 4
    assert utils.round_half_up(2.49) == 2


def test_clamp_bounds_scores():
    assert utils.clamp(120) == 100
    assert utils.clamp(-3) == 0
    assert utils.clamp(42.0) == 42.0
