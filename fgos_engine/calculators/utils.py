"""Shared numerical utilities for the scoring modules."""
from __future__ import annotations

import math
from typing import Optional, Sequence


def safe_div(numerator: Optional[float], denominator: Optional[float]) -> Optional[float]:
    """Ratio of two optional figures; None if either is missing or the denominator is ~0."""

    if numerator is None or denominator is None:
        return None
    if abs(denominator) < 1e-12:
        return None
    return numerator / denominator


def average(values: Sequence[Optional[float]]) -> Optional[float]:
    """Mean of the reported values, skipping None entries."""

    present = [v for v in values if v is not None]
    if not present:
        return None
    return sum(present) / len(present)


def population_std(values: Sequence[float]) -> Optional[float]:
    """Population standard deviation (divides by n, not n - 1)."""

    mean = average(values)
    if mean is None:
        return None
    variance = sum((v - mean) ** 2 for v in values) / len(values)
    return math.sqrt(variance)


def median(values: Sequence[float]) -> Optional[float]:
    """Middle value, averaging the two middle values for even lengths."""

    if not values:
        return None
    ordered = sorted(values)
    mid = len(ordered) // 2
    if len(ordered) % 2 == 0:
        return (ordered[mid - 1] + ordered[mid]) / 2
    return ordered[mid]


def percentile_at(sorted_values: Sequence[float], q: float) -> float:
    """Nearest-rank-below percentile on an already sorted sequence.

    Uses the index floor(q * (n - 1)); no interpolation.
    """

    index = math.floor(q * (len(sorted_values) - 1))
    return sorted_values[index]


def clamp(value: float, lower: float = 0.0, upper: float = 100.0) -> float:
    return max(lower, min(upper, value))


def count_sign_flips(values: Sequence[float]) -> int:
    """Count strict positive/negative alternations between consecutive values.

    Zero is neither sign, so a move into or out of zero is not a flip.
    """

    flips = 0
    for previous, current in zip(values, values[1:]):
        if (previous > 0 and current < 0) or (previous < 0 and current > 0):
            flips += 1
    return flips


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (round() would go to even)."""

    return int(math.floor(value + 0.5))
