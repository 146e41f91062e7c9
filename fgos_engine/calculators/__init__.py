"""Calculator exports."""
from .utils import (
    average,
    clamp,
    count_sign_flips,
    median,
    percentile_at,
    population_std,
    round_half_up,
    safe_div,
)

__all__ = [
    "average",
    "clamp",
    "count_sign_flips",
    "median",
    "percentile_at",
    "population_std",
    "round_half_up",
    "safe_div",
]
