"""Error types raised by the scoring engine for malformed inputs."""
from __future__ import annotations


class InvalidInputError(ValueError):
    """Raised when an input has an impossible shape (e.g. a negative count).

    Missing or insufficient data is never an error; callers receive an
    explicit ``None``/``pending`` result instead.
    """
