"""Value types for ratings and match outcomes."""

from .rating import (
    DEFAULT_DEVIATION,
    DEFAULT_RATING,
    DEFAULT_VOLATILITY,
    MatchResult,
    Rating,
)

__all__ = [
    "Rating",
    "MatchResult",
    "DEFAULT_RATING",
    "DEFAULT_DEVIATION",
    "DEFAULT_VOLATILITY",
]
