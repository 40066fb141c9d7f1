"""Value types consumed and produced by the rating system."""

from dataclasses import dataclass

from ..exceptions import InvalidRating

DEFAULT_RATING = 1500.0
DEFAULT_DEVIATION = 350.0
DEFAULT_VOLATILITY = 0.06


@dataclass(frozen=True)
class Rating:
    """
    A competitor's skill estimate on the public (Glicko) scale.

    Attributes:
        rating: Skill estimate (default: 1500)
        deviation: One standard deviation of uncertainty, >= 0 (default: 350)
        volatility: Expected fluctuation of skill over time, >= 0 (default: 0.06)

    Ratings are immutable; recalculation always returns a new instance.
    """

    rating: float = DEFAULT_RATING
    deviation: float = DEFAULT_DEVIATION
    volatility: float = DEFAULT_VOLATILITY

    def __post_init__(self):
        if self.deviation < 0.0:
            raise InvalidRating(f"deviation must be non-negative, got {self.deviation}")
        if self.volatility < 0.0:
            raise InvalidRating(f"volatility must be non-negative, got {self.volatility}")

    @classmethod
    def default(cls) -> "Rating":
        """Rating for a player with no history."""
        return cls(DEFAULT_RATING, DEFAULT_DEVIATION, DEFAULT_VOLATILITY)

    @classmethod
    def of(cls, rating: float, deviation: float, volatility: float) -> "Rating":
        return cls(float(rating), float(deviation), float(volatility))

    def __repr__(self) -> str:
        return (
            f"Rating(rating={self.rating:.2f}, "
            f"deviation={self.deviation:.2f}, "
            f"volatility={self.volatility:.6f})"
        )


@dataclass(frozen=True)
class MatchResult:
    """Outcome of one match from the player's point of view."""

    WIN = 1.0
    DRAW = 0.5
    LOSS = 0.0

    opponent: Rating  # Opponent snapshot at the start of the rating period
    score: float      # 1.0 = win, 0.5 = draw, 0.0 = loss

    @classmethod
    def of(cls, opponent: Rating, score: float) -> "MatchResult":
        return cls(opponent, float(score))
