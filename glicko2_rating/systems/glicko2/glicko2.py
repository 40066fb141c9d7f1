"""
Glicko-2 rating system - single-player recalculation backed by Numba.

Extension of Glicko that adds a volatility parameter to model rating
stability. Uses the internal Glicko-2 scale for calculations.

The Python layer only validates configuration, flattens match results into
contiguous numpy arrays and wraps the output; every arithmetic step runs in
the compiled core.
"""

import logging
import math
import numbers
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import numpy as np

from ...base import MatchResult, Rating
from ...exceptions import ConvergenceError, InvalidConfiguration
from ._numba_core import SCALE, recalculate_rating, to_internal, to_public

logger = logging.getLogger(__name__)

DEFAULT_TAU = 0.5
DEFAULT_EPSILON = 0.000001


def _check_positive_finite(name: str, value) -> float:
    try:
        value = float(value)
    except (TypeError, ValueError) as err:
        raise InvalidConfiguration(f"{name} must be a real number, got {value!r}") from err
    if value <= 0 or math.isnan(value) or math.isinf(value):
        raise InvalidConfiguration(f"{name} must be positive and finite, got {value}")
    return value


@dataclass(frozen=True)
class Glicko2Config:
    """Configuration for the Glicko-2 rating system."""

    tau: float = DEFAULT_TAU  # System constant (typically 0.3 to 1.2)
    epsilon: float = DEFAULT_EPSILON  # Convergence tolerance
    max_iterations: Optional[int] = None  # Diagnostic solver ceiling, None = unbounded

    def __post_init__(self):
        object.__setattr__(self, "tau", _check_positive_finite("tau", self.tau))
        object.__setattr__(self, "epsilon", _check_positive_finite("epsilon", self.epsilon))

        if self.max_iterations is not None:
            if isinstance(self.max_iterations, bool) or not isinstance(
                self.max_iterations, numbers.Integral
            ):
                raise InvalidConfiguration(
                    f"max_iterations must be an integer or None, got {self.max_iterations!r}"
                )
            if self.max_iterations <= 0:
                raise InvalidConfiguration(
                    f"max_iterations must be positive, got {self.max_iterations}"
                )
            object.__setattr__(self, "max_iterations", int(self.max_iterations))

    @property
    def scale(self) -> float:
        """Conversion factor from Glicko to Glicko-2 scale."""
        return SCALE


def to_glicko2_scale(rating: Rating) -> Tuple[float, float, float]:
    """Convert a public-scale Rating to Glicko-2 (mu, phi, sigma)."""
    mu, phi = to_internal(float(rating.rating), float(rating.deviation))
    return mu, phi, rating.volatility


def from_glicko2_scale(mu: float, phi: float, sigma: float) -> Rating:
    """Convert Glicko-2 (mu, phi, sigma) back to a public-scale Rating."""
    rating, deviation = to_public(float(mu), float(phi))
    return Rating(rating, deviation, sigma)


def _matches_to_arrays(
    matches: Sequence[MatchResult],
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Flatten match results into contiguous float64 arrays for the core."""
    n = len(matches)
    opp_ratings = np.fromiter((m.opponent.rating for m in matches), dtype=np.float64, count=n)
    opp_deviations = np.fromiter(
        (m.opponent.deviation for m in matches), dtype=np.float64, count=n
    )
    scores = np.fromiter((m.score for m in matches), dtype=np.float64, count=n)
    return opp_ratings, opp_deviations, scores


class Glicko2:
    """
    Glicko-2 rating system with Numba acceleration.

    Recalculates one player at a time from the player's rating and the
    matches they played during a rating period. Instances hold only an
    immutable config, so one system can be shared between threads.

    Parameters:
        tau: System constant controlling volatility change (default: 0.5)
        epsilon: Convergence tolerance of the volatility solver (default: 1e-6)
        max_iterations: Optional per-loop ceiling for the volatility solver.
            Off by default; when set, hitting it raises ConvergenceError.

    Example:
        >>> glicko2 = Glicko2(tau=0.5)
        >>> player = Rating(1500, 200, 0.06)
        >>> matches = [MatchResult(Rating(1400, 30, 0.06), MatchResult.WIN)]
        >>> glicko2.recalculate(player, matches)
    """

    def __init__(
        self,
        tau: float = DEFAULT_TAU,
        epsilon: float = DEFAULT_EPSILON,
        max_iterations: Optional[int] = None,
    ):
        self.config = Glicko2Config(tau=tau, epsilon=epsilon, max_iterations=max_iterations)
        logger.debug("Created %r", self)

    @classmethod
    def from_config(cls, config: Glicko2Config) -> "Glicko2":
        """Build a system from an existing config."""
        return cls(
            tau=config.tau,
            epsilon=config.epsilon,
            max_iterations=config.max_iterations,
        )

    @property
    def tau(self) -> float:
        return self.config.tau

    def recalculate(
        self,
        player: Rating,
        matches: Optional[Sequence[MatchResult]] = None,
    ) -> Rating:
        """
        Compute the player's rating after a rating period.

        Args:
            player: Rating at the start of the period
            matches: Results of the period, in play order. None or empty
                means the player was inactive: only the deviation grows.

        Returns:
            A new Rating; the inputs are never modified.

        Raises:
            ConvergenceError: if max_iterations is configured and the
                volatility solver reaches it.
        """
        if matches is None:
            matches = ()
        opp_ratings, opp_deviations, scores = _matches_to_arrays(matches)

        new_rating, new_deviation, new_volatility, converged = recalculate_rating(
            float(player.rating),
            float(player.deviation),
            float(player.volatility),
            opp_ratings,
            opp_deviations,
            scores,
            self.config.tau,
            self.config.epsilon,
            self.config.max_iterations or 0,
        )

        if not converged:
            logger.warning(
                "Volatility solver stopped after %d iterations for %r with %d matches",
                self.config.max_iterations,
                player,
                len(scores),
            )
            raise ConvergenceError(
                f"volatility did not converge within {self.config.max_iterations} iterations",
                player=player,
                max_iterations=self.config.max_iterations,
            )

        result = Rating(new_rating, new_deviation, new_volatility)
        logger.debug("Recalculated %r over %d matches -> %r", player, len(scores), result)
        return result

    def __repr__(self) -> str:
        cap = self.config.max_iterations
        return (
            f"Glicko2(tau={self.config.tau}, "
            f"epsilon={self.config.epsilon}, "
            f"max_iterations={cap if cap is not None else 'unbounded'})"
        )
