"""Exceptions raised by the Glicko-2 rating package."""

from typing import Optional


class Glicko2Error(Exception):
    """Base class for all errors raised by this package."""


class InvalidConfiguration(Glicko2Error, ValueError):
    """Raised when a rating system is configured with unusable parameters."""


class InvalidRating(Glicko2Error, ValueError):
    """Raised when a Rating is built with a negative deviation or volatility."""


class ConvergenceError(Glicko2Error, ArithmeticError):
    """
    Raised when the volatility solver hits the diagnostic iteration ceiling.

    Only possible when the system was configured with ``max_iterations``;
    by default the solver loops are unbounded.
    """

    def __init__(self, message: str, player=None, max_iterations: Optional[int] = None):
        super().__init__(message)
        self.player = player
        self.max_iterations = max_iterations
