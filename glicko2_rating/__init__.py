"""
Glicko-2 Rating - Numba-accelerated Glicko-2 recalculation for one player.

Given a player's rating, deviation and volatility plus the matches they
played in a rating period, compute the player's new rating. Each call is a
pure function of its inputs; systems and ratings are immutable and safe to
share between threads.

Quick Start:
    from glicko2_rating import Glicko2, MatchResult, Rating

    glicko2 = Glicko2(tau=0.5)
    player = Rating(1500, 200, 0.06)
    matches = [
        MatchResult(Rating(1400, 30, 0.06), MatchResult.WIN),
        MatchResult(Rating(1550, 100, 0.06), MatchResult.LOSS),
        MatchResult(Rating(1700, 300, 0.06), MatchResult.LOSS),
    ]
    print(glicko2.recalculate(player, matches))  # ~ (1464.06, 151.52, 0.05999)

    # No matches: rating and volatility stay, deviation grows
    print(glicko2.recalculate(player, []))

Command-line interface:
    python -m glicko2_rating recalculate -r 1500 -d 200 -m 1400:30:1 -m 1550:100:0
    python -m glicko2_rating benchmark --sizes 100 1000 10000
"""

from .base import (
    DEFAULT_DEVIATION,
    DEFAULT_RATING,
    DEFAULT_VOLATILITY,
    MatchResult,
    Rating,
)
from .exceptions import ConvergenceError, Glicko2Error, InvalidConfiguration, InvalidRating
from .systems import Glicko2, Glicko2Config, from_glicko2_scale, to_glicko2_scale
from .evaluation import Benchmark, BenchmarkResult, generate_population, run_benchmark

__version__ = "0.1.0"

__all__ = [
    # Values
    "Rating",
    "MatchResult",
    "DEFAULT_RATING",
    "DEFAULT_DEVIATION",
    "DEFAULT_VOLATILITY",
    # Systems
    "Glicko2",
    "Glicko2Config",
    "to_glicko2_scale",
    "from_glicko2_scale",
    # Errors
    "Glicko2Error",
    "InvalidConfiguration",
    "InvalidRating",
    "ConvergenceError",
    # Evaluation
    "Benchmark",
    "BenchmarkResult",
    "generate_population",
    "run_benchmark",
]
