"""Throughput benchmark for single-player recalculation."""

import logging
import time
from dataclasses import dataclass, field
from typing import Dict, List, Sequence

import numpy as np
import polars as pl

from ..base import DEFAULT_VOLATILITY, MatchResult, Rating
from ..systems import Glicko2

logger = logging.getLogger(__name__)

DEFAULT_SIZES = (100, 1000, 10000)
MATCHES_PER_PLAYER = 10


@dataclass(frozen=True)
class BenchmarkCase:
    """One player and the matches they play in the benchmark period."""

    player: Rating
    matches: List[MatchResult]


def generate_population(
    size: int,
    matches_per_player: int = MATCHES_PER_PLAYER,
    seed: int = 42,
) -> List[BenchmarkCase]:
    """
    Generate a synthetic population of players with random match histories.

    Players draw rating from [0, 1200), deviation from [0, 320) and
    volatility from [0, 0.04). Opponents use the same rating and deviation
    ranges with the default volatility, and each score is a loss, draw or
    win with equal probability.
    """
    rng = np.random.RandomState(seed)

    cases = []
    for _ in range(size):
        player = Rating(
            rng.random_sample() * 1200,
            rng.random_sample() * 320,
            rng.random_sample() * 0.04,
        )
        matches = []
        for _ in range(matches_per_player):
            opponent = Rating(
                rng.random_sample() * 1200,
                rng.random_sample() * 320,
                DEFAULT_VOLATILITY,
            )
            matches.append(MatchResult(opponent, rng.randint(0, 3) * 0.5))
        cases.append(BenchmarkCase(player, matches))

    return cases


@dataclass
class SizeResult:
    """Timing for one population size."""

    size: int
    total_ms: float
    per_recalc_us: float

    def to_dict(self) -> Dict:
        return {
            "size": self.size,
            "total_ms": self.total_ms,
            "per_recalc_us": self.per_recalc_us,
        }


@dataclass
class BenchmarkResult:
    """Complete benchmark results."""

    system_name: str
    matches_per_player: int
    results: List[SizeResult] = field(default_factory=list)

    def to_dataframe(self) -> pl.DataFrame:
        """Convert per-size results to a Polars DataFrame."""
        return pl.DataFrame(
            [r.to_dict() for r in self.results],
            schema={"size": pl.Int64, "total_ms": pl.Float64, "per_recalc_us": pl.Float64},
        )

    def summary(self) -> str:
        lines = [f"{self.system_name} Benchmark ({self.matches_per_player} matches/player):"]
        for r in self.results:
            lines.append(
                f"  size={r.size:>8}: {r.total_ms:10.2f} ms total, "
                f"{r.per_recalc_us:8.2f} us/recalculation"
            )
        return "\n".join(lines)


class Benchmark:
    """
    Times a rating system recalculating a whole synthetic population.

    Each size gets its own population; the population is built before the
    clock starts, so only recalculate() calls are measured.
    """

    def __init__(
        self,
        system: Glicko2,
        matches_per_player: int = MATCHES_PER_PLAYER,
        seed: int = 42,
    ):
        self.system = system
        self.matches_per_player = matches_per_player
        self.seed = seed

    def run(self, sizes: Sequence[int] = DEFAULT_SIZES, verbose: bool = False) -> BenchmarkResult:
        """
        Run the benchmark for each population size.

        Args:
            sizes: Population sizes to time
            verbose: Whether to print progress

        Returns:
            BenchmarkResult with one row per size
        """
        result = BenchmarkResult(
            system_name=repr(self.system),
            matches_per_player=self.matches_per_player,
        )

        # First call compiles the Numba core; keep it out of the timings
        warmup = generate_population(1, self.matches_per_player, self.seed)[0]
        self.system.recalculate(warmup.player, warmup.matches)

        for size in sizes:
            cases = generate_population(size, self.matches_per_player, self.seed)

            start = time.perf_counter()
            for case in cases:
                self.system.recalculate(case.player, case.matches)
            elapsed = time.perf_counter() - start

            size_result = SizeResult(
                size=size,
                total_ms=elapsed * 1000.0,
                per_recalc_us=elapsed * 1e6 / size if size > 0 else 0.0,
            )
            result.results.append(size_result)
            logger.info("Benchmarked size=%d in %.2f ms", size, size_result.total_ms)

            if verbose:
                print(f"  size={size}: {size_result.total_ms:.2f} ms")

        return result


def run_benchmark(
    system: Glicko2,
    sizes: Sequence[int] = DEFAULT_SIZES,
    matches_per_player: int = MATCHES_PER_PLAYER,
    seed: int = 42,
) -> pl.DataFrame:
    """Convenience wrapper returning the benchmark table as a DataFrame."""
    return Benchmark(system, matches_per_player, seed).run(sizes).to_dataframe()
