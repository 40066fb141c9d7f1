"""
Command-line interface for the Glicko-2 rating system.

Usage:
    python -m glicko2_rating recalculate --rating R --deviation RD --volatility VOL
        [--match RATING:DEVIATION:SCORE ...] [--matches <matches.csv|parquet>] [options]
    python -m glicko2_rating benchmark [--sizes N ...] [options]
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

import polars as pl

from ..base import DEFAULT_DEVIATION, DEFAULT_RATING, DEFAULT_VOLATILITY, MatchResult, Rating
from ..exceptions import Glicko2Error

logger = logging.getLogger(__name__)

MATCH_COLUMNS = ("rating", "deviation", "score")


def load_matches(path: str) -> List[MatchResult]:
    """
    Load match results from a CSV or Parquet file.

    Required columns are rating, deviation and score (the opponent's rating,
    the opponent's deviation and the player's score). An optional volatility
    column defaults to 0.06.
    """
    if Path(path).suffix.lower() == ".parquet":
        df = pl.read_parquet(path)
    else:
        df = pl.read_csv(path)

    missing = [c for c in MATCH_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"{path}: missing columns {', '.join(missing)}")

    if "volatility" not in df.columns:
        df = df.with_columns(pl.lit(DEFAULT_VOLATILITY).alias("volatility"))

    return [
        MatchResult(Rating.of(row["rating"], row["deviation"], row["volatility"]), float(row["score"]))
        for row in df.iter_rows(named=True)
    ]


def parse_match(value: str) -> MatchResult:
    """Parse RATING:DEVIATION:SCORE from the command line."""
    parts = value.split(":")
    if len(parts) != 3:
        raise argparse.ArgumentTypeError(
            f"expected RATING:DEVIATION:SCORE, got {value!r}"
        )
    try:
        rating, deviation, score = (float(p) for p in parts)
        return MatchResult(Rating(rating, deviation, DEFAULT_VOLATILITY), score)
    except (ValueError, Glicko2Error) as err:
        raise argparse.ArgumentTypeError(f"invalid match {value!r}: {err}") from err


def cmd_recalculate(args):
    """Recalculate one player's rating from a set of match results."""
    from ..systems import Glicko2

    system = Glicko2(tau=args.tau, max_iterations=args.max_iterations)
    player = Rating(args.rating, args.deviation, args.volatility)

    matches = list(args.match or [])
    if args.matches:
        matches.extend(load_matches(args.matches))

    logger.info(f"Recalculating {player} over {len(matches)} matches")
    result = system.recalculate(player, matches)

    print(f"Player:  {player}")
    print(f"Matches: {len(matches)}")
    print(f"Result:  {result}")
    return 0


def cmd_benchmark(args):
    """Time recalculation over synthetic populations."""
    from ..evaluation import Benchmark
    from ..systems import Glicko2

    system = Glicko2(tau=args.tau, max_iterations=args.max_iterations)
    benchmark = Benchmark(system, matches_per_player=args.matches, seed=args.seed)

    print(f"Benchmarking {system}...")
    result = benchmark.run(sizes=args.sizes, verbose=args.verbose)
    print(f"\n{result.summary()}")

    if args.output:
        df = result.to_dataframe()
        if Path(args.output).suffix.lower() == ".parquet":
            df.write_parquet(args.output)
        else:
            df.write_csv(args.output)
        print(f"\nSaved to {args.output}")

    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="glicko2-rating",
        description="Glicko-2 Rating CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Common arguments
    def add_common_args(p):
        p.add_argument("--tau", type=float, default=0.5,
                       help="System constant (default: 0.5)")
        p.add_argument("--max-iterations", type=int, default=None,
                       help="Diagnostic ceiling for the volatility solver (default: none)")

    # recalculate command
    recalc_parser = subparsers.add_parser("recalculate", help="Recalculate a rating")
    add_common_args(recalc_parser)
    recalc_parser.add_argument("--rating", "-r", type=float, default=DEFAULT_RATING,
                               help="Current rating (default: 1500)")
    recalc_parser.add_argument("--deviation", "-d", type=float, default=DEFAULT_DEVIATION,
                               help="Current rating deviation (default: 350)")
    recalc_parser.add_argument("--volatility", type=float, default=DEFAULT_VOLATILITY,
                               help="Current volatility (default: 0.06)")
    recalc_parser.add_argument("--match", "-m", type=parse_match, action="append",
                               metavar="RATING:DEVIATION:SCORE",
                               help="Match result against an opponent (repeatable)")
    recalc_parser.add_argument("--matches", "-f",
                               help="CSV or Parquet file with rating, deviation, score columns")

    # benchmark command
    bench_parser = subparsers.add_parser("benchmark", help="Benchmark recalculation")
    add_common_args(bench_parser)
    bench_parser.add_argument("--sizes", "-n", type=int, nargs="+",
                              default=[100, 1000, 10000],
                              help="Population sizes (default: 100 1000 10000)")
    bench_parser.add_argument("--matches", type=int, default=10,
                              help="Matches per player (default: 10)")
    bench_parser.add_argument("--seed", type=int, default=42,
                              help="Random seed (default: 42)")
    bench_parser.add_argument("--output", "-o", help="Save results to CSV or Parquet")

    return parser


def main(argv: Optional[List[str]] = None):
    """Main entry point for CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return 1

    commands = {
        "recalculate": cmd_recalculate,
        "benchmark": cmd_benchmark,
    }

    try:
        return commands[args.command](args)
    except (Glicko2Error, OSError, ValueError, pl.exceptions.PolarsError) as err:
        logger.error(f"{args.command} failed: {err}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
