"""Tests for the synthetic-population benchmark harness."""

import polars as pl

from glicko2_rating import Benchmark, Glicko2, MatchResult, Rating, generate_population, run_benchmark


def test_generate_population_shape():
    cases = generate_population(50, matches_per_player=7, seed=1)

    assert len(cases) == 50
    for case in cases:
        assert isinstance(case.player, Rating)
        assert len(case.matches) == 7
        assert all(isinstance(m, MatchResult) for m in case.matches)


def test_generate_population_ranges():
    cases = generate_population(200, seed=3)

    for case in cases:
        assert 0.0 <= case.player.rating < 1200.0
        assert 0.0 <= case.player.deviation < 320.0
        assert 0.0 <= case.player.volatility < 0.04
        for match in case.matches:
            assert 0.0 <= match.opponent.rating < 1200.0
            assert 0.0 <= match.opponent.deviation < 320.0
            assert match.opponent.volatility == 0.06
            assert match.score in (0.0, 0.5, 1.0)


def test_generate_population_is_seeded():
    assert generate_population(20, seed=42) == generate_population(20, seed=42)
    assert generate_population(20, seed=42) != generate_population(20, seed=43)


def test_population_recalculates_cleanly():
    """Every generated case is well-conditioned for the solver."""
    system = Glicko2(max_iterations=10_000)

    for case in generate_population(300, seed=42):
        result = system.recalculate(case.player, case.matches)
        assert result.deviation > 0.0
        assert result.volatility > 0.0


def test_benchmark_run():
    benchmark = Benchmark(Glicko2(), matches_per_player=5, seed=0)

    result = benchmark.run(sizes=[10, 20])
    print(result.summary())

    assert [r.size for r in result.results] == [10, 20]
    assert all(r.total_ms >= 0.0 for r in result.results)
    assert "Glicko2(tau=0.5" in result.summary()


def test_run_benchmark_dataframe():
    df = run_benchmark(Glicko2(), sizes=[5, 15], matches_per_player=3)

    assert isinstance(df, pl.DataFrame)
    assert df.columns == ["size", "total_ms", "per_recalc_us"]
    assert df["size"].to_list() == [5, 15]
    assert df.height == 2
