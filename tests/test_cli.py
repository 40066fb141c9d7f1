"""Tests for the command-line interface."""

import polars as pl
import pytest

from glicko2_rating.cli.main import load_matches, main, parse_match


def write_paper_matches(path):
    pl.DataFrame({
        "rating": [1400.0, 1550.0, 1700.0],
        "deviation": [30.0, 100.0, 300.0],
        "score": [1.0, 0.0, 0.0],
    }).write_csv(path)


def test_parse_match():
    match = parse_match("1400:30:1")

    assert match.opponent.rating == 1400.0
    assert match.opponent.deviation == 30.0
    assert match.opponent.volatility == 0.06
    assert match.score == 1.0


@pytest.mark.parametrize("value", ["1400:30", "a:b:c", "1400:-30:1"])
def test_parse_match_rejects_bad_values(value):
    with pytest.raises(Exception):
        parse_match(value)


def test_load_matches_csv(tmp_path):
    path = tmp_path / "matches.csv"
    write_paper_matches(path)

    matches = load_matches(str(path))

    assert len(matches) == 3
    assert [m.score for m in matches] == [1.0, 0.0, 0.0]
    assert all(m.opponent.volatility == 0.06 for m in matches)


def test_load_matches_parquet_with_volatility(tmp_path):
    path = tmp_path / "matches.parquet"
    pl.DataFrame({
        "rating": [1400.0],
        "deviation": [30.0],
        "volatility": [0.08],
        "score": [0.5],
    }).write_parquet(path)

    matches = load_matches(str(path))

    assert matches[0].opponent.volatility == 0.08
    assert matches[0].score == 0.5


def test_load_matches_missing_columns(tmp_path):
    path = tmp_path / "bad.csv"
    pl.DataFrame({"rating": [1400.0], "score": [1.0]}).write_csv(path)

    with pytest.raises(ValueError, match="deviation"):
        load_matches(str(path))


def test_recalculate_inline_matches(capsys):
    code = main([
        "recalculate", "-r", "1500", "-d", "200",
        "-m", "1400:30:1", "-m", "1550:100:0", "-m", "1700:300:0",
    ])

    out = capsys.readouterr().out
    assert code == 0
    assert "Matches: 3" in out
    assert "rating=1464.0" in out
    assert "deviation=151.5" in out


def test_recalculate_from_file(tmp_path, capsys):
    path = tmp_path / "matches.csv"
    write_paper_matches(path)

    code = main(["recalculate", "--rating", "1500", "--deviation", "200", "--matches", str(path)])

    out = capsys.readouterr().out
    assert code == 0
    assert "rating=1464.0" in out


def test_recalculate_without_matches(capsys):
    code = main(["recalculate", "-r", "1500", "-d", "200"])

    out = capsys.readouterr().out
    assert code == 0
    assert "Matches: 0" in out
    assert "Result:  Rating(rating=1500.00" in out


def test_recalculate_invalid_tau():
    assert main(["recalculate", "--tau", "0"]) == 1


def test_recalculate_invalid_player():
    assert main(["recalculate", "--deviation", "-5"]) == 1


def test_recalculate_missing_file(tmp_path):
    assert main(["recalculate", "--matches", str(tmp_path / "nope.csv")]) == 1


def test_bad_match_argument_exits():
    with pytest.raises(SystemExit) as excinfo:
        main(["recalculate", "-m", "oops"])
    assert excinfo.value.code == 2


def test_benchmark_command(tmp_path, capsys):
    output = tmp_path / "bench.csv"

    code = main(["benchmark", "--sizes", "5", "10", "--matches", "3", "--output", str(output)])

    out = capsys.readouterr().out
    assert code == 0
    assert "Benchmark" in out
    df = pl.read_csv(output)
    assert df["size"].to_list() == [5, 10]


def test_no_command_prints_help(capsys):
    assert main([]) == 1
    assert "recalculate" in capsys.readouterr().out
