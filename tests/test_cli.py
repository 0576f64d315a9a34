from typer.testing import CliRunner

import dicedist.report as report
from dicedist.__main__ import app

runner = CliRunner()


def test_prints_table_and_mean() -> None:
    result = runner.invoke(app, ["2d4"])

    assert result.exit_code == 0, result.output
    assert "1/16" in result.output
    assert "25.00%" in result.output
    assert "mean: 5.00" in result.output
    assert "total: 16" in result.output


def test_stat_roll() -> None:
    result = runner.invoke(app, ["4d6kh3"])

    assert result.exit_code == 0, result.output
    assert "mean: 12.24" in result.output


def test_dice_error() -> None:
    result = runner.invoke(app, ["2d4kh3"])

    assert result.exit_code == 1
    assert "Error in input: '2d4kh3' keeps more dice than it can roll" in result.output


def test_syntax_error() -> None:
    result = runner.invoke(app, ["2d"])

    assert result.exit_code == 1
    assert "syntax error" in result.output


def test_max_combinations_option() -> None:
    result = runner.invoke(app, ["4d6", "--max-combinations", "10"])

    assert result.exit_code == 1
    assert "too many combinations" in result.output


def test_settings_file(tmp_path) -> None:
    settings = tmp_path / "settings.yaml"
    settings.write_text("max_combinations: 10\n")

    result = runner.invoke(app, ["4d6", "--settings", str(settings)])

    assert result.exit_code == 1
    assert "too many combinations" in result.output


def test_huge_roll_hits_the_limit() -> None:
    result = runner.invoke(app, ["6000d6"])

    assert result.exit_code == 1
    assert "Error in input: '6000d6' has too many combinations" in result.output


def test_huge_die_is_rejected() -> None:
    result = runner.invoke(app, ["d1000000000000"])

    assert result.exit_code == 1
    assert "Error in input: die size" in result.output


def test_plot(tmp_path, monkeypatch) -> None:
    plotted = {}

    def plot(distributions):
        plotted.update(distributions)
        return b"png"

    monkeypatch.setattr(report, "plot", plot)
    chart = tmp_path / "chart.png"

    result = runner.invoke(app, ["1d6 + 1", "--plot", str(chart)])

    assert result.exit_code == 0, result.output
    assert chart.read_bytes() == b"png"
    assert list(plotted) == ["1d6 + 1"]
