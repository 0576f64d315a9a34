import logging
import pathlib
import typing

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

import dicedist.config as config
import dicedist.report as report
import dicedist.roll as roll
import dicedist.roll_parser as roll_parser
from dicedist.distribution import Distribution
from dicedist.errors import DiceRollError

app = typer.Typer(add_completion=False)
console = Console()


def _configure_logging(level: str) -> None:
    logger = logging.getLogger("dicedist")
    if not logger.handlers:
        handler = RichHandler(
            console=Console(stderr=True), show_time=False, show_path=False
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
        logger.propagate = False
    logger.setLevel(level)


def _table(expression: roll.Expression, distribution: Distribution) -> Table:
    table = Table(title=str(expression))
    table.add_column("value", justify="right")
    table.add_column("occurrences", justify="right")
    table.add_column("probability", justify="right")
    table.add_column("%", justify="right")
    for value, occurrences in distribution.occurrences():
        table.add_row(
            str(value),
            str(occurrences),
            str(distribution.probability(value)),
            "%.2f%%" % (distribution.probability_f64(value) * 100),
        )
    return table


@app.command()
def main(
    expression: str = typer.Argument(..., help="Dice expression, e.g. 4d6kh3."),
    plot: typing.Optional[pathlib.Path] = typer.Option(
        None, "--plot", help="Write a probability chart to this PNG file."
    ),
    max_combinations: typing.Optional[int] = typer.Option(
        None,
        "--max-combinations",
        help="Most dice combinations a single roll may enumerate.",
    ),
    settings_file: typing.Optional[pathlib.Path] = typer.Option(
        None, "--settings", help="YAML file overriding the default settings."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Print the exact distribution of a dice expression."""
    settings = config.load_settings(
        None if settings_file is None else str(settings_file)
    )
    _configure_logging("DEBUG" if verbose else settings["log_level"])
    if max_combinations is None:
        max_combinations = settings["max_combinations"]

    try:
        parsed = roll_parser.parse(expression)
        distribution = parsed.distribution(max_combinations)
    except DiceRollError as e:
        console.print("Error in input: %s" % e.args[0], markup=False, highlight=False)
        raise typer.Exit(code=1)

    console.print(_table(parsed, distribution))
    console.print(
        "min: %s  max: %s  total: %s  mean: %.2f"
        % (distribution.min(), distribution.max(), distribution.total(), distribution.mean()),
        highlight=False,
    )

    if plot is not None:
        plot.write_bytes(report.plot({str(parsed): distribution}))
        console.print("Chart written to %s" % plot, markup=False, highlight=False)


if __name__ == "__main__":
    app()
