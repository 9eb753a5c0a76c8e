"""
CLI entry point for recallcore.
"""

# Standard library imports
import os
from pathlib import Path
from typing import List, Optional

# Third-party imports
import typer
from rich.console import Console
from rich.table import Table

# Local application imports
from recallcore.constants import (
    DEFAULT_DESIRED_RETENTION,
    DEFAULT_MINIMUM_INTERVAL,
)
from recallcore.exceptions import RecallCoreError
from recallcore.memory_model import MemoryModel
from recallcore.parameters import (
    DEFAULT_TABLE,
    ParameterTable,
    load_parameter_table,
)
from recallcore.simulation import IntervalPolicy, ReviewSimulator


console = Console()

app = typer.Typer(
    name="recallcore",
    help="Recallcore: FSRS memory-model calculator.",
    add_completion=False,
    rich_markup_mode="markdown",
)


# ---------------------------------------------------------------------------
# Helpers for resolving the parameter table (RECALLCORE_PARAMS envvar)
# ---------------------------------------------------------------------------


def _resolve_parameters(params: Optional[Path]) -> ParameterTable:
    """Load the table from --params or RECALLCORE_PARAMS; default table otherwise."""
    if params is None:
        env_val = os.environ.get("RECALLCORE_PARAMS")
        if env_val:
            params = Path(env_val)
    if params is None:
        return DEFAULT_TABLE
    try:
        return load_parameter_table(params)
    except RecallCoreError as e:
        console.print(f"[bold red]Error: {e}[/bold red]")
        raise typer.Exit(code=1) from e


_params_option = typer.Option(  # noqa: B008
    None,
    "--params",
    help="YAML file with the parameter table. "
    "Falls back to RECALLCORE_PARAMS env var.",
    envvar="RECALLCORE_PARAMS",
)

_retention_option = typer.Option(  # noqa: B008
    DEFAULT_DESIRED_RETENTION,
    "--retention",
    "-r",
    help="Desired retention used to choose the next interval.",
)


# ---------------------------------------------------------------------------
# Simulate
# ---------------------------------------------------------------------------


@app.command()
def simulate(
    grades: List[str] = typer.Argument(  # noqa: B008
        ...,
        help="Grades in review order: forgot/again, hard, good, easy or 1-4.",
    ),
    retention: float = _retention_option,
    params: Optional[Path] = _params_option,
    no_round: bool = typer.Option(
        False, "--no-round", help="Keep raw fractional intervals."
    ),
    min_interval: float = typer.Option(
        DEFAULT_MINIMUM_INTERVAL,
        "--min-interval",
        help="Minimum scheduled interval in days.",
    ),
):
    """
    Walk a new card through a sequence of grades, reviewing each time it falls due.

    Prints elapsed time, retrievability at review, stability, difficulty and the
    next interval for every review.
    """
    table = _resolve_parameters(params)
    try:
        simulator = ReviewSimulator(
            model=MemoryModel(table),
            desired_retention=retention,
            policy=IntervalPolicy(
                round_to_days=not no_round, minimum_days=min_interval
            ),
        )
        steps = simulator.simulate(grades)
    except (RecallCoreError, ValueError) as e:
        console.print(f"[bold red]Error: {e}[/bold red]")
        raise typer.Exit(code=1) from e

    result = Table(title=f"Review simulation (retention {retention:g})")
    result.add_column("#", justify="right")
    result.add_column("Day", justify="right")
    result.add_column("Grade")
    result.add_column("R", justify="right")
    result.add_column("Stability", justify="right")
    result.add_column("Difficulty", justify="right")
    result.add_column("Next interval", justify="right")
    for i, step in enumerate(steps, start=1):
        result.add_row(
            str(i),
            f"{step.elapsed:g}",
            step.grade.name,
            f"{step.retrievability:.4f}",
            f"{step.stability:.2f}",
            f"{step.difficulty:.2f}",
            f"{step.interval:g}",
        )
    console.print(result)


# ---------------------------------------------------------------------------
# Curve queries
# ---------------------------------------------------------------------------


@app.command()
def interval(
    stability: float = typer.Argument(..., help="Stability in days."),
    retention: float = _retention_option,
):
    """Days until recall probability decays to the desired retention."""
    model = MemoryModel()
    try:
        raw = model.interval(retention, stability)
        scheduled = IntervalPolicy().apply(raw)
    except RecallCoreError as e:
        console.print(f"[bold red]Error: {e}[/bold red]")
        raise typer.Exit(code=1) from e
    console.print(f"Raw interval: [cyan]{raw:.4f}[/cyan] days")
    console.print(f"Scheduled interval: [cyan]{scheduled:g}[/cyan] days")


@app.command()
def retrievability(
    elapsed: float = typer.Argument(..., help="Days since the last review."),
    stability: float = typer.Argument(..., help="Stability in days."),
):
    """Probability of recall after ELAPSED days at the given STABILITY."""
    try:
        r = MemoryModel().retrievability(elapsed, stability)
    except RecallCoreError as e:
        console.print(f"[bold red]Error: {e}[/bold red]")
        raise typer.Exit(code=1) from e
    console.print(f"Retrievability: [cyan]{r:.4f}[/cyan]")


# ---------------------------------------------------------------------------
# Parameters
# ---------------------------------------------------------------------------


@app.command()
def params(params: Optional[Path] = _params_option):
    """Show the parameter table in use."""
    table = _resolve_parameters(params)
    result = Table(title=f"Parameters: {table.name or 'unnamed'}")
    result.add_column("Index", justify="right")
    result.add_column("Weight", justify="right")
    for index, weight in enumerate(table.weights):
        result.add_row(f"w[{index}]", f"{weight:g}")
    console.print(result)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main():
    """
    Run the CLI application.

    If an unexpected exception occurs, print a bold red error message to the console and exit the process with status code 1.
    """
    try:
        app()
    except Exception as e:
        console.print(f"[bold red]UNEXPECTED ERROR: {e}[/bold red]")
        raise SystemExit(1)


if __name__ == "__main__":
    main()
