"""Performance statistics command."""

import json
import sys
from datetime import datetime
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Optional

import click
import pandas as pd
import yaml
from rich.console import Console

from quantsim.cli.options import apply_log_level, log_level_option, parse_decimal
from quantsim.services.reporting import StatisticsGenerator, display_statistics_report
from quantsim.system import LoggerFactory, get_system_config

console = Console()
logger = LoggerFactory.get_logger()


def load_series(path: Optional[Path]) -> dict[datetime, Decimal]:
    """
    Load a timestamp -> value series from a CSV file.

    The first row is a header. The first column is parsed as timestamps and
    the second as Decimal values; extra columns are ignored. Rows with a
    missing timestamp or value are dropped.

    Args:
        path: CSV file, or None for an empty series

    Returns:
        Series keyed by timestamp

    Raises:
        ValueError: If the file has fewer than two columns or bad timestamps
        decimal.InvalidOperation: If a value is not a number
    """
    if path is None:
        return {}

    try:
        frame = pd.read_csv(path, dtype=str, skipinitialspace=True)
    except pd.errors.EmptyDataError:
        return {}

    if len(frame.columns) < 2:
        raise ValueError(f"{path} needs a timestamp column and a value column")

    frame = frame.iloc[:, :2].dropna()
    timestamps = pd.to_datetime(frame.iloc[:, 0])

    return {
        timestamp.to_pydatetime(): Decimal(value.strip()) for timestamp, value in zip(timestamps, frame.iloc[:, 1])
    }


@click.command("statistics")
@click.option(
    "--equity",
    "-e",
    "equity_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    required=True,
    help="CSV of portfolio value over time (timestamp, value)",
)
@click.option(
    "--pnl",
    "-p",
    "pnl_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="CSV of closed-trade profit/loss (close time, pnl)",
)
@click.option(
    "--performance",
    "performance_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="CSV of daily fractional returns (date, return)",
)
@click.option(
    "--starting-cash",
    "-c",
    required=True,
    callback=parse_decimal,
    help="Cash at the start of the period",
)
@click.option(
    "--years",
    "-y",
    type=float,
    default=1.0,
    show_default=True,
    help="Length of the period in years",
)
@click.option(
    "--config",
    "config_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="System configuration file (YAML)",
)
@click.option("--json", "as_json", is_flag=True, help="Print the report as JSON instead of tables")
@log_level_option
def statistics_command(
    equity_file: Path,
    pnl_file: Optional[Path],
    performance_file: Optional[Path],
    starting_cash: Decimal,
    years: float,
    config_file: Optional[Path],
    as_json: bool,
    log_level: Optional[str],
):
    """
    Generate performance statistics from an equity curve and trade ledger.

    \b
    Examples:
        # Overall and per-year statistics as tables
        quantsim statistics -e equity.csv -p pnl.csv --performance daily.csv -c 100000

        # Two-year backtest, JSON output
        quantsim statistics -e equity.csv -p pnl.csv -c 100000 --years 2 --json
    """
    try:
        system_config = get_system_config(config_file)
        apply_log_level(log_level)

        equity = load_series(equity_file)
        profit_loss = load_series(pnl_file)
        performance = load_series(performance_file)
    except (ValueError, TypeError, InvalidOperation, OSError, yaml.YAMLError) as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    logger.debug(
        "cli.statistics.loaded",
        equity_points=len(equity),
        trades=len(profit_loss),
        performance_points=len(performance),
    )

    generator = StatisticsGenerator(system_config.statistics)
    report = generator.generate(equity, profit_loss, performance, starting_cash, years)

    if not report:
        console.print("[red]Statistics could not be generated[/red] (see log for details)")
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(report, indent=2))
    else:
        console.rule("[bold blue]quantsim Statistics[/bold blue]")
        display_statistics_report(report, console)
