"""Report formatting and Rich console display.

Turns PerformanceStatistics into the string report returned by the
statistics engine, and renders such a report as terminal tables.
"""

from decimal import Decimal

from rich.console import Console
from rich.table import Table

from quantsim.libraries.performance.metrics import round_to_places
from quantsim.libraries.performance.models import AnnualTradeStats, PerformanceStatistics, StatisticsReport

OVERALL_SECTION = "Overall"

# Metrics colored by sign in console output
_SIGNED_METRICS = {"Annual Return", "Net Profit", "Expectancy", "Sharpe Ratio", "Trade Net Profit"}


def _plain(value: Decimal) -> str:
    """Decimal without exponent notation; any zero renders as '0' whatever its scale."""
    if value == 0:
        return "0"
    return f"{value:f}"


def format_percent(value: Decimal, places: int) -> str:
    """Fraction as a percentage rounded to at most `places` (0.1234 -> '12.34%')."""
    return f"{_plain(round_to_places(value * 100, places))}%"


def format_number(value: Decimal, places: int) -> str:
    """Value rounded to at most `places`, without exponent notation."""
    return _plain(round_to_places(value, places))


def format_profit_loss_ratio(ratio: Decimal) -> str:
    """Profit-loss ratio, '0' for the no-loss sentinel -1."""
    if ratio == -1:
        return "0"
    return _plain(ratio)


def format_overall_section(stats: PerformanceStatistics) -> dict[str, str]:
    """Build the "Overall" report section."""
    return {
        "Total Trades": str(stats.total_trades),
        "Average Win": format_percent(stats.average_win, 2),
        "Average Loss": format_percent(stats.average_loss, 2),
        "Annual Return": format_percent(stats.annual_return, 3),
        # Already rounded as a fraction
        "Drawdown": f"{_plain(stats.drawdown * 100)}%",
        "Expectancy": format_number(stats.expectancy, 3),
        "Net Profit": format_percent(stats.equity_net_profit, 3),
        "Sharpe Ratio": _plain(stats.sharpe_ratio),
        "Loss Rate": format_percent(stats.loss_rate, 0),
        "Win Rate": format_percent(stats.win_rate, 0),
        "Profit-Loss Ratio": format_profit_loss_ratio(stats.profit_loss_ratio),
        "Trade Frequency": f"{stats.trade_frequency.value} trades",
    }


def format_annual_section(annual: AnnualTradeStats) -> dict[str, str]:
    """Build the report section for one calendar year."""
    return {
        "Total Trades": str(annual.trades),
        "Winning Trades": str(annual.wins),
        "Losing Trades": str(annual.losses),
        "Average Win": format_percent(annual.average_win, 2),
        "Average Loss": format_percent(annual.average_loss, 2),
        "Trade Net Profit": format_percent(annual.net_profit, 3),
    }


def format_statistics_report(stats: PerformanceStatistics, annual_breakdown: bool = True) -> StatisticsReport:
    """
    Format statistics into a report keyed by section name.

    Args:
        stats: Numeric statistics
        annual_breakdown: Add one section per year ("2013", ...) after "Overall"

    Returns:
        Section name -> metric name -> formatted value
    """
    report: StatisticsReport = {OVERALL_SECTION: format_overall_section(stats)}

    if annual_breakdown:
        for annual in stats.annual:
            report[str(annual.year)] = format_annual_section(annual)

    return report


def _get_color(value: str) -> str:
    """Color for a formatted value based on its sign."""
    if value.startswith("-"):
        return "red"
    if value.rstrip("%").strip("0.") == "":
        return "white"
    return "green"


def _create_section_table(section: str, metrics: dict[str, str]) -> Table:
    """Create a two-column table for one report section."""
    title = "📊 Overall Statistics" if section == OVERALL_SECTION else f"📅 {section}"
    table = Table(title=title, show_header=False, box=None, padding=(0, 2))

    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")

    for name, value in metrics.items():
        if name in _SIGNED_METRICS:
            color = _get_color(value)
            table.add_row(name, f"[{color}]{value}[/{color}]")
        elif name == "Drawdown":
            table.add_row(name, f"[red]{value}[/red]")
        else:
            table.add_row(name, value)

    return table


def display_statistics_report(report: StatisticsReport, console: Console | None = None) -> None:
    """
    Display a statistics report as Rich tables, one per section.

    Args:
        report: Report produced by the statistics engine
        console: Rich Console instance (creates new if None)

    Example:
        >>> report = generate(equity, profit_loss, performance, Decimal("100000"))
        >>> display_statistics_report(report)
    """
    if console is None:
        console = Console()

    if not report:
        console.print("[yellow]No statistics available[/yellow]")
        return

    console.print()

    for section, metrics in report.items():
        console.print(_create_section_table(section, metrics))
        console.print()
