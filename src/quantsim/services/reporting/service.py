"""Performance statistics engine.

Summarizes a closed-trade PnL ledger, an equity curve and a daily return
series into overall and per-year statistics.
"""

from decimal import Decimal
from typing import Optional, Union

from quantsim.libraries.performance.calculators import AnnualTradeCalculator
from quantsim.libraries.performance.config import StatisticsConfig
from quantsim.libraries.performance.metrics import (
    calculate_drawdown,
    calculate_profit_loss_ratio,
    calculate_sharpe_ratio,
    calculate_trade_frequency,
    mean,
    round_to_places,
    series_values,
)
from quantsim.libraries.performance.models import (
    PerformanceStatistics,
    StatisticsReport,
    TimeSeries,
    TradeFrequency,
)
from quantsim.services.reporting.formatters import format_statistics_report
from quantsim.system import LoggerFactory

logger = LoggerFactory.get_logger()


class StatisticsGenerator:
    """Statistics engine for a completed trade record.

    Stateless between calls: every invocation walks its inputs from scratch.

    Two entry points:
    - compute(): numeric PerformanceStatistics, raises on faults
    - generate(): formatted StatisticsReport, returns {} on any fault

    Attributes:
        config: Statistics configuration

    Example:
        >>> generator = StatisticsGenerator()
        >>> report = generator.generate(equity, profit_loss, performance, Decimal("100000"))
        >>> report["Overall"]["Sharpe Ratio"]
        '1.3'
    """

    def __init__(self, config: Optional[StatisticsConfig] = None) -> None:
        self.config = config or StatisticsConfig()

    def compute(
        self,
        equity: TimeSeries,
        profit_loss: TimeSeries,
        performance: TimeSeries,
        starting_cash: Decimal,
        fraction_of_years: Union[float, Decimal] = 1,
    ) -> PerformanceStatistics:
        """Compute the numeric statistics.

        Args:
            equity: Portfolio value keyed by timestamp
            profit_loss: Realized PnL of each closed trade keyed by close time
            performance: Daily fractional returns keyed by timestamp
            starting_cash: Cash at the start of the period
            fraction_of_years: Length of the period in years (1 = one year)

        Returns:
            PerformanceStatistics

        Raises:
            ArithmeticError: If starting cash or the running cash is zero
        """
        trades = AnnualTradeCalculator(starting_cash)
        for closed_at in sorted(profit_loss):
            trades.update(closed_at, profit_loss[closed_at])

        equity_values = series_values(equity)
        equity_net_profit = equity_values[-1] / starting_cash - 1 if equity_values else Decimal("0")
        annual_return = self._annual_return(equity_net_profit, fraction_of_years, trades)

        total_trades = trades.total_trades
        total_wins = trades.total_wins
        total_losses = trades.total_losses

        average_win = trades.win_total / total_wins if total_wins else Decimal("0")
        average_loss = trades.loss_total / total_losses if total_losses else Decimal("0")
        win_loss_ratio = abs(average_win / average_loss) if total_losses else Decimal("0")

        if total_trades:
            win_rate = round_to_places(Decimal(total_wins) / total_trades, 5)
            loss_rate = round_to_places(Decimal(total_losses) / total_trades, 5)
        else:
            win_rate = loss_rate = Decimal("0")

        frequency = TradeFrequency.DAILY
        if total_trades:
            if equity:
                timestamps = sorted(equity)
                frequency = calculate_trade_frequency(total_trades, timestamps[0], timestamps[-1])
            else:
                frequency = TradeFrequency.WEEKLY

        stats = PerformanceStatistics(
            total_trades=total_trades,
            total_wins=total_wins,
            total_losses=total_losses,
            average_win=average_win,
            average_loss=average_loss,
            win_loss_ratio=win_loss_ratio,
            win_rate=win_rate,
            loss_rate=loss_rate,
            equity_net_profit=equity_net_profit,
            trade_net_profit=trades.trade_net_profit,
            annual_return=annual_return,
            drawdown=calculate_drawdown(equity, self.config.drawdown_rounding),
            expectancy=win_rate * win_loss_ratio - loss_rate,
            sharpe_ratio=calculate_sharpe_ratio(performance, self.config.trading_days),
            profit_loss_ratio=calculate_profit_loss_ratio(average_win, average_loss),
            trade_frequency=frequency,
            annual=trades.years,
        )

        logger.debug(
            "statistics.compute.complete",
            total_trades=stats.total_trades,
            years=len(trades),
            equity_points=len(equity_values),
            net_profit=str(stats.equity_net_profit),
            trade_frequency=stats.trade_frequency.value,
        )

        return stats

    def generate(
        self,
        equity: TimeSeries,
        profit_loss: TimeSeries,
        performance: TimeSeries,
        starting_cash: Decimal,
        fraction_of_years: Union[float, Decimal] = 1,
    ) -> StatisticsReport:
        """Compute statistics and format them as a report.

        Any fault is logged and an empty report is returned; callers treat a
        report without an "Overall" section as "no statistics available".

        Args:
            equity: Portfolio value keyed by timestamp
            profit_loss: Realized PnL of each closed trade keyed by close time
            performance: Daily fractional returns keyed by timestamp
            starting_cash: Cash at the start of the period
            fraction_of_years: Length of the period in years (1 = one year)

        Returns:
            Section name -> metric name -> formatted value, or {} on failure
        """
        equity_points: Optional[int] = None
        trades: Optional[int] = None

        try:
            equity_points, trades = len(equity), len(profit_loss)
            stats = self.compute(equity, profit_loss, performance, starting_cash, fraction_of_years)
            return format_statistics_report(stats, annual_breakdown=self.config.annual_breakdown)
        except Exception as e:
            logger.error(
                "statistics.generate.failed",
                error=str(e),
                error_type=type(e).__name__,
                equity_points=equity_points,
                trades=trades,
            )
            return {}

    def _annual_return(
        self,
        equity_net_profit: Decimal,
        fraction_of_years: Union[float, Decimal],
        trades: AnnualTradeCalculator,
    ) -> Decimal:
        """Equity net profit per year, falling back to the mean per-year trade net profit."""
        try:
            years = Decimal(str(fraction_of_years))
            if years > 0:
                return equity_net_profit / years
            return equity_net_profit
        except ArithmeticError as e:
            logger.warning("statistics.annual_return.fallback", error=str(e), fraction_of_years=str(fraction_of_years))
            return mean([annual.net_profit for annual in trades.years])


def generate(
    equity: TimeSeries,
    profit_loss: TimeSeries,
    performance: TimeSeries,
    starting_cash: Decimal,
    fraction_of_years: Union[float, Decimal] = 1,
) -> StatisticsReport:
    """Generate a statistics report with the default configuration.

    Example:
        >>> report = generate({start: Decimal("100000")}, {}, {}, Decimal("100000"))
        >>> report["Overall"]["Net Profit"]
        '0%'
    """
    return StatisticsGenerator().generate(equity, profit_loss, performance, starting_cash, fraction_of_years)
