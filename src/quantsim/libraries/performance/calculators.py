"""Stateful performance calculators for incremental updates.

Calculators maintain state and update as closed trades arrive in time order.

Usage:
    >>> from quantsim.libraries.performance.calculators import AnnualTradeCalculator
    >>> from decimal import Decimal
    >>>
    >>> calc = AnnualTradeCalculator(starting_cash=Decimal("100000"))
    >>> calc.update(datetime(2013, 1, 2), Decimal("1000"))   # +1% of 100,000
    >>> calc.update(datetime(2013, 1, 3), Decimal("-505"))   # -0.5% of 101,000
    >>> calc.total_wins, calc.total_losses
    (1, 1)
"""

from datetime import datetime
from decimal import Decimal

from quantsim.libraries.performance.metrics import sum_decimals
from quantsim.libraries.performance.models import AnnualTradeStats


class AnnualTradeCalculator:
    """
    Buckets closed trades by calendar year.

    Each trade's PnL is normalized by the running cash *before* the trade,
    then added to the running cash. A PnL of exactly zero counts as a loss.
    Year buckets are created lazily, once, on the first trade of that year.
    """

    def __init__(self, starting_cash: Decimal):
        """
        Initialize annual trade calculator.

        Args:
            starting_cash: Cash before the first trade
        """
        self._running_cash = starting_cash
        self._years: dict[int, AnnualTradeStats] = {}

    def update(self, timestamp: datetime, profit_loss: Decimal) -> None:
        """
        Record one closed trade.

        Args:
            timestamp: Time the trade closed
            profit_loss: Realized PnL in currency units

        Raises:
            decimal.DivisionByZero: If the running cash is zero
        """
        year = timestamp.year
        stats = self._years.get(year)
        if stats is None:
            stats = AnnualTradeStats(year=year)
            self._years[year] = stats

        normalized = profit_loss / self._running_cash

        stats.trades += 1
        if profit_loss > 0:
            stats.wins += 1
            stats.win_total += normalized
        else:
            stats.losses += 1
            stats.loss_total += normalized

        self._running_cash += profit_loss

    @property
    def running_cash(self) -> Decimal:
        """Cash after all recorded trades."""
        return self._running_cash

    @property
    def years(self) -> list[AnnualTradeStats]:
        """Per-year aggregates in calendar order."""
        return [self._years[year] for year in sorted(self._years)]

    @property
    def total_trades(self) -> int:
        return sum(stats.trades for stats in self._years.values())

    @property
    def total_wins(self) -> int:
        return sum(stats.wins for stats in self._years.values())

    @property
    def total_losses(self) -> int:
        return sum(stats.losses for stats in self._years.values())

    @property
    def win_total(self) -> Decimal:
        """Sum of normalized wins across years."""
        return sum_decimals(stats.win_total for stats in self._years.values())

    @property
    def loss_total(self) -> Decimal:
        """Sum of normalized losses across years (signed)."""
        return sum_decimals(stats.loss_total for stats in self._years.values())

    @property
    def trade_net_profit(self) -> Decimal:
        """Sum of per-year normalized net returns."""
        return sum_decimals(stats.net_profit for stats in self._years.values())

    def __len__(self) -> int:
        """Number of calendar years with at least one trade."""
        return len(self._years)
