"""Performance statistics data models.

Pydantic models for the numeric results of the statistics engine.
The formatted report built from them is a plain nested dict of strings.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Mapping

from pydantic import BaseModel, Field

# Ordered mapping timestamp -> value (equity, closed-trade PnL, daily return)
TimeSeries = Mapping[datetime, Decimal]

# Section name ("Overall", "2013", ...) -> metric name -> formatted value
StatisticsReport = dict[str, dict[str, str]]


class TradeFrequency(str, Enum):
    """Coarse label for trading cadence, inferred from trades per day."""

    SECONDLY = "Secondly"
    MINUTELY = "Minutely"
    HOURLY = "Hourly"
    DAILY = "Daily"
    WEEKLY = "Weekly"


class AnnualTradeStats(BaseModel):
    """
    Closed-trade aggregates for one calendar year.

    Win and loss totals are sums of per-trade returns, each trade's PnL
    divided by the running cash before that trade. The loss total is
    stored signed (zero or negative).
    """

    year: int
    trades: int = 0
    wins: int = 0
    losses: int = 0
    win_total: Decimal = Decimal("0")
    loss_total: Decimal = Decimal("0")

    @property
    def net_profit(self) -> Decimal:
        """Normalized per-trade net return for the year."""
        return self.win_total + self.loss_total

    @property
    def average_win(self) -> Decimal:
        """Mean normalized win, 0 when there were no wins."""
        if self.wins == 0:
            return Decimal("0")
        return self.win_total / self.wins

    @property
    def average_loss(self) -> Decimal:
        """Mean normalized loss (signed), 0 when there were no losses."""
        if self.losses == 0:
            return Decimal("0")
        return self.loss_total / self.losses


class PerformanceStatistics(BaseModel):
    """
    Unformatted numbers behind a statistics report.

    Two return notions are kept apart:
    - equity_net_profit: last equity / starting cash - 1 (equity curve based)
    - trade_net_profit: sum of per-trade normalized returns across years
    """

    total_trades: int = 0
    total_wins: int = 0
    total_losses: int = 0
    average_win: Decimal = Decimal("0")
    average_loss: Decimal = Decimal("0")
    win_loss_ratio: Decimal = Decimal("0")
    win_rate: Decimal = Decimal("0")
    loss_rate: Decimal = Decimal("0")
    equity_net_profit: Decimal = Decimal("0")
    trade_net_profit: Decimal = Decimal("0")
    annual_return: Decimal = Decimal("0")
    drawdown: Decimal = Decimal("0")
    expectancy: Decimal = Decimal("0")
    sharpe_ratio: Decimal = Decimal("0")
    profit_loss_ratio: Decimal = Decimal("-1")
    trade_frequency: TradeFrequency = TradeFrequency.DAILY
    annual: list[AnnualTradeStats] = Field(default_factory=list)
