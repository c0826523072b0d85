"""Performance statistics library.

1. **Models** (`models.py`): Pydantic data structures
   - AnnualTradeStats: Per-year closed-trade aggregates
   - PerformanceStatistics: Unformatted numbers behind a report
   - TradeFrequency: Trading cadence label

2. **Metrics** (`metrics.py`): Pure calculation functions
   - Drawdown (single-pass worst peak-to-trough)
   - Sharpe ratio (annualized daily returns)
   - Trade frequency classification
   - Profit-loss ratio

3. **Calculators** (`calculators.py`): Stateful incremental calculators
   - AnnualTradeCalculator: Running-cash-normalized per-year trade stats

4. **Config** (`config.py`): StatisticsConfig (annualization, breakdown, rounding)

Usage:
    >>> from quantsim.libraries.performance.metrics import calculate_drawdown
    >>> drawdown = calculate_drawdown(equity, rounding=3)
"""

from quantsim.libraries.performance.calculators import AnnualTradeCalculator
from quantsim.libraries.performance.config import StatisticsConfig
from quantsim.libraries.performance.metrics import (
    calculate_drawdown,
    calculate_profit_loss_ratio,
    calculate_sharpe_ratio,
    calculate_trade_frequency,
    population_standard_deviation,
    round_to_places,
)
from quantsim.libraries.performance.models import (
    AnnualTradeStats,
    PerformanceStatistics,
    StatisticsReport,
    TimeSeries,
    TradeFrequency,
)

__all__ = [
    # Configuration
    "StatisticsConfig",
    # Models
    "AnnualTradeStats",
    "PerformanceStatistics",
    "StatisticsReport",
    "TimeSeries",
    "TradeFrequency",
    # Metrics (pure functions)
    "calculate_drawdown",
    "calculate_profit_loss_ratio",
    "calculate_sharpe_ratio",
    "calculate_trade_frequency",
    "population_standard_deviation",
    "round_to_places",
    # Calculators (stateful)
    "AnnualTradeCalculator",
]
