"""Performance metrics calculation functions.

Pure functions behind the statistics engine: drawdown, Sharpe ratio, trade
frequency and profit-loss ratio. Inputs are ordered series of Decimal values;
outputs are Decimal (or a TradeFrequency label).

Rounding is banker's rounding to *at most* N places: a value that already
has fewer decimal places is returned unchanged, never padded.

Usage:
    >>> from quantsim.libraries.performance import metrics
    >>> from decimal import Decimal
    >>>
    >>> metrics.calculate_profit_loss_ratio(Decimal("0.02"), Decimal("-0.01"))
    Decimal('2')
    >>> metrics.round_to_places(Decimal("0.123456"), 3)
    Decimal('0.123')
"""

from datetime import datetime
from decimal import Decimal
from typing import Iterable, Sequence

from quantsim.libraries.performance.models import TimeSeries, TradeFrequency
from quantsim.system import LoggerFactory

logger = LoggerFactory.get_logger()

# Average trades per day above which each label applies, checked in order
_FREQUENCY_THRESHOLDS: tuple[tuple[Decimal, TradeFrequency], ...] = (
    (Decimal("200"), TradeFrequency.SECONDLY),
    (Decimal("50"), TradeFrequency.MINUTELY),
    (Decimal("5"), TradeFrequency.HOURLY),
    (Decimal("0.75"), TradeFrequency.DAILY),
)

_SECONDS_PER_DAY = Decimal("86400")


def round_to_places(value: Decimal, places: int) -> Decimal:
    """
    Round to at most `places` decimal places (ROUND_HALF_EVEN).

    Args:
        value: Value to round
        places: Maximum number of decimal places

    Returns:
        Rounded value, unchanged if it already has `places` or fewer

    Example:
        >>> round_to_places(Decimal("0.5"), 3)
        Decimal('0.5')
        >>> round_to_places(Decimal("66.66700"), 0)
        Decimal('67')
    """
    if not value.is_finite():
        return value

    exponent = value.as_tuple().exponent
    if isinstance(exponent, int) and exponent >= -places:
        return value

    return value.quantize(Decimal(1).scaleb(-places))


def series_values(series: TimeSeries) -> list[Decimal]:
    """Values of a timestamp-keyed series in chronological order."""
    return [series[timestamp] for timestamp in sorted(series)]


def mean(values: Sequence[Decimal]) -> Decimal:
    """Arithmetic mean, 0 for an empty sequence."""
    if not values:
        return Decimal("0")
    return sum(values, Decimal("0")) / len(values)


def population_standard_deviation(values: Sequence[Decimal]) -> Decimal:
    """
    Population standard deviation (divides by N).

    Args:
        values: Sample values

    Returns:
        Standard deviation, 0 for an empty sequence

    Example:
        >>> population_standard_deviation([Decimal("1"), Decimal("3")])
        Decimal('1')
    """
    if not values:
        return Decimal("0")

    average = mean(values)
    variance = sum(((v - average) ** 2 for v in values), Decimal("0")) / len(values)
    return variance.sqrt()


def calculate_trade_frequency(total_trades: int | Decimal, start: datetime, end: datetime) -> TradeFrequency:
    """
    Classify trading cadence from the average number of trades per day.

    Thresholds (trades per day): > 200 Secondly, > 50 Minutely, > 5 Hourly,
    > 0.75 Daily, otherwise Weekly. A zero-length period is Weekly.

    Args:
        total_trades: Number of closed trades in the period
        start: Start of the period
        end: End of the period

    Returns:
        TradeFrequency label

    Example:
        >>> calculate_trade_frequency(600, datetime(2024, 1, 1), datetime(2024, 1, 2))
        <TradeFrequency.SECONDLY: 'Secondly'>
    """
    period_days = Decimal((end - start).total_seconds()) / _SECONDS_PER_DAY
    if period_days == 0:
        return TradeFrequency.WEEKLY

    average_daily = Decimal(total_trades) / period_days

    for threshold, frequency in _FREQUENCY_THRESHOLDS:
        if average_daily > threshold:
            return frequency

    return TradeFrequency.WEEKLY


def calculate_drawdown(equity: TimeSeries, rounding: int = 2) -> Decimal:
    """
    Calculate the worst peak-to-trough decline in a single forward pass.

    Tracks the running maximum (a value equal to the maximum becomes the new
    maximum) and records a new worst pair whenever the gap from the running
    maximum to the current value exceeds the worst gap seen so far.

    Args:
        equity: Equity values keyed by timestamp
        rounding: Maximum decimal places of the result

    Returns:
        Drawdown as a fraction of the peak (0.5 = 50%), 0 for an empty
        series or a zero peak

    Example:
        >>> from datetime import date
        >>> curve = {date(2024, 1, 1): Decimal("100"), date(2024, 1, 2): Decimal("50"),
        ...          date(2024, 1, 3): Decimal("100")}
        >>> calculate_drawdown(curve)
        Decimal('0.5')
    """
    prices = series_values(equity)
    if not prices:
        return Decimal("0")

    price_maximum = 0
    previous_maximum = 0
    previous_minimum = 0

    for index, price in enumerate(prices):
        if price >= prices[price_maximum]:
            price_maximum = index
        elif (prices[price_maximum] - price) > (prices[previous_maximum] - prices[previous_minimum]):
            previous_maximum = price_maximum
            previous_minimum = index

    peak = prices[previous_maximum]
    if peak == 0:
        logger.warning("statistics.drawdown.zero_peak", points=len(prices))
        return Decimal("0")

    return round_to_places((peak - prices[previous_minimum]) / peak, rounding)


def calculate_sharpe_ratio(performance: TimeSeries, trading_days: int = 252) -> Decimal:
    """
    Calculate the annualized Sharpe ratio of a daily return series.

    Sharpe = mean daily return * sqrt(trading_days) / population std dev.
    Rounded to 0 places when its magnitude is above 10, otherwise to 1 place.

    Args:
        performance: Daily fractional returns keyed by timestamp
        trading_days: Trading days per year used to annualize

    Returns:
        Sharpe ratio, 0 for an empty series or zero variance

    Example:
        >>> returns = {date(2024, 1, d): Decimal(r) for d, r in [(1, "0.01"), (2, "0.03")]}
        >>> calculate_sharpe_ratio(returns)
        Decimal('32')
    """
    daily_performance = series_values(performance)
    if not daily_performance:
        return Decimal("0")

    average_daily_performance = mean(daily_performance)
    standard_deviation = population_standard_deviation(daily_performance)

    logger.debug(
        "statistics.sharpe.inputs",
        average_daily_performance=str(average_daily_performance),
        standard_deviation=str(standard_deviation),
        points=len(daily_performance),
    )

    sharpe = Decimal("0")
    if standard_deviation > 0:
        sharpe = average_daily_performance * Decimal(trading_days).sqrt() / standard_deviation

    logger.debug("statistics.sharpe.result", sharpe_ratio=str(sharpe))

    if abs(sharpe) > 10:
        return round_to_places(sharpe, 0)
    if sharpe != 0:
        return round_to_places(sharpe, 1)
    return sharpe


def calculate_profit_loss_ratio(average_win: Decimal, average_loss: Decimal) -> Decimal:
    """
    Ratio of average win to the magnitude of average loss.

    Args:
        average_win: Mean normalized win
        average_loss: Mean normalized loss (signed)

    Returns:
        Ratio rounded to at most 2 places, or -1 when there is no average loss

    Example:
        >>> calculate_profit_loss_ratio(Decimal("0.02"), Decimal("-0.01"))
        Decimal('2')
        >>> calculate_profit_loss_ratio(Decimal("0.02"), Decimal("0"))
        Decimal('-1')
    """
    if average_loss == 0:
        return Decimal("-1")

    return round_to_places(average_win / abs(average_loss), 2)


def sum_decimals(values: Iterable[Decimal]) -> Decimal:
    """Sum that stays Decimal for an empty iterable."""
    return sum(values, Decimal("0"))
