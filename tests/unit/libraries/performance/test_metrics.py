"""Tests for performance metrics calculations."""

from datetime import datetime, timedelta
from decimal import Decimal

import pytest

from quantsim.libraries.performance.metrics import (
    calculate_drawdown,
    calculate_profit_loss_ratio,
    calculate_sharpe_ratio,
    calculate_trade_frequency,
    mean,
    population_standard_deviation,
    round_to_places,
    series_values,
)
from quantsim.libraries.performance.models import TradeFrequency

START = datetime(2013, 10, 7)


def daily_series(*values: str) -> dict[datetime, Decimal]:
    """Helper to build a series with one point per day."""
    return {START + timedelta(days=i): Decimal(value) for i, value in enumerate(values)}


class TestRounding:
    """Test round_to_places."""

    def test_fewer_places_unchanged(self):
        result = round_to_places(Decimal("0.5"), 3)

        assert result == Decimal("0.5")
        assert str(result) == "0.5"

    def test_rounds_extra_places(self):
        assert round_to_places(Decimal("0.123456"), 3) == Decimal("0.123")

    def test_bankers_rounding(self):
        assert round_to_places(Decimal("0.125"), 2) == Decimal("0.12")
        assert round_to_places(Decimal("0.135"), 2) == Decimal("0.14")

    def test_zero_places(self):
        assert str(round_to_places(Decimal("66.66700"), 0)) == "67"

    def test_non_finite_passthrough(self):
        assert round_to_places(Decimal("Infinity"), 2) == Decimal("Infinity")


class TestSeriesHelpers:
    """Test series and statistics helpers."""

    def test_series_values_in_time_order(self):
        series = {START + timedelta(days=2): Decimal("3"), START: Decimal("1"), START + timedelta(days=1): Decimal("2")}

        assert series_values(series) == [Decimal("1"), Decimal("2"), Decimal("3")]

    def test_mean_of_empty_is_zero(self):
        assert mean([]) == Decimal("0")

    def test_population_standard_deviation(self):
        assert population_standard_deviation([Decimal("1"), Decimal("3")]) == Decimal("1")
        assert population_standard_deviation([]) == Decimal("0")


class TestDrawdown:
    """Test single-pass drawdown."""

    def test_empty_series_is_zero(self):
        assert calculate_drawdown({}) == Decimal("0")

    def test_monotonic_series_is_zero(self):
        assert calculate_drawdown(daily_series("100", "110", "120")) == Decimal("0")

    def test_recovered_drop(self):
        assert calculate_drawdown(daily_series("100", "50", "100"), rounding=2) == Decimal("0.5")

    def test_worst_gap_kept_on_tie(self):
        """A later drop of the same size does not replace the earlier peak."""
        result = calculate_drawdown(daily_series("100", "120", "90", "130", "100"))

        # (120 - 90) / 120, not (130 - 100) / 130
        assert result == Decimal("0.25")

    def test_rounding(self):
        assert calculate_drawdown(daily_series("3", "2"), rounding=3) == Decimal("0.333")

    def test_unordered_keys_are_sorted(self):
        series = {
            START + timedelta(days=2): Decimal("100"),
            START: Decimal("100"),
            START + timedelta(days=1): Decimal("50"),
        }

        assert calculate_drawdown(series) == Decimal("0.5")

    def test_zero_peak_is_zero(self):
        assert calculate_drawdown(daily_series("0", "0")) == Decimal("0")


class TestSharpeRatio:
    """Test annualized Sharpe ratio."""

    def test_empty_series_is_zero(self):
        assert calculate_sharpe_ratio({}) == Decimal("0")

    def test_zero_variance_is_zero(self):
        assert calculate_sharpe_ratio(daily_series("0.01", "0.01", "0.01")) == Decimal("0")

    def test_above_ten_rounds_to_integer(self):
        # 0.02 * sqrt(252) / 0.01 = 31.75
        assert calculate_sharpe_ratio(daily_series("0.01", "0.03")) == Decimal("32")

    def test_small_ratio_rounds_to_one_place(self):
        assert calculate_sharpe_ratio(daily_series("0.01", "-0.01", "0.02")) == Decimal("8.5")

    def test_large_negative_ratio_rounds_to_integer(self):
        assert calculate_sharpe_ratio(daily_series("-0.01", "-0.03")) == Decimal("-32")

    def test_small_negative_ratio_rounds_to_one_place(self):
        assert calculate_sharpe_ratio(daily_series("-0.01", "0.01", "-0.02")) == Decimal("-8.5")

    def test_trading_days_annualization(self):
        assert calculate_sharpe_ratio(daily_series("0.01", "0.03"), trading_days=1) == Decimal("2")


class TestTradeFrequency:
    """Test trading cadence classification."""

    @pytest.mark.parametrize(
        "total_trades, expected",
        [
            (600, TradeFrequency.SECONDLY),
            (100, TradeFrequency.MINUTELY),
            (10, TradeFrequency.HOURLY),
            (1, TradeFrequency.DAILY),
        ],
    )
    def test_one_day_period(self, total_trades, expected):
        assert calculate_trade_frequency(total_trades, START, START + timedelta(days=1)) == expected

    def test_few_trades_is_weekly(self):
        assert calculate_trade_frequency(3, START, START + timedelta(days=10)) == TradeFrequency.WEEKLY

    def test_threshold_is_exclusive(self):
        """Exactly 200 trades per day is not Secondly."""
        assert calculate_trade_frequency(200, START, START + timedelta(days=1)) == TradeFrequency.MINUTELY

    def test_zero_length_period_is_weekly(self):
        assert calculate_trade_frequency(50, START, START) == TradeFrequency.WEEKLY


class TestProfitLossRatio:
    """Test profit-loss ratio."""

    def test_ratio(self):
        assert calculate_profit_loss_ratio(Decimal("0.02"), Decimal("-0.01")) == Decimal("2.00")

    def test_rounded_to_two_places(self):
        assert calculate_profit_loss_ratio(Decimal("0.01"), Decimal("-0.03")) == Decimal("0.33")

    def test_no_losses_sentinel(self):
        assert calculate_profit_loss_ratio(Decimal("0.02"), Decimal("0")) == Decimal("-1")
