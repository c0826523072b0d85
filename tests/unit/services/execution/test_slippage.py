"""Tests for slippage models."""

from datetime import datetime
from decimal import Decimal

import pytest

from quantsim.services.data.models import MarketData, Resolution, Security, Tick, TradeBar
from quantsim.services.execution.models import MarketDataUnavailableError, Order, OrderDirection
from quantsim.services.execution.slippage import (
    FixedBpsSlippage,
    ResolutionSlippage,
    SlippageCalculatorFactory,
    SlippageModel,
)


def make_request(direction: OrderDirection = OrderDirection.BUY, price: Decimal = Decimal("1.3571")):
    """Helper to snapshot a market order."""
    return Order.market_order("EURUSD", direction, Decimal("10000"), price=price).to_request()


class TestResolutionSlippage:
    """Test resolution-based slippage."""

    @pytest.mark.parametrize("resolution", [Resolution.MINUTE, Resolution.SECOND])
    def test_bar_resolution_is_fraction_of_last_value(self, resolution: Resolution, minute_bar: TradeBar) -> None:
        # Arrange
        security = Security(symbol="EURUSD", price=Decimal("1.3571"), resolution=resolution, last_data=minute_bar)
        calc = ResolutionSlippage()

        # Act
        slippage = calc.estimate(security, make_request())

        # Assert: 1 bp of the bar close
        assert slippage == Decimal("1.3571") * Decimal("0.0001")

    def test_bar_resolution_without_data_raises(self) -> None:
        security = Security(symbol="EURUSD", price=Decimal("1.3571"), resolution=Resolution.MINUTE)

        with pytest.raises(MarketDataUnavailableError, match="No market data"):
            ResolutionSlippage().estimate(security, make_request())

    def test_tick_buy_uses_ask(self, quote: Tick) -> None:
        security = Security(symbol="EURUSD", price=Decimal("1.3571"), resolution=Resolution.TICK, last_data=quote)

        slippage = ResolutionSlippage().estimate(security, make_request(OrderDirection.BUY, Decimal("1.3570")))

        assert slippage == Decimal("0.0002")

    def test_tick_sell_uses_bid(self, quote: Tick) -> None:
        security = Security(symbol="EURUSD", price=Decimal("1.3571"), resolution=Resolution.TICK, last_data=quote)

        slippage = ResolutionSlippage().estimate(security, make_request(OrderDirection.SELL, Decimal("1.3570")))

        assert slippage == Decimal("0.0001")

    def test_tick_without_order_price_raises(self, quote: Tick) -> None:
        security = Security(symbol="EURUSD", price=Decimal("1.3571"), resolution=Resolution.TICK, last_data=quote)
        request = Order.market_order("EURUSD", OrderDirection.SELL, Decimal("1000")).to_request()

        with pytest.raises(MarketDataUnavailableError, match="order price"):
            ResolutionSlippage().estimate(security, request)

    def test_tick_resolution_with_bar_raises(self, minute_bar: TradeBar) -> None:
        security = Security(
            symbol="EURUSD", price=Decimal("1.3571"), resolution=Resolution.TICK, last_data=minute_bar
        )

        with pytest.raises(MarketDataUnavailableError, match="requires a quote"):
            ResolutionSlippage().estimate(security, make_request())

    @pytest.mark.parametrize("resolution", [Resolution.HOUR, Resolution.DAILY])
    def test_coarse_resolution_has_no_slippage(self, resolution: Resolution) -> None:
        data = MarketData(time=datetime(2013, 10, 7), value=Decimal("1.3571"))
        security = Security(symbol="EURUSD", price=Decimal("1.3571"), resolution=resolution, last_data=data)

        assert ResolutionSlippage().estimate(security, make_request()) == Decimal("0")

    def test_negative_bar_rate_raises(self) -> None:
        with pytest.raises(ValueError, match="Bar rate cannot be negative"):
            ResolutionSlippage(bar_rate=Decimal("-0.0001"))


class TestFixedBpsSlippage:
    """Test fixed BPS slippage model."""

    def test_fraction_of_security_price(self) -> None:
        security = Security(symbol="EURUSD", price=Decimal("2.0000"), resolution=Resolution.DAILY)

        slippage = FixedBpsSlippage(bps=Decimal("5")).estimate(security, make_request())

        assert slippage == Decimal("0.001")

    def test_negative_bps_raises(self) -> None:
        with pytest.raises(ValueError, match="BPS cannot be negative"):
            FixedBpsSlippage(bps=Decimal("-5"))


class TestSlippageCalculatorFactory:
    """Test factory creation from configuration."""

    def test_create_resolution_based_default_rate(self) -> None:
        calc = SlippageCalculatorFactory.create(SlippageModel.RESOLUTION_BASED)

        assert isinstance(calc, ResolutionSlippage)
        assert calc.bar_rate == Decimal("0.0001")

    def test_create_fixed_bps(self) -> None:
        calc = SlippageCalculatorFactory.create(SlippageModel.FIXED_BPS, bps=Decimal("2"))

        assert isinstance(calc, FixedBpsSlippage)
        assert calc.bps == Decimal("2")

    def test_fixed_bps_requires_bps(self) -> None:
        with pytest.raises(ValueError, match="requires 'bps'"):
            SlippageCalculatorFactory.create(SlippageModel.FIXED_BPS)
