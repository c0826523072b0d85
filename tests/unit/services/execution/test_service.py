"""Unit tests for TransactionModel."""

from datetime import datetime
from decimal import Decimal

import pytest

from quantsim.services.data.models import MarketData, Resolution, Security, Tick, TradeBar
from quantsim.services.execution import ITransactionModel, TransactionModel
from quantsim.services.execution.config import CommissionConfig, ExecutionConfig
from quantsim.services.execution.models import FillOutcome, Order, OrderDirection, OrderStatus


@pytest.fixture
def model() -> TransactionModel:
    return TransactionModel()


class TestTransactionModelFill:
    """Test fill outcomes end to end."""

    def test_satisfies_interface(self, model: TransactionModel) -> None:
        transaction_model: ITransactionModel = model

        assert callable(transaction_model.fill)
        assert callable(transaction_model.get_order_fee)

    def test_limit_buy_filled_against_bar(self, model: TransactionModel, minute_security: Security) -> None:
        # Arrange
        order = Order.limit_order("EURUSD", OrderDirection.BUY, Decimal("10000"), Decimal("1.3550"))

        # Act
        event = model.fill(minute_security, order)

        # Assert
        assert event.outcome == FillOutcome.FILLED
        assert event.status == OrderStatus.FILLED
        assert event.order_id == order.order_id
        assert event.fill_quantity == Decimal("10000")
        assert event.fill_price == Decimal("1.3550")
        assert event.order_fee == Decimal("0")

    def test_fill_does_not_mutate_order(self, model: TransactionModel, minute_security: Security) -> None:
        order = Order.limit_order("EURUSD", OrderDirection.BUY, Decimal("10000"), Decimal("1.3550"))

        model.fill(minute_security, order)

        assert order.status == OrderStatus.SUBMITTED
        assert order.price == Decimal("1.3550")

    def test_accepts_order_request(self, model: TransactionModel, minute_security: Security) -> None:
        request = Order.market_order("EURUSD", OrderDirection.SELL, Decimal("10000")).to_request()

        event = model.fill(minute_security, request)

        assert event.outcome == FillOutcome.FILLED

    def test_market_buy_never_below_price(self, model: TransactionModel, minute_security: Security) -> None:
        event = model.fill(minute_security, Order.market_order("EURUSD", OrderDirection.BUY, Decimal("10000")))

        assert event.fill_price >= minute_security.price
        assert event.fill_price == Decimal("1.3571") + Decimal("1.3571") * Decimal("0.0001")

    def test_market_sell_never_above_price(self, model: TransactionModel, minute_security: Security) -> None:
        event = model.fill(minute_security, Order.market_order("EURUSD", OrderDirection.SELL, Decimal("10000")))

        assert event.fill_price <= minute_security.price

    def test_market_fill_at_price_without_slippage(self, model: TransactionModel) -> None:
        """Hourly data carries no slippage: fill price equals the security price."""
        data = MarketData(time=datetime(2013, 10, 7, 9), value=Decimal("1.3571"))
        security = Security(symbol="EURUSD", price=Decimal("1.3571"), resolution=Resolution.HOUR, last_data=data)

        for direction in OrderDirection:
            event = model.fill(security, Order.market_order("EURUSD", direction, Decimal("10000")))
            assert event.fill_price == Decimal("1.3571")

    def test_not_filled_keeps_status(self, model: TransactionModel, minute_security: Security) -> None:
        order = Order.limit_order("EURUSD", OrderDirection.BUY, Decimal("10000"), Decimal("1.3500"))

        event = model.fill(minute_security, order)

        assert event.outcome == FillOutcome.NOT_FILLED
        assert event.status == OrderStatus.SUBMITTED
        assert event.fill_quantity == Decimal("0")

    def test_canceled_order_reports_canceled_status(self, model: TransactionModel, minute_security: Security) -> None:
        order = Order.market_order("EURUSD", OrderDirection.BUY, Decimal("10000"))
        order.cancel()

        event = model.fill(minute_security, order)

        assert event.outcome == FillOutcome.NOT_FILLED
        assert event.status == OrderStatus.CANCELED
        assert event.fill_quantity == Decimal("0")
        assert event.reason == "Order canceled"


class TestTransactionModelDataUnavailable:
    """Test faults reported as DATA_UNAVAILABLE events."""

    def test_minute_market_order_without_bar(self, model: TransactionModel) -> None:
        security = Security(symbol="EURUSD", price=Decimal("1.3571"), resolution=Resolution.MINUTE)
        order = Order.market_order("EURUSD", OrderDirection.BUY, Decimal("10000"))

        event = model.fill(security, order)

        assert event.outcome == FillOutcome.DATA_UNAVAILABLE
        assert event.status == OrderStatus.SUBMITTED
        assert event.fill_quantity == Decimal("0")
        assert "No market data" in event.reason

    def test_tick_market_order_with_bar(self, model: TransactionModel, minute_bar: TradeBar) -> None:
        security = Security(
            symbol="EURUSD", price=Decimal("1.3571"), resolution=Resolution.TICK, last_data=minute_bar
        )

        event = model.fill(security, Order.market_order("EURUSD", OrderDirection.BUY, Decimal("10000")))

        assert event.outcome == FillOutcome.DATA_UNAVAILABLE

    def test_tick_market_order_without_price(self, model: TransactionModel, quote: Tick) -> None:
        security = Security(symbol="EURUSD", price=Decimal("1.3571"), resolution=Resolution.TICK, last_data=quote)

        for direction in (OrderDirection.BUY, OrderDirection.SELL):
            event = model.fill(security, Order.market_order("EURUSD", direction, Decimal("1000")))

            assert event.outcome == FillOutcome.DATA_UNAVAILABLE
            assert event.fill_price == Decimal("0")
            assert "order price" in event.reason

    def test_limit_order_without_snapshot(self, model: TransactionModel) -> None:
        security = Security(symbol="EURUSD", price=Decimal("1.3571"), resolution=Resolution.DAILY)
        order = Order.limit_order("EURUSD", OrderDirection.SELL, Decimal("1"), Decimal("1.3600"))

        event = model.fill(security, order)

        assert event.outcome == FillOutcome.DATA_UNAVAILABLE

    def test_invalid_fill_price_is_reported(self, model: TransactionModel, bar_time: datetime) -> None:
        """Tick slippage larger than the price would make a negative sell fill."""
        quote = Tick(time=bar_time, bid_price=Decimal("0.5"), ask_price=Decimal("0.6"))
        security = Security(symbol="EURUSD", price=Decimal("0.5"), resolution=Resolution.TICK, last_data=quote)
        order = Order.market_order("EURUSD", OrderDirection.SELL, Decimal("1"), price=Decimal("5"))

        event = model.fill(security, order)

        assert event.outcome == FillOutcome.DATA_UNAVAILABLE
        assert event.reason.startswith("Fill evaluation failed")

    def test_security_fault_is_reported(self, model: TransactionModel) -> None:
        class DisconnectedSecurity:
            price = Decimal("1.3571")
            resolution = Resolution.MINUTE

            @property
            def symbol(self) -> str:
                raise RuntimeError("feed disconnected")

            def get_last_data(self) -> None:
                return None

        order = Order.market_order("EURUSD", OrderDirection.BUY, Decimal("1"))

        event = model.fill(DisconnectedSecurity(), order)

        assert event.outcome == FillOutcome.DATA_UNAVAILABLE
        assert event.reason == "Fill evaluation failed: feed disconnected"


class TestTransactionModelFees:
    """Test order fee reporting."""

    def test_default_fee_is_zero(self, model: TransactionModel) -> None:
        assert model.get_order_fee(Decimal("10000"), Decimal("1.3571")) == Decimal("0")

    def test_configured_fee_on_fill(self, minute_security: Security) -> None:
        model = TransactionModel(ExecutionConfig(commission=CommissionConfig(flat_fee=Decimal("2.50"))))
        order = Order.limit_order("EURUSD", OrderDirection.BUY, Decimal("10000"), Decimal("1.3550"))

        event = model.fill(minute_security, order)

        assert event.order_fee == Decimal("2.50")

    def test_fee_uses_absolute_quantity(self) -> None:
        model = TransactionModel(ExecutionConfig(commission=CommissionConfig(per_unit=Decimal("0.01"))))

        assert model.get_order_fee(Decimal("-100"), Decimal("1")) == Decimal("1")

    def test_no_fee_without_fill(self, minute_security: Security) -> None:
        model = TransactionModel(ExecutionConfig(commission=CommissionConfig(flat_fee=Decimal("2.50"))))
        order = Order.limit_order("EURUSD", OrderDirection.BUY, Decimal("10000"), Decimal("1.3500"))

        event = model.fill(minute_security, order)

        assert event.order_fee == Decimal("0")
