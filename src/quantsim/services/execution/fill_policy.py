"""Fill policy for order execution simulation.

Approximates whether and at what price an order fills against the latest
market snapshot of a security. Every order fills in full or not at all.
"""

from decimal import Decimal

from quantsim.services.data.interface import ISecurity
from quantsim.services.data.models import TradeBar
from quantsim.services.execution.config import ExecutionConfig
from quantsim.services.execution.models import (
    FillDecision,
    MarketDataUnavailableError,
    OrderDirection,
    OrderRequest,
    OrderType,
)
from quantsim.services.execution.slippage import ISlippageCalculator, SlippageCalculatorFactory, SlippageModel


class FillPolicy:
    """Fill policy for market, stop-market and limit orders.

    Rules:
    - Market: Always fills at security price + slippage (buy) / - slippage (sell)
    - Stop-market: Sell fills when price < stop, buy when price > stop,
      at the security price (a gap can skip past the stop)
    - Limit: Buy fills when the observed low < limit, sell when the observed
      high > limit, at the limit price
    - Canceled orders never fill

    Attributes:
        config: Execution configuration
        slippage_calculator: Estimator for market order slippage
    """

    def __init__(self, config: ExecutionConfig) -> None:
        self.config = config
        self.slippage_calculator: ISlippageCalculator = SlippageCalculatorFactory.create(
            SlippageModel(config.slippage.model), **config.slippage.params
        )

    def evaluate_order(self, security: ISecurity, request: OrderRequest) -> FillDecision:
        """Evaluate an order against the security's current state.

        Routes to the policy for the order type. Unsupported order types
        never fill.

        Args:
            security: Security view with price and last snapshot
            request: Snapshot of the order

        Returns:
            FillDecision with fill instructions

        Raises:
            MarketDataUnavailableError: If the policy needs a snapshot that is missing
        """
        if request.order_type == OrderType.MARKET:
            return self.market_fill(security, request)
        elif request.order_type == OrderType.STOP_MARKET:
            return self.stop_fill(security, request)
        elif request.order_type == OrderType.LIMIT:
            return self.limit_fill(security, request)

        return FillDecision(should_fill=False, reason=f"Unsupported order type: {request.order_type.value}")

    def market_fill(self, security: ISecurity, request: OrderRequest) -> FillDecision:
        """Fill a market order immediately at the security price plus slippage.

        Args:
            security: Security being traded
            request: Market order

        Returns:
            FillDecision (always fills unless canceled)
        """
        if request.is_canceled:
            return FillDecision(should_fill=False, reason="Order canceled")

        slippage = self.slippage_calculator.estimate(security, request)

        if request.direction == OrderDirection.BUY:
            fill_price = security.price + slippage
        else:
            fill_price = security.price - slippage

        return FillDecision(
            should_fill=True,
            fill_price=fill_price,
            fill_quantity=request.quantity,
            slippage=slippage,
            reason=f"Market {request.direction.value} filled",
        )

    def stop_fill(self, security: ISecurity, request: OrderRequest) -> FillDecision:
        """Check whether the security price has crossed the stop.

        Sell stop: triggers when price < stop (stop-loss)
        Buy stop: triggers when price > stop (breakout)

        Args:
            security: Security being traded
            request: Stop-market order

        Returns:
            FillDecision
        """
        if request.is_canceled:
            return FillDecision(should_fill=False, reason="Order canceled")

        if request.direction == OrderDirection.SELL:
            triggered = security.price < request.price
        else:
            triggered = security.price > request.price

        if not triggered:
            return FillDecision(
                should_fill=False,
                reason=f"{request.direction.value.capitalize()} stop not triggered "
                f"(price {security.price}, stop {request.price})",
            )

        return FillDecision(
            should_fill=True,
            fill_price=security.price,
            fill_quantity=request.quantity,
            reason=f"{request.direction.value.capitalize()} stop triggered and filled",
        )

    def limit_fill(self, security: ISecurity, request: OrderRequest) -> FillDecision:
        """Check whether the observed price range crossed the limit.

        Bar snapshots use low (buy) and high (sell) to catch intrabar
        touches; any other snapshot uses its single value for both sides.

        Args:
            security: Security being traded
            request: Limit order

        Returns:
            FillDecision

        Raises:
            MarketDataUnavailableError: If the security has no snapshot
        """
        if request.is_canceled:
            return FillDecision(should_fill=False, reason="Order canceled")

        min_price, max_price = self._observed_range(security)

        if request.direction == OrderDirection.BUY:
            triggered = min_price < request.price
            observed = min_price
        else:
            triggered = max_price > request.price
            observed = max_price

        if not triggered:
            return FillDecision(
                should_fill=False,
                reason=f"{request.direction.value.capitalize()} limit not touched "
                f"(observed {observed}, limit {request.price})",
            )

        return FillDecision(
            should_fill=True,
            fill_price=request.price,
            fill_quantity=request.quantity,
            reason=f"{request.direction.value.capitalize()} limit touched and filled",
        )

    def _observed_range(self, security: ISecurity) -> tuple[Decimal, Decimal]:
        """Lowest and highest price seen in the latest observation period."""
        market_data = security.get_last_data()
        if market_data is None:
            raise MarketDataUnavailableError(f"No market data for {security.symbol}")

        if isinstance(market_data, TradeBar):
            return market_data.low, market_data.high

        return market_data.value, market_data.value
