"""Transaction model implementation.

Simulates the fill of a single order against the latest market snapshot.
"""

from decimal import Decimal
from typing import Optional, Union

from quantsim.services.data.interface import ISecurity
from quantsim.services.execution.commission import CommissionCalculator
from quantsim.services.execution.config import ExecutionConfig
from quantsim.services.execution.fill_policy import FillPolicy
from quantsim.services.execution.models import (
    FillDecision,
    FillOutcome,
    MarketDataUnavailableError,
    Order,
    OrderEvent,
    OrderRequest,
    OrderStatus,
)
from quantsim.system import LoggerFactory

logger = LoggerFactory.get_logger()


class TransactionModel:
    """Fill simulation for market, limit and stop-market orders.

    Reads an immutable snapshot of the order and returns an OrderEvent.
    Does NOT modify the order - the caller applies the event with
    Order.apply().

    Every fault raised while evaluating an order (missing snapshot, wrong
    snapshot kind, invalid derived price) is logged and reported as a
    DATA_UNAVAILABLE event. Nothing propagates out of fill().

    Attributes:
        config: Execution configuration
        fill_policy: Fill evaluation logic
        commission_calculator: Order fee calculation

    Example:
        >>> model = TransactionModel()
        >>> order = Order.limit_order("EURUSD", OrderDirection.BUY, Decimal("10000"), Decimal("1.3550"))
        >>> event = model.fill(security, order)
        >>> if event.is_fill:
        ...     order.apply(event)
    """

    def __init__(self, config: Optional[ExecutionConfig] = None) -> None:
        """Initialize transaction model.

        Args:
            config: Execution configuration (defaults: resolution-based slippage, zero fee)
        """
        self.config = config or ExecutionConfig()
        self.fill_policy = FillPolicy(self.config)
        self.commission_calculator = CommissionCalculator(self.config.commission)

    def fill(self, security: ISecurity, order: Union[Order, OrderRequest]) -> OrderEvent:
        """Attempt to fill an order against the security's current state.

        Args:
            security: Security view with price, resolution and last snapshot
            order: Order (snapshotted, never mutated) or order snapshot

        Returns:
            OrderEvent with outcome FILLED, NOT_FILLED or DATA_UNAVAILABLE
        """
        request = order.to_request() if isinstance(order, Order) else order
        symbol: Optional[str] = None

        try:
            symbol = security.symbol
            decision = self.fill_policy.evaluate_order(security, request)
            event = self._to_event(request, decision)
        except MarketDataUnavailableError as e:
            logger.warning(
                "execution.fill.data_unavailable",
                order_id=request.order_id,
                symbol=symbol,
                order_type=request.order_type.value,
                error=str(e),
            )
            return OrderEvent.empty(request, FillOutcome.DATA_UNAVAILABLE, str(e))
        except Exception as e:
            logger.error(
                "execution.fill.failed",
                order_id=request.order_id,
                symbol=symbol,
                order_type=request.order_type.value,
                error=str(e),
                error_type=type(e).__name__,
            )
            return OrderEvent.empty(request, FillOutcome.DATA_UNAVAILABLE, f"Fill evaluation failed: {e}")

        logger.debug(
            "execution.fill.evaluated",
            order_id=request.order_id,
            symbol=symbol,
            order_type=request.order_type.value,
            direction=request.direction.value,
            outcome=event.outcome.value,
            fill_price=str(event.fill_price),
            fill_quantity=str(event.fill_quantity),
            slippage=str(decision.slippage),
            reason=decision.reason,
        )

        return event

    def get_order_fee(self, quantity: Decimal, price: Decimal) -> Decimal:
        """Fee charged for a fill of quantity at price.

        Args:
            quantity: Filled quantity (absolute)
            price: Fill price

        Returns:
            Order fee (zero under the default configuration)
        """
        return self.commission_calculator.calculate(abs(quantity), price)

    def _to_event(self, request: OrderRequest, decision: FillDecision) -> OrderEvent:
        """Convert a fill decision into the event returned to the caller."""
        if not decision.should_fill:
            return OrderEvent.empty(request, FillOutcome.NOT_FILLED, decision.reason)

        return OrderEvent(
            order_id=request.order_id,
            status=OrderStatus.FILLED,
            outcome=FillOutcome.FILLED,
            fill_quantity=decision.fill_quantity,
            fill_price=decision.fill_price,
            order_fee=self.get_order_fee(decision.fill_quantity, decision.fill_price),
            reason=decision.reason,
        )
