"""Order and OrderEvent models for the fill engine.

This module defines the core data models for fill simulation:
- Order: Mutable order owned by the caller (order management)
- OrderRequest: Immutable snapshot of the fields a fill decision reads
- OrderEvent: Immutable outcome of one fill attempt
- FillDecision: Internal decision data produced by a fill policy
- Enums: OrderType, OrderDirection, OrderStatus, FillOutcome

The engine never mutates an order. It reads an OrderRequest and returns an
OrderEvent; the caller applies the event to the order it owns with
Order.apply().
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from uuid import uuid4


class MarketDataUnavailableError(Exception):
    """Raised when a security has no usable market snapshot for a fill evaluation."""


class OrderType(str, Enum):
    """Order type.

    MARKET: Fill immediately at the security price plus slippage
    LIMIT: Fill at the limit price once the observed range crosses it
    STOP_MARKET: Fill at the security price once it crosses the stop
    STOP_LIMIT: Accepted by order management, no fill model
    """

    MARKET = "market"
    LIMIT = "limit"
    STOP_MARKET = "stop_market"
    STOP_LIMIT = "stop_limit"


class OrderDirection(str, Enum):
    """Order direction (buy or sell)."""

    BUY = "buy"
    SELL = "sell"


class OrderStatus(str, Enum):
    """Order states visible to the fill engine.

    State Transitions (per fill attempt):
        SUBMITTED → FILLED
        SUBMITTED → PARTIALLY_FILLED
        SUBMITTED → CANCELED
        CANCELED is absorbing: the engine never transitions it
    """

    SUBMITTED = "submitted"
    PARTIALLY_FILLED = "partially_filled"
    FILLED = "filled"
    CANCELED = "canceled"


class FillOutcome(str, Enum):
    """Result kind of a fill attempt.

    FILLED: Conditions met, fill details are set
    NOT_FILLED: Evaluated, conditions not met (or order canceled / unsupported)
    DATA_UNAVAILABLE: Could not evaluate (missing or malformed market data)
    """

    FILLED = "filled"
    NOT_FILLED = "not_filled"
    DATA_UNAVAILABLE = "data_unavailable"


@dataclass(frozen=True)
class OrderRequest:
    """Immutable snapshot of an order's decision-relevant fields.

    Attributes:
        order_id: Originating order identifier
        order_type: Market, limit, stop-market (or unsupported stop-limit)
        direction: Buy or sell
        quantity: Requested quantity (positive)
        price: Limit or stop trigger price (market orders: last known price, may be 0)
        status: Status before this fill attempt
    """

    order_id: str
    order_type: OrderType
    direction: OrderDirection
    quantity: Decimal
    price: Decimal = Decimal("0")
    status: OrderStatus = OrderStatus.SUBMITTED

    @property
    def is_canceled(self) -> bool:
        """True if the order was canceled before this attempt."""
        return self.status == OrderStatus.CANCELED


@dataclass
class Order:
    """Mutable order owned by order management.

    Attributes:
        symbol: Ticker symbol
        order_type: Market, limit or stop-market
        direction: Buy or sell
        quantity: Requested quantity (positive)
        price: Limit/stop price; replaced by the fill price once filled
        status: Current status
        created_at: Order creation timestamp
        order_id: Unique identifier (auto-generated UUID)

    Examples:
        >>> order = Order.limit_order("EURUSD", OrderDirection.BUY, Decimal("10000"), Decimal("1.3550"))
        >>> event = model.fill(security, order)
        >>> order.apply(event)
        >>> order.status
        <OrderStatus.FILLED: 'filled'>
    """

    symbol: str
    order_type: OrderType
    direction: OrderDirection
    quantity: Decimal
    price: Decimal = field(default_factory=lambda: Decimal("0"))
    status: OrderStatus = OrderStatus.SUBMITTED
    created_at: datetime = field(default_factory=datetime.now)
    order_id: str = field(default_factory=lambda: str(uuid4()))

    def __post_init__(self) -> None:
        """Validate order on creation."""
        if self.quantity <= 0:
            raise ValueError(f"Order quantity must be positive, got {self.quantity}")

        if self.price < 0:
            raise ValueError(f"Order price cannot be negative, got {self.price}")

        if self.order_type in (OrderType.LIMIT, OrderType.STOP_MARKET) and self.price == 0:
            raise ValueError(f"{self.order_type.value} orders require a trigger price")

    @classmethod
    def market_order(
        cls,
        symbol: str,
        direction: OrderDirection,
        quantity: Decimal,
        price: Decimal = Decimal("0"),
        order_id: Optional[str] = None,
    ) -> "Order":
        """Create a market order.

        Args:
            symbol: Ticker symbol
            direction: Buy or sell
            quantity: Quantity to trade
            price: Last known price at submission (used by tick slippage)
            order_id: Optional order ID (auto-generated if None)
        """
        return cls(
            symbol=symbol,
            order_type=OrderType.MARKET,
            direction=direction,
            quantity=quantity,
            price=price,
            order_id=order_id or str(uuid4()),
        )

    @classmethod
    def limit_order(
        cls,
        symbol: str,
        direction: OrderDirection,
        quantity: Decimal,
        limit_price: Decimal,
        order_id: Optional[str] = None,
    ) -> "Order":
        """Create a limit order."""
        return cls(
            symbol=symbol,
            order_type=OrderType.LIMIT,
            direction=direction,
            quantity=quantity,
            price=limit_price,
            order_id=order_id or str(uuid4()),
        )

    @classmethod
    def stop_market_order(
        cls,
        symbol: str,
        direction: OrderDirection,
        quantity: Decimal,
        stop_price: Decimal,
        order_id: Optional[str] = None,
    ) -> "Order":
        """Create a stop-market order."""
        return cls(
            symbol=symbol,
            order_type=OrderType.STOP_MARKET,
            direction=direction,
            quantity=quantity,
            price=stop_price,
            order_id=order_id or str(uuid4()),
        )

    def to_request(self) -> OrderRequest:
        """Snapshot the fields a fill decision reads."""
        return OrderRequest(
            order_id=self.order_id,
            order_type=self.order_type,
            direction=self.direction,
            quantity=self.quantity,
            price=self.price,
            status=self.status,
        )

    def apply(self, event: "OrderEvent") -> None:
        """Apply a fill attempt outcome to this order.

        Only filled events change the order: status becomes the event status
        and price becomes the fill price. Other outcomes leave the order as is.

        Raises:
            ValueError: If the event belongs to another order
            ValueError: If the order is canceled and the event is a fill
        """
        if event.order_id != self.order_id:
            raise ValueError(f"Event for order {event.order_id} cannot be applied to order {self.order_id}")

        if not event.is_fill:
            return

        if self.status == OrderStatus.CANCELED:
            raise ValueError("Cannot fill canceled order")

        self.status = event.status
        self.price = event.fill_price

    def cancel(self) -> None:
        """Cancel the order.

        Raises:
            ValueError: If order already filled
        """
        if self.status == OrderStatus.FILLED:
            raise ValueError("Cannot cancel filled order")

        self.status = OrderStatus.CANCELED


@dataclass(frozen=True)
class OrderEvent:
    """Immutable outcome of a fill attempt.

    Created fresh per attempt; the caller applies it to its order and ledger.

    Attributes:
        order_id: Originating order ID
        status: Resulting status (unchanged unless filled)
        outcome: Filled, not filled, or data unavailable
        fill_quantity: Quantity filled (0 unless filled)
        fill_price: Execution price (0 unless filled)
        order_fee: Fee charged for the fill
        reason: Human-readable explanation

    Example:
        >>> event = OrderEvent.empty(request, FillOutcome.NOT_FILLED, "Buy stop not triggered")
        >>> event.fill_quantity
        Decimal('0')
    """

    order_id: str
    status: OrderStatus
    outcome: FillOutcome
    fill_quantity: Decimal = Decimal("0")
    fill_price: Decimal = Decimal("0")
    order_fee: Decimal = Decimal("0")
    reason: str = ""

    def __post_init__(self) -> None:
        """Validate event on creation."""
        if self.outcome == FillOutcome.FILLED:
            if self.fill_quantity <= 0:
                raise ValueError(f"Fill quantity must be positive for a fill, got {self.fill_quantity}")
            if self.fill_price <= 0:
                raise ValueError(f"Fill price must be positive for a fill, got {self.fill_price}")
        elif self.fill_quantity != 0:
            raise ValueError(f"Fill quantity must be 0 when not filled, got {self.fill_quantity}")

        if self.order_fee < 0:
            raise ValueError(f"Order fee cannot be negative, got {self.order_fee}")

    @classmethod
    def empty(cls, request: OrderRequest, outcome: FillOutcome, reason: str) -> "OrderEvent":
        """Event carrying the order's pre-fill status and no fill."""
        return cls(order_id=request.order_id, status=request.status, outcome=outcome, reason=reason)

    @property
    def is_fill(self) -> bool:
        """True if this attempt produced a fill."""
        return self.outcome == FillOutcome.FILLED


@dataclass(frozen=True)
class FillDecision:
    """Internal decision data for fill evaluation.

    Produced by FillPolicy, turned into an OrderEvent by TransactionModel.

    Attributes:
        should_fill: Whether the order fills
        reason: Human-readable explanation
        fill_price: Price to fill at (if should_fill=True)
        fill_quantity: Quantity to fill (if should_fill=True)
        slippage: Slippage magnitude applied to the fill price
    """

    should_fill: bool
    reason: str
    fill_price: Decimal = Decimal("0")
    fill_quantity: Decimal = Decimal("0")
    slippage: Decimal = Decimal("0")

    def __post_init__(self) -> None:
        """Validate fill decision."""
        if self.should_fill:
            if self.fill_price <= 0:
                raise ValueError(f"Fill price must be positive when should_fill=True, got {self.fill_price}")

            if self.fill_quantity <= 0:
                raise ValueError(f"Fill quantity must be positive when should_fill=True, got {self.fill_quantity}")
