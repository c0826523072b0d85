"""
Market Data Contract - Snapshot and Security Models.

This module defines the market data the fill engine reads. All snapshots are
produced by an external feed; the engine only ever looks at the most recent
one for a security.

Published Data Models:
- MarketData: Generic observation with a single value
- TradeBar: Aggregated OHLCV bar (Second/Minute/Hour/Daily resolution)
- Tick: Top-of-book quote (bid/ask) with optional last trade price
- Security: Read-only view of a security's price, resolution and last snapshot

Design Principles:
- Immutability: All snapshots frozen=True (observations are facts)
- Validation: Pydantic validation of price relationships
- Decimal prices throughout (no float rounding in fill prices)
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Literal, Optional, Union

from pydantic import BaseModel, Field, model_validator


class Resolution(str, Enum):
    """
    CONTRACT: Granularity of the market data feeding a security.

    Determines which slippage approximation applies:
    - TICK: bid/ask quotes are available, slippage is the spread cost
    - SECOND / MINUTE: aggregated bars, slippage is a flat fraction of price
    - HOUR / DAILY: no slippage model
    """

    TICK = "tick"
    SECOND = "second"
    MINUTE = "minute"
    HOUR = "hour"
    DAILY = "daily"


class MarketDataType(str, Enum):
    """CONTRACT: Discriminator for the snapshot union."""

    BASE = "base"
    TRADE_BAR = "trade_bar"
    TICK = "tick"


class MarketData(BaseModel):
    """
    CONTRACT: Generic market observation.

    Attributes:
        time: Observation timestamp
        value: Observed price

    Example:
        >>> data = MarketData(time=datetime(2013, 10, 7, 9, 31), value=Decimal("1.3571"))
    """

    data_type: Literal[MarketDataType.BASE] = MarketDataType.BASE
    time: datetime = Field(..., description="Observation timestamp")
    value: Decimal = Field(..., gt=0, description="Observed price")

    model_config = {"frozen": True}


class TradeBar(BaseModel):
    """
    CONTRACT: Aggregated OHLCV bar.

    The fill engine uses `low` and `high` to detect intrabar limit touches,
    and `value` (the close) as the reference price for bar slippage.

    Attributes:
        time: Bar timestamp
        open: Opening price
        high: High price (>= low)
        low: Low price (<= high)
        close: Closing price
        volume: Traded volume (may be 0 for FX bars built from quotes)

    Example:
        >>> bar = TradeBar(
        ...     time=datetime(2013, 10, 7, 9, 31),
        ...     open=Decimal("1.3570"),
        ...     high=Decimal("1.3575"),
        ...     low=Decimal("1.3566"),
        ...     close=Decimal("1.3571"),
        ... )
        >>> bar.value
        Decimal('1.3571')
    """

    data_type: Literal[MarketDataType.TRADE_BAR] = MarketDataType.TRADE_BAR
    time: datetime = Field(..., description="Bar timestamp")
    open: Decimal = Field(..., gt=0, description="Open price")
    high: Decimal = Field(..., gt=0, description="High price")
    low: Decimal = Field(..., gt=0, description="Low price")
    close: Decimal = Field(..., gt=0, description="Close price")
    volume: int = Field(default=0, ge=0, description="Volume")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_ohlc(self) -> "TradeBar":
        """
        Validate OHLC relationships.

        Raises:
            ValueError: If High < Low
        """
        if self.high < self.low:
            raise ValueError(f"[{self.time}] OHLC violation: High ({self.high}) < Low ({self.low})")
        return self

    @property
    def value(self) -> Decimal:
        """Last traded value of the bar (the close)."""
        return self.close


class Tick(BaseModel):
    """
    CONTRACT: Top-of-book quote.

    Attributes:
        time: Quote timestamp
        bid_price: Best bid
        ask_price: Best ask (>= bid)
        last_price: Last traded price, if the feed provides one

    Notes:
        - `value` is the last price when present, otherwise the bid/ask midpoint
    """

    data_type: Literal[MarketDataType.TICK] = MarketDataType.TICK
    time: datetime = Field(..., description="Quote timestamp")
    bid_price: Decimal = Field(..., gt=0, description="Best bid")
    ask_price: Decimal = Field(..., gt=0, description="Best ask")
    last_price: Optional[Decimal] = Field(default=None, gt=0, description="Last trade price (if any)")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_quote(self) -> "Tick":
        """Reject crossed quotes."""
        if self.ask_price < self.bid_price:
            raise ValueError(f"[{self.time}] Crossed quote: ask ({self.ask_price}) < bid ({self.bid_price})")
        return self

    @property
    def value(self) -> Decimal:
        """Last price, or the bid/ask midpoint when no trade was reported."""
        if self.last_price is not None:
            return self.last_price
        return (self.bid_price + self.ask_price) / Decimal("2")


MarketDataSnapshot = Union[MarketData, TradeBar, Tick]


class Security(BaseModel):
    """
    CONTRACT: Read-only view of a security at evaluation time.

    Attributes:
        symbol: Ticker symbol (e.g. "EURUSD")
        price: Current reference price
        resolution: Resolution of the data feeding this security
        last_data: Most recent snapshot, or None when the feed has not produced one

    Examples:
        >>> security = Security(
        ...     symbol="EURUSD",
        ...     price=Decimal("1.3571"),
        ...     resolution=Resolution.MINUTE,
        ...     last_data=bar,
        ... )
        >>> security.get_last_data() is bar
        True
    """

    symbol: str = Field(..., description="Ticker symbol")
    price: Decimal = Field(..., gt=0, description="Current reference price")
    resolution: Resolution = Field(default=Resolution.MINUTE, description="Data resolution")
    last_data: Optional[MarketDataSnapshot] = Field(default=None, description="Most recent market snapshot")

    model_config = {"frozen": True}

    def get_last_data(self) -> Optional[MarketDataSnapshot]:
        """Most recent market snapshot (None if the feed has not produced one)."""
        return self.last_data
