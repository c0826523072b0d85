"""Market data contract consumed by the fill engine.

Public API:
    - ISecurity: Protocol for the security view
    - Security: Reference security view
    - MarketData / TradeBar / Tick: Snapshot union members
    - Resolution: Data resolution enum
"""

from quantsim.services.data.interface import ISecurity
from quantsim.services.data.models import (
    MarketData,
    MarketDataSnapshot,
    MarketDataType,
    Resolution,
    Security,
    Tick,
    TradeBar,
)

__all__ = [
    "ISecurity",
    "MarketData",
    "MarketDataSnapshot",
    "MarketDataType",
    "Resolution",
    "Security",
    "Tick",
    "TradeBar",
]
