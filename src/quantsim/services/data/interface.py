"""Security view interface (Protocol).

Defines the read-only contract the fill engine needs from a security.
Any object with these members can be evaluated; `Security` is the
reference implementation.
"""

from decimal import Decimal
from typing import Optional, Protocol

from quantsim.services.data.models import MarketDataSnapshot, Resolution


class ISecurity(Protocol):
    """Read-only security view consumed by the fill engine."""

    @property
    def symbol(self) -> str:
        """Ticker symbol."""
        ...

    @property
    def price(self) -> Decimal:
        """Current reference price."""
        ...

    @property
    def resolution(self) -> Resolution:
        """Resolution of the data feeding this security."""
        ...

    def get_last_data(self) -> Optional[MarketDataSnapshot]:
        """Most recent market snapshot, or None."""
        ...
