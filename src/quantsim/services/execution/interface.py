"""Transaction model interface (Protocol).

Defines the contract that all fill simulation implementations must satisfy.
"""

from decimal import Decimal
from typing import Protocol, Union

from quantsim.services.data.interface import ISecurity
from quantsim.services.execution.models import Order, OrderEvent, OrderRequest


class ITransactionModel(Protocol):
    """Fill simulation interface.

    Core responsibilities:
    - Decide whether an order fills against the latest snapshot
    - Estimate slippage for market orders
    - Report the order fee for a fill

    NOT responsible for:
    - Mutating orders (the caller applies the returned event)
    - Order lifecycle and persistence
    - Account bookkeeping
    """

    def fill(self, security: ISecurity, order: Union[Order, OrderRequest]) -> OrderEvent:
        """Attempt to fill an order.

        Fill rules by order type:

        Market Orders:
            - Always fill, full quantity
            - Price = security price + slippage (buy) / - slippage (sell)

        Stop-Market Orders:
            - Sell: fill when security price < stop
            - Buy: fill when security price > stop
            - Fill at the security price

        Limit Orders:
            - Buy: fill when bar low (or snapshot value) < limit
            - Sell: fill when bar high (or snapshot value) > limit
            - Fill at the limit price

        Canceled orders and unsupported order types never fill.

        Args:
            security: Security being traded
            order: Order or order snapshot

        Returns:
            OrderEvent describing the outcome
        """
        ...

    def get_order_fee(self, quantity: Decimal, price: Decimal) -> Decimal:
        """Fee for a fill of quantity at price."""
        ...
