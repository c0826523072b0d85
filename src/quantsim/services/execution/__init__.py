"""Fill simulation engine.

Approximates how an order would have executed against the latest market
snapshot of a security. TransactionModel reads an order snapshot and returns
an OrderEvent without modifying the order, so the caller keeps ownership of
order state.

Public API:
    - ITransactionModel: Protocol defining the fill engine interface
    - TransactionModel: Main implementation
    - Order: Caller-owned order with apply()/cancel()
    - OrderRequest: Immutable order snapshot
    - OrderEvent: Immutable fill attempt outcome
    - FillOutcome: Filled / not filled / data unavailable
    - OrderType, OrderDirection, OrderStatus: Order enums
    - ExecutionConfig: Configuration for the fill engine
    - SlippageModel: Slippage model enum
    - ISlippageCalculator: Slippage estimator interface
    - SlippageCalculatorFactory: Factory for creating slippage estimators
"""

from quantsim.services.execution.commission import CommissionCalculator
from quantsim.services.execution.config import CommissionConfig, ExecutionConfig, SlippageConfig
from quantsim.services.execution.fill_policy import FillPolicy
from quantsim.services.execution.interface import ITransactionModel
from quantsim.services.execution.models import (
    FillDecision,
    FillOutcome,
    MarketDataUnavailableError,
    Order,
    OrderDirection,
    OrderEvent,
    OrderRequest,
    OrderStatus,
    OrderType,
)
from quantsim.services.execution.service import TransactionModel
from quantsim.services.execution.slippage import (
    FixedBpsSlippage,
    ISlippageCalculator,
    ResolutionSlippage,
    SlippageCalculatorFactory,
    SlippageModel,
)

__all__ = [
    "CommissionCalculator",
    "CommissionConfig",
    "ExecutionConfig",
    "FillDecision",
    "FillOutcome",
    "FillPolicy",
    "FixedBpsSlippage",
    "ISlippageCalculator",
    "ITransactionModel",
    "MarketDataUnavailableError",
    "Order",
    "OrderDirection",
    "OrderEvent",
    "OrderRequest",
    "OrderStatus",
    "OrderType",
    "ResolutionSlippage",
    "SlippageCalculatorFactory",
    "SlippageConfig",
    "SlippageModel",
    "TransactionModel",
]
