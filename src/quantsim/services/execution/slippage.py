"""Slippage estimation for market order fills.

Estimators return a non-negative slippage *magnitude*. The market fill policy
applies it with sign: buys pay more, sells receive less.
"""

from abc import ABC, abstractmethod
from decimal import Decimal
from enum import Enum

from quantsim.services.data.interface import ISecurity
from quantsim.services.data.models import Resolution, Tick
from quantsim.services.execution.models import MarketDataUnavailableError, OrderDirection, OrderRequest


class SlippageModel(str, Enum):
    """Slippage model types."""

    RESOLUTION_BASED = "resolution_based"
    FIXED_BPS = "fixed_bps"


class ISlippageCalculator(ABC):
    """Interface for slippage estimation strategies."""

    @abstractmethod
    def estimate(self, security: ISecurity, request: OrderRequest) -> Decimal:
        """Estimate slippage for filling this order now.

        Args:
            security: Security being traded
            request: Order being filled

        Returns:
            Non-negative slippage amount in price units
        """
        ...


class ResolutionSlippage(ISlippageCalculator):
    """Slippage approximation chosen by the security's data resolution.

    - SECOND / MINUTE: bar_rate * last snapshot value (1 bp by default). Only
      aggregated bars are known, so a flat fraction of price is assumed.
    - TICK: distance from the order price to the quote the order would hit
      (ask for a buy, bid for a sell), i.e. the real spread cost.
    - Anything else: 0.

    Attributes:
        bar_rate: Fraction of price charged at second/minute resolution
    """

    def __init__(self, bar_rate: Decimal = Decimal("0.0001")) -> None:
        """Initialize resolution-based slippage estimator.

        Args:
            bar_rate: Fraction of the last bar value (0.0001 = 1 bp)

        Raises:
            ValueError: If bar_rate is negative
        """
        if bar_rate < 0:
            raise ValueError(f"Bar rate cannot be negative, got {bar_rate}")
        self.bar_rate = bar_rate

    def estimate(self, security: ISecurity, request: OrderRequest) -> Decimal:
        """Estimate slippage from the latest snapshot.

        Raises:
            MarketDataUnavailableError: If the snapshot is missing, or is not a
                quote at tick resolution, or the order carries no
                reference price at tick resolution
        """
        resolution = security.resolution

        if resolution in (Resolution.MINUTE, Resolution.SECOND):
            last_data = security.get_last_data()
            if last_data is None:
                raise MarketDataUnavailableError(f"No market data for {security.symbol} at {resolution.value} resolution")
            return last_data.value * self.bar_rate

        if resolution == Resolution.TICK:
            last_tick = security.get_last_data()
            if not isinstance(last_tick, Tick):
                raise MarketDataUnavailableError(
                    f"Tick resolution requires a quote for {security.symbol}, got {type(last_tick).__name__}"
                )
            if request.price == 0:
                raise MarketDataUnavailableError(
                    f"Tick slippage for {security.symbol} needs the order price at submission, got 0"
                )
            if request.direction == OrderDirection.BUY:
                return abs(request.price - last_tick.ask_price)
            return abs(request.price - last_tick.bid_price)

        return Decimal("0")


class FixedBpsSlippage(ISlippageCalculator):
    """Fixed basis points slippage model.

    Slippage = security price * bps / 10000, regardless of resolution.

    Attributes:
        bps: Slippage in basis points (5 = 0.05%)
    """

    def __init__(self, bps: Decimal) -> None:
        """Initialize fixed BPS slippage estimator.

        Raises:
            ValueError: If bps is negative
        """
        if bps < 0:
            raise ValueError(f"BPS cannot be negative, got {bps}")
        self.bps = bps

    def estimate(self, security: ISecurity, request: OrderRequest) -> Decimal:
        return security.price * self.bps / Decimal("10000")


class SlippageCalculatorFactory:
    """Factory for creating slippage estimators from configuration."""

    @staticmethod
    def create(
        model: SlippageModel,
        **kwargs: Decimal | int,
    ) -> ISlippageCalculator:
        """Create slippage estimator from model type and parameters.

        Args:
            model: Slippage model type
            **kwargs: Model-specific parameters

        Returns:
            Configured slippage estimator

        Raises:
            ValueError: If model is unknown
            ValueError: If required parameters are missing

        Examples:
            >>> calc = SlippageCalculatorFactory.create(SlippageModel.RESOLUTION_BASED)
            >>> calc = SlippageCalculatorFactory.create(SlippageModel.FIXED_BPS, bps=Decimal("2"))
        """
        if model == SlippageModel.RESOLUTION_BASED:
            return ResolutionSlippage(bar_rate=Decimal(str(kwargs.get("bar_rate", "0.0001"))))

        elif model == SlippageModel.FIXED_BPS:
            if "bps" not in kwargs:
                raise ValueError("Fixed BPS model requires 'bps' parameter")
            return FixedBpsSlippage(bps=Decimal(str(kwargs["bps"])))

        else:
            raise ValueError(f"Unknown slippage model: {model}")
