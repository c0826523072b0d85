"""Order fee calculation.

Calculates the fee for a fill based on configuration.
"""

from decimal import Decimal

from quantsim.services.execution.config import CommissionConfig


class CommissionCalculator:
    """Calculates order fees for fills.

    Supports two commission models:
    1. Per-unit: max(qty * per_unit, minimum)
    2. Per-trade: flat_fee OR percentage * notional

    Commission cap is applied after model calculation and minimum.

    Attributes:
        config: Commission configuration
    """

    def __init__(self, config: CommissionConfig) -> None:
        self.config = config

    def calculate(self, quantity: Decimal, price: Decimal | None = None) -> Decimal:
        """Calculate the fee for a fill.

        Args:
            quantity: Quantity filled (absolute)
            price: Fill price (required for the percentage model)

        Returns:
            Commission amount

        Raises:
            ValueError: If quantity or price is negative
            ValueError: If price is required but not provided

        Examples:
            >>> calc = CommissionCalculator(CommissionConfig(per_unit=Decimal("0.005"), minimum=Decimal("1.00")))
            >>> calc.calculate(Decimal("500"))
            Decimal('2.500')

            >>> calc = CommissionCalculator(CommissionConfig(percentage=Decimal("0.001")))
            >>> calc.calculate(Decimal("100"), Decimal("50.00"))
            Decimal('5.00000')
        """
        if quantity < 0:
            raise ValueError(f"Quantity cannot be negative, got {quantity}")
        if price is not None and price < 0:
            raise ValueError(f"Price cannot be negative, got {price}")

        if self.config.per_unit is not None:
            commission = quantity * self.config.per_unit
        elif self.config.flat_fee is not None:
            commission = self.config.flat_fee
        elif self.config.percentage is not None:
            if price is None:
                raise ValueError("Price is required for percentage commission model")
            commission = quantity * price * self.config.percentage
        else:
            raise ValueError("No commission model configured")

        commission = max(commission, self.config.minimum)

        if self.config.cap is not None:
            commission = min(commission, self.config.cap)

        return commission
