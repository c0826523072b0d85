"""Configuration for the fill engine.

Defines the slippage model and the order fee (commission) model.
"""

from dataclasses import dataclass, field
from decimal import Decimal


@dataclass
class CommissionConfig:
    """Order fee settings.

    Supports two commission models:
    1. Per-unit: max(qty * per_unit, minimum)
    2. Per-trade: flat_fee OR percentage * notional

    Exactly one model must be specified. Commission cap applies to both.
    The default is a zero flat fee: for FX the spread is the cost.

    Attributes:
        per_unit: Cost per unit traded (e.g. $0.005 per share)
        minimum: Minimum commission per fill (default: $0)
        flat_fee: Fixed commission per fill
        percentage: Percentage of notional (e.g. 0.001 = 0.1%)
        cap: Maximum commission per fill (optional)

    Examples:
        >>> CommissionConfig(per_unit=Decimal("0.005"), minimum=Decimal("1.00"))
        >>> CommissionConfig(percentage=Decimal("0.00002"))
        >>> CommissionConfig(flat_fee=Decimal("0"))
    """

    per_unit: Decimal | None = None
    minimum: Decimal = Decimal("0")
    flat_fee: Decimal | None = None
    percentage: Decimal | None = None
    cap: Decimal | None = None

    def __post_init__(self) -> None:
        """Validate that exactly one commission model is specified."""
        models_specified = [
            self.per_unit is not None,
            self.flat_fee is not None or self.percentage is not None,
        ]

        if sum(models_specified) == 0:
            raise ValueError("Must specify at least one commission model")
        if sum(models_specified) > 1:
            raise ValueError("Cannot specify multiple commission models (per_unit or flat_fee/percentage)")

        if self.flat_fee is not None and self.percentage is not None:
            raise ValueError("Cannot specify both flat_fee and percentage")

        for name in ("per_unit", "flat_fee", "percentage"):
            value = getattr(self, name)
            if value is not None and value < 0:
                raise ValueError(f"Commission {name} cannot be negative, got {value}")

        if self.cap is not None and self.cap < 0:
            raise ValueError(f"Commission cap cannot be negative, got {self.cap}")

        if self.minimum < 0:
            raise ValueError(f"Minimum commission cannot be negative, got {self.minimum}")


def _default_commission_config() -> CommissionConfig:
    """Zero fee per fill."""
    return CommissionConfig(flat_fee=Decimal("0"))


@dataclass
class SlippageConfig:
    """Slippage model configuration.

    Attributes:
        model: Slippage model type (resolution_based, fixed_bps)
        params: Model-specific parameters

    Examples:
        Resolution based (default, 1 bp of the last bar value):
        >>> SlippageConfig(model="resolution_based", params={"bar_rate": Decimal("0.0001")})

        Fixed BPS:
        >>> SlippageConfig(model="fixed_bps", params={"bps": Decimal("2")})
    """

    model: str = "resolution_based"
    params: dict[str, Decimal | int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate slippage configuration."""
        valid_models = ["resolution_based", "fixed_bps"]
        if self.model not in valid_models:
            raise ValueError(f"Invalid slippage model: {self.model}. Must be one of {valid_models}")


def _default_slippage_config() -> SlippageConfig:
    """Resolution-based slippage, 1 bp of price for bar data."""
    return SlippageConfig(model="resolution_based", params={"bar_rate": Decimal("0.0001")})


@dataclass
class ExecutionConfig:
    """Configuration for the fill engine.

    Attributes:
        slippage: Slippage model configuration (market orders only)
        commission: Order fee settings

    Example:
        >>> config = ExecutionConfig(
        ...     slippage=SlippageConfig(model="fixed_bps", params={"bps": Decimal("1")}),
        ...     commission=CommissionConfig(flat_fee=Decimal("0")),
        ... )
    """

    slippage: SlippageConfig = field(default_factory=_default_slippage_config)
    commission: CommissionConfig = field(default_factory=_default_commission_config)
