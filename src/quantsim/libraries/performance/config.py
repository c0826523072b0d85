"""Configuration for the statistics engine."""

from dataclasses import dataclass


@dataclass
class StatisticsConfig:
    """Statistics engine settings.

    Attributes:
        trading_days: Trading days per year used to annualize the Sharpe ratio
        annual_breakdown: Add one report section per calendar year with trades
        drawdown_rounding: Maximum decimal places of the drawdown fraction

    Example:
        >>> StatisticsConfig(trading_days=365, annual_breakdown=False)
    """

    trading_days: int = 252
    annual_breakdown: bool = True
    drawdown_rounding: int = 3

    def __post_init__(self) -> None:
        """Validate statistics configuration."""
        if self.trading_days <= 0:
            raise ValueError(f"Trading days must be positive, got {self.trading_days}")

        if self.drawdown_rounding < 0:
            raise ValueError(f"Drawdown rounding cannot be negative, got {self.drawdown_rounding}")
