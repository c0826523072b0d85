"""
quantsim - Fill Simulation and Performance Statistics

Public API for approximating order fills against historical market data and
summarizing a backtest's trade record into standard statistics.
"""

from importlib.metadata import version

try:
    __version__ = version("quantsim")
except Exception:
    __version__ = "0.0.0.dev"  # Fallback for development


__all__ = [
    "__version__",
]
