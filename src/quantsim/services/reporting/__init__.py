"""Statistics engine and report formatting."""

from quantsim.libraries.performance.config import StatisticsConfig
from quantsim.services.reporting.formatters import display_statistics_report, format_statistics_report
from quantsim.services.reporting.service import StatisticsGenerator, generate

__all__ = [
    "StatisticsGenerator",
    "StatisticsConfig",
    "display_statistics_report",
    "format_statistics_report",
    "generate",
]
