"""Commands __init__ - exports all commands."""

from quantsim.cli.commands.fill import fill_command
from quantsim.cli.commands.statistics import statistics_command

__all__ = ["fill_command", "statistics_command"]
