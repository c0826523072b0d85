"""Shared option handling for CLI commands."""

from decimal import Decimal, InvalidOperation
from typing import Literal, Optional, cast

import click

from quantsim.system import LoggerFactory, get_system_config


def parse_decimal(ctx: click.Context, param: click.Parameter, value: Optional[str]) -> Optional[Decimal]:
    """Click callback: parse an option value as Decimal (prices stay exact)."""
    if value is None:
        return None
    try:
        return Decimal(value)
    except InvalidOperation:
        raise click.BadParameter(f"'{value}' is not a decimal number")


def apply_log_level(log_level: Optional[str]) -> None:
    """Reconfigure logging with a CLI log level override, if one was given."""
    if not log_level:
        return

    system_config = get_system_config()
    # click already validated the choice
    system_config.logging.level = cast(Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], log_level.upper())
    LoggerFactory.configure(system_config.logging.to_logger_config())


log_level_option = click.option(
    "--log-level",
    "-l",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Set logging level (DEBUG shows fill decisions and Sharpe inputs)",
)
