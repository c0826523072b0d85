"""Single order fill command."""

import json
import sys
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import Optional

import click
import yaml
from rich.console import Console
from rich.table import Table

from quantsim.cli.options import apply_log_level, log_level_option, parse_decimal
from quantsim.services.data.models import MarketDataSnapshot, Resolution, Security, Tick, TradeBar
from quantsim.services.execution import (
    FillOutcome,
    Order,
    OrderDirection,
    OrderEvent,
    OrderType,
    TransactionModel,
)
from quantsim.system import get_system_config

console = Console()

_OUTCOME_COLORS = {
    FillOutcome.FILLED: "green",
    FillOutcome.NOT_FILLED: "yellow",
    FillOutcome.DATA_UNAVAILABLE: "red",
}


def build_snapshot(
    resolution: Resolution,
    security_price: Decimal,
    open_: Optional[Decimal],
    high: Optional[Decimal],
    low: Optional[Decimal],
    close: Optional[Decimal],
    bid: Optional[Decimal],
    ask: Optional[Decimal],
) -> Optional[MarketDataSnapshot]:
    """
    Build the last snapshot of the security from CLI options.

    Bid and ask make a Tick; high and low make a TradeBar (open and close
    default to the security price). Otherwise there is no snapshot.

    Raises:
        click.UsageError: If only one side of a quote or of a bar range is given
    """
    now = datetime.now()

    if bid is not None or ask is not None:
        if bid is None or ask is None:
            raise click.UsageError("--bid and --ask must be given together")
        return Tick(time=now, bid_price=bid, ask_price=ask)

    if high is not None or low is not None:
        if high is None or low is None:
            raise click.UsageError("--high and --low must be given together")
        return TradeBar(
            time=now,
            open=open_ if open_ is not None else security_price,
            high=high,
            low=low,
            close=close if close is not None else security_price,
        )

    if resolution == Resolution.TICK:
        raise click.UsageError("Tick resolution needs --bid and --ask")

    return None


def _event_table(order: Order, event: OrderEvent) -> Table:
    """Create the fill result table."""
    color = _OUTCOME_COLORS[event.outcome]
    table = Table(title="🧾 Fill Result", show_header=False, box=None, padding=(0, 2))

    table.add_column("Field", style="cyan")
    table.add_column("Value", justify="right")

    table.add_row("Order", f"{order.order_type.value} {order.direction.value} {order.quantity} {order.symbol}")
    table.add_row("Outcome", f"[{color}]{event.outcome.value}[/{color}]")
    table.add_row("Status", event.status.value)
    table.add_row("Fill Quantity", f"{event.fill_quantity}")
    table.add_row("Fill Price", f"{event.fill_price}")
    table.add_row("Order Fee", f"{event.order_fee}")
    table.add_row("Reason", event.reason)

    return table


@click.command("fill")
@click.option(
    "--type",
    "-t",
    "order_type",
    type=click.Choice([t.value for t in OrderType], case_sensitive=False),
    default=OrderType.MARKET.value,
    show_default=True,
    help="Order type",
)
@click.option(
    "--direction",
    "-d",
    type=click.Choice([d.value for d in OrderDirection], case_sensitive=False),
    required=True,
    help="Order direction",
)
@click.option("--quantity", "-q", required=True, callback=parse_decimal, help="Order quantity")
@click.option(
    "--price",
    callback=parse_decimal,
    help="Limit/stop price (market orders: price at submission, defaults to --security-price)",
)
@click.option("--symbol", default="EURUSD", show_default=True, help="Security symbol")
@click.option("--security-price", "-s", required=True, callback=parse_decimal, help="Current security price")
@click.option(
    "--resolution",
    "-r",
    type=click.Choice([r.value for r in Resolution], case_sensitive=False),
    default=Resolution.MINUTE.value,
    show_default=True,
    help="Data resolution of the security",
)
@click.option("--open", "open_", callback=parse_decimal, help="Last bar open")
@click.option("--high", callback=parse_decimal, help="Last bar high")
@click.option("--low", callback=parse_decimal, help="Last bar low")
@click.option("--close", callback=parse_decimal, help="Last bar close")
@click.option("--bid", callback=parse_decimal, help="Last quote bid (tick data)")
@click.option("--ask", callback=parse_decimal, help="Last quote ask (tick data)")
@click.option("--cancel", is_flag=True, help="Cancel the order before the fill attempt")
@click.option(
    "--config",
    "config_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="System configuration file (YAML)",
)
@click.option("--json", "as_json", is_flag=True, help="Print the event as JSON")
@log_level_option
def fill_command(
    order_type: str,
    direction: str,
    quantity: Decimal,
    price: Optional[Decimal],
    symbol: str,
    security_price: Decimal,
    resolution: str,
    open_: Optional[Decimal],
    high: Optional[Decimal],
    low: Optional[Decimal],
    close: Optional[Decimal],
    bid: Optional[Decimal],
    ask: Optional[Decimal],
    cancel: bool,
    config_file: Optional[Path],
    as_json: bool,
    log_level: Optional[str],
):
    """
    Evaluate one order against the latest snapshot of a security.

    \b
    Examples:
        # Limit buy against a minute bar
        quantsim fill -t limit -d buy -q 10000 --price 1.3550 -s 1.3571 --low 1.3540 --high 1.3580

        # Market sell at tick resolution
        quantsim fill -d sell -q 10000 --price 1.3571 -s 1.3571 -r tick --bid 1.3569 --ask 1.3572
    """
    try:
        system_config = get_system_config(config_file)
        apply_log_level(log_level)

        resolution_value = Resolution(resolution.lower())
        snapshot = build_snapshot(resolution_value, security_price, open_, high, low, close, bid, ask)
        security = Security(symbol=symbol, price=security_price, resolution=resolution_value, last_data=snapshot)
        order_type_value = OrderType(order_type.lower())
        if price is None and order_type_value == OrderType.MARKET:
            # Market orders are submitted at the current security price
            price = security_price
        order = Order(
            symbol=symbol,
            order_type=order_type_value,
            direction=OrderDirection(direction.lower()),
            quantity=quantity,
            price=price if price is not None else Decimal("0"),
        )
    except (ValueError, TypeError, yaml.YAMLError) as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    if cancel:
        order.cancel()

    model = TransactionModel(system_config.execution)
    event = model.fill(security, order)
    order.apply(event)

    if as_json:
        click.echo(
            json.dumps(
                {
                    "order_id": event.order_id,
                    "outcome": event.outcome.value,
                    "status": event.status.value,
                    "fill_quantity": str(event.fill_quantity),
                    "fill_price": str(event.fill_price),
                    "order_fee": str(event.order_fee),
                    "reason": event.reason,
                },
                indent=2,
            )
        )
    else:
        console.print(_event_table(order, event))
