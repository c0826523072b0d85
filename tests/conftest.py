"""Root conftest for all tests - shared fixtures and global state isolation."""

from datetime import datetime
from decimal import Decimal

import pytest

from quantsim.services.data.models import Resolution, Security, Tick, TradeBar
from quantsim.system import LoggerFactory
from quantsim.system import config as system_config_module


@pytest.fixture(autouse=True)
def isolate_global_state():
    """Drop the cached system config and restore logging after each test."""
    system_config_module._system_config = None
    yield
    system_config_module._system_config = None
    if not LoggerFactory.is_configured():
        LoggerFactory.configure()


@pytest.fixture
def bar_time() -> datetime:
    return datetime(2013, 10, 7, 9, 31)


@pytest.fixture
def minute_bar(bar_time: datetime) -> TradeBar:
    """EURUSD minute bar: low 1.3540, high 1.3580, close 1.3571."""
    return TradeBar(
        time=bar_time,
        open=Decimal("1.3560"),
        high=Decimal("1.3580"),
        low=Decimal("1.3540"),
        close=Decimal("1.3571"),
    )


@pytest.fixture
def minute_security(minute_bar: TradeBar) -> Security:
    """EURUSD at minute resolution with a last bar."""
    return Security(symbol="EURUSD", price=Decimal("1.3571"), resolution=Resolution.MINUTE, last_data=minute_bar)


@pytest.fixture
def quote(bar_time: datetime) -> Tick:
    """EURUSD quote: bid 1.3569, ask 1.3572."""
    return Tick(time=bar_time, bid_price=Decimal("1.3569"), ask_price=Decimal("1.3572"))
