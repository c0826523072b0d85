"""Shared fixtures for CLI tests."""

import pytest
from click.testing import CliRunner

from quantsim.system import LoggerFactory


@pytest.fixture
def cli_runner():
    """Fixture providing Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def reset_cli_logging():
    """Drop handlers bound to the runner's output stream by --log-level."""
    yield
    LoggerFactory.reset()
