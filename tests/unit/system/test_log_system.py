"""Tests for centralized logging configuration."""

import json
import logging
from logging.handlers import RotatingFileHandler

import pytest

from quantsim.system import LoggerFactory, LoggingConfig
from quantsim.system.log_system import _ConsoleFormatter


@pytest.fixture(autouse=True)
def reset_logging():
    """Reset logging configuration before and after each test."""
    LoggerFactory.reset()
    yield
    LoggerFactory.reset()


def test_default_configuration():
    """Test logger factory with default configuration."""
    logger = LoggerFactory.get_logger()

    assert LoggerFactory.is_configured()
    assert hasattr(logger, "info")
    assert hasattr(logger, "warning")

    config = LoggerFactory.get_config()
    assert config.level == "INFO"
    assert config.format == "console"
    assert config.enable_file is False
    assert config.file_level == "WARNING"


def test_explicit_configuration():
    """Test configuring logger factory explicitly."""
    config = LoggingConfig(level="DEBUG", format="json", enable_file=False)

    LoggerFactory.configure(config)

    assert LoggerFactory.is_configured()
    assert LoggerFactory.get_config().level == "DEBUG"
    assert LoggerFactory.get_config().format == "json"


def test_auto_configure_on_first_use():
    """Test that logger auto-configures with defaults on first use."""
    assert not LoggerFactory.is_configured()

    LoggerFactory.get_logger("quantsim.test")

    assert LoggerFactory.is_configured()


def test_file_logging_configuration(tmp_path):
    """Test configuring file output."""
    log_file = tmp_path / "test.log"

    config = LoggingConfig(
        level="INFO",
        enable_file=True,
        file_path=log_file,
        file_level="DEBUG",
        file_rotation=False,
    )

    LoggerFactory.configure(config)
    logger = LoggerFactory.get_logger()

    logger.info("execution.fill.evaluated", order_id="o-1", fill_price="1.3550")

    # File logs are JSON lines
    log_entry = json.loads(log_file.read_text().strip())
    assert log_entry["event"] == "execution.fill.evaluated"
    assert log_entry["order_id"] == "o-1"
    assert "log_timestamp" in log_entry


def test_file_logging_uses_default_path(tmp_path, monkeypatch):
    """Test that enabling file logging without path uses the default."""
    monkeypatch.chdir(tmp_path)
    config = LoggingConfig(level="INFO", enable_file=True, file_path=None)

    LoggerFactory.configure(config)

    result_config = LoggerFactory.get_config()
    assert str(result_config.file_path) == "logs/quantsim.log"
    assert (tmp_path / "logs").is_dir()


def test_rotating_file_handler(tmp_path):
    """Test rotating file handler configuration."""
    log_file = tmp_path / "rotating.log"

    config = LoggingConfig(
        enable_file=True,
        file_path=log_file,
        file_rotation=True,
        max_file_size_mb=1,
        backup_count=3,
    )

    LoggerFactory.configure(config)

    handlers = [h for h in logging.getLogger().handlers if isinstance(h, RotatingFileHandler)]
    handler = next((h for h in handlers if str(log_file) in str(h.baseFilename)), None)
    assert handler is not None
    assert handler.maxBytes == 1 * 1024 * 1024
    assert handler.backupCount == 3


def test_file_level_independent_from_console_level(tmp_path):
    """Test that file log level can be different from console level."""
    log_file = tmp_path / "debug.log"

    config = LoggingConfig(
        level="WARNING",
        enable_file=True,
        file_path=log_file,
        file_level="DEBUG",
        file_rotation=False,
    )

    LoggerFactory.configure(config)
    logger = LoggerFactory.get_logger()

    logger.debug("statistics.sharpe.inputs", points=2)
    logger.warning("statistics.annual_return.fallback", error="Overflow")

    entries = [json.loads(line) for line in log_file.read_text().splitlines() if line.strip()]
    events = [entry["event"] for entry in entries]
    assert "statistics.sharpe.inputs" in events
    assert "statistics.annual_return.fallback" in events


def test_reset_clears_configuration():
    """Test that reset clears configuration."""
    LoggerFactory.configure(LoggingConfig(level="DEBUG"))

    LoggerFactory.reset()

    assert not LoggerFactory.is_configured()
    assert LoggerFactory.get_config().level == "INFO"


class TestConsoleFormatter:
    """Test console line rendering."""

    def test_area_prefix_rendered(self):
        line = _ConsoleFormatter.format_line(
            "131007-093100.00", "WARNING", "execution.fill.data_unavailable", {"symbol": "EURUSD"}, "service.py", 42
        )

        assert "Execution" in line
        assert "fill data unavailable" in line
        assert "symbol=" in line
        assert "EURUSD" in line
        assert "service:42" in line

    def test_unknown_event_rendered_verbatim(self):
        line = _ConsoleFormatter.format_line("", "INFO", "custom event", {}, "", "")

        assert "custom event" in line
