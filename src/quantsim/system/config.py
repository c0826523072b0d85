"""System configuration.

One YAML file configures the whole system:
- execution: Slippage model and order fee (commission) model
- statistics: Sharpe annualization, annual breakdown, drawdown rounding
- logging: Logging configuration

Search order for the config file:
1. Explicit path passed to SystemConfig.load()
2. QUANTSIM_CONFIG environment variable
3. config/system.yaml in the working directory
4. Built-in defaults

Values may reference environment variables as ${VAR}.
"""

import os
import re
from dataclasses import dataclass, field
from decimal import Decimal
from pathlib import Path
from typing import Any, Optional

import yaml

from quantsim.libraries.performance.config import StatisticsConfig
from quantsim.services.execution.config import CommissionConfig, ExecutionConfig, SlippageConfig
from quantsim.system import log_system

CONFIG_ENV_VAR = "QUANTSIM_CONFIG"
DEFAULT_CONFIG_PATH = Path("config/system.yaml")

_ENV_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}")


@dataclass
class LoggingConfig:
    """Logging section of the system configuration.

    Attributes:
        level: Minimum console log level
        format: "console" or "json"
        timestamp_format: "iso", "compact", "time" or "short"
        enable_file: Also write logs to a file
        file_path: Log file path
        file_level: Minimum file log level
        file_rotation: Rotate the log file when it grows too large
        max_file_size_mb: Size in MB before rotation
        backup_count: Rotated files to keep
    """

    level: str = "INFO"
    format: str = "console"
    timestamp_format: str = "compact"
    enable_file: bool = False
    file_path: str = "logs/quantsim.log"
    file_level: str = "WARNING"
    file_rotation: bool = True
    max_file_size_mb: int = 10
    backup_count: int = 3

    def to_logger_config(self) -> log_system.LoggingConfig:
        """Convert to the LoggerFactory configuration model."""
        return log_system.LoggingConfig(
            level=self.level,  # type: ignore[arg-type]
            format=self.format,  # type: ignore[arg-type]
            timestamp_format=self.timestamp_format,  # type: ignore[arg-type]
            enable_file=self.enable_file,
            file_path=Path(self.file_path),
            file_level=self.file_level,  # type: ignore[arg-type]
            file_rotation=self.file_rotation,
            max_file_size_mb=self.max_file_size_mb,
            backup_count=self.backup_count,
        )


@dataclass
class SystemConfig:
    """Complete system configuration.

    Attributes:
        execution: Fill engine configuration
        statistics: Statistics engine configuration
        logging: Logging configuration

    Example:
        >>> config = SystemConfig.load("config/system.yaml")
        >>> model = TransactionModel(config.execution)
    """

    execution: ExecutionConfig = field(default_factory=ExecutionConfig)
    statistics: StatisticsConfig = field(default_factory=StatisticsConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def load(cls, path: Optional[str | Path] = None) -> "SystemConfig":
        """Load configuration from YAML, merged over built-in defaults.

        Args:
            path: Config file path. If None, uses QUANTSIM_CONFIG or config/system.yaml.

        Returns:
            SystemConfig (all defaults if no file is found)

        Raises:
            yaml.YAMLError: If the file is not valid YAML
            ValueError: If a section fails validation
        """
        config_path = _resolve_config_path(path)

        data: dict[str, Any] = {}
        if config_path is not None and config_path.exists():
            with open(config_path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
            data = _substitute_env_vars(data)

        return cls._from_dict(_deep_merge(_default_dict(), data))

    @classmethod
    def _from_dict(cls, data: dict[str, Any]) -> "SystemConfig":
        """Build config from a (possibly partial) dictionary."""
        execution_data = data.get("execution") or {}
        statistics_data = data.get("statistics") or {}
        logging_data = data.get("logging") or {}

        return cls(
            execution=_execution_from_dict(execution_data),
            statistics=StatisticsConfig(**statistics_data),
            logging=LoggingConfig(**logging_data),
        )


def _default_dict() -> dict[str, Any]:
    """Built-in defaults for the sections that merge key by key.

    Commission and slippage are not listed: a configured model replaces the
    default model as a whole.
    """
    statistics = StatisticsConfig()
    return {
        "statistics": {
            "trading_days": statistics.trading_days,
            "annual_breakdown": statistics.annual_breakdown,
            "drawdown_rounding": statistics.drawdown_rounding,
        },
        "logging": dict(LoggingConfig().__dict__),
    }


def _to_decimal_dict(values: dict[str, Any]) -> dict[str, Decimal]:
    return {key: Decimal(str(value)) for key, value in values.items() if value is not None}


def _execution_from_dict(data: dict[str, Any]) -> ExecutionConfig:
    """Build the execution section, keeping the default for any model not configured."""
    defaults = ExecutionConfig()

    slippage = defaults.slippage
    slippage_data = data.get("slippage")
    if slippage_data:
        slippage = SlippageConfig(
            model=slippage_data.get("model", "resolution_based"),
            params=_to_decimal_dict(slippage_data.get("params") or {}),
        )

    commission = defaults.commission
    commission_data = data.get("commission")
    if commission_data:
        commission = CommissionConfig(**_to_decimal_dict(commission_data))

    return ExecutionConfig(slippage=slippage, commission=commission)


def _resolve_config_path(path: Optional[str | Path]) -> Optional[Path]:
    if path is not None:
        return Path(path)

    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)

    if DEFAULT_CONFIG_PATH.exists():
        return DEFAULT_CONFIG_PATH

    return None


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge override into a copy of base. Override wins on conflicts."""
    result = dict(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _substitute_env_vars(value: Any) -> Any:
    """Replace ${VAR} with environment values. Undefined variables are left as is."""
    if isinstance(value, dict):
        return {key: _substitute_env_vars(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_substitute_env_vars(item) for item in value]
    if isinstance(value, str):
        return _ENV_VAR_PATTERN.sub(lambda match: os.environ.get(match.group(1), match.group(0)), value)
    return value


_system_config: Optional[SystemConfig] = None


def get_system_config(path: Optional[str | Path] = None) -> SystemConfig:
    """Get the system configuration singleton.

    Args:
        path: Explicit config file. Loads (and caches) it even if a config is cached.

    Returns:
        Cached SystemConfig
    """
    global _system_config
    if _system_config is None or path is not None:
        _system_config = SystemConfig.load(path)
    return _system_config


def reload_system_config(path: Optional[str | Path] = None) -> SystemConfig:
    """Force a reload of the system configuration singleton."""
    global _system_config
    _system_config = SystemConfig.load(path)
    return _system_config
