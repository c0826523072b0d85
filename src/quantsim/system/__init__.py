"""
System configuration package.

One configuration and one logging setup for the whole system.

Exports:
    - SystemConfig: Complete system configuration dataclass
    - get_system_config: Get system config singleton
    - reload_system_config: Force reload system config
    - LoggerFactory: Factory for creating configured loggers
    - LoggingConfig: Logging configuration model
"""

# log_system first: the config module imports service configs whose packages log
from quantsim.system.log_system import LoggerFactory, LoggingConfig  # isort: skip
from quantsim.system.config import SystemConfig, get_system_config, reload_system_config  # isort: skip

__all__ = [
    "SystemConfig",
    "get_system_config",
    "reload_system_config",
    "LoggerFactory",
    "LoggingConfig",
]
