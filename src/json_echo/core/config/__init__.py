"""Configuration package for the JSON echo service."""

from json_echo.core.config.app_config import (
    AppConfig,
    EchoConfig,
    LoggingConfig,
    LogLevel,
    load_config,
)

__all__ = [
    "AppConfig",
    "EchoConfig",
    "LogLevel",
    "LoggingConfig",
    "load_config",
]
