from __future__ import annotations

import logging
import os
from collections.abc import Callable, Mapping
from enum import Enum
from pathlib import Path
from typing import Any

import yaml
from pydantic import ConfigDict, Field, ValidationError, field_validator

from json_echo.core.common.exceptions import ConfigurationError
from json_echo.core.common.structlog_config import LogFormat
from json_echo.core.constants import DEFAULT_JSON_INDENT, DEFAULT_JSON_MAX_DEPTH
from json_echo.core.interfaces.model_bases import DomainModel

logger = logging.getLogger(__name__)

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3222


def _to_bool(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _to_int(value: str) -> int:
    return int(value.strip())


# (environment variable, dotted config path, transform)
_ENV_BINDINGS: list[tuple[str, str, Callable[[str], Any]]] = [
    ("APP_HOST", "host", str.strip),
    ("APP_PORT", "port", _to_int),
    ("LOG_LEVEL", "logging.level", lambda v: v.strip().upper()),
    ("LOG_FORMAT", "logging.format", lambda v: v.strip().lower()),
    ("LOG_FILE", "logging.log_file", str.strip),
    ("REQUEST_LOGGING", "logging.request_logging", _to_bool),
    ("RESPONSE_LOGGING", "logging.response_logging", _to_bool),
    ("ECHO_MAX_DEPTH", "echo.max_depth", _to_int),
]


class LogLevel(str, Enum):
    """Log levels for configuration."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LoggingConfig(DomainModel):
    """Logging configuration."""

    model_config = ConfigDict(extra="forbid")

    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.CONSOLE
    log_file: str | None = None
    # Access logging through the structured request middleware
    request_logging: bool = False
    response_logging: bool = False


class EchoConfig(DomainModel):
    """Settings for decoding and re-encoding echoed bodies."""

    model_config = ConfigDict(extra="forbid")

    max_depth: int = Field(default=DEFAULT_JSON_MAX_DEPTH, ge=1)
    indent: int = Field(default=DEFAULT_JSON_INDENT, ge=0)


class AppConfig(DomainModel):
    """Complete application configuration."""

    model_config = ConfigDict(extra="forbid")

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    echo: EchoConfig = Field(default_factory=EchoConfig)

    @field_validator("port")
    @classmethod
    def validate_port(cls, v: int) -> int:
        if not 0 < v < 65536:
            raise ValueError("port must be between 1 and 65535")
        return v

    @classmethod
    def from_env(cls, *, environ: Mapping[str, str] | None = None) -> AppConfig:
        """Create AppConfig from environment variables.

        Returns:
            AppConfig instance

        Raises:
            ConfigurationError: If an environment value fails validation
        """
        env: Mapping[str, str] = os.environ if environ is None else environ
        try:
            return cls.model_validate(_env_overrides(env))
        except ValidationError as e:
            raise ConfigurationError(
                "Invalid configuration in environment",
                details={"errors": e.errors()},
            ) from e


def _set_path(data: dict[str, Any], path: str, value: Any) -> None:
    *parents, leaf = path.split(".")
    node = data
    for part in parents:
        child = node.get(part)
        if not isinstance(child, dict):
            child = {}
            node[part] = child
        node = child
    node[leaf] = value


def _env_overrides(env: Mapping[str, str]) -> dict[str, Any]:
    """Collect configuration values supplied through environment variables."""
    overrides: dict[str, Any] = {}
    for name, path, transform in _ENV_BINDINGS:
        raw_value = env.get(name)
        if raw_value is None or not raw_value.strip():
            continue
        try:
            value = transform(raw_value)
        except ValueError:
            logger.warning("Ignoring invalid value %r for %s", raw_value, name)
            continue
        _set_path(overrides, path, value)
    return overrides


def _deep_merge(base: dict[str, Any], overrides: Mapping[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in overrides.items():
        if isinstance(value, Mapping) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _read_config_file(path: Path) -> dict[str, Any]:
    if path.suffix.lower() not in (".yaml", ".yml"):
        raise ConfigurationError(
            f"Unsupported configuration file format: {path.suffix}. Use YAML (.yaml/.yml)."
        )

    try:
        with open(path, encoding="utf-8") as f:
            file_config = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Invalid YAML in configuration file {path}", details={"error": str(e)}
        ) from e

    if not isinstance(file_config, dict):
        raise ConfigurationError(
            f"Configuration file {path} must contain a mapping at the top level"
        )
    return file_config


def load_config(
    config_path: str | Path | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> AppConfig:
    """
    Load configuration from file and environment.

    Environment variables take precedence over values from the file.

    Args:
        config_path: Optional path to a YAML configuration file
        environ: Environment mapping, defaults to ``os.environ``

    Returns:
        AppConfig instance

    Raises:
        ConfigurationError: If the file cannot be parsed or fails validation
    """
    env: Mapping[str, str] = os.environ if environ is None else environ

    config_data: dict[str, Any] = {}
    if config_path:
        path = Path(config_path)
        if not path.exists():
            logger.warning(f"Configuration file not found: {config_path}")
        else:
            config_data = _read_config_file(path)
            logger.info(f"Loaded configuration from {path}")

    config_data = _deep_merge(config_data, _env_overrides(env))

    try:
        return AppConfig.model_validate(config_data)
    except ValidationError as e:
        raise ConfigurationError(
            "Invalid configuration", details={"errors": e.errors()}
        ) from e
