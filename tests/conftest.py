from collections.abc import Iterator
from pathlib import Path

import pytest
import yaml
from fastapi.testclient import TestClient

from json_echo.core.app.application_builder import build_app
from json_echo.core.config.app_config import AppConfig

_ENV_VARS = (
    "APP_HOST",
    "APP_PORT",
    "LOG_LEVEL",
    "LOG_FORMAT",
    "LOG_FILE",
    "REQUEST_LOGGING",
    "RESPONSE_LOGGING",
    "ECHO_MAX_DEPTH",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep configuration environment variables from leaking into tests."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def app_config() -> AppConfig:
    return AppConfig()


@pytest.fixture
def test_client(app_config: AppConfig) -> Iterator[TestClient]:
    """A TestClient for an application built with default configuration."""
    with TestClient(build_app(app_config)) as client:
        yield client


@pytest.fixture
def temp_config_path(tmp_path: Path) -> Path:
    """Create a minimal valid YAML config file and return its path."""
    cfg = {
        "host": "127.0.0.1",
        "port": 9000,
        "logging": {"level": "DEBUG", "request_logging": True},
        "echo": {"max_depth": 64},
    }
    p = tmp_path / "app.config.yaml"
    with p.open("w", encoding="utf-8") as f:
        yaml.safe_dump(cfg, f, sort_keys=False)
    return p
