"""
Tests for the application builder.
"""

import logging

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from json_echo.core.app.application_builder import build_app
from json_echo.core.app.controllers import EchoController
from json_echo.core.common.exceptions import ConfigurationError
from json_echo.core.config.app_config import AppConfig


def test_build_app_with_config_object() -> None:
    config = AppConfig(port=4321)

    app = build_app(config)

    assert isinstance(app, FastAPI)
    assert app.state.app_config is config
    assert isinstance(app.state.echo_controller, EchoController)


def test_build_app_with_dict_config() -> None:
    app = build_app({"port": 4321, "echo": {"max_depth": 7}})

    assert app.state.app_config.port == 4321
    assert app.state.echo_controller.codec.max_depth == 7


def test_build_app_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ECHO_MAX_DEPTH", "9")

    app = build_app()

    assert app.state.app_config.echo.max_depth == 9


def test_build_app_reports_invalid_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ECHO_MAX_DEPTH", "0")

    with pytest.raises(ConfigurationError, match="environment"):
        build_app()


def test_build_app_rejects_other_types() -> None:
    with pytest.raises(ValueError, match="Invalid config type"):
        build_app("not a config")  # type: ignore[arg-type]


def test_docs_routes_are_disabled(test_client: TestClient) -> None:
    response = test_client.get("/docs")

    assert response.json()["PATH_INFO"] == "/docs"
    assert test_client.get("/openapi.json").json()["REQUEST_METHOD"] == "GET"


def test_controller_is_built_lazily_when_missing() -> None:
    app = build_app(AppConfig())
    del app.state.echo_controller

    with TestClient(app) as client:
        assert client.post("/", content=b"[]").json() == []

    assert isinstance(app.state.echo_controller, EchoController)


def test_lifespan_logs_startup_and_shutdown(caplog: pytest.LogCaptureFixture) -> None:
    app = build_app(AppConfig())

    with caplog.at_level(logging.INFO, logger="json_echo.core.app.application_builder"):
        with TestClient(app):
            pass

    messages = [record.getMessage() for record in caplog.records]
    assert any("Application startup complete" in message for message in messages)
    assert "Shutting down application" in messages
