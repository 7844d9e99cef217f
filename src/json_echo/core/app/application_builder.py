"""
Application builder for the JSON echo service.

This module assembles the FastAPI application: configuration on the
application state, middleware, the echo routes, exception handlers and the
lifespan handler.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI

from json_echo.core.app.controllers import EchoController, register_routes
from json_echo.core.app.error_handlers import configure_exception_handlers
from json_echo.core.app.middleware_config import configure_middleware
from json_echo.core.config.app_config import AppConfig
from json_echo.core.metadata import _load_project_metadata

logger = logging.getLogger(__name__)


def _add_lifecycle_handlers(app: FastAPI) -> None:
    """Add startup and shutdown handlers."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        config: AppConfig = app.state.app_config
        logger.info(
            "Application startup complete (max JSON depth %d, indent %d)",
            config.echo.max_depth,
            config.echo.indent,
        )
        yield
        logger.info("Shutting down application")

    app.router.lifespan_context = lifespan


def _create_fastapi_app(config: AppConfig) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        config: The application configuration

    Returns:
        Configured FastAPI application
    """
    _, version = _load_project_metadata()
    # Every path belongs to the echo endpoint, so the docs routes stay off
    app: FastAPI = FastAPI(
        title="JSON Echo Service",
        description="Echoes JSON request bodies and reports request metadata",
        version=version,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    app.state.app_config = config
    app.state.echo_controller = EchoController.from_config(config)

    configure_middleware(app, config)
    register_routes(app)
    configure_exception_handlers(app)
    _add_lifecycle_handlers(app)

    return app


def build_app(config: AppConfig | dict[str, Any] | None = None) -> FastAPI:
    """Build the FastAPI application.

    Args:
        config: The application configuration (AppConfig object or dict),
            defaults to loading from environment

    Returns:
        The FastAPI ASGI application instance.
    """
    if config is None:
        config = AppConfig.from_env()
    elif isinstance(config, dict):
        config = AppConfig(**config)
    elif not isinstance(config, AppConfig):
        raise ValueError(
            f"Invalid config type: {type(config)}. Expected AppConfig or dict."
        )

    logger.debug("Building application for %r", config)
    return _create_fastapi_app(config)
