"""
Controllers package for application endpoints.

This package contains controllers that handle HTTP endpoints in the application.
"""

from __future__ import annotations

from fastapi import FastAPI

from json_echo.core.app.controllers.echo_controller import (
    EchoController,
    get_echo_controller,
)
from json_echo.core.app.controllers.echo_controller import router as echo_router

__all__ = ["EchoController", "get_echo_controller", "register_routes"]


def register_routes(app: FastAPI) -> None:
    """Register all application routes.

    Args:
        app: The FastAPI application
    """
    app.include_router(echo_router)
