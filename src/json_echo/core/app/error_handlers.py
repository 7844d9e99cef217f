from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from starlette.exceptions import HTTPException
from starlette.responses import Response

from json_echo.core.app.responses import PrettyJSONResponse
from json_echo.core.common.exceptions import EchoServiceError
from json_echo.core.constants import (
    DEFAULT_JSON_INDENT,
    FIELD_MESSAGE,
    HTTP_500_INTERNAL_SERVER_ERROR_MESSAGE,
)

logger = logging.getLogger(__name__)


def _indent_for(request: Request) -> int:
    app = request.scope.get("app")
    config = getattr(app.state, "app_config", None) if app is not None else None
    return config.echo.indent if config is not None else DEFAULT_JSON_INDENT


async def http_exception_handler(request: Request, exc: HTTPException) -> Response:
    """Handle Starlette HTTP exceptions such as 405 Method Not Allowed.

    Args:
        request: The request that caused the exception
        exc: The HTTP exception

    Returns:
        JSON response with the status detail as message
    """
    if logger.isEnabledFor(logging.WARNING):
        logger.warning(f"HTTP error {exc.status_code}: {exc.detail}")

    return PrettyJSONResponse(
        {FIELD_MESSAGE: str(exc.detail)},
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
        indent=_indent_for(request),
    )


async def echo_exception_handler(request: Request, exc: EchoServiceError) -> Response:
    """Handle EchoServiceError exceptions.

    Only the public message reaches the client; details stay in the logs.

    Args:
        request: The request that caused the exception
        exc: The EchoServiceError exception

    Returns:
        A JSON response with the error message
    """
    if exc.details and logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            f"{exc.__class__.__name__} ({exc.status_code}): {exc.message} {exc.details}"
        )

    return PrettyJSONResponse(
        exc.to_dict(),
        status_code=exc.status_code,
        indent=_indent_for(request),
    )


async def general_exception_handler(request: Request, exc: Exception) -> Response:
    """Handle all other exceptions.

    Args:
        request: The request that caused the exception
        exc: The exception

    Returns:
        JSON response with a generic 500 message
    """
    logger.exception("Unhandled exception", exc_info=exc)

    return PrettyJSONResponse(
        {FIELD_MESSAGE: HTTP_500_INTERNAL_SERVER_ERROR_MESSAGE},
        status_code=500,
        indent=_indent_for(request),
    )


def configure_exception_handlers(app: FastAPI) -> None:
    """Configure exception handlers for the FastAPI application.

    Args:
        app: The FastAPI application
    """
    app.add_exception_handler(HTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(EchoServiceError, echo_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, general_exception_handler)
