from __future__ import annotations

import logging

from fastapi import FastAPI

from json_echo.core.app.middleware.logging_middleware import LoggingMiddleware
from json_echo.core.config.app_config import AppConfig

logger = logging.getLogger(__name__)


def configure_middleware(app: FastAPI, config: AppConfig) -> None:
    """Configure middleware for the FastAPI application.

    Args:
        app: The FastAPI application
        config: The application configuration
    """
    if config.logging.request_logging or config.logging.response_logging:
        app.add_middleware(
            LoggingMiddleware,
            log_requests=config.logging.request_logging,
            log_responses=config.logging.response_logging,
        )
        logger.debug("Access logging middleware enabled")
