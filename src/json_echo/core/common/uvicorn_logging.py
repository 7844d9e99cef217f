"""Uvicorn logging configuration.

Uvicorn installs its own handlers by default; this configuration drops them so
that server and access records propagate to the root handlers configured by
``configure_logging_with_environment_tagging``.
"""

from typing import Any

UVICORN_LOGGING_CONFIG: dict[str, Any] = {
    "version": 1,
    "disable_existing_loggers": False,
    "loggers": {
        "uvicorn": {"handlers": [], "level": "INFO", "propagate": True},
        "uvicorn.error": {"handlers": [], "level": "INFO", "propagate": True},
        "uvicorn.access": {"handlers": [], "level": "INFO", "propagate": True},
    },
}
