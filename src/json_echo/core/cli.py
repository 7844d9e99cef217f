"""
Command line entry point for the JSON echo service.

Configuration is resolved as defaults < YAML file < environment < CLI flags,
then the application is built and served with uvicorn.
"""

import argparse
import logging
import socket
import sys
from collections.abc import Callable

import uvicorn
from fastapi import FastAPI
from pydantic import ValidationError

from json_echo.core.app.application_builder import build_app
from json_echo.core.common.exceptions import ConfigurationError
from json_echo.core.common.logging_utils import (
    configure_logging_with_environment_tagging,
)
from json_echo.core.common.structlog_config import LogFormat
from json_echo.core.common.uvicorn_logging import UVICORN_LOGGING_CONFIG
from json_echo.core.config.app_config import AppConfig, LogLevel, load_config


def is_port_in_use(host: str, port: int) -> bool:
    """Check if a port is in use on a given host."""
    # Wildcard binds are probed through loopback
    probe_host = {"": "127.0.0.1", "0.0.0.0": "127.0.0.1", "::": "::1"}.get(host, host)
    try:
        addresses = socket.getaddrinfo(probe_host, port, type=socket.SOCK_STREAM)
    except socket.gaierror:
        return False

    for family, socktype, proto, _, sockaddr in addresses:
        try:
            with socket.socket(family, socktype, proto) as s:
                if s.connect_ex(sockaddr) == 0:
                    return True
        except OSError:
            # Address family unsupported on this host
            continue
    return False


def build_cli_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        description="Run the JSON echo service",
    )

    # Basic server options
    parser.add_argument("--host", help="Interface to bind (default: 0.0.0.0)")
    parser.add_argument("--port", type=int, help="Port to bind (default: 3222)")
    parser.add_argument(
        "--config",
        dest="config_file",
        metavar="FILE",
        help="Path to a YAML configuration file",
    )

    # Logging options
    parser.add_argument(
        "--log",
        dest="log_file",
        metavar="FILE",
        help="Also write logs to FILE",
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        choices=[level.value for level in LogLevel],
        default=None,
        help="Set the logging level (default: use config or INFO)",
    )
    parser.add_argument(
        "--log-format",
        dest="log_format",
        choices=[fmt.value for fmt in LogFormat],
        default=None,
        help="Rendering of structured access logs (default: console)",
    )
    parser.add_argument(
        "--request-logging",
        dest="request_logging",
        action="store_true",
        default=None,
        help="Log every incoming request",
    )
    parser.add_argument(
        "--response-logging",
        dest="response_logging",
        action="store_true",
        default=None,
        help="Log the status and duration of every response",
    )

    # Echo options
    parser.add_argument(
        "--max-depth",
        dest="max_depth",
        type=int,
        metavar="N",
        help="Maximum JSON nesting depth accepted in request bodies (default: 512)",
    )
    return parser


def parse_cli_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    return build_cli_parser().parse_args(argv)


def apply_cli_args(args: argparse.Namespace) -> AppConfig:
    """Load configuration and overlay the values given on the command line.

    Raises:
        ConfigurationError: If the file or a flag value fails validation
    """
    cfg = load_config(args.config_file)

    data = cfg.model_dump()
    if args.host is not None:
        data["host"] = args.host
    if args.port is not None:
        data["port"] = args.port
    if args.log_file is not None:
        data["logging"]["log_file"] = args.log_file
    if args.log_level is not None:
        data["logging"]["level"] = args.log_level
    if args.log_format is not None:
        data["logging"]["format"] = args.log_format
    if args.request_logging is not None:
        data["logging"]["request_logging"] = args.request_logging
    if args.response_logging is not None:
        data["logging"]["response_logging"] = args.response_logging
    if args.max_depth is not None:
        data["echo"]["max_depth"] = args.max_depth

    try:
        return AppConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(
            "Invalid command line arguments", details={"errors": e.errors()}
        ) from e


def _configure_logging(cfg: AppConfig) -> None:
    """Configure logging based on configuration."""
    configure_logging_with_environment_tagging(
        level=getattr(logging, cfg.logging.level.value),
        log_file=cfg.logging.log_file,
        structured_format=cfg.logging.format,
    )


def main(
    argv: list[str] | None = None,
    build_app_fn: Callable[[AppConfig], FastAPI] | None = None,
) -> None:
    """Main entry point."""
    args = parse_cli_args(argv)
    try:
        cfg = apply_cli_args(args)
    except ConfigurationError as e:
        sys.stderr.write(f"\nERROR: {e.message}\n")
        if e.details:
            sys.stderr.write(f"{e.details}\n")
        sys.exit(1)

    _configure_logging(cfg)

    app: FastAPI
    try:
        app = (build_app_fn or build_app)(cfg)
    except Exception as e:
        logging.error(f"Unexpected error during application startup: {e}")
        sys.stderr.write(f"\nERROR: Failed to start JSON echo service: {e}\n")
        sys.exit(1)

    if is_port_in_use(cfg.host, cfg.port):
        error_msg = f"Port {cfg.port} is already in use."
        logging.error(error_msg)
        sys.stderr.write(f"\nERROR: {error_msg}\n")
        sys.exit(1)

    logging.info(f"Starting uvicorn on {cfg.host}:{cfg.port}")
    try:
        uvicorn.run(
            app, host=cfg.host, port=cfg.port, log_config=UVICORN_LOGGING_CONFIG
        )
    except Exception as e:
        logging.exception("Uvicorn failed to start: %s", e)
        raise


if __name__ == "__main__":
    main()
