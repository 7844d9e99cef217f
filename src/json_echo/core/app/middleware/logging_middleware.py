from __future__ import annotations

import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from json_echo.core.common.structlog_config import get_logger


class LoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for logging requests and responses."""

    def __init__(
        self,
        app: ASGIApp,
        log_requests: bool = False,
        log_responses: bool = False,
    ):
        super().__init__(app)
        self.log_requests = log_requests
        self.log_responses = log_responses
        self.logger = get_logger("json_echo.access")

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start_time = time.perf_counter()

        if self.log_requests:
            client = request.client.host if request.client else "unknown"
            self.logger.info(
                "Request received",
                method=request.method,
                path=request.url.path,
                client=client,
            )

        try:
            response = await call_next(request)
        except Exception as e:
            self.logger.error(
                "Request failed",
                method=request.method,
                path=request.url.path,
                error=str(e),
                error_type=type(e).__name__,
                duration_ms=(time.perf_counter() - start_time) * 1000,
            )
            raise

        if self.log_responses:
            self.logger.info(
                "Response sent",
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
                duration_ms=(time.perf_counter() - start_time) * 1000,
            )

        return response
