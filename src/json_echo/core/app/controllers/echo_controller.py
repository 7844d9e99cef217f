"""
Echo Controller

Handles the single catch-all echo endpoint.
"""

from __future__ import annotations

import logging
import time

from fastapi import APIRouter, Depends, Request
from starlette.responses import Response

from json_echo.core.app.responses import PrettyJSONResponse
from json_echo.core.common.exceptions import InvalidJSONError
from json_echo.core.config.app_config import AppConfig
from json_echo.core.constants import ECHO_METHODS
from json_echo.core.domain.request_metadata import RequestMetadata
from json_echo.core.metadata import _load_project_metadata
from json_echo.core.services.json_codec_service import JsonCodecService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["echo"])


class EchoController:
    """Controller for the echo endpoint.

    GET requests are answered with the request metadata; every other method
    has its body decoded as JSON and sent back unchanged.
    """

    def __init__(self, codec: JsonCodecService, server_software: str) -> None:
        """Initialize the echo controller.

        Args:
            codec: Decoder/encoder for request and response bodies
            server_software: Value reported as ``SERVER_SOFTWARE``
        """
        self.codec = codec
        self.server_software = server_software

    @classmethod
    def from_config(cls, config: AppConfig) -> EchoController:
        name, version = _load_project_metadata()
        codec = JsonCodecService(
            max_depth=config.echo.max_depth, indent=config.echo.indent
        )
        return cls(codec, server_software=f"{name}/{version}")

    async def handle_request(self, request: Request) -> Response:
        if request.method == "GET":
            return self.describe_request(request)
        return await self.echo_body(request)

    def describe_request(self, request: Request) -> Response:
        metadata = RequestMetadata.from_request(
            request, server_software=self.server_software, received_at=time.time()
        )
        return self._respond(metadata.to_environ())

    async def echo_body(self, request: Request) -> Response:
        """Decode the request body and send the decoded value back.

        Raises:
            InvalidJSONError: If the body is not valid JSON
        """
        body = await request.body()
        try:
            value = self.codec.decode(body)
        except InvalidJSONError as e:
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug(
                    f"Rejected {request.method} body ({len(body)} bytes): {e.details}"
                )
            raise
        return self._respond(value)

    def _respond(self, content: object) -> Response:
        return PrettyJSONResponse(content, indent=self.codec.indent)


def get_echo_controller(request: Request) -> EchoController:
    """Get the echo controller built for this application."""
    controller = getattr(request.app.state, "echo_controller", None)
    if controller is None:
        config = getattr(request.app.state, "app_config", None) or AppConfig()
        controller = EchoController.from_config(config)
        request.app.state.echo_controller = controller
    return controller  # type: ignore[no-any-return]


@router.api_route("/{path:path}", methods=ECHO_METHODS, include_in_schema=False)
async def echo(
    request: Request,
    controller: EchoController = Depends(get_echo_controller),
) -> Response:
    """Report request metadata on GET, echo the JSON body otherwise."""
    return await controller.handle_request(request)
