from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from starlette.background import BackgroundTask
from starlette.responses import JSONResponse

from json_echo.core.constants import CONTENT_TYPE_JSON, DEFAULT_JSON_INDENT
from json_echo.core.services.json_codec_service import JsonCodecService


class PrettyJSONResponse(JSONResponse):
    """JSON response rendered with indentation and unescaped slashes."""

    media_type = CONTENT_TYPE_JSON

    def __init__(
        self,
        content: Any,
        status_code: int = 200,
        headers: Mapping[str, str] | None = None,
        background: BackgroundTask | None = None,
        *,
        indent: int = DEFAULT_JSON_INDENT,
    ) -> None:
        # render() runs inside the base initializer
        self._codec = JsonCodecService(indent=indent)
        super().__init__(content, status_code, headers, None, background)

    def render(self, content: Any) -> bytes:
        return self._codec.encode(content)
