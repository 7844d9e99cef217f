"""
Request metadata reported by the echo endpoint on GET.

The field set is fixed and follows CGI naming so that the output reads like a
server environment regardless of which ASGI server hosts the application.
"""

from __future__ import annotations

import time
from typing import Any

from pydantic import Field
from starlette.requests import Request

from json_echo.core.interfaces.model_bases import DomainModel

_HEADER_FIELDS = {
    "content-type": "CONTENT_TYPE",
    "content-length": "CONTENT_LENGTH",
}


def header_environ_key(name: str) -> str:
    """Map an HTTP header name to its CGI environment key."""
    lowered = name.lower()
    if lowered in _HEADER_FIELDS:
        return _HEADER_FIELDS[lowered]
    return "HTTP_" + lowered.upper().replace("-", "_")


class RequestMetadata(DomainModel):
    """Server and request environment for a single request."""

    request_method: str
    request_uri: str
    script_name: str = ""
    path_info: str
    query_string: str = ""
    request_scheme: str = "http"
    server_protocol: str = "HTTP/1.1"
    server_software: str
    server_name: str = ""
    server_addr: str = ""
    server_port: str = ""
    remote_addr: str = ""
    remote_port: str = ""
    content_type: str = ""
    content_length: str = ""
    http_headers: dict[str, str] = Field(default_factory=dict)
    request_time_float: float

    @classmethod
    def from_request(
        cls,
        request: Request,
        *,
        server_software: str,
        received_at: float | None = None,
    ) -> RequestMetadata:
        scope = request.scope
        query_string = scope.get("query_string", b"").decode("latin-1")
        raw_path = scope.get("raw_path")
        path = raw_path.decode("latin-1") if raw_path else scope.get("path", "/")
        request_uri = f"{path}?{query_string}" if query_string else path

        content_type = ""
        content_length = ""
        http_headers: dict[str, str] = {}
        for raw_name, raw_value in request.headers.raw:
            key = header_environ_key(raw_name.decode("latin-1"))
            value = raw_value.decode("latin-1")
            if key == "CONTENT_TYPE":
                content_type = value
            elif key == "CONTENT_LENGTH":
                content_length = value
            elif key in http_headers:
                http_headers[key] = f"{http_headers[key]}, {value}"
            else:
                http_headers[key] = value

        server = scope.get("server")
        server_addr = server[0] if server else ""
        server_port = str(server[1]) if server and server[1] is not None else ""
        server_name = request.url.hostname or server_addr

        client = request.client
        return cls(
            request_method=request.method,
            request_uri=request_uri,
            script_name=scope.get("root_path", ""),
            path_info=scope.get("path", "/"),
            query_string=query_string,
            request_scheme=scope.get("scheme", "http"),
            server_protocol=f"HTTP/{scope.get('http_version', '1.1')}",
            server_software=server_software,
            server_name=server_name,
            server_addr=server_addr,
            server_port=server_port,
            remote_addr=client.host if client else "",
            remote_port=str(client.port) if client else "",
            content_type=content_type,
            content_length=content_length,
            http_headers=http_headers,
            request_time_float=time.time() if received_at is None else received_at,
        )

    def to_environ(self) -> dict[str, Any]:
        """Render the metadata as an ordered CGI-style mapping."""
        environ: dict[str, Any] = {
            "REQUEST_METHOD": self.request_method,
            "REQUEST_URI": self.request_uri,
            "SCRIPT_NAME": self.script_name,
            "PATH_INFO": self.path_info,
            "QUERY_STRING": self.query_string,
            "REQUEST_SCHEME": self.request_scheme,
            "SERVER_PROTOCOL": self.server_protocol,
            "SERVER_SOFTWARE": self.server_software,
            "SERVER_NAME": self.server_name,
            "SERVER_ADDR": self.server_addr,
            "SERVER_PORT": self.server_port,
            "REMOTE_ADDR": self.remote_addr,
            "REMOTE_PORT": self.remote_port,
            "CONTENT_TYPE": self.content_type,
            "CONTENT_LENGTH": self.content_length,
        }
        environ.update(self.http_headers)
        environ["REQUEST_TIME"] = int(self.request_time_float)
        environ["REQUEST_TIME_FLOAT"] = self.request_time_float
        return environ
