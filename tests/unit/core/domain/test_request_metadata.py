from typing import Any

from starlette.requests import Request

from json_echo.core.domain.request_metadata import RequestMetadata, header_environ_key


def make_request(**overrides: Any) -> Request:
    scope: dict[str, Any] = {
        "type": "http",
        "http_version": "1.1",
        "method": "POST",
        "scheme": "https",
        "path": "/api/items",
        "raw_path": b"/api/items",
        "root_path": "",
        "query_string": b"page=2",
        "headers": [
            (b"host", b"echo.example.com"),
            (b"content-type", b"application/json"),
            (b"content-length", b"2"),
            (b"x-forwarded-for", b"10.0.0.1"),
            (b"x-forwarded-for", b"10.0.0.2"),
        ],
        "client": ("192.0.2.10", 40123),
        "server": ("10.1.1.1", 8443),
    }
    scope.update(overrides)
    return Request(scope)


def test_header_environ_key() -> None:
    assert header_environ_key("User-Agent") == "HTTP_USER_AGENT"
    assert header_environ_key("x-request-id") == "HTTP_X_REQUEST_ID"
    assert header_environ_key("Content-Type") == "CONTENT_TYPE"
    assert header_environ_key("content-length") == "CONTENT_LENGTH"


def test_from_request_collects_cgi_fields() -> None:
    metadata = RequestMetadata.from_request(
        make_request(), server_software="json-echo-service/1.0", received_at=1700000000.25
    )

    environ = metadata.to_environ()

    assert environ["REQUEST_METHOD"] == "POST"
    assert environ["REQUEST_URI"] == "/api/items?page=2"
    assert environ["PATH_INFO"] == "/api/items"
    assert environ["QUERY_STRING"] == "page=2"
    assert environ["REQUEST_SCHEME"] == "https"
    assert environ["SERVER_NAME"] == "echo.example.com"
    assert environ["SERVER_ADDR"] == "10.1.1.1"
    assert environ["SERVER_PORT"] == "8443"
    assert environ["REMOTE_ADDR"] == "192.0.2.10"
    assert environ["REMOTE_PORT"] == "40123"
    assert environ["CONTENT_TYPE"] == "application/json"
    assert environ["CONTENT_LENGTH"] == "2"
    assert environ["SERVER_SOFTWARE"] == "json-echo-service/1.0"
    assert environ["REQUEST_TIME"] == 1700000000
    assert environ["REQUEST_TIME_FLOAT"] == 1700000000.25


def test_repeated_headers_are_joined() -> None:
    environ = RequestMetadata.from_request(
        make_request(), server_software="x", received_at=0.0
    ).to_environ()

    assert environ["HTTP_X_FORWARDED_FOR"] == "10.0.0.1, 10.0.0.2"
    assert environ["HTTP_HOST"] == "echo.example.com"
    assert "HTTP_CONTENT_TYPE" not in environ


def test_key_order_is_stable() -> None:
    environ = RequestMetadata.from_request(
        make_request(), server_software="x", received_at=0.0
    ).to_environ()

    keys = list(environ)
    assert keys[:3] == ["REQUEST_METHOD", "REQUEST_URI", "SCRIPT_NAME"]
    assert keys[-2:] == ["REQUEST_TIME", "REQUEST_TIME_FLOAT"]
    assert keys.index("CONTENT_LENGTH") < keys.index("HTTP_HOST")


def test_missing_client_and_server() -> None:
    request = make_request(client=None, server=None, headers=[], query_string=b"")

    environ = RequestMetadata.from_request(
        request, server_software="x", received_at=0.0
    ).to_environ()

    assert environ["REMOTE_ADDR"] == ""
    assert environ["REMOTE_PORT"] == ""
    assert environ["SERVER_ADDR"] == ""
    assert environ["SERVER_PORT"] == ""
    assert environ["REQUEST_URI"] == "/api/items"
    assert environ["CONTENT_TYPE"] == ""
    assert not [key for key in environ if key.startswith("HTTP_")]


def test_root_path_is_reported_as_script_name() -> None:
    environ = RequestMetadata.from_request(
        make_request(root_path="/echo"), server_software="x", received_at=0.0
    ).to_environ()

    assert environ["SCRIPT_NAME"] == "/echo"
