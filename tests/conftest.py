"""
Pytest configuration and shared fixtures for jsonapi-connect tests.
"""

import json
import tempfile
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path
from typing import Any, Callable, Dict, Generator, Tuple
from urllib.parse import parse_qs, urlsplit

import pytest

from jsonapi_connect.adapters.base import RawResponse
from jsonapi_connect.adapters.mock import MockTransport
from jsonapi_connect.connection import Connection, connect


JSONAPI = "application/vnd.api+json"

AUTHOR_1 = {
    "data": {
        "id": "1",
        "type": "authors",
        "attributes": {"name": "J. R. R. Tolkien"},
        "relationships": {"books": {"data": [{"type": "books", "id": "1"}]}},
    }
}

BOOK_1 = {"type": "books", "id": "1", "attributes": {"title": "The Hobbit"}}

ROUTES = {
    "links": {
        "authors": "http://localhost:8088/v1/authors",
        "books": "http://localhost:8088/v1/books",
        "chapters": "http://localhost:8088/v1/chapters",
    }
}

NOT_FOUND_DOCUMENT = {
    "errors": [{"status": "404", "title": "Not Found", "detail": "authors/56 not found"}]
}


def jsonapi_response(status_code: int, document: Any, content_type: str = JSONAPI) -> RawResponse:
    """Build a RawResponse carrying ``document`` encoded as JSON."""
    return RawResponse(
        status_code=status_code,
        headers={"Content-Type": content_type},
        content=json.dumps(document).encode("utf-8"),
    )


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """
    Create a temporary directory for test files.
    
    Yields:
        Path to temporary directory that is cleaned up after test.
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def make_response() -> Callable[..., RawResponse]:
    """Factory for RawResponse objects with a JSON body."""
    return jsonapi_response


@pytest.fixture
def author_document() -> Dict[str, Any]:
    return AUTHOR_1


@pytest.fixture
def not_found_document() -> Dict[str, Any]:
    return NOT_FOUND_DOCUMENT


@pytest.fixture
def mock_responses() -> Dict[Tuple[str, str], RawResponse]:
    """Canned responses of a small authors/books server."""
    return {
        ("HEAD", "v1"): RawResponse(status_code=200, reason="OK"),
        ("GET", "v1"): jsonapi_response(200, ROUTES),
        ("GET", "v1/authors/1"): jsonapi_response(200, AUTHOR_1),
        ("GET", "v1/authors/56"): jsonapi_response(404, NOT_FOUND_DOCUMENT),
        ("GET", "v1/foobar"): RawResponse(
            status_code=404,
            headers={"Content-Type": "text/plain"},
            content=b"not found",
        ),
    }


@pytest.fixture
def mock_connect(mock_responses) -> Callable[..., Connection]:
    """connect() wired to a MockTransport serving ``mock_responses``."""

    def factory(base_url, headers=None, options=None):
        return MockTransport(base_url, headers=headers, options=options, responses=mock_responses)

    def _connect(base_url: str = "http://localhost:8088", **kwargs: Any) -> Connection:
        return connect(base_url, transport=factory, **kwargs)

    return _connect


class _JsonApiHandler(BaseHTTPRequestHandler):
    """Tiny JSON:API server: /v1, /v1/authors/1, /v1/authors/56, anything else 404."""

    def log_message(self, format: str, *args: Any) -> None:
        pass

    def _record(self) -> Dict[str, Any]:
        parts = urlsplit(self.path)
        request = {
            "method": self.command,
            "path": parts.path,
            "query": parse_qs(parts.query),
            "headers": {name.lower(): value for name, value in self.headers.items()},
        }
        self.server.requests.append(request)  # type: ignore[attr-defined]
        return request

    def _reply(self, status: int, body: bytes, content_type: str) -> None:
        self.send_response(status)
        self.send_header("Content-Type", content_type)
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        if self.command != "HEAD":
            self.wfile.write(body)

    def _dispatch(self) -> None:
        request = self._record()
        path = request["path"].rstrip("/")
        if path == "/v1":
            self._reply(200, json.dumps(ROUTES).encode(), JSONAPI)
        elif path == "/v1/authors/1":
            document = dict(AUTHOR_1)
            if "books" in ",".join(request["query"].get("include", [])).split(","):
                document["included"] = [BOOK_1]
            self._reply(200, json.dumps(document).encode(), JSONAPI)
        elif path == "/v1/authors/56":
            self._reply(404, json.dumps(NOT_FOUND_DOCUMENT).encode(), JSONAPI)
        elif path == "/v1/broken":
            self._reply(200, b"{not json", JSONAPI)
        else:
            self._reply(404, b"not found", "text/plain")

    do_GET = _dispatch
    do_HEAD = _dispatch


@pytest.fixture
def jsonapi_server() -> Generator[ThreadingHTTPServer, None, None]:
    """Run the JSON:API test server on a free local port.

    ``server.requests`` lists every request received; ``server.base_url``
    is the root URL.
    """
    server = ThreadingHTTPServer(("127.0.0.1", 0), _JsonApiHandler)
    server.requests = []  # type: ignore[attr-defined]
    host, port = server.server_address[:2]
    server.base_url = f"http://{host}:{port}"  # type: ignore[attr-defined]
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        yield server
    finally:
        server.shutdown()
        server.server_close()
        thread.join(timeout=5)
