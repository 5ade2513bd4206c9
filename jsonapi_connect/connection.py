"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
jsonapi-connect, a product of Garudex Labs

Connection to a JSON:API server.

Quick start::

    from jsonapi_connect import connect

    conn = connect("http://localhost:8088")
    conn.status()                          # "OK (200)"
    conn.routes()                          # the version root document
    conn.route("authors/1", include="books")

Transport options (``timeout``, ``verify``, ...) can be set for every
request on ``connect()`` or for one request on each call::

    conn = connect("http://localhost:8088", timeout=10)
    conn.route("chapters/5", timeout=2)
"""

from __future__ import annotations

from http import HTTPStatus
from typing import Any, Callable, Mapping, Optional, Union

from jsonapi_connect.adapters import TRANSPORTS
from jsonapi_connect.adapters.base import BaseTransport, RawResponse
from jsonapi_connect.config.settings import (
    DEFAULT_BASE_URL,
    DEFAULT_CONTENT_TYPE,
    DEFAULT_VERSION,
    ClientSettings,
    ConnectionConfig,
)
from jsonapi_connect.logging_config import get_logger
from jsonapi_connect.query import IncludeSpec, compose_query, join_path
from jsonapi_connect.resolver import ErrorHandler, as_error_handler

logger = get_logger(__name__)

TransportFactory = Callable[..., BaseTransport]
ErrorHandlerLike = Union[ErrorHandler, Callable[[RawResponse], Any], None]


def status_message(response: RawResponse) -> str:
    """Standard reason phrase for the status, else the server's, else "Unknown"."""
    try:
        return HTTPStatus(response.status_code).phrase
    except ValueError:
        return response.reason or "Unknown"


class Connection:
    """A reusable client for one JSON:API server.

    Configuration is fixed at construction and exposed read-only. Each
    operation issues exactly one blocking request through the transport;
    nothing is retried or cached.

    A connection may be shared between call sites, but the default
    transports (``requests.Session``, ``httpx.Client``) are not documented
    as thread-safe: callers using one connection from several threads must
    serialise calls themselves.

    Args:
        config: Connection configuration.
        transport: Transport class or factory called as
            ``factory(base_url, headers=..., options=...)``. Defaults to
            :class:`~jsonapi_connect.adapters.RequestsTransport`.
    """

    def __init__(
        self,
        config: Optional[ConnectionConfig] = None,
        transport: Optional[TransportFactory] = None,
    ) -> None:
        self._config = config or ConnectionConfig()
        factory = transport or TRANSPORTS["requests"]
        self._transport = factory(
            self._config.base_url,
            headers=dict(self._config.headers),
            options=dict(self._config.transport_options),
        )
        logger.debug(
            "connection_created",
            base_url=self._config.base_url,
            version=self._config.version,
            transport=type(self._transport).__name__,
        )

    @classmethod
    def from_settings(
        cls,
        settings: ClientSettings,
        transport: Optional[TransportFactory] = None,
    ) -> Connection:
        """Build a connection from loaded settings.

        ``transport`` overrides the transport named in the settings.
        """
        factory = transport or TRANSPORTS[settings.connection.transport]
        return cls(settings.connection.to_connection_config(), transport=factory)

    # -- Read-only configuration -------------------------------------------

    @property
    def config(self) -> ConnectionConfig:
        return self._config

    @property
    def url(self) -> str:
        """Base URL, without the version segment."""
        return self._config.base_url

    def base_url(self) -> str:
        return self._config.base_url

    @property
    def version(self) -> str:
        return self._config.version

    @property
    def content_type(self) -> str:
        return self._config.content_type

    @property
    def headers(self) -> Mapping[str, str]:
        return self._config.headers

    @property
    def opts(self) -> Mapping[str, Any]:
        """Default transport options applied to every request."""
        return self._config.transport_options

    @property
    def transport(self) -> BaseTransport:
        return self._transport

    # -- Operations ----------------------------------------------------------

    def status(self, **transport_options: Any) -> str:
        """Probe the version root with a HEAD request.

        Returns:
            ``"<status message> (<status code>)"``, e.g. ``"OK (200)"``.
            Non-2xx statuses are reported, not raised.

        Raises:
            TransportError: If no response was received.
        """
        response = self._transport.head(join_path(self.version), **transport_options)
        return f"{status_message(response)} ({response.status_code})"

    def routes(self, **transport_options: Any) -> Any:
        """Fetch the version root document listing the routes the server supports.

        The body is decoded whatever the status code.

        Raises:
            TransportError: If no response was received.
            DecodeError: If the body is not valid JSON.
        """
        response = self._transport.get(join_path(self.version), **transport_options)
        return response.json()

    def route(
        self,
        endpoint: str,
        query: Optional[Mapping[str, Any]] = None,
        include: IncludeSpec = None,
        error_handler: ErrorHandlerLike = None,
        **transport_options: Any,
    ) -> Any:
        """Fetch a route.

        Args:
            endpoint: Path relative to the version root, e.g. ``"authors/1/books"``.
            query: Query parameters, e.g. ``{"filter[name]": "Ada"}``. Empty
                values are dropped.
                A ``params=`` transport option is merged under ``query``.
            include: Relationship paths to embed in ``included``, as a
                comma-separated string or a list of paths.
            error_handler: Strategy with ``resolve(response)``, or a plain
                callable, consulted before the body is decoded. Defaults to
                :class:`~jsonapi_connect.resolver.ResponseResolver`.
            **transport_options: Per-request transport options.

        Returns:
            The decoded document. When the error handler returns a value
            (a JSON:API error document for the default handler), that value
            is returned instead.

        Raises:
            ValueError: If ``endpoint`` is empty.
            TransportError: If no response was received.
            GenericHttpError: From the default handler, for non-JSON:API failures.
            DecodeError: If a body that must be decoded is not valid JSON.
        """
        if not endpoint or not endpoint.strip("/"):
            raise ValueError("endpoint is required")

        handler = as_error_handler(error_handler)
        # A transport-level params option is folded into the query; query wins.
        extra_params = transport_options.pop("params", None) or {}
        params = compose_query({**dict(extra_params), **dict(query or {})}, include)
        response = self._transport.get(
            join_path(self.version, endpoint),
            params=params,
            **transport_options,
        )

        resolved = handler.resolve(response)
        if resolved is not None:
            return resolved
        return response.json()

    # -- Lifecycle -----------------------------------------------------------

    def close(self) -> None:
        """Release the transport."""
        self._transport.close()

    def __enter__(self) -> Connection:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"<Connection {self.url}/{self.version}>"


def connect(
    base_url: Optional[str] = None,
    version: Optional[str] = None,
    content_type: Optional[str] = None,
    headers: Optional[Mapping[str, str]] = None,
    transport: Optional[TransportFactory] = None,
    **transport_options: Any,
) -> Connection:
    """Create a :class:`Connection`.

    No network I/O happens here; a malformed URL surfaces on the first
    request as a ``TransportError``.

    Args:
        base_url: Base URL without the version, e.g. ``"http://localhost:8088"``.
        version: API version path segment. Default ``"v1"``.
        content_type: Content-Type header sent with every request. Default
            ``"application/vnd.api+json"``.
        headers: Headers applied to every request.
        transport: Transport class or factory. Default ``RequestsTransport``.
        **transport_options: Default options for every request.
    """
    config = ConnectionConfig(
        base_url=base_url if base_url is not None else DEFAULT_BASE_URL,
        version=version if version is not None else DEFAULT_VERSION,
        content_type=content_type if content_type is not None else DEFAULT_CONTENT_TYPE,
        headers=headers or {},
        transport_options=transport_options,
    )
    return Connection(config, transport=transport)
