"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
jsonapi-connect, a product of Garudex Labs

jsonapi-connect - a client for JSON:API servers.

Quick start::

    from jsonapi_connect import connect
    conn = connect("http://localhost:8088")
    conn.route("authors/1", include="books")
"""

from jsonapi_connect._version import __version__
from jsonapi_connect.adapters import (
    BaseTransport,
    HttpxTransport,
    MockTransport,
    RawResponse,
    RequestsTransport,
)
from jsonapi_connect.config import ClientSettings, ConnectionConfig, load_config
from jsonapi_connect.connection import Connection, connect
from jsonapi_connect.exceptions import (
    ConfigurationError,
    DecodeError,
    GenericHttpError,
    InvalidConfigurationError,
    JsonApiConnectError,
    TransportError,
)
from jsonapi_connect.query import compact, compose_query, join_path
from jsonapi_connect.resolver import ErrorHandler, ResponseResolver, as_error_handler

__all__ = [
    "__version__",
    # connection
    "connect",
    "Connection",
    "ConnectionConfig",
    # resolution
    "ErrorHandler",
    "ResponseResolver",
    "as_error_handler",
    # query
    "compact",
    "compose_query",
    "join_path",
    # transports
    "BaseTransport",
    "RawResponse",
    "RequestsTransport",
    "HttpxTransport",
    "MockTransport",
    # configuration
    "ClientSettings",
    "load_config",
    # errors
    "JsonApiConnectError",
    "TransportError",
    "GenericHttpError",
    "DecodeError",
    "ConfigurationError",
    "InvalidConfigurationError",
]
