"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
jsonapi-connect, a product of Garudex Labs

Transport adapters.
"""

from jsonapi_connect.adapters.base import BaseTransport, RawResponse
from jsonapi_connect.adapters.http import HttpxTransport, RequestsTransport
from jsonapi_connect.adapters.mock import MockTransport, SentRequest

TRANSPORTS = {
    "requests": RequestsTransport,
    "httpx": HttpxTransport,
}

__all__ = [
    "BaseTransport",
    "RawResponse",
    "RequestsTransport",
    "HttpxTransport",
    "MockTransport",
    "SentRequest",
    "TRANSPORTS",
]
