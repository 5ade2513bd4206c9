"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
jsonapi-connect, a product of Garudex Labs

Response resolution for ``Connection.route``.

An error handler looks at a completed response before its body is decoded
and either lets the request proceed (returns ``None``), hands back a
structured document to return instead, or raises.

The default :class:`ResponseResolver` treats any status up to and including
300 as success. Above 300, a body served as ``application/vnd.api+json`` is
decoded and returned so callers can inspect its ``errors`` array; any other
body is raised as :class:`~jsonapi_connect.exceptions.GenericHttpError`.
"""

from __future__ import annotations

from typing import Any, Callable, Protocol, Union, runtime_checkable

from jsonapi_connect.adapters.base import RawResponse
from jsonapi_connect.exceptions import GenericHttpError
from jsonapi_connect.logging_config import get_logger

logger = get_logger(__name__)

JSONAPI_MEDIA_TYPE = "application/vnd.api+json"

# Statuses up to and including this value are successful.
SUCCESS_STATUS_LIMIT = 300


@runtime_checkable
class ErrorHandler(Protocol):
    """Strategy consulted by ``Connection.route`` before decoding a response."""

    def resolve(self, response: RawResponse) -> Any:
        """Return ``None`` to proceed, a document to return it, or raise."""
        ...


def is_jsonapi_media_type(content_type: str) -> bool:
    """True when a Content-Type header names the JSON:API media type."""
    return JSONAPI_MEDIA_TYPE in (content_type or "").lower()


class ResponseResolver:
    """Default error handler."""

    def __init__(self, encoding: str = "utf-8") -> None:
        self.encoding = encoding

    def resolve(self, response: RawResponse) -> Any:
        if response.status_code <= SUCCESS_STATUS_LIMIT:
            return None

        if is_jsonapi_media_type(response.content_type):
            logger.debug(
                "jsonapi_error_document",
                status_code=response.status_code,
                url=response.url,
            )
            return response.json(self.encoding)

        logger.debug(
            "generic_http_error",
            status_code=response.status_code,
            url=response.url,
            content_type=response.content_type,
        )
        raise GenericHttpError(
            response.text(self.encoding),
            status_code=response.status_code,
            url=response.url,
        )

    def __call__(self, response: RawResponse) -> Any:
        return self.resolve(response)


class _CallableErrorHandler:
    """Adapts a plain ``f(response)`` function to :class:`ErrorHandler`."""

    def __init__(self, func: Callable[[RawResponse], Any]) -> None:
        self.func = func

    def resolve(self, response: RawResponse) -> Any:
        return self.func(response)


def as_error_handler(
    handler: Union[ErrorHandler, Callable[[RawResponse], Any], None],
) -> ErrorHandler:
    """Coerce ``handler`` to an :class:`ErrorHandler`.

    ``None`` selects the default :class:`ResponseResolver`.
    """
    if handler is None:
        return ResponseResolver()
    if isinstance(handler, ErrorHandler):
        return handler
    if callable(handler):
        return _CallableErrorHandler(handler)
    raise TypeError(
        f"error_handler must provide resolve(response) or be callable, got {type(handler).__name__}"
    )
