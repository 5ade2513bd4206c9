"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
jsonapi-connect, a product of Garudex Labs

Transport adapter base class and data structures.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from requests.structures import CaseInsensitiveDict

from jsonapi_connect.exceptions import DecodeError


@dataclass
class RawResponse:
    """Transport-level result handed to the response resolver.

    ``headers`` is case-insensitive, so ``headers["content-type"]`` works
    whatever casing the server used.
    """
    status_code: int
    headers: Mapping[str, str] = field(default_factory=CaseInsensitiveDict)
    content: bytes = b""
    reason: str = ""
    url: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.headers, CaseInsensitiveDict):
            self.headers = CaseInsensitiveDict(self.headers)
        if isinstance(self.content, str):
            self.content = self.content.encode("utf-8")

    @property
    def content_type(self) -> str:
        return self.headers.get("content-type", "")

    def text(self, encoding: str = "utf-8") -> str:
        """Decode the body, replacing undecodable bytes."""
        return self.content.decode(encoding, errors="replace")

    def json(self, encoding: str = "utf-8") -> Any:
        """Decode the body as JSON.

        Raises:
            DecodeError: If the body is not valid JSON or not valid ``encoding``.
        """
        try:
            text = self.content.decode(encoding)
        except UnicodeDecodeError as e:
            raise DecodeError(
                f"Response body from {self.url or 'server'} is not valid {encoding}: {e}",
                body=self.text(encoding),
            ) from e
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise DecodeError(
                f"Response body from {self.url or 'server'} is not valid JSON: {e}",
                body=text,
            ) from e


class BaseTransport(ABC):
    """Abstract base for all transports.

    A transport is bound to one base URL and carries default headers and
    default per-request options. Per-call options take precedence over the
    defaults; per-call ``headers`` are merged over the default headers.

    Args:
        base_url: Root URL requests are resolved against.
        headers: Headers sent with every request.
        options: Default keyword options for every request (e.g. ``timeout``).
    """

    def __init__(
        self,
        base_url: str,
        headers: Optional[Mapping[str, str]] = None,
        options: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._headers: Dict[str, str] = dict(headers or {})
        self._options: Dict[str, Any] = dict(options or {})

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def headers(self) -> Dict[str, str]:
        return dict(self._headers)

    @property
    def options(self) -> Dict[str, Any]:
        return dict(self._options)

    def url_for(self, path: str) -> str:
        """Resolve ``path`` against the base URL."""
        path = path.lstrip("/")
        if not path:
            return self._base_url
        return f"{self._base_url}/{path}"

    def merge_options(self, options: Mapping[str, Any]) -> Dict[str, Any]:
        """Return default options overlaid with per-call ``options``.

        A per-call ``headers`` option is merged over the default headers
        instead of replacing them.
        """
        merged = {**self._options, **options}
        merged["headers"] = {
            **self._headers,
            **dict(self._options.get("headers") or {}),
            **dict(options.get("headers") or {}),
        }
        return merged

    @abstractmethod
    def head(self, path: str, **options: Any) -> RawResponse:
        """Send a HEAD request and return the response."""
        ...

    @abstractmethod
    def get(
        self,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        **options: Any,
    ) -> RawResponse:
        """Send a GET request and return the response."""
        ...

    @abstractmethod
    def close(self) -> None:
        """Release transport resources."""
        ...
