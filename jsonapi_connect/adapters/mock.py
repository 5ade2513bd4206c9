"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
jsonapi-connect, a product of Garudex Labs

Mock transport for local testing.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

from jsonapi_connect.adapters.base import BaseTransport, RawResponse


@dataclass
class SentRequest:
    """A request recorded by :class:`MockTransport`."""
    method: str
    path: str
    url: str
    params: Dict[str, Any] = field(default_factory=dict)
    options: Dict[str, Any] = field(default_factory=dict)


class MockTransport(BaseTransport):
    """In-memory transport for unit tests.

    Args:
        base_url: Root URL recorded on each sent request.
        headers: Default headers.
        options: Default per-request options.
        responses: Mapping from ``(method, path)`` tuples to ``RawResponse``
            instances. ``path`` is the version-prefixed path without the base
            URL, e.g. ``("GET", "v1/authors/1")``.

    Example::

        transport = MockTransport(
            "http://localhost:8088",
            responses={("GET", "v1"): RawResponse(status_code=200, content=b"{}")},
        )
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8088",
        headers: Optional[Mapping[str, str]] = None,
        options: Optional[Mapping[str, Any]] = None,
        responses: Optional[Dict[Tuple[str, str], RawResponse]] = None,
    ) -> None:
        super().__init__(base_url, headers=headers, options=options)
        self._responses: Dict[Tuple[str, str], RawResponse] = {}
        self._sent: List[SentRequest] = []
        for (method, path), response in (responses or {}).items():
            self.add_response(method, path, response)

    def add_response(self, method: str, path: str, response: RawResponse) -> None:
        self._responses[(method.upper(), path.strip("/"))] = response

    def _send(
        self,
        method: str,
        path: str,
        params: Optional[Mapping[str, Any]],
        options: Mapping[str, Any],
    ) -> RawResponse:
        path = path.strip("/")
        url = self.url_for(path)
        self._sent.append(
            SentRequest(
                method=method,
                path=path,
                url=url,
                params=dict(params or {}),
                options=self.merge_options(options),
            )
        )
        if (method, path) in self._responses:
            return self._responses[(method, path)]
        return RawResponse(
            status_code=404,
            headers={"Content-Type": "text/plain"},
            content=b"not mocked",
            reason="Not Found",
            url=url,
        )

    def head(self, path: str, **options: Any) -> RawResponse:
        return self._send("HEAD", path, None, options)

    def get(
        self,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        **options: Any,
    ) -> RawResponse:
        return self._send("GET", path, params, options)

    def close(self) -> None:
        self._responses.clear()
        self._sent.clear()

    @property
    def sent_requests(self) -> List[SentRequest]:
        """All requests that have been sent through this transport."""
        return list(self._sent)
