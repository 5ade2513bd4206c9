"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
jsonapi-connect, a product of Garudex Labs

HTTP transport adapters.

``RequestsTransport`` (the default) is backed by a ``requests.Session``;
``HttpxTransport`` is backed by a synchronous ``httpx.Client``. Both turn
library-level failures into :class:`~jsonapi_connect.exceptions.TransportError`
and never retry.
"""

from __future__ import annotations

import time
from typing import Any, Dict, Mapping, Optional

import httpx
import requests
from requests.adapters import HTTPAdapter

from jsonapi_connect.adapters.base import BaseTransport, RawResponse
from jsonapi_connect.exceptions import TransportError
from jsonapi_connect.logging_config import (
    get_logger,
    log_http_request,
    log_transport_failure,
)

logger = get_logger(__name__)


class RequestsTransport(BaseTransport):
    """Default HTTP transport using ``requests.Session``.

    Options are any keyword arguments ``requests.Session.request`` accepts
    (``timeout``, ``verify``, ``proxies``, ``auth``, ``allow_redirects`` ...).

    ``requests.Session`` is not documented as thread-safe; share a transport
    across threads only with external locking.
    """

    def __init__(
        self,
        base_url: str,
        headers: Optional[Mapping[str, str]] = None,
        options: Optional[Mapping[str, Any]] = None,
    ) -> None:
        super().__init__(base_url, headers=headers, options=options)
        self.session = requests.Session()

        # One round-trip per call: no urllib3 retries
        adapter = HTTPAdapter(max_retries=0, pool_connections=10, pool_maxsize=20)
        self.session.mount("http://", adapter)
        self.session.mount("https://", adapter)
        self.session.headers.update(self._headers)

    def _send(
        self,
        method: str,
        path: str,
        params: Optional[Mapping[str, Any]],
        options: Mapping[str, Any],
    ) -> RawResponse:
        url = self.url_for(path)
        kwargs = self.merge_options(options)
        params = {**dict(kwargs.pop("params", None) or {}), **dict(params or {})}
        start = time.monotonic()

        try:
            if method == "HEAD":
                resp = self.session.head(url, **kwargs)
            else:
                resp = self.session.get(url, params=params, **kwargs)
        except requests.exceptions.RequestException as e:
            log_transport_failure(logger, method, url, e)
            raise TransportError(f"{method} {url} failed: {e}") from e

        elapsed = round((time.monotonic() - start) * 1000, 2)
        log_http_request(logger, method, resp.url, resp.status_code, elapsed)

        return RawResponse(
            status_code=resp.status_code,
            headers=resp.headers,
            content=resp.content,
            reason=resp.reason or "",
            url=resp.url,
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
        if self.session:
            self.session.close()
            logger.debug("Closed requests transport session")


# httpx fixes these when the client is built; they cannot vary per request.
_HTTPX_CLIENT_OPTIONS = frozenset(
    {"verify", "cert", "proxy", "mounts", "trust_env", "http1", "http2", "limits", "transport"}
)


class HttpxTransport(BaseTransport):
    """HTTP transport using a synchronous ``httpx.Client``.

    Default options named in ``_HTTPX_CLIENT_OPTIONS`` (``verify``,
    ``transport`` ...) configure the client; the rest (``timeout``,
    ``follow_redirects``, ``auth`` ...) are sent with every request.

    httpx cannot change client-level options per request, so a call that
    passes one (e.g. ``verify=False``) is sent through a short-lived client
    built from the default client options overlaid with the per-call ones.
    """

    def __init__(
        self,
        base_url: str,
        headers: Optional[Mapping[str, str]] = None,
        options: Optional[Mapping[str, Any]] = None,
    ) -> None:
        options = dict(options or {})
        client_options = {
            key: options.pop(key) for key in list(options) if key in _HTTPX_CLIENT_OPTIONS
        }
        super().__init__(base_url, headers=headers, options=options)
        self._client_options = client_options
        self._client: Optional[httpx.Client] = None

    def _ensure_client(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(headers=self._headers, **self._client_options)
        return self._client

    def _send(
        self,
        method: str,
        path: str,
        params: Optional[Mapping[str, Any]],
        options: Mapping[str, Any],
    ) -> RawResponse:
        options = dict(options)
        call_client_options = {
            key: options.pop(key) for key in list(options) if key in _HTTPX_CLIENT_OPTIONS
        }
        url = self.url_for(path)
        kwargs: Dict[str, Any] = self.merge_options(options)
        params = {**dict(kwargs.pop("params", None) or {}), **dict(params or {})}
        if params:
            kwargs["params"] = params
        start = time.monotonic()

        try:
            if call_client_options:
                with httpx.Client(
                    headers=self._headers,
                    **{**self._client_options, **call_client_options},
                ) as client:
                    resp = client.request(method, url, **kwargs)
            else:
                resp = self._ensure_client().request(method, url, **kwargs)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            log_transport_failure(logger, method, url, e)
            raise TransportError(f"{method} {url} failed: {e}") from e

        elapsed = round((time.monotonic() - start) * 1000, 2)
        log_http_request(logger, method, str(resp.url), resp.status_code, elapsed)

        return RawResponse(
            status_code=resp.status_code,
            headers=dict(resp.headers),
            content=resp.content,
            reason=resp.reason_phrase or "",
            url=str(resp.url),
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
        if self._client:
            self._client.close()
            self._client = None
            logger.debug("Closed httpx transport client")
