"""
Exception hierarchy for jsonapi-connect.

All custom exceptions inherit from JsonApiConnectError base class.
JSON:API error documents returned by a server are not exceptions; the
default response resolver hands them back to the caller as data.
"""

from typing import Optional


class JsonApiConnectError(Exception):
    """Base exception for all jsonapi-connect errors."""
    pass


# Transport Errors
class TransportError(JsonApiConnectError):
    """Raised when the HTTP transport fails (connection refused, DNS, TLS, bad URL)."""
    pass


# Response Errors
class GenericHttpError(JsonApiConnectError):
    """
    Raised when a response has status > 300 and is not a JSON:API document.

    The exception message is the raw response body text.
    """

    def __init__(
        self,
        body: str,
        status_code: Optional[int] = None,
        url: Optional[str] = None,
    ):
        super().__init__(body)
        self.body = body
        self.status_code = status_code
        self.url = url


class DecodeError(JsonApiConnectError, ValueError):
    """Raised when a response body expected to be JSON cannot be parsed."""

    def __init__(self, message: str, body: str = ""):
        super().__init__(message)
        self.body = body


# Configuration Errors
class ConfigurationError(JsonApiConnectError):
    """Base exception for configuration-related errors."""
    pass


class InvalidConfigurationError(ConfigurationError):
    """Raised when configuration is invalid or malformed."""
    pass
