"""
Configuration management for jsonapi-connect.

Handles the immutable connection configuration and loading of settings files.
"""

from jsonapi_connect.config.settings import (
    DEFAULT_BASE_URL,
    DEFAULT_CONTENT_TYPE,
    DEFAULT_VERSION,
    ClientSettings,
    ConnectionConfig,
    ConnectionSettings,
    LoggingConfig,
    get_default_config,
    get_default_config_path,
    load_config,
)

__all__ = [
    "DEFAULT_BASE_URL",
    "DEFAULT_CONTENT_TYPE",
    "DEFAULT_VERSION",
    "ClientSettings",
    "ConnectionConfig",
    "ConnectionSettings",
    "LoggingConfig",
    "get_default_config",
    "get_default_config_path",
    "load_config",
]
