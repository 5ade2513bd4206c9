"""
Configuration management for jsonapi-connect.

``ConnectionConfig`` is the immutable per-connection configuration value.
``load_config`` reads optional YAML settings with sensible defaults and
validation, supporting environment variable substitution using
``${ENV_VAR}`` / ``${ENV_VAR:default}`` syntax.
"""

import logging as std_logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

import yaml

from jsonapi_connect.exceptions import InvalidConfigurationError
from jsonapi_connect.logging_config import get_logger, setup_logging

logger = get_logger(__name__)

DEFAULT_BASE_URL = "http://localhost:8088"
DEFAULT_VERSION = "v1"
DEFAULT_CONTENT_TYPE = "application/vnd.api+json"
DEFAULT_TRANSPORT = "requests"

VALID_TRANSPORTS = ("requests", "httpx")


def _expand_env_vars(value: Any) -> Any:
    """
    Recursively expand environment variables in configuration values.
    
    Supports ${ENV_VAR} syntax with optional default values: ${ENV_VAR:default}
    
    Examples:
        "${JSONAPI_URL}" -> value of JSONAPI_URL env var
        "${JSONAPI_URL:http://localhost:8088}" -> value of JSONAPI_URL or the default
    """
    if isinstance(value, str):
        pattern = r'\$\{([^}:]+)(?::([^}]*))?\}'
        
        def replace_env_var(match):
            var_name = match.group(1)
            default_value = match.group(2) if match.group(2) is not None else ""
            return os.environ.get(var_name, default_value)
        
        return re.sub(pattern, replace_env_var, value)
    elif isinstance(value, dict):
        return {k: _expand_env_vars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [_expand_env_vars(item) for item in value]
    else:
        return value


@dataclass(frozen=True)
class ConnectionConfig:
    """
    Immutable configuration of one connection.

    ``headers`` always ends with a ``Content-Type`` entry equal to
    ``content_type``; any caller-supplied Content-Type is replaced.
    ``headers`` and ``transport_options`` are read-only mappings.
    The config compares by value but is not hashable.
    """
    
    base_url: str = DEFAULT_BASE_URL
    version: str = DEFAULT_VERSION
    content_type: str = DEFAULT_CONTENT_TYPE
    headers: Mapping[str, str] = field(default_factory=dict)
    transport_options: Mapping[str, Any] = field(default_factory=dict)

    # Read-only mapping fields cannot be hashed
    __hash__ = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        headers = {
            name: value
            for name, value in dict(self.headers or {}).items()
            if name.lower() != "content-type"
        }
        headers["Content-Type"] = self.content_type
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))
        object.__setattr__(self, "version", self.version.strip("/"))
        object.__setattr__(self, "headers", MappingProxyType(headers))
        object.__setattr__(
            self, "transport_options", MappingProxyType(dict(self.transport_options or {}))
        )


@dataclass
class ConnectionSettings:
    """Connection section of the settings file."""
    
    base_url: str = DEFAULT_BASE_URL
    version: str = DEFAULT_VERSION
    content_type: str = DEFAULT_CONTENT_TYPE
    headers: Dict[str, str] = field(default_factory=dict)
    transport: str = DEFAULT_TRANSPORT  # "requests" or "httpx"
    transport_options: Dict[str, Any] = field(default_factory=dict)

    def to_connection_config(self) -> ConnectionConfig:
        return ConnectionConfig(
            base_url=self.base_url,
            version=self.version,
            content_type=self.content_type,
            headers=self.headers,
            transport_options=self.transport_options,
        )


@dataclass
class LoggingConfig:
    """Logging configuration."""
    
    level: str = "INFO"
    json_format: bool = True
    file: str = ""

    def apply(self) -> None:
        """Configure structured logging from these settings."""
        setup_logging(
            level=self.level,
            log_file=Path(self.file) if self.file else None,
            json_format=self.json_format,
        )


@dataclass
class ClientSettings:
    """Top-level settings."""
    
    connection: ConnectionSettings = field(default_factory=ConnectionSettings)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def get_default_config_path() -> str:
    """Get the default configuration file path."""
    return os.path.expanduser("~/.jsonapi_connect/config.yaml")


def get_default_config() -> ClientSettings:
    """Get default settings."""
    return ClientSettings()


def load_config(config_path: Optional[str] = None) -> ClientSettings:
    """
    Load settings from a YAML file with validation.
    
    If the file is not found or is empty, returns default settings.
    
    Args:
        config_path: Path to configuration file. If None, uses default path.
    
    Returns:
        ClientSettings: Loaded and validated settings
    
    Raises:
        InvalidConfigurationError: If the file is malformed or a value is invalid
    """
    if config_path is None:
        config_path = get_default_config_path()
    
    config_path = os.path.expanduser(str(config_path))
    
    if not os.path.exists(config_path):
        logger.info(f"Configuration file not found at {config_path}, using defaults")
        return get_default_config()
    
    try:
        with open(config_path, 'r') as f:
            config_data = yaml.safe_load(f)
        logger.debug(f"Loaded configuration from {config_path}")
    except yaml.YAMLError as e:
        logger.error(f"Failed to parse YAML configuration file '{config_path}': {e}")
        raise InvalidConfigurationError(
            f"Failed to parse YAML configuration file '{config_path}': {e}"
        ) from e
    except OSError as e:
        logger.error(f"Failed to read configuration file '{config_path}': {e}")
        raise InvalidConfigurationError(
            f"Failed to read configuration file '{config_path}': {e}"
        ) from e
    
    if config_data is None:
        logger.info(f"Configuration file {config_path} is empty, using defaults")
        return get_default_config()
    
    if not isinstance(config_data, dict):
        raise InvalidConfigurationError(
            f"Configuration file '{config_path}' must contain a mapping at the top level"
        )
    
    config_data = _expand_env_vars(config_data)
    
    try:
        config = _build_config_from_dict(config_data)
    except (TypeError, ValueError) as e:
        logger.error(f"Invalid configuration in '{config_path}': {e}")
        raise InvalidConfigurationError(
            f"Invalid configuration in '{config_path}': {e}"
        ) from e
    
    _validate_config(config)
    logger.info(f"Successfully loaded and validated configuration from {config_path}")
    return config


def _section(config_data: Dict[str, Any], name: str) -> Dict[str, Any]:
    section = config_data.get(name) or {}
    if not isinstance(section, dict):
        raise InvalidConfigurationError(f"'{name}' section must be a mapping")
    return section


def _build_config_from_dict(config_data: Dict[str, Any]) -> ClientSettings:
    """
    Build ClientSettings from a dictionary loaded from YAML.
    
    Missing keys fall back to defaults. Unknown keys are rejected.
    """
    defaults = get_default_config()
    
    connection_data = _section(config_data, 'connection')
    connection = ConnectionSettings(
        base_url=str(connection_data.get('base_url', defaults.connection.base_url)),
        version=str(connection_data.get('version', defaults.connection.version)),
        content_type=str(connection_data.get('content_type', defaults.connection.content_type)),
        headers={
            str(k): str(v) for k, v in (connection_data.get('headers') or {}).items()
        },
        transport=str(connection_data.get('transport', defaults.connection.transport)),
        transport_options=dict(connection_data.get('transport_options') or {}),
    )
    unknown = set(connection_data) - set(ConnectionSettings.__dataclass_fields__)
    if unknown:
        raise InvalidConfigurationError(
            f"Unknown keys in 'connection' section: {', '.join(sorted(unknown))}"
        )
    
    logging_data = _section(config_data, 'logging')
    logging = LoggingConfig(
        level=str(logging_data.get('level', defaults.logging.level)),
        json_format=bool(logging_data.get('json_format', defaults.logging.json_format)),
        file=str(logging_data.get('file') or defaults.logging.file),
    )
    
    return ClientSettings(connection=connection, logging=logging)


def _validate_config(config: ClientSettings) -> None:
    """
    Validate configuration values.
    
    Raises:
        InvalidConfigurationError: If configuration is invalid
    """
    conn = config.connection
    if not conn.base_url.startswith(("http://", "https://")):
        logger.error(f"Configuration validation failed: base_url '{conn.base_url}' is not an http(s) URL")
        raise InvalidConfigurationError(
            f"base_url must start with http:// or https://, got '{conn.base_url}'"
        )
    if not conn.version.strip("/"):
        raise InvalidConfigurationError("version cannot be empty")
    if not conn.content_type:
        raise InvalidConfigurationError("content_type cannot be empty")
    if conn.transport not in VALID_TRANSPORTS:
        raise InvalidConfigurationError(
            f"transport must be one of {VALID_TRANSPORTS}, got '{conn.transport}'"
        )
    
    level = config.logging.level.upper()
    if not isinstance(std_logging.getLevelName(level), int):
        raise InvalidConfigurationError(f"Unknown logging level '{config.logging.level}'")
