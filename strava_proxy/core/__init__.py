"""Core configuration and infrastructure helpers."""

from .config import ConfigError, Settings, get_settings
from .errors import (
    AuthRequiredError,
    ProxyError,
    SessionStoreError,
    UpstreamError,
    ValidationError,
)
from .logging import configure_logging

__all__ = [
    "AuthRequiredError",
    "ConfigError",
    "ProxyError",
    "SessionStoreError",
    "Settings",
    "UpstreamError",
    "ValidationError",
    "configure_logging",
    "get_settings",
]
