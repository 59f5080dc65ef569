"""Utility module for configuration and logging."""

from .config import AppConfig, AuthConfig, ServerConfig, StorageConfig
from .logging import configure_logging, request_info

__all__ = [
    "AppConfig",
    "AuthConfig",
    "ServerConfig",
    "StorageConfig",
    "configure_logging",
    "request_info",
]
