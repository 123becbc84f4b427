"""Configuration for the Kit SDK."""

from .settings import (
    DEFAULT_BASE_URL,
    DEFAULT_USER_AGENT,
    AuthMode,
    ClientConfig,
    Settings,
)

__all__ = [
    "AuthMode",
    "ClientConfig",
    "DEFAULT_BASE_URL",
    "DEFAULT_USER_AGENT",
    "Settings",
]
