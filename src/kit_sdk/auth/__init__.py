"""Authentication header providers for the Kit API."""

from .base import BaseAuthProvider
from .registry import ProviderRegistry, register_provider
from .providers import API_KEY_HEADER, ApiKeyProvider, OAuthProvider

__all__ = [
    "API_KEY_HEADER",
    "ApiKeyProvider",
    "BaseAuthProvider",
    "OAuthProvider",
    "ProviderRegistry",
    "register_provider",
]
