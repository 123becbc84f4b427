"""Built-in authentication providers.

Both providers register themselves with the
:class:`~kit_sdk.auth.registry.ProviderRegistry` on import.
"""

from typing import Dict

from ..config import AuthMode
from .base import BaseAuthProvider
from .registry import register_provider

API_KEY_HEADER = "X-Kit-Api-Key"


@register_provider(AuthMode.API_KEY.value)
class ApiKeyProvider(BaseAuthProvider):
    """Send a personal API key in the ``X-Kit-Api-Key`` header."""

    @property
    def provider_type(self) -> str:
        return AuthMode.API_KEY.value

    def get_headers(self) -> Dict[str, str]:
        return {API_KEY_HEADER: self._credential}


@register_provider(AuthMode.OAUTH.value)
class OAuthProvider(BaseAuthProvider):
    """Send an OAuth access token as a bearer ``Authorization`` header."""

    @property
    def provider_type(self) -> str:
        return AuthMode.OAUTH.value

    def get_headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self._credential}"}
