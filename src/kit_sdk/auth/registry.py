"""Manage registration and discovery of authentication providers.

Provide a simple registry to register, look up, and create providers
without modifying the request engine.

Examples
--------
.. code-block:: python

   from kit_sdk.auth import BaseAuthProvider, register_provider

   @register_provider("partner")
   class PartnerProvider(BaseAuthProvider):
       @property
       def provider_type(self) -> str:
           return "partner"

       def get_headers(self):
           return {"X-Partner-Token": self._credential}
"""

import logging
from typing import Dict, Optional, Type, Union

from ..config import AuthMode
from .base import BaseAuthProvider

logger = logging.getLogger(__name__)


class ProviderRegistry:
    """Registry for authentication providers.

    Manage registration, lookup, and instantiation of providers.
    """

    _providers: Dict[str, Type[BaseAuthProvider]] = {}

    @classmethod
    def register(
        cls, provider_type: str, provider_class: Type[BaseAuthProvider]
    ) -> None:
        """Register a provider class.

        :param provider_type: Unique identifier for the provider type.
        :param provider_class: Provider class to register.
        :raises ValueError: If provider type is already registered.
        """
        if provider_type in cls._providers:
            raise ValueError(f"Provider type '{provider_type}' is already registered")

        cls._providers[provider_type] = provider_class
        logger.debug(
            f"Registered provider: {provider_type} -> {provider_class.__name__}"
        )

    @classmethod
    def unregister(cls, provider_type: str) -> None:
        """Unregister a provider.

        :param provider_type: Provider type to unregister.
        """
        if provider_type in cls._providers:
            del cls._providers[provider_type]
            logger.debug(f"Unregistered provider: {provider_type}")

    @classmethod
    def get_provider_class(cls, provider_type: str) -> Optional[Type[BaseAuthProvider]]:
        """Return a registered provider class.

        :param provider_type: Provider type to retrieve.
        :return: Provider class if registered, otherwise None.
        """
        return cls._providers.get(provider_type)

    @classmethod
    def create_provider(
        cls, provider_type: Union[str, AuthMode], credential: str
    ) -> BaseAuthProvider:
        """Create a provider instance.

        :param provider_type: Type of provider to create.
        :param credential: Secret the provider presents.
        :return: Provider instance.
        :raises ValueError: If provider type is not registered.
        """
        if isinstance(provider_type, AuthMode):
            provider_type = provider_type.value
        provider_class = cls.get_provider_class(provider_type)
        if not provider_class:
            available = ", ".join(cls._providers.keys())
            raise ValueError(
                f"Unknown provider type: '{provider_type}'. "
                f"Available providers: {available or 'none'}"
            )

        return provider_class(credential)

    @classmethod
    def list_providers(cls) -> Dict[str, Type[BaseAuthProvider]]:
        """List all registered providers.

        :return: Mapping of provider types to classes.
        """
        return cls._providers.copy()


def register_provider(provider_type: str):
    """Return a decorator to auto-register a provider class.

    :param provider_type: Type identifier for the provider.
    :return: Decorator function.
    """

    def decorator(provider_class: Type[BaseAuthProvider]):
        ProviderRegistry.register(provider_type, provider_class)
        return provider_class

    return decorator
