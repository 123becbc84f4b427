"""Define the authentication provider interface.

Providers turn a configured credential into the headers the Kit API
expects. They are pure: no I/O, no token refresh, no state beyond the
credential they were built with. Custom deployments register their own
provider instead of subclassing the request engine.
"""

from abc import ABC, abstractmethod
from typing import Dict


class BaseAuthProvider(ABC):
    """Provide the core authentication interface.

    :param credential: Secret presented to the API
    :type credential: str
    """

    def __init__(self, credential: str):
        self._credential = credential

    @property
    @abstractmethod
    def provider_type(self) -> str:
        """Return the provider type identifier.

        :return: Provider type (e.g., "apikey", "oauth").
        """
        pass

    @abstractmethod
    def get_headers(self) -> Dict[str, str]:
        """Return the authentication headers for a request.

        :return: Header name to value mapping.
        """
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(provider_type={self.provider_type!r})"
