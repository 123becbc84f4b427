"""Kit API Python SDK.

This package provides an async client for the Kit (formerly
ConvertKit) v4 REST API. A single request engine handles URL building,
authentication headers, retries with exponential backoff and error
translation; thin resource handlers map each endpoint onto it.

:var __version__: Current package version
:type __version__: str
"""

__version__ = "0.3.0"

from .client import Kit  # noqa: E402
from .config import AuthMode, ClientConfig, Settings  # noqa: E402
from .exceptions import (  # noqa: E402
    APIError,
    AuthenticationError,
    ConfigurationError,
    InvalidRequestError,
    KitError,
    RateLimitError,
    ResponseDecodeError,
    ServerError,
    TransportError,
    UnexpectedResponseError,
    UnknownAPIError,
    ValidationError,
)
from .utils.http import ApiClient  # noqa: E402

__all__ = [
    "APIError",
    "ApiClient",
    "AuthMode",
    "AuthenticationError",
    "ClientConfig",
    "ConfigurationError",
    "InvalidRequestError",
    "Kit",
    "KitError",
    "RateLimitError",
    "ResponseDecodeError",
    "ServerError",
    "Settings",
    "TransportError",
    "UnexpectedResponseError",
    "UnknownAPIError",
    "ValidationError",
    "__version__",
]
