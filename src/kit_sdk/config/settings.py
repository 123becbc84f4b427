"""Configuration settings for the Kit API client.

This module defines the two configuration layers used by the SDK:

- :class:`Settings` reads ``KIT_*`` environment variables and ``.env``
  files once, when a client is constructed.
- :class:`ClientConfig` is the immutable, validated configuration an
  :class:`~kit_sdk.utils.http.ApiClient` holds for its whole lifetime.
"""

from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .. import __version__

DEFAULT_BASE_URL = "https://api.kit.com/v4"
DEFAULT_USER_AGENT = f"kit-sdk-python/{__version__}"


class AuthMode(str, Enum):
    """Supported credential types.

    ``apikey`` is used for personal requests against your own account.
    ``oauth`` is used for app flows acting on behalf of other accounts.
    """

    API_KEY = "apikey"
    OAUTH = "oauth"


class Settings(BaseSettings):
    """Client settings loaded from environment variables.

    Every field can be supplied as ``KIT_<FIELD>`` in the environment or
    in a ``.env`` file. Explicit arguments passed to
    :class:`~kit_sdk.client.Kit` take precedence over these values.

    :param api_key: API key or OAuth access token
    :type api_key: Optional[str]
    :param auth_type: Credential type (apikey/oauth)
    :type auth_type: AuthMode
    :param base_url: Base URL for the Kit API
    :type base_url: str
    :param max_retries: Retries after the first attempt for transient failures
    :type max_retries: int
    :param retry_delay: Base backoff delay in milliseconds
    :type retry_delay: int
    :param timeout: Per-attempt HTTP timeout in seconds
    :type timeout: float
    :param log_level: Level used by :func:`~kit_sdk.utils.security.setup_secure_logging`
    :type log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    """

    model_config = SettingsConfigDict(
        env_prefix="KIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore unrelated entries in .env files
    )

    api_key: Optional[str] = Field(None, description="Kit API key or OAuth token")
    auth_type: AuthMode = Field(AuthMode.API_KEY, description="Credential type")
    base_url: str = Field(DEFAULT_BASE_URL, description="Kit API base URL")
    max_retries: int = Field(3, description="Maximum retry attempts")
    retry_delay: int = Field(1000, description="Base retry delay in milliseconds")
    timeout: float = Field(30.0, description="Per-attempt timeout in seconds")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        "WARNING", description="Logging level"
    )


class ClientConfig(BaseModel):
    """Immutable configuration held by a client instance.

    :param api_key: Credential sent with every request
    :type api_key: str
    :param base_url: API base URL, stored without a trailing slash
    :type base_url: str
    :param auth_type: How the credential is presented to the API
    :type auth_type: AuthMode
    :param max_retries: Retries after the first attempt; 0 disables retry
    :type max_retries: int
    :param retry_delay: Base backoff delay in milliseconds
    :type retry_delay: int
    :param timeout: Per-attempt HTTP timeout in seconds
    :type timeout: float
    :param user_agent: Value of the ``User-Agent`` header
    :type user_agent: str
    """

    model_config = ConfigDict(frozen=True)

    api_key: str = Field(..., repr=False)
    base_url: str = DEFAULT_BASE_URL
    auth_type: AuthMode = AuthMode.API_KEY
    max_retries: int = Field(3, ge=0)
    retry_delay: int = Field(1000, ge=0)
    timeout: float = Field(30.0, gt=0)
    user_agent: str = DEFAULT_USER_AGENT

    @field_validator("api_key")
    @classmethod
    def require_api_key(cls, v: str) -> str:
        """Reject blank credentials.

        :param v: The supplied credential
        :type v: str
        :return: The credential unchanged
        :rtype: str
        :raises ValueError: If the credential is empty or whitespace
        """
        if not v or not v.strip():
            raise ValueError("api_key must not be empty")
        return v

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize the base URL so paths can be joined with one slash.

        :param v: The original base URL
        :type v: str
        :return: Base URL without trailing slashes
        :rtype: str
        """
        return v.rstrip("/")
