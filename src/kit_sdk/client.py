"""Kit API client facade.

:class:`Kit` resolves configuration once, owns a single
:class:`~kit_sdk.utils.http.ApiClient`, and exposes one handler per API
resource::

    async with Kit(api_key="...") as kit:
        page = await kit.subscribers.list(per_page=50)
        subscriber = await kit.subscribers.get(123)  # None if missing
"""

import logging
import random
from typing import Any, Mapping, Optional, Union

import httpx
from pydantic import ValidationError as PydanticValidationError

from .auth import BaseAuthProvider
from .config import AuthMode, ClientConfig, Settings
from .exceptions import ConfigurationError
from .resources import (
    AccountsHandler,
    BroadcastsHandler,
    CustomFieldsHandler,
    EmailTemplatesHandler,
    FormsHandler,
    PurchasesHandler,
    SegmentsHandler,
    SequencesHandler,
    SubscribersHandler,
    TagsHandler,
    WebhooksHandler,
)
from .utils.http import ApiClient
from .utils.http.request import BodyTypes, QueryTypes, SleepFn

logger = logging.getLogger(__name__)


def load_settings() -> Settings:
    """Read ``KIT_*`` settings from the environment and ``.env``.

    :return: Loaded settings
    :rtype: Settings
    :raises ConfigurationError: If an environment value is invalid
    """
    try:
        return Settings()
    except PydanticValidationError as e:
        raise ConfigurationError(f"Invalid KIT_* environment settings: {e}") from e


def resolve_config(
    settings: Settings,
    *,
    api_key: Optional[str] = None,
    auth_type: Optional[Union[AuthMode, str]] = None,
    base_url: Optional[str] = None,
    max_retries: Optional[int] = None,
    retry_delay: Optional[int] = None,
    timeout: Optional[float] = None,
    user_agent: Optional[str] = None,
) -> ClientConfig:
    """Merge explicit arguments over environment settings.

    :param settings: Values read from the environment
    :type settings: Settings
    :return: Validated, immutable client configuration
    :rtype: ClientConfig
    :raises ConfigurationError: If no credential is available or a value is invalid
    """
    credential = api_key if api_key is not None else settings.api_key
    if credential is None or not credential.strip():
        raise ConfigurationError(
            "The KIT_API_KEY environment variable is missing or empty. "
            "Please provide it, or pass in the `api_key` option explicitly "
            "when initialising this SDK.",
            setting="KIT_API_KEY",
        )

    values: dict = {
        "api_key": credential,
        "auth_type": auth_type if auth_type is not None else settings.auth_type,
        "base_url": base_url if base_url is not None else settings.base_url,
        "max_retries": max_retries if max_retries is not None else settings.max_retries,
        "retry_delay": retry_delay if retry_delay is not None else settings.retry_delay,
        "timeout": timeout if timeout is not None else settings.timeout,
    }
    if user_agent is not None:
        values["user_agent"] = user_agent

    try:
        return ClientConfig(**values)
    except PydanticValidationError as e:
        raise ConfigurationError(f"Invalid client configuration: {e}") from e


class Kit:
    """Client for the Kit v4 REST API.

    Any argument left as ``None`` falls back to the matching ``KIT_*``
    environment variable, read once here.

    :param api_key: API key, or OAuth access token when ``auth_type="oauth"``
    :type api_key: Optional[str]
    :param auth_type: ``apikey`` (default) or ``oauth``
    :type auth_type: Optional[Union[AuthMode, str]]
    :param base_url: API base URL, e.g. ``https://api.kit.com/v4``
    :type base_url: Optional[str]
    :param max_retries: Retries for 5xx, 429 and network failures
    :type max_retries: Optional[int]
    :param retry_delay: Base backoff delay in milliseconds
    :type retry_delay: Optional[int]
    :param timeout: Per-attempt timeout in seconds
    :type timeout: Optional[float]
    :param auth_provider: Custom header provider replacing the built-in ones
    :type auth_provider: Optional[BaseAuthProvider]
    :param transport: httpx transport, mainly for tests
    :type transport: Optional[httpx.AsyncBaseTransport]
    :param settings: Pre-loaded settings instead of reading the environment
    :type settings: Optional[Settings]
    :raises ConfigurationError: If no credential is configured
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        *,
        auth_type: Optional[Union[AuthMode, str]] = None,
        base_url: Optional[str] = None,
        max_retries: Optional[int] = None,
        retry_delay: Optional[int] = None,
        timeout: Optional[float] = None,
        user_agent: Optional[str] = None,
        auth_provider: Optional[BaseAuthProvider] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        sleep: Optional[SleepFn] = None,
        rng: Optional[random.Random] = None,
        settings: Optional[Settings] = None,
    ):
        self.config = resolve_config(
            settings if settings is not None else load_settings(),
            api_key=api_key,
            auth_type=auth_type,
            base_url=base_url,
            max_retries=max_retries,
            retry_delay=retry_delay,
            timeout=timeout,
            user_agent=user_agent,
        )
        self.api = ApiClient(
            self.config,
            auth_provider=auth_provider,
            transport=transport,
            sleep=sleep,
            rng=rng,
        )

        self.accounts = AccountsHandler(self.api)
        self.broadcasts = BroadcastsHandler(self.api)
        self.custom_fields = CustomFieldsHandler(self.api)
        self.email_templates = EmailTemplatesHandler(self.api)
        self.forms = FormsHandler(self.api)
        self.purchases = PurchasesHandler(self.api)
        self.segments = SegmentsHandler(self.api)
        self.sequences = SequencesHandler(self.api)
        self.subscribers = SubscribersHandler(self.api)
        self.tags = TagsHandler(self.api)
        self.webhooks = WebhooksHandler(self.api)

        logger.debug(
            "Kit client initialized: base_url=%s auth_type=%s max_retries=%d",
            self.config.base_url,
            self.config.auth_type.value,
            self.config.max_retries,
        )

    async def __aenter__(self) -> "Kit":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.api.aclose()

    @property
    def api_key(self) -> str:
        return self.config.api_key

    @property
    def auth_type(self) -> AuthMode:
        return self.config.auth_type

    async def get(
        self,
        path: str,
        *,
        headers: Optional[Mapping[str, str]] = None,
        query: Optional[QueryTypes] = None,
    ) -> Any:
        """Call an endpoint that has no dedicated handler method yet."""
        return await self.api.get(path, headers=headers, query=query)

    async def post(
        self,
        path: str,
        *,
        headers: Optional[Mapping[str, str]] = None,
        query: Optional[QueryTypes] = None,
        body: Optional[BodyTypes] = None,
    ) -> Any:
        return await self.api.post(path, headers=headers, query=query, body=body)

    async def put(
        self,
        path: str,
        *,
        headers: Optional[Mapping[str, str]] = None,
        query: Optional[QueryTypes] = None,
        body: Optional[BodyTypes] = None,
    ) -> Any:
        return await self.api.put(path, headers=headers, query=query, body=body)

    async def delete(
        self,
        path: str,
        *,
        headers: Optional[Mapping[str, str]] = None,
        query: Optional[QueryTypes] = None,
        body: Optional[BodyTypes] = None,
    ) -> Any:
        return await self.api.delete(path, headers=headers, query=query, body=body)
