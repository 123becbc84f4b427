"""Request engine for the Kit API.

This module provides :class:`ApiClient`, the single place where a
logical API call is turned into HTTP attempts. It joins the base URL
and path, merges default, auth and caller headers, dispatches through
``httpx``, and retries transient failures (5xx, 429 and transport
errors) with exponential backoff and jitter before translating the
final outcome into a payload, ``None`` (404) or a typed exception.

Resource handlers only ever call :meth:`ApiClient.get`,
:meth:`ApiClient.post`, :meth:`ApiClient.put` and
:meth:`ApiClient.delete`; the engine never inspects payload shapes.
"""

import asyncio
import logging
import random
from typing import (
    Any,
    Awaitable,
    Callable,
    Dict,
    List,
    Mapping,
    Optional,
    Sequence,
    Tuple,
    Union,
)

import httpx

from ...auth import BaseAuthProvider, ProviderRegistry
from ...config import ClientConfig
from ..security import sanitize_headers
from .client_manager import create_async_client
from .response import HTTPResponse, build_api_error
from .retry import AttemptOutcome, RetryAction, RetryDecision, RetryPolicy

logger = logging.getLogger(__name__)

QueryTypes = Union[Mapping[str, Any], Sequence[Tuple[str, Any]]]
BodyTypes = Union[str, bytes]
SleepFn = Callable[[float], Awaitable[Any]]


def _query_pairs(query: Optional[QueryTypes]) -> List[Tuple[str, Any]]:
    if not query:
        return []
    items = query.items() if isinstance(query, Mapping) else query
    return [(key, value) for key, value in items if value is not None]


class ApiClient:
    """Execute Kit API calls with retry, backoff and error translation.

    The client is safe to share between concurrent tasks: the only state
    it holds is the immutable :class:`ClientConfig`, the auth provider
    and the pooled ``httpx.AsyncClient``. Attempts within one call run
    strictly in sequence and the backoff wait only suspends the calling
    task.

    :param config: Immutable client configuration
    :type config: ClientConfig
    :param auth_provider: Header provider; built from ``config.auth_type``
        when omitted
    :type auth_provider: Optional[BaseAuthProvider]
    :param transport: Optional httpx transport for the owned client
    :type transport: Optional[httpx.AsyncBaseTransport]
    :param http_client: Optional externally managed client; it is not
        closed by :meth:`aclose`
    :type http_client: Optional[httpx.AsyncClient]
    :param sleep: Coroutine used to wait between attempts (seconds)
    :type sleep: Optional[Callable[[float], Awaitable[Any]]]
    :param rng: Source of randomness for backoff jitter
    :type rng: Optional[random.Random]
    """

    def __init__(
        self,
        config: ClientConfig,
        *,
        auth_provider: Optional[BaseAuthProvider] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        sleep: Optional[SleepFn] = None,
        rng: Optional[random.Random] = None,
    ):
        self.config = config
        self.auth_provider = auth_provider or ProviderRegistry.create_provider(
            config.auth_type, config.api_key
        )
        self.retry_policy = RetryPolicy(
            max_retries=config.max_retries,
            retry_delay=config.retry_delay,
            rng=rng,
        )
        self._owns_client = http_client is None
        self._client = http_client or create_async_client(
            timeout=config.timeout, transport=transport
        )
        self._sleep = sleep or asyncio.sleep

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_client:
            await self._client.aclose()

    @property
    def base_url(self) -> str:
        return self.config.base_url

    def build_url(self, path: str, query: Optional[QueryTypes] = None) -> str:
        """Join the base URL and path with exactly one slash.

        A ``?`` and the encoded query are appended only when the query
        has at least one non-None value.

        :param path: Request path, leading slash optional
        :type path: str
        :param query: Mapping or ordered pairs; None values are dropped
        :type query: Optional[Union[Mapping[str, Any], Sequence[Tuple[str, Any]]]]
        :return: Absolute request URL
        :rtype: str
        """
        url = f"{self.config.base_url.rstrip('/')}/{path.lstrip('/')}"
        pairs = _query_pairs(query)
        if pairs:
            url = f"{url}?{httpx.QueryParams(pairs)}"
        return url

    def default_headers(self) -> Dict[str, str]:
        return {
            "Accept": "application/json",
            "Content-Type": "application/json",
            "User-Agent": self.config.user_agent,
        }

    def build_headers(self, headers: Optional[Mapping[str, str]] = None) -> httpx.Headers:
        """Merge default, auth and per-call headers.

        Later layers win on (case-insensitive) key collisions, so a
        caller can override anything, including the auth header.

        :param headers: Per-call headers
        :type headers: Optional[Mapping[str, str]]
        :return: Merged headers
        :rtype: httpx.Headers
        """
        merged = httpx.Headers(self.default_headers())
        merged.update(self.auth_provider.get_headers())
        if headers:
            merged.update(headers)
        return merged

    async def get(
        self,
        path: str,
        *,
        headers: Optional[Mapping[str, str]] = None,
        query: Optional[QueryTypes] = None,
        timeout: Optional[float] = None,
    ) -> Any:
        return await self.request("GET", path, headers=headers, query=query, timeout=timeout)

    async def post(
        self,
        path: str,
        *,
        headers: Optional[Mapping[str, str]] = None,
        query: Optional[QueryTypes] = None,
        body: Optional[BodyTypes] = None,
        timeout: Optional[float] = None,
    ) -> Any:
        return await self.request(
            "POST", path, headers=headers, query=query, body=body, timeout=timeout
        )

    async def put(
        self,
        path: str,
        *,
        headers: Optional[Mapping[str, str]] = None,
        query: Optional[QueryTypes] = None,
        body: Optional[BodyTypes] = None,
        timeout: Optional[float] = None,
    ) -> Any:
        return await self.request(
            "PUT", path, headers=headers, query=query, body=body, timeout=timeout
        )

    async def delete(
        self,
        path: str,
        *,
        headers: Optional[Mapping[str, str]] = None,
        query: Optional[QueryTypes] = None,
        body: Optional[BodyTypes] = None,
        timeout: Optional[float] = None,
    ) -> Any:
        return await self.request(
            "DELETE", path, headers=headers, query=query, body=body, timeout=timeout
        )

    async def request(
        self,
        method: str,
        path: str,
        *,
        headers: Optional[Mapping[str, str]] = None,
        query: Optional[QueryTypes] = None,
        body: Optional[BodyTypes] = None,
        timeout: Optional[float] = None,
    ) -> Any:
        """Execute one logical API call to completion.

        :param method: HTTP method; any verb is accepted and upper-cased
        :type method: str
        :param path: Request path relative to the base URL
        :type path: str
        :param headers: Per-call headers, merged over defaults and auth
        :type headers: Optional[Mapping[str, str]]
        :param query: Query parameters
        :type query: Optional[Union[Mapping[str, Any], Sequence[Tuple[str, Any]]]]
        :param body: Pre-serialized request body, sent verbatim
        :type body: Optional[Union[str, bytes]]
        :param timeout: Optional per-attempt timeout in seconds
        :type timeout: Optional[float]
        :return: Decoded JSON, ``{}`` for 204, or ``None`` for 404
        :rtype: Any
        :raises APIError: Subclass matching the final failed status
        :raises httpx.TransportError: The last transport failure, unchanged
        """
        method = method.upper()
        url = self.build_url(path, query)
        request_headers = self.build_headers(headers)
        request_kwargs: Dict[str, Any] = {"headers": request_headers, "content": body}
        if timeout is not None:
            request_kwargs["timeout"] = timeout

        total_attempts = self.retry_policy.max_retries + 1
        attempt = 0
        while True:
            logger.debug(
                "%s %s (attempt %d/%d) headers=%s",
                method,
                url,
                attempt + 1,
                total_attempts,
                sanitize_headers(request_headers),
            )
            try:
                response = await self._client.request(method, url, **request_kwargs)
            except httpx.TransportError as e:
                outcome = AttemptOutcome.from_transport_error(attempt, e)
                decision = self.retry_policy.decide(outcome)
                if decision.action is not RetryAction.RETRY:
                    logger.info(
                        "%s %s failed after %d attempt(s): %s",
                        method,
                        url,
                        attempt + 1,
                        e,
                    )
                    raise
                await self._backoff(method, url, outcome, decision)
                attempt += 1
                continue

            outcome = AttemptOutcome.from_response(attempt, response)
            decision = self.retry_policy.decide(outcome)
            if decision.action is RetryAction.RETRY:
                await self._backoff(method, url, outcome, decision)
                attempt += 1
                continue

            return self._finish(HTTPResponse(response), method, url, attempt)

    async def _backoff(
        self,
        method: str,
        url: str,
        outcome: AttemptOutcome,
        decision: RetryDecision,
    ) -> None:
        reason = (
            f"status {outcome.status_code}"
            if outcome.status_code is not None
            else f"{type(outcome.error).__name__}: {outcome.error}"
        )
        logger.warning(
            f"Retrying {method} {url} in {decision.delay_ms}ms "
            f"(attempt {outcome.index + 2}/{self.retry_policy.max_retries + 1}, {reason})"
        )
        await self._sleep(decision.delay_ms / 1000)

    def _finish(self, response: HTTPResponse, method: str, url: str, attempt: int) -> Any:
        if response.is_success():
            return response.payload()
        if response.status_code == 404:
            logger.debug("%s %s returned 404; treating as absent", method, url)
            return None

        error = build_api_error(response)
        logger.info(
            "%s %s failed after %d attempt(s): %s",
            method,
            url,
            attempt + 1,
            error.code,
        )
        raise error
