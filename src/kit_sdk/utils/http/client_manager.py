"""HTTP client construction for the request engine.

This module builds the ``httpx.AsyncClient`` an
:class:`~kit_sdk.utils.http.request.ApiClient` dispatches through,
with the connection limits and timeouts the SDK uses by default.
"""

import logging
import os
from typing import Optional

import httpx

logger = logging.getLogger(__name__)


def create_timeout(
    connect: float = 5.0,
    read: float = 30.0,
    write: float = 10.0,
    pool: float = 5.0,
) -> httpx.Timeout:
    """Create a timeout configuration object.

    :param connect: Connection timeout in seconds
    :type connect: float
    :param read: Read timeout in seconds
    :type read: float
    :param write: Write timeout in seconds
    :type write: float
    :param pool: Pool timeout in seconds
    :type pool: float
    :return: Configured timeout object
    :rtype: httpx.Timeout
    """
    return httpx.Timeout(connect=connect, read=read, write=write, pool=pool)


def create_limits(
    max_keepalive_connections: int = 10,
    max_connections: int = 20,
    keepalive_expiry: float = 30.0,
) -> httpx.Limits:
    """Create a connection limits configuration object.

    :param max_keepalive_connections: Maximum number of keepalive connections
    :type max_keepalive_connections: int
    :param max_connections: Maximum total number of connections
    :type max_connections: int
    :param keepalive_expiry: Keepalive connection expiry time in seconds
    :type keepalive_expiry: float
    :return: Configured limits object
    :rtype: httpx.Limits
    """
    return httpx.Limits(
        max_keepalive_connections=max_keepalive_connections,
        max_connections=max_connections,
        keepalive_expiry=keepalive_expiry,
    )


def create_async_client(
    timeout: float = 30.0,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    limits: Optional[httpx.Limits] = None,
) -> httpx.AsyncClient:
    """Create the async HTTP client used for Kit API calls.

    The read timeout follows ``timeout``; connect and pool waits stay
    short so an unreachable host fails fast and is retried.

    :param timeout: Read timeout in seconds
    :type timeout: float
    :param transport: Optional transport, e.g. ``httpx.MockTransport`` in tests
    :type transport: Optional[httpx.AsyncBaseTransport]
    :param limits: Optional custom connection limits
    :type limits: Optional[httpx.Limits]
    :return: Configured HTTP client instance
    :rtype: httpx.AsyncClient
    """
    http2_flag = os.getenv("KIT_HTTP2", "false").lower() == "true"
    if http2_flag:
        try:
            import h2  # type: ignore  # noqa: F401
        except ImportError:
            logger.warning(
                "HTTP/2 requested but 'h2' package not installed; falling back to HTTP/1.1"
            )
            http2_flag = False

    client = httpx.AsyncClient(
        timeout=create_timeout(read=timeout, write=min(timeout, 10.0)),
        limits=limits or create_limits(),
        http2=http2_flag,
        follow_redirects=True,
        transport=transport,
    )
    logger.debug("Created HTTP client (http2=%s, timeout=%.1fs)", http2_flag, timeout)
    return client
