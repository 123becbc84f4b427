"""Response decoding and error classification.

This module wraps ``httpx.Response`` with the helpers the request
engine needs once an attempt is final: decoding a successful body,
extracting a readable detail string from a failed one, and mapping
the status code to the SDK's exception taxonomy.
"""

import json
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any, Optional

import httpx

from ...exceptions import (
    APIError,
    AuthenticationError,
    InvalidRequestError,
    RateLimitError,
    ResponseDecodeError,
    ServerError,
    UnknownAPIError,
)


class HTTPResponse:
    """Wrapper for HTTP responses with convenient access methods.

    httpx buffers the body of a non-streamed response, so the JSON
    decode and the raw-text fallback used for error details both read
    from the same bytes.
    """

    def __init__(self, response: httpx.Response):
        """Initialize the response wrapper.

        :param response: The underlying httpx.Response object
        :type response: httpx.Response
        """
        self.response = response

    @property
    def status_code(self) -> int:
        return self.response.status_code

    @property
    def headers(self) -> httpx.Headers:
        return self.response.headers

    @property
    def text(self) -> str:
        return self.response.text

    def is_success(self) -> bool:
        """Check if the response indicates success (2xx status code).

        :return: True if status code is in 200-299 range
        :rtype: bool
        """
        return 200 <= self.status_code < 300

    def is_client_error(self) -> bool:
        """Check if the response indicates a client error (4xx status code).

        :return: True if status code is in 400-499 range
        :rtype: bool
        """
        return 400 <= self.status_code < 500

    def payload(self) -> Any:
        """Decode a successful response body.

        A 204 yields an empty dict without touching the body.

        :return: Decoded JSON value
        :rtype: Any
        :raises ResponseDecodeError: If the body is not valid JSON
        """
        if self.status_code == 204:
            return {}
        try:
            return self.response.json()
        except ValueError as e:
            raise ResponseDecodeError(
                f"Could not decode response body as JSON. Status: {self.status_code} - {e}",
                status_code=self.status_code,
                response_body=self.text,
            ) from e

    def error_detail(self) -> str:
        """Build a readable detail string from a failed response.

        Client errors carrying an ``errors`` array are flattened into
        ``Errors: a, b``; any other JSON body is re-serialized; a body
        that is not JSON is returned as raw text.

        :return: Detail string for the exception message
        :rtype: str
        """
        try:
            body = self.response.json()
        except ValueError:
            return self.text

        if (
            self.is_client_error()
            and isinstance(body, dict)
            and isinstance(body.get("errors"), list)
        ):
            return "Errors: " + ", ".join(str(e) for e in body["errors"])
        return json.dumps(body, separators=(",", ":"))

    def retry_after(self) -> Optional[float]:
        """Parse the ``Retry-After`` header, if present.

        :return: Seconds to wait, or None when absent or unparseable
        :rtype: Optional[float]
        """
        value = self.headers.get("retry-after")
        if not value:
            return None
        try:
            return max(0.0, float(value))
        except ValueError:
            pass
        try:
            when = parsedate_to_datetime(value)
        except (TypeError, ValueError):
            return None
        if when.tzinfo is None:
            when = when.replace(tzinfo=timezone.utc)
        return max(0.0, (when - datetime.now(timezone.utc)).total_seconds())


def build_api_error(response: HTTPResponse) -> APIError:
    """Map a failed response onto the exception taxonomy.

    404 is not handled here; the engine turns it into ``None`` before
    classification.

    :param response: The final failed response
    :type response: HTTPResponse
    :return: Exception instance ready to raise
    :rtype: APIError
    """
    status = response.status_code
    detail = response.error_detail()
    body = response.text

    if status == 401:
        return AuthenticationError(
            f"Authentication failed: Invalid or expired access token. Status: {status} - {detail}",
            status_code=status,
            detail=detail,
            response_body=body,
        )
    if status == 422:
        return InvalidRequestError(
            f"Bad data in request. Status: {status} - {detail}",
            status_code=status,
            detail=detail,
            response_body=body,
        )
    if status == 429:
        return RateLimitError(
            f"Rate limit exceeded. Status: {status} - {detail}",
            status_code=status,
            detail=detail,
            response_body=body,
            retry_after=response.retry_after(),
        )
    if status >= 500:
        return ServerError(
            f"Internal server error. Status: {status} - Details: {detail}",
            status_code=status,
            detail=detail,
            response_body=body,
        )
    return UnknownAPIError(
        f"Unknown error. Status: {status} - Details: {detail}",
        status_code=status,
        detail=detail,
        response_body=body,
    )
