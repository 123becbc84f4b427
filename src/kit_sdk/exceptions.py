"""Structured exception classes for the Kit SDK."""

import json
from typing import Any, Dict, Optional

from httpx import TransportError


class KitError(Exception):
    """Base exception for all Kit SDK errors.

    This exception serves as the parent class for all Kit SDK specific
    exceptions, providing a consistent interface for error handling
    across the library.

    :param message: Human-readable error message
    :param code: Optional error code for programmatic handling
    :param details: Optional dictionary containing additional error context
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        """Initialize the exception with message, code, and details."""
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary format.

        :return: Dictionary containing error code, message, and details
        """
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }

    def to_json(self) -> str:
        """Convert exception to JSON string.

        :return: JSON-encoded string representation of the exception
        """
        return json.dumps(self.to_dict())


class ConfigurationError(KitError):
    """Raised for configuration-related errors.

    This exception is raised when the client cannot be constructed,
    most commonly because no API credential was supplied and none was
    found in the environment.

    :param message: Description of the configuration error
    :param setting: Optional name of the problematic setting
    """

    def __init__(self, message: str, setting: Optional[str] = None):
        """Initialize configuration error with message and optional setting."""
        details = {}
        if setting:
            details["setting"] = setting
        super().__init__(message=message, code="CONFIGURATION_ERROR", details=details)
        self.setting = setting


class ValidationError(KitError):
    """Raised when arguments passed to a resource handler are rejected.

    :param message: Description of the validation error
    :param field: Optional name of the field that failed validation
    :param value: Optional value that caused the validation failure
    """

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Optional[Any] = None,
    ):
        """Initialize validation error with message and optional field/value."""
        details = {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = str(value)
        super().__init__(message=message, code="VALIDATION_ERROR", details=details)
        self.field = field


class UnexpectedResponseError(KitError):
    """Raised when a handler receives a payload of the wrong shape.

    :param message: Description of the mismatch
    :param path: Optional request path that produced the payload
    """

    def __init__(self, message: str, path: Optional[str] = None):
        """Initialize with message and optional request path."""
        details = {}
        if path:
            details["path"] = path
        super().__init__(message=message, code="UNEXPECTED_RESPONSE", details=details)


class APIError(KitError):
    """Raised for HTTP responses the API classified as failures.

    Every subclass carries the HTTP status code and the detail string
    extracted from the response body, so callers never need to parse
    the message to find out what happened.

    :param message: Description of the API error
    :param status_code: Optional HTTP status code from the API response
    :param detail: Optional detail string extracted from the body
    :param response_body: Optional raw response body
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        detail: Optional[str] = None,
        response_body: Optional[str] = None,
    ):
        """Initialize API error with message and optional response details."""
        details: Dict[str, Any] = {}
        if status_code:
            details["status_code"] = status_code
        if detail:
            details["detail"] = detail
        if response_body:
            details["response_body"] = response_body
        super().__init__(message=message, code="API_ERROR", details=details)
        self.status_code = status_code
        self.detail = detail
        self.response_body = response_body


class AuthenticationError(APIError):
    """Raised when the API rejects the configured credential (401)."""

    def __init__(
        self,
        message: str,
        status_code: int = 401,
        detail: Optional[str] = None,
        response_body: Optional[str] = None,
    ):
        super().__init__(message, status_code, detail, response_body)
        self.code = "AUTHENTICATION_ERROR"


class InvalidRequestError(APIError):
    """Raised when the API refuses the request data (422)."""

    def __init__(
        self,
        message: str,
        status_code: int = 422,
        detail: Optional[str] = None,
        response_body: Optional[str] = None,
    ):
        super().__init__(message, status_code, detail, response_body)
        self.code = "INVALID_REQUEST"


class RateLimitError(APIError):
    """Raised when API rate limits are exceeded and retries ran out.

    :param message: Description of the rate limit error
    :param retry_after: Optional seconds the server asked us to wait
    """

    def __init__(
        self,
        message: str,
        status_code: int = 429,
        detail: Optional[str] = None,
        response_body: Optional[str] = None,
        retry_after: Optional[float] = None,
    ):
        """Initialize rate limit error with message and optional retry hint."""
        super().__init__(message, status_code, detail, response_body)
        self.code = "RATE_LIMIT_ERROR"
        self.retry_after = retry_after
        if retry_after is not None:
            self.details["retry_after"] = retry_after


class ServerError(APIError):
    """Raised for 5xx responses once retries are exhausted."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        detail: Optional[str] = None,
        response_body: Optional[str] = None,
    ):
        super().__init__(message, status_code, detail, response_body)
        self.code = "SERVER_ERROR"


class UnknownAPIError(APIError):
    """Raised for any other non-2xx status (400, 403, 409, ...)."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        detail: Optional[str] = None,
        response_body: Optional[str] = None,
    ):
        super().__init__(message, status_code, detail, response_body)
        self.code = "UNKNOWN_ERROR"


class ResponseDecodeError(APIError):
    """Raised when a successful response body is not valid JSON."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response_body: Optional[str] = None,
    ):
        super().__init__(message, status_code, None, response_body)
        self.code = "DECODE_ERROR"


__all__ = [
    "KitError",
    "ConfigurationError",
    "ValidationError",
    "UnexpectedResponseError",
    "APIError",
    "AuthenticationError",
    "InvalidRequestError",
    "RateLimitError",
    "ServerError",
    "UnknownAPIError",
    "ResponseDecodeError",
    "TransportError",
]
