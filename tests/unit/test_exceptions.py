"""Tests for the exception hierarchy."""

import json

import httpx
import pytest

from kit_sdk.exceptions import (
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


@pytest.mark.parametrize(
    "error,code",
    [
        (ConfigurationError("x"), "CONFIGURATION_ERROR"),
        (ValidationError("x"), "VALIDATION_ERROR"),
        (UnexpectedResponseError("x"), "UNEXPECTED_RESPONSE"),
        (APIError("x"), "API_ERROR"),
        (AuthenticationError("x"), "AUTHENTICATION_ERROR"),
        (InvalidRequestError("x"), "INVALID_REQUEST"),
        (RateLimitError("x"), "RATE_LIMIT_ERROR"),
        (ServerError("x"), "SERVER_ERROR"),
        (UnknownAPIError("x"), "UNKNOWN_ERROR"),
        (ResponseDecodeError("x"), "DECODE_ERROR"),
    ],
)
def test_codes(error, code):
    assert isinstance(error, KitError)
    assert error.code == code
    assert str(error) == "x"


def test_base_error_defaults_code_to_class_name():
    assert KitError("boom").code == "KitError"


@pytest.mark.parametrize(
    "error_class,status",
    [
        (AuthenticationError, 401),
        (InvalidRequestError, 422),
        (RateLimitError, 429),
        (ServerError, 500),
    ],
)
def test_default_status_codes(error_class, status):
    error = error_class("x")
    assert isinstance(error, APIError)
    assert error.status_code == status
    assert error.details["status_code"] == status


def test_api_error_to_dict():
    error = ServerError("down", status_code=503, detail="maintenance", response_body="maintenance")
    assert error.to_dict() == {
        "error": "SERVER_ERROR",
        "message": "down",
        "details": {
            "status_code": 503,
            "detail": "maintenance",
            "response_body": "maintenance",
        },
    }
    assert json.loads(error.to_json())["error"] == "SERVER_ERROR"


def test_configuration_error_setting():
    error = ConfigurationError("missing", setting="KIT_API_KEY")
    assert error.setting == "KIT_API_KEY"
    assert error.details == {"setting": "KIT_API_KEY"}


def test_validation_error_details():
    error = ValidationError("bad id", field="id", value=0)
    assert error.field == "id"
    assert error.details == {"field": "id", "value": "0"}


def test_rate_limit_without_retry_after():
    error = RateLimitError("slow")
    assert error.retry_after is None
    assert "retry_after" not in error.details


def test_transport_error_is_httpx():
    assert TransportError is httpx.TransportError
