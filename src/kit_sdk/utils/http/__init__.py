"""HTTP utilities public API (barrel module).

This package provides:
- The request engine used by every resource handler
- Retry policy with exponential backoff and jitter
- Response decoding and error classification
- HTTP client construction helpers

Recommended import pattern for consumers:
    from kit_sdk.utils.http import ApiClient, RetryPolicy

This keeps call sites stable even if internal modules are reorganized.
"""

from .client_manager import create_async_client, create_limits, create_timeout
from .request import ApiClient
from .response import HTTPResponse, build_api_error
from .retry import (
    AttemptOutcome,
    OutcomeKind,
    RetryAction,
    RetryDecision,
    RetryPolicy,
    should_retry_status,
)

__all__ = [
    "ApiClient",
    "AttemptOutcome",
    "HTTPResponse",
    "OutcomeKind",
    "RetryAction",
    "RetryDecision",
    "RetryPolicy",
    "build_api_error",
    "create_async_client",
    "create_limits",
    "create_timeout",
    "should_retry_status",
]
