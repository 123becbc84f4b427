"""Retry policy for Kit API requests.

This module decides, for each finished attempt, whether the request
engine should try again, hand back a result, or raise. The decision is
made from an explicitly tagged :class:`AttemptOutcome`, never from the
text of an exception, so a transport error whose message happens to
look like an HTTP status is still retried correctly.

Backoff is exponential in the index of the attempt that just failed
(``retry_delay * 2 ** attempt`` milliseconds) with up to 25% jitter in
either direction to avoid synchronized retry storms across callers.
"""

import math
import random
from dataclasses import dataclass
from enum import Enum
from typing import Optional

import httpx

RETRYABLE_STATUS_CODES = frozenset({429})
JITTER_RATIO = 0.25


class OutcomeKind(str, Enum):
    """What happened on a single attempt."""

    SUCCESS = "success"
    HTTP_ERROR = "http"
    TRANSPORT_ERROR = "transport"


class RetryAction(str, Enum):
    """What the engine should do next."""

    RETRY = "retry"
    RETURN = "return"
    RAISE = "raise"


@dataclass(frozen=True)
class AttemptOutcome:
    """The result of one dispatch within a retry sequence.

    :param index: 0-based attempt number
    :param kind: Outcome tag
    :param status_code: HTTP status for ``SUCCESS`` and ``HTTP_ERROR``
    :param error: The transport exception for ``TRANSPORT_ERROR``
    """

    index: int
    kind: OutcomeKind
    status_code: Optional[int] = None
    error: Optional[httpx.TransportError] = None

    @classmethod
    def from_response(cls, index: int, response: httpx.Response) -> "AttemptOutcome":
        kind = (
            OutcomeKind.SUCCESS
            if 200 <= response.status_code < 300
            else OutcomeKind.HTTP_ERROR
        )
        return cls(index=index, kind=kind, status_code=response.status_code)

    @classmethod
    def from_transport_error(
        cls, index: int, error: httpx.TransportError
    ) -> "AttemptOutcome":
        return cls(index=index, kind=OutcomeKind.TRANSPORT_ERROR, error=error)


@dataclass(frozen=True)
class RetryDecision:
    """Derived next step for the engine.

    :param action: Retry, return a result, or raise
    :param delay_ms: Milliseconds to wait before the retry; 0 otherwise
    """

    action: RetryAction
    delay_ms: int = 0


def should_retry_status(status_code: int) -> bool:
    """Return whether an HTTP status is a transient failure.

    :param status_code: HTTP status code
    :type status_code: int
    :return: True for 5xx and 429
    :rtype: bool
    """
    return status_code >= 500 or status_code in RETRYABLE_STATUS_CODES


class RetryPolicy:
    """Exponential backoff with jitter, bounded by ``max_retries``.

    Attempts are numbered ``0..max_retries`` inclusive, so a policy
    with ``max_retries=3`` allows four dispatches in total and
    ``max_retries=0`` allows exactly one.

    :param max_retries: Retries allowed after the first attempt
    :type max_retries: int
    :param retry_delay: Base delay in milliseconds
    :type retry_delay: int
    :param rng: Source of randomness for jitter
    :type rng: Optional[random.Random]
    """

    def __init__(
        self,
        max_retries: int = 3,
        retry_delay: int = 1000,
        rng: Optional[random.Random] = None,
    ):
        if max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        if retry_delay < 0:
            raise ValueError("retry_delay must be >= 0")
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self._rng = rng or random.Random()

    def compute_delay(self, attempt: int) -> int:
        """Compute the wait before retrying ``attempt``.

        :param attempt: Index of the attempt that just failed
        :type attempt: int
        :return: Delay in whole milliseconds, never negative
        :rtype: int
        """
        delay = self.retry_delay * (2**attempt)
        jitter = delay * JITTER_RATIO * self._rng.uniform(-1.0, 1.0)
        return max(0, math.floor(delay + jitter))

    def can_retry(self, attempt: int) -> bool:
        return attempt < self.max_retries

    def decide(self, outcome: AttemptOutcome) -> RetryDecision:
        """Turn an attempt outcome into the engine's next step.

        :param outcome: The tagged result of the latest attempt
        :type outcome: AttemptOutcome
        :return: What to do next
        :rtype: RetryDecision
        """
        if outcome.kind is OutcomeKind.SUCCESS:
            return RetryDecision(RetryAction.RETURN)

        # A missing resource is an answer, not a failure.
        if outcome.status_code == 404:
            return RetryDecision(RetryAction.RETURN)

        if outcome.kind is OutcomeKind.TRANSPORT_ERROR:
            transient = True
        else:
            transient = should_retry_status(outcome.status_code or 0)

        if transient and self.can_retry(outcome.index):
            return RetryDecision(RetryAction.RETRY, self.compute_delay(outcome.index))
        return RetryDecision(RetryAction.RAISE)
