"""Retry decision logic and exponential backoff computation.

Two pure functions used by :class:`~mdslack.slack_api.transport.SlackTransport`:

* :func:`should_retry` -- decide whether a failed call is retryable.
* :func:`compute_backoff` -- compute the delay before the next attempt.
"""

from __future__ import annotations

import random

import httpx

# HTTP status codes that are safe to retry.  Slack answers 429 with a
# ``Retry-After`` header when a method's rate tier is exceeded.
_RETRYABLE_STATUSES: frozenset[int] = frozenset({429, 500, 502, 503, 504})

# Slack sometimes reports transient failures inside a 200 response.
_RETRYABLE_SLACK_ERRORS: frozenset[str] = frozenset({
    "ratelimited",
    "internal_error",
    "fatal_error",
    "service_unavailable",
    "request_timeout",
})

_RETRYABLE_EXCEPTIONS: tuple[type[Exception], ...] = (
    httpx.TimeoutException,
    httpx.NetworkError,
)


def should_retry(
    status_code: int | None,
    exception: Exception | None,
    attempt: int,
    max_attempts: int,
    slack_error: str | None = None,
) -> bool:
    """Decide whether a call should be retried.

    Parameters
    ----------
    status_code:
        HTTP status code, or ``None`` if no response was received.
    exception:
        The exception raised, or ``None`` if a response was received.
    attempt:
        The current attempt number (0-indexed).
    max_attempts:
        Maximum total attempts allowed (including the first one).
    slack_error:
        The ``error`` field of an ``{"ok": false}`` body, if any.
    """
    if attempt + 1 >= max_attempts:
        return False

    if exception is not None:
        return isinstance(exception, _RETRYABLE_EXCEPTIONS)

    if slack_error is not None:
        return slack_error in _RETRYABLE_SLACK_ERRORS

    if status_code is not None:
        return status_code in _RETRYABLE_STATUSES

    return False


def compute_backoff(
    attempt: int,
    base: float = 1.0,
    maximum: float = 60.0,
    jitter: bool = True,
    retry_after: float | None = None,
) -> float:
    """Compute the delay before the next retry attempt.

    A server-provided ``Retry-After`` is used as is (never shortened, Slack
    rejects early retries); otherwise the delay is ``base * 2**attempt``
    capped at *maximum*, scaled to a random 50-100 % when *jitter* is set.
    """
    if retry_after is not None:
        return retry_after

    delay = min(base * (2 ** attempt), maximum)

    if jitter:
        delay *= 0.5 + random.random() * 0.5

    return delay
