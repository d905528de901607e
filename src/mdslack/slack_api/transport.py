"""Synchronous HTTP transport for the Slack Web API.

Each call goes through the same lifecycle:

1. POST the JSON payload to ``{base_url}/{method}`` with a Bearer token.
2. On ``2xx`` with ``{"ok": true}`` -- return the parsed body.
3. On ``429`` -- honour ``Retry-After``, sleep, and retry.
4. On ``5xx``, a network error, or a transient Slack error
   (``ratelimited``, ``internal_error`` …) -- exponential backoff and retry.
5. On any other failure -- raise the matching typed error immediately.
6. On max attempts exceeded -- raise :class:`MdslackRetryExhaustedError`.
"""

from __future__ import annotations

import json as _json
import sys
import time
from typing import Any

import httpx

from mdslack.config import SlackConfig
from mdslack.errors import (
    MdslackApiError,
    MdslackAuthError,
    MdslackNetworkError,
    MdslackNotFoundError,
    MdslackPermissionError,
    MdslackRetryExhaustedError,
)
from mdslack.observability import get_logger

from .retries import (
    _RETRYABLE_SLACK_ERRORS,
    _RETRYABLE_STATUSES,
    compute_backoff,
    should_retry,
)

log = get_logger("transport")

_AUTH_ERRORS: frozenset[str] = frozenset({
    "invalid_auth",
    "not_authed",
    "account_inactive",
    "token_revoked",
    "token_expired",
})

_PERMISSION_ERRORS: frozenset[str] = frozenset({
    "missing_scope",
    "not_in_channel",
    "restricted_action",
    "ekm_access_denied",
})

_NOT_FOUND_ERRORS: frozenset[str] = frozenset({
    "channel_not_found",
    "unknown_method",
})


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _parse_retry_after(response: httpx.Response) -> float | None:
    """Extract the ``Retry-After`` header value as a float, or ``None``."""
    raw = response.headers.get("retry-after")
    if raw is None:
        return None
    try:
        return float(raw)
    except (ValueError, TypeError):
        return None


def _parse_body(response: httpx.Response) -> dict:
    """Return the JSON body, or ``{}`` when it is missing or not an object."""
    try:
        body = response.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


def _raise_for_slack_error(
    method: str,
    status_code: int,
    slack_error: str,
    body: dict,
) -> None:
    """Raise the :class:`MdslackApiError` subclass matching *slack_error*."""
    context: dict[str, Any] = {
        "method": method,
        "status_code": status_code,
        "slack_error": slack_error,
    }
    if "response_metadata" in body:
        context["response_metadata"] = body["response_metadata"]

    if slack_error in _AUTH_ERRORS or status_code == 401:
        raise MdslackAuthError(
            message=f"Authentication failed on {method}: {slack_error}",
            context=context,
        )
    if slack_error in _PERMISSION_ERRORS or status_code == 403:
        raise MdslackPermissionError(
            message=f"Permission denied on {method}: {slack_error}",
            context=context,
        )
    if slack_error in _NOT_FOUND_ERRORS or status_code == 404:
        raise MdslackNotFoundError(
            message=f"Not found on {method}: {slack_error}",
            context=context,
        )
    raise MdslackApiError(
        message=f"Slack API error on {method}: {slack_error}",
        context=context,
    )


def _dump_payload(
    method: str,
    payload: dict | None,
    response_status: int | None,
    response_body: Any | None,
    token: str | None = None,
) -> None:
    """Write a redacted debug dump of the call to stderr."""
    from mdslack.utils.redact import redact

    dump: dict[str, Any] = {"method": method}
    if payload is not None:
        dump["request_body"] = payload
    if response_status is not None:
        dump["response_status"] = response_status
    if response_body is not None:
        dump["response_body"] = response_body
    safe_dump = redact(dump, token)
    print(
        _json.dumps(safe_dump, indent=2, default=str),
        file=sys.stderr,
    )


# ---------------------------------------------------------------------------
# Transport
# ---------------------------------------------------------------------------

class SlackTransport:
    """Synchronous Slack Web API transport with auth and retries.

    Parameters
    ----------
    config:
        A :class:`SlackConfig` controlling token, base URL, timeouts and
        retry behaviour.
    """

    def __init__(self, config: SlackConfig) -> None:
        self._config = config
        self._client = httpx.Client(
            base_url=config.base_url,
            headers={
                "Authorization": f"Bearer {config.token}",
                "Content-Type": "application/json; charset=utf-8",
            },
            timeout=httpx.Timeout(config.timeout_seconds),
            proxy=config.http_proxy,
        )

    def call(self, method: str, payload: dict | None = None) -> dict:
        """Invoke a Web API method such as ``chat.postMessage``.

        Returns
        -------
        dict
            The parsed response body (``ok`` is always true).

        Raises
        ------
        MdslackAuthError
            Invalid, revoked or missing token.
        MdslackPermissionError
            Missing scope, or the bot is not in the channel.
        MdslackNotFoundError
            Unknown channel or method.
        MdslackApiError
            Any other error Slack reports.
        MdslackRetryExhaustedError
            When all retry attempts have been used up.
        MdslackNetworkError
            On transport-level failures that are not retryable, or on the
            last attempt.
        """
        max_attempts = self._config.retry_max_attempts
        path = f"/{method}"
        last_exception: Exception | None = None
        last_status: int | None = None
        last_error: str | None = None

        for attempt in range(max_attempts):
            try:
                response = self._client.post(path, json=payload or {})
            except (httpx.TimeoutException, httpx.NetworkError) as exc:
                last_exception = exc
                last_status = None
                time.sleep(self._handle_network_exception(method, exc, attempt))
                continue

            last_status = response.status_code
            last_exception = None
            body = _parse_body(response)

            if self._config.debug_dump_payload:
                _dump_payload(
                    method, payload, response.status_code,
                    body or response.text[:1000], token=self._config.token,
                )

            retry_after: float | None = None
            if 200 <= response.status_code < 300:
                if body.get("ok", False):
                    return body
                last_error = str(body.get("error", "unknown_error"))
                if last_error not in _RETRYABLE_SLACK_ERRORS:
                    _raise_for_slack_error(method, response.status_code, last_error, body)
                if not should_retry(
                    response.status_code, None, attempt, max_attempts, slack_error=last_error,
                ):
                    break
                retry_after = _parse_retry_after(response)
            else:
                if response.status_code not in _RETRYABLE_STATUSES:
                    _raise_for_slack_error(
                        method,
                        response.status_code,
                        str(body.get("error", f"http_{response.status_code}")),
                        body,
                    )
                if not should_retry(response.status_code, None, attempt, max_attempts):
                    break
                if response.status_code == 429:
                    retry_after = _parse_retry_after(response)
                    log.warning(
                        "Rate limited by Slack API",
                        extra={
                            "extra_fields": {
                                "op": "call",
                                "method": method,
                                "status_code": 429,
                                "retry_after": retry_after,
                                "attempt": attempt + 1,
                            }
                        },
                    )

            delay = compute_backoff(
                attempt,
                base=self._config.retry_base_delay,
                maximum=self._config.retry_max_delay,
                jitter=self._config.retry_jitter,
                retry_after=retry_after,
            )
            time.sleep(delay)

        ctx: dict[str, Any] = {
            "attempts": max_attempts,
            "last_status_code": last_status,
        }
        if last_exception is not None:
            raise MdslackRetryExhaustedError(
                message=(
                    f"All {max_attempts} attempts exhausted for {method} "
                    f"(last error: {last_exception})"
                ),
                context=ctx,
                cause=last_exception,
            )
        if last_error is not None:
            ctx["slack_error"] = last_error
        raise MdslackRetryExhaustedError(
            message=(
                f"All {max_attempts} attempts exhausted for {method} "
                f"(last status: {last_status})"
            ),
            context=ctx,
        )

    def _handle_network_exception(self, method: str, exc: Exception, attempt: int) -> float:
        """Return the backoff delay if the call should be retried, else raise
        :class:`MdslackNetworkError`.
        """
        log.warning(
            "Request network error",
            extra={
                "extra_fields": {
                    "op": "call",
                    "method": method,
                    "attempt": attempt + 1,
                    "error": str(exc),
                }
            },
        )
        if should_retry(None, exc, attempt, self._config.retry_max_attempts):
            return compute_backoff(
                attempt,
                base=self._config.retry_base_delay,
                maximum=self._config.retry_max_delay,
                jitter=self._config.retry_jitter,
            )
        raise MdslackNetworkError(
            message=f"Network error on {method}: {exc}",
            context={"url": f"{self._config.base_url}/{method}", "attempt": attempt + 1},
            cause=exc,
        ) from exc

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._client.close()

    def __enter__(self) -> SlackTransport:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
