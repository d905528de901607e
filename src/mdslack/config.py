"""Configuration for mdslack.

Two layers of knobs live here:

* :class:`ParsingOptions` / :class:`ListOptions` — rendering choices used by
  the block builder.  These are the only options the conversion engine
  reads.
* :class:`SlackConfig` — everything the :class:`~mdslack.client.SlackClient`
  needs on top of that: the bot token, API root, batching, retry and HTTP
  settings, and debug dumps.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

# ---------------------------------------------------------------------------
# Rendering options
# ---------------------------------------------------------------------------

DEFAULT_BULLET = "• "
"""Prefix used for bullet items and, by default, for task-list items."""


@dataclass(frozen=True)
class ListOptions:
    """How list items are rendered.

    Parameters
    ----------
    checkbox_prefix:
        Called with the item's checked state for task-list items; the
        return value is used verbatim as the line prefix.  When ``None``
        task items are rendered with :data:`DEFAULT_BULLET`.
    """

    checkbox_prefix: Callable[[bool], str] | None = None

    def prefix_for(self, checked: bool) -> str:
        if self.checkbox_prefix is None:
            return DEFAULT_BULLET
        return self.checkbox_prefix(checked)


@dataclass(frozen=True)
class ParsingOptions:
    """Options consumed by the block builder."""

    lists: ListOptions = field(default_factory=ListOptions)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any] | None) -> ParsingOptions:
        """Build options from a plain record such as
        ``{"lists": {"checkboxPrefix": fn}}``.

        Both ``checkboxPrefix`` and ``checkbox_prefix`` spellings are
        accepted, and ``lists`` may also be a :class:`ListOptions`.
        Unrecognised keys are ignored; absent keys fall back to the
        defaults.
        """
        if not mapping:
            return cls()
        lists = mapping.get("lists") or {}
        if isinstance(lists, ListOptions):
            return cls(lists=lists)
        if not isinstance(lists, Mapping):
            raise ValueError(f"lists must be a mapping or ListOptions, got {lists!r}")
        prefix = lists.get("checkbox_prefix", lists.get("checkboxPrefix"))
        if prefix is not None and not callable(prefix):
            raise ValueError(f"lists.checkbox_prefix must be callable, got {prefix!r}")
        return cls(lists=ListOptions(checkbox_prefix=prefix))


# ---------------------------------------------------------------------------
# Client configuration
# ---------------------------------------------------------------------------

@dataclass
class SlackConfig:
    """Complete configuration for a :class:`~mdslack.client.SlackClient`.

    Every parameter has a default; only ``token`` is needed to post.
    Conversion alone works with an empty token.

    Parameters
    ----------
    token:
        Slack bot or user token (``xoxb-…`` / ``xoxp-…``).  Never logged.
    base_url:
        Web API root.  Override for proxies or tests.
    parsing:
        Rendering options handed to the block builder.
    max_blocks_per_message:
        Slack accepts at most 50 blocks per message; longer documents are
        posted as several messages.
    retry_max_attempts:
        Maximum total attempts per call for retryable failures.
    retry_base_delay:
        Base delay (seconds) for exponential backoff.
    retry_max_delay:
        Upper cap (seconds) on computed backoff delay.
    retry_jitter:
        Randomly scale backoff delays to 50-100 %.
    timeout_seconds:
        HTTP request timeout.
    http_proxy:
        Optional HTTP/HTTPS proxy URL.
    debug_dump_ast:
        Write the parsed node tree to *stderr* on each conversion.
    debug_dump_payload:
        Write the (redacted) block payload and API responses to *stderr*.
    """

    token: str = ""

    base_url: str = "https://slack.com/api"

    parsing: ParsingOptions = field(default_factory=ParsingOptions)

    max_blocks_per_message: int = 50

    # ── Retry ───────────────────────────────────────────────────────────
    retry_max_attempts: int = 5

    retry_base_delay: float = 1.0

    retry_max_delay: float = 60.0

    retry_jitter: bool = True

    # ── HTTP ────────────────────────────────────────────────────────────
    timeout_seconds: float = 30.0

    http_proxy: str | None = None

    # ── Debug ───────────────────────────────────────────────────────────
    debug_dump_ast: bool = False

    debug_dump_payload: bool = False

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        from urllib.parse import urlparse

        parsed = urlparse(self.base_url)
        if parsed.scheme == "http" and parsed.hostname not in (
            "localhost",
            "127.0.0.1",
            "::1",
        ):
            raise ValueError(
                f"base_url uses insecure HTTP for non-local host '{parsed.hostname}'. "
                "Use HTTPS to protect your token, or target localhost for testing."
            )

        if not 1 <= self.max_blocks_per_message <= 50:
            raise ValueError(
                f"max_blocks_per_message must be between 1 and 50, got {self.max_blocks_per_message}"
            )
        if self.retry_max_attempts < 1:
            raise ValueError(f"retry_max_attempts must be >= 1, got {self.retry_max_attempts}")
        if self.retry_base_delay < 0:
            raise ValueError(f"retry_base_delay must be >= 0, got {self.retry_base_delay}")
        if self.retry_max_delay < 0:
            raise ValueError(f"retry_max_delay must be >= 0, got {self.retry_max_delay}")
        if self.timeout_seconds <= 0:
            raise ValueError(f"timeout_seconds must be > 0, got {self.timeout_seconds}")

    def __repr__(self) -> str:
        """Mask the token to prevent accidental credential leakage."""
        parts: list[str] = []
        for f in dataclasses.fields(self):
            val = getattr(self, f.name)
            if f.name == "token":
                masked = f"...{val[-4:]}" if len(val) >= 4 else "****"
                parts.append(f"token='{masked}'")
            else:
                parts.append(f"{f.name}={val!r}")
        return f"SlackConfig({', '.join(parts)})"
