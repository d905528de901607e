"""mdslack — Markdown to Slack Block Kit.

Public re-exports
-----------------

* **Conversion:** :func:`markdown_to_blocks`, :func:`parse_blocks`,
  :class:`MarkdownToSlackConverter`
* **Client:** :class:`SlackClient`
* **Configuration:** :class:`ParsingOptions`, :class:`ListOptions`,
  :class:`SlackConfig`
* **Errors:** Every :class:`MdslackError` subclass and :class:`ErrorCode`
* **Models:** result dataclasses

Usage::

    from mdslack import markdown_to_blocks

    blocks = markdown_to_blocks("# Hello\\n\\n**World**")
    # [{'type': 'header', ...}, {'type': 'section', 'text': {'type': 'mrkdwn', 'text': '*World*'}}]
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

# ── Client ──────────────────────────────────────────────────────────────
from mdslack.client import SlackClient

# ── Configuration ───────────────────────────────────────────────────────
from mdslack.config import ListOptions, ParsingOptions, SlackConfig

# ── Conversion ──────────────────────────────────────────────────────────
from mdslack.converter.block_builder import build_blocks, parse_blocks
from mdslack.converter.md_to_slack import MarkdownToSlackConverter

# ── Errors ──────────────────────────────────────────────────────────────
from mdslack.errors import (
    ErrorCode,
    MdslackApiError,
    MdslackAuthError,
    MdslackConversionError,
    MdslackError,
    MdslackNetworkError,
    MdslackNodeError,
    MdslackNotFoundError,
    MdslackPermissionError,
    MdslackRetryExhaustedError,
)

# ── Models ──────────────────────────────────────────────────────────────
from mdslack.models import ConversionResult, ConversionWarning, PostResult

# ── Logging ─────────────────────────────────────────────────────────────
from mdslack.observability import configure_logging


def markdown_to_blocks(
    body: str,
    options: ParsingOptions | Mapping[str, Any] | None = None,
) -> list[dict]:
    """Convert Markdown / GitHub-flavoured Markdown to Slack blocks.

    - All heading levels become a single ``header`` block
    - Numbered, bulleted and to-do lists become one ``section`` each
    - Bold, italics, strikethrough, inline code and links become mrkdwn
    - Images (Markdown or ``<img>``) become ``image`` blocks
    - Thematic breaks become ``divider`` blocks

    Tables are kept as preformatted text, and block quotes only support
    paragraphs, since Slack has no equivalent for either.

    Parameters
    ----------
    body:
        Any Markdown or GFM content.
    options:
        A :class:`ParsingOptions`, or a plain record such as
        ``{"lists": {"checkboxPrefix": lambda checked: "☑ " if checked else "☐ "}}``.
    """
    if not isinstance(options, ParsingOptions):
        options = ParsingOptions.from_mapping(options)
    converter = MarkdownToSlackConverter(SlackConfig(parsing=options))
    return converter.convert(body).blocks


# ── Public surface ──────────────────────────────────────────────────────

__all__ = [
    # Conversion
    "markdown_to_blocks",
    "parse_blocks",
    "build_blocks",
    "MarkdownToSlackConverter",
    # Client
    "SlackClient",
    # Configuration
    "ListOptions",
    "ParsingOptions",
    "SlackConfig",
    # Errors
    "ErrorCode",
    "MdslackError",
    "MdslackConversionError",
    "MdslackNodeError",
    "MdslackApiError",
    "MdslackAuthError",
    "MdslackPermissionError",
    "MdslackNotFoundError",
    "MdslackRetryExhaustedError",
    "MdslackNetworkError",
    # Models
    "ConversionResult",
    "ConversionWarning",
    "PostResult",
    # Logging
    "configure_logging",
]
