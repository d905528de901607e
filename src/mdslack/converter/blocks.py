"""Slack Block Kit block constructors.

These four functions are the only places blocks are built.  Each one
truncates its text fields to Slack's limits, so every block the converter
returns is within bounds no matter which handler produced it.
"""

from __future__ import annotations

from mdslack.utils.text import truncate

MAX_TEXT_LENGTH = 3000
"""``section.text`` (mrkdwn) limit."""

MAX_HEADER_LENGTH = 150
"""``header.text`` (plain_text) limit."""

MAX_IMAGE_ALT_TEXT_LENGTH = 2000
"""``image.alt_text`` limit."""

MAX_IMAGE_TITLE_LENGTH = 2000
"""``image.title`` (plain_text) limit."""


def section(text: str) -> dict:
    return {
        "type": "section",
        "text": {
            "type": "mrkdwn",
            "text": truncate(text, MAX_TEXT_LENGTH),
        },
    }


def header(text: str) -> dict:
    return {
        "type": "header",
        "text": {
            "type": "plain_text",
            "text": truncate(text, MAX_HEADER_LENGTH),
        },
    }


def image(url: str, alt_text: str, title: str | None = None) -> dict:
    """Build an image block; ``title`` is left out entirely when empty."""
    block: dict = {
        "type": "image",
        "image_url": url,
        "alt_text": truncate(alt_text, MAX_IMAGE_ALT_TEXT_LENGTH),
    }
    if title:
        block["title"] = {
            "type": "plain_text",
            "text": truncate(title, MAX_IMAGE_TITLE_LENGTH),
        }
    return block


def divider() -> dict:
    return {"type": "divider"}
