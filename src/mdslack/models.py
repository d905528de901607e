"""Result models returned by the converter and the client.

All types are plain dataclasses with no behaviour beyond structural
equality.  Blocks themselves are plain dicts so they can be handed to any
Slack client unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class ConversionWarning:
    """A non-fatal issue encountered during conversion.

    Attributes
    ----------
    code:
        A machine-readable warning code (e.g. ``"UNSUPPORTED_NODE"``).
    message:
        A human-readable description of the issue.
    context:
        Arbitrary structured data for diagnostics.
    """

    code: str
    message: str
    context: dict = field(default_factory=dict)


@dataclass
class ConversionResult:
    """Output of the Markdown-to-blocks conversion.

    Attributes
    ----------
    blocks:
        Slack Block Kit blocks, in document order.
    warnings:
        Nodes that were dropped or degraded along the way.
    """

    blocks: list[dict] = field(default_factory=list)
    warnings: list[ConversionWarning] = field(default_factory=list)


@dataclass
class PostResult:
    """Result of :meth:`SlackClient.post_markdown` / :meth:`SlackClient.post_blocks`.

    Attributes
    ----------
    channel:
        The channel ID Slack reports the messages were posted to.
    message_ts:
        Timestamps of every message posted, in order.  The first one is
        the thread parent when the blocks were split across messages.
    blocks_posted:
        Total number of blocks sent.
    warnings:
        Conversion warnings (empty when posting pre-built blocks).
    """

    channel: str
    message_ts: list[str] = field(default_factory=list)
    blocks_posted: int = 0
    warnings: list[ConversionWarning] = field(default_factory=list)
