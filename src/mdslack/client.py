"""High-level client: convert Markdown and post it to Slack.

Usage::

    from mdslack import SlackClient

    with SlackClient(token="xoxb-...") as client:
        result = client.post_markdown("C0123456789", "# Release notes\\n\\n- fixed *everything*")
        print(result.message_ts)
"""

from __future__ import annotations

from typing import Any

from mdslack.config import SlackConfig
from mdslack.converter.blocks import MAX_TEXT_LENGTH
from mdslack.converter.md_to_slack import MarkdownToSlackConverter
from mdslack.models import ConversionResult, ConversionWarning, PostResult
from mdslack.observability import get_logger
from mdslack.slack_api.transport import SlackTransport
from mdslack.utils.chunk import chunk_blocks
from mdslack.utils.text import truncate

log = get_logger("client")


class SlackClient:
    """Convert Markdown to Block Kit and post it with ``chat.postMessage``.

    Parameters
    ----------
    token:
        Slack bot or user token.
    **kwargs:
        Any other :class:`SlackConfig` field.
    """

    def __init__(self, token: str = "", **kwargs: Any) -> None:
        self._config = SlackConfig(token=token, **kwargs)
        self._converter = MarkdownToSlackConverter(self._config)
        self._transport = SlackTransport(self._config)

    @property
    def config(self) -> SlackConfig:
        return self._config

    def convert(self, markdown: str) -> ConversionResult:
        """Convert *markdown* to blocks without posting anything."""
        return self._converter.convert(markdown)

    def post_markdown(
        self,
        channel: str,
        markdown: str,
        *,
        text: str | None = None,
        thread_ts: str | None = None,
    ) -> PostResult:
        """Convert *markdown* and post it to *channel*.

        See :meth:`post_blocks` for batching and threading behaviour.  The
        result carries the conversion warnings.
        """
        conversion = self.convert(markdown)
        return self.post_blocks(
            channel,
            conversion.blocks,
            text=text,
            thread_ts=thread_ts,
            warnings=conversion.warnings,
        )

    def post_blocks(
        self,
        channel: str,
        blocks: list[dict],
        *,
        text: str | None = None,
        thread_ts: str | None = None,
        warnings: list[ConversionWarning] | None = None,
    ) -> PostResult:
        """Post *blocks* to *channel*, splitting at Slack's per-message limit.

        When the blocks need more than one message, every message after
        the first is posted as a reply in the first message's thread
        (or in *thread_ts* when given).

        Parameters
        ----------
        text:
            Notification / fallback text.  Defaults to the text of the
            first section or header block.

        Raises
        ------
        ValueError
            If there are no blocks and no *text*.
        """
        if not blocks and not text:
            raise ValueError("Nothing to post: no blocks and no text")

        fallback = text if text is not None else _fallback_text(blocks)
        batches = chunk_blocks(blocks, self._config.max_blocks_per_message) or [[]]
        result = PostResult(channel=channel, warnings=list(warnings or []))
        parent_ts = thread_ts

        for batch in batches:
            payload: dict[str, Any] = {"channel": channel, "text": fallback}
            if batch:
                payload["blocks"] = batch
            if parent_ts is not None:
                payload["thread_ts"] = parent_ts
            response = self._transport.call("chat.postMessage", payload)

            ts = response.get("ts", "")
            result.channel = response.get("channel", result.channel)
            result.message_ts.append(ts)
            result.blocks_posted += len(batch)
            if parent_ts is None:
                parent_ts = ts

        log.info(
            "post_blocks complete",
            extra={
                "extra_fields": {
                    "op": "post_blocks",
                    "channel": result.channel,
                    "messages": len(result.message_ts),
                    "blocks": result.blocks_posted,
                }
            },
        )
        return result

    def close(self) -> None:
        """Release the underlying HTTP connection pool."""
        self._transport.close()

    def __enter__(self) -> SlackClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def _fallback_text(blocks: list[dict]) -> str:
    """Text of the first section or header block, for notifications."""
    for block in blocks:
        if block.get("type") in ("section", "header"):
            return truncate(block["text"]["text"], MAX_TEXT_LENGTH)
    return ""
