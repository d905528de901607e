"""Markdown to Slack Block Kit conversion pipeline.

Public API:

- :class:`MarkdownToSlackConverter` — Markdown → Slack blocks.
- :class:`ASTNormalizer` — parse Markdown into the node tree.
- :func:`build_blocks` / :func:`parse_blocks` — node tree → Slack blocks.
- :func:`format_mrkdwn` — render one inline node as mrkdwn.
- :func:`section`, :func:`header`, :func:`image`, :func:`divider` — block
  constructors with Slack's length limits applied.
"""

from mdslack.converter.ast_normalizer import ASTNormalizer
from mdslack.converter.block_builder import build_blocks, parse_blocks
from mdslack.converter.blocks import divider, header, image, section
from mdslack.converter.md_to_slack import MarkdownToSlackConverter
from mdslack.converter.mrkdwn import format_mrkdwn, plain_text

__all__ = [
    "ASTNormalizer",
    "MarkdownToSlackConverter",
    "build_blocks",
    "divider",
    "format_mrkdwn",
    "header",
    "image",
    "parse_blocks",
    "plain_text",
    "section",
]
