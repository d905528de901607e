"""Full Markdown-to-Slack conversion pipeline.

:class:`MarkdownToSlackConverter` runs two stages:

1. **Parse** — :class:`ASTNormalizer` turns Markdown into a node tree
   using mistune.
2. **Build** — :func:`build_blocks` turns the tree into Slack Block Kit
   blocks, collecting :class:`ConversionWarning` along the way.
"""

from __future__ import annotations

import dataclasses
import json
import sys

from mdslack.config import SlackConfig
from mdslack.converter.ast_normalizer import ASTNormalizer
from mdslack.converter.block_builder import build_blocks
from mdslack.converter.nodes import Node
from mdslack.models import ConversionResult


class MarkdownToSlackConverter:
    """Convert Markdown text to Slack block payloads.

    Parameters
    ----------
    config:
        Configuration; only ``parsing`` and the ``debug_dump_*`` flags are
        read.  Defaults to :class:`SlackConfig()`.

    Examples
    --------
    >>> converter = MarkdownToSlackConverter()
    >>> result = converter.convert("# Hello\\n\\nWorld")
    >>> [block["type"] for block in result.blocks]
    ['header', 'section']
    """

    def __init__(self, config: SlackConfig | None = None) -> None:
        self._config = config or SlackConfig()
        self._normalizer = ASTNormalizer()

    def convert(self, markdown: str) -> ConversionResult:
        """Parse *markdown* and build its blocks.

        Returns
        -------
        ConversionResult
            ``blocks`` (list of Slack block dicts) and ``warnings`` (list
            of :class:`ConversionWarning`).
        """
        root = self._normalizer.parse(markdown)

        if self._config.debug_dump_ast:
            print(
                "[mdslack] Node tree:",
                json.dumps(_node_to_dict(root), indent=2, ensure_ascii=False),
                file=sys.stderr,
            )

        blocks, warnings = build_blocks(root, self._config.parsing)

        if self._config.debug_dump_payload:
            from mdslack.utils.redact import redact
            safe = redact({"blocks": blocks}, self._config.token)
            print(
                "[mdslack] Slack blocks payload:",
                json.dumps(safe["blocks"], indent=2, ensure_ascii=False),
                file=sys.stderr,
            )

        return ConversionResult(blocks=blocks, warnings=warnings)


def _node_to_dict(value: object) -> object:
    """JSON-friendly view of a node tree for debug dumps."""
    if isinstance(value, Node):
        data: dict = {"type": value.type}
        if dataclasses.is_dataclass(value):
            for f in dataclasses.fields(value):
                data[f.name] = _node_to_dict(getattr(value, f.name))
        return data
    if isinstance(value, (list, tuple)):
        return [_node_to_dict(item) for item in value]
    return value
