"""Convert a Markdown node tree to Slack Block Kit blocks.

This module is the dispatcher of the conversion engine.  It walks the
document's top-level nodes once, in order, and maps each one:

- heading -> header block (plain text, markup stripped)
- paragraph -> section block(s), split around inline images
- code -> fenced section block
- list -> one section block (see lists.py)
- table -> one fenced section block (see tables.py)
- blockquote -> one section per paragraph, every line prefixed "> "
- thematic_break -> divider
- raw_html -> image blocks for each <img> (see html_images.py)

Any other node produces nothing and is reported as a
:class:`ConversionWarning`.
"""

from __future__ import annotations

from collections.abc import Callable as _Callable
from collections.abc import Iterable

from mdslack.config import ParsingOptions
from mdslack.converter.blocks import divider, header, image, section
from mdslack.converter.html_images import extract_images
from mdslack.converter.lists import render_list
from mdslack.converter.mrkdwn import format_mrkdwn, plain_text
from mdslack.converter.nodes import (
    Blockquote,
    Code,
    Heading,
    Image,
    List,
    Node,
    Paragraph,
    RawHtml,
    RawInlineHtml,
    Root,
    Table,
)
from mdslack.converter.tables import render_table
from mdslack.errors import MdslackNodeError
from mdslack.models import ConversionWarning
from mdslack.observability import get_logger

log = get_logger("converter")

QUOTE_PREFIX = "> "


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def build_blocks(
    document: Root | Iterable[Node],
    options: ParsingOptions | None = None,
) -> tuple[list[dict], list[ConversionWarning]]:
    """Convert a node tree to Slack blocks.

    Parameters
    ----------
    document:
        A :class:`Root` node, or its top-level children.
    options:
        Rendering options.  Defaults to :class:`ParsingOptions()`.

    Returns
    -------
    tuple[list[dict], list[ConversionWarning]]
        (blocks, warnings)

    Raises
    ------
    MdslackNodeError
        If a top-level entry is not a :class:`Node`.
    """
    ctx = _BuildContext(options or ParsingOptions())
    children = document.children if isinstance(document, Root) else document
    for node in children:
        if not isinstance(node, Node):
            raise MdslackNodeError(
                f"Expected a Node at the top level, got {type(node).__name__}",
                context={"value": repr(node)[:200]},
            )
        ctx.blocks.extend(_process_node(node, ctx))
    return ctx.blocks, ctx.warnings


def parse_blocks(
    document: Root | Iterable[Node],
    options: ParsingOptions | None = None,
) -> list[dict]:
    """Like :func:`build_blocks` but return only the blocks."""
    blocks, _ = build_blocks(document, options)
    return blocks


class _BuildContext:
    """Mutable accumulator for one conversion call."""

    __slots__ = ("blocks", "options", "warnings")

    def __init__(self, options: ParsingOptions) -> None:
        self.options = options
        self.blocks: list[dict] = []
        self.warnings: list[ConversionWarning] = []

    def add_warning(self, code: str, message: str, **context: object) -> None:
        self.warnings.append(ConversionWarning(
            code=code, message=message, context=dict(context),
        ))


# ---------------------------------------------------------------------------
# Node dispatch
# ---------------------------------------------------------------------------

def _process_node(node: Node, ctx: _BuildContext) -> list[dict]:
    """Map a single top-level node to the block(s) it produces."""
    handler = _BLOCK_HANDLERS.get(node.type)
    if handler is not None:
        return handler(node, ctx)
    log.debug(
        "Unsupported node skipped",
        extra={"extra_fields": {"op": "build_blocks", "node_type": node.type}},
    )
    ctx.add_warning(
        "UNSUPPORTED_NODE",
        f"Node type '{node.type}' has no Slack equivalent and was skipped.",
        node_type=node.type,
    )
    return []


# ---------------------------------------------------------------------------
# Run accumulator
# ---------------------------------------------------------------------------

class _RunAccumulator:
    """Merge consecutive inline output into one section per run.

    Text is collected until an image interrupts it; the collected run is
    then turned into a section block and the image block follows.  The
    next text starts a new run.
    """

    __slots__ = ("_blocks", "_line_prefix", "_run")

    def __init__(self, line_prefix: str = "") -> None:
        self._line_prefix = line_prefix
        self._blocks: list[dict] = []
        self._run: list[str] | None = None

    def add_text(self, text: str) -> None:
        if self._run is None:
            self._run = []
        self._run.append(text)

    def add_block(self, block: dict) -> None:
        self._close_run()
        self._blocks.append(block)

    def blocks(self) -> list[dict]:
        self._close_run()
        return self._blocks

    def _close_run(self) -> None:
        if self._run is None:
            return
        text = "".join(self._run)
        if self._line_prefix:
            text = "\n".join(self._line_prefix + line for line in text.split("\n"))
        self._blocks.append(section(text))
        self._run = None


def _paragraph_blocks(
    node: Paragraph,
    ctx: _BuildContext,
    line_prefix: str = "",
) -> list[dict]:
    acc = _RunAccumulator(line_prefix)
    for child in node.children:
        if isinstance(child, Image):
            acc.add_block(_image_block(child))
        elif isinstance(child, RawInlineHtml):
            images = extract_images(child.text, ctx.warnings)
            if images:
                for block in images:
                    acc.add_block(block)
            else:
                acc.add_text("")
        else:
            acc.add_text(format_mrkdwn(child))
    return acc.blocks()


def _image_block(node: Image) -> dict:
    return image(node.url, node.alt or node.title or node.url, node.title)


# ---------------------------------------------------------------------------
# Block builders
# ---------------------------------------------------------------------------

def _build_heading(node: Heading, ctx: _BuildContext) -> list[dict]:
    return [header(plain_text(node.children))]


def _build_paragraph(node: Paragraph, ctx: _BuildContext) -> list[dict]:
    return _paragraph_blocks(node, ctx)


def _build_code(node: Code, ctx: _BuildContext) -> list[dict]:
    # Slack does not highlight, so the language is dropped from the fence.
    return [section(f"```\n{node.text}\n```")]


def _build_list(node: List, ctx: _BuildContext) -> list[dict]:
    return [render_list(node, ctx.options.lists)]


def _build_table(node: Table, ctx: _BuildContext) -> list[dict]:
    return [render_table(node)]


def _build_blockquote(node: Blockquote, ctx: _BuildContext) -> list[dict]:
    """Render each quoted paragraph with every line prefixed ``"> "``.

    Slack quotes cannot hold lists, headings or code, so other children
    are dropped with a warning.
    """
    blocks: list[dict] = []
    for child in node.children:
        if isinstance(child, Paragraph):
            blocks.extend(_paragraph_blocks(child, ctx, QUOTE_PREFIX))
        else:
            ctx.add_warning(
                "BLOCKQUOTE_CHILD_SKIPPED",
                f"'{child.type}' inside a blockquote was skipped.",
                node_type=child.type,
            )
    return blocks


def _build_divider(node: Node, ctx: _BuildContext) -> list[dict]:
    return [divider()]


def _build_raw_html(node: RawHtml, ctx: _BuildContext) -> list[dict]:
    return extract_images(node.text, ctx.warnings)


# ---------------------------------------------------------------------------
# Block handler dispatch table
# ---------------------------------------------------------------------------

_BlockHandler = _Callable[[Node, _BuildContext], list[dict]]

_BLOCK_HANDLERS: dict[str, _BlockHandler] = {
    "heading": _build_heading,  # type: ignore[dict-item]
    "paragraph": _build_paragraph,  # type: ignore[dict-item]
    "code": _build_code,  # type: ignore[dict-item]
    "list": _build_list,  # type: ignore[dict-item]
    "table": _build_table,  # type: ignore[dict-item]
    "blockquote": _build_blockquote,  # type: ignore[dict-item]
    "thematic_break": _build_divider,
    "raw_html": _build_raw_html,  # type: ignore[dict-item]
}
