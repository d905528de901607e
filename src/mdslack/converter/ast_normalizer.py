"""Parse Markdown and normalize mistune's AST into the node tree.

This module wraps mistune v3's AST renderer (with the plugins
``strikethrough``, ``table``, ``task_lists``, ``url`` and ``footnotes``)
and converts the raw token stream into :mod:`mdslack.converter.nodes` objects.

Mistune block tokens handled:
    heading, paragraph, block_text, block_quote, list, list_item,
    task_list_item, block_code, table, thematic_break, block_html

Mistune inline tokens handled:
    text, strong, emphasis, codespan, strikethrough, link, image,
    softbreak, linebreak, inline_html

A soft break becomes ``Text("\\n")`` so that source line structure
survives into section text; a hard break becomes :class:`LineBreak`.
Anything else (blank lines, footnote references and definitions, tokens
from other plugins) is dropped, as are empty ``text`` tokens.
"""

from __future__ import annotations

from collections.abc import Callable

import mistune

from mdslack.converter.nodes import (
    Blockquote,
    Code,
    Emphasis,
    Heading,
    Image,
    InlineCode,
    LineBreak,
    Link,
    List,
    ListItem,
    Node,
    Paragraph,
    RawHtml,
    RawInlineHtml,
    Root,
    Strikethrough,
    Strong,
    Table,
    Text,
    ThematicBreak,
)

_PLUGINS: list[str] = ["strikethrough", "table", "task_lists", "url", "footnotes"]


class ASTNormalizer:
    """Parse Markdown into a :class:`Root` node."""

    def __init__(self) -> None:
        self._parser = mistune.create_markdown(renderer="ast", plugins=_PLUGINS)
        self._block_handlers: dict[str, Callable[[dict], Node]] = {
            "heading": self._heading,
            "paragraph": self._paragraph,
            "block_text": self._paragraph,
            "block_quote": self._block_quote,
            "list": self._list,
            "block_code": self._block_code,
            "table": self._table,
            "thematic_break": lambda token: ThematicBreak(),
            "block_html": lambda token: RawHtml(token.get("raw", "")),
        }
        self._inline_handlers: dict[str, Callable[[dict], Node]] = {
            "text": lambda token: Text(token.get("raw", "")),
            "strong": lambda token: Strong(self._inlines(token)),
            "emphasis": lambda token: Emphasis(self._inlines(token)),
            "strikethrough": lambda token: Strikethrough(self._inlines(token)),
            "codespan": lambda token: InlineCode(token.get("raw", "")),
            "link": self._link,
            "image": self._image,
            "softbreak": lambda token: Text("\n"),
            "linebreak": lambda token: LineBreak(),
            "inline_html": lambda token: RawInlineHtml(token.get("raw", "")),
        }

    def parse(self, markdown: str) -> Root:
        """Parse markdown and return the document's node tree."""
        raw_tokens = self._parser(markdown)
        if isinstance(raw_tokens, str):
            return Root(())
        return Root(self._blocks(raw_tokens))

    # -- token walkers -----------------------------------------------------

    def _blocks(self, tokens: list[dict]) -> list[Node]:
        result: list[Node] = []
        for token in tokens:
            handler = self._block_handlers.get(token.get("type", ""))
            if handler is not None:
                result.append(handler(token))
        return result

    def _inlines(self, token: dict) -> list[Node]:
        result: list[Node] = []
        for child in token.get("children") or []:
            # mistune leaves empty text tokens around nested emphasis
            if child.get("type") == "text" and not child.get("raw"):
                continue
            handler = self._inline_handlers.get(child.get("type", ""))
            if handler is not None:
                result.append(handler(child))
        return result

    # -- block tokens ------------------------------------------------------

    def _heading(self, token: dict) -> Node:
        level = token.get("attrs", {}).get("level", 1)
        return Heading(level, self._inlines(token))

    def _paragraph(self, token: dict) -> Node:
        return Paragraph(self._inlines(token))

    def _block_quote(self, token: dict) -> Node:
        return Blockquote(self._blocks(token.get("children") or []))

    def _list(self, token: dict) -> Node:
        attrs = token.get("attrs", {})
        items: list[ListItem] = []
        for child in token.get("children") or []:
            child_type = child.get("type", "")
            if child_type not in ("list_item", "task_list_item"):
                continue
            checked = None
            if child_type == "task_list_item":
                checked = bool(child.get("attrs", {}).get("checked", False))
            items.append(ListItem(self._blocks(child.get("children") or []), checked=checked))
        return List(
            items,
            ordered=bool(attrs.get("ordered", False)),
            start=attrs.get("start"),
        )

    def _block_code(self, token: dict) -> Node:
        raw_code = token.get("raw", "")
        # Strip trailing newline added by mistune
        if raw_code.endswith("\n"):
            raw_code = raw_code[:-1]
        info = (token.get("attrs") or {}).get("info") or ""
        words = info.split()
        return Code(raw_code, language=words[0] if words else None)

    def _table(self, token: dict) -> Node:
        header: list[list[Node]] = []
        rows: list[list[list[Node]]] = []
        for child in token.get("children") or []:
            child_type = child.get("type", "")
            if child_type == "table_head":
                header = self._cells(child)
            elif child_type == "table_body":
                for row in child.get("children") or []:
                    if row.get("type") == "table_row":
                        rows.append(self._cells(row))
        return Table(header, rows)

    def _cells(self, row: dict) -> list[list[Node]]:
        return [
            self._inlines(cell)
            for cell in row.get("children") or []
            if cell.get("type") == "table_cell"
        ]

    # -- inline tokens -----------------------------------------------------

    def _link(self, token: dict) -> Node:
        url = token.get("attrs", {}).get("url", "")
        return Link(url, self._inlines(token))

    def _image(self, token: dict) -> Node:
        attrs = token.get("attrs", {})
        alt = _extract_text(token.get("children") or [])
        return Image(attrs.get("url", ""), alt=alt or None, title=attrs.get("title"))


def _extract_text(children: list[dict]) -> str:
    """Recursively extract plain text from raw mistune inline tokens."""
    parts: list[str] = []
    for token in children:
        if "children" in token:
            parts.append(_extract_text(token["children"]))
        elif "raw" in token:
            parts.append(token["raw"])
    return "".join(parts)
