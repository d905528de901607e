"""Markdown node tree consumed by the block builder.

The tree is a closed set of frozen dataclasses.  Every class carries a
class-level ``type`` tag which the builder and the inline formatter
dispatch on.  Child sequences are stored as tuples, so a tree cannot be
modified once built.

Block nodes::

    Root, Heading, Paragraph, Code, List, ListItem, Blockquote, Table,
    ThematicBreak, RawHtml

Inline nodes::

    Text, Emphasis, Strong, Strikethrough, InlineCode, Link, Image,
    LineBreak, RawInlineHtml

Constructing a node with a wrongly typed field raises
:class:`~mdslack.errors.MdslackNodeError`.  A :class:`Node` subclass the
builder does not know about is not an error; it is rendered as nothing.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, ClassVar

from mdslack.errors import MdslackNodeError


def _fail(node: Node, field_name: str, expected: str, value: Any) -> None:
    raise MdslackNodeError(
        f"{type(node).__name__}.{field_name} must be {expected}, got {type(value).__name__}",
        context={"node_type": node.type, "field": field_name, "value": repr(value)[:200]},
    )


def _freeze_nodes(node: Node, field_name: str, value: Any) -> tuple:
    """Validate a child sequence and store it as a tuple."""
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
        _fail(node, field_name, "a sequence of nodes", value)
    for child in value:
        if not isinstance(child, Node):
            _fail(node, field_name, "a sequence of nodes", child)
    frozen = tuple(value)
    object.__setattr__(node, field_name, frozen)
    return frozen


def _check_str(node: Node, field_name: str, value: Any, *, optional: bool = False) -> None:
    if value is None and optional:
        return
    if not isinstance(value, str):
        _fail(node, field_name, "a str", value)


class Node:
    """Base class of every node in the tree."""

    type: ClassVar[str] = "node"


# ---------------------------------------------------------------------------
# Inline (phrasing) nodes
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Text(Node):
    type: ClassVar[str] = "text"
    value: str

    def __post_init__(self) -> None:
        _check_str(self, "value", self.value)


@dataclass(frozen=True)
class Emphasis(Node):
    type: ClassVar[str] = "emphasis"
    children: Sequence[Node] = ()

    def __post_init__(self) -> None:
        _freeze_nodes(self, "children", self.children)


@dataclass(frozen=True)
class Strong(Node):
    type: ClassVar[str] = "strong"
    children: Sequence[Node] = ()

    def __post_init__(self) -> None:
        _freeze_nodes(self, "children", self.children)


@dataclass(frozen=True)
class Strikethrough(Node):
    type: ClassVar[str] = "strikethrough"
    children: Sequence[Node] = ()

    def __post_init__(self) -> None:
        _freeze_nodes(self, "children", self.children)


@dataclass(frozen=True)
class InlineCode(Node):
    type: ClassVar[str] = "inline_code"
    value: str

    def __post_init__(self) -> None:
        _check_str(self, "value", self.value)


@dataclass(frozen=True)
class Link(Node):
    type: ClassVar[str] = "link"
    url: str
    children: Sequence[Node] = ()

    def __post_init__(self) -> None:
        _check_str(self, "url", self.url)
        _freeze_nodes(self, "children", self.children)


@dataclass(frozen=True)
class Image(Node):
    type: ClassVar[str] = "image"
    url: str
    alt: str | None = None
    title: str | None = None

    def __post_init__(self) -> None:
        _check_str(self, "url", self.url)
        _check_str(self, "alt", self.alt, optional=True)
        _check_str(self, "title", self.title, optional=True)


@dataclass(frozen=True)
class LineBreak(Node):
    type: ClassVar[str] = "line_break"


@dataclass(frozen=True)
class RawInlineHtml(Node):
    type: ClassVar[str] = "raw_inline_html"
    text: str

    def __post_init__(self) -> None:
        _check_str(self, "text", self.text)


# ---------------------------------------------------------------------------
# Block nodes
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Heading(Node):
    type: ClassVar[str] = "heading"
    level: int
    children: Sequence[Node] = ()

    def __post_init__(self) -> None:
        if isinstance(self.level, bool) or not isinstance(self.level, int):
            _fail(self, "level", "an int", self.level)
        if not 1 <= self.level <= 6:
            raise MdslackNodeError(
                f"Heading.level must be between 1 and 6, got {self.level}",
                context={"node_type": self.type, "field": "level", "value": self.level},
            )
        _freeze_nodes(self, "children", self.children)


@dataclass(frozen=True)
class Paragraph(Node):
    type: ClassVar[str] = "paragraph"
    children: Sequence[Node] = ()

    def __post_init__(self) -> None:
        _freeze_nodes(self, "children", self.children)


@dataclass(frozen=True)
class Code(Node):
    type: ClassVar[str] = "code"
    text: str
    language: str | None = None

    def __post_init__(self) -> None:
        _check_str(self, "text", self.text)
        _check_str(self, "language", self.language, optional=True)


@dataclass(frozen=True)
class ListItem(Node):
    type: ClassVar[str] = "list_item"
    children: Sequence[Node] = ()
    checked: bool | None = None

    def __post_init__(self) -> None:
        _freeze_nodes(self, "children", self.children)
        if self.checked is not None and not isinstance(self.checked, bool):
            _fail(self, "checked", "a bool or None", self.checked)


@dataclass(frozen=True)
class List(Node):
    type: ClassVar[str] = "list"
    items: Sequence[ListItem] = ()
    ordered: bool = False
    start: int | None = None

    def __post_init__(self) -> None:
        items = _freeze_nodes(self, "items", self.items)
        for item in items:
            if not isinstance(item, ListItem):
                _fail(self, "items", "a sequence of ListItem", item)


@dataclass(frozen=True)
class Blockquote(Node):
    type: ClassVar[str] = "blockquote"
    children: Sequence[Node] = ()

    def __post_init__(self) -> None:
        _freeze_nodes(self, "children", self.children)


@dataclass(frozen=True)
class Table(Node):
    """A table; each cell is a sequence of inline nodes."""

    type: ClassVar[str] = "table"
    header: Sequence[Sequence[Node]] = ()
    rows: Sequence[Sequence[Sequence[Node]]] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "header", self._freeze_row("header", self.header))
        if isinstance(self.rows, (str, bytes)) or not isinstance(self.rows, Sequence):
            _fail(self, "rows", "a sequence of rows", self.rows)
        object.__setattr__(
            self, "rows", tuple(self._freeze_row("rows", row) for row in self.rows),
        )

    def _freeze_row(self, field_name: str, row: Any) -> tuple:
        if isinstance(row, (str, bytes)) or not isinstance(row, Sequence):
            _fail(self, field_name, "a sequence of cells", row)
        cells = []
        for cell in row:
            if isinstance(cell, (str, bytes)) or not isinstance(cell, Sequence):
                _fail(self, field_name, "a sequence of inline nodes per cell", cell)
            for child in cell:
                if not isinstance(child, Node):
                    _fail(self, field_name, "a sequence of inline nodes per cell", child)
            cells.append(tuple(cell))
        return tuple(cells)


@dataclass(frozen=True)
class ThematicBreak(Node):
    type: ClassVar[str] = "thematic_break"


@dataclass(frozen=True)
class RawHtml(Node):
    type: ClassVar[str] = "raw_html"
    text: str

    def __post_init__(self) -> None:
        _check_str(self, "text", self.text)


@dataclass(frozen=True)
class Root(Node):
    type: ClassVar[str] = "root"
    children: Sequence[Node] = field(default=())

    def __post_init__(self) -> None:
        _freeze_nodes(self, "children", self.children)
