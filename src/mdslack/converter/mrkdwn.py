"""Inline rendering: phrasing nodes to Slack mrkdwn or plain text.

Slack's mrkdwn is a much smaller dialect than Markdown::

    *bold*   _italic_   ~strike~   `code`   <url|label>

and only ``&``, ``<`` and ``>`` need escaping in text.

:func:`format_mrkdwn` renders one node, :func:`format_inline` a sequence.
:func:`plain_text` strips all markup for ``plain_text`` fields such as
header blocks.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable

from mdslack.converter.nodes import (
    Emphasis,
    Image,
    InlineCode,
    Link,
    Node,
    RawInlineHtml,
    Strikethrough,
    Strong,
    Text,
)

_ESCAPES: dict[str, str] = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
}

_ESCAPE_TABLE = str.maketrans(_ESCAPES)


def escape_mrkdwn(text: str) -> str:
    """Escape the three characters Slack requires escaped in mrkdwn.

    >>> escape_mrkdwn("a < b && c > d")
    'a &lt; b &amp;&amp; c &gt; d'
    """
    return text.translate(_ESCAPE_TABLE)


def format_inline(nodes: Iterable[Node]) -> str:
    """Render a sequence of inline nodes and concatenate the results."""
    return "".join(format_mrkdwn(node) for node in nodes)


def format_mrkdwn(node: Node) -> str:
    """Render a single inline node as mrkdwn.

    Node types without a mrkdwn form (line breaks, raw inline HTML,
    anything unknown) render as the empty string.  Images are handled by
    the caller and never reach this function.
    """
    formatter = _FORMATTERS.get(node.type)
    if formatter is None:
        return ""
    return formatter(node)


def _format_text(node: Text) -> str:
    return escape_mrkdwn(node.value)


def _format_strong(node: Strong) -> str:
    return f"*{format_inline(node.children)}*"


def _format_emphasis(node: Emphasis) -> str:
    return f"_{format_inline(node.children)}_"


def _format_strikethrough(node: Strikethrough) -> str:
    return f"~{format_inline(node.children)}~"


def _format_inline_code(node: InlineCode) -> str:
    return f"`{node.value}`"


def _format_link(node: Link) -> str:
    # Consumers rely on the space after the closing bracket.
    return f"<{node.url}|{format_inline(node.children)}> "


_InlineFormatter = Callable[[Node], str]

_FORMATTERS: dict[str, _InlineFormatter] = {
    "text": _format_text,  # type: ignore[dict-item]
    "strong": _format_strong,  # type: ignore[dict-item]
    "emphasis": _format_emphasis,  # type: ignore[dict-item]
    "strikethrough": _format_strikethrough,  # type: ignore[dict-item]
    "inline_code": _format_inline_code,  # type: ignore[dict-item]
    "link": _format_link,  # type: ignore[dict-item]
}


# ---------------------------------------------------------------------------
# Plain text
# ---------------------------------------------------------------------------

def plain_text(nodes: Iterable[Node]) -> str:
    """Recursively extract unformatted text from inline nodes.

    Containers contribute their children; text, inline code and raw HTML
    their raw value; an image its title, falling back to its URL.
    """
    parts: list[str] = []
    for node in nodes:
        if isinstance(node, Image):
            parts.append(node.title or node.url)
        elif hasattr(node, "children"):
            parts.append(plain_text(node.children))
        elif hasattr(node, "value"):
            parts.append(node.value)
        elif isinstance(node, RawInlineHtml):
            parts.append(node.text)
    return "".join(parts)
