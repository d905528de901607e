"""Table conversion: Markdown table to a preformatted section block.

Slack has no table block.  The table is rebuilt as pipe-delimited text
inside a code fence so it at least keeps its columns in a monospaced
font::

    ```
    | Syntax | Description |
    | --- | --- |
    | Header | Title |
    ```

The separator row has one ``---`` per header column.  Cell contents are
formatted as mrkdwn (Slack shows the markup literally inside a fence, as
it would in the Markdown source); an image in a cell is replaced by its
URL.
"""

from __future__ import annotations

from collections.abc import Sequence

from mdslack.converter.blocks import section
from mdslack.converter.mrkdwn import format_mrkdwn
from mdslack.converter.nodes import Image, Node, Table


def render_table(node: Table) -> dict:
    """Build the section block for *node*."""
    lines = [_join_cells(_cell_texts(node.header))]
    lines.append(_join_cells(["---"] * len(node.header)))
    for row in node.rows:
        lines.append(_join_cells(_cell_texts(row)))

    body = "\n".join(lines)
    return section(f"```\n{body}\n```")


def _join_cells(texts: Sequence[str]) -> str:
    return f"| {' | '.join(texts)} |"


def _cell_texts(row: Sequence[Sequence[Node]]) -> list[str]:
    return [_cell_text(cell) for cell in row]


def _cell_text(cell: Sequence[Node]) -> str:
    """Render one cell; each inline child is separated by a single space."""
    parts: list[str] = []
    for child in cell:
        if isinstance(child, Image):
            parts.append(child.url or child.title or child.alt or "image")
        else:
            parts.append(format_mrkdwn(child))
    return " ".join(parts)
