"""List rendering: one Markdown list to one section block.

Slack has no list block, so a list is flattened to newline-separated
lines inside a single section::

    1. first            • bullet            ☐ todo (custom prefix)
    2. second           • bullet            ☑ done

Only one level is supported.  An item contributes the text of its first
child when that child is a paragraph; nested lists, extra paragraphs and
inline images are dropped.
"""

from __future__ import annotations

from mdslack.config import DEFAULT_BULLET, ListOptions
from mdslack.converter.blocks import section
from mdslack.converter.mrkdwn import format_inline
from mdslack.converter.nodes import Image, List, ListItem, Paragraph


def render_list(node: List, options: ListOptions) -> dict:
    """Build the section block for *node*.

    Ordered lists are numbered from 1 whatever their ``start``; task items
    use ``options.checkbox_prefix``; everything else gets a bullet.
    """
    lines: list[str] = []
    index = 0

    for item in node.items:
        text = _item_text(item)
        if text is None:
            lines.append("")
        elif node.ordered:
            index += 1
            lines.append(f"{index}. {text}")
        elif item.checked is not None:
            lines.append(f"{options.prefix_for(item.checked)}{text}")
        else:
            lines.append(f"{DEFAULT_BULLET}{text}")

    return section("\n".join(lines))


def _item_text(item: ListItem) -> str | None:
    """mrkdwn for the item's leading paragraph, or None if it has none."""
    if not item.children or not isinstance(item.children[0], Paragraph):
        return None
    return format_inline(
        child for child in item.children[0].children if not isinstance(child, Image)
    )
