"""Tests for converter/tables.py."""

from mdslack.converter.blocks import section
from mdslack.converter.nodes import Image, InlineCode, Strong, Table, Text
from mdslack.converter.tables import render_table


def _row(*cells: str) -> list[list]:
    return [[Text(c)] for c in cells]


def _body(block: dict) -> str:
    text = block["text"]["text"]
    assert text.startswith("```\n") and text.endswith("\n```")
    return text[4:-4]


class TestRenderTable:

    def test_basic(self):
        node = Table(_row("Syntax", "Description"), [
            _row("Header", "Title"),
            _row("Paragraph", "Text"),
        ])
        assert render_table(node) == section(
            "```\n"
            "| Syntax | Description |\n"
            "| --- | --- |\n"
            "| Header | Title |\n"
            "| Paragraph | Text |\n"
            "```"
        )

    def test_header_only(self):
        node = Table(_row("A", "B", "C"), [])
        assert _body(render_table(node)) == "| A | B | C |\n| --- | --- | --- |"

    def test_separator_follows_header_width(self):
        node = Table(_row("A"), [_row("1", "2", "3")])
        lines = _body(render_table(node)).split("\n")
        assert lines[1] == "| --- |"
        assert lines[2] == "| 1 | 2 | 3 |"

    def test_empty_cell(self):
        node = Table([[Text("A")], []], [[[], [Text("x")]]])
        assert _body(render_table(node)) == "| A |  |\n| --- | --- |\n|  | x |"

    def test_cell_children_joined_with_space(self):
        node = Table([[Text("a"), Strong([Text("b")]), InlineCode("c")]], [])
        assert _body(render_table(node)).split("\n")[0] == "| a *b* `c` |"

    def test_image_cell_uses_url(self):
        node = Table(_row("Pic"), [[[Image("https://x/a.png", alt="a", title="t")]]])
        assert _body(render_table(node)).split("\n")[2] == "| https://x/a.png |"

    def test_image_cell_fallbacks(self):
        node = Table(_row("Pic"), [
            [[Image("", title="t")]],
            [[Image("", alt="a")]],
            [[Image("")]],
        ])
        assert _body(render_table(node)).split("\n")[2:] == ["| t |", "| a |", "| image |"]

    def test_cell_text_escaped(self):
        node = Table(_row("a < b"), [])
        assert _body(render_table(node)).split("\n")[0] == "| a &lt; b |"

    def test_no_header(self):
        node = Table([], [_row("x")])
        assert _body(render_table(node)) == "|  |\n|  |\n| x |"

    def test_truncated(self):
        node = Table(_row("h"), [_row("x" * 100) for _ in range(50)])
        assert len(render_table(node)["text"]["text"]) == 3000
