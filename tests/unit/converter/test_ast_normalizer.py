"""Tests for converter/ast_normalizer.py: mistune tokens to the node tree."""

import pytest

from mdslack.converter.ast_normalizer import ASTNormalizer
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


def _only(root: Root):
    assert len(root.children) == 1, root.children
    return root.children[0]


def _inlines(normalizer: ASTNormalizer, markdown: str):
    para = _only(normalizer.parse(markdown))
    assert isinstance(para, Paragraph)
    return para.children


# =========================================================================
# Block tokens
# =========================================================================

class TestBlocks:

    def test_empty_document(self, normalizer):
        assert normalizer.parse("") == Root(())

    def test_blank_lines_dropped(self, normalizer):
        assert normalizer.parse("\n\n\n") == Root(())

    @pytest.mark.parametrize("level", [1, 2, 3, 4, 5, 6])
    def test_heading_levels(self, normalizer, level):
        node = _only(normalizer.parse("#" * level + " Title"))
        assert node == Heading(level, [Text("Title")])

    def test_heading_with_markup(self, normalizer):
        node = _only(normalizer.parse("# heading **a**"))
        assert node == Heading(1, [Text("heading "), Strong([Text("a")])])

    def test_paragraph(self, normalizer):
        assert _only(normalizer.parse("hello")) == Paragraph([Text("hello")])

    def test_fenced_code_with_language(self, normalizer):
        node = _only(normalizer.parse("```python\nx = 1\n```"))
        assert node == Code("x = 1", "python")

    def test_fenced_code_info_first_word(self, normalizer):
        node = _only(normalizer.parse("```js title=app.js\nlet a\n```"))
        assert node.language == "js"

    def test_fenced_code_without_language(self, normalizer):
        node = _only(normalizer.parse("```\nline 1\n  line 2\n```"))
        assert node == Code("line 1\n  line 2", None)

    def test_indented_code(self, normalizer):
        node = _only(normalizer.parse("    x = 1"))
        assert node == Code("x = 1", None)

    def test_thematic_break(self, normalizer):
        assert _only(normalizer.parse("***")) == ThematicBreak()

    def test_blockquote(self, normalizer):
        node = _only(normalizer.parse("> quoted"))
        assert node == Blockquote([Paragraph([Text("quoted")])])

    def test_block_html(self, normalizer):
        node = _only(normalizer.parse("<div>\nhi\n</div>"))
        assert isinstance(node, RawHtml)
        assert node.text.startswith("<div>")

    def test_document_order(self, normalizer):
        root = normalizer.parse("# T\n\npara\n\n---\n\n```\nc\n```")
        assert [child.type for child in root.children] == [
            "heading", "paragraph", "thematic_break", "code",
        ]


# =========================================================================
# Lists
# =========================================================================

class TestLists:

    def test_bullet_list(self, normalizer):
        node = _only(normalizer.parse("- a\n- b"))
        assert node == List([
            ListItem([Paragraph([Text("a")])]),
            ListItem([Paragraph([Text("b")])]),
        ])

    def test_ordered_list(self, normalizer):
        node = _only(normalizer.parse("1. a\n2. b"))
        assert node.ordered is True
        assert len(node.items) == 2

    def test_ordered_start(self, normalizer):
        node = _only(normalizer.parse("3. a\n4. b"))
        assert node.start == 3

    def test_task_items(self, normalizer):
        node = _only(normalizer.parse("- [ ] todo\n- [x] done\n- plain"))
        assert [item.checked for item in node.items] == [False, True, None]
        assert node.items[0].children == (Paragraph([Text("todo")]),)

    def test_loose_list(self, normalizer):
        node = _only(normalizer.parse("- a\n\n- b"))
        assert [item.children[0] for item in node.items] == [
            Paragraph([Text("a")]),
            Paragraph([Text("b")]),
        ]

    def test_nested_list_kept_in_item(self, normalizer):
        node = _only(normalizer.parse("- outer\n  - inner"))
        children = node.items[0].children
        assert children[0] == Paragraph([Text("outer")])
        assert isinstance(children[1], List)


# =========================================================================
# Tables
# =========================================================================

class TestTables:

    def test_table(self, normalizer):
        md = "| A | B |\n| --- | --- |\n| 1 | **2** |"
        node = _only(normalizer.parse(md))
        assert node == Table(
            [[Text("A")], [Text("B")]],
            [[[Text("1")], [Strong([Text("2")])]]],
        )

    def test_cells_are_node_sequences(self, normalizer):
        md = "| A | B |\n| --- | --- |\n| x | y |\n| z | w |\n"
        node = _only(normalizer.parse(md))
        assert len(node.header) == 2
        assert [[cell[0].value for cell in row] for row in node.rows] == [["x", "y"], ["z", "w"]]


# =========================================================================
# Inline tokens
# =========================================================================

class TestInlines:

    def test_strong_and_emphasis(self, normalizer):
        assert _inlines(normalizer, "a **b** _c_") == (
            Text("a "), Strong([Text("b")]), Text(" "), Emphasis([Text("c")]),
        )

    def test_strikethrough(self, normalizer):
        assert _inlines(normalizer, "~~gone~~") == (Strikethrough([Text("gone")]),)

    def test_codespan(self, normalizer):
        assert _inlines(normalizer, "`x = y`") == (InlineCode("x = y"),)

    def test_link(self, normalizer):
        assert _inlines(normalizer, "[link](https://apple.com)") == (
            Link("https://apple.com", [Text("link")]),
        )

    def test_bare_url_autolinked(self, normalizer):
        children = _inlines(normalizer, "see https://example.com")
        assert children[-1] == Link("https://example.com", [Text("https://example.com")])

    def test_image(self, normalizer):
        children = _inlines(normalizer, '![alt text](https://x/a.png "Title")')
        assert children == (Image("https://x/a.png", alt="alt text", title="Title"),)

    def test_image_without_alt(self, normalizer):
        children = _inlines(normalizer, "![](https://x/a.png)")
        assert children == (Image("https://x/a.png", alt=None, title=None),)

    def test_softbreak_becomes_newline_text(self, normalizer):
        assert _inlines(normalizer, "one\ntwo") == (Text("one"), Text("\n"), Text("two"))

    def test_hard_break(self, normalizer):
        assert _inlines(normalizer, "one  \ntwo") == (Text("one"), LineBreak(), Text("two"))

    def test_inline_html(self, normalizer):
        children = _inlines(normalizer, 'a <img src="x.png"> b')
        assert RawInlineHtml('<img src="x.png">') in children

    def test_nested_markup(self, normalizer):
        assert _inlines(normalizer, "**_d_ e**") == (
            Strong([Emphasis([Text("d")]), Text(" e")]),
        )

    def test_nested_markup_after_text(self, normalizer):
        assert _inlines(normalizer, "a **_d_ e**") == (
            Text("a "),
            Strong([Emphasis([Text("d")]), Text(" e")]),
        )


class TestFootnotes:

    def test_reference_and_definition_dropped(self, normalizer):
        assert normalizer.parse("Text[^1]\n\n[^1]: foot") == Root([Paragraph([Text("Text")])])

    def test_definition_is_not_a_link_reference(self, normalizer):
        root = normalizer.parse("See [^note].\n\n[^note]: https://example.com")
        assert not any(isinstance(n, Link) for n in _only(root).children)


class TestParserReuse:

    def test_independent_parses(self, normalizer):
        first = normalizer.parse("# one")
        second = normalizer.parse("two")
        assert first == Root([Heading(1, [Text("one")])])
        assert second == Root([Paragraph([Text("two")])])
