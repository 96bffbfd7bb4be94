#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_ast_nodes.py
"""Unit tests for AST node classes.

Tests cover:
- Node creation and defaults
- Heading level validation
- Visitor dispatch through ``accept``
- Exhaustiveness of the visitor interface

"""

import pytest

from styledmark.ast import (
    BLOCK_NODE_TYPES,
    INLINE_NODE_TYPES,
    BlockQuote,
    Code,
    CodeBlock,
    Document,
    Emphasis,
    Heading,
    HTMLBlock,
    HTMLInline,
    Image,
    LineBreak,
    Link,
    List,
    ListItem,
    NodeVisitor,
    Paragraph,
    SoftBreak,
    Strikethrough,
    Strong,
    SymbolLink,
    Table,
    TableCell,
    TableRow,
    Text,
    ThematicBreak,
)


def _recording_visitor_class():
    """Build a visitor whose every method returns its own name."""
    namespace = {
        name: (lambda method_name: lambda self, node: method_name)(name) for name in NodeVisitor.__abstractmethods__
    }
    return type("RecordingVisitor", (NodeVisitor,), namespace)


@pytest.mark.unit
class TestNodeCreation:
    """Tests for node construction and defaults."""

    def test_document_defaults(self):
        doc = Document()
        assert doc.children == []
        assert doc.metadata == {}

    def test_list_defaults(self):
        node = List(ordered=True)
        assert node.items == []
        assert node.start == 1
        assert node.tight is True

    def test_code_block_language_optional(self):
        block = CodeBlock(content="x = 1\n")
        assert block.language is None

    def test_image_has_no_children(self):
        image = Image(url="pic.png", alt_text="a picture")
        assert not hasattr(image, "content")
        assert image.alt_text == "a picture"

    def test_metadata_not_shared(self):
        first = Paragraph()
        second = Paragraph()
        first.metadata["key"] = "value"
        assert second.metadata == {}


@pytest.mark.unit
class TestHeadingValidation:
    """Tests for the heading level range check."""

    @pytest.mark.parametrize("level", [1, 2, 3, 4, 5, 6])
    def test_valid_levels(self, level):
        assert Heading(level=level).level == level

    @pytest.mark.parametrize("level", [0, 7, -1])
    def test_invalid_levels(self, level):
        with pytest.raises(ValueError, match="Heading level"):
            Heading(level=level)


@pytest.mark.unit
class TestVisitorDispatch:
    """Tests for ``accept`` routing every node to its visit method."""

    @pytest.mark.parametrize(
        "node,method",
        [
            (Document(), "visit_document"),
            (Heading(level=2), "visit_heading"),
            (Paragraph(), "visit_paragraph"),
            (CodeBlock(content=""), "visit_code_block"),
            (BlockQuote(), "visit_block_quote"),
            (List(ordered=False), "visit_list"),
            (ListItem(), "visit_list_item"),
            (ThematicBreak(), "visit_thematic_break"),
            (HTMLBlock(content="<p>"), "visit_html_block"),
            (Table(), "visit_table"),
            (TableRow(), "visit_table_row"),
            (TableCell(), "visit_table_cell"),
            (Text(content="t"), "visit_text"),
            (Emphasis(), "visit_emphasis"),
            (Strong(), "visit_strong"),
            (Strikethrough(), "visit_strikethrough"),
            (Code(content="c"), "visit_code"),
            (Link(url="https://example.org"), "visit_link"),
            (SymbolLink(plain_text="``s``", destination="s"), "visit_symbol_link"),
            (Image(url="i.png"), "visit_image"),
            (LineBreak(), "visit_line_break"),
            (SoftBreak(), "visit_soft_break"),
            (HTMLInline(content="<b>"), "visit_html_inline"),
        ],
    )
    def test_accept_dispatches(self, node, method):
        visitor = _recording_visitor_class()()
        assert node.accept(visitor) == method

    def test_every_node_type_has_a_visit_method(self):
        assert len(BLOCK_NODE_TYPES) + len(INLINE_NODE_TYPES) == len(NodeVisitor.__abstractmethods__)

    def test_incomplete_visitor_cannot_be_instantiated(self):
        class TextOnly(NodeVisitor):
            def visit_text(self, node):
                return node.content

        with pytest.raises(TypeError):
            TextOnly()
