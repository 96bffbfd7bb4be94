#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_styled_text_renderer.py
"""Unit tests for StyledTextRenderer.

Tests cover:
- Inline formatting runs
- Paragraph separators between sibling blocks
- Headings, code blocks, quotes, rules and raw HTML
- List markers, nesting and tab stops
- Link and image URL resolution
- Table fallback and option validation

"""

import pytest

from styledmark.ast import (
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
from styledmark.constants import BULLET, LINE_SEPARATOR, NBSP, OBJECT_REPLACEMENT, PARAGRAPH_SEPARATOR
from styledmark.exceptions import InvalidOptionsError
from styledmark.options import Font, MarkdownParserOptions, Measurements, StyledTextRendererOptions
from styledmark.renderers import StyledTextRenderer
from styledmark.renderers.measure import ordered_list_indent_step
from styledmark.text import StyledText

PS = PARAGRAPH_SEPARATOR


def render(*blocks, **options):
    return StyledTextRenderer(StyledTextRendererOptions(**options)).render(Document(children=list(blocks)))


def para(*inlines):
    return Paragraph(content=list(inlines))


def text(value):
    return Text(content=value)


def bullet_list(*items, ordered=False, start=1):
    return List(ordered=ordered, start=start, items=[ListItem(children=list(children)) for children in items])


@pytest.mark.unit
class TestInlineRendering:
    """Tests for inline runs."""

    def test_plain_and_bold(self):
        result = render(para(text("Hello "), Strong(content=[text("world")])))
        assert result.text == "Hello world"
        assert len(result.runs) == 2
        assert result.runs[0].attributes.font.bold is False
        assert result.runs[1].attributes.font.bold is True
        assert result.runs[1].attributes.color == "default"

    def test_emphasis_is_italic(self):
        result = render(para(Emphasis(content=[text("it")])))
        assert result.attributes_at(0).font.italic is True

    def test_nested_emphasis_and_strong(self):
        result = render(para(Strong(content=[Emphasis(content=[text("both")])])))
        font = result.attributes_at(0).font
        assert font.bold and font.italic

    def test_body_point_size_follows_size_category(self):
        assert render(para(text("x"))).attributes_at(0).font.point_size == 17.0
        assert render(para(text("x")), size_category="small").attributes_at(0).font.point_size == 15.0

    def test_inline_code_is_scaled_monospace(self):
        font = render(para(Code(content="x"))).attributes_at(0).font
        assert font.monospaced is True
        assert font.point_size == pytest.approx(17 * 0.94)

    def test_soft_break_is_space(self):
        assert render(para(text("a"), SoftBreak(), text("b"))).text == "a b"

    def test_line_break_stays_in_paragraph(self):
        result = render(para(text("a"), LineBreak(), text("b")))
        assert result.text == f"a{LINE_SEPARATOR}b"
        assert PS not in result.text

    def test_strikethrough_renders_plain(self):
        result = render(para(Strikethrough(content=[text("gone")])))
        assert result.text == "gone"
        assert result.attributes_at(0).strikethrough is False

    def test_html_inline_is_literal(self):
        assert render(para(HTMLInline(content="<b>"))).text == "<b>"


@pytest.mark.unit
class TestLinksAndImages:
    """Tests for URL resolution of links and images."""

    def test_relative_link_resolved_against_base(self):
        result = render(para(Link(url="/x", content=[text("go")])), base_url="https://e.org")
        assert result.link_at(0) == "https://e.org/x"
        assert result.link_at(1) == "https://e.org/x"

    def test_link_title(self):
        result = render(para(Link(url="https://e.org", title="Tip", content=[text("go")])))
        assert result.attributes_at(0).link_title == "Tip"

    def test_malformed_link_is_inert(self):
        result = render(para(Link(url="has space", content=[text("go")])), base_url="https://e.org")
        assert result.text == "go"
        assert result.link_at(0) is None

    def test_link_keeps_inner_formatting(self):
        result = render(para(Link(url="https://e.org", content=[Strong(content=[text("go")])])))
        attributes = result.attributes_at(0)
        assert attributes.font.bold is True
        assert attributes.link == "https://e.org"

    def test_symbol_link(self):
        result = render(para(SymbolLink(plain_text="``Foo``", destination="Foo")), base_url="https://e.org/api/")
        assert result.text == "``Foo``"
        assert result.link_at(2) == "https://e.org/api/Foo"

    def test_image_placeholder(self):
        result = render(para(text("see "), Image(url="pic.png")), base_url="https://e.org/docs/")
        assert result.text == "see " + OBJECT_REPLACEMENT
        attributes = result.attributes_at(4)
        assert attributes.image_url == "https://e.org/docs/pic.png"
        assert attributes.image is None
        assert result.image_placeholders() == {"https://e.org/docs/pic.png": [(4, 5)]}

    def test_unresolvable_image_renders_nothing(self):
        result = render(para(text("a"), Image(url=None), text("b")))
        assert result.text == "ab"
        assert not result.has_image_placeholders


@pytest.mark.unit
class TestBlockRendering:
    """Tests for block layout and separators."""

    def test_empty_document(self):
        assert render() == StyledText()

    def test_separator_between_blocks_only(self):
        result = render(
            Heading(level=2, content=[text("H")]),
            para(text("P")),
            CodeBlock(content="c\n"),
            ThematicBreak(),
            HTMLBlock(content="<div></div>\n"),
        )
        assert result.text.count(PS) == 4
        assert not result.text.startswith(PS)
        assert not result.text.endswith(PS)

    def test_separator_belongs_to_preceding_paragraph(self):
        result = render(para(text("A")), para(text("B")))
        assert result.text == f"A{PS}B"
        assert result.attributes_at(1) == result.attributes_at(0)

    def test_paragraph_style(self):
        style = render(para(text("A")), line_spacing=2.0).attributes_at(0).paragraph_style
        assert style.paragraph_spacing == float(round(17 * 0.67))
        assert style.head_indent == 0.0
        assert style.line_spacing == 2.0
        assert style.alignment == "natural"
        assert style.writing_direction == "ltr"

    def test_heading(self):
        result = render(Heading(level=1, content=[text("Title")]), para(text("Body")))
        assert result.text == f"Title{PS}Body"
        heading_font = result.attributes_at(0).font
        assert heading_font.bold is True
        assert heading_font.point_size == 34.0
        assert result.attributes_at(0).paragraph_style.paragraph_spacing == float(round(17 * 0.67))
        assert result.attributes_at(6).font.point_size == 17.0

    def test_heading_scale_per_level(self):
        font = render(Heading(level=3, content=[text("T")])).attributes_at(0).font
        assert font.point_size == pytest.approx(17 * 1.17)

    def test_code_block(self):
        result = render(CodeBlock(content="a\nb\n", language="python"))
        assert result.text == f"\ta{LINE_SEPARATOR}b"
        font = result.attributes_at(1).font
        assert font.monospaced is True
        assert font.point_size == pytest.approx(17 * 0.94 * 0.94)
        style = result.attributes_at(1).paragraph_style
        assert style.head_indent == float(round(17 * 0.94 * 1.97))
        assert [stop.alignment for stop in style.tab_stops] == ["natural"]

    def test_html_block_is_literal(self):
        result = render(HTMLBlock(content="<div>\nx\n</div>\n"))
        assert result.text == f"<div>{LINE_SEPARATOR}x{LINE_SEPARATOR}</div>"

    def test_thematic_break(self):
        result = render(ThematicBreak())
        assert result.text == NBSP
        attributes = result.attributes_at(0)
        assert attributes.strikethrough is True
        assert attributes.strikethrough_color == "separator"

    def test_block_quote(self):
        result = render(BlockQuote(children=[para(text("Q"))]))
        assert result.text == "\tQ"
        attributes = result.attributes_at(1)
        assert attributes.font.italic is True
        assert attributes.paragraph_style.head_indent == float(round(17 * 1.97))
        assert attributes.paragraph_style.tail_indent == -17.0

    def test_table_fallback(self):
        table = Table(
            header=TableRow(cells=[TableCell(content=[text("a")]), TableCell(content=[text("b")])], is_header=True),
            rows=[TableRow(cells=[TableCell(content=[text("c")]), TableCell(content=[text("d")])])],
        )
        result = render(table)
        assert result.text == f"a | b{LINE_SEPARATOR}c | d"
        assert result.attributes_at(0).font.bold is True
        assert result.attributes_at(6).font.bold is False

    def test_render_is_idempotent(self):
        doc = Document(children=[Heading(level=1, content=[text("T")]), bullet_list([para(text("a"))])])
        renderer = StyledTextRenderer()
        assert renderer.render(doc) == renderer.render(doc)

    def test_render_to_string(self):
        doc = Document(children=[para(text("A")), para(text("B"))])
        assert StyledTextRenderer().render_to_string(doc) == f"A{PS}B"


@pytest.mark.unit
class TestListRendering:
    """Tests for list markers, indents and tab stops."""

    def test_bullet_list(self):
        result = render(bullet_list([para(text("A"))], [para(text("B"))], [para(text("C"))]))
        assert result.text == f"\t{BULLET}\tA{PS}\t{BULLET}\tB{PS}\t{BULLET}\tC"
        assert result.text.count(BULLET) == 3
        assert result.text.count(PS) == 2

    def test_list_followed_by_block(self):
        result = render(bullet_list([para(text("A"))], [para(text("B"))]), para(text("after")))
        assert result.text == f"\t{BULLET}\tA{PS}\t{BULLET}\tB{PS}after"

    def test_list_item_tab_stops(self):
        result = render(bullet_list([para(text("A"))]))
        style = result.attributes_at(3).paragraph_style
        assert style.head_indent == float(round(17 * 1.97))
        assert [stop.alignment for stop in style.tab_stops] == ["right", "natural"]
        assert style.tab_stops[1].location == style.head_indent
        assert style.tab_stops[0].location < style.head_indent

    def test_rtl_marker_alignment(self):
        result = render(bullet_list([para(text("A"))]), writing_direction="rtl")
        style = result.attributes_at(3).paragraph_style
        assert style.tab_stops[0].alignment == "left"
        assert style.writing_direction == "rtl"

    def test_ordered_list_numbers_from_start(self):
        result = render(bullet_list([para(text("A"))], [para(text("B"))], ordered=True, start=3))
        assert result.text == f"\t3.\tA{PS}\t4.\tB"
        assert result.attributes_at(1).font.monospaced_digits is True
        assert result.attributes_at(4).font.monospaced_digits is False

    def test_ordered_list_width_follows_displayed_numbers(self):
        result = render(bullet_list([para(text("A"))], [para(text("B"))], ordered=True, start=99999))
        assert result.text == f"\t99999.\tA{PS}\t100000.\tB"
        step = ordered_list_indent_step(Font(), 100000, Measurements(), "large")
        style = result.attributes_at(result.text.index("A")).paragraph_style
        assert step > 1.97
        assert style.head_indent == float(round(17 * step))

    def test_continuation_paragraph_is_indented(self):
        result = render(bullet_list([para(text("A")), para(text("more"))]))
        assert result.text == f"\t{BULLET}\tA{PS}\t\tmore"

    def test_last_item_keeps_larger_enclosing_spacing(self):
        renderer = StyledTextRenderer()
        node = bullet_list([para(text("a"))], [para(text("b")), para(text("c"))])
        result = renderer.render_node(node, renderer.initial_state().with_paragraph_spacing(2.0))

        assert result.text == f"\t{BULLET}\ta{PS}\t{BULLET}\tb{PS}\t\tc"
        styles = {char: result.attributes_at(result.text.index(char)).paragraph_style for char in "abc"}
        spacing = {char: style.paragraph_spacing for char, style in styles.items()}
        assert spacing == {"a": 11.0, "b": 11.0, "c": float(round(17 * 2.0))}

    def test_nested_list_replaces_outer_marker(self):
        inner = bullet_list([para(text("B"))])
        result = render(bullet_list([inner]))
        assert result.text == f"\t\t\t{BULLET}\tB"
        assert result.text.count(BULLET) == 1
        assert result.attributes_at(5).paragraph_style.head_indent == float(round(17 * 1.97 * 2))

    def test_list_item_with_nested_list_after_paragraph(self):
        inner = bullet_list([para(text("B"))])
        result = render(bullet_list([para(text("A")), inner]))
        paragraphs = result.paragraphs()
        assert paragraphs == [f"\t{BULLET}\tA", f"\t\t\t{BULLET}\tB"]


@pytest.mark.unit
class TestRendererOptions:
    """Tests for option validation."""

    def test_wrong_options_type(self):
        with pytest.raises(InvalidOptionsError):
            StyledTextRenderer(MarkdownParserOptions())

    def test_invalid_size_category(self):
        with pytest.raises(ValueError):
            StyledTextRendererOptions(size_category="gigantic")

    def test_invalid_writing_direction(self):
        with pytest.raises(ValueError):
            StyledTextRendererOptions(writing_direction="ttb")
