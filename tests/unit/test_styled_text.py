#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_styled_text.py
"""Unit tests for StyledText and StyledTextBuilder."""

import pytest

from styledmark.constants import OBJECT_REPLACEMENT, PARAGRAPH_SEPARATOR
from styledmark.text import ImageAttachment, ParagraphStyle, Run, StyledText, StyledTextBuilder, TextAttributes

PLAIN = TextAttributes(color="default")
RED = TextAttributes(color="red")


def _image_attributes(url):
    return TextAttributes(color="default", image_url=url)


def _attachment(url):
    return ImageAttachment(url=url, data=b"png", mime_type="image/png", width=4, height=3)


@pytest.mark.unit
class TestStyledTextBuilder:
    """Tests for accumulating and coalescing runs."""

    def test_equal_attributes_merge(self):
        builder = StyledTextBuilder()
        builder.append_text("Hel", PLAIN)
        builder.append_text("lo", PLAIN)
        builder.append_text("!", RED)
        text = builder.build()
        assert text.runs == (Run("Hello", PLAIN), Run("!", RED))

    def test_empty_text_ignored(self):
        builder = StyledTextBuilder()
        builder.append_text("", PLAIN)
        assert builder.build().runs == ()
        assert builder.last_attributes is None

    def test_image_runs_never_merge(self):
        builder = StyledTextBuilder()
        builder.append_text(OBJECT_REPLACEMENT, _image_attributes("mem://a"))
        builder.append_text(OBJECT_REPLACEMENT, _image_attributes("mem://a"))
        assert len(builder.build().runs) == 2

    def test_separator_takes_last_attributes(self):
        builder = StyledTextBuilder()
        builder.append_text("a", RED)
        builder.append_separator(PLAIN)
        text = builder.build()
        assert text.text == "a" + PARAGRAPH_SEPARATOR
        assert text.attributes_at(1) == RED

    def test_separator_uses_default_when_empty(self):
        builder = StyledTextBuilder()
        builder.append_separator(RED)
        assert builder.build().attributes_at(0) == RED

    def test_separator_after_image_drops_image(self):
        builder = StyledTextBuilder()
        builder.append_text(OBJECT_REPLACEMENT, _image_attributes("mem://a"))
        builder.append_separator()
        separator = builder.build().attributes_at(1)
        assert separator.image_url is None
        assert not separator.is_image

    def test_add_attributes_covers_everything(self):
        style = ParagraphStyle(head_indent=10.0)
        builder = StyledTextBuilder()
        builder.append_text("a", PLAIN)
        builder.append_text("b", RED)
        builder.add_attributes(paragraph_style=style)
        assert all(run.attributes.paragraph_style == style for run in builder.build().runs)

    def test_append_fragment(self):
        inner = StyledTextBuilder()
        inner.append_text("x", RED)
        outer = StyledTextBuilder()
        outer.append_text("w", PLAIN)
        outer.append(inner.build())
        assert outer.build().text == "wx"
        assert len(outer) == 2


@pytest.mark.unit
class TestStyledText:
    """Tests for querying and editing finished styled text."""

    def test_text_and_length(self):
        text = StyledText((Run("ab", PLAIN), Run("c", RED)))
        assert text.text == "abc"
        assert len(text) == 3
        assert bool(text)
        assert not StyledText()

    def test_ranges(self):
        text = StyledText((Run("ab", PLAIN), Run("c", RED)))
        assert [(start, end) for start, end, _ in text.ranges()] == [(0, 2), (2, 3)]

    def test_attributes_at_out_of_range(self):
        with pytest.raises(IndexError):
            StyledText((Run("a", PLAIN),)).attributes_at(1)

    def test_link_at(self):
        linked = TextAttributes(link="https://example.org")
        text = StyledText((Run("go", linked), Run(" away", PLAIN)))
        assert text.link_at(0) == "https://example.org"
        assert text.link_at(3) is None
        assert text.link_at(99) is None

    def test_paragraphs(self):
        text = StyledText((Run(f"one{PARAGRAPH_SEPARATOR}two", PLAIN),))
        assert text.paragraphs() == ["one", "two"]

    def test_replacing_splits_runs(self):
        text = StyledText((Run("abcd", PLAIN),))
        replaced = text.replacing(1, 3, [Run("XY", RED)])
        assert replaced.runs == (Run("a", PLAIN), Run("XY", RED), Run("d", PLAIN))

    def test_replacing_out_of_bounds(self):
        with pytest.raises(IndexError):
            StyledText((Run("ab", PLAIN),)).replacing(1, 5, [])

    def test_image_placeholders_grouped_by_url(self):
        builder = StyledTextBuilder()
        builder.append_text(OBJECT_REPLACEMENT, _image_attributes("mem://a"))
        builder.append_text(" ", PLAIN)
        builder.append_text(OBJECT_REPLACEMENT, _image_attributes("mem://b"))
        builder.append_text(OBJECT_REPLACEMENT, _image_attributes("mem://a"))
        text = builder.build()
        assert text.image_placeholders() == {"mem://a": [(0, 1), (3, 4)], "mem://b": [(2, 3)]}
        assert text.has_image_placeholders

    def test_with_image_keeps_offsets(self):
        builder = StyledTextBuilder()
        builder.append_text("x", PLAIN)
        builder.append_text(OBJECT_REPLACEMENT, _image_attributes("mem://a"))
        builder.append_text("y", RED)
        text = builder.build()

        resolved = text.with_image("mem://a", _attachment("mem://a"))
        assert resolved.text == text.text
        assert resolved.attributes_at(1).image.width == 4
        assert resolved.attributes_at(1).image_url == "mem://a"
        assert resolved.attributes_at(2) == RED
        assert not resolved.has_image_placeholders

    def test_with_image_unknown_url_is_noop(self):
        text = StyledText((Run("a", PLAIN),))
        assert text.with_image("mem://missing", _attachment("mem://missing")) == text
