#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_render_state.py
"""Unit tests for RenderState and list marker bookkeeping."""

import pytest

from styledmark.options import Font, MarkdownStyle
from styledmark.renderers import BulletMarker, DecimalMarker, FirstLineIndent, ListMarkerEdit, RenderState
from styledmark.text import TabStop


@pytest.fixture
def state():
    return RenderState.initial(MarkdownStyle())


def _marker_edits(state):
    return [edit for edit in state.paragraph_edits if isinstance(edit, ListMarkerEdit)]


@pytest.mark.unit
class TestRenderState:
    """Tests for state derivation helpers."""

    def test_initial_state_follows_style(self):
        style = MarkdownStyle(font=Font(family="Georgia"), foreground_color="#333333")
        state = RenderState.initial(style)
        assert state.font.family == "Georgia"
        assert state.foreground_color == "#333333"
        assert state.paragraph_spacing == style.measurements.paragraph_spacing
        assert state.head_indent == 0.0
        assert state.tab_stops == ()
        assert state.paragraph_edits == ()

    def test_indented_accumulates(self, state):
        nested = state.indented(head=1.5, tail=-1.0).indented(head=1.5)
        assert nested.head_indent == 3.0
        assert nested.tail_indent == -1.0
        assert state.head_indent == 0.0

    def test_tab_stops_are_appended(self, state):
        first = TabStop("natural", 1.0)
        second = TabStop("right", 2.0)
        assert state.with_tab_stops(first).with_tab_stops(second).tab_stops == (first, second)

    def test_first_line_indent(self, state):
        assert state.with_first_line_indent().paragraph_edits == (FirstLineIndent(1),)
        assert state.with_first_line_indent(2).paragraph_edits == (FirstLineIndent(2),)

    def test_derivation_does_not_mutate(self, state):
        state.with_font(state.font.bold()).with_paragraph_spacing(2.0)
        assert state.font.weight == "regular"
        assert state.paragraph_spacing == MarkdownStyle().measurements.paragraph_spacing


@pytest.mark.unit
class TestListMarkers:
    """Tests for the single-live-marker rule."""

    def test_decimal_marker_number(self):
        assert DecimalMarker(0).number == 1
        assert DecimalMarker(2, start=5).number == 7

    def test_marker_captures_current_font(self, state):
        bold_state = state.with_font(state.font.bold())
        edit = bold_state.with_list_marker(BulletMarker()).paragraph_edits[-1]
        assert edit == ListMarkerEdit(BulletMarker(), bold_state.font)

    def test_new_marker_replaces_old_with_two_tabs(self, state):
        outer = state.with_first_line_indent().with_list_marker(BulletMarker())
        inner = outer.with_list_marker(DecimalMarker(0))
        assert inner.paragraph_edits == (
            FirstLineIndent(1),
            FirstLineIndent(2),
            ListMarkerEdit(DecimalMarker(0), state.font),
        )

    def test_clearing_marker_leaves_indent(self, state):
        cleared = state.with_list_marker(BulletMarker()).with_list_marker(None)
        assert cleared.paragraph_edits == (FirstLineIndent(2),)

    def test_clearing_without_marker_is_noop(self, state):
        assert state.with_list_marker(None).paragraph_edits == ()

    def test_at_most_one_marker(self, state):
        current = state
        for depth in range(5):
            current = current.with_list_marker(DecimalMarker(depth)).with_first_line_indent()
            assert len(_marker_edits(current)) == 1
        assert len(_marker_edits(current.with_list_marker(None))) == 0
