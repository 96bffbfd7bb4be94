#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/styledmark/renderers/state.py
"""Inherited formatting state threaded through the styled-text renderer.

:class:`RenderState` is a frozen value. Each block that changes formatting
for its children derives a new state with the ``with_*`` helpers and passes
it down; siblings never observe each other's changes.

Paragraph edits are prefix tokens emitted at the start of the next
paragraph: tab indents for quotes, code blocks and list continuations, and
list markers. At most one list marker edit is live at a time. Setting a new
marker (or clearing it) turns an existing marker into two tabs, so that
nested list items and continuation paragraphs line up under the content
column of the outer item instead of repeating its marker.

"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Union

from styledmark.options.style import Font, MarkdownStyle
from styledmark.text.attributes import TabStop


@dataclass(frozen=True)
class BulletMarker:
    """Marker of an unordered list item."""


@dataclass(frozen=True)
class DecimalMarker:
    """Marker of an ordered list item.

    Parameters
    ----------
    index : int
        Zero-based position of the item in its list
    start : int, default 1
        Number shown for the first item of the list

    """

    index: int
    start: int = 1

    @property
    def number(self) -> int:
        """Return the number displayed for this item."""
        return self.start + self.index


ListMarker = Union[BulletMarker, DecimalMarker]


@dataclass(frozen=True)
class FirstLineIndent:
    """Emit ``count`` tab characters at the start of the paragraph."""

    count: int = 1


@dataclass(frozen=True)
class ListMarkerEdit:
    """Emit a list marker, in the font that was active when the list began."""

    marker: ListMarker
    font: Font


ParagraphEdit = Union[FirstLineIndent, ListMarkerEdit]


@dataclass(frozen=True)
class RenderState:
    """Formatting context for one node and its descendants.

    Parameters
    ----------
    font : Font
        Current font descriptor
    foreground_color : str
        Current text color
    paragraph_spacing : float
        Space after the paragraph, relative to the point size
    head_indent, tail_indent : float
        Paragraph indents, relative to the point size
    tab_stops : tuple of TabStop
        Tab stops with locations relative to the point size
    paragraph_edits : tuple of ParagraphEdit
        Prefix tokens for the next paragraph

    """

    font: Font
    foreground_color: str
    paragraph_spacing: float
    head_indent: float = 0.0
    tail_indent: float = 0.0
    tab_stops: tuple[TabStop, ...] = ()
    paragraph_edits: tuple[ParagraphEdit, ...] = ()

    @classmethod
    def initial(cls, style: MarkdownStyle) -> RenderState:
        """Return the state a document starts with under ``style``."""
        return cls(
            font=style.font,
            foreground_color=style.foreground_color,
            paragraph_spacing=style.measurements.paragraph_spacing,
        )

    def with_font(self, font: Font) -> RenderState:
        """Return a copy using ``font``."""
        return replace(self, font=font)

    def with_paragraph_spacing(self, paragraph_spacing: float) -> RenderState:
        """Return a copy with a different paragraph spacing."""
        return replace(self, paragraph_spacing=paragraph_spacing)

    def indented(self, head: float = 0.0, tail: float = 0.0) -> RenderState:
        """Return a copy with head and tail indents increased."""
        return replace(self, head_indent=self.head_indent + head, tail_indent=self.tail_indent + tail)

    def with_tab_stops(self, *tab_stops: TabStop) -> RenderState:
        """Return a copy with ``tab_stops`` appended."""
        return replace(self, tab_stops=self.tab_stops + tab_stops)

    def with_first_line_indent(self, count: int = 1) -> RenderState:
        """Return a copy with a ``FirstLineIndent(count)`` edit appended."""
        return replace(self, paragraph_edits=self.paragraph_edits + (FirstLineIndent(count),))

    def with_list_marker(self, marker: ListMarker | None) -> RenderState:
        """Return a copy whose live list marker is ``marker``.

        Any existing marker edit becomes ``FirstLineIndent(2)``. Passing
        None only performs that rewrite.

        """
        edits = tuple(FirstLineIndent(2) if isinstance(edit, ListMarkerEdit) else edit for edit in self.paragraph_edits)
        if marker is not None:
            edits += (ListMarkerEdit(marker, self.font),)
        return replace(self, paragraph_edits=edits)
