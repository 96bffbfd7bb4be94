#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/styledmark/renderers/blocks.py
"""Block node rendering for the styled-text renderer.

Every block produces a finished fragment. A block that has a following
sibling ends its fragment with one paragraph separator; the last sibling
never does. Paragraph layout is resolved from the state once the
paragraph's content is complete and applied over its whole range, trailing
separator included.

"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING, Sequence

from styledmark.ast.nodes import (
    BlockQuote,
    Code,
    CodeBlock,
    Document,
    Heading,
    HTMLBlock,
    HTMLInline,
    List,
    ListItem,
    Node,
    Paragraph,
    Table,
    TableCell,
    TableRow,
    ThematicBreak,
)
from styledmark.constants import BULLET, LINE_SEPARATOR, NBSP, SEPARATOR_COLOR, TabAlignment
from styledmark.options.styled_text import StyledTextRendererOptions
from styledmark.renderers.inline import InlineRenderer
from styledmark.renderers.measure import ordered_list_indent_step
from styledmark.renderers.state import (
    BulletMarker,
    DecimalMarker,
    FirstLineIndent,
    ListMarker,
    RenderState,
)
from styledmark.text.attributes import ParagraphStyle, TabStop
from styledmark.text.styled_text import Run, StyledText, StyledTextBuilder

if TYPE_CHECKING:
    from styledmark.renderers.styled_text import StyledTextRenderer

logger = logging.getLogger(__name__)

_CELL_SEPARATOR = " | "


def _strip_trailing_newline(text: str) -> str:
    return text[:-1] if text.endswith("\n") else text


class BlockRenderer:
    """Turn block nodes into paragraphs, deriving child states as needed.

    Parameters
    ----------
    options : StyledTextRendererOptions
        Options of the owning renderer
    walker : StyledTextRenderer
        Renderer used to dispatch child nodes
    inlines : InlineRenderer
        Renderer for inline content and plain runs

    """

    def __init__(
        self, options: StyledTextRendererOptions, walker: StyledTextRenderer, inlines: InlineRenderer
    ) -> None:
        self._options = options
        self._walker = walker
        self._inlines = inlines
        self._measurements = options.style.measurements

    # ------------------------------------------------------------------
    # Paragraph machinery
    # ------------------------------------------------------------------

    def paragraph_style(self, state: RenderState) -> ParagraphStyle:
        """Resolve the layout of a paragraph rendered under ``state``.

        Relative values are multiplied by the point size of the state's font
        and rounded to whole points.

        """
        point_size = state.font.resolve(self._options.size_category).point_size
        return ParagraphStyle(
            alignment=self._options.alignment,
            writing_direction=self._options.writing_direction,
            line_spacing=self._options.line_spacing,
            paragraph_spacing=float(round(point_size * state.paragraph_spacing)),
            head_indent=float(round(point_size * state.head_indent)),
            tail_indent=float(round(point_size * state.tail_indent)),
            tab_stops=tuple(
                TabStop(stop.alignment, float(round(point_size * stop.location))) for stop in state.tab_stops
            ),
        )

    def paragraph_edits(self, state: RenderState) -> StyledText:
        """Render the pending paragraph prefix of ``state``.

        Indents render as tabs in the state font. Markers render between
        two tabs in the font captured when the marker was set; decimal
        markers use tabular figures.

        """
        builder = StyledTextBuilder()
        for edit in state.paragraph_edits:
            if isinstance(edit, FirstLineIndent):
                builder.append(self._inlines.run("\t" * edit.count, state))
            elif isinstance(edit.marker, DecimalMarker):
                marker_state = state.with_font(edit.font.with_monospaced_digits())
                builder.append(self._inlines.run(f"\t{edit.marker.number}.\t", marker_state))
            else:
                builder.append(self._inlines.run(f"\t{BULLET}\t", state.with_font(edit.font)))
        return builder.build()

    def _paragraph(self, content: StyledText, state: RenderState, has_successor: bool) -> StyledText:
        style = self.paragraph_style(state)
        builder = StyledTextBuilder()
        builder.append(self.paragraph_edits(state))
        builder.append(content)
        builder.add_attributes(paragraph_style=style)
        if has_successor:
            builder.append_separator(replace(self._inlines.attributes(state), paragraph_style=style))
        return builder.build()

    def _blocks(
        self, children: Sequence[Node], child_state: RenderState, state: RenderState, has_successor: bool
    ) -> StyledText:
        builder = StyledTextBuilder()
        for index, child in enumerate(children):
            builder.append(self._walker.render_node(child, child_state, index < len(children) - 1))
        if has_successor:
            builder.append_separator(self._inlines.attributes(state))
        return builder.build()

    # ------------------------------------------------------------------
    # Block kinds
    # ------------------------------------------------------------------

    def document(self, node: Document, state: RenderState, has_successor: bool) -> StyledText:
        return self._blocks(node.children, state, state, has_successor)

    def paragraph(self, node: Paragraph, state: RenderState, has_successor: bool) -> StyledText:
        return self._paragraph(self._inlines.inlines(node.content, state), state, has_successor)

    def heading(self, node: Heading, state: RenderState, has_successor: bool) -> StyledText:
        """Render a heading.

        Content uses the bold font scaled for the level; prefix and layout
        keep the enclosing font, with the heading spacing after it.

        """
        scale = self._measurements.heading_scale(node.level)
        content = self._inlines.inlines(node.content, state.with_font(state.font.bold().scaled(scale)))
        return self._paragraph(
            content, state.with_paragraph_spacing(self._measurements.heading_spacing), has_successor
        )

    def block_quote(self, node: BlockQuote, state: RenderState, has_successor: bool) -> StyledText:
        quote_state = state.with_font(state.font.italicized()).indented(
            head=self._measurements.head_indent_step, tail=self._measurements.tail_indent_step
        )
        quote_state = quote_state.with_tab_stops(TabStop("natural", quote_state.head_indent)).with_first_line_indent()
        return self._blocks(node.children, quote_state, state, has_successor)

    def code_block(self, node: CodeBlock, state: RenderState, has_successor: bool) -> StyledText:
        """Render a code block as one paragraph of monospaced text.

        Internal newlines become line separators so the block stays a single
        paragraph.

        """
        code = _strip_trailing_newline(node.content).replace("\n", LINE_SEPARATOR)
        code_state = state.with_font(state.font.scaled(self._measurements.code_font_scale).monospace()).indented(
            head=self._measurements.head_indent_step
        )
        code_state = code_state.with_tab_stops(TabStop("natural", code_state.head_indent)).with_first_line_indent()
        content = self._walker.render_node(Code(content=code), code_state)
        return self._paragraph(content, code_state, has_successor)

    def html_block(self, node: HTMLBlock, state: RenderState, has_successor: bool) -> StyledText:
        html = _strip_trailing_newline(node.content).replace("\n", LINE_SEPARATOR)
        content = self._walker.render_node(HTMLInline(content=html), state)
        return self._paragraph(content, state, has_successor)

    def thematic_break(self, node: ThematicBreak, state: RenderState, has_successor: bool) -> StyledText:
        attributes = replace(self._inlines.attributes(state), strikethrough=True, strikethrough_color=SEPARATOR_COLOR)
        return self._paragraph(StyledText((Run(NBSP, attributes),)), state, has_successor)

    def list(self, node: List, state: RenderState, has_successor: bool) -> StyledText:
        """Render a list.

        Items are indented one step and get two tab stops: a trailing one
        for the marker and a natural one for the content. Ordered lists
        widen the step until the largest number fits.

        Markers show ``start + index``, so the width is measured on the
        number the last item displays rather than on the item count.

        """
        if node.ordered:
            highest_number = node.start + max(len(node.items) - 1, 0)
            step = ordered_list_indent_step(state.font, highest_number, self._measurements, self._options.size_category)
        else:
            step = self._measurements.head_indent_step

        item_state = state.with_paragraph_spacing(self._measurements.paragraph_spacing).indented(head=step)
        item_state = item_state.with_tab_stops(
            TabStop(self._trailing_alignment(), item_state.head_indent - self._measurements.list_marker_spacing),
            TabStop("natural", item_state.head_indent),
        ).with_list_marker(None)

        builder = StyledTextBuilder()
        for index, item in enumerate(node.items):
            marker: ListMarker = DecimalMarker(index, node.start) if node.ordered else BulletMarker()
            builder.append(
                self.list_item(
                    item,
                    item_state,
                    index < len(node.items) - 1,
                    marker=marker,
                    parent_paragraph_spacing=state.paragraph_spacing,
                )
            )
        if has_successor:
            builder.append_separator(self._inlines.attributes(state))
        return builder.build()

    def list_item(
        self,
        node: ListItem,
        state: RenderState,
        has_successor: bool,
        marker: ListMarker | None = None,
        parent_paragraph_spacing: float | None = None,
    ) -> StyledText:
        """Render a list item.

        The first block carries the marker; later blocks are indented to the
        content column instead. The last item's last block keeps the larger
        of the list's and the enclosing spacing so the list ends in rhythm
        with the surrounding text.

        """
        marker = marker if marker is not None else BulletMarker()
        if parent_paragraph_spacing is None:
            parent_paragraph_spacing = state.paragraph_spacing

        builder = StyledTextBuilder()
        last = len(node.children) - 1
        for index, child in enumerate(node.children):
            if index == 0:
                block_state = state.with_list_marker(marker)
            else:
                block_state = state.with_first_line_indent(2)
            if not has_successor and index == last:
                block_state = block_state.with_paragraph_spacing(max(parent_paragraph_spacing, state.paragraph_spacing))
            builder.append(self._walker.render_node(child, block_state, index < last))
        if has_successor:
            builder.append_separator(self._inlines.attributes(state))
        return builder.build()

    # ------------------------------------------------------------------
    # Tables (plain-text fallback)
    # ------------------------------------------------------------------

    def table(self, node: Table, state: RenderState, has_successor: bool) -> StyledText:
        """Render a table as one paragraph of pipe-separated rows."""
        logger.debug("Rendering table as plain text; styled tables are not supported")
        rows = ([node.header] if node.header is not None else []) + list(node.rows)
        builder = StyledTextBuilder()
        for index, row in enumerate(rows):
            if index:
                builder.append(self._inlines.run(LINE_SEPARATOR, state))
            builder.append(self._walker.render_node(row, state))
        return self._paragraph(builder.build(), state, has_successor)

    def table_row(self, node: TableRow, state: RenderState) -> StyledText:
        if node.is_header:
            state = state.with_font(state.font.bold())
        builder = StyledTextBuilder()
        for index, cell in enumerate(node.cells):
            if index:
                builder.append(self._inlines.run(_CELL_SEPARATOR, state))
            builder.append(self._walker.render_node(cell, state))
        return builder.build()

    def table_cell(self, node: TableCell, state: RenderState) -> StyledText:
        return self._inlines.inlines(node.content, state)

    def _trailing_alignment(self) -> TabAlignment:
        return "left" if self._options.writing_direction == "rtl" else "right"
