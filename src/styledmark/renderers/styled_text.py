#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/styledmark/renderers/styled_text.py
"""Styled-text rendering from AST.

This module renders a styledmark document into :class:`StyledText`: runs
carrying resolved fonts, colors, links and paragraph layout, ready for a
host text view. The render is synchronous and pure; images are emitted as
placeholders and resolved later by :mod:`styledmark.images.pipeline`.

Dispatch goes through ``Node.accept`` onto a walker implementing every
method of :class:`NodeVisitor`. Each call gets its own walker bound to the
node's state and successor flag, so no mutable walker state is shared
between sibling subtrees.

"""

from __future__ import annotations

import logging

from styledmark.ast.nodes import (
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
    Node,
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
from styledmark.ast.visitors import NodeVisitor
from styledmark.exceptions import RenderingError
from styledmark.options.styled_text import StyledTextRendererOptions
from styledmark.renderers.base import BaseRenderer
from styledmark.renderers.blocks import BlockRenderer
from styledmark.renderers.inline import InlineRenderer
from styledmark.renderers.state import RenderState
from styledmark.text.styled_text import StyledText

logger = logging.getLogger(__name__)


class StyledTextRenderer(BaseRenderer):
    """Render AST documents into styled text.

    Parameters
    ----------
    options : StyledTextRendererOptions or None, default = None
        Style, base URL, size category and paragraph options

    Examples
    --------
        >>> from styledmark.ast import Document, Paragraph, Strong, Text
        >>> doc = Document(children=[Paragraph(content=[Strong(content=[Text(content="hi")])])])
        >>> StyledTextRenderer().render(doc).runs[0].attributes.font.bold
        True

    """

    def __init__(self, options: StyledTextRendererOptions | None = None) -> None:
        """Initialize the renderer with styled-text options."""
        BaseRenderer._validate_options_type(options, StyledTextRendererOptions, "styled_text")
        options = options or StyledTextRendererOptions()
        BaseRenderer.__init__(self, options)
        self.options: StyledTextRendererOptions = options
        self._inlines = InlineRenderer(options, self)
        self._blocks = BlockRenderer(options, self, self._inlines)

    def initial_state(self) -> RenderState:
        """Return the state top-level blocks are rendered with."""
        return RenderState.initial(self.options.style)

    def render(self, doc: Document) -> StyledText:
        """Render a document.

        Top-level blocks are separated by exactly one paragraph separator;
        nothing precedes the first block or follows the last.

        Raises
        ------
        RenderingError
            If the document is nested too deeply to walk

        """
        logger.debug(f"Rendering document with {len(doc.children)} top-level block(s)")
        try:
            return self.render_node(doc, self.initial_state())
        except RecursionError as exc:
            raise RenderingError(
                "Document is nested too deeply to render", rendering_stage="walk", original_error=exc
            ) from exc

    def render_to_string(self, doc: Document) -> str:
        """Render a document and return only its plain text."""
        return self.render(doc).text

    def render_node(self, node: Node, state: RenderState, has_successor: bool = False) -> StyledText:
        """Render one node under ``state``.

        Parameters
        ----------
        node : Node
            Node to render
        state : RenderState
            Formatting inherited from the node's ancestors
        has_successor : bool, default False
            Whether a sibling block follows; block nodes then end with a
            paragraph separator. Ignored by inline nodes.

        """
        return node.accept(_NodeWalker(self._blocks, self._inlines, state, has_successor))


class _NodeWalker(NodeVisitor):
    """Single-use dispatcher routing one node to its block or inline renderer."""

    def __init__(self, blocks: BlockRenderer, inlines: InlineRenderer, state: RenderState, has_successor: bool):
        self._blocks = blocks
        self._inlines = inlines
        self._state = state
        self._has_successor = has_successor

    # Block nodes

    def visit_document(self, node: Document) -> StyledText:
        return self._blocks.document(node, self._state, self._has_successor)

    def visit_heading(self, node: Heading) -> StyledText:
        return self._blocks.heading(node, self._state, self._has_successor)

    def visit_paragraph(self, node: Paragraph) -> StyledText:
        return self._blocks.paragraph(node, self._state, self._has_successor)

    def visit_code_block(self, node: CodeBlock) -> StyledText:
        return self._blocks.code_block(node, self._state, self._has_successor)

    def visit_block_quote(self, node: BlockQuote) -> StyledText:
        return self._blocks.block_quote(node, self._state, self._has_successor)

    def visit_list(self, node: List) -> StyledText:
        return self._blocks.list(node, self._state, self._has_successor)

    def visit_list_item(self, node: ListItem) -> StyledText:
        return self._blocks.list_item(node, self._state, self._has_successor)

    def visit_thematic_break(self, node: ThematicBreak) -> StyledText:
        return self._blocks.thematic_break(node, self._state, self._has_successor)

    def visit_html_block(self, node: HTMLBlock) -> StyledText:
        return self._blocks.html_block(node, self._state, self._has_successor)

    def visit_table(self, node: Table) -> StyledText:
        return self._blocks.table(node, self._state, self._has_successor)

    def visit_table_row(self, node: TableRow) -> StyledText:
        return self._blocks.table_row(node, self._state)

    def visit_table_cell(self, node: TableCell) -> StyledText:
        return self._blocks.table_cell(node, self._state)

    # Inline nodes

    def visit_text(self, node: Text) -> StyledText:
        return self._inlines.text(node, self._state)

    def visit_emphasis(self, node: Emphasis) -> StyledText:
        return self._inlines.emphasis(node, self._state)

    def visit_strong(self, node: Strong) -> StyledText:
        return self._inlines.strong(node, self._state)

    def visit_strikethrough(self, node: Strikethrough) -> StyledText:
        return self._inlines.strikethrough(node, self._state)

    def visit_code(self, node: Code) -> StyledText:
        return self._inlines.code(node, self._state)

    def visit_link(self, node: Link) -> StyledText:
        return self._inlines.link(node, self._state)

    def visit_symbol_link(self, node: SymbolLink) -> StyledText:
        return self._inlines.symbol_link(node, self._state)

    def visit_image(self, node: Image) -> StyledText:
        return self._inlines.image(node, self._state)

    def visit_line_break(self, node: LineBreak) -> StyledText:
        return self._inlines.line_break(self._state)

    def visit_soft_break(self, node: SoftBreak) -> StyledText:
        return self._inlines.soft_break(self._state)

    def visit_html_inline(self, node: HTMLInline) -> StyledText:
        return self._inlines.html_inline(node, self._state)
