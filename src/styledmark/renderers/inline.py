#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/styledmark/renderers/inline.py
"""Inline node rendering for the styled-text renderer."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable

from styledmark.ast.nodes import (
    Code,
    Emphasis,
    HTMLInline,
    Image,
    Link,
    Node,
    Strikethrough,
    Strong,
    SymbolLink,
    Text,
)
from styledmark.constants import LINE_SEPARATOR, OBJECT_REPLACEMENT
from styledmark.options.styled_text import StyledTextRendererOptions
from styledmark.renderers.state import RenderState
from styledmark.text.attributes import TextAttributes
from styledmark.text.styled_text import StyledText, StyledTextBuilder
from styledmark.utils.urls import resolve_url

if TYPE_CHECKING:
    from styledmark.renderers.styled_text import StyledTextRenderer

logger = logging.getLogger(__name__)


class InlineRenderer:
    """Turn inline nodes into runs under a given :class:`RenderState`.

    Children of container inlines are rendered back through the walker so
    that every node kind is dispatched in one place.

    Parameters
    ----------
    options : StyledTextRendererOptions
        Options of the owning renderer
    walker : StyledTextRenderer
        Renderer used to dispatch child nodes

    """

    def __init__(self, options: StyledTextRendererOptions, walker: StyledTextRenderer) -> None:
        self._options = options
        self._walker = walker

    def attributes(self, state: RenderState) -> TextAttributes:
        """Return the character attributes ``state`` prescribes."""
        return TextAttributes(
            font=state.font.resolve(self._options.size_category),
            color=state.foreground_color,
        )

    def run(self, text: str, state: RenderState) -> StyledText:
        """Return ``text`` as a single run styled by ``state``."""
        builder = StyledTextBuilder()
        builder.append_text(text, self.attributes(state))
        return builder.build()

    def inlines(self, nodes: Iterable[Node], state: RenderState) -> StyledText:
        """Render a sequence of inline nodes under one state."""
        builder = StyledTextBuilder()
        for node in nodes:
            builder.append(self._walker.render_node(node, state))
        return builder.build()

    def text(self, node: Text, state: RenderState) -> StyledText:
        return self.run(node.content, state)

    def soft_break(self, state: RenderState) -> StyledText:
        return self.run(" ", state)

    def line_break(self, state: RenderState) -> StyledText:
        return self.run(LINE_SEPARATOR, state)

    def emphasis(self, node: Emphasis, state: RenderState) -> StyledText:
        return self.inlines(node.content, state.with_font(state.font.italicized()))

    def strong(self, node: Strong, state: RenderState) -> StyledText:
        return self.inlines(node.content, state.with_font(state.font.bold()))

    def strikethrough(self, node: Strikethrough, state: RenderState) -> StyledText:
        # Struck-through styling is not applied; the content renders as plain text.
        return self.inlines(node.content, state)

    def code(self, node: Code, state: RenderState) -> StyledText:
        """Render inline code in the monospaced font, scaled down by the code scale.

        Code blocks render their content through here from a state that is
        already scaled, so block text ends up at the code scale squared.

        """
        font = state.font.scaled(self._options.style.measurements.code_font_scale).monospace()
        return self.run(node.content, state.with_font(font))

    def html_inline(self, node: HTMLInline, state: RenderState) -> StyledText:
        return self.run(node.content, state)

    def link(self, node: Link, state: RenderState) -> StyledText:
        """Render link content and mark it with the resolved target.

        Content of a link whose destination cannot be resolved stays inert.

        """
        content = self.inlines(node.content, state)
        changes: dict[str, str] = {}
        url = resolve_url(node.url, self._options.base_url)
        if url is not None:
            changes["link"] = url
        if node.title:
            changes["link_title"] = node.title
        if not changes:
            return content

        builder = StyledTextBuilder()
        builder.append(content)
        builder.add_attributes(**changes)
        return builder.build()

    def symbol_link(self, node: SymbolLink, state: RenderState) -> StyledText:
        url = resolve_url(node.destination, self._options.base_url)
        content = self.run(node.plain_text, state)
        if url is None:
            return content

        builder = StyledTextBuilder()
        builder.append(content)
        builder.add_attributes(link=url)
        return builder.build()

    def image(self, node: Image, state: RenderState) -> StyledText:
        """Render an image placeholder for the resolved source URL.

        The placeholder is one object replacement character carrying the URL;
        an unresolvable source renders nothing.

        """
        url = resolve_url(node.url, self._options.base_url)
        if url is None:
            logger.debug(f"Dropping image with unresolvable source {node.url!r}")
            return StyledText()

        builder = StyledTextBuilder()
        attributes = self.attributes(state)
        builder.append_text(
            OBJECT_REPLACEMENT,
            TextAttributes(font=attributes.font, color=attributes.color, image_url=url),
        )
        return builder.build()
