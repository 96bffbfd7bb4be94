#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/styledmark/session.py
"""Render sessions for hosts that display Markdown.

A :class:`MarkdownSession` plays the part of a text view's controller: it
holds the rendering options, the image handlers and the link callback,
remembers the last render, and makes sure images loaded for an outdated
render never reach the display.

"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import AsyncIterator, Callable, Optional, Union

from styledmark.ast import Document
from styledmark.images.handlers import ImageHandler, ImageHandlerRegistry
from styledmark.images.pipeline import ImageResolutionCoordinator, ImageSnapshot
from styledmark.options.markdown import MarkdownParserOptions
from styledmark.options.styled_text import StyledTextRendererOptions
from styledmark.parsers.markdown import MarkdownParser
from styledmark.renderers.styled_text import StyledTextRenderer
from styledmark.text.styled_text import StyledText
from styledmark.utils.fingerprint import render_fingerprint

logger = logging.getLogger(__name__)

LinkCallback = Callable[[str], None]


@dataclass(frozen=True)
class RenderResult:
    """Styled text produced for one render request."""

    styled_text: StyledText
    fingerprint: str

    @property
    def has_pending_images(self) -> bool:
        return self.styled_text.has_image_placeholders


class MarkdownSession:
    """Render Markdown for one display surface.

    Parameters
    ----------
    options : StyledTextRendererOptions or None, default None
        Style, base URL and paragraph options
    parser_options : MarkdownParserOptions or None, default None
        Options used when rendering Markdown text
    image_handlers : ImageHandlerRegistry or None, default None
        Handlers by URL scheme; defaults to ``http``, ``https`` and ``data``
    on_open_link : callable or None, default None
        Called with the absolute URL when the host activates a link

    Examples
    --------
        >>> session = MarkdownSession(on_open_link=print)
        >>> result = session.render("See [docs](https://example.org).")
        >>> session.activate_link(result.styled_text, 5)
        https://example.org
        True

    """

    def __init__(
        self,
        options: StyledTextRendererOptions | None = None,
        parser_options: MarkdownParserOptions | None = None,
        image_handlers: ImageHandlerRegistry | None = None,
        on_open_link: Optional[LinkCallback] = None,
    ):
        self._options = options or StyledTextRendererOptions()
        self._renderer = StyledTextRenderer(self._options)
        self._parser = MarkdownParser(parser_options)
        self._registry = image_handlers if image_handlers is not None else ImageHandlerRegistry.default()
        self._coordinator = ImageResolutionCoordinator()
        self._last: RenderResult | None = None
        self.on_open_link = on_open_link

    @property
    def options(self) -> StyledTextRendererOptions:
        return self._options

    @options.setter
    def options(self, options: StyledTextRendererOptions) -> None:
        self._options = options
        self._renderer = StyledTextRenderer(options)

    @property
    def image_handlers(self) -> ImageHandlerRegistry:
        return self._registry

    @property
    def last_result(self) -> RenderResult | None:
        return self._last

    def set_image_handler(self, scheme: str, handler: ImageHandler) -> None:
        """Use ``handler`` for image URLs with ``scheme`` from the next pass on."""
        self._registry = self._registry.with_handler(scheme, handler)

    def render(self, source: Union[str, Document]) -> RenderResult:
        """Render Markdown text or a parsed document.

        A request identical to the previous one (same document, same
        options) returns the previous result, including any images resolved
        into it since. Any other request becomes the current render, and
        image passes for earlier renders are cancelled.

        Raises
        ------
        ParsingError
            If ``source`` is text that cannot be parsed

        """
        document = source if isinstance(source, Document) else self._parser.parse(source)
        fingerprint = render_fingerprint(document, self._options)

        if self._last is not None and self._last.fingerprint == fingerprint:
            logger.debug(f"Render {fingerprint[:12]} unchanged; reusing previous result")
            self._coordinator.activate(fingerprint)
            return self._last

        result = RenderResult(self._renderer.render(document), fingerprint)
        self._coordinator.activate(fingerprint)
        self._last = result
        return result

    async def load_images(self, result: RenderResult) -> AsyncIterator[ImageSnapshot]:
        """Resolve the images of ``result``, yielding a snapshot per settled image.

        Loading starts from the newest text held for ``result``'s render, so
        images an earlier pass already resolved are not loaded again. Yields
        nothing when nothing is pending or ``result`` is no longer the
        current render. A later call for the same render, or a newer render,
        stops this one without applying anything further.

        """
        current = result
        if self._last is not None and self._last.fingerprint == result.fingerprint:
            current = self._last
        if not current.has_pending_images:
            return

        image_pass = self._coordinator.start(current.styled_text, current.fingerprint, self._registry)
        async for snapshot in image_pass:
            if not self._coordinator.owns(image_pass):
                return
            self._last = RenderResult(snapshot.styled_text, current.fingerprint)
            yield snapshot

    async def stream(self, source: Union[str, Document]) -> AsyncIterator[StyledText]:
        """Render ``source`` and yield the text, then each update as images load."""
        result = self.render(source)
        yield result.styled_text
        async for snapshot in self.load_images(result):
            yield snapshot.styled_text

    def activate_link(self, styled_text: StyledText, index: int) -> bool:
        """Report activation of the character at ``index`` to ``on_open_link``.

        Returns
        -------
        bool
            True if a link was found there and the callback was invoked

        """
        url = styled_text.link_at(index)
        if url is None or self.on_open_link is None:
            return False
        self.on_open_link(url)
        return True
