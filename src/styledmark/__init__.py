"""styledmark - render Markdown into attributed, styled text.

styledmark turns a Markdown document tree into styled text: a flat string
with attribute runs (fonts, colors, links, paragraph indents and tab stops)
that a text view can display directly. Paragraphs are delimited by U+2029,
hard line breaks by U+2028, and list markers are laid out with tab stops so
that wrapped lines align with the item content.

Images are rendered as placeholders and resolved asynchronously; each
loaded image produces an updated snapshot of the text, and updates for an
outdated render are discarded.

Examples
--------
Render Markdown text:

    >>> from styledmark import render_markdown
    >>> styled = render_markdown("Some **bold** text")
    >>> styled.text
    'Some bold text'

Render a hand-built document with custom options:

    >>> from styledmark import render_document
    >>> from styledmark.ast import Document, Paragraph, Text
    >>> from styledmark.options import StyledTextRendererOptions
    >>> doc = Document(children=[Paragraph(content=[Text(content="Hi")])])
    >>> styled = render_document(doc, StyledTextRendererOptions(size_category="small"))

Drive a display surface, including image loading:

    >>> import asyncio
    >>> from styledmark import MarkdownSession
    >>> async def show(markdown):
    ...     async for styled in MarkdownSession().stream(markdown):
    ...         print(styled.text)

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "styledmark requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "0.1.0"

from typing import Optional

from styledmark.ast import Document
from styledmark.exceptions import (
    ImageResolutionError,
    InvalidOptionsError,
    NetworkDisabledError,
    ParsingError,
    RenderingError,
    StyledMarkError,
    ValidationError,
)
from styledmark.images import ImageHandler, ImageHandlerRegistry, ImageSnapshot, resolve_images
from styledmark.options import MarkdownParserOptions, MarkdownStyle, StyledTextRendererOptions
from styledmark.parsers import MarkdownParser, markdown_to_ast
from styledmark.renderers import StyledTextRenderer
from styledmark.session import MarkdownSession, RenderResult
from styledmark.text import StyledText, TextAttributes


def render_document(doc: Document, options: Optional[StyledTextRendererOptions] = None) -> StyledText:
    """Render a document tree into styled text.

    Parameters
    ----------
    doc : Document
        Root of the tree to render
    options : StyledTextRendererOptions or None, default None
        Style and paragraph options; defaults are used when omitted

    Returns
    -------
    StyledText
        Styled text with image placeholders left unresolved

    """
    return StyledTextRenderer(options).render(doc)


def render_markdown(
    markdown: str,
    options: Optional[StyledTextRendererOptions] = None,
    parser_options: Optional[MarkdownParserOptions] = None,
) -> StyledText:
    """Parse Markdown text and render it into styled text.

    Parameters
    ----------
    markdown : str
        Markdown source
    options : StyledTextRendererOptions or None, default None
        Style and paragraph options
    parser_options : MarkdownParserOptions or None, default None
        Parser extension switches

    Raises
    ------
    ParsingError
        If the source cannot be parsed

    """
    return render_document(markdown_to_ast(markdown, parser_options), options)


__all__ = [
    "__version__",
    "render_document",
    "render_markdown",
    "Document",
    "ImageHandler",
    "ImageHandlerRegistry",
    "ImageResolutionError",
    "ImageSnapshot",
    "InvalidOptionsError",
    "MarkdownParser",
    "MarkdownParserOptions",
    "MarkdownSession",
    "MarkdownStyle",
    "NetworkDisabledError",
    "ParsingError",
    "RenderResult",
    "RenderingError",
    "StyledMarkError",
    "StyledText",
    "StyledTextRenderer",
    "StyledTextRendererOptions",
    "TextAttributes",
    "ValidationError",
    "markdown_to_ast",
    "resolve_images",
]
