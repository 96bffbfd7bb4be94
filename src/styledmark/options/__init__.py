#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Options for parsing, styling, rendering and image loading."""

from __future__ import annotations

from styledmark.options.base import BaseParserOptions, BaseRendererOptions, CloneFrozenMixin
from styledmark.options.images import ImageHandlerOptions
from styledmark.options.markdown import MarkdownParserOptions
from styledmark.options.style import Font, MarkdownStyle, Measurements
from styledmark.options.styled_text import StyledTextRendererOptions

__all__ = [
    "BaseParserOptions",
    "BaseRendererOptions",
    "CloneFrozenMixin",
    "Font",
    "ImageHandlerOptions",
    "MarkdownParserOptions",
    "MarkdownStyle",
    "Measurements",
    "StyledTextRendererOptions",
]
