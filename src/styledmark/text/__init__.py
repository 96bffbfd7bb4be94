#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/styledmark/text/__init__.py
"""Styled text output model: runs, attributes and builders."""

from __future__ import annotations

from styledmark.text.attributes import (
    ImageAttachment,
    ParagraphStyle,
    ResolvedFont,
    TabStop,
    TextAttributes,
)
from styledmark.text.styled_text import Run, StyledText, StyledTextBuilder

__all__ = [
    "ImageAttachment",
    "ParagraphStyle",
    "ResolvedFont",
    "Run",
    "StyledText",
    "StyledTextBuilder",
    "TabStop",
    "TextAttributes",
]
