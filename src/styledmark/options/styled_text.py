#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for rendering AST documents into styled text."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from styledmark.constants import (
    DEFAULT_ALIGNMENT,
    DEFAULT_LINE_SPACING,
    DEFAULT_SIZE_CATEGORY,
    DEFAULT_WRITING_DIRECTION,
    SIZE_CATEGORY_POINT_SIZES,
    TEXT_ALIGNMENTS,
    WRITING_DIRECTIONS,
    SizeCategory,
    TextAlignment,
    WritingDirection,
)
from styledmark.options.base import BaseRendererOptions
from styledmark.options.style import MarkdownStyle


@dataclass(frozen=True)
class StyledTextRendererOptions(BaseRendererOptions):
    """Configuration options for the styled-text renderer.

    Parameters
    ----------
    style : MarkdownStyle
        Fonts, colors and measurements
    base_url : str or None, default None
        URL that relative link and image destinations are resolved against
    size_category : str, default "large"
        Size category the style's relative sizes are resolved against
    alignment : {"natural", "left", "right", "center", "justified"}, default "natural"
        Paragraph alignment
    writing_direction : {"ltr", "rtl"}, default "ltr"
        Base writing direction; decides which side list markers align to
    line_spacing : float, default 0.0
        Extra space between lines in points

    """

    style: MarkdownStyle = field(default_factory=MarkdownStyle, metadata={"help": "Visual style"})
    base_url: Optional[str] = field(
        default=None, metadata={"help": "Base URL for relative link and image destinations"}
    )
    size_category: SizeCategory = field(
        default=DEFAULT_SIZE_CATEGORY,
        metadata={"help": "Size category for resolving font sizes", "choices": list(SIZE_CATEGORY_POINT_SIZES)},
    )
    alignment: TextAlignment = field(
        default=DEFAULT_ALIGNMENT, metadata={"help": "Paragraph alignment", "choices": list(TEXT_ALIGNMENTS)}
    )
    writing_direction: WritingDirection = field(
        default=DEFAULT_WRITING_DIRECTION,
        metadata={"help": "Base writing direction", "choices": list(WRITING_DIRECTIONS)},
    )
    line_spacing: float = field(default=DEFAULT_LINE_SPACING, metadata={"help": "Extra line spacing in points"})

    def __post_init__(self) -> None:
        """Validate option values.

        Raises
        ------
        ValueError
            If any field value is outside its valid range.

        """
        super().__post_init__()
        if self.size_category not in SIZE_CATEGORY_POINT_SIZES:
            raise ValueError(f"Unknown size category: {self.size_category!r}")
        if self.alignment not in TEXT_ALIGNMENTS:
            raise ValueError(f"Invalid alignment: {self.alignment!r}")
        if self.writing_direction not in WRITING_DIRECTIONS:
            raise ValueError(f"Invalid writing direction: {self.writing_direction!r}")
        if self.line_spacing < 0:
            raise ValueError(f"line_spacing must be non-negative, got {self.line_spacing}")
