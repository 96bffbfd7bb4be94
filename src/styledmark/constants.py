#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for styledmark.

This module centralizes hardcoded values, magic numbers and default
configuration constants used across the library.

Constants are organized by category:
1. Type Definitions - Literal types and type aliases
2. Special Characters - Separators and placeholders emitted in styled text
3. Style Defaults - Font, color and measurement defaults
4. Size Categories - Body point sizes per size category
5. Image Loading - Network and decoding limits
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions - All Literal Types and Type Aliases
# =============================================================================

TextAlignment = Literal["natural", "left", "right", "center", "justified"]
TabAlignment = Literal["natural", "left", "right", "center"]
WritingDirection = Literal["ltr", "rtl"]
FontWeight = Literal["regular", "bold"]
SizeCategory = Literal[
    "extra_small",
    "small",
    "medium",
    "large",
    "extra_large",
    "extra_extra_large",
    "extra_extra_extra_large",
    "accessibility_medium",
    "accessibility_large",
    "accessibility_extra_large",
    "accessibility_extra_extra_large",
    "accessibility_extra_extra_extra_large",
]
OutputFormat = Literal["rich", "text", "runs", "json"]

TEXT_ALIGNMENTS: tuple[str, ...] = ("natural", "left", "right", "center", "justified")
WRITING_DIRECTIONS: tuple[str, ...] = ("ltr", "rtl")

# =============================================================================
# Special Characters
# =============================================================================

LINE_SEPARATOR = " "
PARAGRAPH_SEPARATOR = " "
NBSP = " "
OBJECT_REPLACEMENT = "￼"
BULLET = "•"

# Color tokens understood by hosts in addition to rich color strings
DEFAULT_COLOR = "default"
SEPARATOR_COLOR = "separator"

# =============================================================================
# Style Defaults
# =============================================================================

DEFAULT_FONT_FAMILY = "system"
DEFAULT_MONOSPACE_FAMILY = "monospace"
DEFAULT_FOREGROUND_COLOR = DEFAULT_COLOR

# All measurements are multiples of the resolved point size
DEFAULT_CODE_FONT_SCALE = 0.94
DEFAULT_HEAD_INDENT_STEP = 1.97
DEFAULT_TAIL_INDENT_STEP = -1.0
DEFAULT_PARAGRAPH_SPACING = 0.67
DEFAULT_LIST_MARKER_SPACING = 0.47
DEFAULT_HEADING_SCALES: tuple[float, ...] = (2.0, 1.5, 1.17, 1.0, 0.83, 0.67)
DEFAULT_HEADING_SPACING = 0.67

DEFAULT_ALIGNMENT: TextAlignment = "natural"
DEFAULT_WRITING_DIRECTION: WritingDirection = "ltr"
DEFAULT_LINE_SPACING = 0.0

# =============================================================================
# Size Categories
# =============================================================================

DEFAULT_SIZE_CATEGORY: SizeCategory = "large"

SIZE_CATEGORY_POINT_SIZES: dict[str, float] = {
    "extra_small": 14.0,
    "small": 15.0,
    "medium": 16.0,
    "large": 17.0,
    "extra_large": 19.0,
    "extra_extra_large": 21.0,
    "extra_extra_extra_large": 23.0,
    "accessibility_medium": 28.0,
    "accessibility_large": 33.0,
    "accessibility_extra_large": 40.0,
    "accessibility_extra_extra_large": 47.0,
    "accessibility_extra_extra_extra_large": 53.0,
}

# =============================================================================
# Image Loading
# =============================================================================

DEFAULT_IMAGE_SCHEMES: tuple[str, ...] = ("http", "https", "data")
DEFAULT_IMAGE_TIMEOUT = 10.0
DEFAULT_MAX_ASSET_SIZE_BYTES = 20 * 1024 * 1024
DEFAULT_USER_AGENT = "styledmark/0.1 (+https://pypi.org/project/styledmark/)"
DEFAULT_FOLLOW_REDIRECTS = True

ENV_DISABLE_NETWORK = "STYLEDMARK_DISABLE_NETWORK"
ENV_USER_AGENT = "STYLEDMARK_USER_AGENT"
