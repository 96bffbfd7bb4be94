#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/styledmark/text/rich_export.py
"""Console preview of styled text using rich.

Terminals cannot honour point sizes, tab stops or indents, so this export
keeps only what a console can show: weight, slant, strikethrough, color,
hyperlinks and a background tint for monospaced runs. Separators become
newlines and images become short bracketed labels.

"""

from __future__ import annotations

import logging

from rich.color import Color, ColorParseError
from rich.style import Style
from rich.text import Text

from styledmark.constants import (
    DEFAULT_COLOR,
    LINE_SEPARATOR,
    NBSP,
    OBJECT_REPLACEMENT,
    PARAGRAPH_SEPARATOR,
    SEPARATOR_COLOR,
)
from styledmark.text.attributes import TextAttributes
from styledmark.text.styled_text import StyledText

logger = logging.getLogger(__name__)

MONOSPACE_BACKGROUND = "grey19"
RULE_WIDTH = 40


def _console_color(color: str | None) -> str | None:
    if color is None or color == DEFAULT_COLOR:
        return None
    if color == SEPARATOR_COLOR:
        return "grey50"
    try:
        Color.parse(color)
    except ColorParseError:
        logger.debug(f"Dropping unknown color {color!r} from console preview")
        return None
    return color


def _run_style(attributes: TextAttributes) -> Style:
    font = attributes.font
    return Style(
        bold=bool(font and font.bold),
        italic=bool(font and font.italic),
        strike=attributes.strikethrough,
        color=_console_color(attributes.color),
        bgcolor=MONOSPACE_BACKGROUND if font and font.monospaced else None,
        link=attributes.link,
    )


def _run_text(text: str, attributes: TextAttributes) -> str:
    if attributes.is_image:
        image = attributes.image
        if image is None:
            return "[image]"
        return f"[image {image.width}x{image.height}]"
    if attributes.strikethrough and text == NBSP:
        return "─" * RULE_WIDTH
    paragraph_style = attributes.paragraph_style
    paragraph_break = "\n\n" if paragraph_style and paragraph_style.paragraph_spacing > 0 else "\n"
    text = text.replace(LINE_SEPARATOR, "\n").replace(PARAGRAPH_SEPARATOR, paragraph_break)
    return text.replace(OBJECT_REPLACEMENT, "")


def to_rich_text(styled_text: StyledText) -> Text:
    """Convert styled text into a ``rich.text.Text`` for console display.

    Parameters
    ----------
    styled_text : StyledText
        Rendered document

    Returns
    -------
    rich.text.Text
        Text with one span per run

    """
    result = Text(tab_size=4)
    for run in styled_text.runs:
        result.append(_run_text(run.text, run.attributes), style=_run_style(run.attributes))
    return result
