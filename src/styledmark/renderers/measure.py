#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/styledmark/renderers/measure.py
"""Text measurement for ordered-list marker columns.

Widths are measured with Pillow. A font with a ``path`` is loaded with
``ImageFont.truetype``; otherwise Pillow's bundled default face is used at
the requested size. Pillow reports advances in pixels at the given size; a
pixel is treated as a point, so dividing by the point size yields ``em``
units.

"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Union

from PIL import ImageFont

from styledmark.options.style import Font, Measurements
from styledmark.text.attributes import ResolvedFont

logger = logging.getLogger(__name__)

_DIGITS = "0123456789"

PillowFont = Union[ImageFont.FreeTypeFont, ImageFont.ImageFont]


@lru_cache(maxsize=64)
def _load_font(path: str | None, size: float) -> PillowFont:
    if path:
        logger.debug(f"Loading measurement font {path} at {size}pt")
        return ImageFont.truetype(path, size)
    return ImageFont.load_default(size=size)


def measure_em(text: str, font: ResolvedFont | None) -> float:
    """Return the advance width of ``text`` in em units of ``font``.

    With ``monospaced_digits`` set every digit advances by the widest digit
    of the face, matching tabular figures.

    Parameters
    ----------
    text : str
        Text to measure
    font : ResolvedFont
        Font the text will be displayed in

    Returns
    -------
    float
        Width divided by the point size

    Raises
    ------
    AssertionError
        If no font is supplied. Callers always resolve a font before
        measuring, so this signals a bug rather than bad input.

    """
    if font is None:
        raise AssertionError("Cannot measure text without a font")

    pil_font = _load_font(font.path, font.point_size)
    if font.monospaced_digits:
        digit_advance = max(pil_font.getlength(digit) for digit in _DIGITS)
        digit_count = sum(1 for char in text if char in _DIGITS)
        other = "".join(char for char in text if char not in _DIGITS)
        width = digit_count * digit_advance + (pil_font.getlength(other) if other else 0.0)
    else:
        width = pil_font.getlength(text)
    return width / font.point_size


def ordered_list_indent_step(
    font: Font, highest_number: int, measurements: Measurements, size_category: str
) -> float:
    """Return the head-indent step for an ordered list.

    The step is the style's default step, widened when the highest marker
    number plus the marker gap would not fit in it.

    Parameters
    ----------
    font : Font
        Font of the list's enclosing state; measured with tabular figures
    highest_number : int
        Largest number any item of the list displays
    measurements : Measurements
        Style constants providing the default step and marker gap
    size_category : str
        Size category the font is resolved against

    """
    resolved = font.with_monospaced_digits().resolve(size_category)
    width = measure_em(str(highest_number), resolved)
    return max(measurements.head_indent_step, width + measurements.list_marker_spacing)
