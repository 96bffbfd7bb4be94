#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/styledmark/text/attributes.py
"""Attribute values carried by styled text runs.

All values are frozen dataclasses so that runs can be compared, hashed and
shared between snapshots without copying. Lengths and locations in
:class:`ParagraphStyle` and :class:`TabStop` are in points once resolved;
while a render is in progress the renderer keeps tab stops in font-relative
units and resolves them when a paragraph is finished.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from styledmark.constants import TabAlignment, TextAlignment, WritingDirection


@dataclass(frozen=True)
class ResolvedFont:
    """A font descriptor resolved to a concrete point size.

    Parameters
    ----------
    family : str
        Family name; ``"system"`` lets the host pick its default face
    point_size : float
        Size in points after applying the size category and all scales
    bold, italic : bool
        Weight and slant
    monospaced : bool
        Whether the host should pick a fixed-pitch face
    monospaced_digits : bool
        Whether digits should use tabular (equal-width) figures
    path : str or None
        Optional font file used when measuring text

    """

    family: str
    point_size: float
    bold: bool = False
    italic: bool = False
    monospaced: bool = False
    monospaced_digits: bool = False
    path: Optional[str] = None


@dataclass(frozen=True)
class TabStop:
    """A tab stop with an alignment and a location."""

    alignment: TabAlignment
    location: float


@dataclass(frozen=True)
class ParagraphStyle:
    """Paragraph-level layout attributes, applied over a whole paragraph."""

    alignment: TextAlignment = "natural"
    writing_direction: WritingDirection = "ltr"
    line_spacing: float = 0.0
    paragraph_spacing: float = 0.0
    head_indent: float = 0.0
    tail_indent: float = 0.0
    tab_stops: tuple[TabStop, ...] = ()


@dataclass(frozen=True)
class ImageAttachment:
    """Visual content loaded for an image placeholder.

    Parameters
    ----------
    url : str
        Absolute URL the content was loaded from
    data : bytes
        Encoded image bytes as delivered by the handler
    mime_type : str
        MIME type derived from the decoded image format
    width, height : int
        Pixel dimensions reported by the decoder

    """

    url: str
    data: bytes = field(repr=False)
    mime_type: str
    width: int
    height: int


@dataclass(frozen=True)
class TextAttributes:
    """The attribute set of one run.

    A run is an image placeholder when ``image_url`` is set and ``image`` is
    not; the resolution pipeline fills ``image`` in without touching any
    other attribute.

    """

    font: Optional[ResolvedFont] = None
    color: Optional[str] = None
    link: Optional[str] = None
    link_title: Optional[str] = None
    strikethrough: bool = False
    strikethrough_color: Optional[str] = None
    paragraph_style: Optional[ParagraphStyle] = None
    image_url: Optional[str] = None
    image: Optional[ImageAttachment] = None

    @property
    def is_image_placeholder(self) -> bool:
        """Return True if this run still waits for its image."""
        return self.image_url is not None and self.image is None

    @property
    def is_image(self) -> bool:
        """Return True if this run stands for an image, loaded or not."""
        return self.image_url is not None
