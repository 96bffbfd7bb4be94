#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Visual style configuration consumed by the styled-text renderer.

Every size in this module is a dimensionless multiplier. Fonts scale the
body point size of the active size category; measurements scale the point
size of the font a paragraph is rendered in.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from rich.color import Color, ColorParseError

from styledmark.constants import (
    DEFAULT_CODE_FONT_SCALE,
    DEFAULT_COLOR,
    DEFAULT_FONT_FAMILY,
    DEFAULT_FOREGROUND_COLOR,
    DEFAULT_HEAD_INDENT_STEP,
    DEFAULT_HEADING_SCALES,
    DEFAULT_HEADING_SPACING,
    DEFAULT_LIST_MARKER_SPACING,
    DEFAULT_PARAGRAPH_SPACING,
    DEFAULT_TAIL_INDENT_STEP,
    SEPARATOR_COLOR,
    SIZE_CATEGORY_POINT_SIZES,
    FontWeight,
)
from styledmark.options.base import CloneFrozenMixin
from styledmark.text.attributes import ResolvedFont


def validate_color(value: str) -> str:
    """Return ``value`` if it is a color the library understands.

    Accepts the host tokens ``"default"`` and ``"separator"`` plus anything
    ``rich.color.Color.parse`` accepts (names, ``#rrggbb``, ``rgb(...)``).

    Raises
    ------
    ValueError
        If the color cannot be parsed

    """
    if value in (DEFAULT_COLOR, SEPARATOR_COLOR):
        return value
    try:
        Color.parse(value)
    except ColorParseError as exc:
        raise ValueError(f"Invalid color: {value!r}") from exc
    return value


@dataclass(frozen=True)
class Font(CloneFrozenMixin):
    """Font descriptor relative to the size category's body size.

    Parameters
    ----------
    family : str, default "system"
        Family name handed to the host
    scale : float, default 1.0
        Multiplier applied to the body point size
    weight : {"regular", "bold"}, default "regular"
        Font weight
    italic : bool, default False
        Slant
    monospaced : bool, default False
        Fixed-pitch face
    monospaced_digits : bool, default False
        Tabular figures, used for ordered list numbers
    path : str or None, default None
        TrueType/OpenType file used to measure text. When unset, Pillow's
        bundled default face is used for measurement.

    """

    family: str = field(default=DEFAULT_FONT_FAMILY, metadata={"help": "Font family name"})
    scale: float = field(default=1.0, metadata={"help": "Multiplier of the body point size"})
    weight: FontWeight = field(default="regular", metadata={"help": "Font weight", "choices": ["regular", "bold"]})
    italic: bool = field(default=False, metadata={"help": "Italic slant"})
    monospaced: bool = field(default=False, metadata={"help": "Use a fixed-pitch face"})
    monospaced_digits: bool = field(default=False, metadata={"help": "Use tabular figures"})
    path: str | None = field(default=None, metadata={"help": "Font file used for text measurement"})

    def __post_init__(self) -> None:
        """Validate the font scale.

        Raises
        ------
        ValueError
            If the scale is not positive

        """
        if self.scale <= 0:
            raise ValueError(f"Font scale must be positive, got {self.scale}")

    def bold(self) -> Font:
        """Return the bold variant of this font."""
        return self.create_updated(weight="bold")

    def italicized(self) -> Font:
        """Return the italic variant of this font."""
        return self.create_updated(italic=True)

    def scaled(self, factor: float) -> Font:
        """Return this font with its scale multiplied by ``factor``."""
        return self.create_updated(scale=self.scale * factor)

    def monospace(self) -> Font:
        """Return the fixed-pitch variant of this font."""
        return self.create_updated(monospaced=True)

    def with_monospaced_digits(self) -> Font:
        """Return the tabular-figures variant of this font."""
        return self.create_updated(monospaced_digits=True)

    def resolve(self, size_category: str) -> ResolvedFont:
        """Resolve this descriptor to a concrete point size.

        Parameters
        ----------
        size_category : str
            One of the keys of ``SIZE_CATEGORY_POINT_SIZES``

        Raises
        ------
        ValueError
            If the size category is unknown

        """
        try:
            body_size = SIZE_CATEGORY_POINT_SIZES[size_category]
        except KeyError:
            raise ValueError(f"Unknown size category: {size_category!r}") from None
        return ResolvedFont(
            family=self.family,
            point_size=body_size * self.scale,
            bold=self.weight == "bold",
            italic=self.italic,
            monospaced=self.monospaced,
            monospaced_digits=self.monospaced_digits,
            path=self.path,
        )


@dataclass(frozen=True)
class Measurements(CloneFrozenMixin):
    """Spacing and scale constants, as multiples of the resolved point size.

    Parameters
    ----------
    code_font_scale : float, default 0.94
        Scale applied to fonts of inline code and code blocks
    head_indent_step : float, default 1.97
        Leading indent added per block quote, code block or list level
    tail_indent_step : float, default -1.0
        Trailing indent added per block quote
    paragraph_spacing : float, default 0.67
        Space after body paragraphs
    list_marker_spacing : float, default 0.47
        Gap between a list marker and the item content
    heading_scales : tuple of float, default (2, 1.5, 1.17, 1, 0.83, 0.67)
        Font scale per heading level 1-6
    heading_spacing : float, default 0.67
        Space after headings

    """

    code_font_scale: float = field(default=DEFAULT_CODE_FONT_SCALE, metadata={"help": "Code font scale"})
    head_indent_step: float = field(default=DEFAULT_HEAD_INDENT_STEP, metadata={"help": "Head indent step"})
    tail_indent_step: float = field(default=DEFAULT_TAIL_INDENT_STEP, metadata={"help": "Tail indent step"})
    paragraph_spacing: float = field(default=DEFAULT_PARAGRAPH_SPACING, metadata={"help": "Paragraph spacing"})
    list_marker_spacing: float = field(
        default=DEFAULT_LIST_MARKER_SPACING, metadata={"help": "Gap between list marker and content"}
    )
    heading_scales: tuple[float, ...] = field(
        default=DEFAULT_HEADING_SCALES, metadata={"help": "Font scale for heading levels 1-6"}
    )
    heading_spacing: float = field(default=DEFAULT_HEADING_SPACING, metadata={"help": "Heading spacing"})

    def __post_init__(self) -> None:
        """Validate measurement values.

        Raises
        ------
        ValueError
            If the heading scale table does not have six positive entries,
            the code font scale is not positive, or a spacing is negative

        """
        if len(self.heading_scales) != 6:
            raise ValueError(f"heading_scales must have 6 entries, got {len(self.heading_scales)}")
        if any(scale <= 0 for scale in self.heading_scales):
            raise ValueError("heading_scales entries must be positive")
        if self.code_font_scale <= 0:
            raise ValueError(f"code_font_scale must be positive, got {self.code_font_scale}")
        for name in ("paragraph_spacing", "heading_spacing", "list_marker_spacing", "head_indent_step"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative, got {getattr(self, name)}")

    def heading_scale(self, level: int) -> float:
        """Return the font scale for heading ``level`` (1-6)."""
        return self.heading_scales[level - 1]


@dataclass(frozen=True)
class MarkdownStyle(CloneFrozenMixin):
    """Complete visual style of rendered Markdown.

    Parameters
    ----------
    font : Font
        Base body font
    foreground_color : str, default "default"
        Text color; ``"default"`` leaves the choice to the host
    measurements : Measurements
        Spacing and scale constants

    Examples
    --------
        >>> style = MarkdownStyle(font=Font(family="Georgia"), foreground_color="#333333")
        >>> larger = style.create_updated(font=style.font.scaled(1.2))

    """

    font: Font = field(default_factory=Font, metadata={"help": "Base body font"})
    foreground_color: str = field(default=DEFAULT_FOREGROUND_COLOR, metadata={"help": "Text color"})
    measurements: Measurements = field(default_factory=Measurements, metadata={"help": "Spacing constants"})

    def __post_init__(self) -> None:
        """Validate the foreground color."""
        validate_color(self.foreground_color)
