#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Renderers turning the styledmark AST into styled text."""

from styledmark.renderers.base import BaseRenderer
from styledmark.renderers.state import (
    BulletMarker,
    DecimalMarker,
    FirstLineIndent,
    ListMarkerEdit,
    RenderState,
)
from styledmark.renderers.styled_text import StyledTextRenderer

__all__ = [
    "BaseRenderer",
    "BulletMarker",
    "DecimalMarker",
    "FirstLineIndent",
    "ListMarkerEdit",
    "RenderState",
    "StyledTextRenderer",
]
