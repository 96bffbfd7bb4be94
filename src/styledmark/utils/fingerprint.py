#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/styledmark/utils/fingerprint.py
"""Render fingerprints used to detect stale image resolution work."""

from __future__ import annotations

import hashlib

from styledmark.ast.nodes import Document
from styledmark.options.styled_text import StyledTextRendererOptions


def render_fingerprint(document: Document, options: StyledTextRendererOptions) -> str:
    """Return a stable identifier for rendering ``document`` with ``options``.

    Nodes and options are dataclasses, so their ``repr`` covers every field,
    including nested style values. Two requests share a fingerprint exactly
    when they would produce the same styled text.

    Returns
    -------
    str
        Hex SHA-256 digest

    """
    digest = hashlib.sha256()
    digest.update(repr(document).encode("utf-8"))
    digest.update(b"\x00")
    digest.update(repr(options).encode("utf-8"))
    return digest.hexdigest()
