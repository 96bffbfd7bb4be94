#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Base classes for parser, renderer and image handler options.

All options are frozen dataclasses: they are hashed into render
fingerprints and shared between concurrent image loads, so they must never
change after construction. Use ``create_updated`` to derive a variant.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, replace
from typing import Any

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class BaseRendererOptions(CloneFrozenMixin):
    """Base class for all renderer options.

    Notes
    -----
    Subclasses define their fields as frozen dataclass fields with a
    ``"help"`` entry in the field metadata and validate ranges in
    ``__post_init__``, calling ``super().__post_init__()`` first.

    """

    def __post_init__(self) -> None:
        """Validate options. The base class has nothing to check."""
        pass


@dataclass(frozen=True)
class BaseParserOptions(CloneFrozenMixin):
    """Base class for all parser options."""

    def __post_init__(self) -> None:
        """Validate options. The base class has nothing to check."""
        pass
