#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/styledmark/renderers/base.py
"""Base class for AST renderers.

The BaseRenderer provides the interface shared by renderers that turn a
styledmark AST into an output value, plus the options type check every
renderer performs on construction.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from styledmark.ast import Document
from styledmark.exceptions import InvalidOptionsError
from styledmark.options.base import BaseRendererOptions


class BaseRenderer(ABC):
    """Abstract base class for AST renderers.

    Parameters
    ----------
    options : BaseRendererOptions or None, default = None
        Renderer-specific options

    Examples
    --------
    Creating a custom renderer:

        >>> from styledmark.renderers.base import BaseRenderer
        >>>
        >>> class WordCountRenderer(BaseRenderer):
        ...     def render(self, doc):
        ...         return sum(len(str(child).split()) for child in doc.children)

    """

    def __init__(self, options: BaseRendererOptions | None = None):
        """Initialize the renderer with optional configuration."""
        self.options = options

    @abstractmethod
    def render(self, doc: Document) -> Any:
        """Render the AST into this renderer's output value.

        Parameters
        ----------
        doc : Document
            AST Document node to render

        Raises
        ------
        RenderingError
            If rendering fails

        """
        pass

    def render_to_string(self, doc: Document) -> str:
        """Render the AST to a plain string (if applicable).

        Raises
        ------
        NotImplementedError
            If the renderer does not support string output

        """
        raise NotImplementedError(f"{self.__class__.__name__} does not support rendering to a string.")

    @staticmethod
    def _validate_options_type(options: BaseRendererOptions | None, expected_type: type, renderer_name: str) -> None:
        """Validate that options are of the correct type for this renderer.

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                component_name=renderer_name,
                expected_type=expected_type,
                received_type=type(options),
            )
