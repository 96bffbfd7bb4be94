#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Parsers producing the styledmark AST."""

from styledmark.parsers.base import BaseParser
from styledmark.parsers.markdown import MarkdownParser, markdown_to_ast

__all__ = ["BaseParser", "MarkdownParser", "markdown_to_ast"]
