#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/styledmark/ast/__init__.py
"""Abstract Syntax Tree (AST) module for Markdown documents.

The tree is the input contract of the styled-text renderer. It is produced by
:mod:`styledmark.parsers.markdown` or built by hand:

    >>> from styledmark.ast import Document, Paragraph, Strong, Text
    >>> doc = Document(children=[
    ...     Paragraph(content=[Strong(content=[Text(content="bold")]), Text(content=" text")])
    ... ])

"""

from __future__ import annotations

from styledmark.ast.nodes import (
    BLOCK_NODE_TYPES,
    INLINE_NODE_TYPES,
    BlockQuote,
    Code,
    CodeBlock,
    Document,
    Emphasis,
    Heading,
    HTMLBlock,
    HTMLInline,
    Image,
    LineBreak,
    Link,
    List,
    ListItem,
    Node,
    Paragraph,
    SoftBreak,
    Strikethrough,
    Strong,
    SymbolLink,
    Table,
    TableCell,
    TableRow,
    Text,
    ThematicBreak,
)
from styledmark.ast.visitors import NodeVisitor

__all__ = [
    "BLOCK_NODE_TYPES",
    "INLINE_NODE_TYPES",
    "BlockQuote",
    "Code",
    "CodeBlock",
    "Document",
    "Emphasis",
    "Heading",
    "HTMLBlock",
    "HTMLInline",
    "Image",
    "LineBreak",
    "Link",
    "List",
    "ListItem",
    "Node",
    "NodeVisitor",
    "Paragraph",
    "SoftBreak",
    "Strikethrough",
    "Strong",
    "SymbolLink",
    "Table",
    "TableCell",
    "TableRow",
    "Text",
    "ThematicBreak",
]
