#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/styledmark/parsers/markdown.py
"""Markdown to AST parser.

This module converts Markdown text into the styledmark AST using mistune 3
in token mode (``renderer=None``); the tokens are then mapped onto the
node classes of :mod:`styledmark.ast.nodes`.

"""

from __future__ import annotations

import logging
import re
from typing import Any

import mistune

from styledmark.ast import (
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
from styledmark.exceptions import ParsingError
from styledmark.options.markdown import MarkdownParserOptions
from styledmark.parsers.base import BaseParser, ParserInput

logger = logging.getLogger(__name__)

SYMBOL_LINK_PATTERN = r"``(?P<symbol_link_name>[^`\s][^`\n]*)``"


def _parse_symbol_link(inline: Any, m: re.Match[str], state: Any) -> int:
    state.append_token({"type": "symbol_link", "raw": m.group(0), "attrs": {"name": m.group("symbol_link_name")}})
    return m.end()


def symbol_link(md: mistune.Markdown) -> None:
    """Mistune plugin turning ````name```` spans into ``symbol_link`` tokens."""
    md.inline.register("symbol_link", SYMBOL_LINK_PATTERN, _parse_symbol_link, before="codespan")


class MarkdownParser(BaseParser):
    r"""Convert Markdown to AST representation.

    Parameters
    ----------
    options : MarkdownParserOptions or None, default = None
        Parser configuration options

    Examples
    --------
        >>> parser = MarkdownParser()
        >>> doc = parser.parse("# Hello\n\nThis is **bold**.")
        >>> [type(child).__name__ for child in doc.children]
        ['Heading', 'Paragraph']

    """

    def __init__(self, options: MarkdownParserOptions | None = None):
        """Initialize the Markdown parser with options."""
        BaseParser._validate_options_type(options, MarkdownParserOptions, "markdown")
        options = options or MarkdownParserOptions()
        super().__init__(options)
        self.options: MarkdownParserOptions = options
        self._markdown = self._create_markdown()

    def _create_markdown(self) -> mistune.Markdown:
        plugins: list[Any] = []
        if self.options.parse_strikethrough:
            plugins.append("strikethrough")
        if self.options.parse_tables:
            plugins.append("table")
        if self.options.parse_symbol_links:
            plugins.append(symbol_link)
        return mistune.create_markdown(plugins=plugins, renderer=None)

    def parse(self, input_data: ParserInput) -> Document:
        """Parse Markdown input into an AST Document.

        Parameters
        ----------
        input_data : str, Path, IO or bytes
            Markdown text; a ``Path``, bytes or a stream are read first

        Raises
        ------
        ParsingError
            If mistune fails on the input or produces an unusable tree

        """
        markdown_content = self._load_text_content(input_data)
        try:
            tokens, _state = self._markdown.parse(markdown_content)
            children = self._process_tokens(tokens if isinstance(tokens, list) else [])
        except (ValueError, TypeError, KeyError, IndexError, RecursionError) as exc:
            raise ParsingError(
                f"Failed to parse Markdown: {exc!r}", parsing_stage="tokens", original_error=exc
            ) from exc

        logger.debug(f"Parsed Markdown into {len(children)} top-level block(s)")
        return Document(children=children)

    # ------------------------------------------------------------------
    # Block tokens
    # ------------------------------------------------------------------

    def _process_tokens(self, tokens: list[dict[str, Any]]) -> list[Node]:
        nodes: list[Node] = []
        for token in tokens:
            node = self._process_token(token)
            if node is not None:
                nodes.append(node)
        return nodes

    def _process_token(self, token: dict[str, Any]) -> Node | None:
        """Map one block token onto a node; blank lines and unknown tokens yield None."""
        token_type = token.get("type", "")

        if token_type == "heading":
            return self._process_heading(token)
        elif token_type in ("paragraph", "block_text"):
            # block_text is the content of tight list items
            return Paragraph(content=self._process_inline_tokens(token.get("children", [])))
        elif token_type == "block_code":
            return self._process_code_block(token)
        elif token_type == "block_quote":
            return BlockQuote(children=self._process_tokens(token.get("children", [])))
        elif token_type == "list":
            return self._process_list(token)
        elif token_type == "table":
            return self._process_table(token)
        elif token_type == "thematic_break":
            return ThematicBreak()
        elif token_type == "block_html":
            return HTMLBlock(content=token.get("raw", ""))

        if token_type != "blank_line":
            logger.debug(f"Skipping unsupported block token {token_type!r}")
        return None

    def _process_heading(self, token: dict[str, Any]) -> Heading:
        attrs = token.get("attrs") or {}
        level = attrs.get("level", 1)
        if not isinstance(level, int) or not 1 <= level <= 6:
            level = 1
        return Heading(level=level, content=self._process_inline_tokens(token.get("children", [])))

    def _process_code_block(self, token: dict[str, Any]) -> CodeBlock:
        attrs = token.get("attrs") or {}
        info = (attrs.get("info") or "").strip()
        language = info.split(maxsplit=1)[0] if info else None
        metadata = {"info_string": info} if info else {}
        return CodeBlock(content=token.get("raw", ""), language=language, metadata=metadata)

    def _process_list(self, token: dict[str, Any]) -> List:
        attrs = token.get("attrs") or {}
        ordered = bool(attrs.get("ordered", False))
        start = attrs.get("start", 1)
        tight = token.get("tight", attrs.get("tight", True))
        items = [
            ListItem(children=self._process_tokens(child.get("children", [])))
            for child in token.get("children", [])
            if isinstance(child, dict) and child.get("type") == "list_item"
        ]
        return List(ordered=ordered, items=items, start=start if isinstance(start, int) else 1, tight=tight)

    def _process_table(self, token: dict[str, Any]) -> Table:
        header = None
        rows: list[TableRow] = []
        for section in token.get("children", []):
            section_type = section.get("type", "")
            if section_type == "table_head":
                # Header cells are direct children of table_head
                header = TableRow(cells=self._process_table_cells(section), is_header=True)
            elif section_type == "table_body":
                rows.extend(
                    TableRow(cells=self._process_table_cells(row_token)) for row_token in section.get("children", [])
                )
        return Table(header=header, rows=rows)

    def _process_table_cells(self, row_token: dict[str, Any]) -> list[TableCell]:
        cells = []
        for cell_token in row_token.get("children", []):
            if cell_token.get("type") != "table_cell":
                continue
            alignment = (cell_token.get("attrs") or {}).get("align")
            cells.append(
                TableCell(content=self._process_inline_tokens(cell_token.get("children", [])), alignment=alignment)
            )
        return cells

    # ------------------------------------------------------------------
    # Inline tokens
    # ------------------------------------------------------------------

    def _process_inline_tokens(self, tokens: list[dict[str, Any]]) -> list[Node]:
        nodes: list[Node] = []
        for token in tokens:
            node = self._process_inline_token(token)
            if node is not None:
                nodes.append(node)
        return nodes

    def _process_inline_token(self, token: dict[str, Any]) -> Node | None:
        token_type = token.get("type", "")
        attrs = token.get("attrs") or {}
        children = token.get("children", [])

        if token_type == "text":
            return Text(content=token.get("raw", ""))
        elif token_type == "strong":
            return Strong(content=self._process_inline_tokens(children))
        elif token_type == "emphasis":
            return Emphasis(content=self._process_inline_tokens(children))
        elif token_type == "strikethrough":
            return Strikethrough(content=self._process_inline_tokens(children))
        elif token_type == "codespan":
            return Code(content=token.get("raw", ""))
        elif token_type == "link":
            return Link(url=attrs.get("url"), content=self._process_inline_tokens(children), title=attrs.get("title"))
        elif token_type == "image":
            return Image(url=attrs.get("url"), alt_text=self._plain_text(children), title=attrs.get("title"))
        elif token_type == "linebreak":
            return LineBreak()
        elif token_type == "softbreak":
            return SoftBreak()
        elif token_type == "inline_html":
            return HTMLInline(content=token.get("raw", ""))
        elif token_type == "symbol_link":
            return SymbolLink(plain_text=token.get("raw", ""), destination=attrs.get("name"))

        logger.debug(f"Skipping unsupported inline token {token_type!r}")
        return None

    def _plain_text(self, tokens: list[dict[str, Any]]) -> str:
        parts = []
        for token in tokens:
            if "raw" in token:
                parts.append(token["raw"])
            else:
                parts.append(self._plain_text(token.get("children", [])))
        return "".join(parts)


def markdown_to_ast(markdown_content: ParserInput, options: MarkdownParserOptions | None = None) -> Document:
    r"""Convert Markdown to AST.

    Convenience wrapper creating a :class:`MarkdownParser` and parsing in
    one step.

    Examples
    --------
    >>> doc = markdown_to_ast("# Hello\n\nWorld")
    >>> len(doc.children)
    2

    """
    return MarkdownParser(options).parse(markdown_content)
