#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for Markdown parsing."""


from __future__ import annotations

from dataclasses import dataclass, field

from styledmark.options.base import BaseParserOptions


@dataclass(frozen=True)
class MarkdownParserOptions(BaseParserOptions):
    """Configuration options for Markdown-to-AST parsing.

    Parameters
    ----------
    parse_strikethrough : bool, default True
        Whether to parse strikethrough syntax (~~text~~).
    parse_tables : bool, default True
        Whether to parse table syntax (GFM pipe tables).
    parse_symbol_links : bool, default False
        Whether to parse double-backtick spans (````name````) as symbol links
        instead of inline code.

    """

    parse_strikethrough: bool = field(
        default=True,
        metadata={"help": "Parse strikethrough syntax (~~text~~)", "cli_name": "no-parse-strikethrough"},
    )
    parse_tables: bool = field(
        default=True,
        metadata={"help": "Parse table syntax (GFM pipe tables)", "cli_name": "no-parse-tables"},
    )
    parse_symbol_links: bool = field(
        default=False,
        metadata={"help": "Parse ``name`` spans as symbol links"},
    )
