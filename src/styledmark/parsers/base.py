#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/styledmark/parsers/base.py
"""Base class for parsers producing the styledmark AST."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, Union

from styledmark.ast import Document
from styledmark.exceptions import InvalidOptionsError
from styledmark.options.base import BaseParserOptions
from styledmark.utils.encoding import read_text_with_encoding_detection

ParserInput = Union[str, Path, IO[bytes], IO[str], bytes]


class BaseParser(ABC):
    """Abstract base class for document parsers.

    Parameters
    ----------
    options : BaseParserOptions or None, default = None
        Parser-specific options

    """

    def __init__(self, options: BaseParserOptions | None = None):
        """Initialize the parser with optional configuration."""
        self.options = options

    @staticmethod
    def _validate_options_type(options: BaseParserOptions | None, expected_type: type, parser_name: str) -> None:
        """Validate that options are of the correct type for this parser.

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                component_name=parser_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    @abstractmethod
    def parse(self, input_data: ParserInput) -> Document:
        """Parse input into an AST Document.

        Parameters
        ----------
        input_data : str, Path, IO or bytes
            Source text, a path to read it from, raw bytes, or a stream

        Raises
        ------
        ParsingError
            If the input cannot be parsed

        """
        pass

    @staticmethod
    def _load_text_content(input_data: ParserInput) -> str:
        """Return the text of ``input_data``.

        A ``str`` is always treated as content; pass a ``Path`` to read a
        file. Bytes are decoded with encoding detection.

        """
        if isinstance(input_data, str):
            return input_data
        if isinstance(input_data, bytes):
            return read_text_with_encoding_detection(input_data)
        if isinstance(input_data, Path):
            return read_text_with_encoding_detection(input_data.read_bytes())

        data = input_data.read()
        if isinstance(data, bytes):
            return read_text_with_encoding_detection(data)
        return data
