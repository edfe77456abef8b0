#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdnormalize/parsers/base.py
"""Base class for document parsers.

A parser turns source text into a :class:`~mdnormalize.ast.Document`. The
base class handles option validation and loading text from the supported
input types.

"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, Union

from mdnormalize.ast import Document
from mdnormalize.exceptions import InvalidOptionsError, ValidationError
from mdnormalize.options.base import BaseParserOptions
from mdnormalize.utils.encoding import decode_markdown_bytes

logger = logging.getLogger(__name__)

ParserInput = Union[str, Path, IO[bytes], bytes]


class BaseParser(ABC):
    """Abstract base class for parsers.

    Parameters
    ----------
    options : BaseParserOptions or None, default = None
        Format-specific parsing options

    """

    def __init__(self, options: BaseParserOptions | None = None):
        """Initialize the parser with optional configuration."""
        self.options: BaseParserOptions | None = options

    @staticmethod
    def _validate_options_type(options: BaseParserOptions | None, expected_type: type, parser_name: str) -> None:
        """Validate that options are of the correct type for this parser.

        Parameters
        ----------
        options : BaseParserOptions or None
            The options object to validate
        expected_type : type
            The expected options class type
        parser_name : str
            Name of the parser (for error messages)

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
        """Parse the input into an AST.

        Parameters
        ----------
        input_data : str, Path, IO[bytes], or bytes
            The input to parse. A ``str`` is always treated as document
            text, never as a file path.

        Returns
        -------
        Document
            AST Document node representing the parsed document structure

        Raises
        ------
        ParsingError
            If parsing fails
        ValidationError
            If the input type is not supported

        """
        raise NotImplementedError

    @staticmethod
    def _load_text_content(input_data: ParserInput) -> str:
        """Load document text from the supported input types.

        Parameters
        ----------
        input_data : str, Path, IO[bytes], or bytes
            Input data to load

        Returns
        -------
        str
            Document text

        Raises
        ------
        ValidationError
            If the input type is not supported

        """
        if isinstance(input_data, str):
            return input_data
        if isinstance(input_data, bytes):
            return decode_markdown_bytes(input_data)
        if isinstance(input_data, Path):
            return decode_markdown_bytes(input_data.read_bytes())
        if hasattr(input_data, "read"):
            data = input_data.read()
            if isinstance(data, str):
                return data
            return decode_markdown_bytes(data)

        raise ValidationError(
            f"Unsupported input type: {type(input_data).__name__}",
            parameter_name="input_data",
            parameter_value=input_data,
        )
