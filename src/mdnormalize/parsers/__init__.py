#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Parsers that turn source text into the mdnormalize AST."""

from mdnormalize.parsers.base import BaseParser
from mdnormalize.parsers.markdown import MarkdownToAstConverter, markdown_to_ast

__all__ = ["BaseParser", "MarkdownToAstConverter", "markdown_to_ast"]
