#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Options classes for Markdown parsing and rendering."""

from mdnormalize.options.base import BaseParserOptions, BaseRendererOptions
from mdnormalize.options.markdown import (
    CANONICAL_PARSER_OPTIONS,
    CANONICAL_STYLE,
    MarkdownParserOptions,
    MarkdownRendererOptions,
)

__all__ = [
    "BaseParserOptions",
    "BaseRendererOptions",
    "MarkdownParserOptions",
    "MarkdownRendererOptions",
    "CANONICAL_STYLE",
    "CANONICAL_PARSER_OPTIONS",
]
