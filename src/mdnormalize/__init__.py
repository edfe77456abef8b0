"""mdnormalize - normalize Markdown documents to one canonical style.

Markdown is parsed into a document tree with mistune and rendered back with
a fixed set of style choices: ``-`` bullets, one space after list markers,
``---`` thematic breaks, ATX headings and backtick fences. Fenced code blocks
tagged ``markdown`` or ``md`` are normalized too, one level deep.

Examples
--------
Normalize a string:

    >>> from mdnormalize import normalize_markdown
    >>> normalize_markdown("* item one\\n* item two\\n")
    '- item one\\n- item two\\n'

Format without touching nested Markdown blocks:

    >>> from mdnormalize import format_markdown
    >>> format_markdown("Title\\n=====\\n")
    '# Title\\n'

"""

__version__ = "1.0.0"

from mdnormalize.ast import Document
from mdnormalize.exceptions import (
    FileAccessError,
    FileError,
    FileNotFoundError,
    InvalidOptionsError,
    MdNormalizeError,
    OutputWriteError,
    ParsingError,
    RenderingError,
    TransformError,
    ValidationError,
)
from mdnormalize.normalizer import NestedMarkdownFormatter, format_markdown, is_nested_markdown, normalize_markdown
from mdnormalize.options import CANONICAL_STYLE, MarkdownParserOptions, MarkdownRendererOptions
from mdnormalize.parsers.markdown import MarkdownToAstConverter, markdown_to_ast
from mdnormalize.renderers.markdown import MarkdownRenderer

__all__ = [
    "__version__",
    "normalize_markdown",
    "format_markdown",
    "is_nested_markdown",
    "NestedMarkdownFormatter",
    "markdown_to_ast",
    "MarkdownToAstConverter",
    "MarkdownRenderer",
    "MarkdownParserOptions",
    "MarkdownRendererOptions",
    "CANONICAL_STYLE",
    "Document",
    "MdNormalizeError",
    "ValidationError",
    "InvalidOptionsError",
    "FileError",
    "FileNotFoundError",
    "FileAccessError",
    "ParsingError",
    "RenderingError",
    "OutputWriteError",
    "TransformError",
]
