#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdnormalize/normalizer.py
"""Markdown normalization entry points.

:func:`format_markdown` parses text and renders it back in the canonical
style. :func:`normalize_markdown` does the same, and additionally formats the
contents of fenced code blocks tagged ``markdown`` or ``md`` exactly one
level deep. A failure while formatting one nested block is logged and that
block is left as it was; the rest of the document is still normalized.

Examples
--------
    >>> normalize_markdown("* item one\\n* item two\\n")
    '- item one\\n- item two\\n'

"""

from __future__ import annotations

import logging

from mdnormalize.ast import CodeBlock, Document, Node, extract_nodes
from mdnormalize.constants import NESTED_FAILURE_MESSAGE, NESTED_MARKDOWN_LANGUAGES, UNKNOWN_ERROR_MESSAGE
from mdnormalize.exceptions import TransformError
from mdnormalize.options.markdown import (
    CANONICAL_PARSER_OPTIONS,
    CANONICAL_STYLE,
    MarkdownParserOptions,
    MarkdownRendererOptions,
)
from mdnormalize.parsers.markdown import MarkdownToAstConverter
from mdnormalize.renderers.markdown import MarkdownRenderer

logger = logging.getLogger(__name__)


def is_nested_markdown(node: Node, case_sensitive: bool = False) -> bool:
    """Check whether a node is a code block holding Markdown to be formatted.

    Parameters
    ----------
    node : Node
        Node to check
    case_sensitive : bool, default = False
        Compare the language tag exactly instead of ignoring case

    Returns
    -------
    bool
        True for a CodeBlock with non-empty content whose language is
        ``markdown`` or ``md``

    """
    if not isinstance(node, CodeBlock) or not node.language or not node.content:
        return False
    language = node.language if case_sensitive else node.language.lower()
    return language in NESTED_MARKDOWN_LANGUAGES


def format_markdown(
    text: str,
    parser_options: MarkdownParserOptions | None = None,
    renderer_options: MarkdownRendererOptions | None = None,
) -> str:
    """Parse Markdown and render it back in a fixed style.

    Code block contents are never looked at.

    Parameters
    ----------
    text : str
        Markdown text
    parser_options : MarkdownParserOptions or None, default = None
        Parser configuration; the canonical parser options when omitted
    renderer_options : MarkdownRendererOptions or None, default = None
        Style configuration; ``CANONICAL_STYLE`` when omitted

    Returns
    -------
    str
        Formatted Markdown

    Raises
    ------
    ParsingError
        If the text cannot be parsed

    """
    document = MarkdownToAstConverter(parser_options or CANONICAL_PARSER_OPTIONS).parse(text)
    return MarkdownRenderer(renderer_options or CANONICAL_STYLE).render_to_string(document)


class NestedMarkdownFormatter:
    """Format Markdown embedded in fenced code blocks, one level deep.

    Each eligible block's content is replaced by the output of
    :func:`format_markdown` with trailing whitespace removed. Blocks inside
    the formatted content are not visited again.

    Parameters
    ----------
    case_sensitive_languages : bool, default = False
        Only match the ``markdown``/``md`` tags when written in lower case
    parser_options : MarkdownParserOptions or None, default = None
        Parser configuration for the nested content
    renderer_options : MarkdownRendererOptions or None, default = None
        Style configuration for the nested content

    Attributes
    ----------
    formatted : int
        Number of blocks successfully formatted by the last :meth:`apply`
    failures : int
        Number of blocks left unchanged because formatting failed

    Examples
    --------
        >>> doc = markdown_to_ast("```md\\n* a\\n```\\n")
        >>> formatter = NestedMarkdownFormatter()
        >>> formatter.apply(doc).children[0].content
        '- a'

    """

    def __init__(
        self,
        case_sensitive_languages: bool = False,
        parser_options: MarkdownParserOptions | None = None,
        renderer_options: MarkdownRendererOptions | None = None,
    ):
        self.case_sensitive_languages = case_sensitive_languages
        self.parser_options = parser_options or CANONICAL_PARSER_OPTIONS
        self.renderer_options = renderer_options or CANONICAL_STYLE
        self.formatted = 0
        self.failures = 0

    def apply(self, document: Document) -> Document:
        """Format every eligible code block of ``document`` in place.

        Parameters
        ----------
        document : Document
            Document to update

        Returns
        -------
        Document
            The same document object

        Raises
        ------
        TransformError
            If ``document`` is not a Document

        """
        if not isinstance(document, Document):
            raise TransformError(
                f"Expected a Document, got {type(document).__name__}", transform_name="nested_markdown"
            )

        self.formatted = 0
        self.failures = 0

        # collect first so replaced contents are never walked
        for node in extract_nodes(document, CodeBlock):
            if not is_nested_markdown(node, case_sensitive=self.case_sensitive_languages):
                continue
            self._format_block(node)

        if self.formatted or self.failures:
            logger.debug(f"Nested Markdown blocks: {self.formatted} formatted, {self.failures} failed")
        return document

    def _format_block(self, node: CodeBlock) -> None:
        try:
            formatted = format_markdown(node.content, self.parser_options, self.renderer_options)
        except Exception as e:
            self.failures += 1
            logger.error(f"{NESTED_FAILURE_MESSAGE}: {str(e) or UNKNOWN_ERROR_MESSAGE}")
            return

        node.content = formatted.rstrip()
        self.formatted += 1


def normalize_markdown(text: str) -> str:
    """Normalize Markdown to the canonical style, including nested Markdown blocks.

    Parameters
    ----------
    text : str
        Markdown text

    Returns
    -------
    str
        Normalized Markdown; ``""`` for empty input

    Raises
    ------
    ParsingError
        If the top-level document cannot be parsed

    Examples
    --------
        >>> normalize_markdown("```markdown\\n# H\\n\\n* a\\n```")
        '```markdown\\n# H\\n\\n- a\\n```\\n'

    """
    if text == "":
        return ""

    document = MarkdownToAstConverter(CANONICAL_PARSER_OPTIONS).parse(text)
    NestedMarkdownFormatter().apply(document)
    return MarkdownRenderer(CANONICAL_STYLE).render_to_string(document)
