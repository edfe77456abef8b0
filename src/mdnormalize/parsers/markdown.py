#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdnormalize/parsers/markdown.py
"""Markdown to AST converter.

This module parses Markdown with mistune and converts the resulting token
stream into the mdnormalize AST. Code block contents are kept as opaque
text; nothing inside a fence is parsed here.

"""

from __future__ import annotations

import logging
import re
import sys
from typing import Any, Literal

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]

import mistune
import yaml
from mistune.util import escape_url

from mdnormalize.ast import (
    BlockQuote,
    Code,
    CodeBlock,
    DefinitionDescription,
    DefinitionList,
    DefinitionTerm,
    Document,
    Emphasis,
    FootnoteDefinition,
    FootnoteReference,
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
    SourceLocation,
    Strikethrough,
    Strong,
    Table,
    TableCell,
    TableRow,
    Text,
    ThematicBreak,
)
from mdnormalize.constants import FRONTMATTER_DELIMITERS
from mdnormalize.exceptions import ParsingError
from mdnormalize.options.markdown import MarkdownParserOptions
from mdnormalize.parsers.base import BaseParser, ParserInput

logger = logging.getLogger(__name__)

# Footnote labels are upper-cased by mistune; the source spelling is recovered from the definitions
_FOOTNOTE_DEFINITION_RE = re.compile(r"^ {0,4}\[\^((?:[^\\\[\]\s]|\\.){1,500})\]:", re.MULTILINE)

CHARREF_TAIL_RE = re.compile(r"(#[0-9]{1,7};|#[xX][0-9a-fA-F]+;|[^\t\n\f <&#;]{1,32};)")

_AUTOLINK_RE = re.compile(r"^[A-Za-z][A-Za-z0-9.+-]{1,31}:[^<>\x00-\x20]*$")
_AUTO_EMAIL_RE = re.compile(
    r"^[A-Za-z0-9.!#$%&'*+/=?^_`{|}~-]+@[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?"
    r"(?:\.[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?)*$"
)


def is_entity_boundary(left: str, right: str) -> bool:
    """Check whether ``left + right`` would form an HTML character reference."""
    return left.endswith("&") and CHARREF_TAIL_RE.match(right) is not None


class MarkdownToAstConverter(BaseParser):
    r"""Convert Markdown to AST representation.

    A fresh mistune instance is created for every call to :meth:`parse`, so
    one converter can be shared between threads.

    Parameters
    ----------
    options : MarkdownParserOptions or None, default = None
        Parser configuration options

    Examples
    --------
    Basic parsing:

        >>> converter = MarkdownToAstConverter()
        >>> doc = converter.parse("# Hello\n\nThis is **bold**.")
        >>> [type(child).__name__ for child in doc.children]
        ['Heading', 'Paragraph']

    """

    def __init__(self, options: MarkdownParserOptions | None = None):
        """Initialize the Markdown parser with options."""
        BaseParser._validate_options_type(options, MarkdownParserOptions, "markdown")
        options = options or MarkdownParserOptions()
        super().__init__(options)
        self.options: MarkdownParserOptions = options

    def parse(self, input_data: ParserInput) -> Document:
        """Parse Markdown input into an AST Document.

        Parameters
        ----------
        input_data : str, Path, IO[bytes], or bytes
            Markdown input to parse. A ``str`` is the Markdown text itself.

        Returns
        -------
        Document
            AST document node. ``metadata`` may contain ``"frontmatter"``
            (raw block), ``"frontmatter_format"``, ``"frontmatter_data"`` and
            ``"link_definitions"`` (list of ``(label, url, title)`` tuples).

        Raises
        ------
        ParsingError
            If mistune fails on the input

        """
        markdown_content = self._load_text_content(input_data)
        markdown_content = markdown_content.replace("\r\n", "\n").replace("\r", "\n")

        metadata: dict[str, Any] = {}
        markdown_content = self._extract_frontmatter(markdown_content, metadata)

        footnote_labels = self._scan_footnote_labels(markdown_content)

        try:
            markdown = self._create_markdown()
            tokens, state = markdown.parse(markdown_content)
        except Exception as e:
            raise ParsingError(
                f"Failed to parse Markdown: {e}", parsing_stage="tokenize", original_error=e
            ) from e

        builder = _TokenConverter(footnote_labels)
        children = builder.process_tokens(tokens if isinstance(tokens, list) else [])

        link_definitions = self._collect_link_definitions(state.env.get("ref_links") or {})
        if link_definitions:
            metadata["link_definitions"] = link_definitions

        logger.debug(f"Parsed Markdown into {len(children)} top-level blocks")
        return Document(children=children, metadata=metadata, source_location=SourceLocation(format="markdown"))

    def _create_markdown(self) -> mistune.Markdown:
        """Build a mistune instance with the plugins enabled in the options."""
        plugins: list[str] = []
        if self.options.parse_strikethrough:
            plugins.append("strikethrough")
        if self.options.parse_tables:
            plugins.extend(["table", "mistune.plugins.table.table_in_quote", "mistune.plugins.table.table_in_list"])
        if self.options.parse_footnotes:
            plugins.append("footnotes")
        if self.options.parse_task_lists:
            plugins.append("task_lists")
        if self.options.parse_definition_lists:
            plugins.append("def_list")

        # renderer=None makes mistune return the token stream
        markdown = mistune.create_markdown(plugins=plugins, renderer=None)
        markdown.block.max_nested_level = self.options.max_nesting_level
        return markdown

    def _extract_frontmatter(self, content: str, metadata: dict[str, Any]) -> str:
        """Split a leading YAML (``---``) or TOML (``+++``) block off ``content``.

        The block is only accepted when its first line is not blank and its
        body parses as a mapping; anything else is left for the Markdown
        parser (a ``---`` line is also a thematic break).

        Parameters
        ----------
        content : str
            Markdown content that may start with front matter
        metadata : dict
            Document metadata to populate

        Returns
        -------
        str
            The content with the front matter removed

        """
        if not self.options.parse_frontmatter:
            return content

        lines = content.split("\n")
        delimiter = lines[0].rstrip()
        fmt = FRONTMATTER_DELIMITERS.get(delimiter)
        if fmt is None or len(lines) < 3 or not lines[1].strip():
            return content

        end_index = next((i for i in range(1, len(lines)) if lines[i].rstrip() == delimiter), -1)
        if end_index <= 1:
            return content

        body = "\n".join(lines[1:end_index])
        try:
            data = yaml.safe_load(body) if fmt == "yaml" else tomllib.loads(body)
        except (yaml.YAMLError, tomllib.TOMLDecodeError) as e:
            logger.debug(f"Ignoring invalid {fmt} front matter: {e}")
            return content

        if not isinstance(data, dict):
            return content

        metadata["frontmatter"] = "\n".join(lines[: end_index + 1])
        metadata["frontmatter_format"] = fmt
        metadata["frontmatter_data"] = data
        return "\n".join(lines[end_index + 1 :])

    @staticmethod
    def _scan_footnote_labels(content: str) -> dict[str, str]:
        """Map mistune's normalized footnote keys to the labels as written."""
        labels: dict[str, str] = {}
        for match in _FOOTNOTE_DEFINITION_RE.finditer(content):
            label = match.group(1)
            labels.setdefault(label.lower().upper(), label)
        return labels

    @staticmethod
    def _collect_link_definitions(ref_links: dict[str, dict[str, Any]]) -> list[tuple[str, str, str | None]]:
        """Turn mistune's reference table into ``(label, url, title)`` tuples in source order."""
        return [(entry["label"], entry["url"], entry.get("title")) for entry in ref_links.values()]


class _TokenConverter:
    """Convert one mistune token stream into AST nodes.

    Parameters
    ----------
    footnote_labels : dict
        Normalized footnote key to source label

    """

    def __init__(self, footnote_labels: dict[str, str]):
        self._footnote_labels = footnote_labels

    def process_tokens(self, tokens: list[dict[str, Any]]) -> list[Node]:
        """Process a list of block tokens into AST nodes."""
        nodes: list[Node] = []

        for token in tokens:
            node = self._process_token(token)
            if node is not None:
                if isinstance(node, list):
                    nodes.extend(node)
                else:
                    nodes.append(node)

        return nodes

    def _process_token(self, token: dict[str, Any]) -> Node | list[Node] | None:
        """Process a single block token."""
        token_type = token.get("type", "")

        if token_type == "heading":
            return self._process_heading(token)
        elif token_type in ("paragraph", "block_text"):
            # block_text is the tight-list form of a paragraph
            return Paragraph(content=self._process_inline_tokens(token.get("children", [])))
        elif token_type == "block_code":
            return self._process_code_block(token)
        elif token_type == "block_quote":
            return BlockQuote(children=self.process_tokens(token.get("children", [])))
        elif token_type == "list":
            return self._process_list(token)
        elif token_type == "table":
            return self._process_table(token)
        elif token_type == "thematic_break":
            return ThematicBreak()
        elif token_type == "block_html":
            return HTMLBlock(content=token.get("raw", ""))
        elif token_type == "footnotes":
            return [self._process_footnote_item(item) for item in token.get("children", [])]
        elif token_type == "def_list":
            return self._process_definition_list(token)
        elif token_type == "blank_line":
            return None

        logger.debug(f"Skipping unsupported block token: {token_type}")
        return None

    def _process_heading(self, token: dict[str, Any]) -> Heading:
        attrs = token.get("attrs") or {}
        level = attrs.get("level", 1)
        if not isinstance(level, int) or not 1 <= level <= 6:
            level = 1
        return Heading(level=level, content=self._process_inline_tokens(token.get("children", [])))

    def _process_code_block(self, token: dict[str, Any]) -> CodeBlock:
        """Process a fenced or indented code block token.

        Parameters
        ----------
        token : dict
            Code block token with 'raw', 'style' and optional 'attrs'

        Returns
        -------
        CodeBlock
            Code block with the first info word as ``language`` and the full
            info string in ``metadata["info_string"]``

        """
        content = token.get("raw", "")
        metadata: dict[str, Any] = {}
        language = None

        if token.get("style") == "indent":
            metadata["indented"] = True
            if content and not content.endswith("\n"):
                content += "\n"
            return CodeBlock(content=content, metadata=metadata)

        marker = token.get("marker") or "```"
        info_string = ((token.get("attrs") or {}).get("info") or "").strip()
        if info_string:
            metadata["info_string"] = info_string
            language = info_string.split(maxsplit=1)[0]

        return CodeBlock(
            content=content,
            language=language,
            fence_char=marker[0],
            fence_length=len(marker),
            metadata=metadata,
        )

    def _process_list(self, token: dict[str, Any]) -> List:
        """Process a list token.

        Tightness lives on the token itself, not in its attrs.
        """
        attrs = token.get("attrs") or {}
        ordered = bool(attrs.get("ordered", False))
        start = attrs.get("start", 1)
        tight = bool(token.get("tight", True))

        items = [
            self._process_list_item(child)
            for child in token.get("children", [])
            if child.get("type") in ("list_item", "task_list_item")
        ]
        return List(ordered=ordered, items=items, start=start, tight=tight)

    def _process_list_item(self, token: dict[str, Any]) -> ListItem:
        task_status: Literal["checked", "unchecked"] | None = None
        if token.get("type") == "task_list_item":
            checked = (token.get("attrs") or {}).get("checked", False)
            task_status = "checked" if checked else "unchecked"

        return ListItem(children=self.process_tokens(token.get("children", [])), task_status=task_status)

    def _process_table(self, token: dict[str, Any]) -> Table:
        """Process a table token into header, body rows and column alignments."""
        header = None
        rows = []
        alignments = []

        for section in token.get("children", []):
            section_type = section.get("type", "")
            if section_type == "table_head":
                # header cells are direct children of table_head
                cells = [self._process_table_cell(cell) for cell in section.get("children", [])]
                alignments = [cell.alignment for cell in cells]
                header = TableRow(cells=cells, is_header=True)
            elif section_type == "table_body":
                for row in section.get("children", []):
                    cells = [self._process_table_cell(cell) for cell in row.get("children", [])]
                    rows.append(TableRow(cells=cells))

        return Table(header=header, rows=rows, alignments=alignments)

    def _process_table_cell(self, token: dict[str, Any]) -> TableCell:
        alignment = (token.get("attrs") or {}).get("align")
        return TableCell(content=self._process_inline_tokens(token.get("children", [])), alignment=alignment)

    def _process_footnote_item(self, token: dict[str, Any]) -> FootnoteDefinition:
        key = (token.get("attrs") or {}).get("key", "")
        identifier = self._footnote_labels.get(key, key)
        return FootnoteDefinition(identifier=identifier, content=self.process_tokens(token.get("children", [])))

    def _process_definition_list(self, token: dict[str, Any]) -> DefinitionList:
        """Process a definition list token.

        mistune emits one ``def_list_head`` per term line followed by one
        ``def_list_item`` per ``:`` definition.
        """
        items: list[tuple[DefinitionTerm, list[DefinitionDescription]]] = []

        current_term: DefinitionTerm | None = None
        current_descriptions: list[DefinitionDescription] = []

        for child in token.get("children", []):
            child_type = child.get("type", "")
            if child_type == "def_list_head":
                if current_term is not None:
                    items.append((current_term, current_descriptions))
                current_term = DefinitionTerm(content=self._process_inline_tokens(child.get("children", [])))
                current_descriptions = []
            elif child_type == "def_list_item":
                current_descriptions.append(
                    DefinitionDescription(content=self.process_tokens(child.get("children", [])))
                )

        if current_term is not None:
            items.append((current_term, current_descriptions))

        return DefinitionList(items=items)

    # Inline tokens

    def _process_inline_tokens(self, tokens: list[dict[str, Any]]) -> list[Node]:
        """Process inline tokens, merging adjacent text runs."""
        nodes: list[Node] = []

        for token in tokens:
            node = self._process_inline_token(token)
            if node is None:
                continue
            # an escaped "&" stays apart from a following "amp;" so it is not read back as an entity
            if (
                isinstance(node, Text)
                and nodes
                and isinstance(nodes[-1], Text)
                and not is_entity_boundary(nodes[-1].content, node.content)
            ):
                nodes[-1] = Text(content=nodes[-1].content + node.content)
            else:
                nodes.append(node)

        return nodes

    def _process_inline_token(self, token: dict[str, Any]) -> Node | None:
        token_type = token.get("type", "")

        handler_map: dict[str, Any] = {
            "text": self._handle_text_token,
            "strong": self._handle_strong_token,
            "emphasis": self._handle_emphasis_token,
            "codespan": self._handle_codespan_token,
            "link": self._handle_link_token,
            "image": self._handle_image_token,
            "linebreak": self._handle_linebreak_token,
            "softbreak": self._handle_softbreak_token,
            "strikethrough": self._handle_strikethrough_token,
            "inline_html": self._handle_inline_html_token,
            "footnote_ref": self._handle_footnote_ref_token,
        }

        handler = handler_map.get(token_type)
        if handler:
            return handler(token)

        logger.debug(f"Skipping unsupported inline token: {token_type}")
        return None

    def _handle_text_token(self, token: dict[str, Any]) -> Text:
        return Text(content=token.get("raw", ""))

    def _handle_strong_token(self, token: dict[str, Any]) -> Strong:
        return Strong(content=self._process_inline_tokens(token.get("children", [])))

    def _handle_emphasis_token(self, token: dict[str, Any]) -> Emphasis:
        return Emphasis(content=self._process_inline_tokens(token.get("children", [])))

    def _handle_strikethrough_token(self, token: dict[str, Any]) -> Strikethrough:
        return Strikethrough(content=self._process_inline_tokens(token.get("children", [])))

    def _handle_codespan_token(self, token: dict[str, Any]) -> Code:
        return Code(content=token.get("raw", ""))

    def _handle_linebreak_token(self, token: dict[str, Any]) -> LineBreak:
        return LineBreak(soft=False)

    def _handle_softbreak_token(self, token: dict[str, Any]) -> LineBreak:
        return LineBreak(soft=True)

    def _handle_inline_html_token(self, token: dict[str, Any]) -> HTMLInline:
        return HTMLInline(content=token.get("raw", ""))

    def _handle_footnote_ref_token(self, token: dict[str, Any]) -> FootnoteReference:
        key = token.get("raw", "")
        return FootnoteReference(identifier=self._footnote_labels.get(key, key))

    def _handle_link_token(self, token: dict[str, Any]) -> Link:
        """Handle link token, recording reference labels and autolinks."""
        attrs = token.get("attrs") or {}
        url = attrs.get("url", "")
        children = token.get("children", [])
        content = self._process_inline_tokens(children)

        metadata: dict[str, Any] = {}
        if "ref" in token:
            metadata["reference"] = token.get("label") or token["ref"]
        elif self._is_autolink(url, children):
            metadata["autolink"] = True

        return Link(url=url, content=content, title=attrs.get("title"), metadata=metadata)

    def _handle_image_token(self, token: dict[str, Any]) -> Image:
        """Handle image token. Alt text is the plain text of its children."""
        attrs = token.get("attrs") or {}
        metadata: dict[str, Any] = {}
        if "ref" in token:
            metadata["reference"] = token.get("label") or token["ref"]

        return Image(
            url=attrs.get("url", ""),
            alt_text=self._plain_text(token.get("children", [])),
            title=attrs.get("title"),
            metadata=metadata,
        )

    @classmethod
    def _plain_text(cls, tokens: list[dict[str, Any]]) -> str:
        parts = []
        for token in tokens:
            if "raw" in token and token.get("type") in ("text", "codespan", "inline_html"):
                parts.append(token["raw"])
            elif token.get("type") in ("linebreak", "softbreak"):
                parts.append(" ")
            elif "children" in token:
                parts.append(cls._plain_text(token["children"]))
            elif token.get("type") == "image":
                parts.append(cls._plain_text(token.get("children", [])))
        return "".join(parts)

    @staticmethod
    def _is_autolink(url: str, children: list[dict[str, Any]]) -> bool:
        """Check whether a link can be written back as ``<url>``."""
        if len(children) != 1 or children[0].get("type") != "text":
            return False
        text = children[0].get("raw", "")
        if _AUTOLINK_RE.match(text) and url == escape_url(text):
            return True
        return bool(_AUTO_EMAIL_RE.match(text)) and url == escape_url("mailto:" + text)


def markdown_to_ast(markdown_content: str, options: MarkdownParserOptions | None = None) -> Document:
    r"""Convert a Markdown string to an AST.

    Parameters
    ----------
    markdown_content : str
        Markdown text to parse
    options : MarkdownParserOptions or None, default = None
        Parser configuration

    Returns
    -------
    Document
        AST document node

    Examples
    --------
    >>> doc = markdown_to_ast("# Hello\n\nWorld")
    >>> len(doc.children)
    2

    """
    return MarkdownToAstConverter(options).parse(markdown_content)
