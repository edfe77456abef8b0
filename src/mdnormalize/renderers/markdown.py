#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdnormalize/renderers/markdown.py
"""Markdown rendering from AST.

This module provides the MarkdownRenderer class which converts AST nodes
back to Markdown text in a single canonical style. Rendering the tree that
the parser produced from the renderer's own output yields the same text
again, so normalizing twice is the same as normalizing once.

Container blocks (list items, block quotes, footnotes, definitions) are
rendered into a buffer first and then prefixed line by line, so nested
content of any kind ends up at the right indentation.

"""

from __future__ import annotations

import re
import string
from pathlib import Path
from typing import IO, Union

from mdnormalize.ast.nodes import (
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
    Strikethrough,
    Strong,
    Table,
    TableCell,
    TableRow,
    Text,
    ThematicBreak,
)
from mdnormalize.ast.visitors import NodeVisitor
from mdnormalize.constants import LIST_INDENT_TAB_SIZE, LIST_SEPARATOR_COMMENT
from mdnormalize.options.markdown import MarkdownRendererOptions
from mdnormalize.parsers.markdown import CHARREF_TAIL_RE
from mdnormalize.renderers.base import BaseRenderer, InlineContentMixin

_ASCII_PUNCTUATION = frozenset(string.punctuation)

# Constructs that only mean something at the start of a line
_LINE_START_ESCAPES: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"^(#{1,6})(?=[ \t]|$)"), r"\\\1"),
    (re.compile(r"^>"), r"\\>"),
    (re.compile(r"^([-+])(?=[ \t]|$)"), r"\\\1"),
    (re.compile(r"^([-=])(?=\1*[ \t]*$)"), r"\\\1"),
    (re.compile(r"^-(?=(?:[ \t]*-){2,}[ \t]*$)"), r"\\-"),
    (re.compile(r"^\+(?=\+\+[ \t]*$)"), r"\\+"),
    (re.compile(r"^(\d{1,9})([.)])(?=[ \t]|$)"), r"\1\\\2"),
    (re.compile(r"^:(?=[ \t]|$)"), r"\\:"),
]
_TABLE_DELIMITER_LINE_RE = re.compile(r"^(?=[^-]*-)(?=.*\|)[|: \t-]+$")
_CLOSING_HASHES_RE = re.compile(r"(^|[ \t])(#+)([ \t]*)$")
_UNESCAPED_PIPE_RE = re.compile(r"(?<!\\)((?:\\\\)*)\|")


class MarkdownRenderer(NodeVisitor, InlineContentMixin, BaseRenderer):
    """Render AST nodes to canonical Markdown text.

    Parameters
    ----------
    options : MarkdownRendererOptions or None, default = None
        Style options. The defaults are the canonical normalizer style.

    Examples
    --------
    Basic usage:

        >>> from mdnormalize.ast import Document, Heading, List, ListItem, Paragraph, Text
        >>> doc = Document(children=[
        ...     Heading(level=1, content=[Text(content="Title")]),
        ...     List(ordered=False, items=[ListItem(children=[Paragraph(content=[Text(content="a")])])]),
        ... ])
        >>> print(MarkdownRenderer().render_to_string(doc), end="")
        # Title
        <BLANKLINE>
        - a

    """

    def __init__(self, options: MarkdownRendererOptions | None = None):
        """Initialize the Markdown renderer with options."""
        BaseRenderer._validate_options_type(options, MarkdownRendererOptions, "markdown")
        options = options or MarkdownRendererOptions()
        BaseRenderer.__init__(self, options)
        self.options: MarkdownRendererOptions = options
        self._output: list[str] = []
        self._next_sibling: Node | None = None
        self._breaks_as_spaces: bool = False
        self._block_followed: bool = False

    def render_to_string(self, document: Document) -> str:
        """Render a document AST to a Markdown string.

        Parameters
        ----------
        document : Document
            The document node to render

        Returns
        -------
        str
            Markdown text. Empty documents render to an empty string; anything
            else ends with exactly one newline unless ``trailing_newline`` is
            disabled.

        """
        self._output = []
        self._next_sibling = None
        self._breaks_as_spaces = False
        self._block_followed = False

        document.accept(self)

        result = "".join(self._output).rstrip()
        self._output = []

        if result and self.options.trailing_newline:
            result += "\n"
        return result

    def render(self, doc: Document, output: Union[str, Path, IO[bytes], IO[str]]) -> None:
        """Render AST to Markdown and write to output.

        Parameters
        ----------
        doc : Document
            AST Document node to render
        output : str, Path, IO[bytes], or IO[str]
            Output destination (file path or file-like object)

        """
        markdown_text = self.render_to_string(doc)
        self.write_text_output(markdown_text, output)

    # Block helpers

    def _render_blocks(self, children: list[Node], tight: bool = False, followed: bool = False) -> str:
        """Render sibling blocks and join them.

        Adjacent lists of the same kind would merge into one list when read
        back, so an empty HTML comment is placed between them.

        Parameters
        ----------
        children : list of Node
            Block nodes to render
        tight : bool, default = False
            Join with a single newline instead of a blank line
        followed : bool, default = False
            Whether more content comes after the last child, separated by a
            blank line

        Returns
        -------
        str
            The joined blocks

        """
        parts: list[str] = []
        previous: Node | None = None

        for i, child in enumerate(children):
            self._block_followed = not tight and (followed or i < len(children) - 1)
            rendered = self._render_inline_content([child])
            if not rendered:
                continue
            if isinstance(previous, List) and isinstance(child, List) and previous.ordered == child.ordered:
                parts.append(LIST_SEPARATOR_COMMENT)
            parts.append(rendered)
            previous = child

        return ("\n" if tight else "\n\n").join(parts)

    @staticmethod
    def _indent_lines(text: str, first_prefix: str, rest_prefix: str) -> str:
        """Prefix the first line with ``first_prefix`` and every other non-empty line with ``rest_prefix``."""
        lines = text.split("\n")
        result = [first_prefix + lines[0]]
        for line in lines[1:]:
            result.append(rest_prefix + line if line else "")
        return "\n".join(result)

    def _escape_line_starts(self, text: str) -> str:
        """Escape characters that would start a block construct at the beginning of a line."""
        if not self.options.escape_special:
            return text

        lines = text.split("\n")
        for i, line in enumerate(lines):
            if _TABLE_DELIMITER_LINE_RE.match(line):
                line = line.replace("-", "\\-", 1)
            for pattern, replacement in _LINE_START_ESCAPES:
                line, count = pattern.subn(replacement, line, count=1)
                if count:
                    break
            lines[i] = line
        return "\n".join(lines)

    # Escaping

    def _escape_markdown(self, text: str) -> str:
        """Escape special Markdown characters in text content.

        Line-start constructs are handled separately by
        :meth:`_escape_line_starts` once a whole paragraph is rendered.

        Notes
        -----
        - Backticks, asterisks and brackets are always escaped.
        - Backslashes are escaped only where they would escape the next
          character, i.e. before ASCII punctuation and at the end of the text.
        - Underscores in the middle of words (``snake_case``) are left alone.
        - ``<`` is escaped when it could open a tag, comment or autolink.
        - ``~`` is escaped when it is part of a run or touches a neighbour node.
        - A trailing ``!`` before a link and a trailing ``&`` that would form
          an entity with the following text are escaped.

        """
        if not self.options.escape_special:
            return text

        following = self._next_sibling
        last = len(text) - 1
        escaped_chars = []

        for i, char in enumerate(text):
            next_char = text[i + 1] if i < last else ""
            if char in "`*[]":
                needs_escape = True
            elif char == "\\":
                needs_escape = not next_char or next_char in _ASCII_PUNCTUATION
            elif char == "_":
                prev_alnum = i > 0 and text[i - 1].isalnum()
                next_alnum = next_char.isalnum()
                needs_escape = not (prev_alnum and next_alnum)
            elif char == "<":
                needs_escape = next_char.isalpha() or next_char in "/!?"
            elif char == "~":
                needs_escape = i == 0 or i == last or text[i - 1] == "~" or next_char == "~"
            elif char == "!":
                needs_escape = i == last and isinstance(following, Link)
            elif char == "&":
                needs_escape = (
                    i == last and isinstance(following, Text) and CHARREF_TAIL_RE.match(following.content) is not None
                )
            else:
                needs_escape = False

            if needs_escape:
                escaped_chars.append("\\")
            escaped_chars.append(char)

        return "".join(escaped_chars)

    @staticmethod
    def _escape_backslashes(text: str) -> str:
        """Escape backslashes that precede ASCII punctuation or end the text."""
        return re.sub(r"\\(?=[!-/:-@\[-`{-~]|$)", r"\\\\", text)

    def _format_destination(self, url: str) -> str:
        if re.search(r"[\s()<>]", url):
            return f"<{url}>"
        return url

    def _format_title(self, title: str | None) -> str:
        if not title:
            return ""
        escaped = self._escape_backslashes(title).replace('"', '\\"')
        return f' "{escaped}"'

    # Block nodes

    def visit_document(self, node: Document) -> None:
        """Render a Document node.

        Front matter comes first, verbatim. Link reference definitions are
        collected at the end of the document.
        """
        parts = []

        frontmatter = node.metadata.get("frontmatter")
        if frontmatter:
            parts.append(frontmatter)

        link_definitions = node.metadata.get("link_definitions") or []

        body = self._render_blocks(node.children, followed=bool(link_definitions))
        if body:
            parts.append(body)

        if link_definitions:
            separator = "\n" if self.options.tight_definitions else "\n\n"
            parts.append(separator.join(self._format_link_definition(*d) for d in link_definitions))

        self._output.append("\n\n".join(parts))

    def _format_link_definition(self, label: str, url: str, title: str | None = None) -> str:
        destination = self._format_destination(url) if url else "<>"
        return f"[{label}]: {destination}{self._format_title(title)}"

    def visit_heading(self, node: Heading) -> None:
        """Render a Heading node in ATX style.

        Soft and hard breaks become spaces. A closing run of ``#`` in the
        content is escaped so it is not read as the optional closing sequence.
        """
        saved_breaks = self._breaks_as_spaces
        self._breaks_as_spaces = True
        content = self._render_inline_content(node.content).strip()
        self._breaks_as_spaces = saved_breaks

        if self.options.escape_special:
            content = _CLOSING_HASHES_RE.sub(r"\1\\\2\3", content, count=1)

        prefix = "#" * node.level
        self._output.append(f"{prefix} {content}" if content else prefix)

    def visit_paragraph(self, node: Paragraph) -> None:
        content = self._render_inline_content(node.content)
        self._output.append(self._escape_line_starts(content))

    def visit_code_block(self, node: CodeBlock) -> None:
        """Render a CodeBlock node as a fenced block.

        The fence is longer than any run of the fence character in the
        content. Info strings containing a backtick force a tilde fence.
        Indented code blocks are rendered fenced without an info string.

        """
        info = node.metadata.get("info_string") or node.language or ""
        fence_char = self.options.code_fence_char
        if fence_char == "`" and "`" in info:
            fence_char = "~"

        runs = [len(match) for match in re.findall(re.escape(fence_char) + "+", node.content)]
        fence_length = max([self.options.code_fence_min] + [run + 1 for run in runs])
        fence = fence_char * fence_length

        content = node.content
        if content and not content.endswith("\n"):
            content += "\n"

        self._output.append(f"{fence}{self._escape_backslashes(info)}\n{content}{fence}")

    def visit_block_quote(self, node: BlockQuote) -> None:
        quoted = self._render_blocks(node.children)
        lines = quoted.split("\n") if quoted else [""]
        self._output.append("\n".join(f"> {line}" if line else ">" for line in lines))

    def visit_list(self, node: List) -> None:
        """Render a List node.

        Items of a tight list are separated by a single newline, items of a
        loose list by a blank line. A tight list that ends in an empty item
        and is followed by a blank line is rendered loose, since that blank
        line makes the list loose when read back.
        """
        tight = node.tight
        if tight and self._block_followed and node.items and self._is_blank_item(node.items[-1]):
            tight = False

        rendered_items = []
        for i, item in enumerate(node.items):
            if node.ordered:
                marker = f"{node.start + i}."
            else:
                marker = self.options.bullet
            rendered_items.append(self._render_list_item(item, marker, tight))

        self._output.append(("\n" if tight else "\n\n").join(rendered_items))

    def _is_blank_item(self, node: ListItem) -> bool:
        return not node.task_status and not self._render_blocks(node.children, tight=True)

    def _list_item_spacing(self, marker: str, tight: bool) -> int:
        """Number of spaces between a list marker and the item content."""
        style = self.options.list_item_indent
        if style == "mixed":
            style = "one" if tight else "tab"
        if style == "tab":
            width = len(marker) + 1
            width = -(-width // LIST_INDENT_TAB_SIZE) * LIST_INDENT_TAB_SIZE
            return width - len(marker)
        return 1

    def _render_list_item(self, node: ListItem, marker: str, tight: bool) -> str:
        """Render one list item behind ``marker``.

        Continuation lines are indented to the content column, which is the
        marker width plus its spacing; the task checkbox does not count.
        The checkbox shares its line only with a leading paragraph; any other
        first block starts on the next line.
        """
        spacing = " " * self._list_item_spacing(marker, tight)

        if node.task_status:
            checkbox = "[x]" if node.task_status == "checked" else "[ ]"
            children = node.children
            head = ""
            if children and isinstance(children[0], Paragraph):
                head = self._render_inline_content([children[0]])
                children = children[1:]
            rest = self._render_blocks(children, tight=tight)

            content = f"{checkbox} {head}" if head else checkbox
            if rest:
                content += ("\n" if tight else "\n\n") + rest
        else:
            content = self._render_blocks(node.children, tight=tight)

        if not content:
            return marker

        return self._indent_lines(content, marker + spacing, " " * (len(marker) + len(spacing)))

    def visit_list_item(self, node: ListItem) -> None:
        """Render a ListItem outside of a list with the configured bullet."""
        self._output.append(self._render_list_item(node, self.options.bullet, tight=True))

    def visit_table(self, node: Table) -> None:
        """Render a Table node as a pipe table.

        Body rows are padded or cut to the header's column count.
        """
        header = node.header
        rows = list(node.rows)
        if header is None:
            if not rows:
                return
            header = rows.pop(0)

        num_cols = len(header.cells)
        if num_cols == 0:
            return

        lines = [self._render_table_row(header, num_cols)]

        alignments = list(node.alignments) + [None] * (num_cols - len(node.alignments))
        delimiters = []
        for alignment in alignments[:num_cols]:
            if alignment == "left":
                delimiters.append(":---")
            elif alignment == "center":
                delimiters.append(":---:")
            elif alignment == "right":
                delimiters.append("---:")
            else:
                delimiters.append("---")
        lines.append("| " + " | ".join(delimiters) + " |")

        for row in rows:
            lines.append(self._render_table_row(row, num_cols))

        self._output.append("\n".join(lines))

    def _render_table_row(self, row: TableRow, num_cols: int) -> str:
        cells = [self._render_inline_content([cell]) for cell in row.cells[:num_cols]]
        cells.extend([""] * (num_cols - len(cells)))
        return "| " + " | ".join(cells) + " |"

    def visit_table_row(self, node: TableRow) -> None:
        self._output.append(self._render_table_row(node, len(node.cells)))

    def visit_table_cell(self, node: TableCell) -> None:
        """Render a TableCell node. Pipes in the content are escaped."""
        saved_breaks = self._breaks_as_spaces
        self._breaks_as_spaces = True
        content = self._render_inline_content(node.content).strip()
        self._breaks_as_spaces = saved_breaks
        self._output.append(_UNESCAPED_PIPE_RE.sub(r"\1\\|", content))

    def visit_thematic_break(self, node: ThematicBreak) -> None:
        self._output.append(self.options.rule * self.options.rule_repetition)

    def visit_html_block(self, node: HTMLBlock) -> None:
        self._output.append(node.content.rstrip("\n"))

    def visit_footnote_definition(self, node: FootnoteDefinition) -> None:
        """Render a FootnoteDefinition node.

        The first block follows the label; later lines are indented by four
        spaces.
        """
        content = self._render_blocks(node.content)
        label = f"[^{node.identifier}]:"
        if not content:
            self._output.append(label)
            return
        self._output.append(self._indent_lines(content, label + " ", "    "))

    def visit_definition_list(self, node: DefinitionList) -> None:
        """Render a DefinitionList node.

        Terms without descriptions are written on consecutive lines, which
        is how several terms share one set of descriptions.
        """
        groups: list[str] = []
        pending_terms: list[str] = []

        for term, descriptions in node.items:
            pending_terms.append(self._render_inline_content([term]))
            if not descriptions:
                continue

            rendered = [self._render_inline_content([description]) for description in descriptions]
            separator = "\n" if self.options.tight_definitions else "\n\n"
            groups.append("\n".join(pending_terms) + separator + separator.join(rendered))
            pending_terms = []

        if pending_terms:
            groups.append("\n".join(pending_terms))

        self._output.append("\n\n".join(groups))

    def visit_definition_term(self, node: DefinitionTerm) -> None:
        content = self._render_inline_content(node.content)
        self._output.append(self._escape_line_starts(content))

    def visit_definition_description(self, node: DefinitionDescription) -> None:
        content = self._render_blocks(node.content)
        self._output.append(self._indent_lines(content, ": ", "    ") if content else ":")

    # Inline nodes

    def visit_text(self, node: Text) -> None:
        self._output.append(self._escape_markdown(node.content))

    def visit_emphasis(self, node: Emphasis) -> None:
        content = self._render_inline_content(node.content)
        symbol = self.options.emphasis_symbol
        self._output.append(f"{symbol}{content}{symbol}")

    def visit_strong(self, node: Strong) -> None:
        content = self._render_inline_content(node.content)
        symbol = self.options.strong_symbol * 2
        self._output.append(f"{symbol}{content}{symbol}")

    def visit_strikethrough(self, node: Strikethrough) -> None:
        content = self._render_inline_content(node.content)
        self._output.append(f"~~{content}~~")

    def visit_code(self, node: Code) -> None:
        """Render a Code node.

        The backtick string is longer than any backtick run in the content.
        Content that starts or ends with a backtick, or is wrapped in spaces,
        is padded with one space on each side.
        """
        content = node.content
        runs = [len(match) for match in re.findall(r"`+", content)]
        delimiter = "`" * (max(runs, default=0) + 1)

        if content.startswith("`") or content.endswith("`"):
            content = f" {content} "
        elif content.startswith(" ") and content.endswith(" ") and content.strip(" "):
            content = f" {content} "

        self._output.append(f"{delimiter}{content}{delimiter}")

    def visit_link(self, node: Link) -> None:
        """Render a Link node.

        Autolinks keep the ``<...>`` form and reference links keep their
        label; everything else is an inline link.
        """
        if node.metadata.get("autolink") and len(node.content) == 1 and isinstance(node.content[0], Text):
            self._output.append(f"<{node.content[0].content}>")
            return

        content = self._render_inline_content(node.content)

        reference = node.metadata.get("reference")
        if reference:
            self._output.append(f"[{content}][{reference}]")
            return

        destination = self._format_destination(node.url)
        title = self._format_title(node.title)
        if not node.url and title:
            destination = "<>"
        self._output.append(f"[{content}]({destination}{title})")

    def visit_image(self, node: Image) -> None:
        saved_sibling = self._next_sibling
        self._next_sibling = None
        alt = self._escape_markdown(node.alt_text)
        self._next_sibling = saved_sibling

        reference = node.metadata.get("reference")
        if reference:
            self._output.append(f"![{alt}][{reference}]")
            return

        destination = self._format_destination(node.url)
        title = self._format_title(node.title)
        if not node.url and title:
            destination = "<>"
        self._output.append(f"![{alt}]({destination}{title})")

    def visit_line_break(self, node: LineBreak) -> None:
        if self._breaks_as_spaces:
            self._output.append(" ")
        elif node.soft:
            self._output.append("\n")
        else:
            self._output.append("\\\n")

    def visit_html_inline(self, node: HTMLInline) -> None:
        self._output.append(node.content)

    def visit_footnote_reference(self, node: FootnoteReference) -> None:
        self._output.append(f"[^{node.identifier}]")
