#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_markdown_renderer.py
"""Unit tests for MarkdownRenderer.

Tests cover:
- Rendering all node types to canonical Markdown
- Style options (bullets, list item indent, rules, definitions)
- Escaping of text that would otherwise be read as Markdown
- Output to strings, paths and streams

"""

from io import BytesIO, StringIO

import pytest

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
    Paragraph,
    Strikethrough,
    Strong,
    Table,
    TableCell,
    TableRow,
    Text,
    ThematicBreak,
)
from mdnormalize.exceptions import InvalidOptionsError
from mdnormalize.options import MarkdownParserOptions, MarkdownRendererOptions
from mdnormalize.renderers.markdown import MarkdownRenderer


def _render(*children, options=None, metadata=None):
    doc = Document(children=list(children), metadata=metadata or {})
    return MarkdownRenderer(options).render_to_string(doc)


def _para(text):
    return Paragraph(content=[Text(content=text)])


def _item(text, **kwargs):
    return ListItem(children=[_para(text)], **kwargs)


@pytest.mark.unit
class TestBlockRendering:
    """Test rendering of block-level nodes."""

    def test_empty_document(self):
        """Test an empty document renders to an empty string."""
        assert _render() == ""

    @pytest.mark.parametrize("level", [1, 2, 3, 4, 5, 6])
    def test_heading_levels(self, level):
        """Test ATX headings of every level."""
        assert _render(Heading(level=level, content=[Text(content="Title")])) == "#" * level + " Title\n"

    def test_heading_line_break_becomes_space(self):
        """Test breaks inside a heading are written as spaces."""
        heading = Heading(level=1, content=[Text(content="a"), LineBreak(soft=True), Text(content="b")])
        assert _render(heading) == "# a b\n"

    def test_heading_closing_hashes_escaped(self):
        """Test a trailing run of hashes is not read as a closing sequence."""
        assert _render(Heading(level=2, content=[Text(content="Issue #")])) == "## Issue \\#\n"

    def test_blocks_separated_by_blank_line(self):
        """Test sibling blocks are joined with one blank line."""
        assert _render(_para("one"), _para("two")) == "one\n\ntwo\n"

    def test_thematic_break(self):
        """Test the canonical rule is three dashes."""
        assert _render(_para("a"), ThematicBreak(), _para("b")) == "a\n\n---\n\nb\n"

    def test_rule_options(self):
        """Test the rule character and repetition are configurable."""
        options = MarkdownRendererOptions(rule="*", rule_repetition=5)
        assert _render(ThematicBreak(), options=options) == "*****\n"

    def test_fenced_code_block(self):
        """Test code blocks are fenced with the language tag."""
        block = CodeBlock(content="x = 1\n", language="python")
        assert _render(block) == "```python\nx = 1\n```\n"

    def test_code_block_without_trailing_newline(self):
        """Test the closing fence goes on its own line."""
        assert _render(CodeBlock(content="- a", language="md")) == "```md\n- a\n```\n"

    def test_code_fence_longer_than_content_runs(self):
        """Test the fence outgrows backtick runs in the content."""
        block = CodeBlock(content="```\ninner\n```\n", language="md")
        assert _render(block) == "````md\n```\ninner\n```\n````\n"

    def test_info_string_with_backtick_uses_tildes(self):
        """Test a backtick in the info string forces a tilde fence."""
        block = CodeBlock(content="x\n", language="a`b", metadata={"info_string": "a`b"})
        assert _render(block) == "~~~a`b\nx\n~~~\n"

    def test_full_info_string_preferred(self):
        """Test the whole info string is written, not only the language."""
        block = CodeBlock(content="x\n", language="md", metadata={"info_string": "md title=x"})
        assert _render(block) == "```md title=x\nx\n```\n"

    def test_indented_code_rendered_fenced(self):
        """Test indented code blocks become fenced blocks."""
        block = CodeBlock(content="code\n", metadata={"indented": True})
        assert _render(block) == "```\ncode\n```\n"

    def test_block_quote(self):
        """Test every quoted line gets a prefix, blank lines a bare marker."""
        quote = BlockQuote(children=[_para("one"), _para("two")])
        assert _render(quote) == "> one\n>\n> two\n"

    def test_html_block(self):
        """Test HTML blocks are written verbatim."""
        assert _render(HTMLBlock(content="<div>\nhi\n</div>\n")) == "<div>\nhi\n</div>\n"

    def test_frontmatter_first(self):
        """Test front matter is written before the body."""
        result = _render(_para("Body"), metadata={"frontmatter": "---\ntitle: x\n---"})
        assert result == "---\ntitle: x\n---\n\nBody\n"

    def test_link_definitions_last(self):
        """Test link reference definitions are written at the end."""
        link = Link(url="http://a.example", content=[Text(content="a")], metadata={"reference": "a"})
        result = _render(
            Paragraph(content=[link]),
            metadata={"link_definitions": [("a", "http://a.example", None), ("b", "/b", "Bee")]},
        )
        assert result == '[a][a]\n\n[a]: http://a.example\n[b]: /b "Bee"\n'

    def test_footnote_definition(self):
        """Test continuation blocks of a footnote are indented four spaces."""
        note = FootnoteDefinition(identifier="1", content=[_para("first"), _para("second")])
        assert _render(note) == "[^1]: first\n\n    second\n"


@pytest.mark.unit
class TestListRendering:
    """Test rendering of lists and list item spacing."""

    def test_tight_bullet_list(self):
        """Test tight lists use ``-`` and one space."""
        lst = List(ordered=False, items=[_item("a"), _item("b")])
        assert _render(lst) == "- a\n- b\n"

    def test_loose_list(self):
        """Test loose lists separate items by blank lines."""
        lst = List(ordered=False, items=[_item("a"), _item("b")], tight=False)
        assert _render(lst) == "- a\n\n- b\n"

    def test_ordered_list_start(self):
        """Test ordered lists count from their start number."""
        lst = List(ordered=True, start=3, items=[_item("a"), _item("b")])
        assert _render(lst) == "3. a\n4. b\n"

    def test_nested_list(self):
        """Test nested lists are indented to the parent content column."""
        inner = List(ordered=False, items=[_item("b")])
        outer = List(ordered=False, items=[ListItem(children=[_para("a"), inner])])
        assert _render(outer) == "- a\n  - b\n"

    def test_nested_list_under_ordered(self):
        """Test continuation indent follows the ordered marker width."""
        inner = List(ordered=False, items=[_item("b")])
        outer = List(ordered=True, items=[ListItem(children=[_para("a"), inner])])
        assert _render(outer) == "1. a\n   - b\n"

    def test_task_items(self):
        """Test task list checkboxes."""
        lst = List(
            ordered=False,
            items=[_item("done", task_status="checked"), _item("todo", task_status="unchecked")],
        )
        assert _render(lst) == "- [x] done\n- [ ] todo\n"

    def test_empty_item(self):
        """Test an item without content is just its marker."""
        lst = List(ordered=False, items=[ListItem(children=[]), _item("b")])
        assert _render(lst) == "-\n- b\n"

    def test_task_item_without_text_before_nested_list(self):
        """Test the checkbox sits alone when the item starts with a list."""
        inner = List(ordered=False, items=[_item("sub")])
        lst = List(ordered=False, items=[ListItem(children=[inner], task_status="unchecked")])
        assert _render(lst) == "- [ ]\n  - sub\n"

    def test_task_item_with_empty_paragraph_before_code(self):
        """Test an empty leading paragraph leaves the checkbox on its own line."""
        item = ListItem(
            children=[Paragraph(content=[]), CodeBlock(content="- a", language="md")],
            task_status="checked",
        )
        assert _render(List(ordered=False, items=[item])) == "- [x]\n  ```md\n  - a\n  ```\n"

    def test_loose_task_item_blocks(self):
        """Test blocks after the checkbox line keep the loose spacing."""
        inner = List(ordered=False, items=[_item("sub")])
        lst = List(ordered=False, items=[ListItem(children=[inner], task_status="unchecked")], tight=False)
        assert _render(lst) == "- [ ]\n\n  - sub\n"

    def test_task_item_text_and_nested_list(self):
        """Test the checkbox shares its line with a leading paragraph."""
        inner = List(ordered=False, items=[_item("sub")])
        lst = List(ordered=False, items=[ListItem(children=[_para("todo"), inner], task_status="unchecked")])
        assert _render(lst) == "- [ ] todo\n  - sub\n"

    def test_trailing_empty_item_followed_by_block(self):
        """Test a tight list ending in an empty item is loosened before another block."""
        lst = List(ordered=False, items=[_item("b"), ListItem(children=[])])
        heading = Heading(level=1, content=[Text(content="h")])
        assert _render(lst, heading) == "- b\n\n-\n\n# h\n"

    def test_trailing_empty_item_at_end(self):
        """Test a tight list ending in an empty item stays tight at the end of the document."""
        lst = List(ordered=False, items=[_item("b"), ListItem(children=[])])
        assert _render(lst) == "- b\n-\n"

    def test_trailing_empty_item_before_link_definitions(self):
        """Test link definitions after the body count as a following block."""
        lst = List(ordered=False, items=[_item("b"), ListItem(children=[])])
        metadata = {"link_definitions": [("x", "https://example.com", None)]}
        assert _render(lst, metadata=metadata) == "- b\n\n-\n\n[x]: https://example.com\n"

    def test_adjacent_lists_get_separator(self):
        """Test two lists of the same kind are kept apart."""
        first = List(ordered=False, items=[_item("a")])
        second = List(ordered=False, items=[_item("b")])
        assert _render(first, second) == "- a\n\n<!-- -->\n\n- b\n"

    def test_adjacent_lists_of_different_kinds(self):
        """Test a bullet list followed by an ordered list needs no separator."""
        first = List(ordered=False, items=[_item("a")])
        second = List(ordered=True, items=[_item("b")])
        assert _render(first, second) == "- a\n\n1. b\n"

    @pytest.mark.parametrize("bullet", ["*", "+"])
    def test_bullet_option(self, bullet):
        """Test the bullet marker is configurable."""
        lst = List(ordered=False, items=[_item("a")])
        assert _render(lst, options=MarkdownRendererOptions(bullet=bullet)) == f"{bullet} a\n"

    def test_tab_indent(self):
        """Test tab mode pads markers to the next four-column stop."""
        options = MarkdownRendererOptions(list_item_indent="tab")
        inner = List(ordered=False, items=[_item("b")])
        bullets = List(ordered=False, items=[ListItem(children=[_para("a"), inner])])
        ordered = List(ordered=True, items=[_item("c")])

        assert _render(bullets, options=options) == "-   a\n    -   b\n"
        assert _render(ordered, options=options) == "1.  c\n"

    def test_mixed_indent(self):
        """Test mixed mode uses one space for tight lists and tab stops for loose ones."""
        options = MarkdownRendererOptions(list_item_indent="mixed")
        tight = List(ordered=False, items=[_item("a")])
        loose = List(ordered=False, items=[_item("a"), _item("b")], tight=False)

        assert _render(tight, options=options) == "- a\n"
        assert _render(loose, options=options) == "-   a\n\n-   b\n"


@pytest.mark.unit
class TestTableRendering:
    """Test rendering of pipe tables."""

    def _cell(self, text):
        return TableCell(content=[Text(content=text)])

    def test_alignments(self):
        """Test delimiter rows reflect column alignment."""
        table = Table(
            header=TableRow(cells=[self._cell(c) for c in "abcd"], is_header=True),
            rows=[TableRow(cells=[self._cell(c) for c in "1234"])],
            alignments=["left", "right", "center", None],
        )
        assert _render(table) == "| a | b | c | d |\n| :--- | ---: | :---: | --- |\n| 1 | 2 | 3 | 4 |\n"

    def test_pipes_in_cells_escaped(self):
        """Test a pipe inside a cell does not split the column."""
        table = Table(header=TableRow(cells=[self._cell("a|b")], is_header=True), alignments=[None])
        assert _render(table) == "| a\\|b |\n| --- |\n"

    def test_short_rows_padded(self):
        """Test body rows are padded to the header width."""
        table = Table(
            header=TableRow(cells=[self._cell("a"), self._cell("b")], is_header=True),
            rows=[TableRow(cells=[self._cell("1")])],
        )
        assert _render(table) == "| a | b |\n| --- | --- |\n| 1 |  |\n"


@pytest.mark.unit
class TestDefinitionListRendering:
    """Test rendering of definition lists."""

    def _definition_list(self):
        return DefinitionList(
            items=[
                (
                    DefinitionTerm(content=[Text(content="Term")]),
                    [DefinitionDescription(content=[_para("Definition")])],
                )
            ]
        )

    def test_tight_definitions(self):
        """Test descriptions follow their term directly."""
        assert _render(self._definition_list()) == "Term\n: Definition\n"

    def test_loose_definitions(self):
        """Test the loose style puts a blank line after the term."""
        options = MarkdownRendererOptions(tight_definitions=False)
        assert _render(self._definition_list(), options=options) == "Term\n\n: Definition\n"

    def test_terms_sharing_descriptions(self):
        """Test consecutive terms are written on consecutive lines."""
        dl = DefinitionList(
            items=[
                (DefinitionTerm(content=[Text(content="One")]), []),
                (
                    DefinitionTerm(content=[Text(content="Two")]),
                    [DefinitionDescription(content=[_para("Shared")])],
                ),
            ]
        )
        assert _render(dl) == "One\nTwo\n: Shared\n"


@pytest.mark.unit
class TestInlineRendering:
    """Test rendering of inline nodes."""

    def test_emphasis_and_strong(self):
        """Test emphasis and strong use asterisks by default."""
        paragraph = Paragraph(
            content=[Emphasis(content=[Text(content="em")]), Text(content=" "), Strong(content=[Text(content="st")])]
        )
        assert _render(paragraph) == "*em* **st**\n"

    def test_underscore_emphasis_option(self):
        """Test the emphasis symbols are configurable."""
        options = MarkdownRendererOptions(emphasis_symbol="_", strong_symbol="_")
        paragraph = Paragraph(
            content=[Emphasis(content=[Text(content="em")]), Text(content=" "), Strong(content=[Text(content="st")])]
        )
        assert _render(paragraph, options=options) == "_em_ __st__\n"

    def test_strikethrough(self):
        """Test strikethrough uses double tildes."""
        assert _render(Paragraph(content=[Strikethrough(content=[Text(content="x")])])) == "~~x~~\n"

    @pytest.mark.parametrize(
        "content,expected",
        [
            ("code", "`code`"),
            ("a`b", "``a`b``"),
            ("`tick", "`` `tick ``"),
            (" padded ", "`  padded  `"),
        ],
    )
    def test_code_span(self, content, expected):
        """Test code span delimiters and padding."""
        assert _render(Paragraph(content=[Code(content=content)])) == expected + "\n"

    def test_inline_link(self):
        """Test inline links with a title."""
        link = Link(url="http://example.com", title="Title", content=[Text(content="text")])
        assert _render(Paragraph(content=[link])) == '[text](http://example.com "Title")\n'

    def test_link_destination_with_spaces(self):
        """Test destinations with spaces are wrapped in angle brackets."""
        link = Link(url="a b", content=[Text(content="text")])
        assert _render(Paragraph(content=[link])) == "[text](<a b>)\n"

    def test_autolink(self):
        """Test autolinks keep the angle-bracket form."""
        link = Link(url="https://example.com", content=[Text(content="https://example.com")], metadata={"autolink": True})
        assert _render(Paragraph(content=[link])) == "<https://example.com>\n"

    def test_image(self):
        """Test images with alt text and title."""
        image = Image(url="pic.png", alt_text="alt", title="T")
        assert _render(Paragraph(content=[image])) == '![alt](pic.png "T")\n'

    def test_hard_and_soft_breaks(self):
        """Test hard breaks use a backslash, soft breaks a plain newline."""
        paragraph = Paragraph(
            content=[
                Text(content="one"),
                LineBreak(soft=False),
                Text(content="two"),
                LineBreak(soft=True),
                Text(content="three"),
            ]
        )
        assert _render(paragraph) == "one\\\ntwo\nthree\n"

    def test_inline_html_verbatim(self):
        """Test inline HTML is not escaped."""
        paragraph = Paragraph(content=[Text(content="a "), HTMLInline(content="<b>"), Text(content="x")])
        assert _render(paragraph) == "a <b>x\n"

    def test_footnote_reference(self):
        """Test footnote references."""
        paragraph = Paragraph(content=[Text(content="Text"), FootnoteReference(identifier="note")])
        assert _render(paragraph) == "Text[^note]\n"


@pytest.mark.unit
class TestEscaping:
    """Test escaping of text that would otherwise become Markdown."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("a * b", "a \\* b"),
            ("[not a link]", "\\[not a link\\]"),
            ("use `ticks`", "use \\`ticks\\`"),
            ("snake_case_name", "snake_case_name"),
            ("_leading", "\\_leading"),
            ("a <div> tag", "a \\<div> tag"),
            ("1 < 2", "1 < 2"),
            ("path\\to", "path\\to"),
            ("ends with \\", "ends with \\\\"),
            ("~~x~~", "\\~\\~x\\~\\~"),
            ("a ~ b", "a ~ b"),
        ],
    )
    def test_inline_escapes(self, text, expected):
        """Test inline special characters."""
        assert _render(_para(text)) == expected + "\n"

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("# not a heading", "\\# not a heading"),
            ("> not a quote", "\\> not a quote"),
            ("- not a list", "\\- not a list"),
            ("+ not a list", "\\+ not a list"),
            ("1. not a list", "1\\. not a list"),
            ("2) not a list", "2\\) not a list"),
            (": not a definition", "\\: not a definition"),
            ("C# is fine", "C# is fine"),
            ("-- dashes", "-- dashes"),
        ],
    )
    def test_line_start_escapes(self, text, expected):
        """Test constructs that only matter at the start of a line."""
        assert _render(_para(text)) == expected + "\n"

    def test_setext_underline_escaped(self):
        """Test a soft-broken line of ``=`` does not become a heading underline."""
        paragraph = Paragraph(content=[Text(content="Title"), LineBreak(soft=True), Text(content="===")])
        assert _render(paragraph) == "Title\n\\===\n"

    def test_bang_before_link_escaped(self):
        """Test a ``!`` right before a link does not make it an image."""
        paragraph = Paragraph(content=[Text(content="Wow!"), Link(url="/x", content=[Text(content="x")])])
        assert _render(paragraph) == "Wow\\![x](/x)\n"

    def test_escaping_can_be_disabled(self):
        """Test escape_special=False writes text as-is."""
        options = MarkdownRendererOptions(escape_special=False)
        assert _render(_para("# a * b"), options=options) == "# a * b\n"


@pytest.mark.unit
class TestRendererInterface:
    """Test the renderer's public interface."""

    def test_wrong_options_type(self):
        """Test parser options are rejected by the renderer."""
        with pytest.raises(InvalidOptionsError):
            MarkdownRenderer(MarkdownParserOptions())

    def test_no_trailing_newline_option(self):
        """Test trailing_newline=False leaves the output unterminated."""
        options = MarkdownRendererOptions(trailing_newline=False)
        assert _render(_para("text"), options=options) == "text"

    def test_render_to_text_stream(self):
        """Test rendering into a text stream."""
        buffer = StringIO()
        MarkdownRenderer().render(Document(children=[_para("text")]), buffer)
        assert buffer.getvalue() == "text\n"

    def test_render_to_binary_stream(self):
        """Test rendering into a binary stream encodes UTF-8."""
        buffer = BytesIO()
        MarkdownRenderer().render(Document(children=[_para("caf\u00e9")]), buffer)
        assert buffer.getvalue() == "caf\u00e9\n".encode("utf-8")

    def test_render_to_path(self, tmp_path):
        """Test rendering into a file path."""
        target = tmp_path / "out.md"
        MarkdownRenderer().render(Document(children=[_para("text")]), target)
        assert target.read_text(encoding="utf-8") == "text\n"

    def test_renderer_is_reusable(self):
        """Test one renderer instance gives independent results."""
        renderer = MarkdownRenderer()
        assert renderer.render_to_string(Document(children=[_para("one")])) == "one\n"
        assert renderer.render_to_string(Document(children=[_para("two")])) == "two\n"
