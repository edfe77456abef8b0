#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for Markdown parsing and rendering.

This module defines the parser switches and the renderer style knobs, plus
the shared canonical instances used by the normalizer.
"""
# src/mdnormalize/options/markdown.py


from __future__ import annotations

from dataclasses import dataclass, field

from mdnormalize.constants import (
    DEFAULT_BULLET,
    DEFAULT_CODE_FENCE_CHAR,
    DEFAULT_CODE_FENCE_MIN,
    DEFAULT_EMPHASIS_SYMBOL,
    DEFAULT_MAX_NESTING_LEVEL,
    DEFAULT_ESCAPE_SPECIAL,
    DEFAULT_LIST_ITEM_INDENT,
    DEFAULT_RULE,
    DEFAULT_RULE_REPETITION,
    DEFAULT_STRONG_SYMBOL,
    DEFAULT_TIGHT_DEFINITIONS,
    DEFAULT_TRAILING_NEWLINE,
    BulletSymbol,
    CodeFenceChar,
    EmphasisSymbol,
    ListItemIndent,
    RuleSymbol,
)
from mdnormalize.options.base import BaseParserOptions, BaseRendererOptions


@dataclass(frozen=True)
class MarkdownParserOptions(BaseParserOptions):
    """Configuration options for Markdown-to-AST parsing.

    Parameters
    ----------
    parse_tables : bool, default True
        Whether to parse table syntax (GFM pipe tables).
    parse_footnotes : bool, default True
        Whether to parse footnote references and definitions.
    parse_task_lists : bool, default True
        Whether to parse task list checkboxes (- [ ] and - [x]).
    parse_definition_lists : bool, default True
        Whether to parse definition lists (term / : definition).
    parse_strikethrough : bool, default True
        Whether to parse strikethrough syntax (~~text~~).
    parse_frontmatter : bool, default True
        Whether to split off a YAML (---) or TOML (+++) front matter block.
    max_nesting_level : int, default 32
        Maximum block nesting depth handed to mistune.

    """

    parse_tables: bool = field(
        default=True,
        metadata={"help": "Parse table syntax (GFM pipe tables)", "importance": "core"},
    )
    parse_footnotes: bool = field(
        default=True,
        metadata={"help": "Parse footnote references and definitions", "importance": "core"},
    )
    parse_task_lists: bool = field(
        default=True,
        metadata={"help": "Parse task list checkboxes (- [ ] and - [x])", "importance": "core"},
    )
    parse_definition_lists: bool = field(
        default=True,
        metadata={"help": "Parse definition lists (term / : definition)", "importance": "core"},
    )
    parse_strikethrough: bool = field(
        default=True,
        metadata={"help": "Parse strikethrough syntax (~~text~~)", "importance": "core"},
    )
    parse_frontmatter: bool = field(
        default=True,
        metadata={"help": "Keep a leading YAML/TOML front matter block verbatim", "importance": "core"},
    )
    max_nesting_level: int = field(
        default=DEFAULT_MAX_NESTING_LEVEL,
        metadata={"help": "Maximum block nesting depth", "type": int, "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate the nesting limit.

        Raises
        ------
        ValueError
            If ``max_nesting_level`` is not positive.

        """
        super().__post_init__()
        if self.max_nesting_level < 1:
            raise ValueError(f"max_nesting_level must be positive, got {self.max_nesting_level}")


@dataclass(frozen=True)
class MarkdownRendererOptions(BaseRendererOptions):
    """Style configuration for AST-to-Markdown rendering.

    The defaults are the canonical style: ``-`` bullets, one space after the
    list marker, tight definitions and ``---`` rules.

    Parameters
    ----------
    bullet : {"-", "*", "+"}, default "-"
        Marker for unordered list items.
    list_item_indent : {"one", "tab", "mixed"}, default "one"
        Spacing after a list marker. "one" uses a single space, "tab" pads
        the marker to the next multiple of four columns, and "mixed" uses
        "tab" for loose lists and "one" for tight ones. Continuation lines are
        indented by the resulting marker width.
    tight_definitions : bool, default True
        Render definition descriptions directly under their term and link
        reference definitions on consecutive lines.
    rule : {"-", "*", "_"}, default "-"
        Character used for thematic breaks.
    rule_repetition : int, default 3
        How many times the rule character is repeated.
    emphasis_symbol : {"*", "_"}, default "*"
        Delimiter for emphasis.
    strong_symbol : {"*", "_"}, default "*"
        Delimiter character for strong emphasis (doubled).
    code_fence_char : {"`", "~"}, default "`"
        Fence character for code blocks. A tilde fence is used regardless
        when the info string contains a backtick.
    code_fence_min : int, default 3
        Minimum fence length.
    escape_special : bool, default True
        Escape characters in text that would otherwise be read as Markdown.
    trailing_newline : bool, default True
        End non-empty output with exactly one newline.

    """

    bullet: BulletSymbol = field(
        default=DEFAULT_BULLET,
        metadata={"help": "Bullet marker for unordered lists", "choices": ["-", "*", "+"], "importance": "core"},
    )
    list_item_indent: ListItemIndent = field(
        default=DEFAULT_LIST_ITEM_INDENT,
        metadata={
            "help": "Spacing after list markers: one space, tab stop, or mixed",
            "choices": ["one", "tab", "mixed"],
            "importance": "core",
        },
    )
    tight_definitions: bool = field(
        default=DEFAULT_TIGHT_DEFINITIONS,
        metadata={"help": "Render definitions without blank lines", "importance": "core"},
    )
    rule: RuleSymbol = field(
        default=DEFAULT_RULE,
        metadata={"help": "Character used for thematic breaks", "choices": ["-", "*", "_"], "importance": "core"},
    )
    rule_repetition: int = field(
        default=DEFAULT_RULE_REPETITION,
        metadata={"help": "Number of rule characters in a thematic break", "type": int, "importance": "advanced"},
    )
    emphasis_symbol: EmphasisSymbol = field(
        default=DEFAULT_EMPHASIS_SYMBOL,
        metadata={"help": "Symbol to use for emphasis/italic formatting", "choices": ["*", "_"], "importance": "core"},
    )
    strong_symbol: EmphasisSymbol = field(
        default=DEFAULT_STRONG_SYMBOL,
        metadata={"help": "Symbol to use for strong/bold formatting", "choices": ["*", "_"], "importance": "core"},
    )
    code_fence_char: CodeFenceChar = field(
        default=DEFAULT_CODE_FENCE_CHAR,
        metadata={"help": "Character used for code fences", "choices": ["`", "~"], "importance": "advanced"},
    )
    code_fence_min: int = field(
        default=DEFAULT_CODE_FENCE_MIN,
        metadata={"help": "Minimum length for code fences (typically 3)", "type": int, "importance": "advanced"},
    )
    escape_special: bool = field(
        default=DEFAULT_ESCAPE_SPECIAL,
        metadata={"help": "Escape special Markdown characters in text content", "importance": "advanced"},
    )
    trailing_newline: bool = field(
        default=DEFAULT_TRAILING_NEWLINE,
        metadata={"help": "End output with a single newline", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate style values.

        Raises
        ------
        ValueError
            If any field value is outside its valid range.

        """
        super().__post_init__()

        if self.bullet not in ("-", "*", "+"):
            raise ValueError(f"bullet must be one of '-', '*', '+', got {self.bullet!r}")
        if self.list_item_indent not in ("one", "tab", "mixed"):
            raise ValueError(f"list_item_indent must be 'one', 'tab' or 'mixed', got {self.list_item_indent!r}")
        if self.rule not in ("-", "*", "_"):
            raise ValueError(f"rule must be one of '-', '*', '_', got {self.rule!r}")
        if self.rule_repetition < 3:
            raise ValueError(f"rule_repetition must be at least 3, got {self.rule_repetition}")
        if self.emphasis_symbol not in ("*", "_"):
            raise ValueError(f"emphasis_symbol must be '*' or '_', got {self.emphasis_symbol!r}")
        if self.strong_symbol not in ("*", "_"):
            raise ValueError(f"strong_symbol must be '*' or '_', got {self.strong_symbol!r}")
        if self.code_fence_char not in ("`", "~"):
            raise ValueError(f"code_fence_char must be '`' or '~', got {self.code_fence_char!r}")
        if self.code_fence_min < 3:
            raise ValueError(f"code_fence_min must be at least 3, got {self.code_fence_min}")


# Shared by the outer and nested passes
CANONICAL_STYLE = MarkdownRendererOptions()
CANONICAL_PARSER_OPTIONS = MarkdownParserOptions()
