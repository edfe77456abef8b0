#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdnormalize/constants.py
"""Constants and default values for mdnormalize.

This module centralizes the canonical style defaults shared by the renderer
options, the nested-Markdown detection rules, and the CLI configuration
discovery settings.

"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Canonical style defaults
# =============================================================================

BulletSymbol = Literal["-", "*", "+"]
ListItemIndent = Literal["one", "tab", "mixed"]
RuleSymbol = Literal["-", "*", "_"]
EmphasisSymbol = Literal["*", "_"]
CodeFenceChar = Literal["`", "~"]

DEFAULT_BULLET: BulletSymbol = "-"
DEFAULT_LIST_ITEM_INDENT: ListItemIndent = "one"
DEFAULT_TIGHT_DEFINITIONS = True
DEFAULT_RULE: RuleSymbol = "-"
DEFAULT_RULE_REPETITION = 3
DEFAULT_EMPHASIS_SYMBOL: EmphasisSymbol = "*"
DEFAULT_STRONG_SYMBOL: EmphasisSymbol = "*"
DEFAULT_CODE_FENCE_CHAR: CodeFenceChar = "`"
DEFAULT_CODE_FENCE_MIN = 3
DEFAULT_ESCAPE_SPECIAL = True
DEFAULT_TRAILING_NEWLINE = True

# Tab stop used by the "tab" list item indent mode
LIST_INDENT_TAB_SIZE = 4

# Marker inserted between two adjacent lists that would otherwise merge
LIST_SEPARATOR_COMMENT = "<!-- -->"

# =============================================================================
# Nested Markdown detection
# =============================================================================

NESTED_MARKDOWN_LANGUAGES: tuple[str, ...] = ("markdown", "md")

NESTED_FAILURE_MESSAGE = "Failed to process nested markdown"
UNKNOWN_ERROR_MESSAGE = "Unknown error"

# Block nesting depth handed to mistune; deeper lists and quotes become paragraphs
DEFAULT_MAX_NESTING_LEVEL = 32

# =============================================================================
# Front matter delimiters
# =============================================================================

FrontmatterFormat = Literal["yaml", "toml"]

FRONTMATTER_DELIMITERS: dict[str, FrontmatterFormat] = {
    "---": "yaml",
    "+++": "toml",
}

# =============================================================================
# CLI
# =============================================================================

EXIT_SUCCESS = 0
EXIT_ERROR = 1

CONFIG_ENV_VAR = "MDNORMALIZE_CONFIG"
CONFIG_FILENAMES = [".mdnormalize.toml", ".mdnormalize.yaml", ".mdnormalize.yml", ".mdnormalize.json"]
PYPROJECT_TOOL_SECTION = "mdnormalize"

DEFAULT_LOG_LEVEL = "WARNING"
LOG_LEVEL_CHOICES = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
