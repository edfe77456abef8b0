#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdnormalize/ast/__init__.py
"""Abstract Syntax Tree for Markdown documents.

The parser produces a :class:`Document` tree, the nested-Markdown formatter
rewrites code blocks inside it, and the renderer turns it back into text.

"""

from mdnormalize.ast.nodes import (
    Alignment,
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
    get_node_children,
)
from mdnormalize.ast.transforms import NodeCollector, extract_nodes
from mdnormalize.ast.visitors import NodeVisitor

__all__ = [
    # Base classes
    "Node",
    "SourceLocation",
    "Alignment",
    # Block nodes
    "Document",
    "Heading",
    "Paragraph",
    "CodeBlock",
    "BlockQuote",
    "List",
    "ListItem",
    "Table",
    "TableRow",
    "TableCell",
    "ThematicBreak",
    "HTMLBlock",
    "FootnoteDefinition",
    "DefinitionList",
    "DefinitionTerm",
    "DefinitionDescription",
    # Inline nodes
    "Text",
    "Emphasis",
    "Strong",
    "Strikethrough",
    "Code",
    "Link",
    "Image",
    "LineBreak",
    "HTMLInline",
    "FootnoteReference",
    # Traversal
    "NodeVisitor",
    "NodeCollector",
    "extract_nodes",
    "get_node_children",
]
