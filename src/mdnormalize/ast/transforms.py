#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdnormalize/ast/transforms.py
"""AST traversal utilities.

Examples
--------
Extract every code block from a document:

    >>> from mdnormalize.ast import transforms
    >>> blocks = transforms.extract_nodes(doc, CodeBlock)
    >>> [block.language for block in blocks]
    ['python', 'markdown']

"""

from __future__ import annotations

from typing import Callable, Type

from mdnormalize.ast.nodes import Document, Node, get_node_children
from mdnormalize.ast.visitors import NodeVisitor


class NodeCollector(NodeVisitor):
    """Visitor that collects nodes matching a condition in document order.

    Parameters
    ----------
    predicate : callable or None, default = None
        Function that takes a node and returns True to collect it

    """

    def __init__(self, predicate: Callable[[Node], bool] | None = None):
        """Initialize the collector with an optional predicate function."""
        self.predicate = predicate or (lambda n: True)
        self.collected: list[Node] = []

    def _collect_if_match(self, node: Node) -> None:
        if self.predicate(node):
            self.collected.append(node)

    def _visit_children(self, children: list[Node]) -> None:
        for child in children:
            child.accept(self)

    def generic_visit(self, node: Node) -> None:
        """Collect ``node`` if it matches, then descend into its children."""
        self._collect_if_match(node)
        self._visit_children(get_node_children(node))

    # Every node type traverses the same way: parent before children
    visit_document = generic_visit
    visit_heading = generic_visit
    visit_paragraph = generic_visit
    visit_code_block = generic_visit
    visit_block_quote = generic_visit
    visit_list = generic_visit
    visit_list_item = generic_visit
    visit_table = generic_visit
    visit_table_row = generic_visit
    visit_table_cell = generic_visit
    visit_thematic_break = generic_visit
    visit_html_block = generic_visit
    visit_footnote_definition = generic_visit
    visit_definition_list = generic_visit
    visit_definition_term = generic_visit
    visit_definition_description = generic_visit
    visit_text = generic_visit
    visit_emphasis = generic_visit
    visit_strong = generic_visit
    visit_strikethrough = generic_visit
    visit_code = generic_visit
    visit_link = generic_visit
    visit_image = generic_visit
    visit_line_break = generic_visit
    visit_html_inline = generic_visit
    visit_footnote_reference = generic_visit


def extract_nodes(doc: Document, node_type: Type[Node] | None = None) -> list[Node]:
    """Extract all nodes of a specific type from a document.

    Parameters
    ----------
    doc : Document
        Document to extract from
    node_type : type or None, default = None
        Node type to extract (None for all nodes)

    Returns
    -------
    list of Node
        All matching nodes, in document order. The returned nodes are the
        live nodes of ``doc``, so mutating them mutates the document.

    """
    predicate = (lambda n: isinstance(n, node_type)) if node_type else (lambda n: True)
    collector = NodeCollector(predicate=predicate)
    doc.accept(collector)
    return collector.collected
