#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdnormalize/renderers/base.py
"""Base classes for AST renderers.

This module defines the abstract base class that renderers inherit from and
the mixin text renderers use to render inline content to a string.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, Union

from mdnormalize.ast import Document
from mdnormalize.ast.nodes import Node
from mdnormalize.exceptions import InvalidOptionsError
from mdnormalize.options.base import BaseRendererOptions
from mdnormalize.utils.io_utils import write_content


class BaseRenderer(ABC):
    """Abstract base class for AST renderers.

    Parameters
    ----------
    options : BaseRendererOptions or None, default = None
        Format-specific rendering options

    Examples
    --------
    Creating a custom renderer:

        >>> class ShoutingRenderer(BaseRenderer):
        ...     def render(self, doc, output):
        ...         self.write_text_output(self.render_to_string(doc), output)
        ...
        ...     def render_to_string(self, doc):
        ...         return "HELLO"

    """

    def __init__(self, options: BaseRendererOptions | None = None):
        """Initialize the renderer with optional configuration."""
        self.options = options

    @abstractmethod
    def render(self, doc: Document, output: Union[str, Path, IO[bytes], IO[str]]) -> None:
        """Render the AST to a file or stream.

        Parameters
        ----------
        doc : Document
            AST Document node to render
        output : str, Path, IO[bytes], or IO[str]
            Output destination

        Raises
        ------
        RenderingError
            If rendering fails
        OSError
            If output cannot be written

        """
        pass

    def render_to_string(self, doc: Document) -> str:
        """Render the AST to a string.

        Raises
        ------
        NotImplementedError
            If the renderer does not support string output

        """
        raise NotImplementedError(f"{self.__class__.__name__} does not support rendering to a string.")

    @staticmethod
    def _validate_options_type(options: BaseRendererOptions | None, expected_type: type, renderer_name: str) -> None:
        """Validate that options are of the correct type for this renderer.

        Parameters
        ----------
        options : BaseRendererOptions or None
            The options object to validate
        expected_type : type
            The expected options class type
        renderer_name : str
            Name of the renderer (for error messages)

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                component_name=renderer_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    @staticmethod
    def write_text_output(text: str, output: Union[str, Path, IO[bytes], IO[str]]) -> None:
        """Write text output to a file or stream.

        Examples
        --------
        >>> from io import StringIO
        >>> buffer = StringIO()
        >>> BaseRenderer.write_text_output("# Hello\\n", buffer)
        >>> buffer.getvalue()
        '# Hello\\n'

        """
        write_content(text, output)


class InlineContentMixin:
    """Mixin providing inline content rendering for text-based renderers.

    The implementing class must have an ``_output`` list that its visitor
    methods append to. While a node is rendered, ``_next_sibling`` holds the
    node that follows it (or None) so escaping can look one node ahead.

    Examples
    --------
    Using the mixin in a renderer:

        >>> class MyRenderer(NodeVisitor, InlineContentMixin, BaseRenderer):
        ...     def __init__(self, options=None):
        ...         BaseRenderer.__init__(self, options)
        ...         self._output = []
        ...
        ...     def visit_emphasis(self, node):
        ...         content = self._render_inline_content(node.content)
        ...         self._output.append(f"*{content}*")

    """

    _output: list[str]
    _next_sibling: Node | None = None

    def _render_inline_content(self, content: list[Node]) -> str:
        """Render a list of nodes to text without touching the current output.

        Parameters
        ----------
        content : list of Node
            Nodes to render

        Returns
        -------
        str
            Rendered content

        """
        saved_output = self._output
        saved_sibling = self._next_sibling
        self._output = []

        for i, node in enumerate(content):
            self._next_sibling = content[i + 1] if i + 1 < len(content) else None
            node.accept(self)

        result = "".join(self._output)
        self._output = saved_output
        self._next_sibling = saved_sibling
        return result
