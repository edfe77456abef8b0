#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Renderers that turn the mdnormalize AST back into text."""

from mdnormalize.renderers.base import BaseRenderer, InlineContentMixin
from mdnormalize.renderers.markdown import MarkdownRenderer

__all__ = ["BaseRenderer", "InlineContentMixin", "MarkdownRenderer"]
