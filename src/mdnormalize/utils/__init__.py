#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Utility helpers for mdnormalize."""

from mdnormalize.utils.encoding import decode_markdown_bytes, detect_encoding
from mdnormalize.utils.io_utils import read_markdown_file, write_content, write_markdown_file

__all__ = ["decode_markdown_bytes", "detect_encoding", "read_markdown_file", "write_content", "write_markdown_file"]
