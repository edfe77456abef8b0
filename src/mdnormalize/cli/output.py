"""Utility functions for cli output."""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/mdnormalize/cli/output.py
import argparse
import sys
from typing import TextIO

from rich.console import Console
from rich.markdown import Markdown


def should_use_rich_output(args: argparse.Namespace, stream: TextIO | None = None) -> bool:
    """Determine if Rich output should be used based on TTY and args.

    Parameters
    ----------
    args : argparse.Namespace
        Parsed command line arguments
    stream : optional, default None
        Uses sys.stdout unless otherwise specified.

    Returns
    -------
    bool
        True if Rich output should be used

    Notes
    -----
    Rich output is used when ``--force-rich`` is set, or when ``--rich`` is
    set and the stream is a TTY.

    """
    if getattr(args, "force_rich", False):
        return True
    if not getattr(args, "rich", False):
        return False

    target = stream or sys.stdout
    isatty = getattr(target, "isatty", None)
    return bool(callable(isatty) and isatty())


def render_rich_markdown(markdown_content: str, stream: TextIO | None = None) -> None:
    """Print Markdown through Rich's terminal renderer.

    Parameters
    ----------
    markdown_content : str
        Markdown to display
    stream : optional, default None
        Uses sys.stdout unless otherwise specified.

    """
    console = Console(file=stream or sys.stdout)
    console.print(Markdown(markdown_content))
