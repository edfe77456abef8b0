"""Test utilities for the mdnormalize test suite.

This module provides helpers for temporary directories and for checking that
Markdown output follows the canonical style.
"""

import re
import shutil
import tempfile
from pathlib import Path

_FENCE_RE = re.compile(r"^(?P<indent> *)(?P<fence>`{3,}|~{3,})")
_CONTAINER_PREFIX_RE = re.compile(r"^(?:> ?)+")
_LIST_MARKER_RE = re.compile(r"^ *(?:[-*+]|\d{1,9}[.)])(?P<spacing>[ \t]+)\S")


def create_test_temp_dir() -> Path:
    """Create a temporary directory for test files."""
    return Path(tempfile.mkdtemp())


def cleanup_test_dir(temp_dir: Path) -> None:
    """Clean up test directory and files."""
    if temp_dir.exists():
        shutil.rmtree(temp_dir)


def lines_outside_code(markdown: str) -> list[str]:
    """Return the lines of ``markdown`` that are not inside a fenced code block.

    Block quote prefixes are removed from each line first.
    """
    result = []
    open_fence = None
    for raw_line in markdown.split("\n"):
        line = _CONTAINER_PREFIX_RE.sub("", raw_line).lstrip(" ")
        match = _FENCE_RE.match(line)
        if open_fence is None:
            if match:
                open_fence = match.group("fence")
                continue
            result.append(line)
        elif match and match.group("fence")[0] == open_fence[0] and len(match.group("fence")) >= len(open_fence):
            if not line[len(match.group("fence")) :].strip():
                open_fence = None
    return result


def assert_canonical_style(markdown: str) -> None:
    """Assert that Markdown outside code blocks follows the canonical style.

    Checks bullets are ``-``, list markers are followed by a single space and
    thematic breaks are written ``---``.
    """
    for line in lines_outside_code(markdown):
        assert not re.match(r"^[*+] ", line), f"Non-canonical bullet in line: {line!r}"
        assert not re.match(r"^(?:\* *){3,}$|^(?:_ *){3,}$", line), f"Non-canonical rule in line: {line!r}"
        assert not re.match(r"^-(?: *-){3,}$", line), f"Rule longer than three dashes: {line!r}"
        marker = _LIST_MARKER_RE.match(line)
        if marker:
            assert marker.group("spacing") == " ", f"List marker not followed by one space: {line!r}"
