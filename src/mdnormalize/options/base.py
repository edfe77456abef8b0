"""Base classes for parser and renderer options.

Options objects are frozen dataclasses so a single instance can be shared
across threads and across the outer and nested formatting passes.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class BaseParserOptions:
    """Base class for parser options.

    Subclasses define format-specific parsing options as frozen dataclass fields.
    """

    def __post_init__(self) -> None:
        """Hook for subclass validation."""


@dataclass(frozen=True)
class BaseRendererOptions:
    """Base class for renderer options.

    Subclasses define format-specific rendering options as frozen dataclass fields.
    """

    def __post_init__(self) -> None:
        """Hook for subclass validation."""
