"""Exceptions raised while loading and writing PHP sources.

Converting never raises for unusable documentation; the affected
declaration is simply left unchanged.
"""

from __future__ import annotations


class TypeHintError(Exception):
    """Base exception for phpdoc-typehint operations."""

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path


class SourceNotFoundError(TypeHintError):
    """Raised when an input path does not exist."""


class ProjectLoadError(TypeHintError):
    """Raised when a source file cannot be read or written."""
