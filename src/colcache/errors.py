"""Error types raised by colcache's storage collaborators and metadata model.

Key derivation itself adds no error kinds: whatever the collaborators raise
reaches the caller unchanged.
"""

from __future__ import annotations


class ColcacheError(Exception):
    """Base class for colcache errors."""


class TableStatusError(ColcacheError):
    """Table status or segment file could not be read or parsed."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to read {path}: {reason}")


class TablePathNotFoundError(ColcacheError, FileNotFoundError):
    """The table location does not exist."""

    def __init__(self, table_path: str):
        self.table_path = table_path
        super().__init__(f"Table path does not exist: {table_path}")


class MalformedDataMapError(ColcacheError, ValueError):
    """Datamap definition does not match the table schema."""


class SegmentResolutionError(ColcacheError):
    """Segment cannot resolve its committed files."""
