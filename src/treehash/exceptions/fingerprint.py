"""Exceptions raised while computing a tree fingerprint.

Each class names the phase that failed so callers can tell a bad root path
from a bad pattern list from an unreadable tree.
"""

from __future__ import annotations

from treehash.exceptions.base import TreehashError


class PathResolutionError(TreehashError, OSError):
    """Raised when the scan root cannot be made absolute or stat'd."""


class PatternCompileError(TreehashError, ValueError):
    """Raised when an exclude pattern is syntactically invalid."""

    def __init__(self, pattern: str, reason: str) -> None:
        super().__init__(f"Invalid exclude pattern {pattern!r}: {reason}")
        self.pattern = pattern
        self.reason = reason


class TraversalError(TreehashError, OSError):
    """Raised when the scan root cannot be enumerated or read."""


class EntryReadError(TraversalError):
    """Raised for a descendant entry failure under the ``fail`` error policy."""

    def __init__(self, relative_path: str, operation: str, message: str) -> None:
        super().__init__(f"Cannot {operation} {relative_path}: {message}")
        self.relative_path = relative_path
        self.operation = operation


class FingerprintCancelledError(TreehashError):
    """Raised when a caller cancels a running fingerprint computation."""
