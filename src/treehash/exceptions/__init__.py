"""Shared exception hierarchy for treehash."""

from __future__ import annotations

from .base import TreehashError
from .config import ConfigError
from .fingerprint import (
    EntryReadError,
    FingerprintCancelledError,
    PathResolutionError,
    PatternCompileError,
    TraversalError,
)

__all__ = [
    "ConfigError",
    "EntryReadError",
    "FingerprintCancelledError",
    "PathResolutionError",
    "PatternCompileError",
    "TraversalError",
    "TreehashError",
]
