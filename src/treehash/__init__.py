"""Deterministic content fingerprints for directory trees."""

from __future__ import annotations

from treehash.config import FingerprintConfig, load_config
from treehash.exceptions import (
    ConfigError,
    EntryReadError,
    FingerprintCancelledError,
    PathResolutionError,
    PatternCompileError,
    TraversalError,
    TreehashError,
)
from treehash.scanner import FingerprintResult, compute_fingerprint, fingerprint_directory

__version__ = "0.1.0"

__all__ = [
    "ConfigError",
    "EntryReadError",
    "FingerprintCancelledError",
    "FingerprintConfig",
    "FingerprintResult",
    "PathResolutionError",
    "PatternCompileError",
    "TraversalError",
    "TreehashError",
    "__version__",
    "compute_fingerprint",
    "fingerprint_directory",
    "load_config",
]
