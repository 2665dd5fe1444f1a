"""Configuration loading and normalization for fingerprint runs.

This package facade re-exports the public names so callers can use
``from treehash.config import ...``.
"""

from __future__ import annotations

from treehash.config.loader import load_config, resolve_exclude_patterns
from treehash.config.model import FingerprintConfig

__all__ = [
    "FingerprintConfig",
    "load_config",
    "resolve_exclude_patterns",
]
