"""Configuration-related exceptions."""

from __future__ import annotations

from treehash.exceptions.base import TreehashError


class ConfigError(TreehashError, ValueError):
    """Raised when fingerprint configuration is invalid."""
