"""Root of the treehash exception hierarchy."""

from __future__ import annotations


class TreehashError(Exception):
    """Base class for all treehash errors."""
