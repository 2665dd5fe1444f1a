"""Exclude pattern compilation and ignore file parsing."""

from __future__ import annotations

from .ignorefile import load_ignore_file, read_ignore_patterns
from .matcher import Matcher, PatternMatcher, compile_patterns

__all__ = [
    "Matcher",
    "PatternMatcher",
    "compile_patterns",
    "load_ignore_file",
    "read_ignore_patterns",
]
