"""Constants for exclude pattern handling."""

from __future__ import annotations

NEGATION_MARKER: str = "!"
COMMENT_MARKER: str = "#"
