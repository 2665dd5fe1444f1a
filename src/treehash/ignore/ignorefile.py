"""Reader for dockerignore-style ignore files."""

from __future__ import annotations

import logging
import posixpath
from collections.abc import Iterable
from pathlib import Path

from treehash.constants.ignore import COMMENT_MARKER, NEGATION_MARKER
from treehash.exceptions import ConfigError

logger = logging.getLogger(__name__)

_BOM = "\ufeff"


def read_ignore_patterns(lines: Iterable[str]) -> list[str]:
    """Return cleaned exclude patterns from the lines of an ignore file.

    Comment lines and blank lines are dropped. Each remaining pattern is
    normalized to a slash-separated path relative to the scan root, keeping a
    leading ``!`` on negated patterns.
    """
    patterns: list[str] = []
    for line_no, line in enumerate(lines):
        if line_no == 0:
            line = line.lstrip(_BOM)
        pattern = line.strip()
        if not pattern or pattern.startswith(COMMENT_MARKER):
            continue

        invert = pattern.startswith(NEGATION_MARKER)
        if invert:
            pattern = pattern[1:].strip()
        if pattern:
            pattern = clean_pattern(pattern)
        if invert:
            pattern = NEGATION_MARKER + pattern
        patterns.append(pattern)
    return patterns


def clean_pattern(pattern: str) -> str:
    """Lexically clean *pattern* and strip a leading slash."""
    cleaned = posixpath.normpath(pattern)
    if len(cleaned) > 1:
        cleaned = cleaned.lstrip("/") or "/"
    return cleaned


def load_ignore_file(path: Path) -> list[str]:
    """Read exclude patterns from *path*; a missing file yields no patterns."""
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.debug("No ignore file at %s", path)
        return []
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Cannot read ignore file {path}: {exc}") from exc

    patterns = read_ignore_patterns(text.splitlines())
    logger.debug("Loaded %d exclude pattern(s) from %s", len(patterns), path)
    return patterns
