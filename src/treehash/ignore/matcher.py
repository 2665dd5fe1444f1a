"""Exclude pattern evaluation backed by ``pathspec``.

Patterns use dockerignore conventions: they are relative to the scan root,
``*`` and ``?`` stay inside one path segment, ``**`` spans segments, a
leading ``!`` re-includes a path, and the last matching pattern decides.
A pattern that matches a directory also matches everything beneath it.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol

from pathspec.patterns import GitWildMatchPattern
from pathspec.patterns.gitwildmatch import GitWildMatchPatternError

from treehash.constants.fingerprint import ROOT_RELATIVE_PATH
from treehash.constants.ignore import COMMENT_MARKER, NEGATION_MARKER
from treehash.exceptions import PatternCompileError
from treehash.ignore.ignorefile import clean_pattern
from treehash.types import IgnoreDecision

logger = logging.getLogger(__name__)


class Matcher(Protocol):
    """Capability the tree walker needs from an exclude pattern engine."""

    def matches(self, relative_path: str, *, is_directory: bool = False) -> bool: ...

    def has_negations(self) -> bool: ...


@dataclass(frozen=True)
class CompiledPattern:
    """One exclude pattern in source and compiled form."""

    source: str
    exclusion: bool
    compiled: GitWildMatchPattern

    def matches(self, path: str) -> bool:
        regex = self.compiled.regex
        return regex is not None and regex.match(path) is not None


class PatternMatcher:
    """Ordered exclude patterns compiled once per fingerprint run."""

    def __init__(self, patterns: tuple[CompiledPattern, ...]) -> None:
        self._patterns = patterns
        self._has_negations = any(pattern.exclusion for pattern in patterns)

    @property
    def patterns(self) -> tuple[CompiledPattern, ...]:
        return self._patterns

    def has_negations(self) -> bool:
        """Return True when any pattern re-includes paths with ``!``."""
        return self._has_negations

    def matches(self, relative_path: str, *, is_directory: bool = False) -> bool:
        """Return True when *relative_path* or one of its parents is excluded."""
        if not self._patterns or relative_path == ROOT_RELATIVE_PATH:
            return False

        candidates = _match_candidates(relative_path, is_directory=is_directory)
        matched = False
        for pattern in self._patterns:
            if any(pattern.matches(candidate) for candidate in candidates):
                matched = not pattern.exclusion
        return matched

    def decide(self, relative_path: str, *, is_directory: bool) -> IgnoreDecision:
        return IgnoreDecision(
            skip=self.matches(relative_path, is_directory=is_directory),
            has_negation_rules=self._has_negations,
        )


def compile_patterns(patterns: Iterable[str]) -> PatternMatcher:
    """Compile exclude patterns, raising ``PatternCompileError`` on bad syntax."""
    compiled: list[CompiledPattern] = []
    for raw in patterns:
        pattern = raw.strip()
        if not pattern or pattern.startswith(COMMENT_MARKER):
            continue

        exclusion = pattern.startswith(NEGATION_MARKER)
        body = pattern[1:].strip() if exclusion else pattern
        if not body:
            raise PatternCompileError(raw, "illegal exclusion pattern")
        body = clean_pattern(body)
        _check_glob_syntax(raw, body)

        anchored = f"/{body}" if body != "/" else body
        try:
            spec_pattern = GitWildMatchPattern(f"{NEGATION_MARKER}{anchored}" if exclusion else anchored)
        except (GitWildMatchPatternError, ValueError) as exc:
            raise PatternCompileError(raw, str(exc)) from exc

        compiled.append(CompiledPattern(source=pattern, exclusion=exclusion, compiled=spec_pattern))

    logger.debug("Compiled %d exclude pattern(s)", len(compiled))
    return PatternMatcher(tuple(compiled))


def _match_candidates(relative_path: str, *, is_directory: bool) -> list[str]:
    """Return the path and each ancestor directory in the forms pathspec matches."""
    parts = relative_path.split("/")
    candidates: list[str] = []
    for index in range(1, len(parts)):
        parent = "/".join(parts[:index])
        candidates.extend((parent, f"{parent}/"))
    candidates.append(relative_path)
    if is_directory:
        candidates.append(f"{relative_path}/")
    return candidates


def _check_glob_syntax(raw: str, pattern: str) -> None:
    """Reject unterminated character classes and dangling escapes."""
    index = 0
    length = len(pattern)
    while index < length:
        char = pattern[index]
        if char == "\\":
            if index + 1 >= length:
                raise PatternCompileError(raw, "trailing escape character")
            index += 2
            continue
        if char == "[":
            end = index + 1
            if end < length and pattern[end] in "!^":
                end += 1
            if end < length and pattern[end] == "]":
                end += 1
            while end < length and pattern[end] != "]":
                if pattern[end] == "\\":
                    end += 1
                end += 1
            if end >= length:
                raise PatternCompileError(raw, "unterminated character class")
            index = end + 1
            continue
        index += 1
