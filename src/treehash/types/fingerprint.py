"""Frozen dataclasses exchanged between the walker, hasher and orchestrator."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class VisitedEntry:
    """One entry produced by the tree walker.

    Symlinks are reported as themselves; ``is_directory`` is False for a link
    even when it points at a directory.
    """

    absolute_path: str
    relative_path: str
    is_directory: bool
    size: int
    mtime_ns: int
    is_symlink: bool = False

    @property
    def mtime_seconds(self) -> int:
        """Modification time truncated to whole Unix seconds."""
        return self.mtime_ns // 1_000_000_000


@dataclass(frozen=True)
class IgnoreDecision:
    """Outcome of matching one relative path against the exclude patterns."""

    skip: bool
    has_negation_rules: bool


@dataclass(frozen=True)
class EntryError:
    """A descendant entry that was dropped from the digest."""

    relative_path: str
    operation: str
    message: str


@dataclass(frozen=True)
class FingerprintResult:
    """Digest plus the facts a caller needs to decide whether to trust it."""

    digest: str
    partial: bool = False
    entries: int = 0
    errors: tuple[EntryError, ...] = ()

    @property
    def complete(self) -> bool:
        """True when every admitted entry was hashed and no limit was hit."""
        return not self.partial and not self.errors
