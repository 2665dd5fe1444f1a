"""Deterministic depth-first traversal of a directory tree.

Children of every directory are visited in name order so the entry stream,
and with it the fingerprint, does not depend on how the filesystem happens
to enumerate a directory.
"""

from __future__ import annotations

import logging
import os
import threading
from collections.abc import Iterator

from treehash.config.model import FingerprintConfig
from treehash.constants.fingerprint import ROOT_RELATIVE_PATH
from treehash.exceptions import FingerprintCancelledError, TraversalError
from treehash.ignore.matcher import Matcher
from treehash.paths import add_long_path_prefix
from treehash.scanner.entry_errors import record_entry_error
from treehash.scanner.guard import OverflowGuard
from treehash.types import EntryError, VisitedEntry

logger = logging.getLogger(__name__)


def can_prune_directory(matcher: Matcher, config: FingerprintConfig) -> bool:
    """Return True when an excluded directory may be skipped without descending.

    With negated patterns present a deeper path could be re-included, so the
    directory has to be walked.
    """
    return config.prune_excluded_dirs and not matcher.has_negations()


def walk_tree(
    root: str,
    matcher: Matcher,
    *,
    guard: OverflowGuard,
    config: FingerprintConfig,
    cancel: threading.Event | None = None,
    errors: list[EntryError] | None = None,
) -> Iterator[VisitedEntry]:
    """Yield every non-excluded entry under the absolute directory *root*.

    The root itself comes first with relative path ``"."`` and is never
    matched against the exclude patterns. Iteration stops early once *guard*
    trips. Failing to stat or enumerate the root raises ``TraversalError``;
    failures below the root follow ``config.on_entry_error``.
    """
    walk_root = add_long_path_prefix(root)
    try:
        root_stat = os.stat(walk_root)
        children = _sorted_children(walk_root)
    except OSError as exc:
        raise TraversalError(f"Cannot enumerate scan root {root}: {exc}") from exc

    if not guard.admit():
        return
    seen: set[str] = {ROOT_RELATIVE_PATH}
    yield VisitedEntry(
        absolute_path=walk_root,
        relative_path=ROOT_RELATIVE_PATH,
        is_directory=True,
        size=0,
        mtime_ns=root_stat.st_mtime_ns,
    )

    walk = _Walk(matcher=matcher, guard=guard, config=config, cancel=cancel, errors=errors, seen=seen)
    yield from walk.children(children, ROOT_RELATIVE_PATH)


class _Walk:
    """State for one traversal.

    Pending directories sit on an explicit stack of sorted child iterators;
    the walk does not recurse.
    """

    def __init__(
        self,
        *,
        matcher: Matcher,
        guard: OverflowGuard,
        config: FingerprintConfig,
        cancel: threading.Event | None,
        errors: list[EntryError] | None,
        seen: set[str],
    ) -> None:
        self.matcher = matcher
        self.guard = guard
        self.config = config
        self.cancel = cancel
        self.errors = errors
        self.seen = seen
        self.prune = can_prune_directory(matcher, config)
        self.stack: list[tuple[str, Iterator[os.DirEntry[str]]]] = []

    def descend(self, path: str, relative_path: str) -> None:
        try:
            children = _sorted_children(path)
        except OSError as exc:
            record_entry_error(self.config, self.errors, relative_path=relative_path, operation="list", exc=exc)
            return
        self.stack.append((relative_path, iter(children)))

    def children(self, children: list[os.DirEntry[str]], parent: str) -> Iterator[VisitedEntry]:
        self.stack.append((parent, iter(children)))
        while self.stack:
            parent_path, pending = self.stack[-1]
            child = next(pending, None)
            if child is None:
                self.stack.pop()
                continue
            if self.cancel is not None and self.cancel.is_set():
                raise FingerprintCancelledError("Fingerprint computation cancelled")

            relative_path = child.name if parent_path == ROOT_RELATIVE_PATH else f"{parent_path}/{child.name}"
            try:
                is_directory = child.is_dir(follow_symlinks=False)
                is_symlink = child.is_symlink()
            except OSError as exc:
                record_entry_error(self.config, self.errors, relative_path=relative_path, operation="stat", exc=exc)
                continue

            excluded = self.matcher.matches(relative_path, is_directory=is_directory)
            if excluded and (not is_directory or self.prune):
                continue

            selected = not excluded and _within_include_paths(relative_path, self.config.include_paths)
            if not selected:
                if is_directory and (excluded or _leads_to_include_path(relative_path, self.config.include_paths)):
                    self.descend(child.path, relative_path)
                continue

            if relative_path in self.seen:
                logger.debug("Skipping already hashed entry %s", relative_path)
                continue
            try:
                stat_result = child.stat(follow_symlinks=False)
            except OSError as exc:
                record_entry_error(self.config, self.errors, relative_path=relative_path, operation="stat", exc=exc)
                continue

            if not self.guard.admit():
                return
            self.seen.add(relative_path)

            yield VisitedEntry(
                absolute_path=child.path,
                relative_path=relative_path,
                is_directory=is_directory,
                size=0 if is_directory else stat_result.st_size,
                mtime_ns=stat_result.st_mtime_ns,
                is_symlink=is_symlink,
            )

            if is_directory:
                self.descend(child.path, relative_path)


def _sorted_children(path: str) -> list[os.DirEntry[str]]:
    with os.scandir(path) as entries:
        return sorted(entries, key=lambda entry: entry.name)


def _within_include_paths(relative_path: str, include_paths: tuple[str, ...]) -> bool:
    if not include_paths:
        return True
    return any(relative_path == prefix or relative_path.startswith(f"{prefix}/") for prefix in include_paths)


def _leads_to_include_path(relative_path: str, include_paths: tuple[str, ...]) -> bool:
    return any(prefix.startswith(f"{relative_path}/") for prefix in include_paths)
