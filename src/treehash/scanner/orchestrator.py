"""End-to-end fingerprint computation.

``fingerprint_directory`` is the primary entry point; ``compute_fingerprint``
returns only the hex digest for callers that compare strings.
"""

from __future__ import annotations

import hashlib
import logging
import os
import stat
import threading
from collections import deque
from collections.abc import Iterable
from concurrent.futures import Future, ThreadPoolExecutor

from treehash.config import FingerprintConfig, resolve_exclude_patterns
from treehash.exceptions import TraversalError
from treehash.ignore import compile_patterns
from treehash.io import file_checksum
from treehash.paths import add_long_path_prefix, normalize_root
from treehash.scanner.entry_errors import record_entry_error
from treehash.scanner.guard import OverflowGuard
from treehash.scanner.tokens import content_token, encode_token, entry_token, single_file_token
from treehash.scanner.walker import walk_tree
from treehash.types import EntryError, FingerprintResult, VisitedEntry

logger = logging.getLogger(__name__)

# Checksums queued per worker before the oldest result is folded in.
_PENDING_PER_WORKER = 4


def compute_fingerprint(
    root: str | os.PathLike[str],
    exclude_patterns: Iterable[str] = (),
    fast_mode: bool | None = None,
    *,
    config: FingerprintConfig | None = None,
    cancel: threading.Event | None = None,
) -> str:
    """Return the lowercase hex SHA-256 fingerprint of the tree at *root*."""
    return fingerprint_directory(root, exclude_patterns, fast_mode, config=config, cancel=cancel).digest


def fingerprint_directory(
    root: str | os.PathLike[str],
    exclude_patterns: Iterable[str] = (),
    fast_mode: bool | None = None,
    *,
    config: FingerprintConfig | None = None,
    cancel: threading.Event | None = None,
) -> FingerprintResult:
    """Fingerprint the file or directory at *root*.

    ``fast_mode`` hashes file size and mtime instead of file content; when
    None the value from *config* applies. Exclude patterns from the config's
    ignore file and ``exclude_patterns`` list come before *exclude_patterns*.

    Raises ``PathResolutionError`` when the root cannot be stat'd,
    ``PatternCompileError`` for an invalid pattern and ``TraversalError``
    when the root cannot be read. Hitting ``config.max_entries`` is not an
    error: the result is marked ``partial``. Passing a bare string as
    *exclude_patterns* raises ``TypeError``.
    """
    if isinstance(exclude_patterns, (str, bytes)):
        raise TypeError("exclude_patterns must be an iterable of pattern strings, not a single string")
    config = config or FingerprintConfig()
    fast = config.fast_mode if fast_mode is None else fast_mode
    absolute, stat_result = normalize_root(root)

    if not stat.S_ISDIR(stat_result.st_mode):
        return _fingerprint_file(absolute, stat_result, fast_mode=fast, config=config)

    matcher = compile_patterns(resolve_exclude_patterns(config, tuple(exclude_patterns)))
    digest = hashlib.sha256()
    guard = OverflowGuard(config.max_entries)
    errors: list[EntryError] = []
    entries = walk_tree(absolute, matcher, guard=guard, config=config, cancel=cancel, errors=errors)

    if fast or config.workers <= 1:
        hashed = _fold_serial(digest, entries, fast_mode=fast, config=config, errors=errors)
    else:
        hashed = _fold_parallel(digest, entries, config=config, errors=errors)

    result = FingerprintResult(
        digest=digest.hexdigest(),
        partial=guard.tripped,
        entries=hashed,
        errors=tuple(errors),
    )
    logger.debug(
        "Fingerprinted %s: %d entries, partial=%s, dropped=%d",
        absolute,
        result.entries,
        result.partial,
        len(result.errors),
    )
    return result


def _fingerprint_file(
    path: str,
    stat_result: os.stat_result,
    *,
    fast_mode: bool,
    config: FingerprintConfig,
) -> FingerprintResult:
    try:
        token = single_file_token(
            add_long_path_prefix(path),
            stat_result,
            fast_mode=fast_mode,
            algorithm=config.checksum_algorithm,
        )
    except OSError as exc:
        raise TraversalError(f"Cannot read scan root {path}: {exc}") from exc
    return FingerprintResult(digest=hashlib.sha256(encode_token(token)).hexdigest(), entries=1)


def _fold_serial(
    digest: hashlib._Hash,
    entries: Iterable[VisitedEntry],
    *,
    fast_mode: bool,
    config: FingerprintConfig,
    errors: list[EntryError],
) -> int:
    hashed = 0
    for entry in entries:
        try:
            token = entry_token(entry, fast_mode=fast_mode, algorithm=config.checksum_algorithm)
        except OSError as exc:
            record_entry_error(config, errors, relative_path=entry.relative_path, operation="read", exc=exc)
            continue
        digest.update(encode_token(token))
        hashed += 1
    return hashed


def _fold_parallel(
    digest: hashlib._Hash,
    entries: Iterable[VisitedEntry],
    *,
    config: FingerprintConfig,
    errors: list[EntryError],
) -> int:
    """Checksum files on a bounded pool while folding tokens in walk order."""
    hashed = 0
    window = config.workers * _PENDING_PER_WORKER
    pending: deque[tuple[VisitedEntry, Future[str] | None]] = deque()

    def fold(entry: VisitedEntry, future: Future[str] | None) -> int:
        try:
            if future is None:
                token = entry_token(entry, fast_mode=False, algorithm=config.checksum_algorithm)
            else:
                token = content_token(entry, future.result())
        except OSError as exc:
            record_entry_error(config, errors, relative_path=entry.relative_path, operation="read", exc=exc)
            return 0
        digest.update(encode_token(token))
        return 1

    executor = ThreadPoolExecutor(max_workers=config.workers, thread_name_prefix="treehash")
    try:
        for entry in entries:
            future = None
            if not entry.is_directory and not entry.is_symlink:
                future = executor.submit(file_checksum, entry.absolute_path, config.checksum_algorithm)
            pending.append((entry, future))
            while len(pending) > window:
                hashed += fold(*pending.popleft())
        while pending:
            hashed += fold(*pending.popleft())
    finally:
        executor.shutdown(wait=True, cancel_futures=True)
    return hashed
