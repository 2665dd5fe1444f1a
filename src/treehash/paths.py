"""Scan root normalization and Windows long-path handling."""

from __future__ import annotations

import os

from treehash.constants.paths import LONG_PATH_PREFIX, LONG_PATH_UNC_PREFIX, UNC_PREFIX
from treehash.exceptions import PathResolutionError


def _is_windows(windows: bool | None) -> bool:
    return os.name == "nt" if windows is None else windows


def normalize_root(path: str | os.PathLike[str]) -> tuple[str, os.stat_result]:
    """Return the absolute form of *path* together with its stat result.

    Symlinks are not resolved. Any failure to build the absolute path or to
    stat it raises ``PathResolutionError``.
    """
    try:
        absolute = os.path.abspath(os.fspath(path))
        stat_result = os.stat(absolute)
    except (OSError, ValueError) as exc:
        raise PathResolutionError(f"Cannot resolve scan root {os.fspath(path)!r}: {exc}") from exc
    return absolute, stat_result


def add_long_path_prefix(path: str, *, windows: bool | None = None) -> str:
    """Prefix *path* so Windows APIs accept it past the legacy length limit.

    No-op on other platforms and for paths that already carry the prefix.
    """
    if not _is_windows(windows) or path.startswith(LONG_PATH_PREFIX):
        return path
    if path.startswith(UNC_PREFIX):
        return LONG_PATH_UNC_PREFIX + path[len(UNC_PREFIX) :]
    return LONG_PATH_PREFIX + path


def strip_long_path_prefix(path: str) -> str:
    """Undo ``add_long_path_prefix`` so tokens do not depend on the platform."""
    if path.startswith(LONG_PATH_UNC_PREFIX):
        return UNC_PREFIX + path[len(LONG_PATH_UNC_PREFIX) :]
    if path.startswith(LONG_PATH_PREFIX):
        return path[len(LONG_PATH_PREFIX) :]
    return path
