"""Shared pytest fixtures for building throwaway directory trees."""

from __future__ import annotations

import os
from collections.abc import Callable
from pathlib import Path
from typing import TypeAlias

import pytest

TreeFactory: TypeAlias = Callable[..., Path]


def write_tree(root: Path, files: dict[str, str]) -> Path:
    """Create *files* under *root*; keys ending in ``/`` become empty directories."""
    root.mkdir(parents=True, exist_ok=True)
    for relative, content in files.items():
        path = root / relative
        if relative.endswith("/"):
            path.mkdir(parents=True, exist_ok=True)
            continue
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def make_tree(tmp_path: Path) -> TreeFactory:
    """Return a factory that writes a file mapping below ``tmp_path``."""

    def _make(files: dict[str, str], name: str = "tree") -> Path:
        return write_tree(tmp_path / name, files)

    return _make


@pytest.fixture
def sample_tree(make_tree: TreeFactory) -> Path:
    """Return a small tree with a nested directory."""
    return make_tree({"a.txt": "hello", "sub/b.txt": "world"})


def _shift_mtime(path: Path, seconds: int) -> None:
    stat_result = path.stat()
    delta = seconds * 1_000_000_000
    os.utime(path, ns=(stat_result.st_atime_ns + delta, stat_result.st_mtime_ns + delta))


@pytest.fixture
def shift_mtime() -> Callable[[Path, int], None]:
    """Return a helper that moves a path's atime and mtime by whole seconds."""
    return _shift_mtime
