"""Tests for deterministic tree traversal."""

from __future__ import annotations

import os
import threading
from collections.abc import Callable
from pathlib import Path

import pytest

from treehash.config import FingerprintConfig
from treehash.exceptions import EntryReadError, FingerprintCancelledError, TraversalError
from treehash.ignore import compile_patterns
from treehash.scanner import walker
from treehash.scanner.guard import OverflowGuard
from treehash.scanner.walker import can_prune_directory, walk_tree
from treehash.types import EntryError


def _walk(root: Path, patterns: list[str] | None = None, **config_overrides: object) -> list[str]:
    config = FingerprintConfig(**config_overrides)  # type: ignore[arg-type]
    guard = OverflowGuard(config.max_entries)
    entries = walk_tree(str(root), compile_patterns(patterns or []), guard=guard, config=config)
    return [entry.relative_path for entry in entries]


def test_walk_visits_sorted_depth_first(make_tree: Callable[..., Path]) -> None:
    root = make_tree({"b.txt": "b", "a/2.txt": "2", "a/1.txt": "1", "c/": "", "a/z/deep.txt": "d"})

    assert _walk(root) == [".", "a", "a/1.txt", "a/2.txt", "a/z", "a/z/deep.txt", "b.txt", "c"]


def test_walk_reports_entry_metadata(make_tree: Callable[..., Path]) -> None:
    root = make_tree({"data.bin": "12345", "dir/": ""})
    config = FingerprintConfig()

    entries = list(walk_tree(str(root), compile_patterns([]), guard=OverflowGuard(10), config=config))

    by_path = {entry.relative_path: entry for entry in entries}
    assert by_path["."].is_directory
    assert by_path["."].absolute_path == str(root)
    assert by_path["data.bin"].size == 5
    assert not by_path["data.bin"].is_directory
    assert by_path["data.bin"].mtime_ns == (root / "data.bin").stat().st_mtime_ns
    assert by_path["dir"].is_directory
    assert by_path["dir"].size == 0


def test_root_is_never_excluded(make_tree: Callable[..., Path]) -> None:
    root = make_tree({"a.txt": "a"})

    assert _walk(root, ["*", "**"]) == ["."]


def test_excluded_directory_is_pruned_without_negations(make_tree: Callable[..., Path]) -> None:
    root = make_tree({"keep.txt": "k", "node_modules/pkg/index.js": "x"})

    assert _walk(root, ["node_modules"]) == [".", "keep.txt"]


def test_negation_descends_into_excluded_directory(make_tree: Callable[..., Path]) -> None:
    root = make_tree({"build/output.txt": "o", "build/keep.txt": "k", "main.py": "m"})

    assert _walk(root, ["build", "!build/keep.txt"]) == [".", "build/keep.txt", "main.py"]


def test_pruning_can_be_disabled(make_tree: Callable[..., Path]) -> None:
    root = make_tree({"vendor/lib.py": "x"})
    listed: list[str] = []
    real_scandir = os.scandir

    def recording_scandir(path: str):  # type: ignore[no-untyped-def]
        listed.append(os.path.basename(os.fspath(path)))
        return real_scandir(path)

    with pytest.MonkeyPatch.context() as patch:
        patch.setattr(os, "scandir", recording_scandir)
        visited = _walk(root, ["vendor"], prune_excluded_dirs=False)

    assert visited == ["."]
    assert "vendor" in listed


@pytest.mark.parametrize(
    ("patterns", "prune_excluded_dirs", "expected"),
    [
        (["build"], True, True),
        (["build", "!build/keep.txt"], True, False),
        (["build"], False, False),
    ],
    ids=["no_negations", "negations", "disabled"],
)
def test_can_prune_directory(patterns: list[str], prune_excluded_dirs: bool, expected: bool) -> None:
    config = FingerprintConfig(prune_excluded_dirs=prune_excluded_dirs)

    assert can_prune_directory(compile_patterns(patterns), config) is expected


def test_walk_stops_when_guard_trips(make_tree: Callable[..., Path]) -> None:
    root = make_tree({f"d{index}/f.txt": "x" for index in range(5)})
    guard = OverflowGuard(4)

    entries = list(walk_tree(str(root), compile_patterns([]), guard=guard, config=FingerprintConfig()))

    assert [entry.relative_path for entry in entries] == [".", "d0", "d0/f.txt", "d1"]
    assert guard.tripped


def test_include_paths_descend_through_ancestors(make_tree: Callable[..., Path]) -> None:
    root = make_tree({"services/api/main.py": "m", "services/web/app.js": "a", "README.md": "r"})

    visited = _walk(root, include_paths=("services/api",))

    assert visited == [".", "services/api", "services/api/main.py"]


def test_symlinked_directory_is_not_followed(make_tree: Callable[..., Path]) -> None:
    root = make_tree({"real/file.txt": "x"})
    (root / "link").symlink_to(root / "real", target_is_directory=True)

    visited = _walk(root)

    assert "link" in visited
    assert "link/file.txt" not in visited


def test_unlistable_root_raises_traversal_error(tmp_path: Path) -> None:
    config = FingerprintConfig()

    with pytest.raises(TraversalError):
        list(walk_tree(str(tmp_path / "gone"), compile_patterns([]), guard=OverflowGuard(5), config=config))


def _refusing_scandir(blocked: str) -> Callable[[str], object]:
    real_scandir = os.scandir

    def scandir(path: str):  # type: ignore[no-untyped-def]
        if os.path.basename(os.fspath(path)) == blocked:
            raise PermissionError(13, "Permission denied", path)
        return real_scandir(path)

    return scandir


def test_unlistable_subdirectory_is_recorded(make_tree: Callable[..., Path], monkeypatch: pytest.MonkeyPatch) -> None:
    root = make_tree({"locked/secret.txt": "s", "open.txt": "o"})
    monkeypatch.setattr(os, "scandir", _refusing_scandir("locked"))
    errors: list[EntryError] = []
    config = FingerprintConfig(on_entry_error="collect")

    entries = list(walk_tree(str(root), compile_patterns([]), guard=OverflowGuard(10), config=config, errors=errors))

    assert [entry.relative_path for entry in entries] == [".", "locked", "open.txt"]
    assert errors == [EntryError(relative_path="locked", operation="list", message="Permission denied")]


def test_unlistable_subdirectory_fails_under_fail_policy(
    make_tree: Callable[..., Path],
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    root = make_tree({"locked/secret.txt": "s"})
    monkeypatch.setattr(os, "scandir", _refusing_scandir("locked"))
    config = FingerprintConfig(on_entry_error="fail")

    with pytest.raises(EntryReadError, match="Cannot list locked"):
        list(walk_tree(str(root), compile_patterns([]), guard=OverflowGuard(10), config=config))


def test_walk_honours_cancellation_between_entries(make_tree: Callable[..., Path]) -> None:
    root = make_tree({"a.txt": "a", "b.txt": "b", "c.txt": "c"})
    cancel = threading.Event()
    walker = walk_tree(
        str(root),
        compile_patterns([]),
        guard=OverflowGuard(10),
        config=FingerprintConfig(),
        cancel=cancel,
    )

    assert next(walker).relative_path == "."
    assert next(walker).relative_path == "a.txt"
    cancel.set()

    with pytest.raises(FingerprintCancelledError):
        next(walker)


def test_walk_handles_deeply_nested_tree(tmp_path: Path) -> None:
    depth = 600
    deepest = tmp_path.joinpath("tree", *(["d"] * depth))
    deepest.mkdir(parents=True)
    (deepest / "leaf.txt").write_text("leaf", encoding="utf-8")

    visited = _walk(tmp_path / "tree")

    assert len(visited) == depth + 2
    assert visited[-1] == "/".join(["d"] * depth + ["leaf.txt"])


def test_duplicate_children_are_visited_once(
    make_tree: Callable[..., Path],
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    root = make_tree({"a.txt": "a", "sub/b.txt": "b"})
    real_sorted_children = walker._sorted_children

    def doubled(path: str) -> list[os.DirEntry[str]]:
        children = real_sorted_children(path)
        return children + children

    monkeypatch.setattr(walker, "_sorted_children", doubled)
    guard = OverflowGuard(10)

    entries = list(walk_tree(str(root), compile_patterns([]), guard=guard, config=FingerprintConfig()))

    assert [entry.relative_path for entry in entries] == [".", "a.txt", "sub", "sub/b.txt"]
    assert guard.visited == 4


def test_symlink_is_reported_as_link(make_tree: Callable[..., Path]) -> None:
    root = make_tree({"real/file.txt": "x"})
    (root / "link").symlink_to(root / "real", target_is_directory=True)

    entries = list(walk_tree(str(root), compile_patterns([]), guard=OverflowGuard(10), config=FingerprintConfig()))

    by_path = {entry.relative_path: entry for entry in entries}
    assert by_path["link"].is_symlink
    assert not by_path["link"].is_directory
    assert not by_path["real"].is_symlink
