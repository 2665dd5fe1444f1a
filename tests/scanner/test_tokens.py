"""Tests for digest token construction."""

from __future__ import annotations

from pathlib import Path

from treehash.scanner.tokens import (
    content_token,
    directory_token,
    encode_token,
    entry_token,
    metadata_token,
    single_file_token,
    symlink_token,
)
from treehash.types import VisitedEntry


def _entry(
    path: str,
    *,
    is_directory: bool = False,
    size: int = 0,
    mtime_ns: int = 0,
    is_symlink: bool = False,
) -> VisitedEntry:
    return VisitedEntry(
        absolute_path=path,
        relative_path=Path(path).name,
        is_directory=is_directory,
        size=size,
        mtime_ns=mtime_ns,
        is_symlink=is_symlink,
    )


def test_directory_token_is_path_only() -> None:
    entry = _entry("/repo/src", is_directory=True, mtime_ns=1_700_000_000_123_456_789)

    assert directory_token(entry) == "/repo/src"
    assert entry_token(entry, fast_mode=True) == "/repo/src"
    assert entry_token(entry, fast_mode=False) == "/repo/src"


def test_metadata_token_uses_whole_seconds() -> None:
    entry = _entry("/repo/a.txt", size=42, mtime_ns=1_700_000_000_999_999_999)

    assert metadata_token(entry) == "/repo/a.txt;42;1700000000"


def test_content_token_joins_path_and_checksum() -> None:
    assert content_token(_entry("/repo/a.txt"), "3610a686") == "/repo/a.txt;3610a686"


def test_tokens_strip_long_path_prefix() -> None:
    entry = _entry("\\\\?\\C:\\repo\\a.txt", size=1, mtime_ns=2_000_000_000)

    assert metadata_token(entry) == "C:\\repo\\a.txt;1;2"
    assert directory_token(_entry("\\\\?\\UNC\\server\\share", is_directory=True)) == "\\\\server\\share"


def test_entry_token_full_mode_reads_content(tmp_path: Path) -> None:
    target = tmp_path / "hello.txt"
    target.write_bytes(b"hello")

    token = entry_token(_entry(str(target), size=5), fast_mode=False)

    assert token == f"{target};3610a686"


def test_single_file_token_fast_mode_uses_nanoseconds(tmp_path: Path) -> None:
    target = tmp_path / "file.txt"
    target.write_bytes(b"abc")
    stat_result = target.stat()

    token = single_file_token(str(target), stat_result, fast_mode=True)

    assert token == f"{target};3;{stat_result.st_mtime_ns}"


def test_symlink_to_directory_hashes_link_target(tmp_path: Path) -> None:
    (tmp_path / "real").mkdir()
    link = tmp_path / "link"
    link.symlink_to("real", target_is_directory=True)
    entry = _entry(str(link), is_symlink=True)

    assert symlink_token(entry) == f"{link};->real"
    assert entry_token(entry, fast_mode=False) == f"{link};->real"


def test_dangling_symlink_still_has_token(tmp_path: Path) -> None:
    link = tmp_path / "dangling"
    link.symlink_to("missing.txt")

    assert entry_token(_entry(str(link), is_symlink=True), fast_mode=False) == f"{link};->missing.txt"


def test_encode_token_keeps_undecodable_name_bytes() -> None:
    token = "/repo/bad-\udcff.txt;00000000"

    assert encode_token(token) == b"/repo/bad-\xff.txt;00000000"
    assert encode_token("/repo/café") == "/repo/café".encode("utf-8")
