"""Digest tokens for visited entries."""

from __future__ import annotations

import os

from treehash.constants.fingerprint import (
    CHECKSUM_CRC32,
    SYMLINK_TARGET_MARKER,
    TOKEN_ENCODING,
    TOKEN_ENCODING_ERRORS,
    TOKEN_SEPARATOR,
)
from treehash.io import file_checksum
from treehash.paths import strip_long_path_prefix
from treehash.types import VisitedEntry


def encode_token(token: str) -> bytes:
    """Bytes fed to the running digest; names that are not valid UTF-8 keep their raw bytes."""
    return token.encode(TOKEN_ENCODING, TOKEN_ENCODING_ERRORS)


def directory_token(entry: VisitedEntry) -> str:
    """Directories contribute only their path; their mtime is left out."""
    return strip_long_path_prefix(entry.absolute_path)


def metadata_token(entry: VisitedEntry) -> str:
    """Fast-mode file token: path, size in bytes and whole-second mtime."""
    return TOKEN_SEPARATOR.join(
        (strip_long_path_prefix(entry.absolute_path), str(entry.size), str(entry.mtime_seconds))
    )


def content_token(entry: VisitedEntry, checksum: str) -> str:
    """Full-mode file token: path and content checksum."""
    return TOKEN_SEPARATOR.join((strip_long_path_prefix(entry.absolute_path), checksum))


def symlink_token(entry: VisitedEntry) -> str:
    """Full-mode symlink token: path and link target, read without following the link."""
    target = strip_long_path_prefix(os.readlink(entry.absolute_path))
    return TOKEN_SEPARATOR.join((strip_long_path_prefix(entry.absolute_path), f"{SYMLINK_TARGET_MARKER}{target}"))


def entry_token(entry: VisitedEntry, *, fast_mode: bool, algorithm: str = CHECKSUM_CRC32) -> str:
    """Return the token for *entry*; reading file content may raise ``OSError``."""
    if entry.is_directory:
        return directory_token(entry)
    if fast_mode:
        return metadata_token(entry)
    if entry.is_symlink:
        return symlink_token(entry)
    return content_token(entry, file_checksum(entry.absolute_path, algorithm))


def single_file_token(
    path: str,
    stat_result: os.stat_result,
    *,
    fast_mode: bool,
    algorithm: str = CHECKSUM_CRC32,
) -> str:
    """Token for a scan root that is a file rather than a directory."""
    token_path = strip_long_path_prefix(path)
    if fast_mode:
        return TOKEN_SEPARATOR.join((token_path, str(stat_result.st_size), str(stat_result.st_mtime_ns)))
    return TOKEN_SEPARATOR.join((token_path, file_checksum(path, algorithm)))
