"""Constants for tree traversal and token construction."""

from __future__ import annotations

ROOT_RELATIVE_PATH: str = "."
TOKEN_SEPARATOR: str = ";"
SYMLINK_TARGET_MARKER: str = "->"
# Undecodable filename bytes survive as lone surrogates; write them back unchanged.
TOKEN_ENCODING: str = "utf-8"
TOKEN_ENCODING_ERRORS: str = "surrogateescape"

DEFAULT_MAX_ENTRIES: int = 5000
DEFAULT_WORKERS: int = 1
MAX_WORKERS: int = 64

FILE_HASH_CHUNK_SIZE: int = 64 * 1024
CHECKSUM_CRC32: str = "crc32"
CHECKSUM_SHA256: str = "sha256"
VALID_CHECKSUM_ALGORITHMS: frozenset[str] = frozenset({CHECKSUM_CRC32, CHECKSUM_SHA256})
DEFAULT_CHECKSUM_ALGORITHM: str = CHECKSUM_CRC32

ENTRY_ERROR_SKIP: str = "skip"
ENTRY_ERROR_FAIL: str = "fail"
ENTRY_ERROR_COLLECT: str = "collect"
VALID_ENTRY_ERROR_POLICIES: frozenset[str] = frozenset({ENTRY_ERROR_SKIP, ENTRY_ERROR_FAIL, ENTRY_ERROR_COLLECT})
DEFAULT_ENTRY_ERROR_POLICY: str = ENTRY_ERROR_SKIP
