"""Streaming file checksums."""

from __future__ import annotations

import hashlib
import zlib
from pathlib import Path

from treehash.constants.fingerprint import CHECKSUM_CRC32, CHECKSUM_SHA256, FILE_HASH_CHUNK_SIZE


def file_sha256(path: str | Path) -> str:
    """Return SHA-256 hex digest for a file."""
    digest = hashlib.sha256()
    with open(path, "rb") as handle:
        for chunk in iter(lambda: handle.read(FILE_HASH_CHUNK_SIZE), b""):
            digest.update(chunk)
    return digest.hexdigest()


def file_crc32(path: str | Path) -> str:
    """Return the IEEE CRC-32 of a file as eight lowercase hex digits."""
    crc = 0
    with open(path, "rb") as handle:
        for chunk in iter(lambda: handle.read(FILE_HASH_CHUNK_SIZE), b""):
            crc = zlib.crc32(chunk, crc)
    return f"{crc & 0xFFFFFFFF:08x}"


def file_checksum(path: str | Path, algorithm: str = CHECKSUM_CRC32) -> str:
    """Return the hex checksum of a file using *algorithm*."""
    if algorithm == CHECKSUM_CRC32:
        return file_crc32(path)
    if algorithm == CHECKSUM_SHA256:
        return file_sha256(path)
    raise ValueError(f"Unsupported checksum algorithm: {algorithm!r}")
