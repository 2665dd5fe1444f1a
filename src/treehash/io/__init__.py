"""Shared file I/O helpers."""

from .files import file_checksum, file_crc32, file_sha256

__all__ = ["file_checksum", "file_crc32", "file_sha256"]
