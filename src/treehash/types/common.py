"""Cross-module type aliases."""

from __future__ import annotations

from typing import Literal, TypeAlias

EntryErrorPolicy: TypeAlias = Literal["skip", "fail", "collect"]
ChecksumAlgorithm: TypeAlias = Literal["crc32", "sha256"]
