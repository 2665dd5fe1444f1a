"""Config data model for fingerprint runs."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from treehash.constants.fingerprint import (
    DEFAULT_CHECKSUM_ALGORITHM,
    DEFAULT_ENTRY_ERROR_POLICY,
    DEFAULT_MAX_ENTRIES,
    DEFAULT_WORKERS,
    ENTRY_ERROR_COLLECT,
    ENTRY_ERROR_FAIL,
    VALID_CHECKSUM_ALGORITHMS,
    VALID_ENTRY_ERROR_POLICIES,
)
from treehash.exceptions import ConfigError
from treehash.types.common import ChecksumAlgorithm, EntryErrorPolicy


@dataclass(frozen=True)
class FingerprintConfig:
    """Request-scoped settings for one fingerprint computation.

    ``max_entries`` caps the number of entries hashed before the walk stops
    and returns a partial digest. ``workers`` above one computes content
    checksums on a bounded thread pool.
    """

    max_entries: int = DEFAULT_MAX_ENTRIES
    fast_mode: bool = False
    on_entry_error: EntryErrorPolicy = DEFAULT_ENTRY_ERROR_POLICY  # type: ignore[assignment]
    prune_excluded_dirs: bool = True
    workers: int = DEFAULT_WORKERS
    checksum_algorithm: ChecksumAlgorithm = DEFAULT_CHECKSUM_ALGORITHM  # type: ignore[assignment]
    include_paths: tuple[str, ...] = ()
    exclude_patterns: tuple[str, ...] = ()
    ignore_file: Path | None = None

    def __post_init__(self) -> None:
        if self.max_entries <= 0:
            raise ConfigError(f"max_entries must be positive, got {self.max_entries}")
        if self.on_entry_error not in VALID_ENTRY_ERROR_POLICIES:
            raise ConfigError(f"Unknown on_entry_error policy {self.on_entry_error!r}")
        if self.checksum_algorithm not in VALID_CHECKSUM_ALGORITHMS:
            raise ConfigError(f"Unknown checksum_algorithm {self.checksum_algorithm!r}")

    @property
    def fails_on_entry_error(self) -> bool:
        """Whether a descendant failure aborts the whole computation."""
        return self.on_entry_error == ENTRY_ERROR_FAIL

    @property
    def collects_entry_errors(self) -> bool:
        """Whether dropped descendants are reported back to the caller."""
        return self.on_entry_error == ENTRY_ERROR_COLLECT
