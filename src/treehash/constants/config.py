"""Configuration defaults and filenames."""

from __future__ import annotations

CONFIG_FILENAME: str = "treehash.yaml"

ALLOWED_CONFIG_KEYS: frozenset[str] = frozenset(
    {
        "max_entries",
        "fast_mode",
        "on_entry_error",
        "prune_excluded_dirs",
        "workers",
        "checksum_algorithm",
        "include_paths",
        "exclude_patterns",
        "ignore_file",
    }
)
