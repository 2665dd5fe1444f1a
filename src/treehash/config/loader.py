"""Config loading and normalization for fingerprint runs."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from treehash.config.model import FingerprintConfig
from treehash.constants.config import ALLOWED_CONFIG_KEYS, CONFIG_FILENAME
from treehash.constants.fingerprint import (
    DEFAULT_CHECKSUM_ALGORITHM,
    DEFAULT_ENTRY_ERROR_POLICY,
    DEFAULT_MAX_ENTRIES,
    DEFAULT_WORKERS,
    MAX_WORKERS,
    VALID_CHECKSUM_ALGORITHMS,
    VALID_ENTRY_ERROR_POLICIES,
)
from treehash.exceptions import ConfigError
from treehash.ignore.ignorefile import load_ignore_file

logger = logging.getLogger(__name__)


def load_config(root: Path, config_path: Path | None = None) -> FingerprintConfig:
    """Load and validate fingerprint config from ``treehash.yaml`` or an explicit path."""
    root = root.resolve()
    path = config_path.resolve() if config_path else (root / CONFIG_FILENAME)
    if not path.exists():
        if config_path is not None:
            raise ConfigError(f"Config file not found: {path}")
        return FingerprintConfig()

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML config file at {path}: {exc}") from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Config file at {path} must be a YAML mapping")

    unknown = sorted(str(key) for key in raw if key not in ALLOWED_CONFIG_KEYS)
    if unknown:
        raise ConfigError(f"Unknown config key(s) in {path}: {', '.join(unknown)}")

    max_entries = raw.get("max_entries", DEFAULT_MAX_ENTRIES)
    if isinstance(max_entries, bool) or not isinstance(max_entries, int) or max_entries <= 0:
        raise ConfigError("max_entries must be a positive integer")

    workers = raw.get("workers", DEFAULT_WORKERS)
    if isinstance(workers, bool) or not isinstance(workers, int) or not 1 <= workers <= MAX_WORKERS:
        raise ConfigError(f"workers must be an integer between 1 and {MAX_WORKERS}")

    on_entry_error = raw.get("on_entry_error", DEFAULT_ENTRY_ERROR_POLICY)
    if not isinstance(on_entry_error, str) or on_entry_error not in VALID_ENTRY_ERROR_POLICIES:
        raise ConfigError(
            f"on_entry_error must be one of {sorted(VALID_ENTRY_ERROR_POLICIES)}, got {on_entry_error!r}"
        )

    checksum_algorithm = raw.get("checksum_algorithm", DEFAULT_CHECKSUM_ALGORITHM)
    if not isinstance(checksum_algorithm, str) or checksum_algorithm not in VALID_CHECKSUM_ALGORITHMS:
        raise ConfigError(
            f"checksum_algorithm must be one of {sorted(VALID_CHECKSUM_ALGORITHMS)}, got {checksum_algorithm!r}"
        )

    ignore_file_raw = raw.get("ignore_file")
    ignore_file: Path | None = None
    if ignore_file_raw is not None:
        if not isinstance(ignore_file_raw, str) or not ignore_file_raw.strip():
            raise ConfigError("ignore_file must be a non-empty string")
        ignore_file = Path(ignore_file_raw)
        if not ignore_file.is_absolute():
            ignore_file = root / ignore_file

    logger.debug("Loaded fingerprint config from %s", path)
    return FingerprintConfig(
        max_entries=max_entries,
        fast_mode=_ensure_bool(raw.get("fast_mode", False), "fast_mode"),
        on_entry_error=on_entry_error,  # type: ignore[arg-type]
        prune_excluded_dirs=_ensure_bool(raw.get("prune_excluded_dirs", True), "prune_excluded_dirs"),
        workers=workers,
        checksum_algorithm=checksum_algorithm,  # type: ignore[arg-type]
        include_paths=tuple(
            _normalize_include_path(item)
            for item in _ensure_string_list(raw.get("include_paths", []), "include_paths")
            if item.strip()
        ),
        exclude_patterns=tuple(_ensure_string_list(raw.get("exclude_patterns", []), "exclude_patterns")),
        ignore_file=ignore_file,
    )


def resolve_exclude_patterns(config: FingerprintConfig, patterns: tuple[str, ...] | list[str] = ()) -> tuple[str, ...]:
    """Combine ignore-file, config and call-site patterns in precedence order.

    Later patterns win when matching, so call-site patterns come last.
    """
    combined: list[str] = []
    if config.ignore_file is not None:
        combined.extend(load_ignore_file(config.ignore_file))
    combined.extend(config.exclude_patterns)
    combined.extend(patterns)
    return tuple(combined)


def _ensure_bool(value: Any, key_name: str) -> bool:
    if not isinstance(value, bool):
        raise ConfigError(f"{key_name} must be a boolean")
    return value


def _ensure_string_list(value: Any, key_name: str) -> list[str]:
    """Coerce a value to a list of strings, raising ConfigError on type mismatch."""
    if value is None:
        return []
    if not isinstance(value, (list, tuple)) or not all(isinstance(item, str) for item in value):
        raise ConfigError(f"{key_name} must be a list of strings")
    return list(value)


def _normalize_include_path(value: str) -> str:
    normalized = value.strip().replace("\\", "/").strip("/")
    if normalized.startswith("./"):
        normalized = normalized[2:]
    if normalized in {"", ".", ".."} or normalized.startswith("../"):
        raise ConfigError(f"include_paths entries must be relative paths inside the root, got {value!r}")
    return normalized
