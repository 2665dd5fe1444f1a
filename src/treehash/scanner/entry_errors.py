"""Policy for failures on individual entries below the scan root."""

from __future__ import annotations

import logging

from treehash.config.model import FingerprintConfig
from treehash.exceptions import EntryReadError
from treehash.types import EntryError

logger = logging.getLogger(__name__)


def record_entry_error(
    config: FingerprintConfig,
    errors: list[EntryError] | None,
    *,
    relative_path: str,
    operation: str,
    exc: OSError,
) -> None:
    """Apply ``config.on_entry_error`` to a failed descendant entry.

    ``fail`` raises ``EntryReadError``; ``collect`` appends to *errors*;
    ``skip`` only logs. The entry never reaches the digest.
    """
    message = exc.strerror or str(exc)
    if config.fails_on_entry_error:
        raise EntryReadError(relative_path, operation, message) from exc

    logger.debug("Skipping %s after %s failure: %s", relative_path, operation, message)
    if config.collects_entry_errors and errors is not None:
        errors.append(EntryError(relative_path=relative_path, operation=operation, message=message))
