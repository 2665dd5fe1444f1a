"""Cap on the number of entries folded into one fingerprint."""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


class OverflowGuard:
    """Counts admitted entries and refuses any beyond ``limit``.

    Tripping the guard is not an error: the walk stops and the caller gets a
    digest over the entries admitted so far.
    """

    def __init__(self, limit: int) -> None:
        if limit <= 0:
            raise ValueError(f"Overflow limit must be positive, got {limit}")
        self.limit = limit
        self.visited = 0
        self.tripped = False

    def admit(self) -> bool:
        """Count one more entry, or return False once the limit is reached."""
        if self.visited >= self.limit:
            if not self.tripped:
                logger.warning("Entry limit of %d reached; fingerprint covers a partial tree", self.limit)
            self.tripped = True
            return False
        self.visited += 1
        return True
