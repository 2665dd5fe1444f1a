"""Tree walking and fingerprint orchestration."""

from __future__ import annotations

from treehash.types import FingerprintResult

from .orchestrator import compute_fingerprint, fingerprint_directory

__all__ = ["FingerprintResult", "compute_fingerprint", "fingerprint_directory"]
