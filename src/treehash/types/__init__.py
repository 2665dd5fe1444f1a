"""Shared types for treehash."""

from .common import ChecksumAlgorithm, EntryErrorPolicy
from .fingerprint import EntryError, FingerprintResult, IgnoreDecision, VisitedEntry

__all__ = [
    "ChecksumAlgorithm",
    "EntryError",
    "EntryErrorPolicy",
    "FingerprintResult",
    "IgnoreDecision",
    "VisitedEntry",
]
