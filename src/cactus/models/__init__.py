"""Cactus data models."""

from cactus.models.scan_result import PurgeCandidate, ScanResult
from cactus.models.purge_result import PurgeResult

__all__ = [
    "PurgeCandidate",
    "PurgeResult",
    "ScanResult",
]
