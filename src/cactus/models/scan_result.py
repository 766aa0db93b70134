"""Scan result dataclasses."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True, slots=True)
class PurgeCandidate:
    """Ignored target directory that can be purged.

    ``size_bytes`` is measured once at scan time and is the figure shown
    to the user and credited when the directory is removed.
    """

    path: Path
    size_bytes: int

    def relative_to(self, repo: Path) -> Path:
        return self.path.relative_to(repo)


@dataclass(slots=True)
class ScanResult:
    """Purge candidates found in one repository, in walk order."""

    repo: Path
    candidates: list[PurgeCandidate] = field(default_factory=list)

    @property
    def total_bytes(self) -> int:
        return sum(c.size_bytes for c in self.candidates)

    @property
    def is_empty(self) -> bool:
        return not self.candidates
