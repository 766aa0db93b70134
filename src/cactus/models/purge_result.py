"""Purge result dataclass."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True)
class PurgeResult:
    """Result of a purge operation."""

    freed_bytes: int = 0
    errors: list[str] = field(default_factory=list)
    dirs_removed: int = 0

    @property
    def failures(self) -> int:
        return len(self.errors)
