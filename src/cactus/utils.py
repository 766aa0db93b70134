"""Shared utility functions."""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path

from cactus.models.scan_result import PurgeCandidate

log = logging.getLogger(__name__)


def has_command(name: str) -> bool:
    """Check if a command exists on the system."""
    return shutil.which(name) is not None


def remove_candidates(candidates: list[PurgeCandidate]) -> tuple[int, int, list[str]]:
    """Remove candidate directories and return (freed_bytes, dirs_removed, errors).

    Freed bytes are the sizes recorded at scan time; nothing is re-measured.
    A failure on one candidate is recorded and the rest are still removed.
    """
    freed = 0
    removed = 0
    errors: list[str] = []

    for candidate in candidates:
        try:
            shutil.rmtree(candidate.path)
            freed += candidate.size_bytes
            removed += 1
        except OSError as e:
            log.debug("Failed to remove %s: %s", candidate.path, e)
            errors.append(f"{candidate.path}: {e}")

    return freed, removed, errors


def dir_size(path: Path | str) -> int:
    """Calculate the total size of regular files in a directory tree.

    Walks with an explicit stack, so deep trees are not bound by the
    recursion limit. Symlinks are neither followed nor counted, and
    unreadable directories or files contribute nothing.
    """
    total = 0
    stack: list[Path | str] = [path]
    while stack:
        current = stack.pop()
        try:
            with os.scandir(current) as it:
                for entry in it:
                    try:
                        if entry.is_dir(follow_symlinks=False):
                            stack.append(entry.path)
                        elif entry.is_file(follow_symlinks=False):
                            total += entry.stat(follow_symlinks=False).st_size
                    except OSError:
                        pass
        except OSError:
            log.debug("Cannot read directory: %s", current)
    return total


def bytes_to_human(size_bytes: int) -> str:
    """Convert a byte count to a binary-unit string.

    B and KiB are shown without decimals, MiB and GiB with one.
    """
    kib = 1024
    mib = 1024 * kib
    gib = 1024 * mib

    if size_bytes >= gib:
        return f"{size_bytes / gib:.1f} GiB"
    if size_bytes >= mib:
        return f"{size_bytes / mib:.1f} MiB"
    if size_bytes >= kib:
        return f"{size_bytes / kib:.0f} KiB"
    return f"{size_bytes} B"
