"""Pruned depth-first directory walk."""

from __future__ import annotations

import enum
import logging
import os
from pathlib import Path
from typing import Callable, Iterator

log = logging.getLogger(__name__)


class WalkAction(enum.Enum):
    """What to do with a directory reached by the walk."""

    DESCEND = "descend"
    CLASSIFY = "classify"
    SKIP = "skip"


# (path, depth) -> action; depth 0 is the walk root
Decider = Callable[[Path, int], WalkAction]


def _subdirs(path: Path) -> list[Path]:
    """Return non-symlink subdirectories of *path*, sorted by name."""
    found: list[Path] = []
    try:
        with os.scandir(path) as it:
            for entry in it:
                try:
                    if entry.is_dir(follow_symlinks=False):
                        found.append(Path(entry.path))
                except OSError:
                    pass
    except OSError:
        log.debug("Cannot read directory: %s", path)
    found.sort(key=lambda p: p.name)
    return found


def pruned_walk(root: Path, decide: Decider) -> Iterator[Path]:
    """Walk *root* depth-first, yielding every directory *decide* classifies.

    ``decide`` is consulted for each directory, the root included.
    Classified and skipped directories are never entered. Directories
    are visited in pre-order with siblings sorted by name, so the output
    order is stable across runs. Symlinked directories are not followed
    and unreadable directories contribute nothing.
    """
    stack: list[tuple[Path, int]] = [(root, 0)]
    while stack:
        path, depth = stack.pop()
        action = decide(path, depth)
        if action is WalkAction.CLASSIFY:
            yield path
        elif action is WalkAction.DESCEND:
            children = _subdirs(path)
            stack.extend((child, depth + 1) for child in reversed(children))
