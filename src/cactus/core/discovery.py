"""Repository discovery beneath a root directory."""

from __future__ import annotations

import logging
from pathlib import Path

from cactus.core.walk import WalkAction, pruned_walk
from cactus.targets import VCS_MARKER

log = logging.getLogger(__name__)


def is_repository(path: Path) -> bool:
    """Check whether *path* carries a version-control marker.

    The marker may be a directory or, for worktrees and submodules,
    a file pointing at one.
    """
    try:
        return (path / VCS_MARKER).exists()
    except OSError:
        return False


def find_repos(root: Path, max_depth: int) -> list[Path]:
    """Find repository roots under *root*, at most *max_depth* levels down.

    Depth 0 is *root* itself. Descent stops at each repository found,
    so repositories nested inside another are not reported separately.
    """

    def decide(path: Path, depth: int) -> WalkAction:
        if is_repository(path):
            return WalkAction.CLASSIFY
        if depth >= max_depth:
            return WalkAction.SKIP
        return WalkAction.DESCEND

    repos = sorted(pruned_walk(root, decide))
    log.info("Found %d repositories under %s", len(repos), root)
    return repos
