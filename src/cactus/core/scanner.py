"""Per-repository scan for purgeable directories."""

from __future__ import annotations

import logging
from pathlib import Path

from cactus.core.ignore import IgnoreOracle
from cactus.core.walk import WalkAction, pruned_walk
from cactus.models.scan_result import PurgeCandidate
from cactus.targets import HIDDEN_PREFIX, TARGET_NAMES
from cactus.utils import dir_size

log = logging.getLogger(__name__)


def classify(path: Path, depth: int) -> WalkAction:
    """Decide how the scan treats a directory inside a repository.

    Target names are classified (and never entered) whether or not they
    turn out to be ignored. Other hidden directories, the repository's
    own metadata included, are skipped.
    """
    if depth == 0:
        return WalkAction.DESCEND
    name = path.name
    if name in TARGET_NAMES:
        return WalkAction.CLASSIFY
    if name.startswith(HIDDEN_PREFIX):
        return WalkAction.SKIP
    return WalkAction.DESCEND


def find_purgeable(repo: Path, oracle: IgnoreOracle | None = None) -> list[PurgeCandidate]:
    """Scan a repository for ignored target directories.

    Returns candidates in walk order, each with its size measured now.
    MUST NOT delete anything.
    """
    if oracle is None:
        oracle = IgnoreOracle(repo)

    candidates: list[PurgeCandidate] = []
    for path in pruned_walk(repo, classify):
        rel = path.relative_to(repo)
        if not oracle.is_ignored(rel):
            log.debug("Not ignored, leaving alone: %s", path)
            continue
        candidates.append(PurgeCandidate(path=path, size_bytes=dir_size(path)))

    log.debug("Scanned %s: %d candidates", repo, len(candidates))
    return candidates
