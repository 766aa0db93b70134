"""Discovery, scanning and purging orchestration engine."""

from __future__ import annotations

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Callable

from cactus.core.discovery import find_repos
from cactus.core.scanner import find_purgeable
from cactus.models.purge_result import PurgeResult
from cactus.models.scan_result import ScanResult
from cactus.targets import DEFAULT_MAX_DEPTH
from cactus.utils import remove_candidates

log = logging.getLogger(__name__)

ResultCallback = Callable[[ScanResult], None]


class CactusError(Exception):
    """Base class for fatal conditions that abort before touching disk."""


class RootInaccessibleError(CactusError):
    """Raised when the starting path cannot be resolved."""

    def __init__(self, path: Path | str) -> None:
        super().__init__(f"cannot access '{path}'")
        self.path = path


class NoRepositoriesError(CactusError):
    """Raised when discovery finds no repositories."""

    def __init__(self, root: Path) -> None:
        super().__init__(f"No git repos found in {root}")
        self.root = root


def resolve_root(path: Path | str) -> Path:
    """Return the canonical form of *path*, which must be a directory."""
    try:
        resolved = Path(path).resolve(strict=True)
    except (OSError, RuntimeError) as exc:
        raise RootInaccessibleError(path) from exc
    if not resolved.is_dir():
        raise RootInaccessibleError(path)
    return resolved


class PurgeEngine:
    """Finds repositories, scans them in parallel and purges the results."""

    def __init__(self, max_workers: int | None = None) -> None:
        self.max_workers = max_workers or os.cpu_count() or 1

    def find_repositories(self, root: Path | str, max_depth: int = DEFAULT_MAX_DEPTH) -> tuple[Path, list[Path]]:
        """Resolve *root* and discover the repositories beneath it.

        Returns:
            (canonical_root, sorted_repository_paths) tuple.

        Raises:
            RootInaccessibleError: If *root* cannot be resolved.
            NoRepositoriesError: If no repository is found.
        """
        base = resolve_root(root)
        repos = find_repos(base, max_depth)
        if not repos:
            raise NoRepositoriesError(base)
        return base, repos

    def scan(self, repos: list[Path], on_result: ResultCallback | None = None) -> list[ScanResult]:
        """Scan repositories for purge candidates.

        Each repository is scanned by an independent task; tasks share no
        state and each returns its own result, collected once all finish.
        Runs sequentially on single-core machines or for a single repo.

        Args:
            repos: Repository roots to scan.
            on_result: Optional callback fired for each non-empty result.

        Returns:
            Non-empty scan results, sorted by repository path.
        """
        if not repos:
            return []

        if self.max_workers > 1 and len(repos) > 1:
            workers = min(self.max_workers, len(repos))
            with ThreadPoolExecutor(max_workers=workers) as executor:
                scanned = list(executor.map(self._scan_repo, repos))
        else:
            scanned = [self._scan_repo(repo) for repo in repos]

        results = sorted((r for r in scanned if not r.is_empty), key=lambda r: r.repo)
        if on_result:
            for result in results:
                on_result(result)
        log.info("%d of %d repositories have something to purge", len(results), len(repos))
        return results

    @staticmethod
    def _scan_repo(repo: Path) -> ScanResult:
        try:
            return ScanResult(repo=repo, candidates=find_purgeable(repo))
        except Exception:
            log.exception("Scan of '%s' failed", repo)
            return ScanResult(repo=repo)

    def purge(self, results: list[ScanResult]) -> PurgeResult:
        """Delete every candidate in *results*.

        Freed bytes use the sizes captured at scan time. One failed
        deletion is recorded and does not stop the rest.
        """
        candidates = [c for r in results for c in r.candidates]
        freed, removed, errors = remove_candidates(candidates)
        log.info("Purged %d of %d directories, %d bytes freed", removed, len(candidates), freed)
        return PurgeResult(freed_bytes=freed, errors=errors, dirs_removed=removed)
