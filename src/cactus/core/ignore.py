"""Ignore-rule queries answered by git itself."""

from __future__ import annotations

import logging
import os
import subprocess
from pathlib import Path

from cactus.utils import has_command

log = logging.getLogger(__name__)

# Timeout for a single ``git check-ignore`` call (seconds).
_CHECK_TIMEOUT = 30

# Variables that would point git at a different repository than the one queried
_REPO_OVERRIDE_VARS = (
    "GIT_DIR",
    "GIT_WORK_TREE",
    "GIT_INDEX_FILE",
    "GIT_COMMON_DIR",
    "GIT_OBJECT_DIRECTORY",
    "GIT_NAMESPACE",
    "GIT_CEILING_DIRECTORIES",
)


def git_available() -> bool:
    """Check if the git executable is on PATH."""
    return has_command("git")


def _git_env(repo: Path) -> dict[str, str]:
    """Build an environment that confines git to *repo*.

    Inherited overrides are dropped, discovery may not climb above
    *repo*, and paths are taken literally rather than as pathspec magic.
    """
    env = {k: v for k, v in os.environ.items() if k not in _REPO_OVERRIDE_VARS}
    env["GIT_CEILING_DIRECTORIES"] = os.path.dirname(os.path.abspath(repo))
    env["GIT_LITERAL_PATHSPECS"] = "1"
    return env


class IgnoreOracle:
    """Answers whether paths inside one repository are ignored.

    Every query goes through ``git check-ignore`` so that the full set of
    ignore sources (``.gitignore`` files at every level, ``info/exclude``,
    ``core.excludesFile``) is honoured exactly as git sees it. A path whose
    exact entry is tracked in the index reads as not ignored, but a
    directory that merely contains tracked files can still be ignored.

    Any failure to get an answer counts as "not ignored": a false
    positive here would delete something the user wanted to keep.
    """

    def __init__(self, repo: Path) -> None:
        self.repo = repo

    def is_ignored(self, relative_path: Path | str) -> bool:
        """Check if a directory, given relative to the repository, is ignored.

        The path is queried with a trailing slash so directory-only
        patterns such as ``build/`` match.
        """
        query = Path(relative_path).as_posix().rstrip("/") + "/"
        try:
            proc = subprocess.run(
                ["git", "-C", str(self.repo), "check-ignore", "-q", "--", query],
                capture_output=True,
                text=True,
                timeout=_CHECK_TIMEOUT,
                env=_git_env(self.repo),
            )
        except FileNotFoundError:
            log.warning("git executable not found; treating %s as not ignored", query)
            return False
        except (subprocess.TimeoutExpired, OSError) as exc:
            log.warning("Ignore check failed for %s in %s: %s", query, self.repo, exc)
            return False

        if proc.returncode == 0:
            return True
        if proc.returncode != 1:
            log.debug(
                "git check-ignore exited %d for %s in %s: %s",
                proc.returncode,
                query,
                self.repo,
                proc.stderr.strip(),
            )
        return False
