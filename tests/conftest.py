"""Shared test fixtures."""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path

import pytest

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")


@pytest.fixture(autouse=True)
def isolate_git_config(tmp_path, tmp_path_factory, monkeypatch):
    """Keep the user's and system's git config (and global excludes) out of tests."""
    home = tmp_path_factory.mktemp("home")
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home / ".config"))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("GIT_CONFIG_GLOBAL", str(home / ".gitconfig"))
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path.parent))


@pytest.fixture
def make_repo(tmp_path):
    """Factory creating a git repository under tmp_path with an optional .gitignore."""

    def _make(name: str, gitignore: str = "", base: Path | None = None) -> Path:
        repo = (base or tmp_path) / name
        repo.mkdir(parents=True, exist_ok=True)
        subprocess.run(["git", "init", "-q"], cwd=repo, check=True, capture_output=True)
        if gitignore:
            (repo / ".gitignore").write_text(gitignore)
        return repo

    return _make


def write_file(path: Path, size: int) -> Path:
    """Create *path* (and its parents) holding *size* bytes."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"x" * size)
    return path
