"""Tests for repository discovery."""

from __future__ import annotations

import os

from cactus.core.discovery import find_repos, is_repository


def _fake_repo(path):
    (path / ".git").mkdir(parents=True)
    return path


class TestIsRepository:
    def test_marker_dir(self, tmp_path):
        assert is_repository(_fake_repo(tmp_path / "proj"))

    def test_marker_file(self, tmp_path):
        """Worktrees and submodules carry a .git file instead of a directory."""
        (tmp_path / "wt").mkdir()
        (tmp_path / "wt" / ".git").write_text("gitdir: /elsewhere\n")
        assert is_repository(tmp_path / "wt")

    def test_plain_dir(self, tmp_path):
        assert not is_repository(tmp_path)


class TestFindRepos:
    def test_root_itself_is_repo(self, tmp_path):
        _fake_repo(tmp_path)
        (tmp_path / "sub").mkdir()
        _fake_repo(tmp_path / "sub" / "inner")

        assert find_repos(tmp_path, 3) == [tmp_path]

    def test_sorted_output(self, tmp_path):
        for name in ("zeta", "alpha", "mid/beta"):
            _fake_repo(tmp_path / name)

        assert find_repos(tmp_path, 3) == [
            tmp_path / "alpha",
            tmp_path / "mid" / "beta",
            tmp_path / "zeta",
        ]

    def test_nested_repos_not_reported(self, tmp_path):
        outer = _fake_repo(tmp_path / "outer")
        _fake_repo(outer / "vendor" / "inner")

        assert find_repos(tmp_path, 3) == [outer]

    def test_depth_limit(self, tmp_path):
        shallow = _fake_repo(tmp_path / "a")
        at_limit = _fake_repo(tmp_path / "b" / "c")
        _fake_repo(tmp_path / "d" / "e" / "f")

        assert find_repos(tmp_path, 2) == [shallow, at_limit]
        assert find_repos(tmp_path, 1) == [shallow]

    def test_depth_zero_only_checks_root(self, tmp_path):
        _fake_repo(tmp_path / "a")
        assert find_repos(tmp_path, 0) == []

    def test_symlinks_not_followed(self, tmp_path):
        real = _fake_repo(tmp_path / "real")
        (tmp_path / "links").mkdir()
        os.symlink(real, tmp_path / "links" / "alias")

        assert find_repos(tmp_path, 3) == [real]

    def test_no_repos(self, tmp_path):
        (tmp_path / "just" / "dirs").mkdir(parents=True)
        assert find_repos(tmp_path, 3) == []

    def test_unreadable_dir_skipped(self, tmp_path, monkeypatch):
        _fake_repo(tmp_path / "locked" / "hidden_repo")
        visible = _fake_repo(tmp_path / "open" / "repo")
        real_scandir = os.scandir

        def guarded_scandir(path):
            if str(path) == str(tmp_path / "locked"):
                raise PermissionError(13, "Permission denied", str(path))
            return real_scandir(path)

        monkeypatch.setattr("cactus.core.walk.os.scandir", guarded_scandir)

        assert find_repos(tmp_path, 3) == [visible]
