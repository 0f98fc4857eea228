"""Tests for Git repository discovery under a working directory."""

from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from summon.repos import ROOT_FOLDER, ScanStats, find_git_repositories


def make_repo(path: Path) -> Path:
    (path / ".git").mkdir(parents=True)
    return path


class FindGitRepositoriesTests(unittest.TestCase):
    def test_flat_discovery_groups_by_top_level_folder(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            make_repo(root / "a")
            make_repo(root / "b")
            make_repo(root / "c" / "sub")

            repos = find_git_repositories(root)

        found = {(repo.name, repo.top_level_folder) for repo in repos}
        self.assertEqual(found, {("a", "a"), ("b", "b"), ("sub", "c")})
        self.assertEqual(
            {repo.path for repo in repos},
            {str(root / "a"), str(root / "b"), str(root / "c" / "sub")},
        )

    def test_nested_repository_is_not_reported(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            outer = make_repo(root / "outer")
            make_repo(outer / "inner")
            make_repo(outer / "deeper" / "still")

            repos = find_git_repositories(root)

        self.assertEqual([repo.name for repo in repos], ["outer"])
        for repo in repos:
            for other in repos:
                if other is not repo:
                    self.assertFalse(Path(other.path).is_relative_to(Path(repo.path)))

    def test_unreadable_sibling_is_skipped_without_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            make_repo(root / "a")
            blocked = root / "b"
            make_repo(blocked / "hidden")
            make_repo(root / "c")
            real_scandir = os.scandir

            def guarded_scandir(path):
                if Path(path) == blocked:
                    raise PermissionError(13, "Permission denied", str(path))
                return real_scandir(path)

            stats = ScanStats()
            with mock.patch("summon.repos.scan.os.scandir", side_effect=guarded_scandir):
                repos = find_git_repositories(root, stats)

        self.assertEqual(sorted(repo.name for repo in repos), ["a", "c"])
        self.assertEqual(stats.skipped, 1)
        self.assertGreaterEqual(stats.visited, 4)

    def test_root_that_is_a_repository_uses_root_sentinel(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = make_repo(Path(tmp).resolve() / "workspace")
            make_repo(root / "vendored")

            repos = find_git_repositories(root)

        self.assertEqual(len(repos), 1)
        self.assertEqual(repos[0].name, "workspace")
        self.assertEqual(repos[0].path, str(root))
        self.assertEqual(repos[0].top_level_folder, ROOT_FOLDER)

    def test_git_file_marks_a_repository(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            worktree = root / "group" / "worktree"
            worktree.mkdir(parents=True)
            (worktree / ".git").write_text("gitdir: /elsewhere\n", encoding="utf-8")

            repos = find_git_repositories(root)

        self.assertEqual([(repo.name, repo.top_level_folder) for repo in repos], [("worktree", "group")])

    def test_symlinked_directories_are_not_followed(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            base = Path(tmp).resolve()
            root = base / "root"
            root.mkdir()
            make_repo(base / "outside" / "project")
            (root / "link").symlink_to(base / "outside", target_is_directory=True)
            (root / "loop").symlink_to(root, target_is_directory=True)

            repos = find_git_repositories(root)

        self.assertEqual(repos, [])

    def test_paths_are_unique_and_order_is_depth_first_by_name(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            for relative in ("zeta/one", "alpha/two", "alpha/nested/three", "mid"):
                make_repo(root / relative)
            (root / "empty").mkdir()
            (root / "notes.txt").write_text("x\n", encoding="utf-8")

            repos = find_git_repositories(root)

        paths = [repo.path for repo in repos]
        self.assertEqual(len(paths), len(set(paths)))
        self.assertEqual([repo.name for repo in repos], ["three", "two", "mid", "one"])


if __name__ == "__main__":
    unittest.main()
