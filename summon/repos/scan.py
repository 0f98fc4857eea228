"""Depth-first discovery of Git repository roots under a working directory.

A directory holding a ``.git`` entry (file or directory) is reported and never
descended into, so nested repositories and submodules stay invisible.
Unreadable directories are skipped without aborting the walk.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from .types import ROOT_FOLDER, GitRepository

logger = logging.getLogger(__name__)

GIT_MARKER = ".git"


@dataclass
class ScanStats:
    """Diagnostic counters filled in by one walk."""

    visited: int = 0
    skipped: int = 0


def _subdirectories(directory: Path) -> list[Path]:
    """Return direct child directories sorted by name; raises ``OSError``."""
    children: list[Path] = []
    with os.scandir(directory) as entries:
        for entry in entries:
            try:
                is_dir = entry.is_dir(follow_symlinks=False)
            except OSError:
                is_dir = False
            if is_dir:
                children.append(Path(entry.path))
    children.sort(key=lambda path: path.name)
    return children


def find_git_repositories(root: Path | str, stats: ScanStats | None = None) -> list[GitRepository]:
    """Return every outermost repository root beneath ``root``.

    ``root`` must be an existing directory; callers validate that. Order is
    depth-first with siblings visited by name.
    """
    root_path = Path(root)
    if stats is None:
        stats = ScanStats()
    repositories: list[GitRepository] = []

    # Explicit stack; children are pushed in reverse so they pop in name order.
    pending: list[tuple[Path, str]] = [(root_path, ROOT_FOLDER)]
    while pending:
        directory, top_level_folder = pending.pop()
        stats.visited += 1
        try:
            if (directory / GIT_MARKER).exists():
                repositories.append(
                    GitRepository(
                        name=directory.name,
                        path=str(directory),
                        top_level_folder=top_level_folder,
                    )
                )
                continue
            children = _subdirectories(directory)
        except OSError as exc:
            stats.skipped += 1
            logger.debug("skipping unreadable directory %s: %s", directory, exc)
            continue

        is_root = directory == root_path
        for child in reversed(children):
            pending.append((child, child.name if is_root else top_level_folder))

    logger.debug(
        "scanned %s: %d repositories, %d directories visited, %d skipped",
        root_path,
        len(repositories),
        stats.visited,
        stats.skipped,
    )
    return repositories


__all__ = ["GIT_MARKER", "ScanStats", "find_git_repositories"]
