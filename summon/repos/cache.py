"""Persisted snapshot of the last repository scan.

One JSON document per user, keyed by schema version and working directory.
Any document that cannot be trusted as a whole is treated as absent, which
transparently triggers a rescan.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import time
from collections.abc import Callable
from pathlib import Path

from platformdirs import user_cache_dir

from .scan import find_git_repositories
from .types import GitRepository

logger = logging.getLogger(__name__)

APP_NAME = "summon"
CACHE_FILENAME = "repos-cache.json"
CACHE_VERSION = 1
DEFAULT_CACHE_PATH = Path(user_cache_dir(APP_NAME, appauthor=False)) / CACHE_FILENAME


class RepoCacheStore:
    """Read/write the repository snapshot file at ``path``.

    ``scanner`` is the walk used by ``refresh`` and the warm-on-miss ``load``
    path; it defaults to :func:`find_git_repositories`.
    """

    def __init__(
        self,
        path: Path | None = None,
        scanner: Callable[[Path], list[GitRepository]] | None = None,
    ) -> None:
        self.path = path if path is not None else DEFAULT_CACHE_PATH
        self.scanner = scanner if scanner is not None else find_git_repositories

    def _miss(self, reason: str) -> None:
        logger.debug("repository cache miss (%s): %s", reason, self.path)
        return None

    def read(self, working_directory: Path | str) -> list[GitRepository] | None:
        """Return cached repositories for ``working_directory`` or ``None``."""
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return self._miss("absent")
        except OSError as exc:
            return self._miss(f"unreadable: {exc}")

        try:
            document = json.loads(raw)
        except ValueError:
            return self._miss("malformed json")
        if not isinstance(document, dict):
            return self._miss("not an object")
        if document.get("version") != CACHE_VERSION:
            return self._miss(f"version {document.get('version')!r}")
        if document.get("workingDirectory") != str(working_directory):
            return self._miss("working directory changed")

        raw_repos = document.get("repos")
        if not isinstance(raw_repos, list):
            return self._miss("repos is not a list")
        repos: list[GitRepository] = []
        for raw_repo in raw_repos:
            repo = GitRepository.from_json(raw_repo)
            if repo is None:
                return self._miss("malformed repository entry")
            repos.append(repo)
        return repos

    def write(self, working_directory: Path | str, repos: list[GitRepository]) -> None:
        """Replace the whole snapshot with ``repos`` for ``working_directory``."""
        payload = {
            "version": CACHE_VERSION,
            "workingDirectory": str(working_directory),
            "updatedAt": int(time.time() * 1000),
            "repos": [repo.to_json() for repo in repos],
        }
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=".repos-cache-", suffix=".tmp", dir=self.path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(json.dumps(payload, indent=2) + "\n")
            os.replace(tmp_name, self.path)
        except BaseException:
            try:
                os.unlink(tmp_name)
            except OSError:
                pass
            raise

    def refresh(self, working_directory: Path | str) -> list[GitRepository]:
        """Rescan ``working_directory`` and overwrite the snapshot."""
        repos = self.scanner(Path(working_directory))
        self.write(working_directory, repos)
        return repos

    def load(self, working_directory: Path | str) -> list[GitRepository]:
        """Return cached repositories, scanning and persisting on a miss."""
        cached = self.read(working_directory)
        if cached is not None:
            return cached
        repos = self.scanner(Path(working_directory))
        try:
            self.write(working_directory, repos)
        except OSError as exc:
            logger.warning("could not persist repository cache %s: %s", self.path, exc)
        return repos


__all__ = [
    "CACHE_FILENAME",
    "CACHE_VERSION",
    "DEFAULT_CACHE_PATH",
    "RepoCacheStore",
]
