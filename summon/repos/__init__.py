"""Repository discovery: scanning, domain types, and the scan cache."""

from __future__ import annotations

from .cache import CACHE_VERSION, DEFAULT_CACHE_PATH, RepoCacheStore
from .scan import GIT_MARKER, ScanStats, find_git_repositories
from .types import ROOT_FOLDER, GitRepository

__all__ = [
    "CACHE_VERSION",
    "DEFAULT_CACHE_PATH",
    "GIT_MARKER",
    "GitRepository",
    "ROOT_FOLDER",
    "RepoCacheStore",
    "ScanStats",
    "find_git_repositories",
]
