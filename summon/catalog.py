"""Project catalog: one flat list of selectable projects for either config mode.

Auto-discovery mode (a working directory is configured) lists scanned
repositories grouped by top-level folder and ignores the manual map entirely.
Manual mode flattens the category -> name -> path map from the config.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .config import ConfigError
from .context import InvocationContext
from .picker.matching import filter_items
from .picker.rows import SelectionRow, flat_rows, grouped_rows, name_sort_key
from .repos.types import GitRepository

MODE_AUTO = "auto"
MODE_MANUAL = "manual"


@dataclass(frozen=True)
class CatalogEntry:
    """One selectable project."""

    category: str
    name: str
    path: str
    display: str

    def search_fields(self) -> tuple[str, str, str]:
        return (self.name, self.category, self.path)


class ProjectCatalog:
    """Ordered projects plus the mode-specific list formatting."""

    def __init__(
        self,
        mode: str,
        entries: list[CatalogEntry],
        working_directory: Path | None = None,
        category_names: list[str] | None = None,
    ) -> None:
        self.mode = mode
        self.entries = entries
        self.working_directory = working_directory
        self.category_names = category_names

    @property
    def auto_discovery(self) -> bool:
        return self.mode == MODE_AUTO

    @classmethod
    def from_repositories(cls, working_directory: Path, repos: list[GitRepository]) -> ProjectCatalog:
        ordered = sorted(repos, key=lambda repo: name_sort_key(repo.name))
        entries = [
            CatalogEntry(
                category=repo.top_level_folder,
                name=repo.name,
                path=repo.path,
                display=f"{repo.name} ({repo.path})",
            )
            for repo in ordered
        ]
        return cls(MODE_AUTO, entries, working_directory)

    @classmethod
    def from_category_map(cls, repos: dict[str, dict[str, str]]) -> ProjectCatalog:
        entries = [
            CatalogEntry(category=category, name=name, path=path, display=f"{name} ({category})")
            for category, projects in repos.items()
            for name, path in projects.items()
        ]
        return cls(MODE_MANUAL, entries, category_names=list(repos))

    def categories(self) -> list[str]:
        """Return configured categories, or distinct entry categories in first-seen order.

        A manual map keeps categories that hold no projects.
        """
        if self.category_names is not None:
            return list(self.category_names)
        return list(dict.fromkeys(entry.category for entry in self.entries))

    def entries_in_category(self, category: str) -> list[CatalogEntry]:
        return [entry for entry in self.entries if entry.category == category]

    def search(self, query: str) -> list[CatalogEntry]:
        """Return entries matching every keyword of ``query`` in catalog order."""
        return filter_items(query, self.entries, CatalogEntry.search_fields)

    def rows(self, query: str = "") -> list[SelectionRow]:
        """Return the formatted selection list for ``query``."""
        matches = self.search(query)
        if self.auto_discovery:
            return grouped_rows(matches, lambda entry: entry.category, lambda entry: entry.display)
        return flat_rows(matches, lambda entry: entry.display)


def require_working_directory(working_directory: Path) -> None:
    """Raise ``ConfigError`` unless ``working_directory`` is an existing directory."""
    if not working_directory.exists():
        raise ConfigError(f"Working directory does not exist: {working_directory}")
    if not working_directory.is_dir():
        raise ConfigError(f"Working directory is not a directory: {working_directory}")


def build_catalog(context: InvocationContext, refresh: bool = False) -> ProjectCatalog:
    """Build the catalog for the active config mode.

    ``refresh`` forces a rescan in auto-discovery mode; otherwise the cache is
    used and warmed on a miss.
    """
    working_directory = context.config.working_directory
    if working_directory is None:
        return ProjectCatalog.from_category_map(context.config.repos)

    require_working_directory(working_directory)
    if refresh:
        repos = context.cache.refresh(working_directory)
    else:
        repos = context.cache.load(working_directory)
    return ProjectCatalog.from_repositories(working_directory, repos)


__all__ = [
    "CatalogEntry",
    "MODE_AUTO",
    "MODE_MANUAL",
    "ProjectCatalog",
    "build_catalog",
    "require_working_directory",
]
