"""Domain types for discovered Git repositories."""

from __future__ import annotations

from dataclasses import dataclass

# Grouping key for a repository that is the scan root itself.
ROOT_FOLDER = "/"


@dataclass(frozen=True)
class GitRepository:
    """One repository root found under a working directory."""

    name: str
    path: str
    top_level_folder: str

    def to_json(self) -> dict[str, str]:
        return {"name": self.name, "path": self.path, "topLevelFolder": self.top_level_folder}

    @classmethod
    def from_json(cls, raw: object) -> GitRepository | None:
        """Decode one cache entry, returning ``None`` for malformed shapes."""
        if not isinstance(raw, dict):
            return None
        name = raw.get("name")
        path = raw.get("path")
        top_level_folder = raw.get("topLevelFolder")
        if not all(isinstance(value, str) for value in (name, path, top_level_folder)):
            return None
        return cls(name=name, path=path, top_level_folder=top_level_folder)
