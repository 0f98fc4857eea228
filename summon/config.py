"""Persistent JSON config for summon.

The document lives under the platform config dir, with a fallback to the
legacy ``~/.hsh/config.json`` location. Unlike preferences, this file is
required: commands that need it fail with :class:`ConfigError` when it is
missing or malformed.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from platformdirs import user_config_dir

logger = logging.getLogger(__name__)

APP_NAME = "summon"
CONFIG_FILENAME = "config.json"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
LEGACY_CONFIG_PATH = Path.home() / ".hsh" / "config.json"
CONFIG_PATH = DEFAULT_CONFIG_PATH

# Top-level keys whose presence marks the current document layout.
_STRUCTURED_KEYS = ("repos", "workingDirectory", "yiren")


class ConfigError(Exception):
    """Configuration is missing, unreadable, or points at a missing resource."""


def _load_config_path() -> Path:
    """Return preferred config path, falling back to legacy location when needed."""
    if CONFIG_PATH.exists():
        return CONFIG_PATH
    if CONFIG_PATH == DEFAULT_CONFIG_PATH and LEGACY_CONFIG_PATH.exists():
        return LEGACY_CONFIG_PATH
    return CONFIG_PATH


def load_config_document() -> dict[str, object]:
    """Load the raw top-level JSON object.

    Raises ``ConfigError`` when the file is missing, unreadable, malformed, or
    not a JSON object.
    """
    path = _load_config_path()
    if not path.exists():
        raise ConfigError(f"Configuration file not found: {path} (run `summon init` to create it)")
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigError(f"Cannot read configuration file {path}: {exc}") from exc
    except ValueError as exc:
        raise ConfigError(f"Configuration file {path} is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration file {path} must contain a JSON object")
    return data


def save_config(data: dict[str, object], path: Path | None = None) -> Path:
    """Persist config data as pretty-printed JSON.

    Writes to ``path`` when given, otherwise to the file ``load_config_document``
    reads, so edits to a legacy-located config stay in place.
    """
    if path is None:
        path = _load_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    return path


def _string_map(value: object) -> dict[str, str]:
    if not isinstance(value, dict):
        return {}
    return {key: item for key, item in value.items() if isinstance(key, str) and isinstance(item, str)}


def _category_map(value: object) -> dict[str, dict[str, str]]:
    if not isinstance(value, dict):
        return {}
    return {key: _string_map(projects) for key, projects in value.items() if isinstance(key, str)}


def _url_groups(value: object) -> dict[str, list[str]]:
    if not isinstance(value, dict):
        return {}
    groups: dict[str, list[str]] = {}
    for key, urls in value.items():
        if not isinstance(key, str) or not isinstance(urls, list):
            continue
        groups[key] = [url for url in urls if isinstance(url, str)]
    return groups


def is_legacy_document(data: dict[str, object]) -> bool:
    """Return whether ``data`` predates the structured layout (a bare repos map)."""
    return not any(key in data for key in _STRUCTURED_KEYS)


def migrate_document(data: dict[str, object]) -> dict[str, object]:
    """Return ``data`` in the structured layout, wrapping a legacy repos map."""
    if is_legacy_document(data):
        return {"repos": data}
    return data


def normalize_working_directory(raw: str) -> Path:
    """Expand ``~`` and make ``raw`` absolute without resolving symlinks."""
    return Path(os.path.abspath(os.path.expanduser(raw)))


@dataclass(frozen=True)
class SummonConfig:
    """Typed view of the config document consumed by commands."""

    working_directory: Path | None = None
    repos: dict[str, dict[str, str]] = field(default_factory=dict)
    urls: dict[str, str] = field(default_factory=dict)
    url_groups: dict[str, list[str]] = field(default_factory=dict)
    browser: str | None = None

    @classmethod
    def from_document(cls, data: dict[str, object]) -> SummonConfig:
        """Build a config from a raw document, migrating legacy content.

        A document carrying none of the structured top-level keys predates the
        current layout; the whole object is then read as the category map.
        """
        if is_legacy_document(data):
            logger.warning(
                "Legacy config content detected; reading it as the repos map. "
                'Consider rewriting it as {"repos": {...}}.'
            )
            return cls(repos=_category_map(data))

        raw_working_directory = data.get("workingDirectory")
        working_directory = None
        if isinstance(raw_working_directory, str) and raw_working_directory:
            if not raw_working_directory.strip():
                raise ConfigError("workingDirectory is blank; set it to a folder or remove the key")
            working_directory = normalize_working_directory(raw_working_directory.strip())

        raw_browser = data.get("browser")
        browser = raw_browser.strip() if isinstance(raw_browser, str) and raw_browser.strip() else None
        return cls(
            working_directory=working_directory,
            repos=_category_map(data.get("repos")),
            urls=_string_map(data.get("urls")),
            url_groups=_url_groups(data.get("urlGroups")),
            browser=browser,
        )


def load_config() -> SummonConfig:
    """Load and type the config document; raises ``ConfigError``."""
    return SummonConfig.from_document(load_config_document())


__all__ = [
    "CONFIG_PATH",
    "ConfigError",
    "DEFAULT_CONFIG_PATH",
    "LEGACY_CONFIG_PATH",
    "SummonConfig",
    "load_config",
    "is_legacy_document",
    "load_config_document",
    "migrate_document",
    "normalize_working_directory",
    "save_config",
]
