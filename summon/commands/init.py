"""Create a fresh config file pointing at a working directory."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from .. import config
from ..context import InvocationContext
from ..prompts import ask, confirm


def validate_working_directory(value: str) -> str | None:
    """Return an error message for an unusable directory, else ``None``."""
    if not value:
        return "workingDirectory is required"
    path = config.normalize_working_directory(value)
    try:
        if not path.exists():
            return f"Path does not exist: {value}"
        if not path.is_dir():
            return f"Not a directory: {value}"
    except OSError:
        return f"Cannot access path: {value}"
    return None


def init_config(
    context: InvocationContext,
    working_directory: str | None = None,
    force: bool = False,
    *,
    confirm_fn: Callable[..., bool] = confirm,
    ask_fn: Callable[..., str | None] = ask,
) -> str | None:
    """Write a new config; returns an error message or ``None``."""
    path = config.CONFIG_PATH
    if path.exists() and not force:
        if not confirm_fn(f"Config already exists at {path}. Overwrite?", default=False):
            context.warn("Init cancelled.")
            return None

    if working_directory is None:
        working_directory = ask_fn(
            "workingDirectory (a folder containing your git repos):",
            default=str(Path.cwd()),
            validate=validate_working_directory,
        )
        if working_directory is None:
            context.warn("Init cancelled.")
            return None
    else:
        error = validate_working_directory(working_directory.strip())
        if error is not None:
            return error

    payload: dict[str, object] = {
        "workingDirectory": str(config.normalize_working_directory(working_directory.strip())),
        "repos": {},
        "urls": {},
        "urlGroups": {},
    }
    written = config.save_config(payload, path)
    context.success(f"Wrote config: {written}")
    return None
