"""Editor and browser launch helpers.

Return an error message string instead of raising for CLI-friendly handling.
"""

from __future__ import annotations

import shlex
import subprocess
import sys
from pathlib import Path


def editor_command(editor: str, project_path: Path, platform: str | None = None) -> list[str]:
    """Return the argv that opens ``project_path`` in ``editor``.

    ``claude`` is started inside the project instead and takes no path.
    """
    platform = sys.platform if platform is None else platform
    if editor == "claude":
        return ["claude"]
    if editor == "cursor" and platform == "darwin":
        return ["open", "-a", "Cursor", str(project_path)]
    return [*shlex.split(editor), str(project_path)]


def launch_editor(editor: str, project_path: Path) -> str | None:
    cmd = editor_command(editor, project_path)
    if not cmd:
        return "Cannot open project: editor command is empty."
    try:
        if editor == "claude":
            completed = subprocess.run(cmd, cwd=project_path, check=False)
        else:
            completed = subprocess.run(cmd, check=False)
    except OSError as exc:
        return f"Failed to launch {cmd[0]}: {exc}"
    if completed.returncode != 0:
        return f"{cmd[0]} exited with code {completed.returncode}"
    return None


def browser_command(browser: str | None, platform: str | None = None) -> list[str]:
    """Return the argv prefix used to open URLs."""
    platform = sys.platform if platform is None else platform
    if browser:
        return shlex.split(browser)
    if platform == "darwin":
        return ["open"]
    return ["xdg-open"]


def open_urls(urls: list[str], browser: str | None = None) -> str | None:
    """Open each URL with the browser command, stopping at the first failure."""
    prefix = browser_command(browser)
    if not prefix:
        return "Cannot open URL: browser command is empty."
    for url in urls:
        try:
            completed = subprocess.run([*prefix, url], check=False)
        except OSError as exc:
            return f"Failed to launch {prefix[0]}: {exc}"
        if completed.returncode != 0:
            return f"{prefix[0]} exited with code {completed.returncode} for {url}"
    return None
