"""Open a project in an editor and refresh the discovered-repository cache."""

from __future__ import annotations

from pathlib import Path

from ..catalog import build_catalog, require_working_directory
from ..context import InvocationContext
from ..editor import launch_editor
from ..picker import PromptRunner, picker_for, terminal_prompt_runner


def open_project(
    context: InvocationContext,
    editor: str,
    search: str | None = None,
    *,
    refresh: bool = False,
    run_prompt: PromptRunner | None = None,
) -> str | None:
    """Pick a project and open it in ``editor``.

    Returns an error message, or ``None`` on success and on cancellation.
    Configuration problems raise ``ConfigError``.
    """
    catalog = build_catalog(context, refresh=refresh)
    if not catalog.entries:
        if catalog.auto_discovery:
            context.warn(f"No Git repositories found under {catalog.working_directory}.")
        else:
            context.warn("No projects configured; add a workingDirectory or repos to the config.")
        return None

    if run_prompt is None:
        run_prompt = terminal_prompt_runner(context.theme)
    choice = picker_for(catalog, search).choose(catalog, run_prompt)
    if choice is None:
        return None

    if editor != "claude":
        context.success(f"Opening {choice.name} in {editor}...")
    return launch_editor(editor, Path(choice.path))


def refresh_repo_cache(context: InvocationContext) -> None:
    """Rescan the working directory and overwrite the repository cache."""
    working_directory = context.config.working_directory
    if working_directory is None:
        context.warn("No workingDirectory configured; nothing to refresh.")
        return

    require_working_directory(working_directory)
    repos = context.cache.refresh(working_directory)
    context.success(f"Repository cache refreshed: {len(repos)} repositories under {working_directory}.")
