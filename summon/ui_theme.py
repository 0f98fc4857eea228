"""UI theme definitions and selection helpers.

Themes are ANSI palettes for prompt chrome and command status lines.
The ``plain`` theme disables all styling.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by prompts and commands."""

    name: str
    reset: str
    reverse: str
    prompt_marker: str
    prompt_query: str
    prompt_hint: str
    separator: str
    success: str
    warning: str
    info: str

    def paint(self, style: str, text: str) -> str:
        """Wrap ``text`` in ``style`` when the theme carries styling."""
        if not style:
            return text
        return f"{style}{text}{self.reset}"


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    reverse="\033[7m",
    prompt_marker="\033[1;32m",
    prompt_query="\033[1;38;5;81m",
    prompt_hint="\033[2;38;5;250m",
    separator="\033[2;38;5;244m",
    success="\033[32m",
    warning="\033[33m",
    info="\033[34m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="",
    reverse="",
    prompt_marker="",
    prompt_query="",
    prompt_hint="",
    separator="",
    success="",
    warning="",
    info="",
)


def resolve_theme(no_color: bool, is_tty: bool = True) -> UITheme:
    """Pick the plain palette for ``--no-color`` or non-terminal output."""
    if no_color or not is_tty:
        return PLAIN_THEME
    return DEFAULT_THEME
