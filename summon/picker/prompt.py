"""Interactive autocomplete prompt over a list of selection rows.

The prompt re-queries its ``source`` with the full query on every edit, so
filtering never compounds on a previous result. Separator rows are skipped by
navigation and can never be selected. Esc, Ctrl-C and Ctrl-D cancel without error.
"""

from __future__ import annotations

import re
import shutil
import sys
from collections.abc import Callable, Sequence
from typing import Any, Protocol

from ..ansi import clip_ansi_line
from ..input import read_key
from ..terminal import TerminalController
from ..ui_theme import DEFAULT_THEME, UITheme
from .rows import SelectionRow

DEFAULT_PAGE_SIZE = 15

PROMPT_AWAITING = "awaiting_input"
PROMPT_SELECTED = "selected"
PROMPT_CANCELLED = "cancelled"

_TRAILING_WORD_RE = re.compile(r"\S*\s*$")

RowSource = Callable[[str], Sequence[SelectionRow]]


class PromptError(RuntimeError):
    """Interactive prompt cannot run (for example without a terminal)."""


class PromptRunner(Protocol):
    def __call__(
        self,
        message: str,
        source: RowSource,
        *,
        initial_query: str = "",
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> Any | None: ...


class AutocompletePrompt:
    """Query/selection state for one prompt plus its key handling and rendering."""

    def __init__(
        self,
        message: str,
        source: RowSource,
        *,
        page_size: int = DEFAULT_PAGE_SIZE,
        initial_query: str = "",
        theme: UITheme = DEFAULT_THEME,
    ) -> None:
        self.message = message
        self.source = source
        self.page_size = max(1, page_size)
        self.theme = theme
        self.query = initial_query
        self.rows: list[SelectionRow] = []
        self.selected = -1
        self.list_start = 0
        self.status = PROMPT_AWAITING
        self.result: Any | None = None
        self.refresh()

    def refresh(self) -> None:
        """Re-run the source for the current query and select the first row."""
        self.rows = list(self.source(self.query))
        self.selected = self._next_selectable(-1, 1)
        self.list_start = 0
        self._scroll_to_selected()

    def _next_selectable(self, start: int, direction: int) -> int:
        idx = start + direction
        while 0 <= idx < len(self.rows):
            if self.rows[idx].selectable:
                return idx
            idx += direction
        return -1

    def move(self, direction: int, steps: int = 1) -> None:
        if self.selected < 0:
            return
        target = self.selected
        for _ in range(max(1, steps)):
            candidate = self._next_selectable(target, direction)
            if candidate < 0:
                break
            target = candidate
        self.selected = target
        self._scroll_to_selected()

    def _scroll_to_selected(self) -> None:
        if self.selected < 0:
            self.list_start = 0
            return
        top = self.selected
        # Keep the separator heading the selected row on screen.
        if top > 0 and not self.rows[top - 1].selectable:
            top -= 1
        if top < self.list_start:
            self.list_start = top
        elif self.selected >= self.list_start + self.page_size:
            self.list_start = self.selected - self.page_size + 1
        self.list_start = max(0, min(self.list_start, max(0, len(self.rows) - self.page_size)))

    def _set_query(self, query: str) -> None:
        if query == self.query:
            return
        self.query = query
        self.refresh()

    def handle_key(self, key: str) -> bool:
        """Apply one key token; returns ``True`` once the prompt is finished."""
        if self.status != PROMPT_AWAITING:
            return True

        if key in {"ESC", "CTRL_C", "CTRL_D"}:
            self.status = PROMPT_CANCELLED
            return True
        if key == "ENTER":
            if self.selected < 0:
                return False
            self.result = self.rows[self.selected].value
            self.status = PROMPT_SELECTED
            return True
        if key in {"UP", "CTRL_P"}:
            self.move(-1)
            return False
        if key in {"DOWN", "CTRL_N", "TAB"}:
            self.move(1)
            return False
        if key == "PAGE_UP":
            self.move(-1, self.page_size)
            return False
        if key == "PAGE_DOWN":
            self.move(1, self.page_size)
            return False
        if key == "BACKSPACE":
            self._set_query(self.query[:-1])
            return False
        if key == "CTRL_U":
            self._set_query("")
            return False
        if key == "CTRL_W":
            self._set_query(_TRAILING_WORD_RE.sub("", self.query.rstrip()))
            return False
        if len(key) == 1 and key.isprintable():
            self._set_query(self.query + key)
        return False

    def render_lines(self, width: int) -> list[str]:
        """Render the prompt header, the visible row window, and a key hint."""
        theme = self.theme
        if self.query:
            query_text = theme.paint(theme.prompt_query, self.query)
        else:
            query_text = theme.paint(theme.prompt_hint, "(type to search)")
        header = f"{theme.paint(theme.prompt_marker, '?')} {self.message} {query_text}"
        lines = [clip_ansi_line(header, width)]

        if not self.rows:
            lines.append(theme.paint(theme.prompt_hint, "  no matches"))
        end = min(len(self.rows), self.list_start + self.page_size)
        for idx in range(self.list_start, end):
            row = self.rows[idx]
            if not row.selectable:
                text = theme.paint(theme.separator, f"  {row.label}")
            elif idx == self.selected:
                text = theme.paint(theme.reverse, f"> {row.label}")
            else:
                text = f"  {row.label}"
            lines.append(clip_ansi_line(text, width))

        hint = "up/down move  enter select  esc cancel"
        if len(self.rows) > self.page_size:
            hint = f"{hint}  ({self.list_start + 1}-{end} of {len(self.rows)})"
        lines.append(clip_ansi_line(theme.paint(theme.prompt_hint, hint), width))
        return lines

    def run(
        self,
        terminal: TerminalController,
        key_reader: Callable[[int], str] = read_key,
    ) -> Any | None:
        """Drive the prompt until selection or cancellation.

        Returns the selected row value, or ``None`` when cancelled or when
        input ends.
        """
        with terminal.raw_mode():
            while self.status == PROMPT_AWAITING:
                size = shutil.get_terminal_size((80, 24))
                self.page_size = max(1, min(self.page_size, size.lines - 2))
                self._scroll_to_selected()
                terminal.draw(self.render_lines(max(1, size.columns)))
                key = key_reader(terminal.stdin_fd)
                if not key:
                    self.status = PROMPT_CANCELLED
                    break
                self.handle_key(key)
        return self.result if self.status == PROMPT_SELECTED else None


def terminal_prompt_runner(theme: UITheme = DEFAULT_THEME) -> PromptRunner:
    """Return a runner that shows prompts on the process terminal."""

    def run_prompt(
        message: str,
        source: RowSource,
        *,
        initial_query: str = "",
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> Any | None:
        if not (sys.stdin.isatty() and sys.stdout.isatty()):
            raise PromptError("Interactive selection requires a terminal.")
        sys.stdout.flush()
        terminal = TerminalController(sys.stdin.fileno(), sys.stdout.fileno())
        prompt = AutocompletePrompt(
            message,
            source,
            page_size=page_size,
            initial_query=initial_query,
            theme=theme,
        )
        return prompt.run(terminal)

    return run_prompt


__all__ = [
    "AutocompletePrompt",
    "DEFAULT_PAGE_SIZE",
    "PROMPT_AWAITING",
    "PROMPT_CANCELLED",
    "PROMPT_SELECTED",
    "PromptError",
    "PromptRunner",
    "RowSource",
    "terminal_prompt_runner",
]
