"""Per-invocation context threaded through catalog, picker, and commands."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import TextIO

from .config import SummonConfig
from .repos.cache import RepoCacheStore
from .ui_theme import DEFAULT_THEME, UITheme


@dataclass
class InvocationContext:
    """Everything one command needs; built once by the CLI."""

    config: SummonConfig
    cache: RepoCacheStore = field(default_factory=RepoCacheStore)
    theme: UITheme = DEFAULT_THEME
    out: TextIO = field(default_factory=lambda: sys.stdout)

    def say(self, message: str, style: str = "") -> None:
        """Write one status line to the command output stream."""
        self.out.write(self.theme.paint(style, message) + "\n")
        self.out.flush()

    def success(self, message: str) -> None:
        self.say(message, self.theme.success)

    def warn(self, message: str) -> None:
        self.say(message, self.theme.warning)

    def info(self, message: str) -> None:
        self.say(message, self.theme.info)
