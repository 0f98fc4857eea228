"""ANSI-aware text measurement for prompt rows.

Escape sequences are preserved verbatim and do not count toward width.
East Asian wide characters consume two columns.
"""

from __future__ import annotations

import re
import unicodedata

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")


def char_display_width(ch: str) -> int:
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def display_width(text: str) -> int:
    """Return the terminal column width of ``text`` ignoring ANSI codes."""
    plain = ANSI_ESCAPE_RE.sub("", text)
    return sum(char_display_width(ch) for ch in plain)


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Trim a styled line to at most ``max_cols`` display columns.

    A trailing reset is appended when clipping cut through styled text.
    """
    if max_cols <= 0 or not text:
        return ""

    out: list[str] = []
    col = 0
    idx = 0
    clipped = False
    while idx < len(text):
        match = ANSI_ESCAPE_RE.match(text, idx)
        if match is not None:
            out.append(match.group(0))
            idx = match.end()
            continue
        ch = text[idx]
        width = char_display_width(ch)
        if col + width > max_cols:
            clipped = True
            break
        out.append(ch)
        col += width
        idx += 1

    clipped_text = "".join(out)
    if clipped and "\x1b[" in clipped_text:
        clipped_text += "\x1b[0m"
    return clipped_text
