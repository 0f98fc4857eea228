"""Line-mode prompts for yes/no questions and free-text answers."""

from __future__ import annotations

from collections.abc import Callable

_YES = {"y", "yes"}
_NO = {"n", "no"}


def confirm(message: str, default: bool = False, read_line: Callable[[str], str] = input) -> bool:
    suffix = "[Y/n]" if default else "[y/N]"
    while True:
        try:
            answer = read_line(f"{message} {suffix} ").strip().lower()
        except EOFError:
            return default
        if not answer:
            return default
        if answer in _YES:
            return True
        if answer in _NO:
            return False


def ask(
    message: str,
    default: str | None = None,
    validate: Callable[[str], str | None] | None = None,
    read_line: Callable[[str], str] = input,
) -> str | None:
    """Ask until ``validate`` accepts the trimmed answer.

    ``validate`` returns an error message or ``None``. Returns ``None`` when
    input ends.
    """
    prompt = f"{message} ({default}) " if default else f"{message} "
    while True:
        try:
            answer = read_line(prompt).strip()
        except EOFError:
            return None
        if not answer and default is not None:
            answer = default
        error = validate(answer) if validate is not None else None
        if error is None:
            return answer
        print(error)
