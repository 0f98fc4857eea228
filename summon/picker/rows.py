"""Selection-list rows and the two list layouts.

Grouped layout (auto-discovery): one non-selectable separator per category,
categories sorted by name with the root bucket last, indented project rows.
Flat layout (manual config): one selectable row per entry.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any, TypeVar

from ..repos.types import ROOT_FOLDER

T = TypeVar("T")

ROOT_LABEL = "/ (root)"
SEPARATOR_RULE = "---------"
ROW_INDENT = "  "


@dataclass(frozen=True)
class SelectionRow:
    """One rendered picker row; separators carry no value."""

    label: str
    value: Any = None
    selectable: bool = True

    @classmethod
    def separator(cls, title: str) -> SelectionRow:
        return cls(label=f"{SEPARATOR_RULE}  {title}  {SEPARATOR_RULE}", value=None, selectable=False)


def name_sort_key(name: str) -> tuple[str, str]:
    """Case-insensitive order; on a tie lowercase sorts before uppercase."""
    return (name.casefold(), name.swapcase())


def category_sort_key(category: str) -> tuple[bool, str, str]:
    """Sort categories by name with the root bucket pinned last."""
    return (category == ROOT_FOLDER, *name_sort_key(category))


def category_label(category: str) -> str:
    return ROOT_LABEL if category == ROOT_FOLDER else category


def flat_rows(items: Iterable[T], label: Callable[[T], str]) -> list[SelectionRow]:
    return [SelectionRow(label=label(item), value=item) for item in items]


def grouped_rows(
    items: Iterable[T],
    category: Callable[[T], str],
    label: Callable[[T], str],
) -> list[SelectionRow]:
    """Group ``items`` under category separators, keeping input order per group."""
    groups: dict[str, list[T]] = {}
    for item in items:
        groups.setdefault(category(item), []).append(item)

    rows: list[SelectionRow] = []
    for key in sorted(groups, key=category_sort_key):
        rows.append(SelectionRow.separator(category_label(key)))
        rows.extend(SelectionRow(label=f"{ROW_INDENT}{label(item)}", value=item) for item in groups[key])
    return rows


__all__ = [
    "ROOT_LABEL",
    "SelectionRow",
    "category_label",
    "category_sort_key",
    "flat_rows",
    "grouped_rows",
    "name_sort_key",
]
