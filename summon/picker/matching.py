"""Multi-keyword substring matching shared by every picker.

A query is split on whitespace into lowercase keywords; an item matches when
every keyword occurs in the item's searchable text. No ranking is applied:
matches keep the order of the input sequence.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from typing import TypeVar

T = TypeVar("T")


def split_keywords(query: str) -> list[str]:
    """Return lowercase whitespace-separated keywords of ``query``."""
    return query.lower().split()


def searchable_text(*fields: str) -> str:
    return " ".join(fields).lower()


def matches_keywords(keywords: Sequence[str], text: str) -> bool:
    """Return whether every keyword occurs in ``text``, ignoring case."""
    folded = text.lower()
    return all(keyword.lower() in folded for keyword in keywords)


def filter_items(query: str, items: Iterable[T], fields: Callable[[T], Sequence[str]]) -> list[T]:
    """Return ``items`` whose ``fields`` match every keyword of ``query``.

    An empty or blank query returns all items unchanged.
    """
    keywords = split_keywords(query)
    if not keywords:
        return list(items)
    return [item for item in items if matches_keywords(keywords, searchable_text(*fields(item)))]


__all__ = ["filter_items", "matches_keywords", "searchable_text", "split_keywords"]
