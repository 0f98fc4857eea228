"""URL bookmarks: add, remove, search-and-open, and open a group.

Bookmarks live in the ``urls`` map of the config document and are written
back sorted by host name, then bookmark name.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from urllib.parse import urlsplit

from .. import config
from ..context import InvocationContext
from ..editor import open_urls
from ..picker import PromptRunner, filter_items, flat_rows, terminal_prompt_runner
from ..picker.rows import SelectionRow, name_sort_key
from ..prompts import confirm


@dataclass(frozen=True)
class UrlBookmark:
    name: str
    url: str

    @property
    def display(self) -> str:
        return f"{self.name} - {self.url}"


def url_host(url: str) -> str:
    """Return the host name of ``url``, or ``url`` itself when it has none."""
    try:
        host = urlsplit(url).hostname
    except ValueError:
        host = None
    return host or url


def sorted_urls(urls: dict[str, str]) -> dict[str, str]:
    ordered = sorted(urls.items(), key=lambda item: (url_host(item[1]).casefold(), *name_sort_key(item[0])))
    return dict(ordered)


def bookmark_rows(bookmarks: list[UrlBookmark]) -> Callable[[str], list[SelectionRow]]:
    def rows(query: str) -> list[SelectionRow]:
        matches = filter_items(query, bookmarks, lambda bookmark: (bookmark.name, bookmark.url))
        return flat_rows(matches, lambda bookmark: bookmark.display)

    return rows


def _bookmarks(context: InvocationContext) -> list[UrlBookmark]:
    return [UrlBookmark(name, url) for name, url in context.config.urls.items()]


def _save_urls(urls: dict[str, str]) -> None:
    document = config.migrate_document(config.load_config_document())
    document["urls"] = sorted_urls(urls)
    config.save_config(document)


def add_url(
    context: InvocationContext,
    name: str,
    url: str,
    *,
    confirm_fn: Callable[..., bool] = confirm,
) -> None:
    urls = dict(context.config.urls)
    if name in urls:
        context.warn(f'URL with name "{name}" already exists: {urls[name]}')
        if not confirm_fn("Do you want to overwrite it?", default=False):
            context.info("Operation cancelled.")
            return

    urls[name] = url
    _save_urls(urls)
    context.success(f"Added URL: {name} -> {url}")


def remove_url(
    context: InvocationContext,
    name: str | None = None,
    *,
    run_prompt: PromptRunner | None = None,
) -> None:
    urls = dict(context.config.urls)
    if not urls:
        context.warn("No URLs found in configuration.")
        return

    if name is None:
        if run_prompt is None:
            run_prompt = terminal_prompt_runner(context.theme)
        selected = run_prompt("Search and select a URL to remove:", bookmark_rows(_bookmarks(context)))
        if selected is None:
            return
        name = selected.name
    elif name not in urls:
        context.warn(f'URL with name "{name}" not found.')
        return

    removed = urls.pop(name)
    _save_urls(urls)
    context.success(f"Removed URL: {name} - {removed}")


def search_and_open_url(
    context: InvocationContext,
    *,
    run_prompt: PromptRunner | None = None,
) -> str | None:
    """Pick a bookmark and open it; returns an error message or ``None``."""
    bookmarks = _bookmarks(context)
    if not bookmarks:
        context.warn("No URLs found in configuration.")
        return None

    if run_prompt is None:
        run_prompt = terminal_prompt_runner(context.theme)
    selected = run_prompt("Search and select a URL to open:", bookmark_rows(bookmarks))
    if selected is None:
        return None

    context.info(f"Opening {selected.name}: {selected.url}")
    error = open_urls([selected.url], context.config.browser)
    if error is None:
        context.success("URL opened")
    return error


def open_url_group(
    context: InvocationContext,
    *,
    run_prompt: PromptRunner | None = None,
) -> str | None:
    """Pick a URL group and open every URL in it."""
    groups = context.config.url_groups
    if not groups:
        context.warn("No URL groups found in configuration.")
        return None

    if run_prompt is None:
        run_prompt = terminal_prompt_runner(context.theme)
    names = list(groups)

    def group_rows(query: str) -> list[SelectionRow]:
        matches = filter_items(query, names, lambda group: (group,))
        return flat_rows(matches, lambda group: f"{group} ({len(groups[group])} URLs)")

    group = run_prompt("Select a URL group to open:", group_rows, page_size=10)
    if group is None:
        return None

    urls = groups[group]
    if not urls:
        context.warn(f'No URLs found in group "{group}".')
        return None

    context.info(f'Opening {len(urls)} URLs from group "{group}"...')
    error = open_urls(urls, context.config.browser)
    if error is None:
        context.success(f"Opened {len(urls)} URLs")
    return error
