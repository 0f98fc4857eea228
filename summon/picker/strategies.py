"""Selection flows over a project catalog.

``FlatPicker`` is a single prompt over the whole (grouped or flat) list.
``TwoStepPicker`` asks for a category, then a project inside it. The flow is
chosen once per invocation by :func:`picker_for`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .matching import filter_items
from .prompt import PromptRunner
from .rows import SelectionRow, flat_rows

if TYPE_CHECKING:
    from ..catalog import CatalogEntry, ProjectCatalog


class FlatPicker:
    def __init__(self, initial_query: str = "") -> None:
        self.initial_query = initial_query

    def message(self) -> str:
        if self.initial_query:
            return f"Search and select a project (filtering: {self.initial_query}):"
        return "Search and select a project:"

    def choose(self, catalog: ProjectCatalog, run_prompt: PromptRunner) -> CatalogEntry | None:
        return run_prompt(self.message(), catalog.rows, initial_query=self.initial_query)


class TwoStepPicker:
    def choose(self, catalog: ProjectCatalog, run_prompt: PromptRunner) -> CatalogEntry | None:
        categories = catalog.categories()

        def category_rows(query: str) -> list[SelectionRow]:
            matches = filter_items(query, categories, lambda category: (category,))
            return flat_rows(matches, lambda category: category)

        category = run_prompt("Select a category:", category_rows, page_size=10)
        if category is None:
            return None
        projects = catalog.entries_in_category(category)

        def project_rows(query: str) -> list[SelectionRow]:
            matches = filter_items(query, projects, lambda entry: (entry.name, entry.path))
            return flat_rows(matches, lambda entry: f"{entry.name} ({entry.path})")

        return run_prompt("Select a project:", project_rows, page_size=10)


def picker_for(catalog: ProjectCatalog, search: str | None = None) -> FlatPicker | TwoStepPicker:
    """Flat flow for auto-discovery or an up-front search; two-step otherwise."""
    if catalog.auto_discovery or search is not None:
        return FlatPicker(search or "")
    return TwoStepPicker()


__all__ = ["FlatPicker", "TwoStepPicker", "picker_for"]
