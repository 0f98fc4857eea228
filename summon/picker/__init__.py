"""Project and bookmark pickers: matching, row layout, prompt, and flows."""

from __future__ import annotations

from .matching import filter_items, matches_keywords, split_keywords
from .prompt import AutocompletePrompt, PromptError, PromptRunner, terminal_prompt_runner
from .rows import ROOT_LABEL, SelectionRow, flat_rows, grouped_rows
from .strategies import FlatPicker, TwoStepPicker, picker_for

__all__ = [
    "AutocompletePrompt",
    "FlatPicker",
    "PromptError",
    "PromptRunner",
    "ROOT_LABEL",
    "SelectionRow",
    "TwoStepPicker",
    "filter_items",
    "flat_rows",
    "grouped_rows",
    "matches_keywords",
    "picker_for",
    "split_keywords",
    "terminal_prompt_runner",
]
