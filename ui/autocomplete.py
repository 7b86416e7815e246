"""Suggestion engine embedded in text inputs."""

import os
from typing import Callable

from path_utils import expand_path, truncate_middle

from .render import styled
from .theme import NEUTRAL_DIM, Theme

DEFAULT_MAX_RESULTS = 8

SuggestionProvider = Callable[[str], list[str]]


def path_suggestion_provider(max_results: int = DEFAULT_MAX_RESULTS) -> SuggestionProvider:
    """Provider that completes directory names.

    Suggestions keep the user's own spelling of the path so that
    accepting one never rewrites what was already typed.
    """
    def provide(text: str) -> list[str]:
        if text == "":
            text = "~/"

        if text.endswith("/"):
            directory = expand_path(text)
            prefix = ""
            typed_parent = text
        else:
            expanded = expand_path(text)
            directory = os.path.dirname(expanded) or "."
            prefix = os.path.basename(expanded)
            cut = text.rfind("/")
            typed_parent = text[:cut + 1] if cut >= 0 else ""

        try:
            entries = list(os.scandir(directory))
        except OSError:
            return []

        needle = prefix.lower()
        names = []
        for entry in entries:
            if entry.name.startswith("."):
                continue
            try:
                if not entry.is_dir():
                    continue
            except OSError:
                continue
            if needle and needle not in entry.name.lower():
                continue
            names.append(entry.name)

        names.sort()
        return [typed_parent + name + "/" for name in names[:max_results]]

    return provide


class Autocomplete:
    """Suggestion list state for one input field."""

    def __init__(self, provider: SuggestionProvider | None, max_results: int = DEFAULT_MAX_RESULTS):
        self.provider = provider
        self.max_results = max_results if max_results > 0 else DEFAULT_MAX_RESULTS
        self.input = ""
        self.suggestions: list[str] = []
        self.selected = 0
        self.visible = False

    def set_input(self, text: str):
        self.input = text

    def refresh_suggestions(self):
        """Ask the provider again; shows the list only when it is non-empty."""
        if self.provider is None:
            return
        self.suggestions = list(self.provider(self.input))[: self.max_results]
        self.selected = 0
        self.visible = bool(self.suggestions)

    def move_down(self):
        if self.suggestions:
            self.selected = (self.selected + 1) % len(self.suggestions)

    def move_up(self):
        if self.suggestions:
            self.selected = (self.selected - 1) % len(self.suggestions)

    def accept_selected(self) -> str:
        """The highlighted suggestion, or "" when there is none."""
        if not self.suggestions:
            return ""
        return self.suggestions[self.selected]

    def dismiss(self):
        self.visible = False
        self.suggestions = []
        self.selected = 0

    def view(self, theme: Theme, width: int) -> list[str]:
        """Suggestion rows, highlighted row in the theme color."""
        if not self.visible:
            return []
        rows = []
        for i, suggestion in enumerate(self.suggestions):
            text = truncate_middle(suggestion, max(width - 2, 1))
            if i == self.selected:
                rows.append(styled(f"▸ {text}", theme.primary, bold=True))
            else:
                rows.append(styled(f"  {text}", NEUTRAL_DIM))
        return rows
