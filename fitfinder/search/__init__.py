"""Catalog search, facet filtering, favorites and suggestions."""

from .exercise_search import (
    SearchSession,
    clear_filters,
    search,
    toggle_favorite,
    toggle_filter,
)
from .suggestions import SuggestionResult, apply_suggestion, suggest

__all__ = [
    "SearchSession",
    "SuggestionResult",
    "apply_suggestion",
    "clear_filters",
    "search",
    "suggest",
    "toggle_favorite",
    "toggle_filter",
]
