"""Search-box suggestions and applying them as facet filters."""
from dataclasses import dataclass, field
from typing import Iterable, List

from fitfinder.data_layer.models import Exercise, FilterOptions
from fitfinder.search.exercise_search import add_to_facet


MAX_SUGGESTIONS = 8


@dataclass
class SuggestionResult:
    """State after a suggestion is picked."""

    query: str
    filters: FilterOptions
    suggestions: List[str] = field(default_factory=list)  # Always cleared


def suggest(catalog: Iterable[Exercise], query: str, limit: int = MAX_SUGGESTIONS) -> List[str]:
    """Exact names and tags containing *query*, in discovery order.

    For each exercise the name is checked first, then body parts, equipment
    and goals. Duplicates are dropped.
    """
    q = (query or "").strip().lower()
    if not q:
        return []

    found: List[str] = []
    seen = set()

    def _add(value: str) -> None:
        if value not in seen:
            seen.add(value)
            found.append(value)

    for exercise in catalog:
        if q in exercise.name.lower():
            _add(exercise.name)
        for tag in exercise.body_part:
            if q in tag.lower():
                _add(tag)
        for tag in exercise.equipment:
            if q in tag.lower():
                _add(tag)
        for tag in exercise.goals:
            if q in tag.lower():
                _add(tag)
    return found[:limit]


def apply_suggestion(
    catalog: Iterable[Exercise],
    filters: FilterOptions,
    suggestion: str,
) -> SuggestionResult:
    """Pick a suggestion: it becomes the query and, if it is a known tag, a filter.

    A value that is both, say, a body part and a goal lands in both facets.
    """
    lower = suggestion.lower()
    body_parts, equipment, goals = set(), set(), set()
    for exercise in catalog:
        body_parts.update(tag.lower() for tag in exercise.body_part)
        equipment.update(tag.lower() for tag in exercise.equipment)
        goals.update(tag.lower() for tag in exercise.goals)

    if lower in body_parts:
        filters = add_to_facet(filters, "body_parts", suggestion)
    if lower in equipment:
        filters = add_to_facet(filters, "equipment", suggestion)
    if lower in goals:
        filters = add_to_facet(filters, "goals", suggestion)

    return SuggestionResult(query=suggestion, filters=filters, suggestions=[])
