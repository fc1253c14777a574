"""Faceted search over the exercise catalog."""
from dataclasses import dataclass, field, replace
from typing import FrozenSet, Iterable, List, Optional

from fitfinder.data_layer.models import Exercise, FilterOptions


FACETS = ("body_parts", "equipment", "goals")
PAGE_SIZE = 200


def matches_query(exercise: Exercise, query: str) -> bool:
    """Case-insensitive substring match across name, tags and difficulty.

    Args:
        exercise: Catalog exercise
        query: Already lowercased, trimmed, non-empty query

    Returns:
        True if any searchable field contains the query
    """
    if query in exercise.name.lower():
        return True
    if any(query in tag.lower() for tag in exercise.body_part):
        return True
    if any(query in tag.lower() for tag in exercise.equipment):
        return True
    if any(query in tag.lower() for tag in exercise.goals):
        return True
    return query in exercise.difficulty.lower()


def _facet_passes(selected: List[str], tags: List[str]) -> bool:
    return not selected or any(value in tags for value in selected)


def matches_filters(exercise: Exercise, filters: FilterOptions) -> bool:
    """OR within a facet, AND across facets; empty facets pass."""
    return (
        _facet_passes(filters.body_parts, exercise.body_part)
        and _facet_passes(filters.equipment, exercise.equipment)
        and _facet_passes(filters.goals, exercise.goals)
    )


def search(
    catalog: Iterable[Exercise],
    query: str = "",
    filters: Optional[FilterOptions] = None,
    favorites: Optional[FrozenSet[str]] = None,
    only_favorites: bool = False,
) -> List[Exercise]:
    """Filter the catalog by text query, facets and favorites.

    Results keep catalog order; there is no ranking.

    Args:
        catalog: Exercises in catalog order
        query: Free text; blank means no text filter
        filters: Facet selections (None means no facet filtering)
        favorites: Favorite exercise ids
        only_favorites: Restrict results to ids in ``favorites``

    Returns:
        Matching exercises
    """
    q = (query or "").strip().lower()
    filters = filters or FilterOptions()

    results = []
    for exercise in catalog:
        if q and not matches_query(exercise, q):
            continue
        if not matches_filters(exercise, filters):
            continue
        if only_favorites and exercise.id not in (favorites or frozenset()):
            continue
        results.append(exercise)
    return results


def toggle_filter(filters: FilterOptions, facet: str, value: str) -> FilterOptions:
    """Return new filters with *value* added to or removed from *facet*.

    Raises:
        ValueError: If facet is not one of body_parts, equipment, goals
    """
    if facet not in FACETS:
        raise ValueError(f"Unknown facet '{facet}'; expected one of {', '.join(FACETS)}")
    current = list(getattr(filters, facet))
    if value in current:
        current = [v for v in current if v != value]
    else:
        current.append(value)
    return replace(filters, **{facet: current})


def add_to_facet(filters: FilterOptions, facet: str, value: str) -> FilterOptions:
    """Return new filters with *value* in *facet* (set union, keeps order)."""
    current = list(getattr(filters, facet))
    if value not in current:
        current.append(value)
    return replace(filters, **{facet: current})


def clear_filters() -> FilterOptions:
    return FilterOptions()


def toggle_favorite(favorites: FrozenSet[str], exercise_id: str) -> FrozenSet[str]:
    """Add or remove an id; toggling twice gives back the original set."""
    if exercise_id in favorites:
        return favorites - {exercise_id}
    return favorites | {exercise_id}


@dataclass
class SearchSession:
    """Search state with a growing visible window over the results.

    ``load_more`` only widens the window; the result list itself is
    recomputed from the same inputs.
    """

    catalog: List[Exercise]
    query: str = ""
    filters: FilterOptions = field(default_factory=FilterOptions)
    favorites: FrozenSet[str] = frozenset()
    only_favorites: bool = False
    visible_count: int = PAGE_SIZE

    def results(self) -> List[Exercise]:
        return search(
            self.catalog,
            self.query,
            self.filters,
            favorites=self.favorites,
            only_favorites=self.only_favorites,
        )

    def visible_results(self) -> List[Exercise]:
        return self.results()[: self.visible_count]

    def has_more(self) -> bool:
        return len(self.results()) > self.visible_count

    def load_more(self) -> int:
        self.visible_count += PAGE_SIZE
        return self.visible_count

    def clear(self) -> None:
        """Reset facets and the query."""
        self.filters = clear_filters()
        self.query = ""
