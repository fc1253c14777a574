"""Local persistence for favorites, routines, meal plans and workouts.

Everything downstream depends on :class:`KeyValueStore`; the concrete store
(JSON file on disk or in-memory) is chosen at the edges.
"""

from fitfinder.storage.key_value_store import KeyValueStore
from fitfinder.storage.memory_store import InMemoryStore
from fitfinder.storage.json_file_store import JsonFileStore
from fitfinder.storage.repositories import (
    FavoritesRepository,
    MealPlanLibrary,
    RoutineRepository,
)

__all__ = [
    "KeyValueStore",
    "InMemoryStore",
    "JsonFileStore",
    "FavoritesRepository",
    "MealPlanLibrary",
    "RoutineRepository",
]
