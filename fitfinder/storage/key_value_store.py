"""Abstract base class for local key-value stores.

Favorites, the last generated routine, saved meal plans and the workout log
are all persisted through this interface. Values are JSON-compatible
(dicts, lists, strings, numbers); implementations decide where they live.
"""

import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

logger = logging.getLogger(__name__)


FAVORITES_KEY = "fitfinder_favorites_v1"
LAST_ROUTINE_KEY = "fitfinder_last_routine"
MEAL_PLANS_KEY = "fitfinder_mealplans_v2"
WORKOUTS_KEY = "fitfinder_workouts_v2"


class KeyValueStore(ABC):
    """Abstraction over device-local persistence.

    ``get_raw`` / ``set_raw`` deal in serialized strings, the way browser
    storage does. ``load`` and ``save`` layer JSON on top and never raise on
    corrupt data: a value that cannot be parsed is treated as absent.
    """

    @abstractmethod
    def get_raw(self, key: str) -> Optional[str]:
        """Return the serialized value for *key*, or ``None`` if unset."""
        ...

    @abstractmethod
    def set_raw(self, key: str, value: str) -> None:
        """Store a serialized value under *key*.

        Raises:
            StorageError: If the value cannot be written.
        """
        ...

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove *key*; missing keys are ignored."""
        ...

    def load(self, key: str, default: Any = None) -> Any:
        """Deserialize the value under *key*.

        Returns *default* when the key is unset or its value is not valid JSON.
        """
        raw = self.get_raw(key)
        if raw is None:
            return default
        try:
            return json.loads(raw)
        except (TypeError, ValueError):
            logger.warning("Discarding corrupt value stored under %r", key)
            return default

    def save(self, key: str, value: Any) -> None:
        """Serialize *value* and store it under *key* (overwrite)."""
        self.set_raw(key, json.dumps(value))
