"""Typed access to the values kept in a KeyValueStore."""

import logging
import time
from datetime import date, datetime, timezone
from typing import FrozenSet, List, Optional

from fitfinder.data_layer.models import MealPlanInputs, Routine, SavedMealPlan, WeeklyMealPlan
from fitfinder.data_layer.serialization import (
    routine_from_dict,
    routine_to_dict,
    saved_plan_from_dict,
    saved_plan_to_dict,
)
from fitfinder.storage.key_value_store import (
    FAVORITES_KEY,
    LAST_ROUTINE_KEY,
    MEAL_PLANS_KEY,
    KeyValueStore,
)

logger = logging.getLogger(__name__)

MAX_SAVED_MEAL_PLANS = 12


class FavoritesRepository:
    """Favorite exercise ids, stored as a JSON array."""

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    def load(self) -> FrozenSet[str]:
        data = self._store.load(FAVORITES_KEY, [])
        if not isinstance(data, list):
            return frozenset()
        return frozenset(str(item) for item in data)

    def save(self, favorites: FrozenSet[str]) -> None:
        self._store.save(FAVORITES_KEY, sorted(favorites))


class RoutineRepository:
    """Holds the most recently generated routine (overwrite on save)."""

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    def save_last(self, routine: Routine) -> None:
        self._store.save(LAST_ROUTINE_KEY, routine_to_dict(routine))

    def load_last(self) -> Optional[Routine]:
        data = self._store.load(LAST_ROUTINE_KEY)
        if not isinstance(data, dict):
            return None
        try:
            return routine_from_dict(data)
        except (KeyError, TypeError, ValueError, AttributeError):
            logger.warning("Discarding malformed stored routine")
            return None


class MealPlanLibrary:
    """Named weekly meal plans, newest first, at most 12."""

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    def list(self) -> List[SavedMealPlan]:
        data = self._store.load(MEAL_PLANS_KEY, [])
        if not isinstance(data, list):
            return []
        plans = []
        for entry in data:
            try:
                plans.append(saved_plan_from_dict(entry))
            except (KeyError, TypeError, ValueError, AttributeError):
                logger.warning("Skipping malformed saved meal plan")
        return plans

    def save(
        self,
        name: str,
        inputs: MealPlanInputs,
        calorie_target: int,
        weekly_plan: WeeklyMealPlan,
    ) -> Optional[SavedMealPlan]:
        """Save a plan at the front of the list.

        Returns:
            The saved entry, or None when the weekly plan is empty
        """
        if not weekly_plan:
            return None
        entry = SavedMealPlan(
            id=str(int(time.time() * 1000)),
            name=name.strip() or f"Plan {date.today().isoformat()}",
            created_at=datetime.now(timezone.utc).isoformat(),
            inputs=inputs,
            calorie_target=calorie_target,
            weekly_plan=weekly_plan,
        )
        existing = self.list()
        # Ids are millisecond timestamps; keep them unique within the list.
        taken = {plan.id for plan in existing}
        while entry.id in taken:
            entry.id = str(int(entry.id) + 1)
        plans = [entry] + existing
        self._write(plans[:MAX_SAVED_MEAL_PLANS])
        return entry

    def load(self, plan_id: str) -> Optional[SavedMealPlan]:
        for plan in self.list():
            if plan.id == plan_id:
                return plan
        return None

    def delete(self, plan_id: str) -> bool:
        plans = self.list()
        remaining = [plan for plan in plans if plan.id != plan_id]
        if len(remaining) == len(plans):
            return False
        self._write(remaining)
        return True

    def _write(self, plans: List[SavedMealPlan]) -> None:
        self._store.save(MEAL_PLANS_KEY, [saved_plan_to_dict(p) for p in plans])
