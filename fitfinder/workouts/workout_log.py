"""Append-only workout log persisted in the local store."""

import logging
import random
import string
from dataclasses import dataclass
from datetime import date as date_cls
from typing import Any, Iterable, List, Optional, Union

from fitfinder.data_layer.models import Number, SetEntry, WorkoutLogEntry
from fitfinder.data_layer.serialization import workout_entry_from_dict, workout_entry_to_dict
from fitfinder.storage.key_value_store import WORKOUTS_KEY, KeyValueStore

logger = logging.getLogger(__name__)

MAX_LOG_ENTRIES = 1000
MISSING_EXERCISE_MESSAGE = "Please enter an exercise name."

_ID_ALPHABET = string.ascii_lowercase + string.digits


def make_id(prefix: str = "id") -> str:
    """Short random id such as ``w_k3j9x0a``."""
    suffix = "".join(random.choice(_ID_ALPHABET) for _ in range(7))
    return f"{prefix}_{suffix}"


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def coerce_number(value: Union[Number, str, None]) -> Number:
    """Empty input becomes 0; numeric strings become int or float."""
    if _is_blank(value):
        return 0
    if isinstance(value, (int, float)):
        return value
    text = str(value).strip()
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        return 0


def sanitize_sets(sets: Iterable[dict]) -> List[SetEntry]:
    """Keep sets with reps or weight filled in, coercing blanks to 0.

    Args:
        sets: Dicts with optional "id", "reps" and "weight"

    Returns:
        List of SetEntry
    """
    cleaned = []
    for raw in sets:
        reps, weight = raw.get("reps", ""), raw.get("weight", "")
        if _is_blank(reps) and _is_blank(weight):
            continue
        cleaned.append(
            SetEntry(
                id=raw.get("id") or make_id("s"),
                reps=coerce_number(reps),
                weight=coerce_number(weight),
            )
        )
    return cleaned


@dataclass
class SaveResult:
    """Outcome of a save; a rejected save carries a message for the user."""

    saved: bool
    entry: Optional[WorkoutLogEntry] = None
    message: str = ""


class WorkoutLog:
    """Workout entries, newest first, capped at the 1000 most recent saves."""

    def __init__(self, store: KeyValueStore, max_entries: int = MAX_LOG_ENTRIES):
        """Initialize the log from the store.

        Args:
            store: KeyValueStore holding the log
            max_entries: Cap on retained entries
        """
        self._store = store
        self.max_entries = max_entries
        self._entries: List[WorkoutLogEntry] = self._load()

    def _load(self) -> List[WorkoutLogEntry]:
        data = self._store.load(WORKOUTS_KEY, [])
        if not isinstance(data, list):
            return []
        entries = []
        for raw in data:
            try:
                entries.append(workout_entry_from_dict(raw))
            except (KeyError, TypeError, AttributeError):
                logger.warning("Skipping malformed workout log entry")
        return entries

    def _persist(self) -> None:
        self._store.save(WORKOUTS_KEY, [workout_entry_to_dict(e) for e in self._entries])

    def entries(self) -> List[WorkoutLogEntry]:
        return list(self._entries)

    def save(
        self,
        exercise: str,
        sets: Iterable[dict] = (),
        date: Optional[str] = None,
        notes: str = "",
    ) -> SaveResult:
        """Validate and prepend a new entry.

        A blank exercise name is rejected without touching the log.

        Args:
            exercise: Exercise name (free text)
            sets: Raw sets as dicts with "reps" and "weight"
            date: YYYY-MM-DD (defaults to today)
            notes: Optional notes

        Returns:
            SaveResult
        """
        if _is_blank(exercise):
            return SaveResult(saved=False, message=MISSING_EXERCISE_MESSAGE)

        entry = WorkoutLogEntry(
            id=make_id("w"),
            date=date or date_cls.today().isoformat(),
            exercise=exercise.strip(),
            notes=(notes or "").strip(),
            sets=sanitize_sets(sets),
        )
        self._entries = ([entry] + self._entries)[: self.max_entries]
        self._persist()
        return SaveResult(saved=True, entry=entry)

    def delete(self, entry_id: str) -> bool:
        remaining = [e for e in self._entries if e.id != entry_id]
        if len(remaining) == len(self._entries):
            return False
        self._entries = remaining
        self._persist()
        return True

    def __len__(self) -> int:
        return len(self._entries)
