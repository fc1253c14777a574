"""Rule-based generator for multi-week training routines."""

import random
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence, Tuple

from fitfinder.data_layer.models import DayPlan, Exercise, Routine, RoutineExercise, WeekPlan


GOALS = ("muscle-gain", "strength", "endurance", "fat-loss")
DURATION_OPTIONS = (4, 8, 12)
DAYS_PER_WEEK_OPTIONS = (3, 4, 5, 6)


@dataclass(frozen=True)
class GoalPreset:
    """Sets/reps/rest applied to every exercise of a goal."""

    sets: Tuple[int, ...]  # Allowed set counts, one is picked per exercise
    reps: str
    rest_seconds: int
    exercises_per_day: int


GOAL_PRESETS: Dict[str, GoalPreset] = {
    "muscle-gain": GoalPreset(sets=(3, 4), reps="8-12", rest_seconds=60, exercises_per_day=5),
    "strength": GoalPreset(sets=(3, 5), reps="3-6", rest_seconds=150, exercises_per_day=4),
    "endurance": GoalPreset(sets=(2, 3), reps="15-25", rest_seconds=45, exercises_per_day=5),
    "fat-loss": GoalPreset(sets=(3,), reps="10-15", rest_seconds=30, exercises_per_day=6),
}
DEFAULT_PRESET = GoalPreset(sets=(3,), reps="8-12", rest_seconds=60, exercises_per_day=5)

SPLITS: Dict[int, List[str]] = {
    3: ["Full Body", "Full Body", "Full Body"],
    4: ["Upper", "Lower", "Upper", "Lower"],
    5: ["Push", "Pull", "Legs", "Push", "Pull"],
    6: ["Push", "Pull", "Legs", "Push", "Pull", "Legs"],
}

DAY_TARGETS: Dict[str, List[str]] = {
    "Full Body": ["fullbody", "chest", "back", "legs", "shoulders", "arms", "abs"],
    "Upper": ["chest", "back", "shoulders", "arms"],
    "Lower": ["legs", "glutes", "calves", "hamstrings", "quads"],
    "Push": ["chest", "shoulders", "triceps"],
    "Pull": ["back", "biceps", "rear delts", "lats", "upper back"],
    "Legs": ["quads", "hamstrings", "glutes", "calves"],
}

FULL_BODY_MIN_EXERCISES = 5


def preset_for_goal(goal: str) -> GoalPreset:
    """Preset for *goal*; unknown goals get the muscle-gain shaped default."""
    return GOAL_PRESETS.get(goal, DEFAULT_PRESET)


def split_for_days(days_per_week: int) -> List[str]:
    """Day names for the week; unsupported counts get "Day 1".."Day N"."""
    if days_per_week in SPLITS:
        return list(SPLITS[days_per_week])
    return [f"Day {i + 1}" for i in range(max(0, days_per_week))]


def targets_for_day(day_name: str) -> List[str]:
    return DAY_TARGETS.get(day_name, [day_name.lower()])


def exercise_count_for_day(day_name: str, goal: str) -> int:
    count = preset_for_goal(goal).exercises_per_day
    if day_name == "Full Body" and count < FULL_BODY_MIN_EXERCISES:
        count = FULL_BODY_MIN_EXERCISES
    return count


def parse_equipment(text: Optional[str]) -> List[str]:
    """Split a comma-separated equipment entry into lowercase names."""
    if not text:
        return []
    return [part.strip().lower() for part in text.split(",") if part.strip()]


def equipment_matches(exercise_equipment: Sequence[str], user_equipment: Sequence[str]) -> bool:
    """Loose equipment match: any pair where one name contains the other.

    "dumbbell" matches "dumbbells" and "cable" matches "cable machine".
    An empty user list matches everything.
    """
    if not user_equipment:
        return True
    user_lower = [u.lower() for u in user_equipment]
    for ex_eq in exercise_equipment:
        ex_lower = ex_eq.lower()
        if any(ex_lower in u or u in ex_lower for u in user_lower):
            return True
    return False


def _targets_body_part(exercise: Exercise, targets: Sequence[str]) -> bool:
    parts = [p.lower() for p in exercise.body_part]
    return any(t.lower() in parts for t in targets)


def find_exercises_for_targets(
    catalog: Sequence[Exercise],
    targets: Sequence[str],
    equipment: Sequence[str] = (),
) -> List[Exercise]:
    """Exercises hitting any target body part, preferring the user's equipment.

    Body-part match is mandatory. Equipment is a soft preference: when no
    exercise fits the equipment list, every body-part match is returned.
    """
    by_body_part = [ex for ex in catalog if _targets_body_part(ex, targets)]
    pool = [ex for ex in by_body_part if equipment_matches(ex.equipment, equipment)]
    if not pool:
        return by_body_part
    return pool


class RoutineGenerator:
    """Builds weekly plans from the catalog.

    Randomness comes from a ``random.Random`` created per call: seeded when a
    seed is given (reproducible), unseeded otherwise.
    """

    def __init__(self, catalog: Sequence[Exercise], routine_repository=None):
        """Initialize generator.

        Args:
            catalog: Exercises to choose from (read-only)
            routine_repository: Optional RoutineRepository; when given, each
                generated routine is saved as the last routine
        """
        self.catalog = list(catalog)
        self.routine_repository = routine_repository

    def generate(
        self,
        goal: str,
        duration_weeks: int,
        days_per_week: int,
        equipment: Sequence[str] = (),
        seed: Optional[int] = None,
    ) -> Routine:
        """Generate a routine.

        Every week is drawn independently, so weeks differ from one another.
        Days whose targets match nothing in the catalog come back empty.

        Args:
            goal: "muscle-gain", "strength", "endurance" or "fat-loss"
            duration_weeks: Number of weeks (4, 8 or 12 in the UI)
            days_per_week: Training days per week (3-6 have named splits)
            equipment: Available equipment names (empty = anything)
            seed: Optional seed for reproducible output

        Returns:
            Routine with duration_weeks weeks of days_per_week days
        """
        rng = random.Random(seed)
        split = split_for_days(days_per_week)
        user_equipment = [e.lower() for e in equipment]

        weeks: List[WeekPlan] = []
        for _ in range(duration_weeks):
            week = [
                DayPlan(name=day, exercises=self.build_day(day, goal, user_equipment, rng))
                for day in split
            ]
            weeks.append(week)

        routine = Routine(
            goal=goal,
            weeks=weeks,
            days_per_week=days_per_week,
            duration_weeks=duration_weeks,
            created_at=datetime.now(timezone.utc).isoformat(),
        )

        if self.routine_repository is not None:
            self.routine_repository.save_last(routine)
        return routine

    def build_day(
        self,
        day_name: str,
        goal: str,
        equipment: Sequence[str],
        rng: random.Random,
        count: Optional[int] = None,
    ) -> List[RoutineExercise]:
        """Pick unique exercises for one day and attach the goal preset."""
        preset = preset_for_goal(goal)
        target_count = count if count is not None else exercise_count_for_day(day_name, goal)
        if day_name == "Full Body" and target_count < FULL_BODY_MIN_EXERCISES:
            target_count = FULL_BODY_MIN_EXERCISES

        pool = find_exercises_for_targets(self.catalog, targets_for_day(day_name), equipment)
        shuffled = list(pool)
        rng.shuffle(shuffled)
        chosen = shuffled[: min(target_count, len(pool))]

        return [
            RoutineExercise(
                id=ex.id,
                name=ex.name,
                body_part=list(ex.body_part),
                equipment=list(ex.equipment),
                sets=rng.choice(preset.sets),
                reps=preset.reps,
                rest_seconds=preset.rest_seconds,
            )
            for ex in chosen
        ]
