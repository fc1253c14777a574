"""Exercise database for loading the exercise catalog from JSON."""
import json
from pathlib import Path
from typing import Any, List, Optional

from fitfinder.data_layer.exceptions import ExerciseNotFoundError
from fitfinder.data_layer.models import Exercise


DEFAULT_INSTRUCTIONS = ["No instructions available"]


def split_tags(value: Any) -> List[str]:
    """Split a comma-separated tag field into trimmed lowercase tags.

    Lists are joined first so pre-split data and raw strings behave alike.
    """
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        value = ",".join(str(v) for v in value)
    return [part.strip().lower() for part in str(value).split(",") if part.strip()]


def normalize_difficulty(value: Any) -> str:
    """Map a free-form level onto beginner/intermediate/advanced.

    Matching is by substring so "Beginner-friendly" or "Advanced+" work.
    Anything unrecognized is treated as beginner.
    """
    clean = str(value or "").lower()
    if "begin" in clean:
        return "beginner"
    if "inter" in clean:
        return "intermediate"
    if "adv" in clean:
        return "advanced"
    return "beginner"


def normalize_number(value: Any) -> Optional[float]:
    """Coerce a rating to float; None when missing or not numeric."""
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _instructions_from(raw: dict) -> List[str]:
    steps = raw.get("instructions")
    if not steps and raw.get("Desc"):
        steps = str(raw["Desc"]).split(".")
    if not steps:
        steps = DEFAULT_INSTRUCTIONS
    if isinstance(steps, str):
        steps = [steps]
    return [str(step).strip() for step in steps if str(step).strip()]


def parse_exercise(raw: dict, index: int) -> Exercise:
    """Normalize one raw catalog record.

    Args:
        raw: Record as found in the source file (either the curated
            camelCase shape or the scraped Title/BodyPart/Level shape)
        index: Position in the source file, used for generated ids

    Returns:
        Exercise object
    """
    name = raw.get("name") or raw.get("Title") or "Unnamed Exercise"

    exercise_id = raw.get("id")
    if exercise_id is None:
        exercise_id = raw.get("")
    if exercise_id is None:
        exercise_id = f"{name}-{index}"

    return Exercise(
        id=str(exercise_id),
        name=str(name),
        body_part=split_tags(raw.get("bodyPart") or raw.get("BodyPart")),
        equipment=split_tags(raw.get("equipment") or raw.get("Equipment")),
        goals=split_tags(raw.get("goals") or raw.get("Type")),
        difficulty=normalize_difficulty(raw.get("difficulty") or raw.get("Level")),
        instructions=_instructions_from(raw),
        tips=raw.get("tips") or raw.get("RatingDesc") or "",
        rating=normalize_number(raw.get("rating") or raw.get("Rating")),
        rating_desc=raw.get("ratingDesc") or raw.get("RatingDesc"),
        image=raw.get("image"),
        video=raw.get("video"),
    )


class ExerciseDB:
    """Read-only exercise catalog loaded from a directory of JSON files.

    Each file holds one body-part category (``abs.json``, ``chest.json``, ...)
    as a JSON list of raw records, or an object with an ``exercises`` list.
    Files are merged in file-name order.
    """

    def __init__(self, catalog_path: str):
        """Initialize the catalog from a directory or a single JSON file.

        Args:
            catalog_path: Directory of category files, or one JSON file
        """
        self.catalog_path = Path(catalog_path)
        self._exercises: List[Exercise] = []
        self._load_exercises()

    @classmethod
    def from_exercises(cls, exercises: List[Exercise]) -> "ExerciseDB":
        """Build a catalog from already-normalized exercises."""
        db = cls.__new__(cls)
        db.catalog_path = None
        db._exercises = list(exercises)
        return db

    def _load_exercises(self):
        """Load and normalize every category file."""
        if self.catalog_path.is_dir():
            files = sorted(self.catalog_path.glob("*.json"))
        else:
            files = [self.catalog_path]

        for json_file in files:
            with open(json_file, "r") as f:
                data = json.load(f)
            if isinstance(data, dict):
                data = data.get("exercises", [])
            for index, raw in enumerate(data):
                self._exercises.append(parse_exercise(raw, index))

    def get_all_exercises(self) -> List[Exercise]:
        """Get all exercises in catalog order.

        Returns:
            List of all Exercise objects
        """
        return self._exercises.copy()

    def get_exercise_by_id(self, exercise_id: str) -> Optional[Exercise]:
        """Get an exercise by its ID.

        Args:
            exercise_id: Unique exercise identifier

        Returns:
            Exercise object if found, None otherwise
        """
        for exercise in self._exercises:
            if exercise.id == exercise_id:
                return exercise
        return None

    def require_exercise(self, exercise_id: str) -> Exercise:
        """Like get_exercise_by_id but raises ExerciseNotFoundError."""
        exercise = self.get_exercise_by_id(exercise_id)
        if exercise is None:
            raise ExerciseNotFoundError(exercise_id)
        return exercise

    def body_parts(self) -> List[str]:
        """Distinct body-part tags in discovery order."""
        return _unique(tag for ex in self._exercises for tag in ex.body_part)

    def equipment_options(self) -> List[str]:
        """Distinct equipment tags in discovery order."""
        return _unique(tag for ex in self._exercises for tag in ex.equipment)

    def goal_options(self) -> List[str]:
        """Distinct goal tags in discovery order."""
        return _unique(tag for ex in self._exercises for tag in ex.goals)

    def __len__(self) -> int:
        return len(self._exercises)


def _unique(values) -> List[str]:
    seen = set()
    ordered = []
    for value in values:
        if value not in seen:
            seen.add(value)
            ordered.append(value)
    return ordered
