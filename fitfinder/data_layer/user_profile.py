"""User profile loader for loading user preferences from YAML."""
import yaml
from pathlib import Path

from fitfinder.data_layer.exercise_db import split_tags
from fitfinder.data_layer.models import MealPlanInputs, UserProfile


class UserProfileLoader:
    """Loader for user profile configuration from YAML."""

    def __init__(self, yaml_path: str):
        """Initialize user profile loader from YAML file.

        Args:
            yaml_path: Path to YAML file containing user profile
        """
        self.yaml_path = Path(yaml_path)

    def load(self) -> UserProfile:
        """Load user profile from YAML file.

        Returns:
            UserProfile object

        Raises:
            FileNotFoundError: If YAML file doesn't exist
            KeyError: If required fields are missing
        """
        with open(self.yaml_path, "r") as f:
            data = yaml.safe_load(f)

        body = data["body"]
        nutrition = data.get("nutrition", {})
        training = data.get("training", {})

        meal_inputs = MealPlanInputs(
            age=int(body["age"]),
            gender=str(body["gender"]).lower(),
            weight_kg=float(body["weight_kg"]),
            height_cm=float(body["height_cm"]),
            activity_level=str(body.get("activity_level", "moderate")),
            goal=str(nutrition.get("goal", "maintain")),
            diet=str(nutrition.get("diet", "both")),
            cuisine=str(nutrition.get("cuisine", "any")),
        )

        return UserProfile(
            meal_inputs=meal_inputs,
            routine_goal=str(training.get("goal", "muscle-gain")),
            duration_weeks=int(training.get("duration_weeks", 4)),
            days_per_week=int(training.get("days_per_week", 4)),
            equipment=split_tags(training.get("equipment")),
        )
