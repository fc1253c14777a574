"""Food database for loading meal-planner foods from JSON."""
import json
from pathlib import Path
from typing import List, Optional

from fitfinder.data_layer.models import FoodItem


class FoodDB:
    """Database for managing food items loaded from JSON."""

    def __init__(self, json_path: str):
        """Initialize food database from JSON file.

        Args:
            json_path: Path to JSON file containing a "foods" list
        """
        self.json_path = Path(json_path)
        self._foods: List[FoodItem] = []
        self._load_foods()

    def _load_foods(self):
        """Load foods from JSON file."""
        with open(self.json_path, "r") as f:
            data = json.load(f)

        for food_data in data.get("foods", []):
            self._foods.append(self._parse_food(food_data))

    def _parse_food(self, food_data: dict) -> FoodItem:
        """Parse a single food from dictionary data.

        Args:
            food_data: Dictionary containing food data

        Returns:
            FoodItem object
        """
        return FoodItem(
            id=food_data["id"],
            name=food_data["name"],
            kcal=max(0.0, float(food_data.get("kcal", 0.0))),
            protein=max(0.0, float(food_data.get("protein", 0.0))),
            fat=max(0.0, float(food_data.get("fat", 0.0))),
            carbs=max(0.0, float(food_data.get("carbs", 0.0))),
            portion_label=food_data.get("portionLabel", ""),
            tags=[str(tag) for tag in food_data.get("tags", [])],
        )

    def get_all_foods(self) -> List[FoodItem]:
        """Get all foods in file order.

        Returns:
            List of all FoodItem objects
        """
        return self._foods.copy()

    def get_food_by_id(self, food_id: str) -> Optional[FoodItem]:
        """Get a food by its ID.

        Args:
            food_id: Unique food identifier

        Returns:
            FoodItem if found, None otherwise
        """
        for food in self._foods:
            if food.id == food_id:
                return food
        return None
