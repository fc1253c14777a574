"""Data models for the fitness explorer."""
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union


DIFFICULTY_LEVELS = ("beginner", "intermediate", "advanced")
MEAL_NAMES = ("breakfast", "lunch", "dinner", "snacks")
WEEK_DAYS = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)


@dataclass(frozen=True)
class Exercise:
    """Represents a single catalog exercise."""

    id: str  # Unique identifier
    name: str
    body_part: List[str]  # Lowercase tags (e.g., "chest", "triceps")
    equipment: List[str]  # Lowercase tags (e.g., "dumbbell", "bodyweight")
    goals: List[str]  # Lowercase tags (e.g., "strength")
    difficulty: str = "beginner"  # One of DIFFICULTY_LEVELS
    instructions: List[str] = field(default_factory=list)
    tips: str = ""
    rating: Optional[float] = None  # 0-5
    rating_desc: Optional[str] = None
    image: Optional[str] = None
    video: Optional[str] = None


@dataclass
class FilterOptions:
    """Selected facet values. An empty facet means no constraint."""

    body_parts: List[str] = field(default_factory=list)
    equipment: List[str] = field(default_factory=list)
    goals: List[str] = field(default_factory=list)

    def active_count(self) -> int:
        return len(self.body_parts) + len(self.equipment) + len(self.goals)


@dataclass(frozen=True)
class FoodItem:
    """Represents a food with per-portion nutrition."""

    id: str
    name: str  # Display name (e.g., "Rolled Oats (60g)")
    kcal: float
    protein: float
    fat: float
    carbs: float
    portion_label: str  # e.g., "60 g", "2 pcs"
    tags: List[str] = field(default_factory=list)  # diet, cuisine and slot tags


@dataclass
class RoutineExercise:
    """An exercise as prescribed inside a generated routine."""

    id: str
    name: str
    body_part: List[str]
    equipment: List[str]
    sets: int
    reps: str  # Range string, e.g. "8-12"
    rest_seconds: int


@dataclass
class DayPlan:
    """One training day of a week."""

    name: str  # Day-split label, e.g. "Push" or "Full Body"
    exercises: List[RoutineExercise] = field(default_factory=list)


WeekPlan = List[DayPlan]


@dataclass
class Routine:
    """A multi-week training routine."""

    goal: str  # "muscle-gain", "strength", "endurance", "fat-loss"
    weeks: List[WeekPlan]
    days_per_week: int
    duration_weeks: int
    created_at: str  # ISO-8601 timestamp


@dataclass
class CalorieTargets:
    """Daily energy estimates for a user."""

    bmr: int
    tdee: int
    calorie_target: int


@dataclass
class MealItem:
    """A food placed in a meal slot."""

    food: FoodItem
    portions: int = 1

    @property
    def kcal(self) -> float:
        return self.food.kcal * self.portions


@dataclass
class MealSlot:
    """One meal of a day (breakfast, lunch, dinner or snacks)."""

    meal_name: str
    items: List[MealItem] = field(default_factory=list)
    kcal: int = 0  # Rounded total


WeeklyMealPlan = Dict[str, List[MealSlot]]


@dataclass
class MealPlanInputs:
    """Biometric and preference inputs of a meal plan."""

    age: int = 25
    gender: str = "male"  # "male" or "female"
    weight_kg: float = 70.0
    height_cm: float = 175.0
    activity_level: str = "moderate"
    goal: str = "maintain"  # "lose", "maintain", "gain"
    diet: str = "both"  # "veg", "nonveg", "both"
    cuisine: str = "any"  # "indian", "western", "any"


@dataclass
class SavedMealPlan:
    """A named weekly meal plan kept in the local store."""

    id: str
    name: str
    created_at: str
    inputs: MealPlanInputs
    calorie_target: int
    weekly_plan: WeeklyMealPlan


@dataclass
class GroceryItem:
    """Total portions of one food across a weekly plan."""

    name: str
    portion: str
    qty: int


Number = Union[int, float]


@dataclass
class SetEntry:
    """One logged set."""

    id: str
    reps: Number = 0
    weight: Number = 0


@dataclass
class WorkoutLogEntry:
    """A logged exercise on a given date."""

    id: str
    date: str  # YYYY-MM-DD
    exercise: str
    sets: List[SetEntry] = field(default_factory=list)
    notes: str = ""


@dataclass
class UserProfile:
    """User configuration for meal planning and routine generation."""

    # Meal planning inputs
    meal_inputs: MealPlanInputs

    # Routine preferences
    routine_goal: str = "muscle-gain"
    duration_weeks: int = 4
    days_per_week: int = 4
    equipment: List[str] = field(default_factory=list)
