"""Planning module for routine generation and weekly meal planning."""

from .meal_planner import MealPlanResult, WeeklyMealPlanner
from .routine_generator import RoutineGenerator

__all__ = [
    "MealPlanResult",
    "RoutineGenerator",
    "WeeklyMealPlanner",
]
