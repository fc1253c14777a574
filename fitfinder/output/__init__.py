"""Output formatting for routines, meal plans and workout logs."""

from fitfinder.output.formatters import (
    export_meal_plan_json,
    export_routine_json,
    export_workouts_json,
    format_meal_plan_markdown,
    format_routine_markdown,
)

__all__ = [
    "export_meal_plan_json",
    "export_routine_json",
    "export_workouts_json",
    "format_meal_plan_markdown",
    "format_routine_markdown",
]
