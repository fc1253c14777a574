"""Formatters for routine, meal plan and workout output (JSON and Markdown)."""

import json
import re
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional

from fitfinder.data_layer.models import (
    Exercise,
    GroceryItem,
    MealPlanInputs,
    MealSlot,
    Routine,
    WeeklyMealPlan,
    WorkoutLogEntry,
)
from fitfinder.data_layer.serialization import (
    inputs_to_dict,
    routine_to_dict,
    weekly_plan_to_dict,
    workout_entry_to_dict,
)
from fitfinder.planning.meal_planner import MealPlanResult


# --- JSON exports ---


def format_routine_json(routine: Routine) -> Dict[str, Any]:
    """Format a Routine as its export document."""
    return routine_to_dict(routine)


def format_meal_plan_json(
    name: str,
    inputs: MealPlanInputs,
    calorie_target: int,
    weekly_plan: WeeklyMealPlan,
) -> Dict[str, Any]:
    """Format a weekly plan with the inputs and target that produced it."""
    return {
        "name": name,
        "inputs": inputs_to_dict(inputs),
        "calorieTarget": calorie_target,
        "weeklyPlan": weekly_plan_to_dict(weekly_plan),
    }


def format_workouts_json(entries: List[WorkoutLogEntry], exported_at: Optional[str] = None) -> Dict[str, Any]:
    """Format the workout log with an export timestamp."""
    return {
        "exportedAt": exported_at or datetime.now(timezone.utc).isoformat(),
        "workouts": [workout_entry_to_dict(entry) for entry in entries],
    }


def format_grocery_json(items: List[GroceryItem]) -> List[Dict[str, Any]]:
    return [{"name": item.name, "portion": item.portion, "qty": item.qty} for item in items]


def format_exercise_json(exercise: Exercise) -> Dict[str, Any]:
    return {
        "id": exercise.id,
        "name": exercise.name,
        "bodyPart": list(exercise.body_part),
        "equipment": list(exercise.equipment),
        "goals": list(exercise.goals),
        "difficulty": exercise.difficulty,
        "instructions": list(exercise.instructions),
        "tips": exercise.tips,
        "rating": exercise.rating,
        "ratingDesc": exercise.rating_desc,
        "image": exercise.image,
        "video": exercise.video,
    }


def export_routine_json(routine: Routine, indent: int = 2) -> str:
    """Routine export as a JSON string.

    Args:
        routine: Routine to export
        indent: JSON indentation (default: 2)

    Returns:
        JSON string
    """
    return json.dumps(format_routine_json(routine), indent=indent)


def export_meal_plan_json(
    name: str,
    inputs: MealPlanInputs,
    calorie_target: int,
    weekly_plan: WeeklyMealPlan,
    indent: int = 2,
) -> str:
    return json.dumps(format_meal_plan_json(name, inputs, calorie_target, weekly_plan), indent=indent)


def export_workouts_json(entries: List[WorkoutLogEntry], indent: int = 2) -> str:
    return json.dumps(format_workouts_json(entries), indent=indent)


# --- Download file names ---


def routine_file_name(routine: Routine) -> str:
    return f"fitfinder_routine_{routine.goal}_{routine.duration_weeks}w.json"


def meal_plan_file_name(plan_name: str) -> str:
    """Plan name with whitespace runs as underscores, e.g. my_weekly_plan.json."""
    stem = re.sub(r"\s+", "_", plan_name or "mealplan").lower()
    return f"{stem}.json"


def workouts_file_name(on: Optional[date] = None) -> str:
    return f"fitfinder_workouts_{(on or date.today()).isoformat()}.json"


# --- Markdown ---


def format_routine_markdown(routine: Routine) -> str:
    """Format a Routine as Markdown, one section per week.

    Args:
        routine: Routine to format

    Returns:
        Formatted Markdown string
    """
    lines = []
    goal_display = routine.goal.replace("-", " ").title()
    lines.append(f"# {goal_display} Routine\n")
    lines.append(f"**Duration:** {routine.duration_weeks} weeks")
    lines.append(f"**Days per week:** {routine.days_per_week}")
    lines.append("")

    for week_idx, week in enumerate(routine.weeks, 1):
        lines.append(f"## Week {week_idx}")
        for day in week:
            lines.append(f"### {day.name}")
            if not day.exercises:
                lines.append("_No matching exercises_")
            for ex in day.exercises:
                lines.append(
                    f"- {ex.name}: {ex.sets} x {ex.reps} (rest {ex.rest_seconds}s)"
                )
            lines.append("")

    return "\n".join(lines)


def format_slot_line(slot: MealSlot) -> str:
    """One-line summary, e.g. "Breakfast (470 kcal): Rolled Oats (60g) x2"."""
    items = ", ".join(
        f"{item.food.name} x{item.portions}" if item.portions > 1 else item.food.name
        for item in slot.items
    )
    return f"{slot.meal_name.capitalize()} ({slot.kcal} kcal): {items or '-'}"


def format_meal_plan_markdown(result: MealPlanResult, grocery: Optional[List[GroceryItem]] = None) -> str:
    """Format a MealPlanResult as Markdown.

    Args:
        result: MealPlanResult from the planner
        grocery: Optional grocery list to append

    Returns:
        Formatted Markdown string
    """
    targets = result.targets
    lines = ["# Weekly Meal Plan\n"]
    lines.append(f"**Calorie target:** {targets.calorie_target} kcal")
    lines.append(f"**TDEE:** {targets.tdee} kcal")
    lines.append(f"**BMR:** {targets.bmr} kcal")
    lines.append("")

    for day, slots in result.weekly_plan.items():
        day_total = sum(slot.kcal for slot in slots)
        lines.append(f"## {day} ({day_total} kcal)")
        for slot in slots:
            lines.append(f"- {format_slot_line(slot)}")
        lines.append("")

    if grocery:
        lines.append("## Grocery List")
        for item in grocery:
            lines.append(f"- {item.name} ({item.portion}) x{item.qty}")
        lines.append("")

    return "\n".join(lines)


def format_exercise_markdown(exercise: Exercise) -> str:
    lines = [f"## {exercise.name}"]
    lines.append(f"**Difficulty:** {exercise.difficulty}")
    lines.append(f"**Body parts:** {', '.join(exercise.body_part) or '-'}")
    lines.append(f"**Equipment:** {', '.join(exercise.equipment) or '-'}")
    lines.append(f"**Goals:** {', '.join(exercise.goals) or '-'}")
    if exercise.rating is not None:
        lines.append(f"**Rating:** {exercise.rating:.1f}/5")
    if exercise.instructions:
        lines.append("")
        for step_idx, instruction in enumerate(exercise.instructions, 1):
            lines.append(f"{step_idx}. {instruction}")
    if exercise.tips:
        lines.append("")
        lines.append(f"_Tip: {exercise.tips}_")
    lines.append("")
    return "\n".join(lines)


def format_workouts_markdown(entries: List[WorkoutLogEntry]) -> str:
    lines = ["# Workout Log\n"]
    if not entries:
        lines.append("_No workouts logged yet_")
    for entry in entries:
        lines.append(f"## {entry.date}: {entry.exercise}")
        for set_idx, s in enumerate(entry.sets, 1):
            lines.append(f"{set_idx}. {s.reps} reps @ {s.weight}")
        if entry.notes:
            lines.append(f"_{entry.notes}_")
        lines.append("")
    return "\n".join(lines)
