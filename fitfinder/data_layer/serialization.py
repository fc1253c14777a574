"""Conversion between data models and their stored/exported JSON shape.

Stored and exported documents share one camelCase shape
(``daysPerWeek``, ``restSeconds``, ``portionLabel`` ...).
"""
from typing import Any, Dict, List

from fitfinder.data_layer.models import (
    DayPlan,
    FoodItem,
    MealItem,
    MealPlanInputs,
    MealSlot,
    Routine,
    RoutineExercise,
    SavedMealPlan,
    SetEntry,
    WeeklyMealPlan,
    WorkoutLogEntry,
)


# --- Routines ---


def routine_exercise_to_dict(exercise: RoutineExercise) -> Dict[str, Any]:
    return {
        "id": exercise.id,
        "name": exercise.name,
        "bodyPart": list(exercise.body_part),
        "equipment": list(exercise.equipment),
        "sets": exercise.sets,
        "reps": exercise.reps,
        "restSeconds": exercise.rest_seconds,
    }


def routine_to_dict(routine: Routine) -> Dict[str, Any]:
    """Serialize a Routine to its JSON document shape."""
    return {
        "goal": routine.goal,
        "weeks": [
            [
                {
                    "name": day.name,
                    "exercises": [routine_exercise_to_dict(ex) for ex in day.exercises],
                }
                for day in week
            ]
            for week in routine.weeks
        ],
        "daysPerWeek": routine.days_per_week,
        "durationWeeks": routine.duration_weeks,
        "createdAt": routine.created_at,
    }


def routine_from_dict(data: Dict[str, Any]) -> Routine:
    """Rebuild a Routine from its JSON document shape.

    Raises:
        KeyError: If a required key is missing
    """
    weeks = []
    for week_data in data["weeks"]:
        week = []
        for day_data in week_data:
            exercises = [
                RoutineExercise(
                    id=str(ex["id"]),
                    name=ex["name"],
                    body_part=list(ex.get("bodyPart", [])),
                    equipment=list(ex.get("equipment", [])),
                    sets=int(ex["sets"]),
                    reps=str(ex["reps"]),
                    rest_seconds=int(ex["restSeconds"]),
                )
                for ex in day_data.get("exercises", [])
            ]
            week.append(DayPlan(name=day_data["name"], exercises=exercises))
        weeks.append(week)

    return Routine(
        goal=data["goal"],
        weeks=weeks,
        days_per_week=int(data["daysPerWeek"]),
        duration_weeks=int(data["durationWeeks"]),
        created_at=data.get("createdAt", ""),
    )


# --- Meal plans ---


def food_to_dict(food: FoodItem) -> Dict[str, Any]:
    return {
        "id": food.id,
        "name": food.name,
        "kcal": food.kcal,
        "protein": food.protein,
        "fat": food.fat,
        "carbs": food.carbs,
        "portionLabel": food.portion_label,
        "tags": list(food.tags),
    }


def food_from_dict(data: Dict[str, Any]) -> FoodItem:
    return FoodItem(
        id=data["id"],
        name=data["name"],
        kcal=float(data.get("kcal", 0.0)),
        protein=float(data.get("protein", 0.0)),
        fat=float(data.get("fat", 0.0)),
        carbs=float(data.get("carbs", 0.0)),
        portion_label=data.get("portionLabel", ""),
        tags=list(data.get("tags", [])),
    )


def weekly_plan_to_dict(plan: WeeklyMealPlan) -> Dict[str, List[Dict[str, Any]]]:
    """Serialize a WeeklyMealPlan, keeping day order."""
    return {
        day: [
            {
                "mealName": slot.meal_name,
                "items": [
                    {"food": food_to_dict(item.food), "portions": item.portions}
                    for item in slot.items
                ],
                "kcal": slot.kcal,
            }
            for slot in slots
        ]
        for day, slots in plan.items()
    }


def weekly_plan_from_dict(data: Dict[str, Any]) -> WeeklyMealPlan:
    plan: WeeklyMealPlan = {}
    for day, slots in data.items():
        plan[day] = [
            MealSlot(
                meal_name=slot["mealName"],
                items=[
                    MealItem(food=food_from_dict(item["food"]), portions=int(item["portions"]))
                    for item in slot.get("items", [])
                ],
                kcal=int(slot.get("kcal", 0)),
            )
            for slot in slots
        ]
    return plan


def inputs_to_dict(inputs: MealPlanInputs) -> Dict[str, Any]:
    return {
        "age": inputs.age,
        "gender": inputs.gender,
        "weight": inputs.weight_kg,
        "height": inputs.height_cm,
        "activity": inputs.activity_level,
        "goal": inputs.goal,
        "diet": inputs.diet,
        "cuisine": inputs.cuisine,
    }


def inputs_from_dict(data: Dict[str, Any]) -> MealPlanInputs:
    defaults = MealPlanInputs()
    return MealPlanInputs(
        age=int(data.get("age", defaults.age)),
        gender=str(data.get("gender", defaults.gender)),
        weight_kg=float(data.get("weight", defaults.weight_kg)),
        height_cm=float(data.get("height", defaults.height_cm)),
        activity_level=str(data.get("activity", defaults.activity_level)),
        goal=str(data.get("goal", defaults.goal)),
        diet=str(data.get("diet", defaults.diet)),
        cuisine=str(data.get("cuisine", defaults.cuisine)),
    )


def saved_plan_to_dict(saved: SavedMealPlan) -> Dict[str, Any]:
    return {
        "id": saved.id,
        "name": saved.name,
        "createdAt": saved.created_at,
        "inputs": inputs_to_dict(saved.inputs),
        "calorieTarget": saved.calorie_target,
        "weeklyPlan": weekly_plan_to_dict(saved.weekly_plan),
    }


def saved_plan_from_dict(data: Dict[str, Any]) -> SavedMealPlan:
    return SavedMealPlan(
        id=str(data["id"]),
        name=data["name"],
        created_at=data.get("createdAt", ""),
        inputs=inputs_from_dict(data.get("inputs", {})),
        calorie_target=int(data["calorieTarget"]),
        weekly_plan=weekly_plan_from_dict(data.get("weeklyPlan", {})),
    )


# --- Workout log ---


def workout_entry_to_dict(entry: WorkoutLogEntry) -> Dict[str, Any]:
    return {
        "id": entry.id,
        "date": entry.date,
        "exercise": entry.exercise,
        "notes": entry.notes,
        "sets": [
            {"id": s.id, "reps": s.reps, "weight": s.weight} for s in entry.sets
        ],
    }


def workout_entry_from_dict(data: Dict[str, Any]) -> WorkoutLogEntry:
    return WorkoutLogEntry(
        id=str(data["id"]),
        date=data.get("date", ""),
        exercise=data["exercise"],
        notes=data.get("notes") or "",
        sets=[
            SetEntry(id=str(s.get("id", "")), reps=s.get("reps", 0), weight=s.get("weight", 0))
            for s in data.get("sets", [])
        ],
    )
