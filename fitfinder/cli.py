#!/usr/bin/env python3
"""Command-line interface for the FitFinder exercise explorer and planners."""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from fitfinder.data_layer.exceptions import ExerciseNotFoundError, StorageError
from fitfinder.data_layer.exercise_db import ExerciseDB
from fitfinder.data_layer.food_db import FoodDB
from fitfinder.data_layer.models import FilterOptions, MealPlanInputs
from fitfinder.data_layer.user_profile import UserProfileLoader
from fitfinder.nutrition.aggregator import NutritionAggregator
from fitfinder.nutrition.calculator import EnergyCalculator
from fitfinder.output.formatters import (
    export_meal_plan_json,
    export_routine_json,
    export_workouts_json,
    format_exercise_json,
    format_exercise_markdown,
    format_grocery_json,
    format_meal_plan_markdown,
    format_routine_markdown,
    format_workouts_markdown,
    meal_plan_file_name,
    routine_file_name,
    workouts_file_name,
)
from fitfinder.planning.meal_planner import WeeklyMealPlanner
from fitfinder.planning.routine_generator import RoutineGenerator, parse_equipment
from fitfinder.search.exercise_search import SearchSession, toggle_favorite
from fitfinder.search.suggestions import suggest
from fitfinder.storage.json_file_store import JsonFileStore
from fitfinder.storage.repositories import FavoritesRepository, MealPlanLibrary, RoutineRepository
from fitfinder.workouts.workout_log import WorkoutLog


def _emit(text: str, output_file: Optional[str]) -> None:
    """Print to stdout or write to a file (reporting the path on stderr)."""
    if output_file:
        output_path = Path(output_file)
        output_path.write_text(text)
        print(f"Output saved to {output_path}", file=sys.stderr)
    else:
        print(text)


def _split_csv(value: Optional[str]) -> List[str]:
    return parse_equipment(value)


def _load_profile_inputs(args) -> MealPlanInputs:
    """Meal inputs from --profile when given, overridden by explicit flags."""
    inputs = MealPlanInputs()
    if args.profile:
        inputs = UserProfileLoader(args.profile).load().meal_inputs
    for flag, attr in (
        ("age", "age"),
        ("gender", "gender"),
        ("weight", "weight_kg"),
        ("height", "height_cm"),
        ("activity", "activity_level"),
        ("goal", "goal"),
        ("diet", "diet"),
        ("cuisine", "cuisine"),
    ):
        value = getattr(args, flag, None)
        if value is not None:
            setattr(inputs, attr, value)
    return inputs


# --- Commands ---


def cmd_search(args) -> int:
    db = ExerciseDB(args.catalog)
    store = JsonFileStore(args.store)
    session = SearchSession(
        catalog=db.get_all_exercises(),
        query=args.query or "",
        filters=FilterOptions(
            body_parts=_split_csv(args.body_parts),
            equipment=_split_csv(args.equipment),
            goals=_split_csv(args.goals),
        ),
        favorites=FavoritesRepository(store).load(),
        only_favorites=args.favorites,
        visible_count=args.limit,
    )
    results = session.visible_results()
    print(f"Found {len(session.results())} exercises", file=sys.stderr)

    if args.output == "json":
        _emit(json.dumps([format_exercise_json(ex) for ex in results], indent=2), args.output_file)
    else:
        _emit("\n".join(format_exercise_markdown(ex) for ex in results), args.output_file)
    return 0


def cmd_suggest(args) -> int:
    db = ExerciseDB(args.catalog)
    for suggestion in suggest(db.get_all_exercises(), args.query):
        print(suggestion)
    return 0


def cmd_favorite(args) -> int:
    db = ExerciseDB(args.catalog)
    exercise = db.require_exercise(args.exercise_id)
    repo = FavoritesRepository(JsonFileStore(args.store))
    favorites = toggle_favorite(repo.load(), exercise.id)
    repo.save(favorites)
    state = "added to" if exercise.id in favorites else "removed from"
    print(f"{exercise.name} {state} favorites", file=sys.stderr)
    return 0


def cmd_routine(args) -> int:
    goal, weeks, days, equipment = args.goal, args.weeks, args.days, parse_equipment(args.equipment)
    if args.profile:
        profile = UserProfileLoader(args.profile).load()
        goal = goal or profile.routine_goal
        weeks = weeks or profile.duration_weeks
        days = days or profile.days_per_week
        equipment = equipment or profile.equipment

    db = ExerciseDB(args.catalog)
    generator = RoutineGenerator(
        db.get_all_exercises(),
        routine_repository=RoutineRepository(JsonFileStore(args.store)),
    )
    print("Generating routine...", file=sys.stderr)
    routine = generator.generate(
        goal=goal or "muscle-gain",
        duration_weeks=weeks or 4,
        days_per_week=days or 4,
        equipment=equipment,
        seed=args.seed,
    )

    if args.output == "json":
        _emit(export_routine_json(routine), args.output_file)
    else:
        _emit(format_routine_markdown(routine), args.output_file)
    return 0


def cmd_targets(args) -> int:
    inputs = _load_profile_inputs(args)
    targets = EnergyCalculator.compute_targets(
        inputs.age,
        inputs.gender,
        inputs.weight_kg,
        inputs.height_cm,
        inputs.activity_level,
        inputs.goal,
    )
    print(f"BMR: {targets.bmr} kcal")
    print(f"TDEE: {targets.tdee} kcal")
    print(f"Calorie target: {targets.calorie_target} kcal")
    return 0


def cmd_meals(args) -> int:
    inputs = _load_profile_inputs(args)
    foods = FoodDB(args.foods).get_all_foods()
    aggregator = NutritionAggregator()
    planner = WeeklyMealPlanner(foods, aggregator)

    print("Planning meals...", file=sys.stderr)
    result = planner.plan_from_inputs(inputs, seed=args.seed)
    grocery = aggregator.aggregate_groceries(result.weekly_plan)

    if args.save:
        library = MealPlanLibrary(JsonFileStore(args.store))
        saved = library.save(args.name, inputs, result.targets.calorie_target, result.weekly_plan)
        if saved is not None:
            print(f"Saved plan '{saved.name}' ({saved.id})", file=sys.stderr)

    if args.output == "json":
        _emit(
            export_meal_plan_json(args.name, inputs, result.targets.calorie_target, result.weekly_plan),
            args.output_file,
        )
    else:
        _emit(format_meal_plan_markdown(result, grocery), args.output_file)
    return 0


def cmd_grocery(args) -> int:
    library = MealPlanLibrary(JsonFileStore(args.store))
    saved = library.load(args.plan_id)
    if saved is None:
        print(f"Error: No saved meal plan with id {args.plan_id}", file=sys.stderr)
        return 1
    grocery = NutritionAggregator.aggregate_groceries(saved.weekly_plan)
    if args.output == "json":
        _emit(json.dumps(format_grocery_json(grocery), indent=2), args.output_file)
    else:
        _emit("\n".join(f"- {g.name} ({g.portion}) x{g.qty}" for g in grocery), args.output_file)
    return 0


def _parse_set(text: str) -> dict:
    """Parse REPSxWEIGHT such as 8x20; "8x" or "x20" leave one side empty."""
    reps, _, weight = text.partition("x")
    return {"reps": reps.strip(), "weight": weight.strip()}


def cmd_log(args) -> int:
    log = WorkoutLog(JsonFileStore(args.store))
    result = log.save(
        args.exercise,
        sets=[_parse_set(s) for s in args.set or []],
        date=args.date,
        notes=args.notes or "",
    )
    if not result.saved:
        print(result.message, file=sys.stderr)
        return 2
    print(f"Logged {result.entry.exercise} ({len(result.entry.sets)} sets) as {result.entry.id}", file=sys.stderr)
    return 0


def cmd_workouts(args) -> int:
    log = WorkoutLog(JsonFileStore(args.store))
    if args.delete:
        if not log.delete(args.delete):
            print(f"Error: No workout with id {args.delete}", file=sys.stderr)
            return 1
        print(f"Deleted {args.delete}", file=sys.stderr)
        return 0
    _emit(format_workouts_markdown(log.entries()), args.output_file)
    return 0


def cmd_export(args) -> int:
    store = JsonFileStore(args.store)
    if args.what == "routine":
        routine = RoutineRepository(store).load_last()
        if routine is None:
            print("Error: No routine generated yet", file=sys.stderr)
            return 1
        _emit(export_routine_json(routine), args.output_file or routine_file_name(routine))
    elif args.what == "meal-plan":
        plans = MealPlanLibrary(store).list()
        saved = next((p for p in plans if p.id == args.plan_id), None) if args.plan_id else (plans[0] if plans else None)
        if saved is None:
            print("Error: No saved meal plan found", file=sys.stderr)
            return 1
        _emit(
            export_meal_plan_json(saved.name, saved.inputs, saved.calorie_target, saved.weekly_plan),
            args.output_file or meal_plan_file_name(saved.name),
        )
    else:
        log = WorkoutLog(store)
        _emit(export_workouts_json(log.entries()), args.output_file or workouts_file_name())
    return 0


# --- Parser ---


def _add_output_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--output",
        choices=["markdown", "json"],
        default="markdown",
        help="Output format: markdown (default) or json",
    )
    parser.add_argument(
        "--output-file",
        type=str,
        help="Optional file path to save output (default: print to stdout)",
    )


def _add_body_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--profile", type=str, help="Path to user profile YAML file")
    parser.add_argument("--age", type=int)
    parser.add_argument("--gender", choices=["male", "female"])
    parser.add_argument("--weight", type=float, help="Weight in kg")
    parser.add_argument("--height", type=float, help="Height in cm")
    parser.add_argument(
        "--activity",
        choices=["sedentary", "light", "moderate", "active", "very_active"],
    )
    parser.add_argument("--goal", choices=["lose", "maintain", "gain"])


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Browse exercises, generate routines, plan meals and log workouts"
    )
    parser.add_argument(
        "--catalog",
        type=str,
        default="data/exercises",
        help="Path to exercise catalog directory (default: data/exercises)",
    )
    parser.add_argument(
        "--foods",
        type=str,
        default="data/foods.json",
        help="Path to foods JSON file (default: data/foods.json)",
    )
    parser.add_argument(
        "--store",
        type=str,
        default="fitfinder_store.json",
        help="Path to local store file (default: fitfinder_store.json)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("search", help="Search and filter exercises")
    p.add_argument("query", nargs="?", default="")
    p.add_argument("--body-parts", help="Comma-separated body parts")
    p.add_argument("--equipment", help="Comma-separated equipment")
    p.add_argument("--goals", help="Comma-separated goals")
    p.add_argument("--favorites", action="store_true", help="Only show favorites")
    p.add_argument("--limit", type=int, default=200, help="Maximum results shown (default: 200)")
    _add_output_args(p)
    p.set_defaults(func=cmd_search)

    p = sub.add_parser("suggest", help="Suggest names and tags for a query")
    p.add_argument("query")
    p.set_defaults(func=cmd_suggest)

    p = sub.add_parser("favorite", help="Toggle an exercise as favorite")
    p.add_argument("exercise_id")
    p.set_defaults(func=cmd_favorite)

    p = sub.add_parser("routine", help="Generate a training routine")
    p.add_argument("--goal", choices=["muscle-gain", "strength", "endurance", "fat-loss"])
    p.add_argument("--weeks", type=int, choices=[4, 8, 12])
    p.add_argument("--days", type=int, choices=[3, 4, 5, 6])
    p.add_argument("--equipment", help="Comma-separated equipment, e.g. 'dumbbells, barbell'")
    p.add_argument("--seed", type=int, help="Seed for reproducible routines")
    p.add_argument("--profile", type=str, help="Path to user profile YAML file")
    _add_output_args(p)
    p.set_defaults(func=cmd_routine)

    p = sub.add_parser("targets", help="Show BMR, TDEE and calorie target")
    _add_body_args(p)
    p.set_defaults(func=cmd_targets)

    p = sub.add_parser("meals", help="Build a weekly meal plan")
    _add_body_args(p)
    p.add_argument("--diet", choices=["veg", "nonveg", "both"])
    p.add_argument("--cuisine", choices=["indian", "western", "any"])
    p.add_argument("--seed", type=int, help="Seed for reproducible plans")
    p.add_argument("--name", default="My Weekly Plan", help="Plan name")
    p.add_argument("--save", action="store_true", help="Save the plan to the local store")
    _add_output_args(p)
    p.set_defaults(func=cmd_meals)

    p = sub.add_parser("grocery", help="Grocery list for a saved meal plan")
    p.add_argument("plan_id")
    _add_output_args(p)
    p.set_defaults(func=cmd_grocery)

    p = sub.add_parser("log", help="Log a workout")
    p.add_argument("exercise")
    p.add_argument("--set", action="append", help="Set as REPSxWEIGHT, e.g. 8x20 (repeatable)")
    p.add_argument("--date", help="Date as YYYY-MM-DD (default: today)")
    p.add_argument("--notes")
    p.set_defaults(func=cmd_log)

    p = sub.add_parser("workouts", help="Show or delete logged workouts")
    p.add_argument("--delete", metavar="ID", help="Delete the workout with this id")
    p.add_argument("--output-file", type=str)
    p.set_defaults(func=cmd_workouts)

    p = sub.add_parser("export", help="Export routine, meal plan or workouts as JSON")
    p.add_argument("what", choices=["routine", "meal-plan", "workouts"])
    p.add_argument("--plan-id", help="Saved meal plan id (default: most recent)")
    p.add_argument("--output-file", type=str)
    p.set_defaults(func=cmd_export)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    catalog_path = Path(args.catalog)
    if args.command in ("search", "suggest", "favorite", "routine") and not catalog_path.exists():
        print(f"Error: Exercise catalog not found: {catalog_path}", file=sys.stderr)
        return 1

    foods_path = Path(args.foods)
    if args.command == "meals" and not foods_path.exists():
        print(f"Error: Foods file not found: {foods_path}", file=sys.stderr)
        return 1

    try:
        return args.func(args)
    except StorageError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except (ExerciseNotFoundError, FileNotFoundError, LookupError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
