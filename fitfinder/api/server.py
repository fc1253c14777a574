"""FastAPI server exposing catalog search, routines, meal plans and the workout log."""

from typing import Any, Dict, List, Optional

import uvicorn
from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from fitfinder.data_layer.exceptions import StorageError
from fitfinder.data_layer.exercise_db import ExerciseDB
from fitfinder.data_layer.food_db import FoodDB
from fitfinder.data_layer.models import FilterOptions, MealPlanInputs
from fitfinder.data_layer.serialization import (
    inputs_to_dict,
    routine_to_dict,
    saved_plan_to_dict,
    weekly_plan_from_dict,
    weekly_plan_to_dict,
    workout_entry_to_dict,
)
from fitfinder.nutrition.aggregator import NutritionAggregator
from fitfinder.nutrition.calculator import EnergyCalculator
from fitfinder.output.formatters import (
    format_exercise_json,
    format_grocery_json,
    format_workouts_json,
)
from fitfinder.planning.meal_planner import WeeklyMealPlanner
from fitfinder.planning.routine_generator import RoutineGenerator, parse_equipment
from fitfinder.search.exercise_search import search, toggle_favorite
from fitfinder.search.suggestions import suggest
from fitfinder.storage.json_file_store import JsonFileStore
from fitfinder.storage.key_value_store import KeyValueStore
from fitfinder.storage.memory_store import InMemoryStore
from fitfinder.storage.repositories import FavoritesRepository, MealPlanLibrary, RoutineRepository
from fitfinder.workouts.workout_log import WorkoutLog


catalog_path = "data/exercises"
foods_path = "data/foods.json"
store_path = "fitfinder_store.json"


class RoutineRequest(BaseModel):
    goal: str = "muscle-gain"
    duration_weeks: int = Field(4, ge=1, le=52)
    days_per_week: int = Field(4, ge=1, le=7)
    equipment: str = ""  # Comma-separated
    seed: Optional[int] = None


class BodyInputs(BaseModel):
    age: int = Field(25, gt=0)
    gender: str = "male"
    weight_kg: float = Field(70.0, gt=0)
    height_cm: float = Field(175.0, gt=0)
    activity_level: str = "moderate"
    goal: str = "maintain"
    diet: str = "both"
    cuisine: str = "any"

    def to_inputs(self) -> MealPlanInputs:
        return MealPlanInputs(
            age=self.age,
            gender=self.gender,
            weight_kg=self.weight_kg,
            height_cm=self.height_cm,
            activity_level=self.activity_level,
            goal=self.goal,
            diet=self.diet,
            cuisine=self.cuisine,
        )


class MealPlanRequest(BodyInputs):
    seed: Optional[int] = None


class SaveMealPlanRequest(MealPlanRequest):
    name: str = "My Weekly Plan"
    weeklyPlan: Optional[Dict[str, List[Dict[str, Any]]]] = None  # As returned by /build


class GroceryRequest(BaseModel):
    weeklyPlan: Dict[str, List[Dict[str, Any]]]


class SetRequest(BaseModel):
    reps: Any = ""
    weight: Any = ""


class WorkoutRequest(BaseModel):
    exercise: str = ""
    date: Optional[str] = None
    notes: str = ""
    sets: List[SetRequest] = Field(default_factory=list)


def create_app(
    catalog: str = catalog_path,
    foods: str = foods_path,
    store: Optional[KeyValueStore] = None,
) -> FastAPI:
    """Build the API over a catalog directory, a foods file and a store.

    Args:
        catalog: Exercise catalog directory (or single JSON file)
        foods: Foods JSON file
        store: KeyValueStore for persisted state (in-memory when omitted)

    Returns:
        FastAPI application
    """
    exercise_db = ExerciseDB(catalog)
    food_db = FoodDB(foods)
    store = store if store is not None else InMemoryStore()

    favorites_repo = FavoritesRepository(store)
    routine_repo = RoutineRepository(store)
    meal_library = MealPlanLibrary(store)
    workout_log = WorkoutLog(store)
    aggregator = NutritionAggregator()
    meal_planner = WeeklyMealPlanner(food_db.get_all_foods(), aggregator)
    routine_generator = RoutineGenerator(exercise_db.get_all_exercises(), routine_repository=routine_repo)

    app = FastAPI(title="FitFinder API")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Local development
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # --- Catalog ---

    @app.get("/api/exercises")
    def list_exercises(
        q: str = "",
        body_parts: str = "",
        equipment: str = "",
        goals: str = "",
        favorites_only: bool = False,
        limit: int = Query(200, ge=0),
    ) -> Dict[str, Any]:
        filters = FilterOptions(
            body_parts=parse_equipment(body_parts),
            equipment=parse_equipment(equipment),
            goals=parse_equipment(goals),
        )
        results = search(
            exercise_db.get_all_exercises(),
            q,
            filters,
            favorites=favorites_repo.load(),
            only_favorites=favorites_only,
        )
        return {
            "total": len(results),
            "exercises": [format_exercise_json(ex) for ex in results[:limit]],
        }

    @app.get("/api/exercises/suggestions")
    def exercise_suggestions(q: str = "") -> List[str]:
        return suggest(exercise_db.get_all_exercises(), q)

    @app.get("/api/exercises/{exercise_id}")
    def get_exercise(exercise_id: str) -> Dict[str, Any]:
        exercise = exercise_db.get_exercise_by_id(exercise_id)
        if exercise is None:
            raise HTTPException(status_code=404, detail=f"Exercise '{exercise_id}' not found")
        return format_exercise_json(exercise)

    @app.get("/api/facets")
    def facets() -> Dict[str, List[str]]:
        return {
            "bodyParts": exercise_db.body_parts(),
            "equipment": exercise_db.equipment_options(),
            "goals": exercise_db.goal_options(),
        }

    @app.get("/api/favorites")
    def list_favorites() -> List[str]:
        return sorted(favorites_repo.load())

    @app.post("/api/favorites/{exercise_id}/toggle")
    def toggle_favorite_endpoint(exercise_id: str) -> Dict[str, Any]:
        if exercise_db.get_exercise_by_id(exercise_id) is None:
            raise HTTPException(status_code=404, detail=f"Exercise '{exercise_id}' not found")
        try:
            favorites = toggle_favorite(favorites_repo.load(), exercise_id)
            favorites_repo.save(favorites)
        except StorageError as exc:
            raise HTTPException(status_code=500, detail=str(exc)) from exc
        return {"id": exercise_id, "favorite": exercise_id in favorites}

    # --- Routines ---

    @app.post("/api/routines")
    def generate_routine(request: RoutineRequest) -> Dict[str, Any]:
        try:
            routine = routine_generator.generate(
                goal=request.goal,
                duration_weeks=request.duration_weeks,
                days_per_week=request.days_per_week,
                equipment=parse_equipment(request.equipment),
                seed=request.seed,
            )
        except StorageError as exc:
            raise HTTPException(status_code=500, detail=str(exc)) from exc
        return routine_to_dict(routine)

    @app.get("/api/routines/last")
    def last_routine() -> Dict[str, Any]:
        routine = routine_repo.load_last()
        if routine is None:
            raise HTTPException(status_code=404, detail="No routine generated yet")
        return routine_to_dict(routine)

    # --- Meal plans ---

    @app.post("/api/meal-plans/targets")
    def meal_targets(request: BodyInputs) -> Dict[str, int]:
        targets = EnergyCalculator.compute_targets(
            request.age,
            request.gender,
            request.weight_kg,
            request.height_cm,
            request.activity_level,
            request.goal,
        )
        return {"bmr": targets.bmr, "tdee": targets.tdee, "calorieTarget": targets.calorie_target}

    @app.post("/api/meal-plans/build")
    def build_meal_plan(request: MealPlanRequest) -> Dict[str, Any]:
        result = meal_planner.plan_from_inputs(request.to_inputs(), seed=request.seed)
        return {
            "inputs": inputs_to_dict(result.inputs),
            "seed": result.seed,
            "bmr": result.targets.bmr,
            "tdee": result.targets.tdee,
            "calorieTarget": result.targets.calorie_target,
            "weeklyPlan": weekly_plan_to_dict(result.weekly_plan),
            "grocery": format_grocery_json(aggregator.aggregate_groceries(result.weekly_plan)),
        }

    @app.post("/api/meal-plans/grocery")
    def grocery_list(request: GroceryRequest) -> List[Dict[str, Any]]:
        try:
            plan = weekly_plan_from_dict(request.weeklyPlan)
        except (KeyError, TypeError, ValueError) as exc:
            raise HTTPException(status_code=400, detail=f"Malformed weekly plan: {exc}") from exc
        return format_grocery_json(aggregator.aggregate_groceries(plan))

    @app.get("/api/meal-plans")
    def list_meal_plans() -> List[Dict[str, Any]]:
        return [saved_plan_to_dict(p) for p in meal_library.list()]

    @app.post("/api/meal-plans")
    def save_meal_plan(request: SaveMealPlanRequest) -> Dict[str, Any]:
        inputs = request.to_inputs()
        if request.weeklyPlan is not None:
            try:
                weekly_plan = weekly_plan_from_dict(request.weeklyPlan)
            except (KeyError, TypeError, ValueError) as exc:
                raise HTTPException(status_code=400, detail=f"Malformed weekly plan: {exc}") from exc
            calorie_target = EnergyCalculator.compute_targets(
                inputs.age,
                inputs.gender,
                inputs.weight_kg,
                inputs.height_cm,
                inputs.activity_level,
                inputs.goal,
            ).calorie_target
        else:
            result = meal_planner.plan_from_inputs(inputs, seed=request.seed)
            weekly_plan = result.weekly_plan
            calorie_target = result.targets.calorie_target
        try:
            saved = meal_library.save(request.name, inputs, calorie_target, weekly_plan)
        except StorageError as exc:
            raise HTTPException(status_code=500, detail=str(exc)) from exc
        if saved is None:
            raise HTTPException(status_code=400, detail="Weekly plan is empty")
        return saved_plan_to_dict(saved)

    @app.get("/api/meal-plans/{plan_id}")
    def get_meal_plan(plan_id: str) -> Dict[str, Any]:
        saved = meal_library.load(plan_id)
        if saved is None:
            raise HTTPException(status_code=404, detail=f"Meal plan '{plan_id}' not found")
        return saved_plan_to_dict(saved)

    @app.delete("/api/meal-plans/{plan_id}")
    def delete_meal_plan(plan_id: str) -> Dict[str, bool]:
        if not meal_library.delete(plan_id):
            raise HTTPException(status_code=404, detail=f"Meal plan '{plan_id}' not found")
        return {"deleted": True}

    # --- Workouts ---

    @app.get("/api/workouts")
    def list_workouts() -> List[Dict[str, Any]]:
        return [workout_entry_to_dict(e) for e in workout_log.entries()]

    @app.post("/api/workouts")
    def save_workout(request: WorkoutRequest) -> Dict[str, Any]:
        try:
            result = workout_log.save(
                request.exercise,
                sets=[{"reps": s.reps, "weight": s.weight} for s in request.sets],
                date=request.date,
                notes=request.notes,
            )
        except StorageError as exc:
            raise HTTPException(status_code=500, detail=str(exc)) from exc
        if not result.saved:
            raise HTTPException(status_code=400, detail=result.message)
        return workout_entry_to_dict(result.entry)

    @app.delete("/api/workouts/{entry_id}")
    def delete_workout(entry_id: str) -> Dict[str, bool]:
        if not workout_log.delete(entry_id):
            raise HTTPException(status_code=404, detail=f"Workout '{entry_id}' not found")
        return {"deleted": True}

    @app.get("/api/workouts/export")
    def export_workouts() -> Dict[str, Any]:
        return format_workouts_json(workout_log.entries())

    return app


if __name__ == "__main__":
    uvicorn.run(create_app(store=JsonFileStore(store_path)), host="0.0.0.0", port=8000)
