"""Tests for data layer models and their stored shapes."""
from fitfinder.data_layer.models import (
    MEAL_NAMES,
    WEEK_DAYS,
    FilterOptions,
    FoodItem,
    MealItem,
    MealPlanInputs,
    SavedMealPlan,
    MealSlot,
    SetEntry,
    WorkoutLogEntry,
)
from fitfinder.data_layer.serialization import (
    inputs_from_dict,
    inputs_to_dict,
    saved_plan_from_dict,
    saved_plan_to_dict,
    workout_entry_from_dict,
    workout_entry_to_dict,
)


EGGS = FoodItem(id="eggs2", name="Eggs (2)", kcal=156, protein=13, fat=11, carbs=1,
                portion_label="2 pcs", tags=["nonveg", "western", "breakfast"])


class TestConstants:
    """Tests for ordering constants."""

    def test_week_days(self):
        assert WEEK_DAYS[0] == "Monday"
        assert WEEK_DAYS[-1] == "Sunday"
        assert len(WEEK_DAYS) == 7

    def test_meal_names(self):
        assert MEAL_NAMES == ("breakfast", "lunch", "dinner", "snacks")


class TestMealModels:
    """Tests for meal slot models."""

    def test_meal_item_kcal(self):
        """Test kcal scales with portions."""
        assert MealItem(food=EGGS, portions=3).kcal == 468

    def test_meal_item_default_portion(self):
        assert MealItem(food=EGGS).portions == 1

    def test_meal_slot_defaults(self):
        slot = MealSlot(meal_name="dinner")
        assert slot.items == []
        assert slot.kcal == 0

    def test_filter_options_independent_defaults(self):
        first, second = FilterOptions(), FilterOptions()
        first.goals.append("strength")
        assert second.goals == []


class TestStoredShapes:
    """Tests for the camelCase stored documents."""

    def test_inputs_keys(self):
        doc = inputs_to_dict(MealPlanInputs(weight_kg=82.5, activity_level="active"))
        assert doc["weight"] == 82.5
        assert doc["activity"] == "active"
        assert inputs_from_dict(doc) == MealPlanInputs(weight_kg=82.5, activity_level="active")

    def test_inputs_missing_keys_use_defaults(self):
        assert inputs_from_dict({"age": 40}) == MealPlanInputs(age=40)

    def test_saved_plan(self):
        saved = SavedMealPlan(
            id="1700000000000",
            name="Week 1",
            created_at="2024-01-01T00:00:00+00:00",
            inputs=MealPlanInputs(),
            calorie_target=2595,
            weekly_plan={"Monday": [MealSlot(meal_name="breakfast", items=[MealItem(food=EGGS, portions=2)], kcal=312)]},
        )
        doc = saved_plan_to_dict(saved)

        assert doc["calorieTarget"] == 2595
        assert doc["weeklyPlan"]["Monday"][0]["items"][0]["food"]["portionLabel"] == "2 pcs"
        assert saved_plan_from_dict(doc) == saved

    def test_workout_entry(self):
        entry = WorkoutLogEntry(
            id="w_abcdefg", date="2024-02-03", exercise="Bench Press",
            sets=[SetEntry(id="s_1", reps=8, weight=62.5)], notes="PR",
        )
        doc = workout_entry_to_dict(entry)

        assert doc["sets"] == [{"id": "s_1", "reps": 8, "weight": 62.5}]
        assert workout_entry_from_dict(doc) == entry

    def test_workout_entry_null_notes(self):
        entry = workout_entry_from_dict({"id": "w_1", "exercise": "Row", "notes": None})
        assert entry.notes == ""
        assert entry.sets == []
