"""Tests for nutrition aggregator."""
from fitfinder.data_layer.models import FoodItem, MealItem, MealSlot
from fitfinder.nutrition.aggregator import NutritionAggregator, aggregate


OATS = FoodItem(id="oats", name="Rolled Oats (60g)", kcal=230, protein=8, fat=4, carbs=39, portion_label="60 g")
DAL = FoodItem(id="dal", name="Dal (200g)", kcal=180, protein=9, fat=4, carbs=26, portion_label="200 g")


class TestNutritionAggregator:
    """Tests for NutritionAggregator."""

    def test_slot_kcal(self):
        items = [MealItem(food=OATS, portions=2), MealItem(food=DAL, portions=1)]
        assert NutritionAggregator.slot_kcal(items) == 640

    def test_slot_kcal_empty(self):
        assert NutritionAggregator.slot_kcal([]) == 0

    def test_day_kcal(self):
        slots = [
            MealSlot(meal_name="breakfast", items=[], kcal=460),
            MealSlot(meal_name="lunch", items=[], kcal=700),
        ]
        assert NutritionAggregator.day_kcal(slots) == 1160

    def test_grocery_sums_portions_by_name(self):
        """Test a food in three slots with 2, 1 and 3 portions is listed once with 6."""
        plan = {
            "Monday": [
                MealSlot(meal_name="breakfast", items=[MealItem(food=OATS, portions=2)], kcal=460),
                MealSlot(meal_name="snacks", items=[MealItem(food=OATS, portions=1)], kcal=230),
            ],
            "Tuesday": [
                MealSlot(
                    meal_name="breakfast",
                    items=[MealItem(food=OATS, portions=3), MealItem(food=DAL, portions=1)],
                    kcal=870,
                ),
            ],
        }
        grocery = NutritionAggregator.aggregate_groceries(plan)

        assert [item.name for item in grocery] == ["Rolled Oats (60g)", "Dal (200g)"]
        assert grocery[0].qty == 6
        assert grocery[0].portion == "60 g"
        assert grocery[1].qty == 1

    def test_grocery_empty_plan(self):
        assert aggregate({}) == []
        assert aggregate({"Monday": [MealSlot(meal_name="lunch", items=[])]}) == []
