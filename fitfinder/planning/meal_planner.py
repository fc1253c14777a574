"""Meal planning system for generating weekly meal plans."""

import math
import time
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from fitfinder.data_layer.models import (
    MEAL_NAMES,
    WEEK_DAYS,
    CalorieTargets,
    FoodItem,
    MealItem,
    MealPlanInputs,
    MealSlot,
    WeeklyMealPlan,
)
from fitfinder.nutrition.aggregator import NutritionAggregator
from fitfinder.nutrition.calculator import EnergyCalculator, round_half_up


MEAL_DISTRIBUTIONS: Dict[str, Dict[str, float]] = {
    "gain": {"breakfast": 0.25, "lunch": 0.34, "dinner": 0.30, "snacks": 0.11},
    "lose": {"breakfast": 0.20, "lunch": 0.38, "dinner": 0.32, "snacks": 0.10},
    "maintain": {"breakfast": 0.24, "lunch": 0.36, "dinner": 0.30, "snacks": 0.10},
}

# Tags a food may carry to be eligible for a slot; neighbouring slots overlap.
SLOT_TAGS: Dict[str, Sequence[str]] = {
    "breakfast": ("breakfast", "snack"),
    "lunch": ("lunch", "dinner"),
    "dinner": ("dinner", "lunch"),
    "snacks": ("snack", "breakfast"),
}

MAIN_ITEM_MIN_PROTEIN = 8.0
FILL_RATIO = 0.95
OVERSHOOT_RATIO = 1.2
UNDERSHOOT_RATIO = 0.9


def noise(seed: float, index: int) -> float:
    """Deterministic pseudo-random value in [0, 1) for (seed, index)."""
    x = math.sin(seed + index) * 10000
    return x - math.floor(x)


def filter_food_pool(foods: Sequence[FoodItem], diet: str, cuisine: str) -> List[FoodItem]:
    """Apply diet and cuisine preferences.

    "veg" drops anything tagged nonveg; non-vegetarians keep veg foods.
    A cuisine other than "any" keeps only foods tagged with it.
    """
    pool = []
    for food in foods:
        if diet == "veg" and "nonveg" in food.tags:
            continue
        if cuisine != "any" and cuisine not in food.tags:
            continue
        pool.append(food)
    return pool


def slot_pools(pool: Sequence[FoodItem]) -> Dict[str, List[FoodItem]]:
    """Candidate foods per slot; an empty slot pool falls back to the whole pool."""
    pools = {}
    for meal_name in MEAL_NAMES:
        tags = SLOT_TAGS[meal_name]
        candidates = [f for f in pool if any(tag in f.tags for tag in tags)]
        pools[meal_name] = candidates if candidates else list(pool)
    return pools


@dataclass
class MealPlanResult:
    """A weekly plan together with the inputs that produced it."""

    inputs: MealPlanInputs
    targets: CalorieTargets
    seed: int
    weekly_plan: WeeklyMealPlan


class WeeklyMealPlanner:
    """Greedy, seeded weekly meal composer."""

    def __init__(self, foods: Sequence[FoodItem], nutrition_aggregator: Optional[NutritionAggregator] = None):
        """Initialize meal planner.

        Args:
            foods: Foods available to the planner
            nutrition_aggregator: NutritionAggregator instance for summing calories
        """
        self.foods = list(foods)
        self.nutrition_aggregator = nutrition_aggregator or NutritionAggregator()

    def build_weekly(
        self,
        calorie_target: int,
        goal: str = "maintain",
        diet: str = "both",
        cuisine: str = "any",
        seed: Optional[int] = None,
    ) -> WeeklyMealPlan:
        """Plan breakfast, lunch, dinner and snacks for Monday to Sunday.

        Foods already used earlier in the week are skipped while alternatives
        remain. The same seed always gives the same plan.

        Args:
            calorie_target: Daily calorie target
            goal: "lose", "maintain" or "gain" (selects the slot split)
            diet: "veg", "nonveg" or "both"
            cuisine: "indian", "western" or "any"
            seed: Noise seed (defaults to the current time in milliseconds)

        Returns:
            Mapping of day name to its four MealSlots
        """
        if seed is None:
            seed = int(time.time() * 1000)

        distribution = MEAL_DISTRIBUTIONS.get(goal, MEAL_DISTRIBUTIONS["maintain"])
        pools = slot_pools(filter_food_pool(self.foods, diet, cuisine))
        used = set()

        plan: WeeklyMealPlan = {}
        for day_index, day in enumerate(WEEK_DAYS):
            plan[day] = [
                self._build_slot(
                    meal_name,
                    round_half_up(calorie_target * distribution[meal_name]),
                    pools[meal_name],
                    used,
                    seed,
                    day_index,
                )
                for meal_name in MEAL_NAMES
            ]
        return plan

    def _build_slot(
        self,
        meal_name: str,
        target_kcal: int,
        slot_pool: List[FoodItem],
        used: set,
        seed: int,
        day_index: int,
    ) -> MealSlot:
        """Fill one slot; adds every chosen food id to *used*."""
        available = [f for f in slot_pool if f.id not in used] or list(slot_pool)

        scored = sorted(
            available,
            key=lambda f: f.protein * 3 + f.kcal * 0.01 + noise(seed, day_index + len(f.id)) * 0.5,
            reverse=True,
        )

        chosen: List[MealItem] = []
        total = 0.0

        main = next((f for f in scored if f.protein >= MAIN_ITEM_MIN_PROTEIN), None)
        if main is None and scored:
            main = scored[0]
        if main is not None:
            chosen.append(MealItem(food=main, portions=1))
            total += main.kcal
            used.add(main.id)

        # Scan is capped at 2x the candidates so the loop always ends.
        idx = 0
        while total < target_kcal * FILL_RATIO and idx < len(scored):
            candidate = scored[idx]
            if all(item.food.id != candidate.id for item in chosen):
                chosen.append(MealItem(food=candidate, portions=1))
                total += candidate.kcal
                used.add(candidate.id)
            idx += 1
            if idx > len(scored) * 2:
                break

        if total > target_kcal * OVERSHOOT_RATIO and chosen:
            largest = max(chosen, key=lambda item: item.kcal)
            if largest.portions > 1:
                largest.portions -= 1
                total = self.nutrition_aggregator.slot_kcal(chosen)

        if total < target_kcal * UNDERSHOOT_RATIO and chosen:
            for item in chosen:
                if total >= target_kcal * FILL_RATIO:
                    break
                item.portions += 1
                total += item.food.kcal

        return MealSlot(meal_name=meal_name, items=chosen, kcal=round_half_up(total))

    def plan_from_inputs(self, inputs: MealPlanInputs, seed: Optional[int] = None) -> MealPlanResult:
        """Compute calorie targets for *inputs* and build the week from them."""
        if seed is None:
            seed = int(time.time() * 1000)
        targets = EnergyCalculator.compute_targets(
            inputs.age,
            inputs.gender,
            inputs.weight_kg,
            inputs.height_cm,
            inputs.activity_level,
            inputs.goal,
        )
        weekly_plan = self.build_weekly(
            targets.calorie_target,
            goal=inputs.goal,
            diet=inputs.diet,
            cuisine=inputs.cuisine,
            seed=seed,
        )
        return MealPlanResult(inputs=inputs, targets=targets, seed=seed, weekly_plan=weekly_plan)
