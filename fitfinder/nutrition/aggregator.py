"""Aggregator for summing food portions and calories across a meal plan."""
from typing import Dict, List

from fitfinder.data_layer.models import GroceryItem, MealItem, MealSlot, WeeklyMealPlan


class NutritionAggregator:
    """Aggregator for combining foods from multiple meal slots."""

    @staticmethod
    def slot_kcal(items: List[MealItem]) -> float:
        """Total calories of a slot's items (unrounded).

        Args:
            items: List of MealItem objects

        Returns:
            Sum of kcal x portions
        """
        return sum(item.food.kcal * item.portions for item in items)

    @staticmethod
    def day_kcal(slots: List[MealSlot]) -> int:
        """Sum of the rounded slot totals for one day."""
        return sum(slot.kcal for slot in slots)

    @staticmethod
    def aggregate_groceries(plan: WeeklyMealPlan) -> List[GroceryItem]:
        """Build a grocery list from a weekly plan.

        Items are matched by display name and their portions summed over
        every slot of every day. The list keeps first-seen order.

        Args:
            plan: Weekly meal plan

        Returns:
            List of GroceryItem
        """
        totals: Dict[str, GroceryItem] = {}
        for slots in plan.values():
            for slot in slots:
                for item in slot.items:
                    key = item.food.name
                    if key not in totals:
                        totals[key] = GroceryItem(
                            name=item.food.name,
                            portion=item.food.portion_label,
                            qty=item.portions,
                        )
                    else:
                        totals[key].qty += item.portions
        return list(totals.values())


def aggregate(plan: WeeklyMealPlan) -> List[GroceryItem]:
    return NutritionAggregator.aggregate_groceries(plan)
