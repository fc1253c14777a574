"""Energy calculator for BMR, TDEE and daily calorie targets."""
import math

from fitfinder.data_layer.models import CalorieTargets


ACTIVITY_FACTORS = {
    "sedentary": 1.2,
    "light": 1.375,
    "moderate": 1.55,
    "active": 1.725,
    "very_active": 1.9,
}
DEFAULT_ACTIVITY = "moderate"

GOAL_MULTIPLIERS = {
    "lose": 0.82,
    "maintain": 1.0,
    "gain": 1.12,
}


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values (2.5 -> 3, not 2)."""
    return int(math.floor(value + 0.5))


class EnergyCalculator:
    """Calculator for daily energy needs (Mifflin-St Jeor)."""

    @staticmethod
    def bmr(age: int, gender: str, weight_kg: float, height_cm: float) -> int:
        """Basal metabolic rate in kcal/day.

        Args:
            age: Age in years
            gender: "male"; any other value uses the female equation
            weight_kg: Body weight in kilograms
            height_cm: Height in centimetres

        Returns:
            BMR rounded to the nearest integer
        """
        base = 10 * weight_kg + 6.25 * height_cm - 5 * age
        if str(gender).lower() == "male":
            return round_half_up(base + 5)
        return round_half_up(base - 161)

    @staticmethod
    def activity_factor(activity_level: str) -> float:
        return ACTIVITY_FACTORS.get(activity_level, ACTIVITY_FACTORS[DEFAULT_ACTIVITY])

    @classmethod
    def tdee(cls, bmr: int, activity_level: str) -> int:
        """Total daily energy expenditure from a rounded BMR."""
        return round_half_up(bmr * cls.activity_factor(activity_level))

    @staticmethod
    def calorie_target(tdee: int, goal: str) -> int:
        """Deficit for "lose", surplus for "gain", TDEE otherwise."""
        return round_half_up(tdee * GOAL_MULTIPLIERS.get(goal, 1.0))

    @classmethod
    def compute_targets(
        cls,
        age: int,
        gender: str,
        weight_kg: float,
        height_cm: float,
        activity_level: str,
        goal: str,
    ) -> CalorieTargets:
        """Compute BMR, TDEE and calorie target in one go.

        Example: 25 y, male, 70 kg, 175 cm, moderate, maintain gives
        BMR 1674, TDEE 2595, target 2595.
        """
        bmr = cls.bmr(age, gender, weight_kg, height_cm)
        tdee = cls.tdee(bmr, activity_level)
        return CalorieTargets(
            bmr=bmr,
            tdee=tdee,
            calorie_target=cls.calorie_target(tdee, goal),
        )


def compute_targets(
    age: int,
    gender: str,
    weight_kg: float,
    height_cm: float,
    activity_level: str,
    goal: str,
) -> CalorieTargets:
    return EnergyCalculator.compute_targets(age, gender, weight_kg, height_cm, activity_level, goal)
