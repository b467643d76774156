"""
Macro arithmetic shared by meal planning, recipes, plan summaries and the
energy target (BMR / TDEE) calculator.

All nutrient values on a food item are per 100 g; quantities are converted to
grams before scaling.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Iterable, Optional

from domain.enums import Gender, NutritionGoal

GRAMS_PER_UNIT = {
    "g": 1.0,
    "kg": 1000.0,
    "oz": 28.35,
    "lb": 453.59,
}


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


@dataclass
class Macros:
    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0

    def __add__(self, other: "Macros") -> "Macros":
        return Macros(
            calories=self.calories + other.calories,
            protein=self.protein + other.protein,
            carbs=self.carbs + other.carbs,
            fat=self.fat + other.fat,
        )

    def rounded(self) -> "Macros":
        return Macros(
            calories=round_half_up(self.calories),
            protein=round_half_up(self.protein),
            carbs=round_half_up(self.carbs),
            fat=round_half_up(self.fat),
        )

    def as_dict(self) -> dict:
        return {
            "calories": self.calories,
            "protein": self.protein,
            "carbs": self.carbs,
            "fat": self.fat,
        }


def to_grams(quantity: float, unit: str, serving_size_g: Optional[float] = None) -> float:
    """Convert a quantity to grams. Units without a known weight count as grams."""
    unit = (unit or "g").strip().lower()
    if unit in GRAMS_PER_UNIT:
        return quantity * GRAMS_PER_UNIT[unit]
    if unit == "serving" and serving_size_g:
        return quantity * serving_size_g
    return quantity


def calculate_nutrition(food_item: Any, quantity: float, unit: str) -> Macros:
    grams = to_grams(quantity, unit, getattr(food_item, "serving_size_g", None))
    factor = grams / 100.0
    return Macros(
        calories=(food_item.calories_per_100g or 0) * factor,
        protein=(food_item.protein_per_100g or 0) * factor,
        carbs=(food_item.carbs_per_100g or 0) * factor,
        fat=(food_item.fat_per_100g or 0) * factor,
    )


def sum_macros(values: Iterable[Macros]) -> Macros:
    total = Macros()
    for value in values:
        total = total + value
    return total


def item_nutrition(item: Any) -> Macros:
    """Macros of a meal food item or recipe ingredient; zero when its food item is gone."""
    if item.food_item is None:
        return Macros()
    return calculate_nutrition(item.food_item, item.quantity, item.unit)


def calculate_total_nutrition(meal_totals: Iterable[Macros]) -> Macros:
    """Sum per-meal totals and round each macro to the nearest integer."""
    return sum_macros(meal_totals).rounded()


def calculate_percentage(consumed: float, target: Optional[float]) -> float:
    """Share of a target reached, clamped to 0..100. A missing or non-positive target gives 0."""
    if not target or target <= 0:
        return 0.0
    percentage = consumed / target * 100
    return min(max(percentage, 0.0), 100.0)


def calculate_recipe_nutrition(recipe: Any) -> Macros:
    if not recipe.ingredients:
        return Macros()
    return sum_macros(item_nutrition(i) for i in recipe.ingredients)


# Energy targets (Mifflin-St Jeor)

GOAL_CALORIE_FACTORS = {
    NutritionGoal.MAINTENANCE: 1.0,
    NutritionGoal.BULKING: 1.10,
    NutritionGoal.CUTTING: 0.80,
}

# grams per kg of body weight: (protein, fat)
GOAL_MACRO_MULTIPLIERS = {
    NutritionGoal.MAINTENANCE: (1.8, 0.7),
    NutritionGoal.BULKING: (2.0, 1.0),
    NutritionGoal.CUTTING: (2.4, 0.4),
}

KCAL_PER_GRAM = {"protein": 4, "carbs": 4, "fat": 9}


@dataclass
class EnergyTargets:
    bmr: float
    tdee: float
    calorie_target: float
    protein_grams: float
    fat_grams: float
    carb_grams: float
    protein_per_kg: float
    fat_per_kg: float
    carbs_per_kg: float


def calculate_bmr(weight_kg: float, height_cm: float, age: int, gender: Gender) -> float:
    base = 10 * weight_kg + 6.25 * height_cm - 5 * age
    return base + 5 if gender == Gender.MALE else base - 161


def calculate_energy_targets(
    weight_kg: float,
    height_cm: float,
    age: int,
    gender: Gender,
    activity_factor: float,
    goal: NutritionGoal,
) -> EnergyTargets:
    """
    BMR, TDEE and daily macro targets for a goal.

    TDEE is BMR times the activity factor; the calorie target adjusts TDEE by
    the goal. Protein and fat are set per kg of body weight and the remaining
    calories go to carbs (never below 0).
    """
    bmr = calculate_bmr(weight_kg, height_cm, age, gender)
    tdee = bmr * activity_factor
    calorie_target = tdee * GOAL_CALORIE_FACTORS[goal]

    protein_per_kg, fat_per_kg = GOAL_MACRO_MULTIPLIERS[goal]
    protein_grams = protein_per_kg * weight_kg
    fat_grams = fat_per_kg * weight_kg
    remaining = calorie_target - (
        protein_grams * KCAL_PER_GRAM["protein"] + fat_grams * KCAL_PER_GRAM["fat"]
    )
    carb_grams = max(remaining, 0.0) / KCAL_PER_GRAM["carbs"]

    return EnergyTargets(
        bmr=bmr,
        tdee=tdee,
        calorie_target=calorie_target,
        protein_grams=protein_grams,
        fat_grams=fat_grams,
        carb_grams=carb_grams,
        protein_per_kg=protein_per_kg,
        fat_per_kg=fat_per_kg,
        carbs_per_kg=carb_grams / weight_kg,
    )
