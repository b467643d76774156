"""
Nutrition domain mappers.
Builds plan, meal and meal food item DTOs with calculated macros.
"""

from typing import List
from domain.models import NutritionPlan, Meal, MealFoodItem
from domain.schemas.food_schemas import FoodItemResponse
from domain.schemas.nutrition_schemas import (
    MealFoodItemResponse,
    MealWithFoodItemsResponse,
    NutritionPlanResponse,
    NutritionPlanWithMealsResponse,
)
from domain.nutrition_calculator import Macros, item_nutrition, sum_macros


def _one_decimal(value: float) -> float:
    return round(value, 1)


class NutritionMapper:
    """Mapper for nutrition plan transformations."""

    @staticmethod
    def to_meal_food_item_response(item: MealFoodItem) -> MealFoodItemResponse:
        macros = item_nutrition(item)
        return MealFoodItemResponse(
            id=item.id,
            meal_id=item.meal_id,
            food_item_id=item.food_item_id,
            quantity=item.quantity,
            unit=item.unit,
            notes=item.notes,
            source_recipe_id=item.source_recipe_id,
            food_item=(
                FoodItemResponse.model_validate(item.food_item) if item.food_item else None
            ),
            calculated_calories=_one_decimal(macros.calories),
            calculated_protein=_one_decimal(macros.protein),
            calculated_carbs=_one_decimal(macros.carbs),
            calculated_fat=_one_decimal(macros.fat),
        )

    @staticmethod
    def meal_totals(meal: Meal) -> Macros:
        return sum_macros(item_nutrition(i) for i in meal.food_items)

    @staticmethod
    def to_meal_response(meal: Meal) -> MealWithFoodItemsResponse:
        totals = NutritionMapper.meal_totals(meal)
        return MealWithFoodItemsResponse(
            id=meal.id,
            nutrition_plan_id=meal.nutrition_plan_id,
            name=meal.name,
            day_type=meal.day_type,
            time_suggestion=meal.time_suggestion,
            notes=meal.notes,
            order_in_plan=meal.order_in_plan,
            food_items=[
                NutritionMapper.to_meal_food_item_response(i) for i in meal.food_items
            ],
            total_calories=_one_decimal(totals.calories),
            total_protein=_one_decimal(totals.protein),
            total_carbs=_one_decimal(totals.carbs),
            total_fat=_one_decimal(totals.fat),
        )

    @staticmethod
    def to_plan_with_meals(plan: NutritionPlan) -> NutritionPlanWithMealsResponse:
        """
        Convert a plan with loaded meals to its full view.

        Meals come out ordered by order_in_plan; day_types lists each day type
        used by the plan once, sorted.
        """
        meals: List[Meal] = sorted(plan.meals, key=lambda m: m.order_in_plan or 0)
        base = NutritionPlanResponse.model_validate(plan)
        return NutritionPlanWithMealsResponse(
            **base.model_dump(),
            meals=[NutritionMapper.to_meal_response(m) for m in meals],
            day_types=sorted({m.day_type for m in meals if m.day_type}),
        )
