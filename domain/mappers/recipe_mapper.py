"""
Recipe domain mappers.
"""

from domain.models import Recipe
from domain.schemas.recipe_schemas import (
    RecipeIngredientResponse,
    RecipeResponse,
    RecipeSummaryResponse,
)
from domain.nutrition_calculator import calculate_recipe_nutrition


class RecipeMapper:
    """Mapper for recipe transformations. Totals are computed from the ingredients."""

    @staticmethod
    def _totals(recipe: Recipe) -> dict:
        totals = calculate_recipe_nutrition(recipe)
        return {
            "total_calories": round(totals.calories, 1),
            "total_protein": round(totals.protein, 1),
            "total_carbs": round(totals.carbs, 1),
            "total_fat": round(totals.fat, 1),
        }

    @staticmethod
    def to_summary(recipe: Recipe) -> RecipeSummaryResponse:
        summary = RecipeSummaryResponse.model_validate(recipe)
        return summary.model_copy(update=RecipeMapper._totals(recipe))

    @staticmethod
    def to_response(recipe: Recipe) -> RecipeResponse:
        summary = RecipeMapper.to_summary(recipe)
        return RecipeResponse(
            **summary.model_dump(),
            instructions=recipe.instructions,
            ingredients=[
                RecipeIngredientResponse.model_validate(i) for i in recipe.ingredients
            ],
        )
