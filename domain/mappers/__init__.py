"""
Domain mappers package.
Handles transformation between ORM models and DTOs (Data Transfer Objects).
"""

from domain.mappers.nutrition_mapper import NutritionMapper
from domain.mappers.recipe_mapper import RecipeMapper
from domain.mappers.program_mapper import ProgramMapper

__all__ = ["NutritionMapper", "RecipeMapper", "ProgramMapper"]
