"""
Repositories package - Data access layer.
"""

from repositories.base import BaseRepository
from repositories.profile_repository import ProfileRepository
from repositories.food_item_repository import FoodItemRepository
from repositories.nutrition_plan_repository import (
    NutritionPlanRepository,
    MealRepository,
    MealFoodItemRepository,
)
from repositories.recipe_repository import RecipeRepository
from repositories.program_repository import (
    ProgramTemplateRepository,
    WorkoutRepository,
    ExerciseInstanceRepository,
)
from repositories.assignment_repository import AssignmentRepository

__all__ = [
    "BaseRepository",
    "ProfileRepository",
    "FoodItemRepository",
    "NutritionPlanRepository",
    "MealRepository",
    "MealFoodItemRepository",
    "RecipeRepository",
    "ProgramTemplateRepository",
    "WorkoutRepository",
    "ExerciseInstanceRepository",
    "AssignmentRepository",
]
