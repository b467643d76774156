"""
Domain models package - SQLAlchemy ORM models.
"""

from domain.models.database import (
    Base,
    engine,
    SessionLocal,
    init_database,
    get_db_session,
)
from domain.models.profile import Profile
from domain.models.food import FoodItem
from domain.models.nutrition import NutritionPlan, Meal, MealFoodItem
from domain.models.recipe import Recipe, RecipeIngredient
from domain.models.program import ProgramTemplate, Workout, ExerciseInstance, ExerciseSet
from domain.models.assignment import AssignedPlan

__all__ = [
    # Database
    "Base",
    "engine",
    "SessionLocal",
    "init_database",
    "get_db_session",
    # Profiles
    "Profile",
    # Nutrition
    "FoodItem",
    "NutritionPlan",
    "Meal",
    "MealFoodItem",
    "Recipe",
    "RecipeIngredient",
    # Training
    "ProgramTemplate",
    "Workout",
    "ExerciseInstance",
    "ExerciseSet",
    # Assignments
    "AssignedPlan",
]
