"""Services package - Business logic layer"""

from services.athlete_service import AthleteService
from services.food_item_service import FoodItemService
from services.meal_planning_service import MealPlanningService
from services.recipe_service import RecipeService
from services.program_service import ProgramService
from services.assignment_service import AssignmentService
from services.energy_target_service import EnergyTargetService

__all__ = [
    "AthleteService",
    "FoodItemService",
    "MealPlanningService",
    "RecipeService",
    "ProgramService",
    "AssignmentService",
    "EnergyTargetService",
]
