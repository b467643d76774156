"""
Pydantic schemas for request/response validation.
"""

from domain.schemas.profile_schemas import (
    AthleteInviteRequest,
    AthleteUpdateRequest,
    ProfileListItem,
    ProfileResponse,
)
from domain.schemas.food_schemas import (
    CustomFoodItemCreate,
    CustomFoodItemUpdate,
    FoodItemResponse,
    FoodSearchResponse,
)
from domain.schemas.nutrition_schemas import (
    NutritionPlanCreate,
    NutritionPlanUpdate,
    NutritionPlanResponse,
    NutritionPlanWithMealsResponse,
    NutritionPlanSummaryResponse,
    MealCreate,
    MealUpdate,
    MealResponse,
    MealWithFoodItemsResponse,
    MealOrderRequest,
    DuplicateDayTypeRequest,
    EnergyTargetsRequest,
    EnergyTargetsResponse,
    PlanFromEnergyTargetsRequest,
    MealFoodItemCreate,
    MealFoodItemUpdate,
    MealFoodItemResponse,
    AddRecipeToMealRequest,
    DayTypeSummary,
    MacroTotals,
)
from domain.schemas.recipe_schemas import (
    RecipeIngredientCreate,
    RecipeCreate,
    RecipeUpdate,
    RecipeResponse,
    RecipeSummaryResponse,
    RecipeListResponse,
)
from domain.schemas.program_schemas import (
    ProgramTemplateCreate,
    ProgramTemplateUpdate,
    ProgramTemplateResponse,
    ProgramTemplateDetailResponse,
    WorkoutSave,
    WorkoutResponse,
    WorkoutSummaryResponse,
    ExerciseInstanceInput,
    ExerciseSetInput,
    DuplicateWorkoutRequest,
    ProgramArrangementResponse,
    ExerciseGroupRequest,
    GroupedWorkoutResponse,
)
from domain.schemas.assignment_schemas import (
    AssignProgramRequest,
    AssignNutritionPlanRequest,
    AssignmentResponse,
)

__all__ = [
    "AthleteInviteRequest",
    "AthleteUpdateRequest",
    "ProfileListItem",
    "ProfileResponse",
    "CustomFoodItemCreate",
    "CustomFoodItemUpdate",
    "FoodItemResponse",
    "FoodSearchResponse",
    "NutritionPlanCreate",
    "NutritionPlanUpdate",
    "NutritionPlanResponse",
    "NutritionPlanWithMealsResponse",
    "NutritionPlanSummaryResponse",
    "MealCreate",
    "MealUpdate",
    "MealResponse",
    "MealWithFoodItemsResponse",
    "MealOrderRequest",
    "DuplicateDayTypeRequest",
    "EnergyTargetsRequest",
    "EnergyTargetsResponse",
    "PlanFromEnergyTargetsRequest",
    "MealFoodItemCreate",
    "MealFoodItemUpdate",
    "MealFoodItemResponse",
    "AddRecipeToMealRequest",
    "DayTypeSummary",
    "MacroTotals",
    "RecipeIngredientCreate",
    "RecipeCreate",
    "RecipeUpdate",
    "RecipeResponse",
    "RecipeSummaryResponse",
    "RecipeListResponse",
    "ProgramTemplateCreate",
    "ProgramTemplateUpdate",
    "ProgramTemplateResponse",
    "ProgramTemplateDetailResponse",
    "WorkoutSave",
    "WorkoutResponse",
    "WorkoutSummaryResponse",
    "ExerciseInstanceInput",
    "ExerciseSetInput",
    "DuplicateWorkoutRequest",
    "ProgramArrangementResponse",
    "ExerciseGroupRequest",
    "GroupedWorkoutResponse",
    "AssignProgramRequest",
    "AssignNutritionPlanRequest",
    "AssignmentResponse",
]
