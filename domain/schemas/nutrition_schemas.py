from pydantic import BaseModel, Field, field_validator
from typing import Dict, List, Optional
from datetime import datetime
from uuid import UUID

from domain.schemas.food_schemas import FoodItemResponse
from domain.enums import Gender, NutritionGoal


class NutritionPlanCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    total_calories: Optional[int] = Field(None, ge=0)
    protein_grams: Optional[int] = Field(None, ge=0)
    carbohydrate_grams: Optional[int] = Field(None, ge=0)
    fat_grams: Optional[int] = Field(None, ge=0)
    is_public: bool = False


class NutritionPlanUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    total_calories: Optional[int] = Field(None, ge=0)
    protein_grams: Optional[int] = Field(None, ge=0)
    carbohydrate_grams: Optional[int] = Field(None, ge=0)
    fat_grams: Optional[int] = Field(None, ge=0)
    is_public: Optional[bool] = None


class NutritionPlanResponse(BaseModel):
    id: UUID
    coach_id: UUID
    name: str
    description: Optional[str]
    total_calories: Optional[int]
    protein_grams: Optional[int]
    carbohydrate_grams: Optional[int]
    fat_grams: Optional[int]
    is_public: bool
    created_at: Optional[datetime]
    updated_at: Optional[datetime]

    model_config = {"from_attributes": True}


def _normalize_day_type(v):
    if v is None:
        return v
    v = v.strip()
    if not v:
        raise ValueError("Day type is required")
    return v


class MealCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    day_type: str = Field(..., min_length=1, max_length=100)
    time_suggestion: Optional[str] = None
    notes: Optional[str] = None
    order_in_plan: Optional[int] = Field(None, ge=0)

    @field_validator("day_type")
    def strip_day_type(cls, v):
        return _normalize_day_type(v)


class MealUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    day_type: Optional[str] = Field(None, min_length=1, max_length=100)
    time_suggestion: Optional[str] = None
    notes: Optional[str] = None
    order_in_plan: Optional[int] = Field(None, ge=0)

    @field_validator("day_type")
    def strip_day_type(cls, v):
        return _normalize_day_type(v)


class MealResponse(BaseModel):
    id: UUID
    nutrition_plan_id: UUID
    name: str
    day_type: str
    time_suggestion: Optional[str]
    notes: Optional[str]
    order_in_plan: int

    model_config = {"from_attributes": True}


class MealOrderRequest(BaseModel):
    meal_ids: List[UUID] = Field(..., min_length=1)


class DuplicateDayTypeRequest(BaseModel):
    source_day_type: str = Field(..., min_length=1)
    new_day_type: str = Field(..., min_length=1)


class MealFoodItemCreate(BaseModel):
    food_item_id: UUID
    quantity: float = Field(..., gt=0)
    unit: str = Field("g", min_length=1)
    notes: Optional[str] = None


class MealFoodItemUpdate(BaseModel):
    quantity: Optional[float] = Field(None, gt=0)
    unit: Optional[str] = Field(None, min_length=1)
    notes: Optional[str] = None


class AddRecipeToMealRequest(BaseModel):
    recipe_id: UUID
    servings: float = Field(..., gt=0, description="Amount in the recipe's serving unit")


class MacroTotals(BaseModel):
    calories: float = 0
    protein: float = 0
    carbs: float = 0
    fat: float = 0


class MealFoodItemResponse(BaseModel):
    id: UUID
    meal_id: UUID
    food_item_id: UUID
    quantity: float
    unit: str
    notes: Optional[str]
    source_recipe_id: Optional[UUID]
    food_item: Optional[FoodItemResponse]
    calculated_calories: float = 0
    calculated_protein: float = 0
    calculated_carbs: float = 0
    calculated_fat: float = 0


class MealWithFoodItemsResponse(MealResponse):
    food_items: List[MealFoodItemResponse]
    total_calories: float
    total_protein: float
    total_carbs: float
    total_fat: float


class NutritionPlanWithMealsResponse(NutritionPlanResponse):
    meals: List[MealWithFoodItemsResponse]
    day_types: List[str]


class DayTypeSummary(BaseModel):
    day_type: str
    meal_count: int
    totals: MacroTotals
    target_percentages: Dict[str, float]


class NutritionPlanSummaryResponse(BaseModel):
    plan_id: UUID
    targets: MacroTotals
    day_types: List[DayTypeSummary]


class EnergyTargetsRequest(BaseModel):
    """
    Inputs for the BMR / TDEE calculator.

    When athlete_id is given, measurements not sent in the request are taken
    from the athlete's profile.
    """

    athlete_id: Optional[UUID] = None
    weight_kg: Optional[float] = Field(None, gt=0, le=500)
    height_cm: Optional[float] = Field(None, gt=0, le=300)
    age: Optional[int] = Field(None, gt=0, le=120)
    gender: Optional[Gender] = None
    activity_factor: float = Field(1.2, ge=1.2, le=2.0)
    goal: NutritionGoal = NutritionGoal.MAINTENANCE


class EnergyTargetsResponse(BaseModel):
    athlete_id: Optional[UUID]
    goal: NutritionGoal
    bmr: float
    tdee: float
    calorie_target: float
    protein_grams: float
    fat_grams: float
    carb_grams: float
    protein_per_kg: float
    fat_per_kg: float
    carbs_per_kg: float


class PlanFromEnergyTargetsRequest(EnergyTargetsRequest):
    name: str = Field("New Meal Plan", min_length=1, max_length=200)
    is_public: bool = False
