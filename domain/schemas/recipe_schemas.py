from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime
from uuid import UUID

from domain.schemas.food_schemas import FoodItemResponse


class RecipeIngredientCreate(BaseModel):
    food_item_id: UUID
    quantity: float = Field(..., gt=0)
    unit: str = Field("g", min_length=1)
    notes: Optional[str] = None


class RecipeCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    instructions: Optional[str] = None
    serving_size: float = Field(1, gt=0)
    serving_unit: str = Field("g", min_length=1)
    is_public: bool = False
    ingredients: List[RecipeIngredientCreate] = []


class RecipeUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    instructions: Optional[str] = None
    serving_size: Optional[float] = Field(None, gt=0)
    serving_unit: Optional[str] = Field(None, min_length=1)
    is_public: Optional[bool] = None
    # None keeps the current ingredients; a list replaces them all
    ingredients: Optional[List[RecipeIngredientCreate]] = None


class RecipeIngredientResponse(BaseModel):
    id: UUID
    recipe_id: UUID
    food_item_id: UUID
    quantity: float
    unit: str
    notes: Optional[str]
    food_item: Optional[FoodItemResponse]

    model_config = {"from_attributes": True}


class RecipeSummaryResponse(BaseModel):
    id: UUID
    coach_id: UUID
    name: str
    description: Optional[str]
    serving_size: float
    serving_unit: str
    is_public: bool
    total_calories: float
    total_protein: float
    total_carbs: float
    total_fat: float
    created_at: Optional[datetime]
    updated_at: Optional[datetime]

    model_config = {"from_attributes": True}


class RecipeResponse(RecipeSummaryResponse):
    instructions: Optional[str]
    ingredients: List[RecipeIngredientResponse]


class RecipeListResponse(BaseModel):
    recipes: List[RecipeSummaryResponse]
    count: int
