from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
from datetime import datetime
from uuid import UUID

from domain.enums import FoodSource


class FoodItemBase(BaseModel):
    food_name: str = Field(..., min_length=1, max_length=300)
    food_group: Optional[str] = None
    calories_per_100g: float = Field(0, ge=0)
    protein_per_100g: float = Field(0, ge=0)
    carbs_per_100g: float = Field(0, ge=0)
    fat_per_100g: float = Field(0, ge=0)
    fiber_per_100g: Optional[float] = Field(None, ge=0)
    serving_size_g: Optional[float] = Field(None, gt=0)
    serving_size_unit: Optional[str] = None
    barcode: Optional[str] = Field(None, max_length=64)
    brand: Optional[str] = None
    nutrient_basis: str = "100g"

    @field_validator("food_name")
    def strip_name(cls, v):
        return v.strip()

    @field_validator("barcode")
    def strip_barcode(cls, v):
        if v is None:
            return v
        v = v.strip()
        return v or None


class CustomFoodItemCreate(FoodItemBase):
    pass


class CustomFoodItemUpdate(BaseModel):
    food_name: Optional[str] = Field(None, min_length=1, max_length=300)
    food_group: Optional[str] = None
    calories_per_100g: Optional[float] = Field(None, ge=0)
    protein_per_100g: Optional[float] = Field(None, ge=0)
    carbs_per_100g: Optional[float] = Field(None, ge=0)
    fat_per_100g: Optional[float] = Field(None, ge=0)
    fiber_per_100g: Optional[float] = Field(None, ge=0)
    serving_size_g: Optional[float] = Field(None, gt=0)
    serving_size_unit: Optional[str] = None
    barcode: Optional[str] = Field(None, max_length=64)
    brand: Optional[str] = None


class FoodItemResponse(BaseModel):
    id: UUID
    food_name: str
    food_group: Optional[str]
    calories_per_100g: Optional[float]
    protein_per_100g: Optional[float]
    carbs_per_100g: Optional[float]
    fat_per_100g: Optional[float]
    fiber_per_100g: Optional[float]
    serving_size_g: Optional[float]
    serving_size_unit: Optional[str]
    nutrient_basis: str
    barcode: Optional[str]
    brand: Optional[str]
    source: Optional[FoodSource]
    source_id: Optional[str]
    created_by: Optional[UUID]
    is_verified: bool

    model_config = {"from_attributes": True}


class FoodSearchResponse(BaseModel):
    items: List[FoodItemResponse]
    count: int
