"""Meal routes: editing meals and the food items inside them"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
import logging
from uuid import UUID
from typing import List

from domain.models import get_db_session, Profile
from domain.schemas.nutrition_schemas import (
    AddRecipeToMealRequest,
    MealFoodItemCreate,
    MealFoodItemResponse,
    MealFoodItemUpdate,
    MealUpdate,
    MealWithFoodItemsResponse,
)
from domain.mappers import NutritionMapper
from services.meal_planning_service import MealPlanningService
from api.dependencies import get_current_coach
from api.responses import COMMON_ERROR_RESPONSES, DeletedResponse

router = APIRouter(tags=["Meals"], responses=COMMON_ERROR_RESPONSES)
logger = logging.getLogger("coachdesk.api.meals")


@router.get("/meals/{meal_id}", response_model=MealWithFoodItemsResponse)
def get_meal(
    meal_id: UUID,
    coach: Profile = Depends(get_current_coach),
    db: Session = Depends(get_db_session),
):
    meal = MealPlanningService.get_meal(db, coach.id, meal_id)
    return NutritionMapper.to_meal_response(meal)


@router.patch("/meals/{meal_id}", response_model=MealWithFoodItemsResponse)
def update_meal(
    meal_id: UUID,
    payload: MealUpdate,
    coach: Profile = Depends(get_current_coach),
    db: Session = Depends(get_db_session),
):
    meal = MealPlanningService.update_meal(db, coach.id, meal_id, payload)
    return NutritionMapper.to_meal_response(meal)


@router.delete("/meals/{meal_id}", response_model=DeletedResponse)
def delete_meal(
    meal_id: UUID,
    coach: Profile = Depends(get_current_coach),
    db: Session = Depends(get_db_session),
):
    MealPlanningService.delete_meal(db, coach.id, meal_id)
    return DeletedResponse(deleted=str(meal_id))


@router.post(
    "/meals/{meal_id}/duplicate",
    response_model=MealWithFoodItemsResponse,
    status_code=status.HTTP_201_CREATED,
)
def duplicate_meal(
    meal_id: UUID,
    coach: Profile = Depends(get_current_coach),
    db: Session = Depends(get_db_session),
):
    """Copy named "<name> (Copy)" placed right after the original"""
    meal = MealPlanningService.duplicate_meal(db, coach.id, meal_id)
    return NutritionMapper.to_meal_response(meal)


@router.post(
    "/meals/{meal_id}/food-items",
    response_model=MealFoodItemResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_food_item(
    meal_id: UUID,
    payload: MealFoodItemCreate,
    coach: Profile = Depends(get_current_coach),
    db: Session = Depends(get_db_session),
):
    item = MealPlanningService.add_food_item(db, coach.id, meal_id, payload)
    return NutritionMapper.to_meal_food_item_response(item)


@router.post(
    "/meals/{meal_id}/recipes",
    response_model=List[MealFoodItemResponse],
    status_code=status.HTTP_201_CREATED,
)
def add_recipe_to_meal(
    meal_id: UUID,
    payload: AddRecipeToMealRequest,
    coach: Profile = Depends(get_current_coach),
    db: Session = Depends(get_db_session),
):
    """Add every recipe ingredient, scaled by servings / recipe serving size"""
    items = MealPlanningService.add_recipe_to_meal(
        db, coach.id, meal_id, payload.recipe_id, payload.servings
    )
    return [NutritionMapper.to_meal_food_item_response(i) for i in items]


@router.patch("/meal-food-items/{item_id}", response_model=MealFoodItemResponse)
def update_food_item(
    item_id: UUID,
    payload: MealFoodItemUpdate,
    coach: Profile = Depends(get_current_coach),
    db: Session = Depends(get_db_session),
):
    item = MealPlanningService.update_food_item(db, coach.id, item_id, payload)
    return NutritionMapper.to_meal_food_item_response(item)


@router.delete("/meal-food-items/{item_id}", response_model=DeletedResponse)
def remove_food_item(
    item_id: UUID,
    coach: Profile = Depends(get_current_coach),
    db: Session = Depends(get_db_session),
):
    MealPlanningService.remove_food_item(db, coach.id, item_id)
    return DeletedResponse(deleted=str(item_id))
