"""Food catalogue routes"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
import logging
from uuid import UUID
from typing import List, Optional

from domain.models import get_db_session, Profile
from domain.enums import FoodSource
from domain.schemas.food_schemas import (
    CustomFoodItemCreate,
    CustomFoodItemUpdate,
    FoodItemResponse,
    FoodSearchResponse,
)
from services.food_item_service import FoodItemService
from api.dependencies import get_current_coach
from api.responses import COMMON_ERROR_RESPONSES
from app.exceptions import NotFoundError

router = APIRouter(prefix="/food-items", tags=["Food Items"], responses=COMMON_ERROR_RESPONSES)
logger = logging.getLogger("coachdesk.api.food_items")


@router.get("", response_model=FoodSearchResponse)
def search_food_items(
    q: Optional[str] = Query(None, description="Every word must appear in the food name"),
    food_group: Optional[str] = Query(None),
    source: Optional[FoodSource] = Query(None),
    created_by: Optional[UUID] = Query(None, description="Pass your own id to list your custom foods"),
    is_verified: Optional[bool] = Query(None),
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    coach: Profile = Depends(get_current_coach),
    db: Session = Depends(get_db_session),
):
    items, count = FoodItemService.search(
        db,
        q,
        food_group,
        limit,
        offset,
        source=source,
        created_by=created_by,
        is_verified=is_verified,
    )
    return FoodSearchResponse(
        items=[FoodItemResponse.model_validate(i) for i in items], count=count
    )


@router.get("/groups", response_model=List[str])
def list_food_groups(
    coach: Profile = Depends(get_current_coach),
    db: Session = Depends(get_db_session),
):
    """Distinct food groups, sorted"""
    return FoodItemService.list_food_groups(db)


@router.get("/barcode/{barcode}", response_model=FoodItemResponse)
def lookup_barcode(
    barcode: str,
    coach: Profile = Depends(get_current_coach),
    db: Session = Depends(get_db_session),
):
    """
    Look a barcode up in the local catalogue, then on Open Food Facts.

    Products found upstream are stored locally. Returns 404 when neither
    source knows the barcode and 503 when Open Food Facts fails.
    """
    item = FoodItemService.lookup_barcode(db, barcode)
    if item is None:
        raise NotFoundError(f"No food item found for barcode {barcode}")
    return FoodItemResponse.model_validate(item)


@router.get("/{food_item_id}", response_model=FoodItemResponse)
def get_food_item(
    food_item_id: UUID,
    coach: Profile = Depends(get_current_coach),
    db: Session = Depends(get_db_session),
):
    return FoodItemResponse.model_validate(FoodItemService.get_food_item(db, food_item_id))


@router.post("", response_model=FoodItemResponse, status_code=status.HTTP_201_CREATED)
def create_custom_food_item(
    payload: CustomFoodItemCreate,
    coach: Profile = Depends(get_current_coach),
    db: Session = Depends(get_db_session),
):
    item = FoodItemService.create_custom(db, coach.id, payload)
    return FoodItemResponse.model_validate(item)


@router.patch("/{food_item_id}", response_model=FoodItemResponse)
def update_custom_food_item(
    food_item_id: UUID,
    payload: CustomFoodItemUpdate,
    coach: Profile = Depends(get_current_coach),
    db: Session = Depends(get_db_session),
):
    """Only the coach who created a custom item may edit it (403 otherwise)"""
    item = FoodItemService.update_custom(db, coach.id, food_item_id, payload)
    return FoodItemResponse.model_validate(item)
