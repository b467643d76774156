"""Recipe routes"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
import logging
from uuid import UUID
from typing import Optional

from domain.models import get_db_session, Profile
from domain.schemas.recipe_schemas import (
    RecipeCreate,
    RecipeListResponse,
    RecipeResponse,
    RecipeUpdate,
)
from domain.mappers import RecipeMapper
from services.recipe_service import RecipeService
from api.dependencies import get_current_coach
from api.responses import COMMON_ERROR_RESPONSES, DeletedResponse

router = APIRouter(prefix="/recipes", tags=["Recipes"], responses=COMMON_ERROR_RESPONSES)
logger = logging.getLogger("coachdesk.api.recipes")


@router.get("", response_model=RecipeListResponse)
def list_recipes(
    search: Optional[str] = Query(None, description="Matches the recipe name"),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    coach: Profile = Depends(get_current_coach),
    db: Session = Depends(get_db_session),
):
    """Coach recipes ordered by name, each with computed macro totals"""
    recipes, count = RecipeService.list_recipes(db, coach.id, search, limit, offset)
    return RecipeListResponse(
        recipes=[RecipeMapper.to_summary(r) for r in recipes], count=count
    )


@router.post("", response_model=RecipeResponse, status_code=status.HTTP_201_CREATED)
def create_recipe(
    payload: RecipeCreate,
    coach: Profile = Depends(get_current_coach),
    db: Session = Depends(get_db_session),
):
    recipe = RecipeService.create_recipe(db, coach.id, payload)
    return RecipeMapper.to_response(recipe)


@router.get("/{recipe_id}", response_model=RecipeResponse)
def get_recipe(
    recipe_id: UUID,
    coach: Profile = Depends(get_current_coach),
    db: Session = Depends(get_db_session),
):
    return RecipeMapper.to_response(RecipeService.get_recipe(db, coach.id, recipe_id))


@router.patch("/{recipe_id}", response_model=RecipeResponse)
def update_recipe(
    recipe_id: UUID,
    payload: RecipeUpdate,
    coach: Profile = Depends(get_current_coach),
    db: Session = Depends(get_db_session),
):
    """Update fields; sending `ingredients` replaces the whole ingredient list"""
    recipe = RecipeService.update_recipe(db, coach.id, recipe_id, payload)
    return RecipeMapper.to_response(recipe)


@router.delete("/{recipe_id}", response_model=DeletedResponse)
def delete_recipe(
    recipe_id: UUID,
    coach: Profile = Depends(get_current_coach),
    db: Session = Depends(get_db_session),
):
    RecipeService.delete_recipe(db, coach.id, recipe_id)
    return DeletedResponse(deleted=str(recipe_id))
