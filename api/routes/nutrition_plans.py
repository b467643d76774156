"""Nutrition plan routes: plans, their meals, day types and the energy target calculator"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
import logging
from uuid import UUID
from typing import List

from domain.models import get_db_session, Profile
from domain.enums import DAY_TYPES
from domain.schemas.nutrition_schemas import (
    DuplicateDayTypeRequest,
    EnergyTargetsRequest,
    EnergyTargetsResponse,
    MealCreate,
    MealOrderRequest,
    MealResponse,
    NutritionPlanCreate,
    NutritionPlanResponse,
    NutritionPlanSummaryResponse,
    NutritionPlanUpdate,
    NutritionPlanWithMealsResponse,
    PlanFromEnergyTargetsRequest,
)
from services.meal_planning_service import MealPlanningService
from services.energy_target_service import EnergyTargetService
from api.dependencies import get_current_coach
from api.responses import COMMON_ERROR_RESPONSES, DeletedResponse

router = APIRouter(
    prefix="/nutrition-plans", tags=["Nutrition Plans"], responses=COMMON_ERROR_RESPONSES
)
logger = logging.getLogger("coachdesk.api.nutrition_plans")


@router.get("", response_model=List[NutritionPlanResponse])
def list_plans(
    coach: Profile = Depends(get_current_coach),
    db: Session = Depends(get_db_session),
):
    plans = MealPlanningService.list_plans(db, coach.id)
    return [NutritionPlanResponse.model_validate(p) for p in plans]


@router.post("", response_model=NutritionPlanResponse, status_code=status.HTTP_201_CREATED)
def create_plan(
    payload: NutritionPlanCreate,
    coach: Profile = Depends(get_current_coach),
    db: Session = Depends(get_db_session),
):
    plan = MealPlanningService.create_plan(db, coach.id, payload)
    return NutritionPlanResponse.model_validate(plan)


@router.post("/energy-targets", response_model=EnergyTargetsResponse)
def calculate_energy_targets(
    payload: EnergyTargetsRequest,
    coach: Profile = Depends(get_current_coach),
    db: Session = Depends(get_db_session),
):
    """
    BMR (Mifflin-St Jeor), TDEE and daily macro targets for a goal.

    Measurements missing from the request are read from the athlete named by
    athlete_id; 400 when any are still missing.
    """
    return EnergyTargetService.calculate(db, coach.id, payload)


@router.post(
    "/from-energy-targets",
    response_model=NutritionPlanResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_plan_from_energy_targets(
    payload: PlanFromEnergyTargetsRequest,
    coach: Profile = Depends(get_current_coach),
    db: Session = Depends(get_db_session),
):
    """Create a plan whose targets are the calculator's rounded results"""
    plan = EnergyTargetService.create_plan(db, coach.id, payload)
    return NutritionPlanResponse.model_validate(plan)


@router.get("/day-types", response_model=List[str])
def list_standard_day_types(coach: Profile = Depends(get_current_coach)):
    """Suggested day types. Meals may still use any non-blank day type."""
    return list(DAY_TYPES)


@router.get("/{plan_id}", response_model=NutritionPlanWithMealsResponse)
def get_plan(
    plan_id: UUID,
    coach: Profile = Depends(get_current_coach),
    db: Session = Depends(get_db_session),
):
    """Plan with meals ordered by order_in_plan, calculated macros and day types"""
    return MealPlanningService.get_plan_with_meals(db, coach.id, plan_id)


@router.patch("/{plan_id}", response_model=NutritionPlanResponse)
def update_plan(
    plan_id: UUID,
    payload: NutritionPlanUpdate,
    coach: Profile = Depends(get_current_coach),
    db: Session = Depends(get_db_session),
):
    plan = MealPlanningService.update_plan(db, coach.id, plan_id, payload)
    return NutritionPlanResponse.model_validate(plan)


@router.delete("/{plan_id}", response_model=DeletedResponse)
def delete_plan(
    plan_id: UUID,
    coach: Profile = Depends(get_current_coach),
    db: Session = Depends(get_db_session),
):
    MealPlanningService.delete_plan(db, coach.id, plan_id)
    return DeletedResponse(deleted=str(plan_id))


@router.get("/{plan_id}/summary", response_model=NutritionPlanSummaryResponse)
def get_day_type_summary(
    plan_id: UUID,
    coach: Profile = Depends(get_current_coach),
    db: Session = Depends(get_db_session),
):
    """Rounded macro totals per day type and the share of each plan target reached"""
    return MealPlanningService.get_day_type_summary(db, coach.id, plan_id)


@router.post(
    "/{plan_id}/meals", response_model=MealResponse, status_code=status.HTTP_201_CREATED
)
def create_meal(
    plan_id: UUID,
    payload: MealCreate,
    coach: Profile = Depends(get_current_coach),
    db: Session = Depends(get_db_session),
):
    meal = MealPlanningService.create_meal(db, coach.id, plan_id, payload)
    return MealResponse.model_validate(meal)


@router.put("/{plan_id}/meals/order", response_model=List[MealResponse])
def reorder_meals(
    plan_id: UUID,
    payload: MealOrderRequest,
    coach: Profile = Depends(get_current_coach),
    db: Session = Depends(get_db_session),
):
    """The meal at position i of meal_ids gets order_in_plan = i"""
    meals = MealPlanningService.reorder_meals(db, coach.id, plan_id, payload.meal_ids)
    return [MealResponse.model_validate(m) for m in meals]


@router.post(
    "/{plan_id}/day-types/duplicate",
    response_model=List[MealResponse],
    status_code=status.HTTP_201_CREATED,
)
def duplicate_day_type(
    plan_id: UUID,
    payload: DuplicateDayTypeRequest,
    coach: Profile = Depends(get_current_coach),
    db: Session = Depends(get_db_session),
):
    """
    Copy every meal of source_day_type, with food items, into new_day_type.

    Returns 400 when the source has no meals, when the target already has
    meals or when both day types are the same.
    """
    meals = MealPlanningService.duplicate_day_type(
        db, coach.id, plan_id, payload.source_day_type, payload.new_day_type
    )
    return [MealResponse.model_validate(m) for m in meals]
