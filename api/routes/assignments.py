"""Plan assignment routes"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
import logging
from uuid import UUID
from typing import List

from domain.models import get_db_session, Profile
from domain.schemas.assignment_schemas import (
    AssignmentResponse,
    AssignNutritionPlanRequest,
    AssignProgramRequest,
)
from domain.schemas.nutrition_schemas import NutritionPlanWithMealsResponse
from domain.schemas.program_schemas import ProgramTemplateResponse
from services.assignment_service import AssignmentService
from api.dependencies import get_current_coach
from api.responses import COMMON_ERROR_RESPONSES, DeletedResponse
from app.exceptions import NotFoundError

router = APIRouter(tags=["Assignments"], responses=COMMON_ERROR_RESPONSES)
logger = logging.getLogger("coachdesk.api.assignments")


@router.post(
    "/athletes/{athlete_id}/assignments/program",
    response_model=AssignmentResponse,
    status_code=status.HTTP_201_CREATED,
)
def assign_program(
    athlete_id: UUID,
    payload: AssignProgramRequest,
    coach: Profile = Depends(get_current_coach),
    db: Session = Depends(get_db_session),
):
    """Assign a program template; start_date defaults to today"""
    assignment = AssignmentService.assign_program(
        db, coach.id, athlete_id, payload.program_template_id,
        payload.start_date, payload.end_date,
    )
    return AssignmentResponse.model_validate(assignment)


@router.post(
    "/athletes/{athlete_id}/assignments/nutrition-plan",
    response_model=AssignmentResponse,
    status_code=status.HTTP_201_CREATED,
)
def assign_nutrition_plan(
    athlete_id: UUID,
    payload: AssignNutritionPlanRequest,
    coach: Profile = Depends(get_current_coach),
    db: Session = Depends(get_db_session),
):
    """Assign a nutrition plan; start_date defaults to today"""
    assignment = AssignmentService.assign_nutrition_plan(
        db, coach.id, athlete_id, payload.nutrition_plan_id,
        payload.start_date, payload.end_date,
    )
    return AssignmentResponse.model_validate(assignment)


@router.get("/athletes/{athlete_id}/assignments", response_model=List[AssignmentResponse])
def list_assignments(
    athlete_id: UUID,
    coach: Profile = Depends(get_current_coach),
    db: Session = Depends(get_db_session),
):
    """All assignments of an athlete, newest first"""
    assignments = AssignmentService.list_assignments(db, coach.id, athlete_id)
    return [AssignmentResponse.model_validate(a) for a in assignments]


@router.get(
    "/athletes/{athlete_id}/nutrition-plan",
    response_model=NutritionPlanWithMealsResponse,
)
def get_current_nutrition_plan(
    athlete_id: UUID,
    coach: Profile = Depends(get_current_coach),
    db: Session = Depends(get_db_session),
):
    """The most recently assigned nutrition plan with its meals"""
    plan = AssignmentService.get_current_nutrition_plan(db, coach.id, athlete_id)
    if plan is None:
        raise NotFoundError(f"No nutrition plan assigned to athlete {athlete_id}")
    return plan


@router.get("/athletes/{athlete_id}/programs", response_model=List[ProgramTemplateResponse])
def list_visible_programs(
    athlete_id: UUID,
    coach: Profile = Depends(get_current_coach),
    db: Session = Depends(get_db_session),
):
    """Public latest templates plus the templates assigned to the athlete"""
    templates = AssignmentService.list_visible_programs(db, coach.id, athlete_id)
    return [ProgramTemplateResponse.model_validate(t) for t in templates]


@router.delete("/assignments/{assignment_id}", response_model=DeletedResponse)
def remove_assignment(
    assignment_id: UUID,
    coach: Profile = Depends(get_current_coach),
    db: Session = Depends(get_db_session),
):
    AssignmentService.remove_assignment(db, coach.id, assignment_id)
    return DeletedResponse(deleted=str(assignment_id))
