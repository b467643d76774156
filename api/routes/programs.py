"""Program builder routes: templates, versions and weekly arrangement"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
import logging
from uuid import UUID
from typing import List, Optional

from domain.models import get_db_session, Profile
from domain.schemas.program_schemas import (
    ProgramArrangementResponse,
    ProgramTemplateCreate,
    ProgramTemplateDetailResponse,
    ProgramTemplateResponse,
    ProgramTemplateUpdate,
    WorkoutResponse,
    WorkoutSave,
)
from services.program_service import ProgramService
from api.dependencies import get_current_coach
from api.responses import COMMON_ERROR_RESPONSES, DeletedResponse

router = APIRouter(prefix="/programs", tags=["Programs"], responses=COMMON_ERROR_RESPONSES)
logger = logging.getLogger("coachdesk.api.programs")


@router.get("", response_model=List[ProgramTemplateResponse])
def list_templates(
    search: Optional[str] = Query(None, description="Matches the template name"),
    coach: Profile = Depends(get_current_coach),
    db: Session = Depends(get_db_session),
):
    """Latest version of each of the coach's templates"""
    templates = ProgramService.list_templates(db, coach.id, search)
    return [ProgramTemplateResponse.model_validate(t) for t in templates]


@router.post("", response_model=ProgramTemplateResponse, status_code=status.HTTP_201_CREATED)
def create_template(
    payload: ProgramTemplateCreate,
    coach: Profile = Depends(get_current_coach),
    db: Session = Depends(get_db_session),
):
    template = ProgramService.create_template(db, coach.id, payload)
    return ProgramTemplateResponse.model_validate(template)


@router.get("/{template_id}", response_model=ProgramTemplateDetailResponse)
def get_template(
    template_id: UUID,
    coach: Profile = Depends(get_current_coach),
    db: Session = Depends(get_db_session),
):
    template = ProgramService.get_template(db, coach.id, template_id)
    return ProgramTemplateDetailResponse.model_validate(template)


@router.patch("/{template_id}", response_model=ProgramTemplateResponse)
def update_template(
    template_id: UUID,
    payload: ProgramTemplateUpdate,
    coach: Profile = Depends(get_current_coach),
    db: Session = Depends(get_db_session),
):
    template = ProgramService.update_template(db, coach.id, template_id, payload)
    return ProgramTemplateResponse.model_validate(template)


@router.delete("/{template_id}", response_model=DeletedResponse)
def delete_template(
    template_id: UUID,
    coach: Profile = Depends(get_current_coach),
    db: Session = Depends(get_db_session),
):
    """Deletes the template with its workouts, exercises and sets"""
    ProgramService.delete_template(db, coach.id, template_id)
    return DeletedResponse(deleted=str(template_id))


@router.post(
    "/{template_id}/versions",
    response_model=ProgramTemplateDetailResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_new_version(
    template_id: UUID,
    coach: Profile = Depends(get_current_coach),
    db: Session = Depends(get_db_session),
):
    """
    Copy the template into a new version of its family.

    The copy becomes the family's only latest version.
    """
    template = ProgramService.create_new_version(db, coach.id, template_id)
    return ProgramTemplateDetailResponse.model_validate(template)


@router.get("/{template_id}/versions", response_model=List[ProgramTemplateResponse])
def get_version_history(
    template_id: UUID,
    coach: Profile = Depends(get_current_coach),
    db: Session = Depends(get_db_session),
):
    versions = ProgramService.get_version_history(db, coach.id, template_id)
    return [ProgramTemplateResponse.model_validate(t) for t in versions]


@router.get("/{template_id}/arrangement", response_model=ProgramArrangementResponse)
def get_arrangement(
    template_id: UUID,
    coach: Profile = Depends(get_current_coach),
    db: Session = Depends(get_db_session),
):
    """Workouts by day of week (every day present) plus unscheduled ones"""
    return ProgramService.get_arrangement(db, coach.id, template_id)


@router.post(
    "/{template_id}/workouts",
    response_model=WorkoutResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_workout(
    template_id: UUID,
    payload: WorkoutSave,
    coach: Profile = Depends(get_current_coach),
    db: Session = Depends(get_db_session),
):
    workout = ProgramService.create_workout(db, coach.id, template_id, payload)
    return WorkoutResponse.model_validate(workout)
