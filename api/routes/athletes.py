"""Athlete roster routes"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
import logging
from uuid import UUID
from typing import List, Optional

from domain.models import get_db_session, Profile
from domain.schemas.profile_schemas import (
    AthleteInviteRequest,
    AthleteUpdateRequest,
    ProfileListItem,
    ProfileResponse,
)
from services.athlete_service import AthleteService
from api.dependencies import get_current_coach
from api.responses import COMMON_ERROR_RESPONSES, DeletedResponse

router = APIRouter(prefix="/athletes", tags=["Athletes"], responses=COMMON_ERROR_RESPONSES)
logger = logging.getLogger("coachdesk.api.athletes")


@router.get("", response_model=List[ProfileListItem])
def list_athletes(
    search: Optional[str] = Query(None, description="Matches email, username or name"),
    coach: Profile = Depends(get_current_coach),
    db: Session = Depends(get_db_session),
):
    """List the coach's athletes, newest first"""
    athletes = AthleteService.list_athletes(db, coach.id, search)
    return [ProfileListItem.model_validate(a) for a in athletes]


@router.post("", response_model=ProfileResponse, status_code=status.HTTP_201_CREATED)
def invite_athlete(
    payload: AthleteInviteRequest,
    coach: Profile = Depends(get_current_coach),
    db: Session = Depends(get_db_session),
):
    """
    Add an athlete by email.

    The profile is created with invitation_status "pending" and no user_id
    until the athlete signs up. A taken email returns 409.
    """
    athlete = AthleteService.invite_athlete(db, coach.id, payload)
    return ProfileResponse.model_validate(athlete)


@router.get("/{athlete_id}", response_model=ProfileResponse)
def get_athlete(
    athlete_id: UUID,
    coach: Profile = Depends(get_current_coach),
    db: Session = Depends(get_db_session),
):
    athlete = AthleteService.get_athlete(db, coach.id, athlete_id)
    return ProfileResponse.model_validate(athlete)


@router.patch("/{athlete_id}", response_model=ProfileResponse)
def update_athlete(
    athlete_id: UUID,
    payload: AthleteUpdateRequest,
    coach: Profile = Depends(get_current_coach),
    db: Session = Depends(get_db_session),
):
    """Partial update; only the fields sent are changed"""
    athlete = AthleteService.update_athlete(db, coach.id, athlete_id, payload)
    return ProfileResponse.model_validate(athlete)


@router.delete("/{athlete_id}", response_model=DeletedResponse)
def delete_athlete(
    athlete_id: UUID,
    coach: Profile = Depends(get_current_coach),
    db: Session = Depends(get_db_session),
):
    AthleteService.delete_athlete(db, coach.id, athlete_id)
    return DeletedResponse(deleted=str(athlete_id))
