"""Workout routes: saving, duplicating and grouping exercises"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
import logging
from uuid import UUID
from typing import List

from domain.models import get_db_session, Profile
from domain.schemas.program_schemas import (
    DuplicateWorkoutRequest,
    ExerciseGroupRequest,
    ExerciseInstanceResponse,
    GroupedWorkoutResponse,
    WorkoutResponse,
    WorkoutSave,
)
from services.program_service import ProgramService
from api.dependencies import get_current_coach
from api.responses import COMMON_ERROR_RESPONSES, DeletedResponse

router = APIRouter(prefix="/workouts", tags=["Workouts"], responses=COMMON_ERROR_RESPONSES)
logger = logging.getLogger("coachdesk.api.workouts")


@router.get("/{workout_id}", response_model=WorkoutResponse)
def get_workout(
    workout_id: UUID,
    coach: Profile = Depends(get_current_coach),
    db: Session = Depends(get_db_session),
):
    return WorkoutResponse.model_validate(ProgramService.get_workout(db, coach.id, workout_id))


@router.put("/{workout_id}", response_model=WorkoutResponse)
def save_workout(
    workout_id: UUID,
    payload: WorkoutSave,
    coach: Profile = Depends(get_current_coach),
    db: Session = Depends(get_db_session),
):
    """Replace the workout, including every exercise and set"""
    workout = ProgramService.update_workout(db, coach.id, workout_id, payload)
    return WorkoutResponse.model_validate(workout)


@router.delete("/{workout_id}", response_model=DeletedResponse)
def delete_workout(
    workout_id: UUID,
    coach: Profile = Depends(get_current_coach),
    db: Session = Depends(get_db_session),
):
    ProgramService.delete_workout(db, coach.id, workout_id)
    return DeletedResponse(deleted=str(workout_id))


@router.post(
    "/{workout_id}/duplicate",
    response_model=WorkoutResponse,
    status_code=status.HTTP_201_CREATED,
)
def duplicate_workout(
    workout_id: UUID,
    payload: DuplicateWorkoutRequest,
    coach: Profile = Depends(get_current_coach),
    db: Session = Depends(get_db_session),
):
    workout = ProgramService.duplicate_workout(db, coach.id, workout_id, payload.target_day)
    return WorkoutResponse.model_validate(workout)


@router.get("/{workout_id}/grouped", response_model=GroupedWorkoutResponse)
def get_grouped_workout(
    workout_id: UUID,
    coach: Profile = Depends(get_current_coach),
    db: Session = Depends(get_db_session),
):
    """Exercises in workout order with grouped exercises collapsed into blocks"""
    return ProgramService.get_grouped_workout(db, coach.id, workout_id)


@router.post(
    "/{workout_id}/groups",
    response_model=List[ExerciseInstanceResponse],
    status_code=status.HTTP_201_CREATED,
)
def group_exercises(
    workout_id: UUID,
    payload: ExerciseGroupRequest,
    coach: Profile = Depends(get_current_coach),
    db: Session = Depends(get_db_session),
):
    """
    Group exercises under a new group id.

    superset and bi_set take exactly 2 exercises, tri_set 3, giant_set 4 or more.
    """
    members = ProgramService.group_exercises(
        db, coach.id, workout_id, payload.exercise_ids, payload.group_type
    )
    return [ExerciseInstanceResponse.model_validate(m) for m in members]


@router.delete("/{workout_id}/groups/{group_id}", response_model=List[ExerciseInstanceResponse])
def ungroup_exercises(
    workout_id: UUID,
    group_id: UUID,
    coach: Profile = Depends(get_current_coach),
    db: Session = Depends(get_db_session),
):
    members = ProgramService.ungroup_exercises(db, coach.id, workout_id, group_id)
    return [ExerciseInstanceResponse.model_validate(m) for m in members]
