from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
from datetime import datetime
from uuid import UUID

from domain.enums import ExerciseGroupType, SetType


class ProgramTemplateCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    phase: Optional[str] = None
    weeks: int = Field(..., gt=0)
    description: Optional[str] = None
    fitness_level: Optional[str] = None
    is_public: bool = False

    @field_validator("name")
    def strip_name(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("Program name is required")
        return v


class ProgramTemplateUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    phase: Optional[str] = None
    weeks: Optional[int] = Field(None, gt=0)
    description: Optional[str] = None
    fitness_level: Optional[str] = None
    is_public: Optional[bool] = None


class ExerciseSetInput(BaseModel):
    set_order: int = Field(..., ge=0)
    type: SetType = SetType.REGULAR
    reps: Optional[str] = None
    weight: Optional[str] = None
    rest_seconds: Optional[int] = Field(None, ge=0)
    duration: Optional[str] = None


class ExerciseInstanceInput(BaseModel):
    exercise_db_id: Optional[str] = None
    exercise_name: str = Field(..., min_length=1)
    sets: Optional[str] = None
    reps: Optional[str] = None
    rest_period_seconds: Optional[int] = Field(None, ge=0)
    tempo: Optional[str] = None
    notes: Optional[str] = None
    order_in_workout: int = Field(0, ge=0)
    set_type: Optional[SetType] = None
    each_side: bool = False
    group_id: Optional[UUID] = None
    group_type: ExerciseGroupType = ExerciseGroupType.NONE
    group_order: int = Field(0, ge=0)
    sets_data: List[ExerciseSetInput] = []


class WorkoutSave(BaseModel):
    """Full workout payload. Saving replaces every exercise and set of the workout."""

    name: str = Field(..., min_length=1, max_length=200)
    day_of_week: Optional[int] = Field(None, ge=1, le=7)
    week_number: Optional[int] = Field(None, gt=0)
    order_in_program: Optional[int] = Field(None, ge=0)
    description: Optional[str] = None
    exercises: List[ExerciseInstanceInput] = []


class ExerciseSetResponse(BaseModel):
    id: UUID
    set_order: int
    type: SetType
    reps: Optional[str]
    weight: Optional[str]
    rest_seconds: Optional[int]
    duration: Optional[str]

    model_config = {"from_attributes": True}


class ExerciseInstanceResponse(BaseModel):
    id: UUID
    workout_id: UUID
    exercise_db_id: Optional[str]
    exercise_name: str
    sets: Optional[str]
    reps: Optional[str]
    rest_period_seconds: Optional[int]
    tempo: Optional[str]
    notes: Optional[str]
    order_in_workout: Optional[int]
    set_type: Optional[SetType]
    each_side: bool
    group_id: Optional[UUID]
    group_type: ExerciseGroupType
    group_order: int
    sets_data: List[ExerciseSetResponse]

    model_config = {"from_attributes": True}


class WorkoutSummaryResponse(BaseModel):
    id: UUID
    program_template_id: UUID
    name: str
    day_of_week: Optional[int]
    week_number: Optional[int]
    order_in_program: Optional[int]
    description: Optional[str]

    model_config = {"from_attributes": True}


class WorkoutResponse(WorkoutSummaryResponse):
    exercise_instances: List[ExerciseInstanceResponse]


class ProgramTemplateResponse(BaseModel):
    id: UUID
    coach_id: UUID
    name: str
    phase: Optional[str]
    weeks: int
    description: Optional[str]
    fitness_level: Optional[str]
    is_public: bool
    version: int
    parent_template_id: Optional[UUID]
    is_latest_version: bool
    created_at: Optional[datetime]
    updated_at: Optional[datetime]

    model_config = {"from_attributes": True}


class ProgramTemplateDetailResponse(ProgramTemplateResponse):
    workouts: List[WorkoutResponse]


class DuplicateWorkoutRequest(BaseModel):
    target_day: int = Field(..., ge=1, le=7)


class DaySchedule(BaseModel):
    day_of_week: int
    day_name: str
    workouts: List[WorkoutSummaryResponse]


class ProgramArrangementResponse(BaseModel):
    program_template_id: UUID
    days: List[DaySchedule]
    unscheduled: List[WorkoutSummaryResponse]


class ExerciseGroupRequest(BaseModel):
    exercise_ids: List[UUID] = Field(..., min_length=2)
    group_type: ExerciseGroupType

    @field_validator("group_type")
    def group_type_not_none(cls, v):
        if v == ExerciseGroupType.NONE:
            raise ValueError("group_type must name a grouping")
        return v


class WorkoutBlock(BaseModel):
    """One entry of the grouped workout view: a single exercise or a group of them."""

    group_id: Optional[UUID] = None
    group_type: ExerciseGroupType = ExerciseGroupType.NONE
    exercises: List[ExerciseInstanceResponse]


class GroupedWorkoutResponse(BaseModel):
    workout_id: UUID
    blocks: List[WorkoutBlock]
