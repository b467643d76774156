from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional
from datetime import datetime
from uuid import UUID

from domain.enums import Role, Gender, InvitationStatus


class AthleteInviteRequest(BaseModel):
    """Coach adds an athlete by email; the profile stays pending until sign-up."""

    email: EmailStr
    username: Optional[str] = Field(None, max_length=100)
    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    gender: Optional[Gender] = None

    @field_validator("email")
    def normalize_email(cls, v):
        return v.strip().lower()


class AthleteUpdateRequest(BaseModel):
    """Partial update of an athlete profile. Unset fields are left untouched."""

    username: Optional[str] = Field(None, max_length=100)
    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    role: Optional[Role] = None
    gender: Optional[Gender] = None
    age: Optional[int] = Field(None, ge=0, le=120)
    weight_kg: Optional[float] = Field(None, gt=0, le=500)
    height_cm: Optional[float] = Field(None, gt=0, le=300)
    body_fat_percentage: Optional[float] = Field(None, ge=0, le=100)
    goal_type: Optional[str] = None
    goal_target_weight_kg: Optional[float] = Field(None, gt=0, le=500)
    goal_timeframe_weeks: Optional[int] = Field(None, gt=0)
    training_days_per_week: Optional[int] = Field(None, ge=0, le=7)
    training_equipment: Optional[str] = None
    training_session_length_minutes: Optional[int] = Field(None, gt=0)
    nutrition_preferences: Optional[str] = None
    nutrition_allergies: Optional[str] = None
    onboarding_complete: Optional[bool] = None
    invitation_status: Optional[InvitationStatus] = None


class ProfileListItem(BaseModel):
    id: UUID
    user_id: Optional[UUID]
    email: str
    username: Optional[str]
    first_name: Optional[str]
    last_name: Optional[str]
    role: Role
    onboarding_complete: bool
    invitation_status: Optional[InvitationStatus]
    invited_at: Optional[datetime]
    created_at: Optional[datetime]

    model_config = {"from_attributes": True}


class ProfileResponse(ProfileListItem):
    coach_id: Optional[UUID]
    gender: Optional[Gender]
    age: Optional[int]
    weight_kg: Optional[float]
    height_cm: Optional[float]
    body_fat_percentage: Optional[float]
    goal_type: Optional[str]
    goal_target_weight_kg: Optional[float]
    goal_timeframe_weeks: Optional[int]
    training_days_per_week: Optional[int]
    training_equipment: Optional[str]
    training_session_length_minutes: Optional[int]
    nutrition_preferences: Optional[str]
    nutrition_allergies: Optional[str]
    updated_at: Optional[datetime]
