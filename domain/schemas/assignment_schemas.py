from pydantic import BaseModel, Field
from typing import Optional
from datetime import date, datetime
from uuid import UUID


class AssignProgramRequest(BaseModel):
    program_template_id: UUID
    start_date: Optional[date] = Field(None, description="Defaults to today")
    end_date: Optional[date] = None


class AssignNutritionPlanRequest(BaseModel):
    nutrition_plan_id: UUID
    start_date: Optional[date] = Field(None, description="Defaults to today")
    end_date: Optional[date] = None


class AssignmentResponse(BaseModel):
    id: UUID
    athlete_id: UUID
    program_template_id: Optional[UUID]
    nutrition_plan_id: Optional[UUID]
    start_date: date
    end_date: Optional[date]
    assigned_at: Optional[datetime]
    assigned_by: Optional[UUID]

    model_config = {"from_attributes": True}
