"""
Plan assignment model: links an athlete to a program template or a nutrition plan.
"""

from sqlalchemy import (
    CheckConstraint,
    Column,
    Date,
    ForeignKey,
    TIMESTAMP,
    Uuid,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid

from domain.models.database import Base


class AssignedPlan(Base):
    __tablename__ = "assigned_plans"
    __table_args__ = (
        CheckConstraint(
            "(program_template_id IS NULL) <> (nutrition_plan_id IS NULL)",
            name="assigned_plans_single_target_check",
        ),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    athlete_id = Column(Uuid, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False)
    program_template_id = Column(
        Uuid, ForeignKey("program_templates.id", ondelete="CASCADE"), nullable=True
    )
    nutrition_plan_id = Column(
        Uuid, ForeignKey("nutrition_plans.id", ondelete="CASCADE"), nullable=True
    )
    start_date = Column(Date, nullable=False)
    end_date = Column(Date)
    assigned_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    assigned_by = Column(Uuid, ForeignKey("profiles.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(
        TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    athlete = relationship("Profile", back_populates="assignments", foreign_keys=[athlete_id])
    program_template = relationship("ProgramTemplate", back_populates="assignments")
    nutrition_plan = relationship("NutritionPlan", back_populates="assignments")
