"""
Profile (coach and athlete) database model.
"""

from sqlalchemy import (
    Boolean,
    Column,
    Enum as SQLEnum,
    Float,
    ForeignKey,
    Integer,
    Text,
    TIMESTAMP,
    Uuid,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid

from domain.models.database import Base
from domain.enums import Role, Gender, InvitationStatus


class Profile(Base):
    """A coach or athlete account. Athletes point at their coach via coach_id."""

    __tablename__ = "profiles"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    # NULL until an invited athlete signs up
    user_id = Column(Uuid, nullable=True, unique=True)
    email = Column(Text, unique=True, nullable=False)
    username = Column(Text)
    first_name = Column(Text)
    last_name = Column(Text)
    role = Column(SQLEnum(Role), nullable=False, default=Role.ATHLETE)
    coach_id = Column(Uuid, ForeignKey("profiles.id", ondelete="SET NULL"), nullable=True)
    gender = Column(SQLEnum(Gender), nullable=True)

    age = Column(Integer)
    weight_kg = Column(Float)
    height_cm = Column(Float)
    body_fat_percentage = Column(Float)

    goal_type = Column(Text)
    goal_target_weight_kg = Column(Float)
    goal_timeframe_weeks = Column(Integer)

    training_days_per_week = Column(Integer)
    training_equipment = Column(Text)
    training_session_length_minutes = Column(Integer)

    nutrition_preferences = Column(Text)
    nutrition_allergies = Column(Text)

    onboarding_complete = Column(Boolean, nullable=False, default=False)
    invitation_status = Column(SQLEnum(InvitationStatus), nullable=True)
    invited_at = Column(TIMESTAMP(timezone=True), nullable=True)

    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(
        TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    coach = relationship("Profile", remote_side=[id], back_populates="athletes")
    athletes = relationship("Profile", back_populates="coach")
    assignments = relationship(
        "AssignedPlan",
        back_populates="athlete",
        cascade="all, delete-orphan",
        foreign_keys="AssignedPlan.athlete_id",
    )
