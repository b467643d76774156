"""
Training program template models: templates, workouts, exercise instances and sets.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Enum as SQLEnum,
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
from domain.enums import ExerciseGroupType, SetType


class ProgramTemplate(Base):
    """
    A versioned training program.

    parent_template_id always points at the root of the version family, so the
    family is {root} + {templates whose parent_template_id is the root}.
    """

    __tablename__ = "program_templates"
    __table_args__ = (
        CheckConstraint("weeks > 0", name="program_templates_weeks_check"),
        CheckConstraint("version >= 1", name="program_templates_version_check"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    coach_id = Column(Uuid, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False)
    name = Column(Text, nullable=False)
    phase = Column(Text)
    weeks = Column(Integer, nullable=False)
    description = Column(Text)
    fitness_level = Column(Text)
    is_public = Column(Boolean, nullable=False, default=False)
    version = Column(Integer, nullable=False, default=1)
    parent_template_id = Column(
        Uuid, ForeignKey("program_templates.id", ondelete="SET NULL"), nullable=True, index=True
    )
    is_latest_version = Column(Boolean, nullable=False, default=True, index=True)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(
        TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    workouts = relationship(
        "Workout",
        back_populates="template",
        cascade="all, delete-orphan",
        order_by="Workout.order_in_program",
    )
    assignments = relationship(
        "AssignedPlan", back_populates="program_template", cascade="all, delete-orphan"
    )

    @property
    def family_root_id(self):
        return self.parent_template_id or self.id


class Workout(Base):
    __tablename__ = "workouts"
    __table_args__ = (
        CheckConstraint(
            "day_of_week >= 1 AND day_of_week <= 7", name="workouts_day_of_week_check"
        ),
        CheckConstraint("week_number > 0", name="workouts_week_number_check"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    program_template_id = Column(
        Uuid, ForeignKey("program_templates.id", ondelete="CASCADE"), nullable=False
    )
    name = Column(Text, nullable=False)
    day_of_week = Column(Integer)
    week_number = Column(Integer)
    order_in_program = Column(Integer)
    description = Column(Text)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(
        TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    template = relationship("ProgramTemplate", back_populates="workouts")
    exercise_instances = relationship(
        "ExerciseInstance",
        back_populates="workout",
        cascade="all, delete-orphan",
        order_by="ExerciseInstance.order_in_workout",
    )


class ExerciseInstance(Base):
    __tablename__ = "exercise_instances"
    __table_args__ = (
        CheckConstraint("order_in_workout >= 0", name="exercise_instances_order_check"),
        CheckConstraint(
            "rest_period_seconds >= 0", name="exercise_instances_rest_check"
        ),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    workout_id = Column(Uuid, ForeignKey("workouts.id", ondelete="CASCADE"), nullable=False)
    exercise_db_id = Column(Text)
    exercise_name = Column(Text, nullable=False)
    sets = Column(Text)  # set count, kept as text
    reps = Column(Text)
    rest_period_seconds = Column(Integer)
    tempo = Column(Text)
    notes = Column(Text)
    order_in_workout = Column(Integer)
    set_type = Column(SQLEnum(SetType), nullable=True)
    each_side = Column(Boolean, nullable=False, default=False)
    group_id = Column(Uuid, nullable=True, index=True)
    group_type = Column(
        SQLEnum(ExerciseGroupType), nullable=False, default=ExerciseGroupType.NONE
    )
    group_order = Column(Integer, nullable=False, default=0)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(
        TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    workout = relationship("Workout", back_populates="exercise_instances")
    sets_data = relationship(
        "ExerciseSet",
        back_populates="exercise_instance",
        cascade="all, delete-orphan",
        order_by="ExerciseSet.set_order",
    )


class ExerciseSet(Base):
    __tablename__ = "exercise_sets"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    exercise_instance_id = Column(
        Uuid, ForeignKey("exercise_instances.id", ondelete="CASCADE"), nullable=False
    )
    set_order = Column(Integer, nullable=False)
    type = Column(SQLEnum(SetType), nullable=False, default=SetType.REGULAR)
    reps = Column(Text)
    weight = Column(Text)
    rest_seconds = Column(Integer)
    duration = Column(Text)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(
        TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    exercise_instance = relationship("ExerciseInstance", back_populates="sets_data")
