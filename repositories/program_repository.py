"""
Program Repository - Data access layer for program templates, workouts and exercises
"""

from typing import List, Optional
from uuid import UUID
from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from repositories.base import BaseRepository, LIKE_ESCAPE, contains_pattern
from domain.models import ProgramTemplate, Workout, ExerciseInstance


class ProgramTemplateRepository(BaseRepository[ProgramTemplate]):
    """Repository for program template data access"""

    def __init__(self, db: Session):
        super().__init__(db, ProgramTemplate)

    def list_latest_by_coach(
        self, coach_id: UUID, search: Optional[str] = None
    ) -> List[ProgramTemplate]:
        """Only the latest version of each family, newest first"""
        query = self.db.query(ProgramTemplate).filter(
            ProgramTemplate.coach_id == coach_id,
            ProgramTemplate.is_latest_version.is_(True),
        )
        if search and search.strip():
            pattern = contains_pattern(search.strip())
            query = query.filter(ProgramTemplate.name.ilike(pattern, escape=LIKE_ESCAPE))
        return query.order_by(
            ProgramTemplate.created_at.desc(), ProgramTemplate.name
        ).all()

    def get_for_coach(
        self, template_id: UUID, coach_id: UUID
    ) -> Optional[ProgramTemplate]:
        return (
            self.db.query(ProgramTemplate)
            .filter(ProgramTemplate.id == template_id, ProgramTemplate.coach_id == coach_id)
            .first()
        )

    def get_family(self, root_id: UUID) -> List[ProgramTemplate]:
        """Root template plus every version pointing at it, ordered by version"""
        return (
            self.db.query(ProgramTemplate)
            .filter(
                or_(
                    ProgramTemplate.id == root_id,
                    ProgramTemplate.parent_template_id == root_id,
                )
            )
            .order_by(ProgramTemplate.version)
            .all()
        )

    def max_version(self, root_id: UUID) -> int:
        current = (
            self.db.query(func.max(ProgramTemplate.version))
            .filter(
                or_(
                    ProgramTemplate.id == root_id,
                    ProgramTemplate.parent_template_id == root_id,
                )
            )
            .scalar()
        )
        return current or 0

    def list_visible(self, template_ids: List[UUID]) -> List[ProgramTemplate]:
        """Public latest templates plus the given ones"""
        condition = (ProgramTemplate.is_public.is_(True)) & (
            ProgramTemplate.is_latest_version.is_(True)
        )
        if template_ids:
            condition = or_(condition, ProgramTemplate.id.in_(template_ids))
        return (
            self.db.query(ProgramTemplate)
            .filter(condition)
            .order_by(ProgramTemplate.name, ProgramTemplate.version)
            .all()
        )


class WorkoutRepository(BaseRepository[Workout]):
    """Repository for workout data access"""

    def __init__(self, db: Session):
        super().__init__(db, Workout)

    def list_by_template(self, template_id: UUID) -> List[Workout]:
        return (
            self.db.query(Workout)
            .filter(Workout.program_template_id == template_id)
            .order_by(Workout.order_in_program, Workout.created_at)
            .all()
        )

    def next_order(self, template_id: UUID) -> int:
        current = (
            self.db.query(func.max(Workout.order_in_program))
            .filter(Workout.program_template_id == template_id)
            .scalar()
        )
        return 0 if current is None else current + 1


class ExerciseInstanceRepository(BaseRepository[ExerciseInstance]):
    """Repository for exercise instances inside workouts"""

    def __init__(self, db: Session):
        super().__init__(db, ExerciseInstance)

    def get_many_in_workout(
        self, workout_id: UUID, exercise_ids: List[UUID]
    ) -> List[ExerciseInstance]:
        return (
            self.db.query(ExerciseInstance)
            .filter(
                ExerciseInstance.workout_id == workout_id,
                ExerciseInstance.id.in_(exercise_ids),
            )
            .all()
        )

    def list_by_group(self, workout_id: UUID, group_id: UUID) -> List[ExerciseInstance]:
        return (
            self.db.query(ExerciseInstance)
            .filter(
                ExerciseInstance.workout_id == workout_id,
                ExerciseInstance.group_id == group_id,
            )
            .order_by(ExerciseInstance.group_order)
            .all()
        )
