"""
Assignment Repository - Data access layer for plans assigned to athletes
"""

from typing import List, Optional
from uuid import UUID
from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from domain.models import AssignedPlan


class AssignmentRepository(BaseRepository[AssignedPlan]):
    """Repository for plan assignment data access"""

    def __init__(self, db: Session):
        super().__init__(db, AssignedPlan)

    def list_for_athlete(self, athlete_id: UUID) -> List[AssignedPlan]:
        """All assignments of an athlete, newest first"""
        return (
            self.db.query(AssignedPlan)
            .filter(AssignedPlan.athlete_id == athlete_id)
            .order_by(AssignedPlan.assigned_at.desc())
            .all()
        )

    def latest_nutrition_assignment(self, athlete_id: UUID) -> Optional[AssignedPlan]:
        return (
            self.db.query(AssignedPlan)
            .filter(
                AssignedPlan.athlete_id == athlete_id,
                AssignedPlan.nutrition_plan_id.isnot(None),
            )
            .order_by(AssignedPlan.assigned_at.desc())
            .first()
        )

    def program_ids_for_athlete(self, athlete_id: UUID) -> List[UUID]:
        rows = (
            self.db.query(AssignedPlan.program_template_id)
            .filter(
                AssignedPlan.athlete_id == athlete_id,
                AssignedPlan.program_template_id.isnot(None),
            )
            .all()
        )
        return [r[0] for r in rows]
