from typing import List, Optional
from uuid import UUID
from datetime import date, datetime, timezone
from sqlalchemy.orm import Session
import logging

from domain.models import AssignedPlan, ProgramTemplate
from domain.schemas.nutrition_schemas import NutritionPlanWithMealsResponse
from repositories import (
    AssignmentRepository,
    NutritionPlanRepository,
    ProfileRepository,
    ProgramTemplateRepository,
)
from services.meal_planning_service import MealPlanningService
from app.exceptions import NotFoundError, ServiceValidationError

logger = logging.getLogger("coachdesk.assignments")


class AssignmentService:
    """Business logic for assigning programs and nutrition plans to athletes"""

    @staticmethod
    def _get_athlete(db: Session, coach_id: UUID, athlete_id: UUID):
        athlete = ProfileRepository(db).get_athlete(coach_id, athlete_id)
        if not athlete:
            raise NotFoundError(f"Athlete not found: {athlete_id}")
        return athlete

    @staticmethod
    def _create(db: Session, assignment: AssignedPlan) -> AssignedPlan:
        if assignment.end_date and assignment.end_date < assignment.start_date:
            raise ServiceValidationError("End date cannot be before start date")
        db.add(assignment)
        db.commit()
        db.refresh(assignment)
        return assignment

    @staticmethod
    def assign_program(
        db: Session,
        coach_id: UUID,
        athlete_id: UUID,
        program_template_id: UUID,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> AssignedPlan:
        AssignmentService._get_athlete(db, coach_id, athlete_id)
        template = ProgramTemplateRepository(db).get_by_id(program_template_id)
        if not template or (template.coach_id != coach_id and not template.is_public):
            raise NotFoundError(f"Program template not found: {program_template_id}")

        assignment = AssignmentService._create(
            db,
            AssignedPlan(
                athlete_id=athlete_id,
                program_template_id=program_template_id,
                start_date=start_date or date.today(),
                end_date=end_date,
                assigned_by=coach_id,
                assigned_at=datetime.now(timezone.utc),
            ),
        )
        logger.info(
            f"program_assigned athlete_id={athlete_id} template_id={program_template_id} "
            f"assignment_id={assignment.id}"
        )
        return assignment

    @staticmethod
    def assign_nutrition_plan(
        db: Session,
        coach_id: UUID,
        athlete_id: UUID,
        nutrition_plan_id: UUID,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> AssignedPlan:
        AssignmentService._get_athlete(db, coach_id, athlete_id)
        plan = NutritionPlanRepository(db).get_by_id(nutrition_plan_id)
        if not plan or (plan.coach_id != coach_id and not plan.is_public):
            raise NotFoundError(f"Nutrition plan not found: {nutrition_plan_id}")

        assignment = AssignmentService._create(
            db,
            AssignedPlan(
                athlete_id=athlete_id,
                nutrition_plan_id=nutrition_plan_id,
                start_date=start_date or date.today(),
                end_date=end_date,
                assigned_by=coach_id,
                assigned_at=datetime.now(timezone.utc),
            ),
        )
        logger.info(
            f"nutrition_plan_assigned athlete_id={athlete_id} plan_id={nutrition_plan_id} "
            f"assignment_id={assignment.id}"
        )
        return assignment

    @staticmethod
    def list_assignments(db: Session, coach_id: UUID, athlete_id: UUID) -> List[AssignedPlan]:
        AssignmentService._get_athlete(db, coach_id, athlete_id)
        return AssignmentRepository(db).list_for_athlete(athlete_id)

    @staticmethod
    def remove_assignment(db: Session, coach_id: UUID, assignment_id: UUID) -> bool:
        repo = AssignmentRepository(db)
        assignment = repo.get_by_id(assignment_id)
        if not assignment or assignment.athlete is None or assignment.athlete.coach_id != coach_id:
            raise NotFoundError(f"Assignment not found: {assignment_id}")
        db.delete(assignment)
        db.commit()
        logger.info(f"assignment_removed assignment_id={assignment_id}")
        return True

    @staticmethod
    def get_current_nutrition_plan(
        db: Session, coach_id: UUID, athlete_id: UUID
    ) -> Optional[NutritionPlanWithMealsResponse]:
        """The most recently assigned nutrition plan, with meals; None when nothing is assigned"""
        AssignmentService._get_athlete(db, coach_id, athlete_id)
        assignment = AssignmentRepository(db).latest_nutrition_assignment(athlete_id)
        if not assignment:
            return None
        return MealPlanningService.build_plan_view(db, assignment.nutrition_plan_id)

    @staticmethod
    def list_visible_programs(
        db: Session, coach_id: UUID, athlete_id: UUID
    ) -> List[ProgramTemplate]:
        """Public latest templates plus every template assigned to the athlete"""
        AssignmentService._get_athlete(db, coach_id, athlete_id)
        assigned_ids = AssignmentRepository(db).program_ids_for_athlete(athlete_id)
        return ProgramTemplateRepository(db).list_visible(assigned_ids)
