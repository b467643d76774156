from typing import Optional, Tuple
from uuid import UUID
from sqlalchemy.orm import Session
import logging

from domain.models import NutritionPlan, Profile
from domain.schemas.nutrition_schemas import (
    EnergyTargetsRequest,
    EnergyTargetsResponse,
    NutritionPlanCreate,
    PlanFromEnergyTargetsRequest,
)
from domain.nutrition_calculator import calculate_energy_targets, round_half_up
from repositories import ProfileRepository
from services.meal_planning_service import MealPlanningService
from app.exceptions import NotFoundError, ServiceValidationError

logger = logging.getLogger("coachdesk.energy_targets")

MEASUREMENTS = ("weight_kg", "height_cm", "age", "gender")


class EnergyTargetService:
    """BMR / TDEE calculator and nutrition plans created from its results"""

    @staticmethod
    def _calculate(
        db: Session, coach_id: UUID, payload: EnergyTargetsRequest
    ) -> Tuple[EnergyTargetsResponse, Optional[Profile]]:
        athlete = None
        if payload.athlete_id:
            athlete = ProfileRepository(db).get_athlete(coach_id, payload.athlete_id)
            if not athlete:
                raise NotFoundError(f"Athlete not found: {payload.athlete_id}")

        # Values sent in the request win over the athlete's profile
        values = {}
        for field in MEASUREMENTS:
            value = getattr(payload, field)
            if value is None and athlete is not None:
                value = getattr(athlete, field)
            values[field] = value

        missing = [field for field, value in values.items() if value is None]
        if missing:
            raise ServiceValidationError(
                "Measurements required for the energy calculation are missing",
                details={"missing": missing},
            )

        targets = calculate_energy_targets(
            activity_factor=payload.activity_factor, goal=payload.goal, **values
        )
        logger.info(
            f"energy_targets_calculated coach_id={coach_id} athlete_id={payload.athlete_id} "
            f"goal={payload.goal.value} calories={targets.calorie_target:.0f}"
        )
        response = EnergyTargetsResponse(
            athlete_id=payload.athlete_id,
            goal=payload.goal,
            bmr=targets.bmr,
            tdee=targets.tdee,
            calorie_target=targets.calorie_target,
            protein_grams=targets.protein_grams,
            fat_grams=targets.fat_grams,
            carb_grams=targets.carb_grams,
            protein_per_kg=targets.protein_per_kg,
            fat_per_kg=targets.fat_per_kg,
            carbs_per_kg=targets.carbs_per_kg,
        )
        return response, athlete

    @staticmethod
    def calculate(
        db: Session, coach_id: UUID, payload: EnergyTargetsRequest
    ) -> EnergyTargetsResponse:
        return EnergyTargetService._calculate(db, coach_id, payload)[0]

    @staticmethod
    def create_plan(
        db: Session, coach_id: UUID, payload: PlanFromEnergyTargetsRequest
    ) -> NutritionPlan:
        """
        Create a nutrition plan whose targets are the calculator's results,
        rounded to whole numbers. The description records the goal, BMR and
        TDEE the targets came from.
        """
        result, athlete = EnergyTargetService._calculate(db, coach_id, payload)

        description = (
            f"Created from BMR calculator. Goal: {payload.goal.value.capitalize()}. "
            f"BMR: {round_half_up(result.bmr)} kcal/day. "
            f"TDEE: {round_half_up(result.tdee)} kcal/day."
        )
        if athlete is not None:
            description += f" Athlete: {athlete.username or athlete.email}."

        return MealPlanningService.create_plan(
            db,
            coach_id,
            NutritionPlanCreate(
                name=payload.name,
                description=description,
                total_calories=round_half_up(result.calorie_target),
                protein_grams=round_half_up(result.protein_grams),
                carbohydrate_grams=round_half_up(result.carb_grams),
                fat_grams=round_half_up(result.fat_grams),
                is_public=payload.is_public,
            ),
        )
