"""
Nutrition Plan Repository - Data access layer for plans, meals and meal food items
"""

from typing import List, Optional
from uuid import UUID
from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from repositories.base import BaseRepository
from domain.models import NutritionPlan, Meal, MealFoodItem


class NutritionPlanRepository(BaseRepository[NutritionPlan]):
    """Repository for nutrition plan data access"""

    def __init__(self, db: Session):
        super().__init__(db, NutritionPlan)

    def list_by_coach(self, coach_id: UUID) -> List[NutritionPlan]:
        return (
            self.db.query(NutritionPlan)
            .filter(NutritionPlan.coach_id == coach_id)
            .order_by(NutritionPlan.created_at.desc(), NutritionPlan.name)
            .all()
        )

    def get_for_coach(self, plan_id: UUID, coach_id: UUID) -> Optional[NutritionPlan]:
        return (
            self.db.query(NutritionPlan)
            .filter(NutritionPlan.id == plan_id, NutritionPlan.coach_id == coach_id)
            .first()
        )

    def get_with_meals(self, plan_id: UUID) -> Optional[NutritionPlan]:
        """Plan with meals and their food items eagerly loaded"""
        return (
            self.db.query(NutritionPlan)
            .options(selectinload(NutritionPlan.meals).selectinload(Meal.food_items))
            .filter(NutritionPlan.id == plan_id)
            .first()
        )


class MealRepository(BaseRepository[Meal]):
    """Repository for meal data access"""

    def __init__(self, db: Session):
        super().__init__(db, Meal)

    def list_by_plan(self, plan_id: UUID) -> List[Meal]:
        return (
            self.db.query(Meal)
            .filter(Meal.nutrition_plan_id == plan_id)
            .order_by(Meal.order_in_plan, Meal.created_at)
            .all()
        )

    def list_by_day_type(self, plan_id: UUID, day_type: str) -> List[Meal]:
        return (
            self.db.query(Meal)
            .filter(Meal.nutrition_plan_id == plan_id, Meal.day_type == day_type)
            .order_by(Meal.order_in_plan, Meal.created_at)
            .all()
        )

    def next_order(self, plan_id: UUID) -> int:
        """order_in_plan for a meal appended to the end of the plan"""
        current = (
            self.db.query(func.max(Meal.order_in_plan))
            .filter(Meal.nutrition_plan_id == plan_id)
            .scalar()
        )
        return 0 if current is None else current + 1


class MealFoodItemRepository(BaseRepository[MealFoodItem]):
    """Repository for food items placed in meals"""

    def __init__(self, db: Session):
        super().__init__(db, MealFoodItem)
