from typing import Dict, List
from uuid import UUID
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
import logging

from domain.models import Meal, MealFoodItem, NutritionPlan, Recipe
from domain.schemas.nutrition_schemas import (
    DayTypeSummary,
    MacroTotals,
    MealCreate,
    MealFoodItemCreate,
    MealFoodItemUpdate,
    MealUpdate,
    NutritionPlanCreate,
    NutritionPlanSummaryResponse,
    NutritionPlanUpdate,
    NutritionPlanWithMealsResponse,
)
from domain.mappers import NutritionMapper
from domain.nutrition_calculator import (
    Macros,
    calculate_percentage,
    calculate_total_nutrition,
)
from repositories import (
    FoodItemRepository,
    MealFoodItemRepository,
    MealRepository,
    NutritionPlanRepository,
    RecipeRepository,
)
from app.exceptions import NotFoundError, ServiceValidationError

logger = logging.getLogger("coachdesk.meal_planning")


def _commit(db: Session, action: str):
    """Commit the unit of work; integrity failures roll everything back"""
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.error(f"{action}_failed error={str(e)}")
        raise ServiceValidationError(f"Database integrity error during {action}")


def _clone_food_item(item: MealFoodItem) -> MealFoodItem:
    return MealFoodItem(
        food_item_id=item.food_item_id,
        quantity=item.quantity,
        unit=item.unit,
        notes=item.notes,
        source_recipe_id=item.source_recipe_id,
    )


class MealPlanningService:
    """Business logic for nutrition plans, meals and the food items inside them"""

    # ------------------------------------------------------------------
    # Nutrition plans
    # ------------------------------------------------------------------

    @staticmethod
    def list_plans(db: Session, coach_id: UUID) -> List[NutritionPlan]:
        return NutritionPlanRepository(db).list_by_coach(coach_id)

    @staticmethod
    def get_plan(db: Session, coach_id: UUID, plan_id: UUID) -> NutritionPlan:
        plan = NutritionPlanRepository(db).get_for_coach(plan_id, coach_id)
        if not plan:
            logger.warning(f"plan_not_found plan_id={plan_id} coach_id={coach_id}")
            raise NotFoundError(f"Nutrition plan not found: {plan_id}")
        return plan

    @staticmethod
    def create_plan(
        db: Session, coach_id: UUID, payload: NutritionPlanCreate
    ) -> NutritionPlan:
        plan = NutritionPlan(coach_id=coach_id, **payload.model_dump())
        db.add(plan)
        _commit(db, "plan_create")
        db.refresh(plan)
        logger.info(f"plan_created plan_id={plan.id} coach_id={coach_id}")
        return plan

    @staticmethod
    def update_plan(
        db: Session, coach_id: UUID, plan_id: UUID, payload: NutritionPlanUpdate
    ) -> NutritionPlan:
        plan = MealPlanningService.get_plan(db, coach_id, plan_id)
        for key, value in payload.model_dump(exclude_unset=True).items():
            setattr(plan, key, value)
        _commit(db, "plan_update")
        db.refresh(plan)
        logger.info(f"plan_updated plan_id={plan_id}")
        return plan

    @staticmethod
    def delete_plan(db: Session, coach_id: UUID, plan_id: UUID) -> bool:
        plan = MealPlanningService.get_plan(db, coach_id, plan_id)
        db.delete(plan)
        db.commit()
        logger.info(f"plan_deleted plan_id={plan_id}")
        return True

    @staticmethod
    def get_plan_with_meals(
        db: Session, coach_id: UUID, plan_id: UUID
    ) -> NutritionPlanWithMealsResponse:
        MealPlanningService.get_plan(db, coach_id, plan_id)
        return MealPlanningService.build_plan_view(db, plan_id)

    @staticmethod
    def build_plan_view(db: Session, plan_id: UUID) -> NutritionPlanWithMealsResponse:
        """Plan with meals, per-item macros, meal totals and day types (no ownership check)"""
        plan = NutritionPlanRepository(db).get_with_meals(plan_id)
        if not plan:
            raise NotFoundError(f"Nutrition plan not found: {plan_id}")
        return NutritionMapper.to_plan_with_meals(plan)

    @staticmethod
    def get_day_type_summary(
        db: Session, coach_id: UUID, plan_id: UUID
    ) -> NutritionPlanSummaryResponse:
        """
        Summed macros per day type, rounded to whole numbers, with the share of
        each plan target reached.
        """
        plan = MealPlanningService.get_plan(db, coach_id, plan_id)

        meals_by_day: Dict[str, List[Meal]] = {}
        for meal in plan.meals:
            meals_by_day.setdefault(meal.day_type, []).append(meal)

        summaries = []
        for day_type in sorted(meals_by_day):
            meals = meals_by_day[day_type]
            totals: Macros = calculate_total_nutrition(
                NutritionMapper.meal_totals(m) for m in meals
            )
            summaries.append(
                DayTypeSummary(
                    day_type=day_type,
                    meal_count=len(meals),
                    totals=MacroTotals(**totals.as_dict()),
                    target_percentages={
                        "calories": calculate_percentage(totals.calories, plan.total_calories),
                        "protein": calculate_percentage(totals.protein, plan.protein_grams),
                        "carbs": calculate_percentage(totals.carbs, plan.carbohydrate_grams),
                        "fat": calculate_percentage(totals.fat, plan.fat_grams),
                    },
                )
            )

        return NutritionPlanSummaryResponse(
            plan_id=plan.id,
            targets=MacroTotals(
                calories=plan.total_calories or 0,
                protein=plan.protein_grams or 0,
                carbs=plan.carbohydrate_grams or 0,
                fat=plan.fat_grams or 0,
            ),
            day_types=summaries,
        )

    # ------------------------------------------------------------------
    # Meals
    # ------------------------------------------------------------------

    @staticmethod
    def get_meal(db: Session, coach_id: UUID, meal_id: UUID) -> Meal:
        meal = MealRepository(db).get_by_id(meal_id)
        if not meal or meal.plan is None or meal.plan.coach_id != coach_id:
            raise NotFoundError(f"Meal not found: {meal_id}")
        return meal

    @staticmethod
    def create_meal(
        db: Session, coach_id: UUID, plan_id: UUID, payload: MealCreate
    ) -> Meal:
        MealPlanningService.get_plan(db, coach_id, plan_id)
        data = payload.model_dump()
        if data.get("order_in_plan") is None:
            data["order_in_plan"] = MealRepository(db).next_order(plan_id)

        meal = Meal(nutrition_plan_id=plan_id, **data)
        db.add(meal)
        _commit(db, "meal_create")
        db.refresh(meal)
        logger.info(f"meal_created meal_id={meal.id} plan_id={plan_id} day_type={meal.day_type!r}")
        return meal

    @staticmethod
    def update_meal(
        db: Session, coach_id: UUID, meal_id: UUID, payload: MealUpdate
    ) -> Meal:
        meal = MealPlanningService.get_meal(db, coach_id, meal_id)
        for key, value in payload.model_dump(exclude_unset=True).items():
            if key in ("name", "day_type", "order_in_plan") and value is None:
                raise ServiceValidationError(f"{key} cannot be empty")
            setattr(meal, key, value)
        _commit(db, "meal_update")
        db.refresh(meal)
        return meal

    @staticmethod
    def delete_meal(db: Session, coach_id: UUID, meal_id: UUID) -> bool:
        meal = MealPlanningService.get_meal(db, coach_id, meal_id)
        db.delete(meal)
        db.commit()
        logger.info(f"meal_deleted meal_id={meal_id}")
        return True

    @staticmethod
    def duplicate_meal(db: Session, coach_id: UUID, meal_id: UUID) -> Meal:
        """Copy a meal with all its food items and place it right after the original"""
        original = MealPlanningService.get_meal(db, coach_id, meal_id)
        copy = Meal(
            nutrition_plan_id=original.nutrition_plan_id,
            name=f"{original.name} (Copy)",
            time_suggestion=original.time_suggestion,
            notes=original.notes,
            order_in_plan=(original.order_in_plan or 0) + 1,
            day_type=original.day_type,
            food_items=[_clone_food_item(i) for i in original.food_items],
        )
        db.add(copy)
        _commit(db, "meal_duplicate")
        db.refresh(copy)
        logger.info(
            f"meal_duplicated source_meal_id={meal_id} new_meal_id={copy.id} "
            f"food_items={len(copy.food_items)}"
        )
        return copy

    @staticmethod
    def reorder_meals(
        db: Session, coach_id: UUID, plan_id: UUID, meal_ids: List[UUID]
    ) -> List[Meal]:
        """Meal at position i of `meal_ids` gets order_in_plan = i"""
        plan = MealPlanningService.get_plan(db, coach_id, plan_id)
        meals = {m.id: m for m in plan.meals}

        unknown = [str(mid) for mid in meal_ids if mid not in meals]
        if unknown:
            raise ServiceValidationError(
                "Meals do not belong to this plan", details={"meal_ids": unknown}
            )
        if len(set(meal_ids)) != len(meal_ids):
            raise ServiceValidationError("Meal ids must be unique")

        for index, mid in enumerate(meal_ids):
            meals[mid].order_in_plan = index
        _commit(db, "meal_reorder")
        logger.info(f"meals_reordered plan_id={plan_id} count={len(meal_ids)}")
        return MealRepository(db).list_by_plan(plan_id)

    @staticmethod
    def duplicate_day_type(
        db: Session,
        coach_id: UUID,
        plan_id: UUID,
        source_day_type: str,
        new_day_type: str,
    ) -> List[Meal]:
        """
        Copy every meal of one day type into another, food items included.

        Raises:
            ServiceValidationError: source has no meals, target equals source
                or target already has meals
        """
        MealPlanningService.get_plan(db, coach_id, plan_id)
        source_day_type = source_day_type.strip()
        new_day_type = new_day_type.strip()
        if not new_day_type:
            raise ServiceValidationError("New day type is required")
        if source_day_type == new_day_type:
            raise ServiceValidationError("New day type must differ from the source day type")

        repo = MealRepository(db)
        source_meals = repo.list_by_day_type(plan_id, source_day_type)
        if not source_meals:
            raise ServiceValidationError(f'No meals found with day type "{source_day_type}"')
        if repo.list_by_day_type(plan_id, new_day_type):
            raise ServiceValidationError(f'Day type "{new_day_type}" already has meals')

        copies = []
        for meal in source_meals:
            copy = Meal(
                nutrition_plan_id=plan_id,
                name=meal.name,
                time_suggestion=meal.time_suggestion,
                notes=meal.notes,
                order_in_plan=meal.order_in_plan,
                day_type=new_day_type,
                food_items=[_clone_food_item(i) for i in meal.food_items],
            )
            db.add(copy)
            copies.append(copy)
        _commit(db, "day_type_duplicate")

        logger.info(
            f"day_type_duplicated plan_id={plan_id} source={source_day_type!r} "
            f"target={new_day_type!r} meals={len(copies)}"
        )
        return repo.list_by_day_type(plan_id, new_day_type)

    # ------------------------------------------------------------------
    # Food items in meals
    # ------------------------------------------------------------------

    @staticmethod
    def _get_meal_food_item(db: Session, coach_id: UUID, item_id: UUID) -> MealFoodItem:
        item = MealFoodItemRepository(db).get_by_id(item_id)
        if not item or item.meal is None or item.meal.plan.coach_id != coach_id:
            raise NotFoundError(f"Meal food item not found: {item_id}")
        return item

    @staticmethod
    def add_food_item(
        db: Session, coach_id: UUID, meal_id: UUID, payload: MealFoodItemCreate
    ) -> MealFoodItem:
        meal = MealPlanningService.get_meal(db, coach_id, meal_id)
        if payload.quantity <= 0:
            raise ServiceValidationError("Quantity must be greater than 0")
        if not FoodItemRepository(db).exists(payload.food_item_id):
            raise NotFoundError(f"Food item not found: {payload.food_item_id}")

        item = MealFoodItem(meal_id=meal.id, **payload.model_dump())
        db.add(item)
        _commit(db, "meal_food_item_add")
        db.refresh(item)
        logger.info(
            f"meal_food_item_added meal_id={meal_id} food_item_id={payload.food_item_id} "
            f"quantity={payload.quantity}{payload.unit}"
        )
        return item

    @staticmethod
    def update_food_item(
        db: Session, coach_id: UUID, item_id: UUID, payload: MealFoodItemUpdate
    ) -> MealFoodItem:
        item = MealPlanningService._get_meal_food_item(db, coach_id, item_id)
        changes = payload.model_dump(exclude_unset=True)
        if "quantity" in changes and (changes["quantity"] is None or changes["quantity"] <= 0):
            raise ServiceValidationError("Quantity must be greater than 0")
        if "unit" in changes and not changes["unit"]:
            raise ServiceValidationError("Unit cannot be empty")

        for key, value in changes.items():
            setattr(item, key, value)
        _commit(db, "meal_food_item_update")
        db.refresh(item)
        return item

    @staticmethod
    def remove_food_item(db: Session, coach_id: UUID, item_id: UUID) -> bool:
        item = MealPlanningService._get_meal_food_item(db, coach_id, item_id)
        db.delete(item)
        db.commit()
        logger.info(f"meal_food_item_removed item_id={item_id}")
        return True

    @staticmethod
    def add_recipe_to_meal(
        db: Session, coach_id: UUID, meal_id: UUID, recipe_id: UUID, servings: float
    ) -> List[MealFoodItem]:
        """
        Add every ingredient of a recipe to a meal.

        Quantities are scaled by servings / recipe.serving_size and each row
        remembers the recipe it came from. Nothing is added when any ingredient
        has lost its food item.
        """
        meal = MealPlanningService.get_meal(db, coach_id, meal_id)
        if servings is None or servings <= 0:
            raise ServiceValidationError("Servings must be greater than 0")

        recipe: Recipe = RecipeRepository(db).get_by_id(recipe_id)
        if not recipe or (recipe.coach_id != coach_id and not recipe.is_public):
            raise NotFoundError(f"Recipe not found: {recipe_id}")

        missing = [str(i.id) for i in recipe.ingredients if i.food_item is None]
        if missing:
            raise ServiceValidationError(
                "Food item not found for recipe ingredients",
                details={"ingredient_ids": missing},
            )

        ratio = servings / recipe.serving_size
        items = [
            MealFoodItem(
                meal_id=meal.id,
                food_item_id=ingredient.food_item_id,
                quantity=ingredient.quantity * ratio,
                unit=ingredient.unit,
                notes=ingredient.notes,
                source_recipe_id=recipe.id,
            )
            for ingredient in recipe.ingredients
        ]
        db.add_all(items)
        _commit(db, "recipe_add_to_meal")
        for item in items:
            db.refresh(item)

        logger.info(
            f"recipe_added_to_meal meal_id={meal_id} recipe_id={recipe_id} "
            f"servings={servings} items={len(items)}"
        )
        return items
