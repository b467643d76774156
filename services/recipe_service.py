from typing import List, Optional, Tuple
from uuid import UUID
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
import logging

from domain.models import Recipe, RecipeIngredient
from domain.schemas.recipe_schemas import (
    RecipeCreate,
    RecipeIngredientCreate,
    RecipeUpdate,
)
from domain.nutrition_calculator import calculate_recipe_nutrition
from repositories import FoodItemRepository, RecipeRepository
from app.exceptions import NotFoundError, ServiceValidationError

logger = logging.getLogger("coachdesk.recipes")


class RecipeService:
    """Business logic for coach recipes"""

    @staticmethod
    def list_recipes(
        db: Session,
        coach_id: UUID,
        search: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> Tuple[List[Recipe], int]:
        recipes, count = RecipeRepository(db).search_by_coach(coach_id, search, limit, offset)
        logger.info(
            f"recipes_listed coach_id={coach_id} returned={len(recipes)} total={count}"
        )
        return recipes, count

    @staticmethod
    def get_recipe(db: Session, coach_id: UUID, recipe_id: UUID) -> Recipe:
        recipe = RecipeRepository(db).get_for_coach(recipe_id, coach_id)
        if not recipe:
            raise NotFoundError(f"Recipe not found: {recipe_id}")
        return recipe

    @staticmethod
    def _build_ingredients(
        db: Session, ingredients: List[RecipeIngredientCreate]
    ) -> List[RecipeIngredient]:
        """Validate that every referenced food item exists before touching the recipe"""
        ids = {i.food_item_id for i in ingredients}
        found = {f.id for f in FoodItemRepository(db).get_many(ids)}
        missing = sorted(str(i) for i in ids - found)
        if missing:
            raise ServiceValidationError(
                "Unknown food items in ingredients", details={"food_item_ids": missing}
            )
        return [RecipeIngredient(**i.model_dump()) for i in ingredients]

    @staticmethod
    def _refresh_totals(db: Session, recipe: Recipe):
        """Recompute the cached total_* columns from the current ingredients"""
        db.flush()
        db.refresh(recipe)
        totals = calculate_recipe_nutrition(recipe)
        recipe.total_calories = totals.calories
        recipe.total_protein = totals.protein
        recipe.total_carbs = totals.carbs
        recipe.total_fat = totals.fat

    @staticmethod
    def create_recipe(db: Session, coach_id: UUID, payload: RecipeCreate) -> Recipe:
        ingredients = RecipeService._build_ingredients(db, payload.ingredients)
        data = payload.model_dump(exclude={"ingredients"})
        recipe = Recipe(coach_id=coach_id, **data, ingredients=ingredients)
        try:
            db.add(recipe)
            RecipeService._refresh_totals(db, recipe)
            db.commit()
        except IntegrityError as e:
            db.rollback()
            logger.error(f"recipe_create_failed coach_id={coach_id} error={str(e)}")
            raise ServiceValidationError("Database integrity error during recipe save")
        db.refresh(recipe)
        logger.info(
            f"recipe_created recipe_id={recipe.id} ingredients={len(ingredients)} "
            f"calories={recipe.total_calories:.1f}"
        )
        return recipe

    @staticmethod
    def update_recipe(
        db: Session, coach_id: UUID, recipe_id: UUID, payload: RecipeUpdate
    ) -> Recipe:
        """
        Update recipe fields. When `ingredients` is sent the full ingredient
        list is replaced; otherwise the existing ingredients are kept.
        """
        recipe = RecipeService.get_recipe(db, coach_id, recipe_id)
        changes = payload.model_dump(exclude_unset=True, exclude={"ingredients"})
        for key in ("name", "serving_size", "serving_unit"):
            if key in changes and changes[key] is None:
                raise ServiceValidationError(f"{key} cannot be empty")

        new_ingredients = None
        if payload.ingredients is not None:
            new_ingredients = RecipeService._build_ingredients(db, payload.ingredients)

        try:
            for key, value in changes.items():
                setattr(recipe, key, value)
            if new_ingredients is not None:
                recipe.ingredients.clear()
                db.flush()
                recipe.ingredients.extend(new_ingredients)
            RecipeService._refresh_totals(db, recipe)
            db.commit()
        except IntegrityError as e:
            db.rollback()
            logger.error(f"recipe_update_failed recipe_id={recipe_id} error={str(e)}")
            raise ServiceValidationError("Database integrity error during recipe save")
        db.refresh(recipe)
        logger.info(
            f"recipe_updated recipe_id={recipe_id} "
            f"ingredients_replaced={new_ingredients is not None}"
        )
        return recipe

    @staticmethod
    def delete_recipe(db: Session, coach_id: UUID, recipe_id: UUID) -> bool:
        recipe = RecipeService.get_recipe(db, coach_id, recipe_id)
        db.delete(recipe)
        db.commit()
        logger.info(f"recipe_deleted recipe_id={recipe_id}")
        return True
