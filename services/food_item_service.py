from typing import List, Optional, Tuple
from uuid import UUID
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
import logging

from domain.models import FoodItem
from domain.enums import FoodSource
from domain.schemas.food_schemas import CustomFoodItemCreate, CustomFoodItemUpdate
from repositories import FoodItemRepository
from adapters import open_food_facts
from app.exceptions import ConflictError, ForbiddenError, NotFoundError

logger = logging.getLogger("coachdesk.food_items")


class FoodItemService:
    """Business logic for the food catalogue"""

    @staticmethod
    def search(
        db: Session,
        text: Optional[str] = None,
        food_group: Optional[str] = None,
        limit: int = 20,
        offset: int = 0,
        source: Optional[FoodSource] = None,
        created_by: Optional[UUID] = None,
        is_verified: Optional[bool] = None,
    ) -> Tuple[List[FoodItem], int]:
        items, count = FoodItemRepository(db).search(
            text,
            food_group,
            limit,
            offset,
            source=source,
            created_by=created_by,
            is_verified=is_verified,
        )
        logger.info(
            f"food_search text={text!r} food_group={food_group!r} source={source} "
            f"created_by={created_by} is_verified={is_verified} "
            f"returned={len(items)} total={count}"
        )
        return items, count

    @staticmethod
    def get_food_item(db: Session, food_item_id: UUID) -> FoodItem:
        item = FoodItemRepository(db).get_by_id(food_item_id)
        if not item:
            raise NotFoundError(f"Food item not found: {food_item_id}")
        return item

    @staticmethod
    def create_custom(
        db: Session, coach_id: UUID, payload: CustomFoodItemCreate
    ) -> FoodItem:
        item = FoodItem(
            **payload.model_dump(),
            source=FoodSource.CUSTOM,
            created_by=coach_id,
            is_verified=False,
        )
        try:
            db.add(item)
            db.commit()
        except IntegrityError:
            db.rollback()
            raise ConflictError(f"Food item with barcode {payload.barcode} already exists")
        db.refresh(item)
        logger.info(f"custom_food_created food_item_id={item.id} coach_id={coach_id}")
        return item

    @staticmethod
    def update_custom(
        db: Session, coach_id: UUID, food_item_id: UUID, payload: CustomFoodItemUpdate
    ) -> FoodItem:
        """
        Update a custom food item.

        Raises:
            NotFoundError: unknown food item
            ForbiddenError: the item is not a custom item created by this coach
        """
        item = FoodItemService.get_food_item(db, food_item_id)
        if item.source != FoodSource.CUSTOM or item.created_by != coach_id:
            logger.warning(
                f"custom_food_update_denied food_item_id={food_item_id} coach_id={coach_id}"
            )
            raise ForbiddenError("Only the coach who created this food item can edit it")

        for key, value in payload.model_dump(exclude_unset=True).items():
            setattr(item, key, value)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            raise ConflictError("Another food item already uses this barcode")
        db.refresh(item)
        logger.info(f"custom_food_updated food_item_id={food_item_id}")
        return item

    @staticmethod
    def lookup_barcode(db: Session, barcode: str) -> Optional[FoodItem]:
        """
        Find a food item by barcode.

        The local catalogue is checked first. On a miss Open Food Facts is
        queried and a found product is stored locally.

        Returns:
            FoodItem or None when neither source knows the barcode

        Raises:
            ExternalServiceError: Open Food Facts failed
        """
        barcode = barcode.strip()
        if not barcode:
            return None
        repo = FoodItemRepository(db)
        item = repo.get_by_barcode(barcode)
        if item:
            logger.info(f"barcode_hit_local barcode={barcode}")
            return item

        data = open_food_facts.fetch_product(barcode)
        if data is None:
            logger.info(f"barcode_not_found barcode={barcode}")
            return None

        item = FoodItem(**data, source=FoodSource.OPEN_FOOD_FACTS, is_verified=True)
        try:
            db.add(item)
            db.commit()
        except IntegrityError:
            # stored concurrently by another request
            db.rollback()
            return repo.get_by_barcode(barcode)
        db.refresh(item)
        logger.info(f"barcode_imported barcode={barcode} food_item_id={item.id}")
        return item

    @staticmethod
    def list_food_groups(db: Session) -> List[str]:
        return FoodItemRepository(db).list_food_groups()
