"""
Food Item Repository - Data access layer for the food catalogue
"""

from typing import Optional, List, Tuple
from uuid import UUID
from sqlalchemy.orm import Session

from repositories.base import BaseRepository, LIKE_ESCAPE, contains_pattern
from domain.models import FoodItem
from domain.enums import FoodSource


class FoodItemRepository(BaseRepository[FoodItem]):
    """Repository for food item data access"""

    def __init__(self, db: Session):
        super().__init__(db, FoodItem)

    def search(
        self,
        text: Optional[str] = None,
        food_group: Optional[str] = None,
        limit: int = 20,
        offset: int = 0,
        source: Optional[FoodSource] = None,
        created_by: Optional[UUID] = None,
        is_verified: Optional[bool] = None,
    ) -> Tuple[List[FoodItem], int]:
        """
        Search the catalogue by name.

        Every whitespace separated word of `text` must appear in food_name
        (case-insensitive). `food_group`, `source`, `created_by` and
        `is_verified` are exact-match filters applied when given.

        Returns:
            (page of items ordered by name, total matching count)
        """
        query = self.db.query(FoodItem)
        for word in (text or "").split():
            query = query.filter(
                FoodItem.food_name.ilike(contains_pattern(word), escape=LIKE_ESCAPE)
            )
        if food_group:
            query = query.filter(FoodItem.food_group == food_group)
        if source is not None:
            query = query.filter(FoodItem.source == source)
        if created_by is not None:
            query = query.filter(FoodItem.created_by == created_by)
        if is_verified is not None:
            query = query.filter(FoodItem.is_verified == is_verified)

        count = query.count()
        items = (
            query.order_by(FoodItem.food_name, FoodItem.id)
            .offset(offset)
            .limit(limit)
            .all()
        )
        return items, count

    def get_by_barcode(self, barcode: str) -> Optional[FoodItem]:
        return self.db.query(FoodItem).filter(FoodItem.barcode == barcode).first()

    def get_many(self, food_item_ids) -> List[FoodItem]:
        if not food_item_ids:
            return []
        return self.db.query(FoodItem).filter(FoodItem.id.in_(list(food_item_ids))).all()

    def list_food_groups(self) -> List[str]:
        rows = (
            self.db.query(FoodItem.food_group)
            .filter(FoodItem.food_group.isnot(None), FoodItem.food_group != "")
            .distinct()
            .all()
        )
        return sorted(r[0] for r in rows)
