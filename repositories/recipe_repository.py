"""
Recipe Repository - Data access layer for coach recipes
"""

from typing import List, Optional, Tuple
from uuid import UUID
from sqlalchemy.orm import Session

from repositories.base import BaseRepository, LIKE_ESCAPE, contains_pattern
from domain.models import Recipe


class RecipeRepository(BaseRepository[Recipe]):
    """Repository for recipe data access"""

    def __init__(self, db: Session):
        super().__init__(db, Recipe)

    def search_by_coach(
        self,
        coach_id: UUID,
        search: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> Tuple[List[Recipe], int]:
        """Recipes of a coach ordered by name, with total count before paging"""
        query = self.db.query(Recipe).filter(Recipe.coach_id == coach_id)
        if search and search.strip():
            pattern = contains_pattern(search.strip())
            query = query.filter(Recipe.name.ilike(pattern, escape=LIKE_ESCAPE))
        count = query.count()
        recipes = query.order_by(Recipe.name, Recipe.id).offset(offset).limit(limit).all()
        return recipes, count

    def get_for_coach(self, recipe_id: UUID, coach_id: UUID) -> Optional[Recipe]:
        return (
            self.db.query(Recipe)
            .filter(Recipe.id == recipe_id, Recipe.coach_id == coach_id)
            .first()
        )
