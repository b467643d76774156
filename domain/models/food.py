"""
Food catalogue model.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Enum as SQLEnum,
    Float,
    Text,
    TIMESTAMP,
    Uuid,
)
from sqlalchemy.sql import func
import uuid

from domain.models.database import Base
from domain.enums import FoodSource


class FoodItem(Base):
    """A food with nutrient values expressed per 100 g"""

    __tablename__ = "food_items"
    __table_args__ = (
        CheckConstraint("calories_per_100g >= 0", name="food_items_calories_check"),
        CheckConstraint("protein_per_100g >= 0", name="food_items_protein_check"),
        CheckConstraint("carbs_per_100g >= 0", name="food_items_carbs_check"),
        CheckConstraint("fat_per_100g >= 0", name="food_items_fat_check"),
        CheckConstraint("fiber_per_100g >= 0", name="food_items_fiber_check"),
        CheckConstraint("serving_size_g > 0", name="food_items_serving_size_check"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    food_name = Column(Text, nullable=False)
    food_group = Column(Text)
    calories_per_100g = Column(Float, default=0)
    protein_per_100g = Column(Float, default=0)
    carbs_per_100g = Column(Float, default=0)
    fat_per_100g = Column(Float, default=0)
    fiber_per_100g = Column(Float)
    serving_size_g = Column(Float)
    serving_size_unit = Column(Text)
    nutrient_basis = Column(Text, nullable=False, default="100g")
    barcode = Column(Text, unique=True, nullable=True)
    brand = Column(Text)
    source = Column(SQLEnum(FoodSource), nullable=True)
    source_id = Column(Text)
    created_by = Column(Uuid, nullable=True)
    is_verified = Column(Boolean, nullable=False, default=False)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(
        TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now()
    )
