"""
Nutrition plan, meal and meal food item models.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Float,
    ForeignKey,
    Integer,
    Text,
    TIMESTAMP,
    Uuid,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid

from domain.models.database import Base


class NutritionPlan(Base):
    """A coach-authored plan with daily macro targets"""

    __tablename__ = "nutrition_plans"
    __table_args__ = (
        CheckConstraint("total_calories >= 0", name="nutrition_plans_calories_check"),
        CheckConstraint("protein_grams >= 0", name="nutrition_plans_protein_check"),
        CheckConstraint("carbohydrate_grams >= 0", name="nutrition_plans_carbs_check"),
        CheckConstraint("fat_grams >= 0", name="nutrition_plans_fat_check"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    coach_id = Column(Uuid, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False)
    name = Column(Text, nullable=False)
    total_calories = Column(Integer)
    protein_grams = Column(Integer)
    carbohydrate_grams = Column(Integer)
    fat_grams = Column(Integer)
    description = Column(Text)
    is_public = Column(Boolean, nullable=False, default=False)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(
        TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    meals = relationship(
        "Meal",
        back_populates="plan",
        cascade="all, delete-orphan",
        order_by="Meal.order_in_plan",
    )
    assignments = relationship(
        "AssignedPlan", back_populates="nutrition_plan", cascade="all, delete-orphan"
    )


class Meal(Base):
    """A meal inside a plan, grouped by day type"""

    __tablename__ = "meals"
    __table_args__ = (
        CheckConstraint("order_in_plan >= 0", name="meals_order_in_plan_check"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    nutrition_plan_id = Column(
        Uuid, ForeignKey("nutrition_plans.id", ondelete="CASCADE"), nullable=False
    )
    name = Column(Text, nullable=False)
    time_suggestion = Column(Text)
    notes = Column(Text)
    order_in_plan = Column(Integer, nullable=False, default=0)
    day_type = Column(Text, nullable=False)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(
        TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    plan = relationship("NutritionPlan", back_populates="meals")
    food_items = relationship(
        "MealFoodItem", back_populates="meal", cascade="all, delete-orphan"
    )


class MealFoodItem(Base):
    """A quantity of a food item in a meal"""

    __tablename__ = "meal_food_items"
    __table_args__ = (
        CheckConstraint("quantity > 0", name="meal_food_items_quantity_check"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    meal_id = Column(Uuid, ForeignKey("meals.id", ondelete="CASCADE"), nullable=False)
    food_item_id = Column(Uuid, ForeignKey("food_items.id"), nullable=False)
    quantity = Column(Float, nullable=False)
    unit = Column(Text, nullable=False)
    notes = Column(Text)
    source_recipe_id = Column(
        Uuid, ForeignKey("recipes.id", ondelete="SET NULL"), nullable=True
    )
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())

    meal = relationship("Meal", back_populates="food_items")
    food_item = relationship("FoodItem", lazy="joined")
