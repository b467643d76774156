"""API routes package"""

from . import (
    health,
    athletes,
    food_items,
    nutrition_plans,
    meals,
    recipes,
    programs,
    workouts,
    assignments,
)

__all__ = [
    "health",
    "athletes",
    "food_items",
    "nutrition_plans",
    "meals",
    "recipes",
    "programs",
    "workouts",
    "assignments",
]
