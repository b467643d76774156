"""
Tests for macro arithmetic: unit conversion, meal totals, target percentages
and recipe totals.
"""

import pytest
from types import SimpleNamespace

from domain.nutrition_calculator import (
    Macros,
    calculate_nutrition,
    calculate_percentage,
    calculate_recipe_nutrition,
    calculate_total_nutrition,
    sum_macros,
    to_grams,
)


def food(calories=165, protein=31, carbs=0, fat=3.6, serving_size_g=None):
    return SimpleNamespace(
        calories_per_100g=calories,
        protein_per_100g=protein,
        carbs_per_100g=carbs,
        fat_per_100g=fat,
        serving_size_g=serving_size_g,
    )


@pytest.mark.parametrize(
    "quantity, unit, expected",
    [
        (150, "g", 150),
        (0.5, "kg", 500),
        (2, "oz", 56.7),
        (1, "lb", 453.59),
        (3, "pieces", 3),
        (100, "G", 100),
    ],
)
def test_to_grams(quantity, unit, expected):
    assert to_grams(quantity, unit) == pytest.approx(expected)


def test_serving_unit_uses_serving_size():
    assert to_grams(2, "serving", serving_size_g=40) == pytest.approx(80)
    # Without a serving size the quantity is taken as grams
    assert to_grams(2, "serving") == pytest.approx(2)


def test_calculate_nutrition_scales_per_100g():
    result = calculate_nutrition(food(), 200, "g")
    assert result.calories == pytest.approx(330)
    assert result.protein == pytest.approx(62)
    assert result.carbs == pytest.approx(0)
    assert result.fat == pytest.approx(7.2)


def test_calculate_nutrition_missing_values_count_as_zero():
    result = calculate_nutrition(food(calories=None, fat=None), 100, "g")
    assert result.calories == 0
    assert result.fat == 0
    assert result.protein == pytest.approx(31)


def test_sum_macros():
    total = sum_macros([Macros(100, 10, 5, 2), Macros(50.5, 1, 1, 1)])
    assert total == Macros(150.5, 11, 6, 3)
    assert sum_macros([]) == Macros()


def test_calculate_total_nutrition_rounds_each_macro():
    totals = calculate_total_nutrition([Macros(100.4, 10.5, 5.49, 2.5), Macros(0.2, 0, 0, 0)])
    assert totals.calories == 101
    assert totals.protein == 11
    assert totals.carbs == 5
    assert totals.fat == 3


@pytest.mark.parametrize(
    "consumed, target, expected",
    [
        (50, 200, 25.0),
        (300, 200, 100.0),
        (-10, 200, 0.0),
        (50, 0, 0.0),
        (50, None, 0.0),
        (50, -5, 0.0),
    ],
)
def test_calculate_percentage(consumed, target, expected):
    assert calculate_percentage(consumed, target) == pytest.approx(expected)


def test_calculate_recipe_nutrition_skips_missing_food_items():
    recipe = SimpleNamespace(
        ingredients=[
            SimpleNamespace(food_item=food(), quantity=100, unit="g"),
            SimpleNamespace(food_item=None, quantity=50, unit="g"),
            SimpleNamespace(food_item=food(calories=389, protein=16.9, carbs=66.3, fat=6.9), quantity=40, unit="g"),
        ]
    )
    totals = calculate_recipe_nutrition(recipe)
    assert totals.calories == pytest.approx(165 + 155.6)
    assert totals.carbs == pytest.approx(26.52)


def test_calculate_recipe_nutrition_empty_recipe():
    assert calculate_recipe_nutrition(SimpleNamespace(ingredients=[])) == Macros()
