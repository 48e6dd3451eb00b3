"""Serving resolution, nutrient scaling and aggregation."""

import math
from collections.abc import Iterable

from nutrient_planner.domain.errors import ServingUnitNotFoundError
from nutrient_planner.domain.meals import MealTemplateFoodItem, MealTotals
from nutrient_planner.domain.nutrition import (
    BASELINE_GRAMS,
    FoodItem,
    MacroNutrients,
    MicroNutrients,
    NutrientAmounts,
    ServingSize,
)


def find_serving(food: FoodItem, unit: str) -> ServingSize:
    """Return the first serving size declared in the given unit."""
    for serving in food.serving_sizes:
        if serving.unit == unit:
            return serving
    raise ServingUnitNotFoundError(food.display_name, unit)


def resolve_serving_grams(food: FoodItem, unit: str, amount: float) -> float:
    """Convert an amount in a serving unit into grams.

    Example: 2 cups where 1 cup = 250 g gives (2 / 1) * 250 = 500 g.
    """
    serving = find_serving(food, unit)
    return (amount / serving.amount) * serving.gram_equivalent


def scale_nutrients(food: FoodItem, total_grams: float) -> NutrientAmounts:
    """Scale a food's per-100g baseline to a gram quantity."""
    multiplier = total_grams / BASELINE_GRAMS
    return NutrientAmounts(
        calories=food.calories * multiplier,
        macros=food.macros.scaled(multiplier),
        micros=food.micros.scaled(multiplier),
    )


def compute_serving(food: FoodItem, unit: str, amount: float) -> NutrientAmounts:
    """Compute calories and nutrients for an amount in a serving unit."""
    return scale_nutrients(food, resolve_serving_grams(food, unit, amount))


def build_line_item(food: FoodItem, unit: str, amount: float) -> MealTemplateFoodItem:
    """Compute a line item for a food, unit and amount."""
    nutrients = compute_serving(food, unit, amount)
    return MealTemplateFoodItem(
        food_id=food.id,
        food_name=food.display_name,
        serving_unit=unit,
        amount=amount,
        calories=nutrients.calories,
        macros=nutrients.macros,
        micros=nutrients.micros,
    )


def sum_calories(values: Iterable[float]) -> float:
    return math.fsum(values)


def sum_macros(values: Iterable[MacroNutrients]) -> MacroNutrients:
    """Sum macronutrients field by field; empty input gives zeros."""
    items = list(values)
    return MacroNutrients(
        protein=math.fsum(item.protein for item in items),
        carbohydrates=math.fsum(item.carbohydrates for item in items),
        fat=math.fsum(item.fat for item in items),
        fiber=math.fsum(item.fiber for item in items),
        sugar=math.fsum(item.sugar for item in items),
    )


def sum_micros(values: Iterable[MicroNutrients]) -> MicroNutrients:
    """Sum micronutrients field by field; empty input gives zeros."""
    items = list(values)
    return MicroNutrients(
        vitamin_a=math.fsum(item.vitamin_a for item in items),
        vitamin_c=math.fsum(item.vitamin_c for item in items),
        calcium=math.fsum(item.calcium for item in items),
        iron=math.fsum(item.iron for item in items),
        sodium=math.fsum(item.sodium for item in items),
        potassium=math.fsum(item.potassium for item in items),
    )


def recompute_totals(items: Iterable[MealTemplateFoodItem]) -> MealTotals:
    """Rebuild totals from the current line items."""
    line_items = list(items)
    return MealTotals(
        calories=sum_calories(item.calories for item in line_items),
        macros=sum_macros(item.macros for item in line_items),
        micros=sum_micros(item.micros for item in line_items),
    )


def fold_totals(
    current: MealTotals, new_items: Iterable[MealTemplateFoodItem]
) -> MealTotals:
    """Fold newly appended line items into existing totals."""
    added = recompute_totals(new_items)
    return MealTotals(
        calories=sum_calories([current.calories, added.calories]),
        macros=sum_macros([current.macros, added.macros]),
        micros=sum_micros([current.micros, added.micros]),
    )


def expected_calories(macros: MacroNutrients) -> float:
    """Calories implied by macros: 4 kcal/g protein and carbs, 9 fat, 2 fiber."""
    return (
        macros.protein * 4
        + macros.carbohydrates * 4
        + macros.fat * 9
        + macros.fiber * 2
    )
