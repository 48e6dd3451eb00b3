"""Closed enumerations used across food, meal and plan records."""

from enum import StrEnum
from typing import TypeVar

_E = TypeVar("_E", bound=StrEnum)


class ServingUnit(StrEnum):
    """Units a serving size may be declared in."""

    GRAM = "gram"
    KG = "kg"
    PIECE = "piece"
    CUP = "cup"
    ML = "ml"
    BOX = "box"


class FoodCategory(StrEnum):
    """Food categories."""

    PROTEIN = "protein"
    VEGETABLE = "vegetable"
    FRUIT = "fruit"
    DAIRY = "dairy"
    GRAIN = "grain"


class Visibility(StrEnum):
    """Who can see a food definition."""

    PUBLIC = "public"
    PRIVATE = "private"


class MealType(StrEnum):
    """Meal slots within a day."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


class PlanType(StrEnum):
    """Meal plan period kinds."""

    WEEKLY = "weekly"
    MONTHLY = "monthly"


class Goal(StrEnum):
    """Dietary goal a plan is built for."""

    WEIGHT_LOSS = "weight_loss"
    MUSCLE_GAIN = "muscle_gain"
    MAINTENANCE = "maintenance"


class PlanStatus(StrEnum):
    """Meal plan lifecycle status."""

    DRAFT = "draft"
    ACTIVE = "active"
    COMPLETED = "completed"


def parse_choice(choice: type[_E], raw: object) -> _E | None:
    """Return the enum member for a raw value, or None if it is not a member."""
    if isinstance(raw, choice):
        return raw
    if not isinstance(raw, str):
        return None
    try:
        return choice(raw)
    except ValueError:
        return None


def choice_values(choice: type[StrEnum]) -> list[str]:
    """Return the allowed raw values of an enumeration, in declaration order."""
    return [member.value for member in choice]
