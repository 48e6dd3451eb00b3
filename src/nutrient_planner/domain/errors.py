"""Domain exceptions for nutrition computation and validation."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Violation:
    """A single rule violation scoped to a request field."""

    field: str
    message: str
    value: object = None
    bound: object = None
    consistency: bool = False

    def to_dict(self) -> dict[str, object]:
        return {
            "field": self.field,
            "message": self.message,
            "value": self.value,
            "bound": self.bound,
        }


class NutritionError(Exception):
    """Base class for errors raised by the nutrition core."""


class ValidationError(NutritionError):
    """One or more user-correctable rule violations."""

    def __init__(self, violations: list[Violation]) -> None:
        self.violations = list(violations)
        summary = "; ".join(f"{v.field}: {v.message}" for v in self.violations)
        super().__init__(summary or "validation failed")

    @property
    def fields(self) -> list[str]:
        return [violation.field for violation in self.violations]


class ConsistencyError(ValidationError):
    """Declared calories disagree with the calories implied by the macros."""


class NotFoundError(NutritionError):
    """A referenced record does not exist."""


class FoodNotFoundError(NotFoundError):
    """Referenced food is unknown."""

    def __init__(self, food_id: str) -> None:
        self.food_id = food_id
        super().__init__(f"food item '{food_id}' not found")


class ServingUnitNotFoundError(NotFoundError):
    """A food has no serving size declared in the requested unit."""

    def __init__(self, food_name: str, unit: str) -> None:
        self.food_name = food_name
        self.unit = unit
        super().__init__(f"serving unit '{unit}' not found for food '{food_name}'")


class TemplateNotFoundError(NotFoundError):
    """Meal template is unknown or not accessible to the caller."""

    def __init__(self, template_id: str) -> None:
        self.template_id = template_id
        super().__init__(f"meal template '{template_id}' not found or access denied")


class MealNotFoundError(NotFoundError):
    """A meal id does not exist within a plan."""

    def __init__(self, meal_id: str) -> None:
        self.meal_id = meal_id
        super().__init__(f"meal '{meal_id}' not found in plan")


def raise_for_violations(violations: list[Violation]) -> None:
    """Raise the matching error for a batch of violations, if any."""
    if not violations:
        return
    if all(violation.consistency for violation in violations):
        raise ConsistencyError(violations)
    raise ValidationError(violations)
