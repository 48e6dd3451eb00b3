"""Structural rules for meal template composition requests."""

from dataclasses import dataclass

from nutrient_planner.domain.enums import MealType
from nutrient_planner.domain.errors import Violation
from nutrient_planner.domain.requests import (
    FoodItemRequest,
    MealTemplateDraft,
    MealTemplateUpdate,
)
from nutrient_planner.services.validation import (
    ValidationResult,
    check_choice,
    check_max_length,
    check_name,
    check_range,
)


@dataclass
class MealValidator:
    """Gate for meal template create, update and add-food requests."""

    max_name_length: int = 200
    max_description_length: int = 1000
    max_food_items: int = 50
    max_item_amount: float = 10000
    max_tags: int = 20
    max_tag_length: int = 50

    def validate_create(self, draft: MealTemplateDraft) -> ValidationResult:
        result = ValidationResult()
        result.add(check_name("name", draft.name, self.max_name_length))
        if draft.description:
            result.add(
                check_max_length(
                    "description", draft.description, self.max_description_length
                )
            )
        result.add(check_choice("meal_type", MealType, draft.meal_type))
        result.add(self._validate_food_items(draft.food_items))
        if draft.tags:
            result.add(self._validate_tags(draft.tags))
        return result

    def validate_update(self, update: MealTemplateUpdate) -> ValidationResult:
        """Validate only the fields an update supplies."""
        result = ValidationResult()
        if update.name:
            result.add(check_name("name", update.name, self.max_name_length))
        if update.description:
            result.add(
                check_max_length(
                    "description", update.description, self.max_description_length
                )
            )
        if update.meal_type:
            result.add(check_choice("meal_type", MealType, update.meal_type))
        if update.food_items:
            result.add(self._validate_food_items(update.food_items))
        if update.tags:
            result.add(self._validate_tags(update.tags))
        return result

    def validate_add_items(self, items: list[FoodItemRequest]) -> ValidationResult:
        result = ValidationResult()
        result.add(self._validate_food_items(items))
        return result

    def _validate_food_items(self, items: list[FoodItemRequest]) -> Violation | None:
        if not items:
            return Violation("food_items", "at least one food item is required")
        if len(items) > self.max_food_items:
            return Violation(
                "food_items",
                f"maximum number of food items is {self.max_food_items}",
                value=len(items),
                bound=self.max_food_items,
            )
        seen: set[tuple[str, str]] = set()
        for index, item in enumerate(items):
            prefix = f"food_items[{index}]"
            if not item.food_id.strip():
                return Violation(f"{prefix}.food_id", "food id is required")
            if not item.serving_unit.strip():
                return Violation(f"{prefix}.serving_unit", "serving unit is required")
            finite_violation = check_range(f"{prefix}.amount", item.amount)
            if finite_violation is not None:
                return finite_violation
            if item.amount <= 0:
                return Violation(
                    f"{prefix}.amount",
                    "must be greater than 0",
                    value=item.amount,
                    bound=0,
                )
            if item.amount > self.max_item_amount:
                return Violation(
                    f"{prefix}.amount",
                    f"exceeds maximum ({self.max_item_amount:g})",
                    value=item.amount,
                    bound=self.max_item_amount,
                )
            key = (item.food_id, item.serving_unit)
            if key in seen:
                return Violation(
                    prefix,
                    "duplicate food item with same food id and serving unit",
                    value=f"{item.food_id}:{item.serving_unit}",
                )
            seen.add(key)
        return None

    def _validate_tags(self, tags: list[str]) -> Violation | None:
        if len(tags) > self.max_tags:
            return Violation(
                "tags",
                f"maximum number of tags is {self.max_tags}",
                value=len(tags),
                bound=self.max_tags,
            )
        for index, tag in enumerate(tags):
            trimmed = tag.strip()
            if not trimmed:
                return Violation(f"tags[{index}]", "cannot be empty", value=tag)
            if len(trimmed) > self.max_tag_length:
                return Violation(
                    f"tags[{index}]",
                    f"exceeds maximum length ({self.max_tag_length} chars)",
                    value=len(trimmed),
                    bound=self.max_tag_length,
                )
        return None
