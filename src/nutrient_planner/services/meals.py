"""Meal template composition service."""

import logging
from dataclasses import dataclass, replace
from datetime import UTC, datetime
from typing import Protocol
from uuid import uuid4

from nutrient_planner.domain.enums import MealType
from nutrient_planner.domain.errors import (
    FoodNotFoundError,
    TemplateNotFoundError,
    ValidationError,
    Violation,
)
from nutrient_planner.domain.meals import MealTemplate, MealTemplateFoodItem
from nutrient_planner.domain.nutrition import FoodItem
from nutrient_planner.domain.requests import (
    FoodItemRequest,
    MealTemplateDraft,
    MealTemplateUpdate,
)
from nutrient_planner.services.calculator import (
    build_line_item,
    fold_totals,
    recompute_totals,
)
from nutrient_planner.services.meal_validator import MealValidator

_logger = logging.getLogger(__name__)


class FoodLookup(Protocol):
    """Read access to food definitions by id."""

    def get_food(self, food_id: str) -> FoodItem | None:
        """Return a food by id, if present."""


@dataclass
class MealTemplateService:
    """Builds meal templates and keeps their totals in line with their items."""

    food_lookup: FoodLookup
    validator: MealValidator

    def build_line_items(
        self, requests: list[FoodItemRequest]
    ) -> list[MealTemplateFoodItem]:
        """Resolve and scale every requested food; any failure aborts the batch."""
        items: list[MealTemplateFoodItem] = []
        for request in requests:
            food = self.food_lookup.get_food(request.food_id)
            if food is None:
                raise FoodNotFoundError(request.food_id)
            items.append(build_line_item(food, request.serving_unit, request.amount))
        return items

    def create_template(self, owner_id: str, draft: MealTemplateDraft) -> MealTemplate:
        """Validate a composition request and compute the template."""
        self.validator.validate_create(draft).raise_for_violations()
        items = self.build_line_items(draft.food_items)
        now = datetime.now(tz=UTC)
        template = MealTemplate(
            id=str(uuid4()),
            owner_id=owner_id,
            name=draft.name.strip(),
            description=draft.description,
            meal_type=MealType(draft.meal_type),
            food_items=tuple(items),
            totals=recompute_totals(items),
            tags=tuple(tag.strip() for tag in draft.tags),
            is_public=draft.is_public,
            created_at=now,
            updated_at=now,
        )
        _logger.info(
            "Meal template created: id=%s items=%s calories=%.1f",
            template.id,
            len(items),
            template.total_calories,
        )
        return template

    def add_food_items(
        self, template: MealTemplate, owner_id: str, requests: list[FoodItemRequest]
    ) -> MealTemplate:
        """Append line items, folding them into the existing totals."""
        _ensure_owner(template, owner_id)
        self.validator.validate_add_items(requests).raise_for_violations()
        new_items = self.build_line_items(requests)
        return replace(
            template,
            food_items=template.food_items + tuple(new_items),
            totals=fold_totals(template.totals, new_items),
            updated_at=datetime.now(tz=UTC),
        )

    def update_template(
        self, template: MealTemplate, owner_id: str, update: MealTemplateUpdate
    ) -> MealTemplate:
        """Apply supplied fields; replacing food items recomputes totals."""
        _ensure_owner(template, owner_id)
        self.validator.validate_update(update).raise_for_violations()
        updated = template
        if update.name:
            updated = replace(updated, name=update.name.strip())
        if update.description:
            updated = replace(updated, description=update.description)
        if update.meal_type:
            updated = replace(updated, meal_type=MealType(update.meal_type))
        if update.tags is not None:
            updated = replace(updated, tags=tuple(tag.strip() for tag in update.tags))
        if update.is_public is not None:
            updated = replace(updated, is_public=update.is_public)
        if update.food_items:
            items = self.build_line_items(update.food_items)
            updated = replace(updated, food_items=tuple(items))
            updated = self.recompute_totals(updated)
        return replace(updated, updated_at=datetime.now(tz=UTC))

    def remove_food_item(
        self, template: MealTemplate, owner_id: str, index: int
    ) -> MealTemplate:
        """Remove the line item at a position and recompute totals."""
        _ensure_owner(template, owner_id)
        count = len(template.food_items)
        if not 0 <= index < count:
            raise ValidationError(
                [
                    Violation(
                        "food_items",
                        f"no food item at position {index}",
                        value=index,
                        bound=count - 1,
                    )
                ]
            )
        if count == 1:
            raise ValidationError(
                [Violation("food_items", "at least one food item is required")]
            )
        items = template.food_items[:index] + template.food_items[index + 1 :]
        removed = replace(
            template, food_items=items, updated_at=datetime.now(tz=UTC)
        )
        return self.recompute_totals(removed)

    def recompute_totals(self, template: MealTemplate) -> MealTemplate:
        """Return the template with totals rebuilt from its line items."""
        return replace(template, totals=recompute_totals(template.food_items))

    def ensure_readable(self, template: MealTemplate, user_id: str) -> MealTemplate:
        """Return the template if the user owns it or it is public."""
        if template.owner_id != user_id and not template.is_public:
            raise TemplateNotFoundError(template.id)
        return template


def _ensure_owner(template: MealTemplate, owner_id: str) -> None:
    if template.owner_id != owner_id:
        _logger.warning(
            "User %s does not own meal template %s", owner_id, template.id
        )
        raise TemplateNotFoundError(template.id)
