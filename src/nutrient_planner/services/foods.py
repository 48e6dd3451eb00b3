"""Food definition acceptance and lookup."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import uuid4

from nutrient_planner.domain.enums import FoodCategory, ServingUnit, Visibility
from nutrient_planner.domain.errors import FoodNotFoundError
from nutrient_planner.domain.nutrition import FoodItem, ServingSize
from nutrient_planner.domain.requests import FoodDefinition
from nutrient_planner.domain.text import LocalizedText
from nutrient_planner.services.food_validator import FoodValidator
from nutrient_planner.services.validation import ValidationResult

_logger = logging.getLogger(__name__)


class FoodRepository(Protocol):
    """Storage interface for accepted foods."""

    def add_food(self, food: FoodItem) -> None:
        """Store an accepted food."""

    def get_food(self, food_id: str) -> FoodItem | None:
        """Return a food by id, if present."""


@dataclass(frozen=True)
class AcceptedFood:
    """A stored food and any advisories raised while accepting it."""

    food: FoodItem
    warnings: list[str]


@dataclass
class FoodService:
    """Application service for food definitions."""

    repository: FoodRepository
    validator: FoodValidator

    def check_definition(self, definition: FoodDefinition) -> ValidationResult:
        """Validate a definition without storing it."""
        return self.validator.validate(definition)

    def create_food(self, owner_id: str, definition: FoodDefinition) -> AcceptedFood:
        """Validate a definition and store the resulting food."""
        warnings = self.validator.ensure_valid(definition)
        food = to_food_item(definition, owner_id=owner_id, food_id=str(uuid4()))
        self.repository.add_food(food)
        _logger.info("Food created: id=%s owner=%s", food.id, owner_id)
        return AcceptedFood(food=food, warnings=warnings)

    def get_food(self, food_id: str) -> FoodItem:
        food = self.repository.get_food(food_id)
        if food is None:
            raise FoodNotFoundError(food_id)
        return food


def to_food_item(definition: FoodDefinition, owner_id: str, food_id: str) -> FoodItem:
    """Convert a validated definition into a food record."""
    return FoodItem(
        id=food_id,
        owner_id=owner_id,
        name=LocalizedText({k: v.strip() for k, v in definition.name.values.items()}),
        description=definition.description or LocalizedText(),
        category=FoodCategory(definition.category),
        calories=definition.calories,
        macros=definition.macros,
        micros=definition.micros,
        serving_sizes=tuple(
            ServingSize(
                unit=ServingUnit(size.unit),
                amount=size.amount,
                gram_equivalent=size.gram_equivalent,
                description=size.description,
            )
            for size in definition.serving_sizes
        ),
        visibility=Visibility(definition.visibility),
        search_terms=tuple(definition.search_terms),
        image_url=definition.image_url.strip() or None,
    )
