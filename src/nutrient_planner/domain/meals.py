"""Domain models for meal templates."""

from dataclasses import dataclass, field
from datetime import datetime

from nutrient_planner.domain.enums import MealType
from nutrient_planner.domain.nutrition import MacroNutrients, MicroNutrients


@dataclass(frozen=True)
class MealTemplateFoodItem:
    """A food-and-amount line item with nutrients computed for that amount."""

    food_id: str
    food_name: str
    serving_unit: str
    amount: float
    calories: float
    macros: MacroNutrients
    micros: MicroNutrients = field(default_factory=MicroNutrients)


@dataclass(frozen=True)
class MealTotals:
    """Aggregate totals over a set of line items."""

    calories: float = 0.0
    macros: MacroNutrients = field(default_factory=MacroNutrients)
    micros: MicroNutrients = field(default_factory=MicroNutrients)


@dataclass(frozen=True)
class MealTemplate:
    """A reusable meal combination owned by a user."""

    id: str
    owner_id: str
    name: str
    meal_type: MealType
    food_items: tuple[MealTemplateFoodItem, ...]
    totals: MealTotals
    description: str = ""
    tags: tuple[str, ...] = ()
    is_public: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def total_calories(self) -> float:
        return self.totals.calories

    @property
    def total_macros(self) -> MacroNutrients:
        return self.totals.macros

    @property
    def total_micros(self) -> MicroNutrients:
        return self.totals.micros
