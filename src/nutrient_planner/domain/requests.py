"""Request records accepted by the validators and services.

Enumerated fields are kept as the raw strings the caller supplied so that
validators can report unknown values instead of failing on construction.
"""

from dataclasses import dataclass, field
from datetime import date

from nutrient_planner.domain.nutrition import MacroNutrients, MicroNutrients
from nutrient_planner.domain.text import LocalizedText


@dataclass(frozen=True)
class ServingSizeInput:
    """Serving size as submitted."""

    unit: str
    amount: float
    gram_equivalent: float
    description: str | None = None


@dataclass(frozen=True)
class FoodDefinition:
    """Food definition as submitted for acceptance."""

    name: LocalizedText
    category: str
    calories: float
    macros: MacroNutrients
    serving_sizes: list[ServingSizeInput]
    micros: MicroNutrients = field(default_factory=MicroNutrients)
    description: LocalizedText | None = None
    visibility: str = "private"
    search_terms: list[str] = field(default_factory=list)
    image_url: str = ""


@dataclass(frozen=True)
class FoodItemRequest:
    """A requested food, unit and amount within a meal."""

    food_id: str
    serving_unit: str
    amount: float


@dataclass(frozen=True)
class MealTemplateDraft:
    """Meal template composition request."""

    name: str
    meal_type: str
    food_items: list[FoodItemRequest]
    description: str = ""
    tags: list[str] = field(default_factory=list)
    is_public: bool = False


@dataclass(frozen=True)
class MealTemplateUpdate:
    """Partial meal template update; None or empty means unchanged."""

    name: str = ""
    description: str = ""
    meal_type: str = ""
    food_items: list[FoodItemRequest] | None = None
    tags: list[str] | None = None
    is_public: bool | None = None


@dataclass(frozen=True)
class MealPlanDraft:
    """Meal plan definition request."""

    name: str
    start_date: date
    end_date: date
    plan_type: str
    goal: str
    target_calories: float
    description: str = ""
    target_macros: MacroNutrients = field(default_factory=MacroNutrients)


@dataclass(frozen=True)
class MealPlanUpdate:
    """Partial meal plan update; None or empty means unchanged."""

    name: str = ""
    description: str = ""
    start_date: date | None = None
    end_date: date | None = None
    plan_type: str = ""
    goal: str = ""
    target_calories: float | None = None
    status: str = ""
