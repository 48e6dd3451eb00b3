"""Nutrition domain models."""

from dataclasses import dataclass, field

from nutrient_planner.domain.enums import FoodCategory, ServingUnit, Visibility
from nutrient_planner.domain.text import LocalizedText

BASELINE_GRAMS = 100.0


@dataclass(frozen=True)
class MacroNutrients:
    """Macronutrients in grams, per 100 g for a baseline or absolute otherwise."""

    protein: float = 0.0
    carbohydrates: float = 0.0
    fat: float = 0.0
    fiber: float = 0.0
    sugar: float = 0.0

    def scaled(self, multiplier: float) -> "MacroNutrients":
        return MacroNutrients(
            protein=self.protein * multiplier,
            carbohydrates=self.carbohydrates * multiplier,
            fat=self.fat * multiplier,
            fiber=self.fiber * multiplier,
            sugar=self.sugar * multiplier,
        )


@dataclass(frozen=True)
class MicroNutrients:
    """Micronutrients; absent values are zero."""

    vitamin_a: float = 0.0
    vitamin_c: float = 0.0
    calcium: float = 0.0
    iron: float = 0.0
    sodium: float = 0.0
    potassium: float = 0.0

    def scaled(self, multiplier: float) -> "MicroNutrients":
        return MicroNutrients(
            vitamin_a=self.vitamin_a * multiplier,
            vitamin_c=self.vitamin_c * multiplier,
            calcium=self.calcium * multiplier,
            iron=self.iron * multiplier,
            sodium=self.sodium * multiplier,
            potassium=self.potassium * multiplier,
        )


@dataclass(frozen=True)
class ServingSize:
    """How many grams one declared serving represents (e.g. 1 cup = 240 g)."""

    unit: ServingUnit
    amount: float
    gram_equivalent: float
    description: str | None = None

    def is_gram_base(self) -> bool:
        """Return True for the canonical 100 g gram serving."""
        return (
            self.unit == ServingUnit.GRAM
            and self.amount == BASELINE_GRAMS
            and self.gram_equivalent == BASELINE_GRAMS
        )


@dataclass(frozen=True)
class FoodItem:
    """An accepted food definition with its per-100g baseline."""

    id: str
    owner_id: str
    name: LocalizedText
    category: FoodCategory
    calories: float
    macros: MacroNutrients
    serving_sizes: tuple[ServingSize, ...]
    micros: MicroNutrients = field(default_factory=MicroNutrients)
    description: LocalizedText = field(default_factory=LocalizedText)
    visibility: Visibility = Visibility.PRIVATE
    search_terms: tuple[str, ...] = ()
    image_url: str | None = None

    @property
    def display_name(self) -> str:
        return self.name.display_name()


@dataclass(frozen=True)
class NutrientAmounts:
    """Calories and nutrients computed for a concrete quantity."""

    calories: float = 0.0
    macros: MacroNutrients = field(default_factory=MacroNutrients)
    micros: MicroNutrients = field(default_factory=MicroNutrients)
