"""Structural and numeric-consistency rules for food definitions."""

import logging
import math
from dataclasses import dataclass
from urllib.parse import urlsplit

from nutrient_planner.domain.enums import (
    FoodCategory,
    ServingUnit,
    Visibility,
    choice_values,
)
from nutrient_planner.domain.errors import Violation
from nutrient_planner.domain.nutrition import ServingSize
from nutrient_planner.domain.requests import FoodDefinition, ServingSizeInput
from nutrient_planner.domain.text import Language, LocalizedText
from nutrient_planner.services.calculator import expected_calories
from nutrient_planner.services.validation import (
    ValidationResult,
    check_choice,
    check_range,
    first_violation,
)

_logger = logging.getLogger(__name__)

_URL_SCHEMES = ("http", "https")
_BOUNDED_MACROS = ("protein", "carbohydrates", "fat", "fiber")
_MICROS = ("vitamin_a", "vitamin_c", "calcium", "iron", "sodium", "potassium")
NO_GRAM_BASE_WARNING = "no 100 g gram base serving size found"


@dataclass
class FoodValidator:
    """Gate that decides whether a food definition may be accepted."""

    max_name_length: int = 200
    max_description_length: int = 1000
    max_calories: float = 1000
    max_macro_value: float = 100
    max_total_macros: float = 999
    calories_tolerance: float = 10
    max_gram_equivalent: float = 100000
    max_image_url_length: int = 2048

    def validate(self, food: FoodDefinition) -> ValidationResult:
        """Run every rule stage and collect the first failure of each."""
        result = ValidationResult()
        result.add(self._validate_name(food.name))
        if food.description is not None:
            result.add(self._validate_description(food.description))
        result.add(self._validate_macros(food))
        result.add(
            check_range("calories", food.calories, 0, self.max_calories, "per 100g")
        )
        result.add(self._validate_micros(food))
        result.add(self._validate_serving_sizes(food.serving_sizes, result))
        result.add(self._validate_calories_consistency(food))
        result.add(self._validate_image_url(food.image_url))
        result.add(check_choice("category", FoodCategory, food.category))
        result.add(check_choice("visibility", Visibility, food.visibility))
        return result

    def ensure_valid(self, food: FoodDefinition) -> list[str]:
        """Raise on any violation; return advisories otherwise."""
        result = self.validate(food)
        result.raise_for_violations()
        return result.warnings

    def _validate_name(self, name: LocalizedText) -> Violation | None:
        if name.is_empty():
            return Violation("name", "must have at least one language")
        unsupported = name.unsupported_languages()
        if unsupported:
            return Violation(
                "name",
                f"language '{unsupported[0]}' is not supported",
                value=unsupported[0],
                bound=choice_values(Language),
            )
        if not name.english.strip():
            return Violation("name.en", "must have an English (en) translation")
        for language, value in name.values.items():
            trimmed = value.strip()
            if not trimmed:
                return Violation(f"name.{language}", "cannot be empty", value=value)
            if len(trimmed) > self.max_name_length:
                return Violation(
                    f"name.{language}",
                    f"exceeds maximum length ({self.max_name_length} chars)",
                    value=len(trimmed),
                    bound=self.max_name_length,
                )
        return None

    def _validate_description(self, description: LocalizedText) -> Violation | None:
        unsupported = description.unsupported_languages()
        if unsupported:
            return Violation(
                "description",
                f"language '{unsupported[0]}' is not supported",
                value=unsupported[0],
                bound=choice_values(Language),
            )
        for language, value in description.values.items():
            trimmed = value.strip()
            if trimmed and len(trimmed) > self.max_description_length:
                return Violation(
                    f"description.{language}",
                    f"exceeds maximum length ({self.max_description_length} chars)",
                    value=len(trimmed),
                    bound=self.max_description_length,
                )
        return None

    def _validate_macros(self, food: FoodDefinition) -> Violation | None:
        macros = food.macros
        if macros.protein == 0 and macros.carbohydrates == 0 and macros.fat == 0:
            return Violation(
                "macros",
                "at least one macro nutrient (protein, carbohydrates, or fat) "
                "must be greater than 0",
                value=0,
            )
        violation = first_violation(
            *(
                check_range(
                    f"macros.{name}",
                    getattr(macros, name),
                    0,
                    self.max_macro_value,
                    "g per 100g",
                )
                for name in _BOUNDED_MACROS
            ),
            check_range("macros.sugar", macros.sugar, minimum=0),
        )
        if violation is not None:
            return violation
        total = macros.protein + macros.carbohydrates + macros.fat + macros.fiber
        if total > self.max_total_macros:
            return Violation(
                "macros",
                f"total macros exceed maximum ({self.max_total_macros:g}g per 100g)",
                value=total,
                bound=self.max_total_macros,
            )
        return None

    def _validate_micros(self, food: FoodDefinition) -> Violation | None:
        return first_violation(
            *(
                check_range(f"micros.{name}", getattr(food.micros, name), minimum=0)
                for name in _MICROS
            )
        )

    def _validate_serving_sizes(
        self, sizes: list[ServingSizeInput], result: ValidationResult
    ) -> Violation | None:
        if not sizes:
            return Violation("serving_sizes", "at least one serving size is required")
        has_gram_base = False
        for index, size in enumerate(sizes):
            violation = self._validate_serving_size(index, size)
            if violation is not None:
                return violation
            serving = ServingSize(
                unit=ServingUnit(size.unit),
                amount=size.amount,
                gram_equivalent=size.gram_equivalent,
            )
            has_gram_base = has_gram_base or serving.is_gram_base()
        if not has_gram_base:
            _logger.warning("Food definition has no gram base serving size")
            result.warnings.append(NO_GRAM_BASE_WARNING)
        return None

    def _validate_serving_size(
        self, index: int, size: ServingSizeInput
    ) -> Violation | None:
        prefix = f"serving_sizes[{index}]"
        unit_violation = check_choice(f"{prefix}.unit", ServingUnit, size.unit)
        if unit_violation is not None:
            return unit_violation
        finite_violation = first_violation(
            check_range(f"{prefix}.amount", size.amount),
            check_range(f"{prefix}.gram_equivalent", size.gram_equivalent),
        )
        if finite_violation is not None:
            return finite_violation
        if size.amount <= 0:
            return Violation(
                f"{prefix}.amount", "must be greater than 0", value=size.amount, bound=0
            )
        if size.gram_equivalent <= 0:
            return Violation(
                f"{prefix}.gram_equivalent",
                "must be greater than 0",
                value=size.gram_equivalent,
                bound=0,
            )
        if size.unit == ServingUnit.GRAM and size.amount != size.gram_equivalent:
            return Violation(
                f"{prefix}.gram_equivalent",
                f"for gram unit, amount ({size.amount:.2f}) should equal "
                f"gramEquivalent ({size.gram_equivalent:.2f})",
                value=size.gram_equivalent,
                bound=size.amount,
            )
        if size.gram_equivalent > self.max_gram_equivalent:
            return Violation(
                f"{prefix}.gram_equivalent",
                f"{size.gram_equivalent:.2f} is unreasonably large",
                value=size.gram_equivalent,
                bound=self.max_gram_equivalent,
            )
        return None

    def _validate_calories_consistency(self, food: FoodDefinition) -> Violation | None:
        expected = expected_calories(food.macros)
        if not (math.isfinite(expected) and math.isfinite(food.calories)):
            return None
        diff = food.calories - expected
        if -self.calories_tolerance <= diff <= self.calories_tolerance:
            return None
        return Violation(
            "calories",
            f"calories ({food.calories:.2f}) don't match calculated calories from "
            f"macros ({expected:.2f}). Difference: {diff:.2f}. "
            f"Allowed tolerance: ±{self.calories_tolerance:.2f}",
            value=food.calories,
            bound=expected,
            consistency=True,
        )

    def _validate_image_url(self, url: str) -> Violation | None:
        if not url or not url.strip():
            return None
        try:
            parsed = urlsplit(url)
        except ValueError as exc:
            return Violation("image_url", f"invalid URL format: {exc}", value=url)
        if parsed.scheme not in _URL_SCHEMES:
            return Violation(
                "image_url",
                f"URL must use http or https scheme, got: {parsed.scheme}",
                value=url,
                bound=list(_URL_SCHEMES),
            )
        if not parsed.netloc:
            return Violation("image_url", "URL must have a valid host", value=url)
        if len(url) > self.max_image_url_length:
            return Violation(
                "image_url",
                f"exceeds maximum length ({self.max_image_url_length} chars)",
                value=len(url),
                bound=self.max_image_url_length,
            )
        return None
