"""Tests for food definition validation."""

import math

import pytest

from nutrient_planner.domain.errors import ConsistencyError, ValidationError
from nutrient_planner.domain.nutrition import MacroNutrients, MicroNutrients
from nutrient_planner.domain.requests import ServingSizeInput
from nutrient_planner.domain.text import LocalizedText
from nutrient_planner.services.food_validator import (
    NO_GRAM_BASE_WARNING,
    FoodValidator,
)
from tests.conftest import make_definition


def test_valid_definition_is_accepted() -> None:
    result = FoodValidator().validate(make_definition())

    assert result.is_valid
    assert result.warnings == []


def test_declared_calories_must_match_macros() -> None:
    definition = make_definition(
        calories=160,
        macros=MacroNutrients(protein=10, carbohydrates=20, fat=5, fiber=3),
    )

    with pytest.raises(ConsistencyError) as exc_info:
        FoodValidator().ensure_valid(definition)

    [violation] = exc_info.value.violations
    assert violation.field == "calories"
    assert violation.consistency
    assert violation.value == 160
    assert violation.bound == pytest.approx(171)


def test_calories_within_tolerance_pass() -> None:
    definition = make_definition(
        calories=180,
        macros=MacroNutrients(protein=10, carbohydrates=20, fat=5, fiber=3),
    )

    assert FoodValidator().validate(definition).is_valid


def test_tolerance_is_configurable() -> None:
    definition = make_definition(
        calories=175,
        macros=MacroNutrients(protein=10, carbohydrates=20, fat=5, fiber=3),
    )

    assert not FoodValidator(calories_tolerance=2).validate(definition).is_valid


def test_all_zero_primary_macros_rejected() -> None:
    definition = make_definition(
        calories=10, macros=MacroNutrients(fiber=5), micros=MicroNutrients()
    )

    result = FoodValidator().validate(definition)

    assert [v.field for v in result.violations] == ["macros"]


def test_mixed_failures_raise_validation_error() -> None:
    definition = make_definition(
        macros=MacroNutrients(protein=101, carbohydrates=14, fat=0.2)
    )

    with pytest.raises(ValidationError) as exc_info:
        FoodValidator().ensure_valid(definition)

    assert not isinstance(exc_info.value, ConsistencyError)
    assert exc_info.value.fields == ["macros.protein", "calories"]


def test_each_stage_reports_once() -> None:
    definition = make_definition(
        name=LocalizedText({"vi": "Táo"}),
        category="candy",
        visibility="friends",
    )

    result = FoodValidator().validate(definition)

    assert [v.field for v in result.violations] == [
        "name.en",
        "category",
        "visibility",
    ]


@pytest.mark.parametrize(
    ("name", "field"),
    [
        ({}, "name"),
        ({"en": "Apple", "fr": "Pomme"}, "name"),
        ({"en": "   "}, "name.en"),
        ({"en": "Apple", "vi": " "}, "name.vi"),
        ({"en": "x" * 201}, "name.en"),
    ],
)
def test_name_rules(name: dict[str, str], field: str) -> None:
    result = FoodValidator().validate(make_definition(name=LocalizedText(name)))

    assert [v.field for v in result.violations] == [field]


def test_name_is_trimmed_before_length_check() -> None:
    name = LocalizedText({"en": "  " + "x" * 200 + "  "})

    assert FoodValidator().validate(make_definition(name=name)).is_valid


def test_description_rules() -> None:
    validator = FoodValidator()
    blank = make_definition(description=LocalizedText({"en": "  "}))
    too_long = make_definition(description=LocalizedText({"vi": "y" * 1001}))

    assert validator.validate(blank).is_valid
    assert [v.field for v in validator.validate(too_long).violations] == [
        "description.vi"
    ]


def test_negative_sugar_and_micros_rejected() -> None:
    definition = make_definition(
        macros=MacroNutrients(protein=0.3, carbohydrates=14.0, fat=0.2, sugar=-1),
        micros=MicroNutrients(sodium=-0.5),
        calories=58.8,
    )

    result = FoodValidator().validate(definition)

    assert [v.field for v in result.violations] == ["macros.sugar", "micros.sodium"]


def test_calories_above_cap_rejected() -> None:
    definition = make_definition(
        calories=1001,
        macros=MacroNutrients(fat=100, carbohydrates=25, protein=0.25),
    )

    result = FoodValidator().validate(definition)

    assert [v.field for v in result.violations] == ["calories"]
    assert "exceeds maximum" in result.violations[0].message
    assert not result.violations[0].consistency


def test_gram_serving_must_equal_gram_equivalent() -> None:
    definition = make_definition(
        serving_sizes=[ServingSizeInput(unit="gram", amount=100, gram_equivalent=150)]
    )

    result = FoodValidator().validate(definition)

    assert [v.field for v in result.violations] == ["serving_sizes[0].gram_equivalent"]


@pytest.mark.parametrize(
    ("size", "field"),
    [
        (ServingSizeInput("spoon", 1, 15), "serving_sizes[1].unit"),
        (ServingSizeInput("cup", 0, 240), "serving_sizes[1].amount"),
        (ServingSizeInput("cup", 1, -5), "serving_sizes[1].gram_equivalent"),
        (ServingSizeInput("kg", 1, 100001), "serving_sizes[1].gram_equivalent"),
    ],
)
def test_serving_size_rules(size: ServingSizeInput, field: str) -> None:
    definition = make_definition(
        serving_sizes=[ServingSizeInput("gram", 100, 100), size]
    )

    result = FoodValidator().validate(definition)

    assert [v.field for v in result.violations] == [field]


def test_serving_sizes_required() -> None:
    result = FoodValidator().validate(make_definition(serving_sizes=[]))

    assert [v.field for v in result.violations] == ["serving_sizes"]


def test_missing_gram_base_is_advisory() -> None:
    definition = make_definition(
        serving_sizes=[ServingSizeInput(unit="piece", amount=1, gram_equivalent=182)]
    )

    warnings = FoodValidator().ensure_valid(definition)

    assert warnings == [NO_GRAM_BASE_WARNING]


@pytest.mark.parametrize(
    "url",
    [
        "ftp://cdn.example.com/apple.png",
        "https:///apple.png",
        "https://cdn.example.com/" + "a" * 2100,
    ],
)
def test_image_url_rules(url: str) -> None:
    result = FoodValidator().validate(make_definition(image_url=url))

    assert [v.field for v in result.violations] == ["image_url"]


def test_blank_image_url_allowed() -> None:
    validator = FoodValidator()

    assert validator.validate(make_definition(image_url="  ")).is_valid
    assert validator.validate(
        make_definition(image_url="https://cdn.example.com/apple.png")
    ).is_valid


@pytest.mark.parametrize(
    ("size", "field"),
    [
        (ServingSizeInput("cup", math.nan, math.nan), "serving_sizes[1].amount"),
        (ServingSizeInput("cup", 1, math.inf), "serving_sizes[1].gram_equivalent"),
    ],
)
def test_non_finite_serving_sizes_rejected(size: ServingSizeInput, field: str) -> None:
    definition = make_definition(
        serving_sizes=[ServingSizeInput("gram", 100, 100), size]
    )

    result = FoodValidator().validate(definition)

    assert [v.field for v in result.violations] == [field]
    assert result.violations[0].message == "must be a finite number"


def test_non_finite_nutrients_rejected() -> None:
    validator = FoodValidator()

    nan_calories = validator.validate(make_definition(calories=math.nan))
    nan_micros = validator.validate(
        make_definition(micros=MicroNutrients(iron=math.nan))
    )
    nan_macros = validator.validate(
        make_definition(
            macros=MacroNutrients(protein=0.3, carbohydrates=14.0, fat=math.nan)
        )
    )

    assert [v.field for v in nan_calories.violations] == ["calories"]
    assert [v.field for v in nan_micros.violations] == ["micros.iron"]
    assert [v.field for v in nan_macros.violations] == ["macros.fat"]
