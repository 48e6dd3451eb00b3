"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import date

import pytest

from nutrient_planner.adapters.memory_food_catalog import InMemoryFoodCatalog
from nutrient_planner.config import Settings
from nutrient_planner.containers import AppContainer, build_container
from nutrient_planner.domain.enums import FoodCategory, ServingUnit, Visibility
from nutrient_planner.domain.nutrition import (
    FoodItem,
    MacroNutrients,
    MicroNutrients,
    ServingSize,
)
from nutrient_planner.domain.requests import (
    FoodDefinition,
    FoodItemRequest,
    MealPlanDraft,
    MealTemplateDraft,
    ServingSizeInput,
)
from nutrient_planner.domain.text import LocalizedText
from nutrient_planner.services.meal_validator import MealValidator
from nutrient_planner.services.meals import FoodLookup, MealTemplateService
from nutrient_planner.services.plan_validator import PlanValidator
from nutrient_planner.services.plans import MealPlanService

TODAY = date(2030, 1, 1)
OWNER_ID = "user-1"


def make_definition(**overrides: object) -> FoodDefinition:
    """Return a valid apple definition with optional field overrides."""
    definition = FoodDefinition(
        name=LocalizedText({"en": "Apple", "vi": "Táo"}),
        category="fruit",
        calories=63.8,
        macros=MacroNutrients(
            protein=0.3, carbohydrates=14.0, fat=0.2, fiber=2.4, sugar=10.4
        ),
        micros=MicroNutrients(vitamin_c=4.6, potassium=107),
        serving_sizes=[
            ServingSizeInput(unit="gram", amount=100, gram_equivalent=100),
            ServingSizeInput(
                unit="piece", amount=1, gram_equivalent=182, description="medium"
            ),
        ],
        visibility="public",
    )
    return replace(definition, **overrides)


def make_apple(food_id: str = "apple") -> FoodItem:
    return FoodItem(
        id=food_id,
        owner_id=OWNER_ID,
        name=LocalizedText({"en": "Apple", "vi": "Táo"}),
        category=FoodCategory.FRUIT,
        calories=63.8,
        macros=MacroNutrients(
            protein=0.3, carbohydrates=14.0, fat=0.2, fiber=2.4, sugar=10.4
        ),
        micros=MicroNutrients(vitamin_c=4.6, potassium=107),
        serving_sizes=(
            ServingSize(ServingUnit.GRAM, 100, 100),
            ServingSize(ServingUnit.PIECE, 1, 182, "medium"),
            ServingSize(ServingUnit.CUP, 1, 125),
        ),
        visibility=Visibility.PUBLIC,
    )


def make_rice(food_id: str = "rice") -> FoodItem:
    return FoodItem(
        id=food_id,
        owner_id=OWNER_ID,
        name=LocalizedText({"en": "White rice"}),
        category=FoodCategory.GRAIN,
        calories=130,
        macros=MacroNutrients(protein=2.7, carbohydrates=28.0, fat=0.3, fiber=0.4),
        micros=MicroNutrients(sodium=1, iron=0.2),
        serving_sizes=(
            ServingSize(ServingUnit.GRAM, 100, 100),
            ServingSize(ServingUnit.CUP, 1, 158),
        ),
    )


def make_chicken(food_id: str = "chicken") -> FoodItem:
    return FoodItem(
        id=food_id,
        owner_id=OWNER_ID,
        name=LocalizedText({"en": "Chicken breast", "vi": "Ức gà"}),
        category=FoodCategory.PROTEIN,
        calories=165,
        macros=MacroNutrients(protein=31.0, fat=3.6),
        micros=MicroNutrients(sodium=74, potassium=256),
        serving_sizes=(
            ServingSize(ServingUnit.GRAM, 100, 100),
            ServingSize(ServingUnit.KG, 1, 1000),
        ),
    )


def make_template_draft(**overrides: object) -> MealTemplateDraft:
    draft = MealTemplateDraft(
        name="Chicken and rice",
        meal_type="lunch",
        food_items=[
            FoodItemRequest(food_id="chicken", serving_unit="gram", amount=150),
            FoodItemRequest(food_id="rice", serving_unit="cup", amount=1),
        ],
        tags=["high-protein"],
    )
    return replace(draft, **overrides)


def make_plan_draft(**overrides: object) -> MealPlanDraft:
    draft = MealPlanDraft(
        name="January cut",
        start_date=TODAY,
        end_date=date(2030, 1, 7),
        plan_type="weekly",
        goal="weight_loss",
        target_calories=1800,
    )
    return replace(draft, **overrides)


@dataclass
class RecordingFoodLookup(FoodLookup):
    """Food lookup that records requested ids."""

    foods: dict[str, FoodItem] = field(default_factory=dict)
    requested: list[str] = field(default_factory=list)

    def get_food(self, food_id: str) -> FoodItem | None:
        self.requested.append(food_id)
        return self.foods.get(food_id)


@pytest.fixture
def food_lookup() -> RecordingFoodLookup:
    foods = [make_apple(), make_rice(), make_chicken()]
    return RecordingFoodLookup(foods={food.id: food for food in foods})


@pytest.fixture
def meal_service(food_lookup: RecordingFoodLookup) -> MealTemplateService:
    return MealTemplateService(food_lookup=food_lookup, validator=MealValidator())


@pytest.fixture
def plan_service(meal_service: MealTemplateService) -> MealPlanService:
    return MealPlanService(validator=PlanValidator(), meal_service=meal_service)


@pytest.fixture
def settings() -> Settings:
    return Settings(log_level="DEBUG")


@pytest.fixture
def container(settings: Settings) -> AppContainer:
    return build_container(settings, food_catalog=InMemoryFoodCatalog())
