"""Pydantic models and serializers for the HTTP surface."""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field

from nutrient_planner.domain.errors import Violation
from nutrient_planner.domain.meals import MealTemplate, MealTemplateFoodItem, MealTotals
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


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, allow_inf_nan=False)


class MacroNutrientsPayload(_CamelModel):
    """Macronutrient values."""

    protein: float = 0.0
    carbohydrates: float = 0.0
    fat: float = 0.0
    fiber: float = 0.0
    sugar: float = 0.0

    def to_domain(self) -> MacroNutrients:
        return MacroNutrients(**self.model_dump())


class MicroNutrientsPayload(_CamelModel):
    """Micronutrient values; omitted values are zero."""

    vitamin_a: float = Field(default=0.0, alias="vitaminA")
    vitamin_c: float = Field(default=0.0, alias="vitaminC")
    calcium: float = 0.0
    iron: float = 0.0
    sodium: float = 0.0
    potassium: float = 0.0

    def to_domain(self) -> MicroNutrients:
        return MicroNutrients(**self.model_dump())


class ServingSizePayload(_CamelModel):
    """Serving size payload."""

    unit: str
    amount: float
    gram_equivalent: float = Field(alias="gramEquivalent")
    description: str | None = None


class FoodDefinitionPayload(_CamelModel):
    """Food definition payload."""

    name: dict[str, str]
    description: dict[str, str] | None = None
    category: str
    calories: float
    macros: MacroNutrientsPayload
    micros: MicroNutrientsPayload = Field(default_factory=MicroNutrientsPayload)
    serving_sizes: list[ServingSizePayload] = Field(
        default_factory=list, alias="servingSizes"
    )
    visibility: str = "private"
    search_terms: list[str] = Field(default_factory=list, alias="searchTerms")
    image_url: str = Field(default="", alias="imageUrl")

    def to_domain(self) -> FoodDefinition:
        return FoodDefinition(
            name=LocalizedText(dict(self.name)),
            description=(
                LocalizedText(dict(self.description))
                if self.description is not None
                else None
            ),
            category=self.category,
            calories=self.calories,
            macros=self.macros.to_domain(),
            micros=self.micros.to_domain(),
            serving_sizes=[
                ServingSizeInput(
                    unit=size.unit,
                    amount=size.amount,
                    gram_equivalent=size.gram_equivalent,
                    description=size.description,
                )
                for size in self.serving_sizes
            ],
            visibility=self.visibility,
            search_terms=list(self.search_terms),
            image_url=self.image_url,
        )


class FoodItemRequestPayload(_CamelModel):
    """Requested food within a meal."""

    food_id: str = Field(alias="foodItemId")
    serving_unit: str = Field(alias="servingUnit")
    amount: float

    def to_domain(self) -> FoodItemRequest:
        return FoodItemRequest(
            food_id=self.food_id, serving_unit=self.serving_unit, amount=self.amount
        )


class MealTemplateDraftPayload(_CamelModel):
    """Meal template composition payload."""

    name: str
    description: str = ""
    meal_type: str = Field(alias="mealType")
    food_items: list[FoodItemRequestPayload] = Field(
        default_factory=list, alias="foodItems"
    )
    tags: list[str] = Field(default_factory=list)
    is_public: bool = Field(default=False, alias="isPublic")

    def to_domain(self) -> MealTemplateDraft:
        return MealTemplateDraft(
            name=self.name,
            description=self.description,
            meal_type=self.meal_type,
            food_items=[item.to_domain() for item in self.food_items],
            tags=list(self.tags),
            is_public=self.is_public,
        )


class MealPlanDraftPayload(_CamelModel):
    """Meal plan definition payload."""

    name: str
    description: str = ""
    start_date: date = Field(alias="startDate")
    end_date: date = Field(alias="endDate")
    plan_type: str = Field(alias="planType")
    goal: str
    target_calories: float = Field(alias="targetCalories")
    target_macros: MacroNutrientsPayload = Field(
        default_factory=MacroNutrientsPayload, alias="targetMacros"
    )

    def to_domain(self) -> MealPlanDraft:
        return MealPlanDraft(
            name=self.name,
            description=self.description,
            start_date=self.start_date,
            end_date=self.end_date,
            plan_type=self.plan_type,
            goal=self.goal,
            target_calories=self.target_calories,
            target_macros=self.target_macros.to_domain(),
        )


def macros_to_dict(macros: MacroNutrients) -> dict[str, float]:
    return {
        "protein": macros.protein,
        "carbohydrates": macros.carbohydrates,
        "fat": macros.fat,
        "fiber": macros.fiber,
        "sugar": macros.sugar,
    }


def micros_to_dict(micros: MicroNutrients) -> dict[str, float]:
    return {
        "vitaminA": micros.vitamin_a,
        "vitaminC": micros.vitamin_c,
        "calcium": micros.calcium,
        "iron": micros.iron,
        "sodium": micros.sodium,
        "potassium": micros.potassium,
    }


def serving_size_to_dict(size: ServingSize) -> dict[str, object]:
    return {
        "unit": size.unit.value,
        "amount": size.amount,
        "gramEquivalent": size.gram_equivalent,
        "description": size.description,
    }


def food_to_dict(food: FoodItem) -> dict[str, object]:
    """Serialize a food record for responses."""
    return {
        "id": food.id,
        "userId": food.owner_id,
        "name": dict(food.name.values),
        "description": dict(food.description.values),
        "category": food.category.value,
        "calories": food.calories,
        "macros": macros_to_dict(food.macros),
        "micros": micros_to_dict(food.micros),
        "servingSizes": [serving_size_to_dict(size) for size in food.serving_sizes],
        "visibility": food.visibility.value,
        "searchTerms": list(food.search_terms),
        "imageUrl": food.image_url,
    }


def line_item_to_dict(item: MealTemplateFoodItem) -> dict[str, object]:
    return {
        "foodItemId": item.food_id,
        "foodName": item.food_name,
        "servingUnit": item.serving_unit,
        "amount": item.amount,
        "calories": item.calories,
        "macros": macros_to_dict(item.macros),
        "micros": micros_to_dict(item.micros),
    }


def totals_to_dict(totals: MealTotals) -> dict[str, object]:
    return {
        "totalCalories": totals.calories,
        "totalMacros": macros_to_dict(totals.macros),
        "totalMicros": micros_to_dict(totals.micros),
    }


def template_to_dict(template: MealTemplate) -> dict[str, object]:
    """Serialize a meal template for responses."""
    return {
        "id": template.id,
        "userId": template.owner_id,
        "name": template.name,
        "description": template.description,
        "mealType": template.meal_type.value,
        "foodItems": [line_item_to_dict(item) for item in template.food_items],
        **totals_to_dict(template.totals),
        "tags": list(template.tags),
        "isPublic": template.is_public,
    }


def violation_to_dict(violation: Violation) -> dict[str, object]:
    return violation.to_dict()
