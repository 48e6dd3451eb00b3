"""Dependency container wiring for the application."""

from dataclasses import dataclass

from nutrient_planner.adapters.memory_food_catalog import InMemoryFoodCatalog
from nutrient_planner.config import Settings
from nutrient_planner.services.food_validator import FoodValidator
from nutrient_planner.services.foods import FoodService
from nutrient_planner.services.meal_validator import MealValidator
from nutrient_planner.services.meals import MealTemplateService
from nutrient_planner.services.plan_validator import PlanValidator
from nutrient_planner.services.plans import MealPlanService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    food_catalog: InMemoryFoodCatalog
    food_service: FoodService
    meal_template_service: MealTemplateService
    meal_plan_service: MealPlanService


def build_validators(
    settings: Settings,
) -> tuple[FoodValidator, MealValidator, PlanValidator]:
    """Create validators configured with the settings' bounds."""
    food_validator = FoodValidator(
        max_name_length=settings.food_max_name_length,
        max_description_length=settings.food_max_description_length,
        max_calories=settings.food_max_calories,
        max_macro_value=settings.food_max_macro_value,
        max_total_macros=settings.food_max_total_macros,
        calories_tolerance=settings.food_calories_tolerance,
        max_gram_equivalent=settings.food_max_gram_equivalent,
        max_image_url_length=settings.food_max_image_url_length,
    )
    meal_validator = MealValidator(
        max_name_length=settings.meal_max_name_length,
        max_description_length=settings.meal_max_description_length,
        max_food_items=settings.meal_max_food_items,
        max_item_amount=settings.meal_max_item_amount,
        max_tags=settings.meal_max_tags,
        max_tag_length=settings.meal_max_tag_length,
    )
    plan_validator = PlanValidator(
        max_name_length=settings.plan_max_name_length,
        max_description_length=settings.plan_max_description_length,
        min_days=settings.plan_min_days,
        max_days=settings.plan_max_days,
        min_calories=settings.plan_min_calories,
        max_calories=settings.plan_max_calories,
    )
    return food_validator, meal_validator, plan_validator


def build_container(
    settings: Settings | None = None,
    food_catalog: InMemoryFoodCatalog | None = None,
) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    catalog = food_catalog or InMemoryFoodCatalog()
    food_validator, meal_validator, plan_validator = build_validators(
        resolved_settings
    )
    food_service = FoodService(repository=catalog, validator=food_validator)
    meal_template_service = MealTemplateService(
        food_lookup=catalog, validator=meal_validator
    )
    meal_plan_service = MealPlanService(
        validator=plan_validator, meal_service=meal_template_service
    )
    return AppContainer(
        settings=resolved_settings,
        food_catalog=catalog,
        food_service=food_service,
        meal_template_service=meal_template_service,
        meal_plan_service=meal_plan_service,
    )
