"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Every validation bound is tunable; defaults are the canonical rule set.
    """

    environment: str = _ENVIRONMENT
    log_level: str = "INFO"

    food_max_name_length: int = 200
    food_max_description_length: int = 1000
    food_max_calories: float = 1000
    food_max_macro_value: float = 100
    food_max_total_macros: float = 999
    food_calories_tolerance: float = 10
    food_max_gram_equivalent: float = 100000
    food_max_image_url_length: int = 2048

    meal_max_name_length: int = 200
    meal_max_description_length: int = 1000
    meal_max_food_items: int = 50
    meal_max_item_amount: float = 10000
    meal_max_tags: int = 20
    meal_max_tag_length: int = 50

    plan_max_name_length: int = 100
    plan_max_description_length: int = 500
    plan_min_days: int = 1
    plan_max_days: int = 90
    plan_min_calories: float = 500
    plan_max_calories: float = 5000

    model_config = SettingsConfigDict(
        env_prefix="NUTRIENT_",
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
