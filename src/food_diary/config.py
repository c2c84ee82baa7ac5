"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from food_diary.services.resolver import DishWeightPolicy

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    default_timezone: str = "UTC"
    dish_entry_weight_policy: DishWeightPolicy = DishWeightPolicy.IGNORE
    debug: bool = False
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
