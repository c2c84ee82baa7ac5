"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from food_diary.adapters.supabase_diary_repository import SupabaseDiaryRepository
from food_diary.adapters.supabase_user_settings_repository import (
    SupabaseUserSettingsRepository,
)
from food_diary.config import Settings
from food_diary.services.stats import NutritionStatsService
from food_diary.services.user_settings import UserSettingsService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    stats_service: NutritionStatsService
    user_settings_service: UserSettingsService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    stats_service = NutritionStatsService(
        repository=SupabaseDiaryRepository(supabase_client),
        dish_weight_policy=resolved_settings.dish_entry_weight_policy,
        debug=resolved_settings.debug,
    )
    user_settings_service = UserSettingsService(
        repository=SupabaseUserSettingsRepository(supabase_client),
        default_timezone=resolved_settings.default_timezone,
    )
    return AppContainer(
        settings=resolved_settings,
        stats_service=stats_service,
        user_settings_service=user_settings_service,
    )
