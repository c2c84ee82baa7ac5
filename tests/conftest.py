"""Shared test fixtures."""

from collections.abc import Collection
from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4

import pytest

from food_diary.config import Settings
from food_diary.containers import AppContainer
from food_diary.domain.catalog import Dish, FoodItem, Ingredient
from food_diary.domain.meals import DishRef, FoodItemRef, LogEntry, Meal, MealType
from food_diary.domain.nutrition import NutrientProfile
from food_diary.services.stats import DiaryRepository, NutritionStatsService
from food_diary.services.user_settings import (
    UserSettingsRepository,
    UserSettingsService,
)


def make_food(name: str, calories: float, protein=0.0, fat=0.0, carbs=0.0) -> FoodItem:
    return FoodItem(
        id=uuid4(),
        name=name,
        per_100g=NutrientProfile(
            calories=calories, protein_g=protein, fat_g=fat, carbs_g=carbs
        ),
    )


def make_dish(name: str, *ingredients: tuple[FoodItem | UUID, float]) -> Dish:
    return Dish(
        id=uuid4(),
        name=name,
        ingredients=tuple(
            Ingredient(
                food_item_id=item.id if isinstance(item, FoodItem) else item,
                weight_g=weight,
            )
            for item, weight in ingredients
        ),
    )


def food_entry(food_id: UUID, weight_g: float | None) -> LogEntry:
    return LogEntry(
        id=uuid4(),
        meal_id=uuid4(),
        source=FoodItemRef(food_item_id=food_id, weight_g=weight_g),
    )


def dish_entry(dish_id: UUID, weight_g: float | None = None) -> LogEntry:
    return LogEntry(
        id=uuid4(),
        meal_id=uuid4(),
        source=DishRef(dish_id=dish_id, weight_g=weight_g),
    )


def make_meal(
    logged_at: datetime,
    *entries: LogEntry,
    meal_type: MealType = MealType.LUNCH,
) -> Meal:
    return Meal(id=uuid4(), meal_type=meal_type, logged_at=logged_at, entries=entries)


@dataclass
class InMemoryDiaryRepository(DiaryRepository):
    """In-memory diary repository for tests."""

    meals: list[Meal] = field(default_factory=list)
    foods: dict[UUID, FoodItem] = field(default_factory=dict)
    dishes: dict[UUID, Dish] = field(default_factory=dict)
    food_queries: list[set[UUID]] = field(default_factory=list)

    def add_foods(self, *foods: FoodItem) -> None:
        for food in foods:
            self.foods[food.id] = food

    def add_dishes(self, *dishes: Dish) -> None:
        for dish in dishes:
            self.dishes[dish.id] = dish

    def list_meals(self, user_id: UUID, start, end) -> list[Meal]:
        return sorted(
            (meal for meal in self.meals if start <= meal.logged_at < end),
            key=lambda meal: meal.logged_at,
        )

    def get_meal(self, meal_id: UUID) -> Meal | None:
        for meal in self.meals:
            if meal.id == meal_id:
                return meal
        return None

    def get_food_items(self, ids: Collection[UUID]) -> dict[UUID, FoodItem]:
        self.food_queries.append(set(ids))
        return {food_id: self.foods[food_id] for food_id in ids if food_id in self.foods}

    def get_dishes_with_ingredients(self, ids: Collection[UUID]) -> dict[UUID, Dish]:
        return {
            dish_id: self.dishes[dish_id] for dish_id in ids if dish_id in self.dishes
        }


@dataclass
class InMemoryUserSettingsRepository(UserSettingsRepository):
    """In-memory user settings repository for tests."""

    timezones: dict[UUID, str] = field(default_factory=dict)

    def get_timezone(self, user_id: UUID) -> str | None:
        return self.timezones.get(user_id)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
    )


@pytest.fixture
def diary_repository() -> InMemoryDiaryRepository:
    return InMemoryDiaryRepository()


@pytest.fixture
def user_settings_repository() -> InMemoryUserSettingsRepository:
    return InMemoryUserSettingsRepository()


@pytest.fixture
def container(
    settings: Settings,
    diary_repository: InMemoryDiaryRepository,
    user_settings_repository: InMemoryUserSettingsRepository,
) -> AppContainer:
    return AppContainer(
        settings=settings,
        stats_service=NutritionStatsService(diary_repository),
        user_settings_service=UserSettingsService(user_settings_repository),
    )
