"""Nutrition statistics service over the meal diary."""

import logging
from collections.abc import Collection
from dataclasses import dataclass, replace
from datetime import UTC, date, datetime, time, timedelta
from typing import Protocol
from uuid import UUID
from zoneinfo import ZoneInfo

from food_diary.domain.catalog import Dish, FoodItem
from food_diary.domain.errors import InvalidDateRange
from food_diary.domain.meals import DishRef, FoodItemRef, Meal
from food_diary.domain.nutrition import NutrientProfile
from food_diary.domain.stats import (
    DailySummary,
    DishSummary,
    MealSummary,
    PeriodSummary,
)
from food_diary.services.aggregation import (
    aggregate_day,
    build_series,
    summarize_meal,
    summarize_period,
    zero_fill,
)
from food_diary.services.resolver import (
    DishWeightPolicy,
    resolve_dish,
    resolved_yield,
)

DECEMBER = 12

_logger = logging.getLogger(__name__)


class DiaryRepository(Protocol):
    """Read-only access to meals and the food catalog."""

    def list_meals(self, user_id: UUID, start: datetime, end: datetime) -> list[Meal]:
        """Return meals logged in ``[start, end)`` with entries populated."""

    def get_meal(self, meal_id: UUID) -> Meal | None:
        """Return a meal with its entries, if present."""

    def get_food_items(self, ids: Collection[UUID]) -> dict[UUID, FoodItem]:
        """Return food items by id; unknown ids are absent from the result."""

    def get_dishes_with_ingredients(self, ids: Collection[UUID]) -> dict[UUID, Dish]:
        """Return dishes with resolved ingredient lists by id."""


@dataclass(frozen=True)
class CatalogSnapshot:
    """Food items and dishes referenced by a set of meals."""

    food_items: dict[UUID, FoodItem]
    dishes: dict[UUID, Dish]


@dataclass
class NutritionStatsService:
    """Service for computing nutrition totals in a user's timezone."""

    repository: DiaryRepository
    dish_weight_policy: DishWeightPolicy = DishWeightPolicy.IGNORE
    debug: bool = False

    def get_today(self, user_id: UUID, timezone_name: str) -> DailySummary:
        """Return today's totals and meals in the user's timezone."""
        today = datetime.now(tz=ZoneInfo(timezone_name)).date()
        return self.get_day(user_id, today, timezone_name)

    def get_day(self, user_id: UUID, day: date, timezone_name: str) -> DailySummary:
        """Return totals and meals for one local calendar day."""
        tz = ZoneInfo(timezone_name)
        start, end = _local_bounds(day, day + timedelta(days=1), tz)
        meals = self._list_local_meals(user_id, start, end, tz)
        catalog = self.load_catalog(meals)
        totals = aggregate_day(
            meals,
            catalog.food_items,
            catalog.dishes,
            dish_weight_policy=self.dish_weight_policy,
        )
        summaries = [
            summarize_meal(
                meal,
                catalog.food_items,
                catalog.dishes,
                dish_weight_policy=self.dish_weight_policy,
            )
            for meal in meals
        ]
        return DailySummary(day=day, totals=totals, meals=summaries)

    def get_week(
        self, user_id: UUID, timezone_name: str, *, dense: bool = False
    ) -> PeriodSummary:
        """Return the current calendar week's series, totals and averages."""
        today = datetime.now(tz=ZoneInfo(timezone_name)).date()
        start = today - timedelta(days=today.weekday())
        return self.get_series(
            user_id, start, start + timedelta(days=7), timezone_name, dense=dense
        )

    def get_month(
        self, user_id: UUID, timezone_name: str, *, dense: bool = False
    ) -> PeriodSummary:
        """Return the current calendar month's series, totals and averages."""
        today = datetime.now(tz=ZoneInfo(timezone_name)).date()
        start = today.replace(day=1)
        if start.month == DECEMBER:
            end = start.replace(year=start.year + 1, month=1)
        else:
            end = start.replace(month=start.month + 1)
        return self.get_series(user_id, start, end, timezone_name, dense=dense)

    def get_series(  # noqa: PLR0913
        self,
        user_id: UUID,
        start_day: date,
        end_day: date,
        timezone_name: str,
        *,
        dense: bool = False,
    ) -> PeriodSummary:
        """Return per-day totals for local days in ``[start_day, end_day)``.

        Days without meals are omitted unless ``dense`` is set.
        """
        if end_day <= start_day:
            raise InvalidDateRange("end_day must be after start_day")
        tz = ZoneInfo(timezone_name)
        start, end = _local_bounds(start_day, end_day, tz)
        meals = self._list_local_meals(user_id, start, end, tz)
        catalog = self.load_catalog(meals)
        series = build_series(
            meals,
            start,
            end,
            catalog.food_items,
            catalog.dishes,
            dish_weight_policy=self.dish_weight_policy,
        )
        if dense:
            series = zero_fill(series, start_day, end_day)
        if self.debug:
            _logger.info(
                "Nutrition series: user=%s range=%s..%s meals=%s buckets=%s",
                user_id,
                start_day,
                end_day,
                len(meals),
                len(series),
            )
        return summarize_period(series, start_day, end_day)

    def get_meal(self, meal_id: UUID) -> MealSummary | None:
        """Return a meal with per-entry nutrients."""
        meal = self.repository.get_meal(meal_id)
        if meal is None:
            return None
        catalog = self.load_catalog([meal])
        return summarize_meal(
            meal,
            catalog.food_items,
            catalog.dishes,
            dish_weight_policy=self.dish_weight_policy,
        )

    def get_dish(self, dish_id: UUID) -> DishSummary | None:
        """Return the derived nutrients of a dish."""
        dish = self.repository.get_dishes_with_ingredients([dish_id]).get(dish_id)
        if dish is None:
            return None
        food_ids = {ingredient.food_item_id for ingredient in dish.ingredients}
        food_items = self.repository.get_food_items(food_ids) if food_ids else {}
        totals = resolve_dish(dish, food_items)
        dish_yield = resolved_yield(dish, food_items)
        per_100g = (
            totals.scale(100.0 / dish_yield)
            if dish_yield > 0
            else NutrientProfile.zero()
        )
        return DishSummary(
            dish_id=dish.id,
            name=dish.name,
            yield_g=dish_yield,
            totals=totals,
            per_100g=per_100g,
        )

    def load_catalog(self, meals: list[Meal]) -> CatalogSnapshot:
        """Fetch every food item and dish referenced by the meals."""
        food_ids: set[UUID] = set()
        dish_ids: set[UUID] = set()
        for meal in meals:
            for entry in meal.entries:
                if isinstance(entry.source, FoodItemRef):
                    food_ids.add(entry.source.food_item_id)
                elif isinstance(entry.source, DishRef):
                    dish_ids.add(entry.source.dish_id)

        dishes = (
            self.repository.get_dishes_with_ingredients(dish_ids) if dish_ids else {}
        )
        for dish in dishes.values():
            food_ids.update(ingredient.food_item_id for ingredient in dish.ingredients)
        food_items = self.repository.get_food_items(food_ids) if food_ids else {}
        return CatalogSnapshot(food_items=food_items, dishes=dishes)

    def _list_local_meals(
        self, user_id: UUID, start: datetime, end: datetime, tz: ZoneInfo
    ) -> list[Meal]:
        meals = self.repository.list_meals(
            user_id, start.astimezone(UTC), end.astimezone(UTC)
        )
        return [replace(meal, logged_at=meal.logged_at.astimezone(tz)) for meal in meals]


def _local_bounds(
    start_day: date, end_day: date, tz: ZoneInfo
) -> tuple[datetime, datetime]:
    """Return local midnights for a half-open range of days."""
    return (
        datetime.combine(start_day, time.min, tzinfo=tz),
        datetime.combine(end_day, time.min, tzinfo=tz),
    )
