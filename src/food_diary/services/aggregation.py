"""Meal, day and range aggregation over resolved log entries."""

import logging
from collections.abc import Sequence
from datetime import date, datetime, timedelta

from food_diary.domain.catalog import DishLookup, FoodItemLookup
from food_diary.domain.errors import InvalidEntryKind
from food_diary.domain.meals import DishRef, FoodItemRef, LogEntry, Meal
from food_diary.domain.nutrition import NutrientProfile, sum_profiles
from food_diary.domain.stats import (
    DayTotals,
    EntryContribution,
    MealSummary,
    PeriodSummary,
)
from food_diary.services.resolver import DishWeightPolicy, resolve_entry

_logger = logging.getLogger(__name__)


def aggregate_meal(
    meal: Meal,
    food_items: FoodItemLookup,
    dishes: DishLookup,
    *,
    dish_weight_policy: DishWeightPolicy = DishWeightPolicy.IGNORE,
) -> NutrientProfile:
    """Sum the resolved nutrients of every entry in a meal, in entry order."""
    return sum_profiles(
        resolve_entry(
            entry, food_items, dishes, dish_weight_policy=dish_weight_policy
        )
        for entry in meal.entries
    )


def summarize_meal(
    meal: Meal,
    food_items: FoodItemLookup,
    dishes: DishLookup,
    *,
    dish_weight_policy: DishWeightPolicy = DishWeightPolicy.IGNORE,
) -> MealSummary:
    """Return meal totals along with the contribution of each entry."""
    contributions = [
        _describe_entry(
            entry,
            food_items,
            dishes,
            resolve_entry(
                entry, food_items, dishes, dish_weight_policy=dish_weight_policy
            ),
        )
        for entry in meal.entries
    ]
    return MealSummary(
        meal_id=meal.id,
        meal_type=meal.meal_type,
        logged_at=meal.logged_at,
        totals=sum_profiles(item.nutrients for item in contributions),
        entries=contributions,
    )


def aggregate_day(
    meals: Sequence[Meal],
    food_items: FoodItemLookup,
    dishes: DishLookup,
    *,
    dish_weight_policy: DishWeightPolicy = DishWeightPolicy.IGNORE,
) -> NutrientProfile:
    """Sum meal totals; callers pass meals already restricted to one day."""
    return sum_profiles(
        aggregate_meal(meal, food_items, dishes, dish_weight_policy=dish_weight_policy)
        for meal in meals
    )


def build_series(  # noqa: PLR0913
    meals: Sequence[Meal],
    start: datetime,
    end: datetime,
    food_items: FoodItemLookup,
    dishes: DishLookup,
    *,
    dish_weight_policy: DishWeightPolicy = DishWeightPolicy.IGNORE,
) -> list[DayTotals]:
    """Bucket meals by the calendar date of ``logged_at`` within ``[start, end)``.

    Days without meals are omitted. Buckets are sorted by date and the sum of
    all bucket totals equals ``aggregate_day`` over the same meals.
    """
    buckets: dict[date, list[Meal]] = {}
    for meal in meals:
        if not start <= meal.logged_at < end:
            _logger.warning(
                "Meal %s logged at %s is outside the series range [%s, %s)",
                meal.id,
                meal.logged_at.isoformat(),
                start.isoformat(),
                end.isoformat(),
            )
            continue
        buckets.setdefault(meal.logged_at.date(), []).append(meal)

    return [
        DayTotals(
            day=day,
            totals=aggregate_day(
                buckets[day],
                food_items,
                dishes,
                dish_weight_policy=dish_weight_policy,
            ),
        )
        for day in sorted(buckets)
    ]


def zero_fill(series: Sequence[DayTotals], start: date, end: date) -> list[DayTotals]:
    """Return a dense series over ``[start, end)`` with empty days set to zero."""
    by_day = {bucket.day: bucket for bucket in series}
    dense: list[DayTotals] = []
    day = start
    while day < end:
        dense.append(
            by_day.get(day) or DayTotals(day=day, totals=NutrientProfile.zero())
        )
        day += timedelta(days=1)
    return dense


def summarize_period(
    series: Sequence[DayTotals], start: date, end: date
) -> PeriodSummary:
    """Total a series and average it over every calendar day in ``[start, end)``."""
    totals = sum_profiles(bucket.totals for bucket in series)
    days = max((end - start).days, 1)
    return PeriodSummary(
        start=start,
        end=end,
        daily=list(series),
        totals=totals,
        average=totals.scale(1.0 / days),
    )


def _describe_entry(
    entry: LogEntry,
    food_items: FoodItemLookup,
    dishes: DishLookup,
    nutrients: NutrientProfile,
) -> EntryContribution:
    source = entry.source
    if isinstance(source, FoodItemRef):
        food = food_items.get(source.food_item_id)
        return EntryContribution(
            entry_id=entry.id,
            kind="food_item",
            ref_id=source.food_item_id,
            name=food.name if food else None,
            weight_g=source.weight_g,
            nutrients=nutrients,
        )
    if isinstance(source, DishRef):
        dish = dishes.get(source.dish_id)
        return EntryContribution(
            entry_id=entry.id,
            kind="dish",
            ref_id=source.dish_id,
            name=dish.name if dish else None,
            weight_g=source.weight_g,
            nutrients=nutrients,
        )
    raise InvalidEntryKind(
        entry.id, f"unsupported entry source {type(source).__name__}"
    )
