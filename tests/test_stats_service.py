"""Tests for the nutrition stats service."""

from datetime import UTC, date, datetime, timedelta
from uuid import uuid4

import pytest

from food_diary.domain.errors import InvalidDateRange
from food_diary.domain.meals import MealType
from food_diary.services.resolver import DishWeightPolicy
from food_diary.services.stats import NutritionStatsService
from tests.conftest import (
    InMemoryDiaryRepository,
    dish_entry,
    food_entry,
    make_dish,
    make_food,
    make_meal,
)


@pytest.fixture
def catalog(diary_repository: InMemoryDiaryRepository):
    apple = make_food("Apple", 52, protein=0.3, fat=0.2, carbs=14)
    a = make_food("A", 100)
    b = make_food("B", 200)
    bowl = make_dish("Bowl", (a, 50), (b, 100))
    diary_repository.add_foods(apple, a, b)
    diary_repository.add_dishes(bowl)
    return apple, bowl


def test_get_day_returns_totals_and_meals(
    diary_repository: InMemoryDiaryRepository, catalog
) -> None:
    apple, bowl = catalog
    diary_repository.meals = [
        make_meal(
            datetime(2024, 1, 1, 8, tzinfo=UTC),
            food_entry(apple.id, 150),
            meal_type=MealType.BREAKFAST,
        ),
        make_meal(datetime(2024, 1, 1, 13, tzinfo=UTC), dish_entry(bowl.id)),
        make_meal(datetime(2024, 1, 2, 13, tzinfo=UTC), dish_entry(bowl.id)),
    ]
    service = NutritionStatsService(diary_repository)

    summary = service.get_day(uuid4(), date(2024, 1, 1), "UTC")

    assert summary.day == date(2024, 1, 1)
    assert summary.totals.calories == pytest.approx(328)
    assert [meal.meal_type for meal in summary.meals] == [
        MealType.BREAKFAST,
        MealType.LUNCH,
    ]


def test_get_day_uses_local_midnight(
    diary_repository: InMemoryDiaryRepository, catalog
) -> None:
    apple, _ = catalog
    diary_repository.meals = [
        make_meal(datetime(2024, 1, 1, 23, 30, tzinfo=UTC), food_entry(apple.id, 100))
    ]
    service = NutritionStatsService(diary_repository)

    utc_day = service.get_day(uuid4(), date(2024, 1, 1), "UTC")
    berlin_day = service.get_day(uuid4(), date(2024, 1, 2), "Europe/Berlin")

    assert utc_day.totals.calories == pytest.approx(52)
    assert berlin_day.totals.calories == pytest.approx(52)
    assert berlin_day.meals[0].logged_at.hour == 0


def test_get_series_buckets_by_local_date(
    diary_repository: InMemoryDiaryRepository, catalog
) -> None:
    apple, bowl = catalog
    diary_repository.meals = [
        make_meal(datetime(2024, 1, 1, 9, tzinfo=UTC), food_entry(apple.id, 150)),
        make_meal(datetime(2024, 1, 1, 19, tzinfo=UTC), dish_entry(bowl.id)),
        make_meal(datetime(2024, 1, 2, 12, tzinfo=UTC), dish_entry(bowl.id)),
    ]
    service = NutritionStatsService(diary_repository)

    summary = service.get_series(uuid4(), date(2024, 1, 1), date(2024, 1, 4), "UTC")

    assert [bucket.day for bucket in summary.daily] == [
        date(2024, 1, 1),
        date(2024, 1, 2),
    ]
    assert summary.daily[0].totals.calories == pytest.approx(328)
    assert summary.totals.calories == pytest.approx(578)
    assert summary.average.calories == pytest.approx(578 / 3)


def test_get_series_dense_fills_empty_days(
    diary_repository: InMemoryDiaryRepository, catalog
) -> None:
    apple, _ = catalog
    diary_repository.meals = [
        make_meal(datetime(2024, 1, 1, 9, tzinfo=UTC), food_entry(apple.id, 100))
    ]
    service = NutritionStatsService(diary_repository)

    summary = service.get_series(
        uuid4(), date(2024, 1, 1), date(2024, 1, 4), "UTC", dense=True
    )

    assert len(summary.daily) == 3
    assert summary.daily[2].totals.calories == 0


def test_get_series_rejects_empty_range(
    diary_repository: InMemoryDiaryRepository,
) -> None:
    service = NutritionStatsService(diary_repository)

    with pytest.raises(InvalidDateRange, match="end_day"):
        service.get_series(uuid4(), date(2024, 1, 2), date(2024, 1, 2), "UTC")


def test_get_today_aggregates_by_timezone(
    diary_repository: InMemoryDiaryRepository, catalog
) -> None:
    apple, _ = catalog
    now = datetime.now(tz=UTC)
    diary_repository.meals = [
        make_meal(now, food_entry(apple.id, 200)),
        make_meal(now - timedelta(days=1), food_entry(apple.id, 500)),
    ]
    service = NutritionStatsService(diary_repository)

    summary = service.get_today(uuid4(), "UTC")

    assert summary.totals.calories == pytest.approx(104)


def test_get_week_spans_seven_days(diary_repository: InMemoryDiaryRepository) -> None:
    service = NutritionStatsService(diary_repository)

    summary = service.get_week(uuid4(), "UTC")

    assert (summary.end - summary.start).days == 7
    assert summary.start.weekday() == 0


def test_get_month_starts_on_first_day(
    diary_repository: InMemoryDiaryRepository,
) -> None:
    service = NutritionStatsService(diary_repository)

    summary = service.get_month(uuid4(), "UTC", dense=True)

    assert summary.start.day == 1
    assert summary.end.day == 1
    assert len(summary.daily) == (summary.end - summary.start).days


def test_get_meal_returns_breakdown(
    diary_repository: InMemoryDiaryRepository, catalog
) -> None:
    apple, bowl = catalog
    meal = make_meal(
        datetime(2024, 1, 1, 9, tzinfo=UTC),
        food_entry(apple.id, 150),
        dish_entry(bowl.id),
    )
    diary_repository.meals = [meal]
    service = NutritionStatsService(diary_repository)

    summary = service.get_meal(meal.id)

    assert summary is not None
    assert summary.totals.calories == pytest.approx(328)
    assert len(summary.entries) == 2
    assert service.get_meal(uuid4()) is None


def test_get_dish_reports_yield_and_density(
    diary_repository: InMemoryDiaryRepository, catalog
) -> None:
    _, bowl = catalog
    service = NutritionStatsService(diary_repository)

    summary = service.get_dish(bowl.id)

    assert summary is not None
    assert summary.name == "Bowl"
    assert summary.yield_g == 150
    assert summary.totals.calories == pytest.approx(250)
    assert summary.per_100g.calories == pytest.approx(250 / 1.5)
    assert service.get_dish(uuid4()) is None


def test_get_dish_yield_skips_missing_ingredients(
    diary_repository: InMemoryDiaryRepository,
) -> None:
    a = make_food("A", 100)
    dish = make_dish("Bowl", (a, 50), (uuid4(), 150))
    diary_repository.add_foods(a)
    diary_repository.add_dishes(dish)
    service = NutritionStatsService(diary_repository)

    summary = service.get_dish(dish.id)

    assert summary is not None
    assert summary.yield_g == 50
    assert summary.totals.calories == pytest.approx(50)
    assert summary.per_100g.calories == pytest.approx(100)


def test_load_catalog_fetches_dish_ingredients_in_one_query(
    diary_repository: InMemoryDiaryRepository, catalog
) -> None:
    apple, bowl = catalog
    meal = make_meal(
        datetime(2024, 1, 1, 9, tzinfo=UTC),
        food_entry(apple.id, 150),
        dish_entry(bowl.id),
    )
    service = NutritionStatsService(diary_repository)

    snapshot = service.load_catalog([meal])

    assert len(diary_repository.food_queries) == 1
    assert set(snapshot.food_items) == {apple.id} | {
        ingredient.food_item_id for ingredient in bowl.ingredients
    }
    assert set(snapshot.dishes) == {bowl.id}


def test_scale_to_yield_policy_applies_to_day_totals(
    diary_repository: InMemoryDiaryRepository, catalog
) -> None:
    _, bowl = catalog
    diary_repository.meals = [
        make_meal(datetime(2024, 1, 1, 9, tzinfo=UTC), dish_entry(bowl.id, 75))
    ]
    service = NutritionStatsService(
        diary_repository, dish_weight_policy=DishWeightPolicy.SCALE_TO_YIELD
    )

    summary = service.get_day(uuid4(), date(2024, 1, 1), "UTC")

    assert summary.totals.calories == pytest.approx(125)
