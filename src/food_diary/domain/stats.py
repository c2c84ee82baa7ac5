"""Domain models for aggregated nutrition."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

from food_diary.domain.meals import MealType
from food_diary.domain.nutrition import NutrientProfile


@dataclass(frozen=True)
class EntryContribution:
    """Resolved nutrients of a single log entry."""

    entry_id: UUID
    kind: str
    ref_id: UUID
    name: str | None
    weight_g: float | None
    nutrients: NutrientProfile


@dataclass(frozen=True)
class MealSummary:
    """A meal with its total and per-entry breakdown."""

    meal_id: UUID
    meal_type: MealType
    logged_at: datetime
    totals: NutrientProfile
    entries: list[EntryContribution]


@dataclass(frozen=True)
class DishSummary:
    """Derived nutrients of a dish."""

    dish_id: UUID
    name: str
    yield_g: float
    totals: NutrientProfile
    per_100g: NutrientProfile


@dataclass(frozen=True)
class DayTotals:
    """One bucket of a time series."""

    day: date
    totals: NutrientProfile


@dataclass(frozen=True)
class DailySummary:
    """Totals for one calendar day together with its meals."""

    day: date
    totals: NutrientProfile
    meals: list[MealSummary]


@dataclass(frozen=True)
class PeriodSummary:
    """Series, totals and per-day averages for a range of days."""

    start: date
    end: date
    daily: list[DayTotals]
    totals: NutrientProfile
    average: NutrientProfile
