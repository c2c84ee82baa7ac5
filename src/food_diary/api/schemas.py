"""Pydantic response models for the nutrition API."""

from dataclasses import asdict
from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel

from food_diary.domain.nutrition import NutrientProfile
from food_diary.domain.stats import (
    DailySummary,
    DayTotals,
    DishSummary,
    EntryContribution,
    MealSummary,
    PeriodSummary,
)


class Nutrients(BaseModel):
    """Nutrient amounts."""

    calories: float
    protein_g: float
    fat_g: float
    carbs_g: float
    fiber_g: float = 0.0
    sugar_g: float = 0.0
    alcohol_g: float = 0.0
    caffeine_mg: float = 0.0

    @classmethod
    def from_profile(cls, profile: NutrientProfile) -> "Nutrients":
        return cls(**asdict(profile))


class MacroEnergy(BaseModel):
    """Energy from each macronutrient in kcal."""

    protein_kcal: float
    fat_kcal: float
    carbs_kcal: float

    @classmethod
    def from_profile(cls, profile: NutrientProfile) -> "MacroEnergy":
        return cls(**asdict(profile.energy_split()))


class EntryOut(BaseModel):
    """Nutrients contributed by one log entry."""

    entry_id: UUID
    kind: str
    ref_id: UUID
    name: str | None = None
    weight_g: float | None = None
    nutrients: Nutrients

    @classmethod
    def from_domain(cls, entry: EntryContribution) -> "EntryOut":
        return cls(
            entry_id=entry.entry_id,
            kind=entry.kind,
            ref_id=entry.ref_id,
            name=entry.name,
            weight_g=entry.weight_g,
            nutrients=Nutrients.from_profile(entry.nutrients),
        )


class MealOut(BaseModel):
    """Meal totals and composition."""

    meal_id: UUID
    meal_type: str
    logged_at: datetime
    totals: Nutrients
    energy: MacroEnergy
    entries: list[EntryOut]

    @classmethod
    def from_domain(cls, meal: MealSummary) -> "MealOut":
        return cls(
            meal_id=meal.meal_id,
            meal_type=meal.meal_type.value,
            logged_at=meal.logged_at,
            totals=Nutrients.from_profile(meal.totals),
            energy=MacroEnergy.from_profile(meal.totals),
            entries=[EntryOut.from_domain(entry) for entry in meal.entries],
        )


class DayOut(BaseModel):
    """Totals for one local day."""

    day: date
    timezone: str
    totals: Nutrients
    energy: MacroEnergy
    meals: list[MealOut]

    @classmethod
    def from_domain(cls, summary: DailySummary, timezone: str) -> "DayOut":
        return cls(
            day=summary.day,
            timezone=timezone,
            totals=Nutrients.from_profile(summary.totals),
            energy=MacroEnergy.from_profile(summary.totals),
            meals=[MealOut.from_domain(meal) for meal in summary.meals],
        )


class BucketOut(BaseModel):
    """One day of a series."""

    day: date
    totals: Nutrients

    @classmethod
    def from_domain(cls, bucket: DayTotals) -> "BucketOut":
        return cls(day=bucket.day, totals=Nutrients.from_profile(bucket.totals))


class PeriodOut(BaseModel):
    """Series with totals and per-day averages."""

    start: date
    end: date
    timezone: str
    daily: list[BucketOut]
    totals: Nutrients
    average: Nutrients

    @classmethod
    def from_domain(cls, summary: PeriodSummary, timezone: str) -> "PeriodOut":
        return cls(
            start=summary.start,
            end=summary.end,
            timezone=timezone,
            daily=[BucketOut.from_domain(bucket) for bucket in summary.daily],
            totals=Nutrients.from_profile(summary.totals),
            average=Nutrients.from_profile(summary.average),
        )


class DishOut(BaseModel):
    """Derived nutrients of a dish."""

    dish_id: UUID
    name: str
    yield_g: float
    totals: Nutrients
    per_100g: Nutrients

    @classmethod
    def from_domain(cls, dish: DishSummary) -> "DishOut":
        return cls(
            dish_id=dish.dish_id,
            name=dish.name,
            yield_g=dish.yield_g,
            totals=Nutrients.from_profile(dish.totals),
            per_100g=Nutrients.from_profile(dish.per_100g),
        )
