"""Domain models for logged meals."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from uuid import UUID

from food_diary.domain.errors import InvalidEntryKind


class MealType(str, Enum):
    """Kinds of meals a user can log."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


@dataclass(frozen=True)
class FoodItemRef:
    """Entry source pointing at a food item eaten by weight."""

    food_item_id: UUID
    weight_g: float | None


@dataclass(frozen=True)
class DishRef:
    """Entry source pointing at a dish.

    The weight is recorded as logged but only used when the dish weight
    policy asks for it.
    """

    dish_id: UUID
    weight_g: float | None = None


EntrySource = FoodItemRef | DishRef


@dataclass(frozen=True)
class LogEntry:
    """One line of a meal."""

    id: UUID
    meal_id: UUID
    source: EntrySource


@dataclass(frozen=True)
class Meal:
    """A timestamped, typed group of log entries."""

    id: UUID
    meal_type: MealType
    logged_at: datetime
    entries: tuple[LogEntry, ...] = field(default_factory=tuple)


def entry_source(
    entry_id: UUID | None,
    food_item_id: UUID | None,
    dish_id: UUID | None,
    weight_g: float | None,
) -> EntrySource:
    """Build an entry source from nullable reference columns."""
    if food_item_id is not None and dish_id is not None:
        raise InvalidEntryKind(entry_id, "references both a food item and a dish")
    if food_item_id is not None:
        return FoodItemRef(food_item_id=food_item_id, weight_g=weight_g)
    if dish_id is not None:
        return DishRef(dish_id=dish_id, weight_g=weight_g)
    raise InvalidEntryKind(entry_id, "references neither a food item nor a dish")
