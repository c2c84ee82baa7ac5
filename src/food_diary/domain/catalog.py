"""Catalog domain models: food items and dishes."""

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from uuid import UUID

from food_diary.domain.nutrition import NutrientProfile


@dataclass(frozen=True)
class FoodItem:
    """A catalog food with nutrients defined per 100 grams."""

    id: UUID
    name: str
    per_100g: NutrientProfile


@dataclass(frozen=True)
class Ingredient:
    """One weighted food item inside a dish."""

    food_item_id: UUID
    weight_g: float


@dataclass(frozen=True)
class Dish:
    """A named composition of weighted food items."""

    id: UUID
    name: str
    ingredients: tuple[Ingredient, ...] = field(default_factory=tuple)

    @property
    def yield_g(self) -> float:
        """Total weight of all valid ingredients, whether or not they resolve."""
        return sum(
            ingredient.weight_g
            for ingredient in self.ingredients
            if is_usable_weight(ingredient.weight_g)
        )


FoodItemLookup = Mapping[UUID, FoodItem]
DishLookup = Mapping[UUID, Dish]


def is_usable_weight(value: float | None) -> bool:
    """Return True for finite, strictly positive weights."""
    if value is None:
        return False
    try:
        number = float(value)
    except (TypeError, ValueError):
        return False
    return math.isfinite(number) and number > 0
