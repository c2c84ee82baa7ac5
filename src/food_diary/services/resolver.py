"""Resolution of log entries and dishes into absolute nutrients."""

import logging
from enum import Enum

from food_diary.domain.catalog import (
    Dish,
    DishLookup,
    FoodItemLookup,
    is_usable_weight,
)
from food_diary.domain.errors import InvalidEntryKind
from food_diary.domain.meals import DishRef, FoodItemRef, LogEntry
from food_diary.domain.nutrition import NutrientProfile, sum_profiles

_logger = logging.getLogger(__name__)


class DishWeightPolicy(str, Enum):
    """How a weight logged against a dish affects its nutrients.

    ``SCALE_TO_YIELD`` treats the weight as a serving of the dish's yield,
    counting only ingredients present in the catalog.
    """

    IGNORE = "ignore"
    SCALE_TO_YIELD = "scale_to_yield"


def resolve_entry(
    entry: LogEntry,
    food_items: FoodItemLookup,
    dishes: DishLookup,
    *,
    dish_weight_policy: DishWeightPolicy = DishWeightPolicy.IGNORE,
) -> NutrientProfile:
    """Return the absolute nutrient contribution of a log entry.

    Dangling references and unusable weights resolve to the zero profile.
    An entry whose source is neither a food item nor a dish reference raises
    ``InvalidEntryKind``.
    """
    source = entry.source
    if isinstance(source, FoodItemRef):
        food = food_items.get(source.food_item_id)
        if food is None:
            _logger.debug(
                "Entry %s references missing food item %s",
                entry.id,
                source.food_item_id,
            )
            return NutrientProfile.zero()
        return scale_per_100g(food.per_100g, source.weight_g)
    if isinstance(source, DishRef):
        dish = dishes.get(source.dish_id)
        if dish is None:
            _logger.debug(
                "Entry %s references missing dish %s", entry.id, source.dish_id
            )
            return NutrientProfile.zero()
        total = resolve_dish(dish, food_items)
        if dish_weight_policy is DishWeightPolicy.SCALE_TO_YIELD:
            return _scale_to_yield(total, dish, food_items, source.weight_g)
        return total
    raise InvalidEntryKind(
        entry.id, f"unsupported entry source {type(source).__name__}"
    )


def resolve_dish(dish: Dish, food_items: FoodItemLookup) -> NutrientProfile:
    """Sum the weighted nutrients of every ingredient in a dish."""
    contributions = []
    for ingredient in dish.ingredients:
        food = food_items.get(ingredient.food_item_id)
        if food is None:
            _logger.debug(
                "Dish %s ingredient references missing food item %s",
                dish.id,
                ingredient.food_item_id,
            )
            continue
        contributions.append(scale_per_100g(food.per_100g, ingredient.weight_g))
    return sum_profiles(contributions)


def scale_per_100g(per_100g: NutrientProfile, weight_g: float | None) -> NutrientProfile:
    """Scale a per-100g profile to an absolute weight."""
    if not is_usable_weight(weight_g):
        return NutrientProfile.zero()
    return per_100g.scale(float(weight_g) / 100.0)


def resolved_yield(dish: Dish, food_items: FoodItemLookup) -> float:
    """Total weight of the ingredients that contribute nutrients."""
    return sum(
        ingredient.weight_g
        for ingredient in dish.ingredients
        if ingredient.food_item_id in food_items
        and is_usable_weight(ingredient.weight_g)
    )


def _scale_to_yield(
    total: NutrientProfile,
    dish: Dish,
    food_items: FoodItemLookup,
    weight_g: float | None,
) -> NutrientProfile:
    # No logged weight means the whole dish was eaten.
    if weight_g is None:
        return total
    if not is_usable_weight(weight_g):
        return NutrientProfile.zero()
    dish_yield = resolved_yield(dish, food_items)
    if dish_yield <= 0:
        return total
    return total.scale(float(weight_g) / dish_yield)
