"""Supabase repository for meals and the food catalog."""

from collections.abc import Collection
from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from food_diary.domain.catalog import Dish, FoodItem, Ingredient
from food_diary.domain.meals import LogEntry, Meal, MealType, entry_source
from food_diary.domain.nutrition import NutrientProfile
from food_diary.services.stats import DiaryRepository

_MEAL_COLUMNS = "id, meal_type, logged_at, food_log(id, product_id, recipe_id, weight_g)"
_PRODUCT_COLUMNS = (
    "id, name, calories_per_100g, protein_per_100g, fat_per_100g, carbs_per_100g, "
    "fiber_per_100g, sugar_per_100g, alcohol_per_100g, caffeine_per_100g_mg"
)
_RECIPE_COLUMNS = "id, name, recipe_products(product_id, weight_grams)"


@dataclass
class SupabaseDiaryRepository(DiaryRepository):
    """Supabase-backed read access to meals, products and recipes."""

    client: Client

    def list_meals(self, user_id: UUID, start: datetime, end: datetime) -> list[Meal]:
        """Return meals with entries logged in ``[start, end)``."""
        response = (
            self.client.table("meals")
            .select(_MEAL_COLUMNS)
            .eq("user_id", str(user_id))
            .gte("logged_at", start.isoformat())
            .lt("logged_at", end.isoformat())
            .order("logged_at", desc=False)
            .execute()
        )
        return [_parse_meal(row) for row in response.data or []]

    def get_meal(self, meal_id: UUID) -> Meal | None:
        """Return a meal by id, if present."""
        response = (
            self.client.table("meals")
            .select(_MEAL_COLUMNS)
            .eq("id", str(meal_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_meal(response.data[0])

    def get_food_items(self, ids: Collection[UUID]) -> dict[UUID, FoodItem]:
        """Return products keyed by id."""
        if not ids:
            return {}
        response = (
            self.client.table("products")
            .select(_PRODUCT_COLUMNS)
            .in_("id", [str(food_id) for food_id in ids])
            .execute()
        )
        foods = [_parse_food_item(row) for row in response.data or []]
        return {food.id: food for food in foods}

    def get_dishes_with_ingredients(self, ids: Collection[UUID]) -> dict[UUID, Dish]:
        """Return recipes with their ingredient weights keyed by id."""
        if not ids:
            return {}
        response = (
            self.client.table("recipes")
            .select(_RECIPE_COLUMNS)
            .in_("id", [str(dish_id) for dish_id in ids])
            .execute()
        )
        dishes = [_parse_dish(row) for row in response.data or []]
        return {dish.id: dish for dish in dishes}


def _parse_meal(row: dict[str, object]) -> Meal:
    """Parse a meal row with embedded food log rows."""
    meal_id = UUID(str(row["id"]))
    logged_at_raw = row.get("logged_at")
    logged_at = (
        datetime.fromisoformat(logged_at_raw)
        if isinstance(logged_at_raw, str) and logged_at_raw
        else datetime.min.replace(tzinfo=UTC)
    )
    entries = row.get("food_log") or []
    return Meal(
        id=meal_id,
        meal_type=MealType(str(row.get("meal_type", ""))),
        logged_at=logged_at,
        entries=tuple(_parse_entry(entry, meal_id) for entry in entries),
    )


def _parse_entry(row: dict[str, object], meal_id: UUID) -> LogEntry:
    entry_id = UUID(str(row["id"]))
    return LogEntry(
        id=entry_id,
        meal_id=meal_id,
        source=entry_source(
            entry_id,
            food_item_id=_parse_uuid(row.get("product_id")),
            dish_id=_parse_uuid(row.get("recipe_id")),
            weight_g=_to_optional_float(row.get("weight_g")),
        ),
    )


def _parse_food_item(row: dict[str, object]) -> FoodItem:
    return FoodItem(
        id=UUID(str(row["id"])),
        name=str(row.get("name", "")),
        per_100g=NutrientProfile(
            calories=_to_float(row.get("calories_per_100g")),
            protein_g=_to_float(row.get("protein_per_100g")),
            fat_g=_to_float(row.get("fat_per_100g")),
            carbs_g=_to_float(row.get("carbs_per_100g")),
            fiber_g=_to_float(row.get("fiber_per_100g")),
            sugar_g=_to_float(row.get("sugar_per_100g")),
            alcohol_g=_to_float(row.get("alcohol_per_100g")),
            caffeine_mg=_to_float(row.get("caffeine_per_100g_mg")),
        ),
    )


def _parse_dish(row: dict[str, object]) -> Dish:
    ingredients = []
    for ingredient in row.get("recipe_products") or []:
        food_id = _parse_uuid(ingredient.get("product_id"))
        if food_id is None:
            continue
        ingredients.append(
            Ingredient(
                food_item_id=food_id,
                weight_g=_to_float(ingredient.get("weight_grams")),
            )
        )
    return Dish(
        id=UUID(str(row["id"])),
        name=str(row.get("name", "")),
        ingredients=tuple(ingredients),
    )


def _parse_uuid(value: object) -> UUID | None:
    if value is None:
        return None
    if isinstance(value, UUID):
        return value
    if isinstance(value, str):
        try:
            return UUID(value)
        except ValueError:
            return None
    return None


def _to_optional_float(value: object) -> float | None:
    if isinstance(value, int | float):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _to_float(value: object) -> float:
    number = _to_optional_float(value)
    return number if number is not None else 0.0
