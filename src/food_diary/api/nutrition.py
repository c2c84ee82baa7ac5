"""Nutrition API endpoints."""

from __future__ import annotations

from datetime import date  # noqa: TC003
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, HTTPException, Request, status

from food_diary.api.schemas import DayOut, DishOut, MealOut, PeriodOut
from food_diary.domain.errors import InvalidDateRange
from food_diary.services.user_settings import is_valid_timezone

if TYPE_CHECKING:
    from food_diary.containers import AppContainer

router = APIRouter(tags=["nutrition"])


def _resolve_timezone(container: AppContainer, user_id: UUID, tz: str | None) -> str:
    if tz is None:
        return container.user_settings_service.get_timezone(user_id)
    if not is_valid_timezone(tz):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unknown timezone: {tz}",
        )
    return tz


@router.get("/users/{user_id}/nutrition/today")
async def today(user_id: UUID, request: Request, tz: str | None = None) -> DayOut:
    """Return today's totals and meals."""
    container: AppContainer = request.app.state.container
    timezone = _resolve_timezone(container, user_id, tz)
    summary = container.stats_service.get_today(user_id, timezone)
    return DayOut.from_domain(summary, timezone)


@router.get("/users/{user_id}/nutrition/days/{day}")
async def day_totals(
    user_id: UUID, day: date, request: Request, tz: str | None = None
) -> DayOut:
    """Return totals and meals for a calendar day."""
    container: AppContainer = request.app.state.container
    timezone = _resolve_timezone(container, user_id, tz)
    summary = container.stats_service.get_day(user_id, day, timezone)
    return DayOut.from_domain(summary, timezone)


@router.get("/users/{user_id}/nutrition/week")
async def week(
    user_id: UUID, request: Request, tz: str | None = None, dense: bool = False
) -> PeriodOut:
    """Return the current week's series with averages."""
    container: AppContainer = request.app.state.container
    timezone = _resolve_timezone(container, user_id, tz)
    summary = container.stats_service.get_week(user_id, timezone, dense=dense)
    return PeriodOut.from_domain(summary, timezone)


@router.get("/users/{user_id}/nutrition/month")
async def month(
    user_id: UUID, request: Request, tz: str | None = None, dense: bool = False
) -> PeriodOut:
    """Return the current month's series with averages."""
    container: AppContainer = request.app.state.container
    timezone = _resolve_timezone(container, user_id, tz)
    summary = container.stats_service.get_month(user_id, timezone, dense=dense)
    return PeriodOut.from_domain(summary, timezone)


@router.get("/users/{user_id}/nutrition/series")
async def series(  # noqa: PLR0913
    user_id: UUID,
    start: date,
    end: date,
    request: Request,
    tz: str | None = None,
    dense: bool = False,
) -> PeriodOut:
    """Return per-day totals for days in ``[start, end)``."""
    container: AppContainer = request.app.state.container
    timezone = _resolve_timezone(container, user_id, tz)
    try:
        summary = container.stats_service.get_series(
            user_id, start, end, timezone, dense=dense
        )
    except InvalidDateRange as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    return PeriodOut.from_domain(summary, timezone)


@router.get("/meals/{meal_id}/nutrition")
async def meal_nutrition(meal_id: UUID, request: Request) -> MealOut:
    """Return a meal's totals and per-entry breakdown."""
    container: AppContainer = request.app.state.container
    summary = container.stats_service.get_meal(meal_id)
    if summary is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return MealOut.from_domain(summary)


@router.get("/dishes/{dish_id}/nutrition")
async def dish_nutrition(dish_id: UUID, request: Request) -> DishOut:
    """Return the derived nutrients of a dish."""
    container: AppContainer = request.app.state.container
    summary = container.stats_service.get_dish(dish_id)
    if summary is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return DishOut.from_domain(summary)
