"""Food log and weight endpoints."""

from __future__ import annotations

from datetime import date  # noqa: TC003
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from fityo.api.dependencies import current_user_id
from fityo.api.models import FoodLogIn, WeightIn  # noqa: TC001
from fityo.api.serializers import serialize_food_log, serialize_log, serialize_weight

if TYPE_CHECKING:
    from fityo.containers import AppContainer

router = APIRouter(tags=["logs"])


@router.get("/logs")
async def list_logs(
    request: Request,
    day: date | None = Query(default=None, alias="date"),
    start: date | None = None,
    end: date | None = None,
    user_id: UUID = Depends(current_user_id),
) -> dict[str, object]:
    """Return logs for one date, or for an inclusive start/end range."""
    container: AppContainer = request.app.state.container
    if day is not None:
        logs = container.food_log_service.get_logs_for_date(user_id, day)
    elif start is not None and end is not None:
        logs = container.food_log_service.get_logs_for_range(user_id, start, end)
    else:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Pass either date or both start and end",
        )
    return {"logs": [serialize_log(entry) for entry in logs]}


@router.post("/logs", status_code=status.HTTP_201_CREATED)
async def log_food(
    payload: FoodLogIn, request: Request, user_id: UUID = Depends(current_user_id)
) -> dict[str, object]:
    """Log grams of a food against a meal of today."""
    container: AppContainer = request.app.state.container
    log = container.food_log_service.log_food(
        user_id,
        meal_type=payload.meal_type,
        food_id=payload.food_id,
        amount_grams=payload.amount_grams,
        day=payload.logged_at,
    )
    return serialize_food_log(log)


@router.delete("/logs/{log_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_log(
    log_id: UUID, request: Request, user_id: UUID = Depends(current_user_id)
) -> None:
    container: AppContainer = request.app.state.container
    container.food_log_service.delete_food_log(user_id, log_id)


@router.get("/weights")
async def weight_history(
    request: Request,
    start: date | None = None,
    end: date | None = None,
    user_id: UUID = Depends(current_user_id),
) -> dict[str, object]:
    """Return logged weights in ascending date order."""
    container: AppContainer = request.app.state.container
    entries = container.weight_service.get_weight_history(user_id, start, end)
    return {"weights": [serialize_weight(entry) for entry in entries]}


@router.post("/weights")
async def log_weight(
    payload: WeightIn, request: Request, user_id: UUID = Depends(current_user_id)
) -> dict[str, object] | None:
    """Record the weight for a date, overwriting an earlier entry."""
    container: AppContainer = request.app.state.container
    entry = container.weight_service.log_weight(
        user_id, payload.weight, payload.logged_at
    )
    return serialize_weight(entry)


@router.get("/weights/today")
async def today_weight(
    request: Request, user_id: UUID = Depends(current_user_id)
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    entry = container.weight_service.get_today_weight(user_id)
    return {"weight": serialize_weight(entry)}
