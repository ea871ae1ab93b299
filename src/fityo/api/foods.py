"""Food library endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Request, status

from fityo.api.dependencies import current_user_id
from fityo.api.models import FoodIn, FoodUpdate  # noqa: TC001
from fityo.api.serializers import serialize_food

if TYPE_CHECKING:
    from fityo.containers import AppContainer

router = APIRouter(prefix="/foods", tags=["foods"])


@router.get("")
async def list_foods(
    request: Request, user_id: UUID = Depends(current_user_id)
) -> dict[str, object]:
    """Return the user's food library, newest first."""
    container: AppContainer = request.app.state.container
    foods = container.food_library_service.list_foods(user_id)
    return {"foods": [serialize_food(food) for food in foods]}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_food(
    payload: FoodIn, request: Request, user_id: UUID = Depends(current_user_id)
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    food = container.food_library_service.create_food(user_id, payload.model_dump())
    return serialize_food(food)


@router.patch("/{food_id}")
async def update_food(
    food_id: UUID,
    payload: FoodUpdate,
    request: Request,
    user_id: UUID = Depends(current_user_id),
) -> dict[str, object]:
    """Edit a food; past logs are recomputed from the new values."""
    container: AppContainer = request.app.state.container
    food = container.food_library_service.update_food(
        user_id, food_id, payload.model_dump(exclude_none=True)
    )
    return serialize_food(food)


@router.delete("/{food_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_food(
    food_id: UUID, request: Request, user_id: UUID = Depends(current_user_id)
) -> None:
    container: AppContainer = request.app.state.container
    container.food_library_service.delete_food(user_id, food_id)
