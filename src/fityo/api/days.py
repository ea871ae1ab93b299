"""Day planner, template, selected date and history endpoints."""

from __future__ import annotations

from datetime import date  # noqa: TC003
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Request, status

from fityo.api.dependencies import current_user_id
from fityo.api.models import (  # noqa: TC001
    ApplyTemplateIn,
    MacroGoalsIn,
    MealIn,
    MealUpdate,
    ReorderIn,
    SelectDateIn,
    TemplateIn,
    TemplateUpdate,
)
from fityo.api.serializers import (
    serialize_day,
    serialize_day_view,
    serialize_history,
    serialize_template,
)
from fityo.services.history import Period

if TYPE_CHECKING:
    from fityo.containers import AppContainer

router = APIRouter(tags=["planner"])


@router.get("/days/{day}")
async def day_view(
    day: date, request: Request, user_id: UUID = Depends(current_user_id)
) -> dict[str, object]:
    """Return goals, meals, logged items and progress for a date."""
    container: AppContainer = request.app.state.container
    return serialize_day_view(container.dashboard_service.get_day_view(user_id, day))


@router.post("/days/{day}/resolve")
async def resolve_day(
    day: date, request: Request, user_id: UUID = Depends(current_user_id)
) -> dict[str, object] | None:
    """Resolve today with the default template or the fallback meals."""
    container: AppContainer = request.app.state.container
    return serialize_day(container.day_plan_service.resolve_date(user_id, day))


@router.post("/days/{day}/skip")
async def skip_template(
    day: date, request: Request, user_id: UUID = Depends(current_user_id)
) -> dict[str, object] | None:
    container: AppContainer = request.app.state.container
    return serialize_day(
        container.day_plan_service.skip_template_selection(user_id, day)
    )


@router.post("/days/{day}/template")
async def apply_template(
    day: date,
    payload: ApplyTemplateIn,
    request: Request,
    user_id: UUID = Depends(current_user_id),
) -> dict[str, object] | None:
    """Rebuild the day from a template.

    Logged food is deleted by the switch, so a day with logs needs
    ``confirm: true``.
    """
    container: AppContainer = request.app.state.container
    return serialize_day(
        container.day_plan_service.apply_template(
            user_id, day, payload.template_id, confirmed=payload.confirm
        )
    )


@router.put("/days/{day}/goals")
async def set_day_goals(
    day: date,
    payload: MacroGoalsIn,
    request: Request,
    user_id: UUID = Depends(current_user_id),
) -> dict[str, object] | None:
    container: AppContainer = request.app.state.container
    return serialize_day(
        container.day_plan_service.set_day_goals(user_id, day, payload.to_domain())
    )


@router.post("/days/{day}/meals", status_code=status.HTTP_201_CREATED)
async def add_meal(
    day: date,
    payload: MealIn,
    request: Request,
    user_id: UUID = Depends(current_user_id),
) -> dict[str, object] | None:
    container: AppContainer = request.app.state.container
    return serialize_day(
        container.day_plan_service.add_meal(
            user_id, day, payload.name, payload.goals.to_domain()
        )
    )


@router.post("/days/{day}/meals/reorder")
async def reorder_meals(
    day: date,
    payload: ReorderIn,
    request: Request,
    user_id: UUID = Depends(current_user_id),
) -> dict[str, object] | None:
    container: AppContainer = request.app.state.container
    return serialize_day(
        container.day_plan_service.reorder_meals(
            user_id, day, payload.from_index, payload.to_index
        )
    )


@router.patch("/days/{day}/meals/{meal_id}")
async def update_meal(
    day: date,
    meal_id: UUID,
    payload: MealUpdate,
    request: Request,
    user_id: UUID = Depends(current_user_id),
) -> dict[str, object] | None:
    """Rename a meal or change its goals; renaming hides logs under the old name."""
    container: AppContainer = request.app.state.container
    return serialize_day(
        container.day_plan_service.update_meal(
            user_id,
            day,
            meal_id,
            name=payload.name,
            goals=payload.goals.to_domain() if payload.goals else None,
        )
    )


@router.delete("/days/{day}/meals/{meal_id}")
async def delete_meal(
    day: date,
    meal_id: UUID,
    request: Request,
    user_id: UUID = Depends(current_user_id),
) -> dict[str, object] | None:
    container: AppContainer = request.app.state.container
    return serialize_day(container.day_plan_service.delete_meal(user_id, day, meal_id))


@router.get("/selected-date")
async def get_selected_date(
    request: Request, user_id: UUID = Depends(current_user_id)
) -> dict[str, str]:
    container: AppContainer = request.app.state.container
    selected = container.day_plan_service.get_selected_date(user_id)
    return {"selected_date": selected.isoformat()}


@router.put("/selected-date")
async def select_date(
    payload: SelectDateIn, request: Request, user_id: UUID = Depends(current_user_id)
) -> dict[str, str]:
    """Select a date to view; a future date leaves the selection unchanged."""
    container: AppContainer = request.app.state.container
    selected = container.day_plan_service.select_date(user_id, payload.selected_date)
    return {"selected_date": selected.isoformat()}


@router.get("/templates")
async def list_templates(
    request: Request, user_id: UUID = Depends(current_user_id)
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    templates = container.day_plan_service.list_templates(user_id)
    return {"templates": [serialize_template(template) for template in templates]}


@router.post("/templates", status_code=status.HTTP_201_CREATED)
async def create_template(
    payload: TemplateIn, request: Request, user_id: UUID = Depends(current_user_id)
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    template = container.day_plan_service.create_template(
        user_id,
        name=payload.name,
        daily_goals=payload.daily_goals.to_domain(),
        meals=[meal.to_domain() for meal in payload.meals],
        is_default=payload.is_default,
    )
    return serialize_template(template)


@router.patch("/templates/{template_id}")
async def update_template(
    template_id: UUID,
    payload: TemplateUpdate,
    request: Request,
    user_id: UUID = Depends(current_user_id),
) -> dict[str, object]:
    """Edit a template; days already built from it are not changed."""
    container: AppContainer = request.app.state.container
    template = container.day_plan_service.update_template(
        user_id, template_id, payload.to_changes()
    )
    return serialize_template(template)


@router.delete("/templates/{template_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_template(
    template_id: UUID, request: Request, user_id: UUID = Depends(current_user_id)
) -> None:
    container: AppContainer = request.app.state.container
    container.day_plan_service.delete_template(user_id, template_id)


@router.post("/templates/{template_id}/default")
async def set_default_template(
    template_id: UUID, request: Request, user_id: UUID = Depends(current_user_id)
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    template = container.day_plan_service.set_default_template(user_id, template_id)
    return serialize_template(template)


@router.get("/history")
async def history(
    request: Request,
    period: Period = Period.WEEK,
    user_id: UUID = Depends(current_user_id),
) -> dict[str, object]:
    """Return daily totals, averages and weights for 7d, 30d, 1y or all."""
    container: AppContainer = request.app.state.container
    view = container.history_service.get_history(user_id, period)
    return serialize_history(view)
