"""Day and template state machine.

Every operation here is a pure function of a ``PlannerState`` and returns a new
state; nothing touches storage or the clock. A date is *unresolved* while it
has no ``DayData`` or its ``template_selected`` flag is False, and *resolved*
once a template was applied or the choice was skipped.
"""

from collections.abc import Callable
from dataclasses import dataclass, replace
from datetime import date
from uuid import UUID, uuid4

from fityo.domain.errors import LastMealError
from fityo.domain.nutrition import MacroGoals


@dataclass(frozen=True)
class MealPlan:
    """Meal blueprint stored in a template."""

    name: str
    goals: MacroGoals


@dataclass(frozen=True)
class Meal:
    """A named meal slot within a day."""

    id: UUID
    name: str
    goals: MacroGoals


@dataclass(frozen=True)
class Template:
    """Reusable daily goals and meal structure."""

    id: UUID
    name: str
    is_default: bool
    daily_goals: MacroGoals
    meals: tuple[MealPlan, ...]


@dataclass(frozen=True)
class DayData:
    """Resolved or unresolved goals and meals for one calendar day."""

    day: date
    daily_goals: MacroGoals
    meals: tuple[Meal, ...]
    template_selected: bool


@dataclass(frozen=True)
class PlannerState:
    """Templates, per-day data and the currently selected date of one user."""

    selected_date: date
    templates: tuple[Template, ...] = ()
    days: tuple[DayData, ...] = ()


DEFAULT_GOALS = MacroGoals(calories=2400, protein=180, carbs=200, fat=70)

DEFAULT_MEALS = (
    MealPlan("Breakfast", MacroGoals(calories=600, protein=45, carbs=50, fat=18)),
    MealPlan("Lunch", MacroGoals(calories=800, protein=60, carbs=67, fat=23)),
    MealPlan("Dinner", MacroGoals(calories=800, protein=60, carbs=67, fat=23)),
    MealPlan("Snack", MacroGoals(calories=200, protein=15, carbs=16, fat=6)),
)


def is_future_date(day: date, today: date) -> bool:
    """Return True when the day lies after today."""
    return day > today


def get_day(state: PlannerState, day: date) -> DayData | None:
    """Return the day data for a date, if present."""
    for entry in state.days:
        if entry.day == day:
            return entry
    return None


def needs_template_selection(state: PlannerState, day: date) -> bool:
    """Return True while the date is unresolved."""
    entry = get_day(state, day)
    return entry is None or not entry.template_selected


def get_default_template(state: PlannerState) -> Template | None:
    """Return the default template, if one is marked."""
    return next((t for t in state.templates if t.is_default), None)


def find_template(state: PlannerState, template_id: UUID) -> Template | None:
    """Return a template by id."""
    return next((t for t in state.templates if t.id == template_id), None)


def instantiate_meals(plans: tuple[MealPlan, ...]) -> tuple[Meal, ...]:
    """Create meal instances with fresh ids from blueprints."""
    return tuple(Meal(id=uuid4(), name=plan.name, goals=plan.goals) for plan in plans)


def initialize_day_without_template(state: PlannerState, day: date) -> PlannerState:
    """Create an unresolved day with the fallback goals and meals."""
    if get_day(state, day) is not None:
        return state
    entry = DayData(
        day=day,
        daily_goals=DEFAULT_GOALS,
        meals=instantiate_meals(DEFAULT_MEALS),
        template_selected=False,
    )
    return replace(state, days=(*state.days, entry))


def apply_template_to_day(
    state: PlannerState, day: date, template: Template
) -> PlannerState:
    """Replace the day's goals and meals with copies from the template.

    Clearing the day's food logs is the caller's side of this transition.
    """
    entry = DayData(
        day=day,
        daily_goals=template.daily_goals,
        meals=instantiate_meals(template.meals),
        template_selected=True,
    )
    return _put_day(state, entry)


def skip_template_selection(state: PlannerState, day: date) -> PlannerState:
    """Resolve a day without choosing a template explicitly."""
    existing = get_day(state, day)
    if existing is not None:
        return _put_day(state, replace(existing, template_selected=True))
    default = get_default_template(state)
    entry = DayData(
        day=day,
        daily_goals=default.daily_goals if default else DEFAULT_GOALS,
        meals=instantiate_meals(default.meals if default else DEFAULT_MEALS),
        template_selected=True,
    )
    return _put_day(state, entry)


def resolve_date(state: PlannerState, day: date) -> PlannerState:
    """Resolve an unresolved date with the default template or the fallback."""
    if not needs_template_selection(state, day):
        return state
    default = get_default_template(state)
    if default is not None:
        return apply_template_to_day(state, day, default)
    return skip_template_selection(state, day)


def set_day_goals(state: PlannerState, day: date, goals: MacroGoals) -> PlannerState:
    return _update_day(state, day, lambda entry: replace(entry, daily_goals=goals))


def add_meal_to_day(
    state: PlannerState, day: date, name: str, goals: MacroGoals
) -> PlannerState:
    meal = Meal(id=uuid4(), name=name, goals=goals)
    return _update_day(
        state, day, lambda entry: replace(entry, meals=(*entry.meals, meal))
    )


def update_meal_goals(
    state: PlannerState, day: date, meal_id: UUID, goals: MacroGoals
) -> PlannerState:
    return _update_meal(state, day, meal_id, lambda meal: replace(meal, goals=goals))


def rename_meal(
    state: PlannerState, day: date, meal_id: UUID, name: str
) -> PlannerState:
    """Rename a meal; logs keyed to the old name no longer match it."""
    return _update_meal(state, day, meal_id, lambda meal: replace(meal, name=name))


def delete_meal_from_day(state: PlannerState, day: date, meal_id: UUID) -> PlannerState:
    """Remove a meal, refusing to leave the day without meals."""
    entry = get_day(state, day)
    if entry is None or all(meal.id != meal_id for meal in entry.meals):
        return state
    if len(entry.meals) <= 1:
        raise LastMealError()
    meals = tuple(meal for meal in entry.meals if meal.id != meal_id)
    return _put_day(state, replace(entry, meals=meals))


def reorder_meals_in_day(
    state: PlannerState, day: date, from_index: int, to_index: int
) -> PlannerState:
    """Move the meal at ``from_index`` to ``to_index``."""
    entry = get_day(state, day)
    if entry is None or not 0 <= from_index < len(entry.meals):
        return state
    meals = list(entry.meals)
    moved = meals.pop(from_index)
    meals.insert(max(0, min(to_index, len(meals))), moved)
    return _put_day(state, replace(entry, meals=tuple(meals)))


def select_date(state: PlannerState, day: date, today: date) -> PlannerState:
    """Select a date for viewing; future dates are ignored."""
    if is_future_date(day, today):
        return state
    return replace(state, selected_date=day)


def new_template(
    name: str,
    daily_goals: MacroGoals,
    meals: tuple[MealPlan, ...],
    is_default: bool = False,
) -> Template:
    return Template(
        id=uuid4(),
        name=name,
        is_default=is_default,
        daily_goals=daily_goals,
        meals=meals,
    )


def add_template(state: PlannerState, template: Template) -> PlannerState:
    templates = (*state.templates, template)
    if template.is_default:
        templates = _mark_default(templates, template.id)
    return replace(state, templates=templates)


def update_template(
    state: PlannerState, template_id: UUID, **changes: object
) -> PlannerState:
    """Apply field changes to a template; unknown ids leave the state as is."""
    templates = tuple(
        replace(t, **changes) if t.id == template_id else t for t in state.templates
    )
    if changes.get("is_default"):
        templates = _mark_default(templates, template_id)
    return replace(state, templates=templates)


def delete_template(state: PlannerState, template_id: UUID) -> PlannerState:
    return replace(
        state, templates=tuple(t for t in state.templates if t.id != template_id)
    )


def set_default_template(state: PlannerState, template_id: UUID) -> PlannerState:
    """Mark one template as default and clear the flag on all others."""
    return replace(state, templates=_mark_default(state.templates, template_id))


def _mark_default(
    templates: tuple[Template, ...], template_id: UUID
) -> tuple[Template, ...]:
    return tuple(replace(t, is_default=t.id == template_id) for t in templates)


def _put_day(state: PlannerState, entry: DayData) -> PlannerState:
    if get_day(state, entry.day) is None:
        return replace(state, days=(*state.days, entry))
    return replace(
        state,
        days=tuple(entry if d.day == entry.day else d for d in state.days),
    )


def _update_day(
    state: PlannerState, day: date, change: Callable[[DayData], DayData]
) -> PlannerState:
    entry = get_day(state, day)
    if entry is None:
        return state
    return _put_day(state, change(entry))


def _update_meal(
    state: PlannerState,
    day: date,
    meal_id: UUID,
    change: Callable[[Meal], Meal],
) -> PlannerState:
    return _update_day(
        state,
        day,
        lambda entry: replace(
            entry,
            meals=tuple(
                change(meal) if meal.id == meal_id else meal for meal in entry.meals
            ),
        ),
    )
