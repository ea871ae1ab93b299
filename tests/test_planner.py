"""Tests for the day/template state machine."""

from dataclasses import replace
from datetime import date

import pytest

from fityo.domain import planner
from fityo.domain.errors import LastMealError
from fityo.domain.nutrition import MacroGoals
from fityo.domain.planner import (
    DEFAULT_GOALS,
    DEFAULT_MEALS,
    MealPlan,
    PlannerState,
)

DAY = date(2025, 3, 10)

CUT_GOALS = MacroGoals(calories=1800, protein=170, carbs=150, fat=55)
CUT_MEALS = (
    MealPlan("Breakfast", MacroGoals(calories=500, protein=50, carbs=40, fat=15)),
    MealPlan("Dinner", MacroGoals(calories=1300, protein=120, carbs=110, fat=40)),
)


def _state() -> PlannerState:
    return PlannerState(selected_date=DAY)


def _with_template(is_default: bool = True) -> tuple[PlannerState, planner.Template]:
    template = planner.new_template("Cut", CUT_GOALS, CUT_MEALS, is_default)
    return planner.add_template(_state(), template), template


def test_new_date_needs_template_selection() -> None:
    assert planner.needs_template_selection(_state(), DAY)


def test_initialize_without_template_uses_fallback_and_stays_unresolved() -> None:
    state = planner.initialize_day_without_template(_state(), DAY)

    day = planner.get_day(state, DAY)
    assert day is not None
    assert day.daily_goals == DEFAULT_GOALS
    assert [meal.name for meal in day.meals] == [m.name for m in DEFAULT_MEALS]
    assert planner.needs_template_selection(state, DAY)


def test_initialize_keeps_existing_day() -> None:
    state = planner.initialize_day_without_template(_state(), DAY)

    assert planner.initialize_day_without_template(state, DAY) is state


def test_apply_template_copies_goals_and_meals_with_fresh_ids() -> None:
    state, template = _with_template()

    first = planner.apply_template_to_day(state, DAY, template)
    second = planner.apply_template_to_day(first, DAY, template)

    day = planner.get_day(second, DAY)
    assert day is not None
    assert day.template_selected
    assert day.daily_goals == CUT_GOALS
    assert [meal.name for meal in day.meals] == ["Breakfast", "Dinner"]
    first_ids = {meal.id for meal in planner.get_day(first, DAY).meals}
    assert first_ids.isdisjoint(meal.id for meal in day.meals)


def test_editing_template_does_not_change_applied_day() -> None:
    state, template = _with_template()
    state = planner.apply_template_to_day(state, DAY, template)

    state = planner.update_template(
        state, template.id, daily_goals=DEFAULT_GOALS, name="Bulk"
    )

    assert planner.get_day(state, DAY).daily_goals == CUT_GOALS
    assert planner.find_template(state, template.id).name == "Bulk"


def test_skip_without_default_uses_fallback() -> None:
    state = planner.skip_template_selection(_state(), DAY)

    day = planner.get_day(state, DAY)
    assert day.template_selected
    assert day.daily_goals == DEFAULT_GOALS
    assert len(day.meals) == 4


def test_skip_uses_default_template_for_new_day() -> None:
    state, _ = _with_template()

    state = planner.skip_template_selection(state, DAY)

    assert planner.get_day(state, DAY).daily_goals == CUT_GOALS


def test_skip_marks_existing_day_resolved_without_changing_it() -> None:
    state = planner.initialize_day_without_template(_state(), DAY)
    meals_before = planner.get_day(state, DAY).meals

    state = planner.skip_template_selection(state, DAY)

    day = planner.get_day(state, DAY)
    assert day.template_selected
    assert day.meals == meals_before


def test_resolve_date_prefers_default_template() -> None:
    state, _ = _with_template()

    state = planner.resolve_date(state, DAY)

    assert not planner.needs_template_selection(state, DAY)
    assert planner.get_day(state, DAY).daily_goals == CUT_GOALS


def test_resolve_date_leaves_resolved_day_alone() -> None:
    state = planner.skip_template_selection(_state(), DAY)

    assert planner.resolve_date(state, DAY) is state


def test_only_one_default_template() -> None:
    state, first = _with_template(is_default=True)
    second = planner.new_template("Maintain", DEFAULT_GOALS, DEFAULT_MEALS, True)

    state = planner.add_template(state, second)
    assert [t.is_default for t in state.templates] == [False, True]

    state = planner.set_default_template(state, first.id)
    assert [t.is_default for t in state.templates] == [True, False]

    state = planner.update_template(state, second.id, is_default=True)
    assert planner.get_default_template(state).id == second.id
    assert sum(t.is_default for t in state.templates) == 1


def test_delete_template_keeps_days() -> None:
    state, template = _with_template()
    state = planner.apply_template_to_day(state, DAY, template)

    state = planner.delete_template(state, template.id)

    assert state.templates == ()
    assert planner.get_day(state, DAY).daily_goals == CUT_GOALS


def test_add_rename_and_update_meal() -> None:
    state = planner.skip_template_selection(_state(), DAY)
    goals = MacroGoals(calories=300, protein=30, carbs=20, fat=10)

    state = planner.add_meal_to_day(state, DAY, "Pre-workout", goals)
    meal = planner.get_day(state, DAY).meals[-1]
    state = planner.rename_meal(state, DAY, meal.id, "Post-workout")
    state = planner.update_meal_goals(state, DAY, meal.id, DEFAULT_GOALS)

    updated = planner.get_day(state, DAY).meals[-1]
    assert updated.id == meal.id
    assert updated.name == "Post-workout"
    assert updated.goals == DEFAULT_GOALS


def test_set_day_goals_on_missing_day_is_noop() -> None:
    state = _state()

    assert planner.set_day_goals(state, DAY, CUT_GOALS) is state


def test_delete_meal_refuses_last_meal() -> None:
    state, template = _with_template()
    one_meal = replace(template, meals=CUT_MEALS[:1])
    state = planner.apply_template_to_day(state, DAY, one_meal)
    meal = planner.get_day(state, DAY).meals[0]

    with pytest.raises(LastMealError):
        planner.delete_meal_from_day(state, DAY, meal.id)


def test_delete_meal_removes_it() -> None:
    state = planner.skip_template_selection(_state(), DAY)
    meal = planner.get_day(state, DAY).meals[1]

    state = planner.delete_meal_from_day(state, DAY, meal.id)

    names = [m.name for m in planner.get_day(state, DAY).meals]
    assert names == ["Breakfast", "Dinner", "Snack"]


def test_reorder_meals_moves_and_clamps() -> None:
    state = planner.skip_template_selection(_state(), DAY)

    moved = planner.reorder_meals_in_day(state, DAY, 0, 2)
    assert [m.name for m in planner.get_day(moved, DAY).meals] == [
        "Lunch",
        "Dinner",
        "Breakfast",
        "Snack",
    ]

    clamped = planner.reorder_meals_in_day(state, DAY, 0, 99)
    assert planner.get_day(clamped, DAY).meals[-1].name == "Breakfast"

    assert planner.reorder_meals_in_day(state, DAY, 7, 0) is state


def test_select_date_ignores_future() -> None:
    state = _state()

    assert planner.select_date(state, date(2025, 3, 11), DAY) is state
    assert planner.select_date(state, date(2025, 3, 1), DAY).selected_date == date(
        2025, 3, 1
    )
