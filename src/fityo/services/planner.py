"""Service that persists the day/template state machine."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date
from typing import Protocol
from uuid import UUID

from fityo.domain import planner
from fityo.domain.errors import (
    ConfirmationRequired,
    InvalidDate,
    StorageFailure,
    TemplateNotFound,
)
from fityo.domain.nutrition import MacroGoals
from fityo.domain.planner import DayData, MealPlan, PlannerState, Template
from fityo.services.clock import Clock
from fityo.services.food_logs import FoodLogService

logger = logging.getLogger(__name__)


class PlannerStateRepository(Protocol):
    """Persistence interface for templates, days and the selected date."""

    def load_state(self, user_id: UUID) -> PlannerState | None:
        """Return the stored planner state, if any."""

    def save_state(self, user_id: UUID, state: PlannerState) -> None:
        """Persist the planner state."""


@dataclass
class DayPlanService:
    """Applies planner transitions for a user and stores the result.

    Only today can be changed; every mutating call on another date raises
    InvalidDate before any state is touched.
    """

    repository: PlannerStateRepository
    food_logs: FoodLogService
    clock: Clock

    def get_state(self, user_id: UUID) -> PlannerState:
        """Return the user's state, starting empty with today selected."""
        state = self.repository.load_state(user_id)
        if state is None:
            return PlannerState(selected_date=self.clock.today())
        return state

    def get_day(self, user_id: UUID, day: date) -> DayData | None:
        """Return the stored day data, if any."""
        return planner.get_day(self.get_state(user_id), day)

    def needs_template_selection(self, user_id: UUID, day: date) -> bool:
        """Return True while the date is unresolved."""
        return planner.needs_template_selection(self.get_state(user_id), day)

    def resolve_date(self, user_id: UUID, day: date) -> DayData:
        """Resolve today with the default template, or the fallback meals."""
        self._require_today(day)
        state = self.get_state(user_id)
        if planner.needs_template_selection(state, day):
            default = planner.get_default_template(state)
            resolved = planner.resolve_date(state, day)
            if default is not None:
                self.food_logs.clear_logs_for_date(user_id, day)
                state = self._save_after_clear(user_id, day, resolved)
            else:
                state = self._save(user_id, resolved)
            logger.info(
                "Resolved %s for user %s using %s",
                day,
                user_id,
                default.name if default else "fallback meals",
            )
        return self._day(state, day)

    def apply_template(
        self, user_id: UUID, day: date, template_id: UUID, confirmed: bool = True
    ) -> DayData:
        """Clear the day's logs and rebuild it from a template.

        With ``confirmed=False`` a day that already has logs raises
        ConfirmationRequired and nothing is deleted.
        """
        self._require_today(day)
        state = self.get_state(user_id)
        template = self._template(state, template_id)
        if not confirmed and self.food_logs.has_logs(user_id, day):
            raise ConfirmationRequired(
                "Applying a template deletes the food logged on this day"
            )
        self.food_logs.clear_logs_for_date(user_id, day)
        state = self._save_after_clear(
            user_id, day, planner.apply_template_to_day(state, day, template)
        )
        logger.info("Applied template %s to %s for user %s", template.id, day, user_id)
        return self._day(state, day)

    def skip_template_selection(self, user_id: UUID, day: date) -> DayData:
        """Resolve the day without an explicit template choice."""
        self._require_today(day)
        state = self._mutate(
            user_id, lambda s: planner.skip_template_selection(s, day)
        )
        return self._day(state, day)

    def initialize_day_without_template(self, user_id: UUID, day: date) -> DayData:
        """Create the fallback day but leave it unresolved."""
        self._require_today(day)
        state = self._mutate(
            user_id, lambda s: planner.initialize_day_without_template(s, day)
        )
        return self._day(state, day)

    def set_day_goals(
        self, user_id: UUID, day: date, goals: MacroGoals
    ) -> DayData | None:
        """Replace the day's goals."""
        self._require_today(day)
        state = self._mutate(user_id, lambda s: planner.set_day_goals(s, day, goals))
        return planner.get_day(state, day)

    def add_meal(
        self, user_id: UUID, day: date, name: str, goals: MacroGoals
    ) -> DayData | None:
        """Append a meal to the day."""
        self._require_today(day)
        state = self._mutate(
            user_id, lambda s: planner.add_meal_to_day(s, day, name, goals)
        )
        return planner.get_day(state, day)

    def update_meal(
        self,
        user_id: UUID,
        day: date,
        meal_id: UUID,
        name: str | None = None,
        goals: MacroGoals | None = None,
    ) -> DayData | None:
        """Rename a meal and/or change its goals."""
        self._require_today(day)

        def change(state: PlannerState) -> PlannerState:
            if name is not None:
                state = planner.rename_meal(state, day, meal_id, name)
            if goals is not None:
                state = planner.update_meal_goals(state, day, meal_id, goals)
            return state

        return planner.get_day(self._mutate(user_id, change), day)

    def delete_meal(self, user_id: UUID, day: date, meal_id: UUID) -> DayData | None:
        """Delete a meal; the last remaining meal cannot be removed."""
        self._require_today(day)
        state = self._mutate(
            user_id, lambda s: planner.delete_meal_from_day(s, day, meal_id)
        )
        return planner.get_day(state, day)

    def reorder_meals(
        self, user_id: UUID, day: date, from_index: int, to_index: int
    ) -> DayData | None:
        """Move a meal to a new position."""
        self._require_today(day)
        state = self._mutate(
            user_id,
            lambda s: planner.reorder_meals_in_day(s, day, from_index, to_index),
        )
        return planner.get_day(state, day)

    def get_selected_date(self, user_id: UUID) -> date:
        return self.get_state(user_id).selected_date

    def select_date(self, user_id: UUID, day: date) -> date:
        """Select a date to view; future dates are ignored."""
        today = self.clock.today()
        state = self._mutate(user_id, lambda s: planner.select_date(s, day, today))
        return state.selected_date

    def list_templates(self, user_id: UUID) -> list[Template]:
        return list(self.get_state(user_id).templates)

    def get_default_template(self, user_id: UUID) -> Template | None:
        return planner.get_default_template(self.get_state(user_id))

    def create_template(
        self,
        user_id: UUID,
        name: str,
        daily_goals: MacroGoals,
        meals: list[MealPlan],
        is_default: bool = False,
    ) -> Template:
        """Create a template; marking it default clears the other defaults."""
        template = planner.new_template(name, daily_goals, tuple(meals), is_default)
        self._mutate(user_id, lambda s: planner.add_template(s, template))
        return template

    def update_template(
        self, user_id: UUID, template_id: UUID, changes: dict[str, object]
    ) -> Template:
        """Update template fields; days already built from it keep their copy."""
        state = self.get_state(user_id)
        self._template(state, template_id)
        if "meals" in changes:
            changes = {**changes, "meals": tuple(changes["meals"])}
        state = self._save(
            user_id, planner.update_template(state, template_id, **changes)
        )
        return self._template(state, template_id)

    def delete_template(self, user_id: UUID, template_id: UUID) -> None:
        self._mutate(user_id, lambda s: planner.delete_template(s, template_id))

    def set_default_template(self, user_id: UUID, template_id: UUID) -> Template:
        """Make one template the only default."""
        state = self.get_state(user_id)
        self._template(state, template_id)
        state = self._save(user_id, planner.set_default_template(state, template_id))
        return self._template(state, template_id)

    def _mutate(
        self, user_id: UUID, change: Callable[[PlannerState], PlannerState]
    ) -> PlannerState:
        current = self.get_state(user_id)
        updated = change(current)
        if updated is current:
            return current
        return self._save(user_id, updated)

    def _save(self, user_id: UUID, state: PlannerState) -> PlannerState:
        self.repository.save_state(user_id, state)
        return state

    def _save_after_clear(
        self, user_id: UUID, day: date, state: PlannerState
    ) -> PlannerState:
        try:
            return self._save(user_id, state)
        except StorageFailure:
            logger.error(
                "Food logs for user %s on %s were cleared but the new day "
                "could not be saved",
                user_id,
                day,
            )
            raise

    def _require_today(self, day: date) -> None:
        today = self.clock.today()
        if day != today:
            raise InvalidDate(day, today)

    @staticmethod
    def _template(state: PlannerState, template_id: UUID) -> Template:
        template = planner.find_template(state, template_id)
        if template is None:
            raise TemplateNotFound(str(template_id))
        return template

    @staticmethod
    def _day(state: PlannerState, day: date) -> DayData:
        entry = planner.get_day(state, day)
        if entry is None:
            raise RuntimeError(f"Day {day} missing after resolution")
        return entry
