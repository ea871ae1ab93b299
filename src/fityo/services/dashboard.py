"""Read model for the day screen: goals, meals and what was eaten."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from fityo.domain.logs import FoodLogWithProfile
from fityo.domain.nutrition import (
    MacroAmounts,
    MacroGoals,
    calculate_macros,
    progress_percent,
    round_day_totals,
    sum_amounts,
)
from fityo.domain.planner import (
    DEFAULT_GOALS,
    Meal,
    get_day,
    needs_template_selection,
)
from fityo.services.clock import Clock
from fityo.services.food_logs import FoodLogService
from fityo.services.planner import DayPlanService


@dataclass(frozen=True)
class LoggedItem:
    """A log entry rendered with its food and computed macros."""

    log_id: UUID
    food_id: UUID
    food_name: str
    amount_grams: float
    macros: MacroAmounts


@dataclass(frozen=True)
class MealView:
    """A meal with its matched items and progress."""

    meal: Meal
    items: list[LoggedItem]
    totals: MacroAmounts
    calorie_progress: int


@dataclass(frozen=True)
class MacroProgress:
    """Capped percentage of each macro goal reached."""

    protein: int
    carbs: int
    fat: int


@dataclass(frozen=True)
class DayView:
    """Everything the day screen shows for one date."""

    day: date
    editable: bool
    needs_template_selection: bool
    goals: MacroGoals
    totals: MacroAmounts
    calorie_progress: int
    macro_progress: MacroProgress
    meals: list[MealView]


@dataclass
class DashboardService:
    """Combines planner state and food logs into a day view."""

    planner: DayPlanService
    food_logs: FoodLogService
    clock: Clock

    def get_day_view(self, user_id: UUID, day: date) -> DayView:
        """Return the day view; logs under no current meal name are hidden."""
        state = self.planner.get_state(user_id)
        day_data = get_day(state, day)
        logs = self.food_logs.get_logs_for_date(user_id, day)
        meals = (
            [build_meal_view(meal, logs) for meal in day_data.meals] if day_data else []
        )
        goals = day_data.daily_goals if day_data else DEFAULT_GOALS
        names = {view.meal.name.lower() for view in meals}
        totals = round_day_totals(
            sum_amounts(
                calculate_macros(entry.food, entry.log.amount_grams)
                for entry in logs
                if entry.food is not None and entry.log.meal_type.lower() in names
            )
        )
        return DayView(
            day=day,
            editable=day == self.clock.today(),
            needs_template_selection=needs_template_selection(state, day),
            goals=goals,
            totals=totals,
            calorie_progress=progress_percent(totals.calories, goals.calories),
            macro_progress=MacroProgress(
                protein=progress_percent(totals.protein, goals.protein),
                carbs=progress_percent(totals.carbs, goals.carbs),
                fat=progress_percent(totals.fat, goals.fat),
            ),
            meals=meals,
        )


def build_meal_view(meal: Meal, logs: list[FoodLogWithProfile]) -> MealView:
    """Collect the logs whose meal name matches, ignoring deleted foods."""
    items = [
        LoggedItem(
            log_id=entry.log.id,
            food_id=entry.food.id,
            food_name=entry.food.name,
            amount_grams=entry.log.amount_grams,
            macros=calculate_macros(entry.food, entry.log.amount_grams),
        )
        for entry in logs
        if entry.food is not None and entry.matches_meal(meal.name)
    ]
    totals = sum_amounts(item.macros for item in items)
    return MealView(
        meal=meal,
        items=items,
        totals=totals,
        calorie_progress=progress_percent(totals.calories, meal.goals.calories),
    )
