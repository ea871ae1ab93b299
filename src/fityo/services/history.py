"""History service: macro averages and weight trend over a period."""

from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from uuid import UUID

from fityo.domain.logs import FoodLogWithProfile
from fityo.domain.nutrition import (
    ZERO_AMOUNTS,
    MacroAmounts,
    calculate_macros,
    round_half_up,
    sum_amounts,
)
from fityo.domain.weight import WeightEntry
from fityo.services.clock import Clock
from fityo.services.food_logs import FoodLogService
from fityo.services.weights import WeightService

HISTORY_START_YEAR = 2020


class Period(str, Enum):
    """Selectable history windows."""

    WEEK = "7d"
    MONTH = "30d"
    YEAR = "1y"
    ALL = "all"


@dataclass(frozen=True)
class DailyMacros:
    """Macro totals for one logged day."""

    day: date
    totals: MacroAmounts


@dataclass(frozen=True)
class HistoryView:
    """Aggregated history for a period."""

    period: Period
    start: date
    end: date
    daily: list[DailyMacros]
    averages: MacroAmounts
    days_tracked: int
    weights: list[WeightEntry]
    today_weight: WeightEntry | None


@dataclass
class HistoryService:
    """Service computing history aggregates for a user."""

    food_logs: FoodLogService
    weights: WeightService
    clock: Clock

    def get_history(self, user_id: UUID, period: Period) -> HistoryView:
        """Return daily totals, averages and weights for the period."""
        end = self.clock.today()
        start = period_start(period, end)
        logs = self.food_logs.get_logs_for_range(user_id, start, end)
        daily = aggregate_daily(logs)
        return HistoryView(
            period=period,
            start=start,
            end=end,
            daily=daily,
            averages=average_daily(daily),
            days_tracked=len(daily),
            weights=self.weights.get_weight_history(user_id, start, end),
            today_weight=self.weights.get_today_weight(user_id),
        )


def period_start(period: Period, today: date) -> date:
    """Return the first day included in a period ending today."""
    if period is Period.WEEK:
        return today - timedelta(days=7)
    if period is Period.MONTH:
        return today - timedelta(days=30)
    if period is Period.YEAR:
        try:
            return today.replace(year=today.year - 1)
        except ValueError:
            # Feb 29 rolls over to Mar 1 of the previous year.
            return date(today.year - 1, 3, 1)
    # "all" keeps today's month and day in the start year.
    return today.replace(year=HISTORY_START_YEAR)


def aggregate_daily(logs: list[FoodLogWithProfile]) -> list[DailyMacros]:
    """Sum macros per logged day, skipping logs whose food was deleted.

    Meal names play no part here, so logs orphaned by a meal rename still count.
    """
    per_day: dict[date, MacroAmounts] = {}
    for entry in logs:
        if entry.food is None:
            continue
        macros = calculate_macros(entry.food, entry.log.amount_grams)
        per_day[entry.log.logged_at] = sum_amounts(
            [per_day.get(entry.log.logged_at, ZERO_AMOUNTS), macros]
        )
    return [DailyMacros(day=day, totals=per_day[day]) for day in sorted(per_day)]


def average_daily(daily: list[DailyMacros]) -> MacroAmounts:
    """Average the daily totals over tracked days, rounded to whole numbers."""
    total_days = max(len(daily), 1)
    totals = sum_amounts(entry.totals for entry in daily)
    return MacroAmounts(
        protein=round_half_up(totals.protein / total_days),
        carbs=round_half_up(totals.carbs / total_days),
        fat=round_half_up(totals.fat / total_days),
        calories=round_half_up(totals.calories / total_days),
    )
