"""Tests for the history service."""

from datetime import date, timedelta
from uuid import UUID

from fityo.containers import AppContainer
from fityo.domain.nutrition import MacroAmounts
from fityo.services.history import Period, period_start
from tests.conftest import TODAY, food_payload


def _log(
    container: AppContainer, user_id: UUID, food_id: UUID, day: date, grams: float
) -> None:
    container.food_log_service.repository.create_log(
        user_id, food_id, "Lunch", grams, logged_at=day
    )


def test_period_start() -> None:
    assert period_start(Period.WEEK, TODAY) == date(2025, 3, 3)
    assert period_start(Period.MONTH, TODAY) == date(2025, 2, 8)
    assert period_start(Period.YEAR, TODAY) == date(2024, 3, 10)
    assert period_start(Period.YEAR, date(2024, 2, 29)) == date(2023, 3, 1)
    assert period_start(Period.ALL, TODAY) == date(2020, 3, 10)
    assert period_start(Period.ALL, date(2024, 2, 29)) == date(2020, 2, 29)


def test_history_averages_over_days_with_data(
    container: AppContainer, user_id: UUID
) -> None:
    food = container.food_library_service.create_food(
        user_id,
        food_payload(
            protein_per_100g=10.0,
            carbs_per_100g=20.0,
            fat_per_100g=5.0,
            calories_per_100g=100.0,
        ),
    )
    _log(container, user_id, food.id, TODAY, 100)
    _log(container, user_id, food.id, TODAY, 100)
    _log(container, user_id, food.id, TODAY - timedelta(days=2), 100)
    _log(container, user_id, food.id, TODAY - timedelta(days=40), 500)

    view = container.history_service.get_history(user_id, Period.WEEK)

    assert view.days_tracked == 2
    assert [entry.day for entry in view.daily] == [TODAY - timedelta(days=2), TODAY]
    assert view.averages == MacroAmounts(
        protein=15.0, carbs=30.0, fat=8.0, calories=150.0
    )


def test_history_counts_renamed_meal_logs_and_skips_deleted_foods(
    container: AppContainer, user_id: UUID
) -> None:
    kept = container.food_library_service.create_food(user_id, food_payload("Rice"))
    gone = container.food_library_service.create_food(user_id, food_payload("Gone"))
    container.food_log_service.log_food(user_id, "Renamed Meal", kept.id, 100)
    container.food_log_service.log_food(user_id, "Lunch", gone.id, 100)
    container.food_library_service.delete_food(user_id, gone.id)

    view = container.history_service.get_history(user_id, Period.MONTH)

    assert view.days_tracked == 1
    assert view.daily[0].totals.calories == 165


def test_empty_history(
    container: AppContainer, user_id: UUID
) -> None:
    view = container.history_service.get_history(user_id, Period.ALL)

    assert view.daily == []
    assert view.averages == MacroAmounts(0.0, 0.0, 0.0, 0.0)
    assert view.today_weight is None


def test_history_includes_weights(
    container: AppContainer, user_id: UUID
) -> None:
    container.weight_service.log_weight(user_id, 80.0, day=TODAY - timedelta(days=3))
    container.weight_service.log_weight(user_id, 79.5)
    container.weight_service.log_weight(user_id, 85.0, day=TODAY - timedelta(days=60))

    view = container.history_service.get_history(user_id, Period.MONTH)

    assert [entry.weight for entry in view.weights] == [80.0, 79.5]
    assert view.today_weight.weight == 79.5
