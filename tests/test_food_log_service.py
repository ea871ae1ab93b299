"""Tests for food logging and the food library."""

from datetime import timedelta
from uuid import uuid4

import pytest

from fityo.domain.errors import FoodNotFound, InvalidDate
from fityo.services.food_logs import FoodLogService
from fityo.services.library import FoodLibraryService
from tests.conftest import (
    TODAY,
    FixedClock,
    InMemoryFoodLibraryRepository,
    InMemoryFoodLogRepository,
    food_payload,
)


def _services() -> tuple[FoodLogService, FoodLibraryService]:
    library = InMemoryFoodLibraryRepository()
    logs = FoodLogService(InMemoryFoodLogRepository(library=library), FixedClock())
    return logs, FoodLibraryService(library)


def test_log_food_defaults_to_today() -> None:
    logs, library = _services()
    user_id = uuid4()
    food = library.create_food(user_id, food_payload())

    log = logs.log_food(user_id, "Lunch", food.id, 150)

    assert log.logged_at == TODAY
    assert logs.has_logs(user_id, TODAY)


def test_log_food_rejects_other_dates() -> None:
    logs, library = _services()
    user_id = uuid4()
    food = library.create_food(user_id, food_payload())

    with pytest.raises(InvalidDate):
        logs.log_food(user_id, "Lunch", food.id, 150, day=TODAY - timedelta(days=1))


def test_delete_log_from_past_day_is_rejected() -> None:
    logs, library = _services()
    user_id = uuid4()
    food = library.create_food(user_id, food_payload())
    repository = logs.repository
    old = repository.create_log(
        user_id, food.id, "Lunch", 100, logged_at=TODAY - timedelta(days=2)
    )

    with pytest.raises(InvalidDate):
        logs.delete_food_log(user_id, old.id)


def test_delete_unknown_log_is_silent() -> None:
    logs, _ = _services()

    logs.delete_food_log(uuid4(), uuid4())


def test_deleted_food_keeps_log_with_null_profile() -> None:
    logs, library = _services()
    user_id = uuid4()
    food = library.create_food(user_id, food_payload())
    logs.log_food(user_id, "Lunch", food.id, 150)

    library.delete_food(user_id, food.id)

    [entry] = logs.get_logs_for_date(user_id, TODAY)
    assert entry.food is None


def test_food_update_flows_into_logs() -> None:
    logs, library = _services()
    user_id = uuid4()
    food = library.create_food(user_id, food_payload())
    logs.log_food(user_id, "Lunch", food.id, 150)

    library.update_food(user_id, food.id, {"calories_per_100g": 200.0})

    [entry] = logs.get_logs_for_date(user_id, TODAY)
    assert entry.food.calories_per_100g == 200.0


def test_update_food_owned_by_someone_else() -> None:
    _, library = _services()
    food = library.create_food(uuid4(), food_payload())

    with pytest.raises(FoodNotFound):
        library.update_food(uuid4(), food.id, {"name": "Stolen"})


def test_list_foods_newest_first() -> None:
    _, library = _services()
    user_id = uuid4()
    library.create_food(user_id, food_payload("Rice"))
    library.create_food(user_id, food_payload("Oats"))

    assert [food.name for food in library.list_foods(user_id)] == ["Oats", "Rice"]


def test_range_query_is_inclusive() -> None:
    logs, library = _services()
    user_id = uuid4()
    food = library.create_food(user_id, food_payload())
    for offset in range(4):
        logs.repository.create_log(
            user_id, food.id, "Lunch", 100, logged_at=TODAY - timedelta(days=offset)
        )

    entries = logs.get_logs_for_range(user_id, TODAY - timedelta(days=2), TODAY)

    assert [entry.log.logged_at for entry in entries] == [
        TODAY - timedelta(days=2),
        TODAY - timedelta(days=1),
        TODAY,
    ]


def test_logs_for_future_date_are_not_readable() -> None:
    logs, _ = _services()

    assert logs.get_logs_for_date(uuid4(), TODAY - timedelta(days=3)) == []
    with pytest.raises(InvalidDate, match="is in the future"):
        logs.get_logs_for_date(uuid4(), TODAY + timedelta(days=1))
