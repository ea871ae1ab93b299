"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import UTC, date, datetime, timedelta
from pathlib import Path
from uuid import UUID, uuid4

import pytest

from fityo.config import Settings
from fityo.containers import AppContainer, Repositories, build_services
from fityo.domain.logs import FoodLog, FoodLogWithProfile
from fityo.domain.nutrition import NutrientProfile
from fityo.domain.planner import PlannerState
from fityo.domain.weight import WeightEntry
from fityo.services.auth import AuthProvider
from fityo.services.clock import Clock
from fityo.services.food_logs import FoodLogRepository
from fityo.services.library import FoodLibraryRepository
from fityo.services.planner import PlannerStateRepository
from fityo.services.weights import WeightRepository

TODAY = date(2025, 3, 10)
ACCESS_TOKEN = "test-access-token"


@dataclass
class FixedClock(Clock):
    """Clock frozen on a given day."""

    day: date = TODAY

    def today(self) -> date:
        return self.day


@dataclass
class FakeAuthProvider(AuthProvider):
    """Auth provider accepting a fixed set of tokens."""

    tokens: dict[str, UUID] = field(default_factory=dict)

    def get_user_id(self, access_token: str | None) -> UUID | None:
        if access_token is None:
            return None
        return self.tokens.get(access_token)


@dataclass
class InMemoryFoodLibraryRepository(FoodLibraryRepository):
    """In-memory food library for tests."""

    foods: dict[UUID, list[NutrientProfile]] = field(default_factory=dict)

    def list_foods(self, user_id: UUID) -> list[NutrientProfile]:
        return list(reversed(self.foods.get(user_id, [])))

    def get_food(self, user_id: UUID, food_id: UUID) -> NutrientProfile | None:
        for food in self.foods.get(user_id, []):
            if food.id == food_id:
                return food
        return None

    def create_food(
        self, user_id: UUID, payload: dict[str, object]
    ) -> NutrientProfile:
        owned = self.foods.setdefault(user_id, [])
        food = NutrientProfile(
            id=uuid4(),
            name=str(payload["name"]),
            protein_per_100g=float(payload["protein_per_100g"]),
            carbs_per_100g=float(payload["carbs_per_100g"]),
            fat_per_100g=float(payload["fat_per_100g"]),
            calories_per_100g=float(payload["calories_per_100g"]),
            created_at=datetime(2025, 1, 1, tzinfo=UTC) + timedelta(minutes=len(owned)),
        )
        owned.append(food)
        return food

    def update_food(
        self, user_id: UUID, food_id: UUID, payload: dict[str, object]
    ) -> NutrientProfile | None:
        owned = self.foods.get(user_id, [])
        for index, food in enumerate(owned):
            if food.id == food_id:
                owned[index] = replace(food, **payload)
                return owned[index]
        return None

    def delete_food(self, user_id: UUID, food_id: UUID) -> None:
        self.foods[user_id] = [
            food for food in self.foods.get(user_id, []) if food.id != food_id
        ]


@dataclass
class InMemoryFoodLogRepository(FoodLogRepository):
    """In-memory food logs joined against an in-memory library."""

    library: InMemoryFoodLibraryRepository
    logs: dict[UUID, list[FoodLog]] = field(default_factory=dict)

    def create_log(  # noqa: PLR0913
        self,
        user_id: UUID,
        food_id: UUID,
        meal_type: str,
        amount_grams: float,
        logged_at: date,
    ) -> FoodLog:
        log = FoodLog(
            id=uuid4(),
            food_id=food_id,
            meal_type=meal_type,
            amount_grams=amount_grams,
            logged_at=logged_at,
        )
        self.logs.setdefault(user_id, []).append(log)
        return log

    def get_log(self, user_id: UUID, log_id: UUID) -> FoodLog | None:
        for log in self.logs.get(user_id, []):
            if log.id == log_id:
                return log
        return None

    def list_logs_for_date(
        self, user_id: UUID, day: date
    ) -> list[FoodLogWithProfile]:
        return self._join(
            user_id, [log for log in self.logs.get(user_id, []) if log.logged_at == day]
        )

    def list_logs_for_range(
        self, user_id: UUID, start: date, end: date
    ) -> list[FoodLogWithProfile]:
        selected = [
            log for log in self.logs.get(user_id, []) if start <= log.logged_at <= end
        ]
        return self._join(user_id, sorted(selected, key=lambda log: log.logged_at))

    def delete_log(self, user_id: UUID, log_id: UUID) -> None:
        self.logs[user_id] = [
            log for log in self.logs.get(user_id, []) if log.id != log_id
        ]

    def delete_logs_for_date(self, user_id: UUID, day: date) -> None:
        self.logs[user_id] = [
            log for log in self.logs.get(user_id, []) if log.logged_at != day
        ]

    def _join(self, user_id: UUID, logs: list[FoodLog]) -> list[FoodLogWithProfile]:
        return [
            FoodLogWithProfile(
                log=log, food=self.library.get_food(user_id, log.food_id)
            )
            for log in logs
        ]


@dataclass
class InMemoryWeightRepository(WeightRepository):
    """In-memory weight history keyed by (user, date)."""

    entries: dict[tuple[UUID, date], WeightEntry] = field(default_factory=dict)

    def upsert_weight(self, user_id: UUID, day: date, weight: float) -> WeightEntry:
        entry = WeightEntry(logged_at=day, weight=weight)
        self.entries[(user_id, day)] = entry
        return entry

    def list_weights(
        self, user_id: UUID, start: date | None, end: date | None
    ) -> list[WeightEntry]:
        selected = [
            entry
            for (owner, day), entry in self.entries.items()
            if owner == user_id
            and (start is None or day >= start)
            and (end is None or day <= end)
        ]
        return sorted(selected, key=lambda entry: entry.logged_at)

    def get_weight(self, user_id: UUID, day: date) -> WeightEntry | None:
        return self.entries.get((user_id, day))


@dataclass
class InMemoryPlannerStateRepository(PlannerStateRepository):
    """In-memory planner documents that count saves."""

    states: dict[UUID, PlannerState] = field(default_factory=dict)
    saves: int = 0

    def load_state(self, user_id: UUID) -> PlannerState | None:
        return self.states.get(user_id)

    def save_state(self, user_id: UUID, state: PlannerState) -> None:
        self.saves += 1
        self.states[user_id] = state


def food_payload(name: str = "Chicken Breast", **overrides: float) -> dict[str, object]:
    payload: dict[str, object] = {
        "name": name,
        "protein_per_100g": 31.0,
        "carbs_per_100g": 0.0,
        "fat_per_100g": 3.6,
        "calories_per_100g": 165.0,
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def user_id() -> UUID:
    return uuid4()


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        storage_backend="local",
        local_state_path=tmp_path / "state.json",
        timezone="UTC",
    )


@pytest.fixture
def repositories(user_id: UUID) -> Repositories:
    library = InMemoryFoodLibraryRepository()
    return Repositories(
        auth_provider=FakeAuthProvider(tokens={ACCESS_TOKEN: user_id}),
        foods=library,
        logs=InMemoryFoodLogRepository(library=library),
        weights=InMemoryWeightRepository(),
        planner=InMemoryPlannerStateRepository(),
    )


@pytest.fixture
def container(
    settings: Settings, repositories: Repositories, clock: FixedClock
) -> AppContainer:
    return build_services(settings, repositories, clock)


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {ACCESS_TOKEN}"}
