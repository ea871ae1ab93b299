"""Repositories over the local JSON document."""

from dataclasses import dataclass
from datetime import UTC, date, datetime
from uuid import UUID, uuid4

from fityo.adapters.local_store import LocalStateStore
from fityo.adapters.serialization import (
    dump_planner_state,
    load_planner_state,
    parse_food,
    parse_log,
    parse_weight,
)
from fityo.domain.logs import FoodLog, FoodLogWithProfile
from fityo.domain.nutrition import NutrientProfile
from fityo.domain.planner import PlannerState
from fityo.domain.weight import WeightEntry
from fityo.services.auth import AuthProvider
from fityo.services.food_logs import FoodLogRepository
from fityo.services.library import FoodLibraryRepository
from fityo.services.planner import PlannerStateRepository
from fityo.services.weights import WeightRepository


def _now() -> str:
    return datetime.now(tz=UTC).isoformat()


@dataclass
class LocalFoodLibraryRepository(FoodLibraryRepository):
    """Food library stored in the local document."""

    store: LocalStateStore

    def list_foods(self, user_id: UUID) -> list[NutrientProfile]:
        rows = self.store.read(user_id)["foods"]
        rows = sorted(rows, key=lambda row: row.get("created_at") or "", reverse=True)
        return [parse_food(row) for row in rows]

    def get_food(self, user_id: UUID, food_id: UUID) -> NutrientProfile | None:
        for row in self.store.read(user_id)["foods"]:
            if row["id"] == str(food_id):
                return parse_food(row)
        return None

    def create_food(
        self, user_id: UUID, payload: dict[str, object]
    ) -> NutrientProfile:
        row = {**payload, "id": str(uuid4()), "created_at": _now()}
        with self.store.update(user_id) as section:
            section["foods"].append(row)
        return parse_food(row)

    def update_food(
        self, user_id: UUID, food_id: UUID, payload: dict[str, object]
    ) -> NutrientProfile | None:
        with self.store.update(user_id) as section:
            for row in section["foods"]:
                if row["id"] == str(food_id):
                    row.update(payload)
                    return parse_food(row)
        return None

    def delete_food(self, user_id: UUID, food_id: UUID) -> None:
        with self.store.update(user_id) as section:
            section["foods"] = [
                row for row in section["foods"] if row["id"] != str(food_id)
            ]


@dataclass
class LocalFoodLogRepository(FoodLogRepository):
    """Food logs stored in the local document, joined to foods on read."""

    store: LocalStateStore

    def create_log(  # noqa: PLR0913
        self,
        user_id: UUID,
        food_id: UUID,
        meal_type: str,
        amount_grams: float,
        logged_at: date,
    ) -> FoodLog:
        row = {
            "id": str(uuid4()),
            "food_id": str(food_id),
            "meal_type": meal_type,
            "amount_grams": amount_grams,
            "logged_at": logged_at.isoformat(),
            "created_at": _now(),
        }
        with self.store.update(user_id) as section:
            section["logs"].append(row)
        return parse_log(row)

    def get_log(self, user_id: UUID, log_id: UUID) -> FoodLog | None:
        for row in self.store.read(user_id)["logs"]:
            if row["id"] == str(log_id):
                return parse_log(row)
        return None

    def list_logs_for_date(
        self, user_id: UUID, day: date
    ) -> list[FoodLogWithProfile]:
        section = self.store.read(user_id)
        rows = [row for row in section["logs"] if row["logged_at"] == day.isoformat()]
        return _join(rows, section["foods"])

    def list_logs_for_range(
        self, user_id: UUID, start: date, end: date
    ) -> list[FoodLogWithProfile]:
        section = self.store.read(user_id)
        rows = [
            row
            for row in section["logs"]
            if start.isoformat() <= row["logged_at"] <= end.isoformat()
        ]
        rows.sort(key=lambda row: row["logged_at"])
        return _join(rows, section["foods"])

    def delete_log(self, user_id: UUID, log_id: UUID) -> None:
        with self.store.update(user_id) as section:
            section["logs"] = [
                row for row in section["logs"] if row["id"] != str(log_id)
            ]

    def delete_logs_for_date(self, user_id: UUID, day: date) -> None:
        with self.store.update(user_id) as section:
            section["logs"] = [
                row for row in section["logs"] if row["logged_at"] != day.isoformat()
            ]


def _join(
    rows: list[dict[str, object]], foods: list[dict[str, object]]
) -> list[FoodLogWithProfile]:
    by_id = {food["id"]: food for food in foods}
    joined = []
    for row in rows:
        food_row = by_id.get(row["food_id"])
        joined.append(
            FoodLogWithProfile(
                log=parse_log(row),
                food=parse_food(food_row) if food_row else None,
            )
        )
    return joined


@dataclass
class LocalWeightRepository(WeightRepository):
    """Weight history stored in the local document."""

    store: LocalStateStore

    def upsert_weight(self, user_id: UUID, day: date, weight: float) -> WeightEntry:
        row = {"logged_at": day.isoformat(), "weight": weight}
        with self.store.update(user_id) as section:
            history = section["weight_history"]
            for index, existing in enumerate(history):
                if existing["logged_at"] == row["logged_at"]:
                    history[index] = row
                    break
            else:
                history.append(row)
        return parse_weight(row)

    def list_weights(
        self, user_id: UUID, start: date | None, end: date | None
    ) -> list[WeightEntry]:
        entries = [
            parse_weight(row) for row in self.store.read(user_id)["weight_history"]
        ]
        return sorted(
            (
                entry
                for entry in entries
                if (start is None or entry.logged_at >= start)
                and (end is None or entry.logged_at <= end)
            ),
            key=lambda entry: entry.logged_at,
        )

    def get_weight(self, user_id: UUID, day: date) -> WeightEntry | None:
        for row in self.store.read(user_id)["weight_history"]:
            if row["logged_at"] == day.isoformat():
                return parse_weight(row)
        return None


@dataclass
class LocalPlannerStateRepository(PlannerStateRepository):
    """Templates, days and the selected date stored in the local document."""

    store: LocalStateStore

    def load_state(self, user_id: UUID) -> PlannerState | None:
        section = self.store.read(user_id)
        if section.get("selected_date") is None:
            return None
        return load_planner_state(section)

    def save_state(self, user_id: UUID, state: PlannerState) -> None:
        with self.store.update(user_id) as section:
            section.update(dump_planner_state(state))


@dataclass
class LocalAuthProvider(AuthProvider):
    """Single-user auth: one fixed user, optionally behind a shared token."""

    user_id: UUID
    access_token: str | None = None

    def get_user_id(self, access_token: str | None) -> UUID | None:
        if self.access_token is not None and access_token != self.access_token:
            return None
        return self.user_id
