"""Weight tracking service."""

from dataclasses import dataclass
from datetime import date
from typing import Protocol
from uuid import UUID

from fityo.domain.weight import WeightEntry
from fityo.services.clock import Clock


class WeightRepository(Protocol):
    """Persistence interface for weight history."""

    def upsert_weight(self, user_id: UUID, day: date, weight: float) -> WeightEntry:
        """Insert or overwrite the weight for a (user, date) pair."""

    def list_weights(
        self, user_id: UUID, start: date | None, end: date | None
    ) -> list[WeightEntry]:
        """Return weights ordered by date, optionally bounded."""

    def get_weight(self, user_id: UUID, day: date) -> WeightEntry | None:
        """Return the weight for a date, if logged."""


@dataclass
class WeightService:
    """Service for logging and reading body weight."""

    repository: WeightRepository
    clock: Clock

    def log_weight(
        self, user_id: UUID, weight: float, day: date | None = None
    ) -> WeightEntry:
        """Record the weight for a date, replacing any earlier value."""
        return self.repository.upsert_weight(user_id, day or self.clock.today(), weight)

    def get_weight_history(
        self, user_id: UUID, start: date | None = None, end: date | None = None
    ) -> list[WeightEntry]:
        """Return weights in ascending date order."""
        return self.repository.list_weights(user_id, start, end)

    def get_today_weight(self, user_id: UUID) -> WeightEntry | None:
        """Return today's weight, or None when nothing was logged yet."""
        return self.repository.get_weight(user_id, self.clock.today())
