"""Food log service."""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Protocol
from uuid import UUID

from fityo.domain.errors import InvalidDate
from fityo.domain.logs import FoodLog, FoodLogWithProfile
from fityo.services.clock import Clock

logger = logging.getLogger(__name__)


class FoodLogRepository(Protocol):
    """Persistence interface for food logs."""

    def create_log(  # noqa: PLR0913
        self,
        user_id: UUID,
        food_id: UUID,
        meal_type: str,
        amount_grams: float,
        logged_at: date,
    ) -> FoodLog:
        """Append a log entry and return it."""

    def get_log(self, user_id: UUID, log_id: UUID) -> FoodLog | None:
        """Return a log entry by id."""

    def list_logs_for_date(
        self, user_id: UUID, day: date
    ) -> list[FoodLogWithProfile]:
        """Return the day's logs joined with their food, in creation order."""

    def list_logs_for_range(
        self, user_id: UUID, start: date, end: date
    ) -> list[FoodLogWithProfile]:
        """Return logs between two dates inclusive, ordered by date."""

    def delete_log(self, user_id: UUID, log_id: UUID) -> None:
        """Delete a log entry; missing ids are not an error."""

    def delete_logs_for_date(self, user_id: UUID, day: date) -> None:
        """Delete every log entry of a date."""


@dataclass
class FoodLogService:
    """Service for recording and querying consumed food."""

    repository: FoodLogRepository
    clock: Clock

    def log_food(
        self,
        user_id: UUID,
        meal_type: str,
        food_id: UUID,
        amount_grams: float,
        day: date | None = None,
    ) -> FoodLog:
        """Log grams of a food against a meal name for today."""
        target = day or self.clock.today()
        self._require_today(target)
        return self.repository.create_log(
            user_id=user_id,
            food_id=food_id,
            meal_type=meal_type,
            amount_grams=amount_grams,
            logged_at=target,
        )

    def get_logs_for_date(self, user_id: UUID, day: date) -> list[FoodLogWithProfile]:
        """Return the logs for a date; dangling food references are kept.

        Future dates are not accessible and raise InvalidDate.
        """
        today = self.clock.today()
        if day > today:
            raise InvalidDate(day, today, f"{day.isoformat()} is in the future")
        return self.repository.list_logs_for_date(user_id, day)

    def get_logs_for_range(
        self, user_id: UUID, start: date, end: date
    ) -> list[FoodLogWithProfile]:
        """Return logs in an inclusive date range."""
        return self.repository.list_logs_for_range(user_id, start, end)

    def has_logs(self, user_id: UUID, day: date) -> bool:
        """Return True when anything was logged on the date."""
        return bool(self.repository.list_logs_for_date(user_id, day))

    def delete_food_log(self, user_id: UUID, log_id: UUID) -> None:
        """Delete a log entry from today; unknown ids succeed silently."""
        existing = self.repository.get_log(user_id, log_id)
        if existing is None:
            return
        self._require_today(existing.logged_at)
        self.repository.delete_log(user_id, log_id)

    def clear_logs_for_date(self, user_id: UUID, day: date) -> None:
        """Remove all logs of a date."""
        self.repository.delete_logs_for_date(user_id, day)
        logger.info("Cleared food logs for user %s on %s", user_id, day)

    def _require_today(self, day: date) -> None:
        today = self.clock.today()
        if day != today:
            raise InvalidDate(day, today)
