"""Supabase repository for daily food logs."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from fityo.adapters.serialization import parse_log, parse_log_with_food
from fityo.adapters.supabase_errors import storage_errors
from fityo.domain.errors import StorageFailure
from fityo.domain.logs import FoodLog, FoodLogWithProfile
from fityo.services.food_logs import FoodLogRepository

_LOG_WITH_FOOD = (
    "id, food_id, meal_type, amount_grams, logged_at, "
    "foods_library (id, name, protein_per_100g, carbs_per_100g, fat_per_100g, "
    "calories_per_100g)"
)


@dataclass
class SupabaseFoodLogRepository(FoodLogRepository):
    """Supabase implementation for ``daily_logs``."""

    client: Client

    def create_log(  # noqa: PLR0913
        self,
        user_id: UUID,
        food_id: UUID,
        meal_type: str,
        amount_grams: float,
        logged_at: date,
    ) -> FoodLog:
        """Insert a log row and return it."""
        with storage_errors("add food log"):
            response = (
                self.client.table("daily_logs")
                .insert(
                    {
                        "user_id": str(user_id),
                        "food_id": str(food_id),
                        "meal_type": meal_type,
                        "amount_grams": amount_grams,
                        "logged_at": logged_at.isoformat(),
                    }
                )
                .execute()
            )
        if not response.data:
            raise StorageFailure("Failed to add food log")
        return parse_log(response.data[0])

    def get_log(self, user_id: UUID, log_id: UUID) -> FoodLog | None:
        """Return a log row by id."""
        with storage_errors("fetch food log"):
            response = (
                self.client.table("daily_logs")
                .select("id, food_id, meal_type, amount_grams, logged_at")
                .eq("id", str(log_id))
                .eq("user_id", str(user_id))
                .limit(1)
                .execute()
            )
        if not response.data:
            return None
        return parse_log(response.data[0])

    def list_logs_for_date(
        self, user_id: UUID, day: date
    ) -> list[FoodLogWithProfile]:
        """Return the day's logs with their foods, oldest first."""
        with storage_errors("fetch logs"):
            response = (
                self.client.table("daily_logs")
                .select(_LOG_WITH_FOOD)
                .eq("user_id", str(user_id))
                .eq("logged_at", day.isoformat())
                .order("created_at", desc=False)
                .execute()
            )
        return [parse_log_with_food(row) for row in response.data or []]

    def list_logs_for_range(
        self, user_id: UUID, start: date, end: date
    ) -> list[FoodLogWithProfile]:
        """Return logs between two dates inclusive, ordered by date."""
        with storage_errors("fetch logs for range"):
            response = (
                self.client.table("daily_logs")
                .select(_LOG_WITH_FOOD)
                .eq("user_id", str(user_id))
                .gte("logged_at", start.isoformat())
                .lte("logged_at", end.isoformat())
                .order("logged_at", desc=False)
                .execute()
            )
        return [parse_log_with_food(row) for row in response.data or []]

    def delete_log(self, user_id: UUID, log_id: UUID) -> None:
        """Delete a log row owned by the user."""
        with storage_errors("delete food log"):
            (
                self.client.table("daily_logs")
                .delete()
                .eq("id", str(log_id))
                .eq("user_id", str(user_id))
                .execute()
            )

    def delete_logs_for_date(self, user_id: UUID, day: date) -> None:
        """Delete all of the user's logs for a date."""
        with storage_errors("clear food logs"):
            (
                self.client.table("daily_logs")
                .delete()
                .eq("user_id", str(user_id))
                .eq("logged_at", day.isoformat())
                .execute()
            )
