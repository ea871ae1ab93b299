"""Supabase repository for weight history."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from fityo.adapters.serialization import parse_weight
from fityo.adapters.supabase_errors import storage_errors
from fityo.domain.weight import WeightEntry
from fityo.services.weights import WeightRepository


@dataclass
class SupabaseWeightRepository(WeightRepository):
    """Supabase implementation for ``weight_history``."""

    client: Client

    def upsert_weight(self, user_id: UUID, day: date, weight: float) -> WeightEntry:
        """Insert or overwrite the weight on the (user_id, logged_at) key."""
        with storage_errors("log weight"):
            response = (
                self.client.table("weight_history")
                .upsert(
                    {
                        "user_id": str(user_id),
                        "weight": weight,
                        "logged_at": day.isoformat(),
                    },
                    on_conflict="user_id,logged_at",
                )
                .execute()
            )
        if not response.data:
            return WeightEntry(logged_at=day, weight=weight)
        return parse_weight(response.data[0])

    def list_weights(
        self, user_id: UUID, start: date | None, end: date | None
    ) -> list[WeightEntry]:
        """Return weights ordered by date, optionally bounded."""
        query = (
            self.client.table("weight_history")
            .select("id, weight, logged_at")
            .eq("user_id", str(user_id))
        )
        if start is not None:
            query = query.gte("logged_at", start.isoformat())
        if end is not None:
            query = query.lte("logged_at", end.isoformat())
        with storage_errors("fetch weight history"):
            response = query.order("logged_at", desc=False).execute()
        return [parse_weight(row) for row in response.data or []]

    def get_weight(self, user_id: UUID, day: date) -> WeightEntry | None:
        """Return the weight logged on a date, if any."""
        with storage_errors("fetch weight"):
            response = (
                self.client.table("weight_history")
                .select("id, weight, logged_at")
                .eq("user_id", str(user_id))
                .eq("logged_at", day.isoformat())
                .limit(1)
                .execute()
            )
        if not response.data:
            return None
        return parse_weight(response.data[0])
