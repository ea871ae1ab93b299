"""Supabase repository for the per-user planner document."""

import logging
from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from fityo.adapters.serialization import (
    STORAGE_VERSION,
    dump_planner_state,
    load_planner_state,
)
from fityo.adapters.supabase_errors import storage_errors
from fityo.domain.planner import PlannerState
from fityo.services.planner import PlannerStateRepository

logger = logging.getLogger(__name__)


@dataclass
class SupabasePlannerStateRepository(PlannerStateRepository):
    """Stores templates, days and the selected date as one JSON row per user."""

    client: Client

    def load_state(self, user_id: UUID) -> PlannerState | None:
        """Return the stored state, ignoring documents of another version."""
        with storage_errors("fetch planner state"):
            response = (
                self.client.table("planner_state")
                .select("version, state")
                .eq("user_id", str(user_id))
                .limit(1)
                .execute()
            )
        if not response.data:
            return None
        row = response.data[0]
        if row.get("version") != STORAGE_VERSION:
            logger.warning(
                "Ignoring planner state version %s for user %s",
                row.get("version"),
                user_id,
            )
            return None
        return load_planner_state(row.get("state") or {})

    def save_state(self, user_id: UUID, state: PlannerState) -> None:
        """Upsert the user's planner document."""
        with storage_errors("save planner state"):
            self.client.table("planner_state").upsert(
                {
                    "user_id": str(user_id),
                    "version": STORAGE_VERSION,
                    "state": dump_planner_state(state),
                },
                on_conflict="user_id",
            ).execute()
