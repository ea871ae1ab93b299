"""Supabase implementation for the user food library."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from fityo.adapters.serialization import parse_food
from fityo.adapters.supabase_errors import storage_errors
from fityo.domain.errors import StorageFailure
from fityo.domain.nutrition import NutrientProfile
from fityo.services.library import FoodLibraryRepository

_FOOD_COLUMNS = (
    "id, name, protein_per_100g, carbs_per_100g, fat_per_100g, "
    "calories_per_100g, created_at"
)


@dataclass
class SupabaseFoodLibraryRepository(FoodLibraryRepository):
    """Supabase-backed repository for ``foods_library``."""

    client: Client

    def list_foods(self, user_id: UUID) -> list[NutrientProfile]:
        """Return the user's foods, newest first."""
        with storage_errors("fetch foods"):
            response = (
                self.client.table("foods_library")
                .select(_FOOD_COLUMNS)
                .eq("user_id", str(user_id))
                .order("created_at", desc=True)
                .execute()
            )
        return [parse_food(row) for row in response.data or []]

    def get_food(self, user_id: UUID, food_id: UUID) -> NutrientProfile | None:
        """Return a food owned by the user, if present."""
        with storage_errors("fetch food"):
            response = (
                self.client.table("foods_library")
                .select(_FOOD_COLUMNS)
                .eq("id", str(food_id))
                .eq("user_id", str(user_id))
                .limit(1)
                .execute()
            )
        if not response.data:
            return None
        return parse_food(response.data[0])

    def create_food(
        self, user_id: UUID, payload: dict[str, object]
    ) -> NutrientProfile:
        """Insert a food row and return it."""
        with storage_errors("add food"):
            response = (
                self.client.table("foods_library")
                .insert({"user_id": str(user_id), **payload})
                .execute()
            )
        if not response.data:
            raise StorageFailure("Failed to add food")
        return parse_food(response.data[0])

    def update_food(
        self, user_id: UUID, food_id: UUID, payload: dict[str, object]
    ) -> NutrientProfile | None:
        """Update a food row owned by the user."""
        with storage_errors("update food"):
            response = (
                self.client.table("foods_library")
                .update(payload)
                .eq("id", str(food_id))
                .eq("user_id", str(user_id))
                .execute()
            )
        if not response.data:
            return None
        return parse_food(response.data[0])

    def delete_food(self, user_id: UUID, food_id: UUID) -> None:
        """Delete a food row owned by the user."""
        with storage_errors("delete food"):
            (
                self.client.table("foods_library")
                .delete()
                .eq("id", str(food_id))
                .eq("user_id", str(user_id))
                .execute()
            )
