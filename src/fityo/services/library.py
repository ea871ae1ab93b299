"""Services for managing the user food library."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from fityo.domain.errors import FoodNotFound
from fityo.domain.nutrition import NutrientProfile

logger = logging.getLogger(__name__)


class FoodLibraryRepository(Protocol):
    """Persistence interface for the user food library."""

    def list_foods(self, user_id: UUID) -> list[NutrientProfile]:
        """Return the user's foods, most recently created first."""

    def get_food(self, user_id: UUID, food_id: UUID) -> NutrientProfile | None:
        """Return a food owned by the user, if present."""

    def create_food(
        self, user_id: UUID, payload: dict[str, object]
    ) -> NutrientProfile:
        """Create a food entry and return it."""

    def update_food(
        self, user_id: UUID, food_id: UUID, payload: dict[str, object]
    ) -> NutrientProfile | None:
        """Update a food entry and return it, or None when it is not owned."""

    def delete_food(self, user_id: UUID, food_id: UUID) -> None:
        """Delete a food entry owned by the user."""


@dataclass
class FoodLibraryService:
    """Application service for library operations."""

    repository: FoodLibraryRepository

    def list_foods(self, user_id: UUID) -> list[NutrientProfile]:
        """Return the user's library."""
        return self.repository.list_foods(user_id)

    def get_food(self, user_id: UUID, food_id: UUID) -> NutrientProfile:
        """Return a single food or raise FoodNotFound."""
        food = self.repository.get_food(user_id, food_id)
        if food is None:
            raise FoodNotFound(str(food_id))
        return food

    def create_food(
        self, user_id: UUID, payload: dict[str, object]
    ) -> NutrientProfile:
        """Create a food from a name and per-100g values."""
        food = self.repository.create_food(user_id, payload)
        logger.info("Created food %s for user %s", food.id, user_id)
        return food

    def update_food(
        self, user_id: UUID, food_id: UUID, payload: dict[str, object]
    ) -> NutrientProfile:
        """Edit an existing food; logs referencing it pick up the new values."""
        food = self.repository.update_food(user_id, food_id, payload)
        if food is None:
            raise FoodNotFound(str(food_id))
        return food

    def delete_food(self, user_id: UUID, food_id: UUID) -> None:
        """Delete a food without touching logs that reference it."""
        self.repository.delete_food(user_id, food_id)
        logger.info("Deleted food %s for user %s", food_id, user_id)
