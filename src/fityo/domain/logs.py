"""Domain models for food logs."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from fityo.domain.nutrition import NutrientProfile


@dataclass(frozen=True)
class FoodLog:
    """One recorded consumption of a library food."""

    id: UUID
    food_id: UUID
    meal_type: str
    amount_grams: float
    logged_at: date


@dataclass(frozen=True)
class FoodLogWithProfile:
    """Food log joined with its profile; ``food`` is None once the food is deleted."""

    log: FoodLog
    food: NutrientProfile | None

    def matches_meal(self, meal_name: str) -> bool:
        """Return True when the log belongs to the named meal."""
        return self.log.meal_type.lower() == meal_name.lower()
