"""Domain models for weight tracking."""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class WeightEntry:
    """Body weight logged for a calendar day."""

    logged_at: date
    weight: float
