"""Nutrition domain models and macro arithmetic."""

import math
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class MacroGoals:
    """Daily or per-meal macro targets (kcal and grams)."""

    calories: float
    protein: float
    carbs: float
    fat: float


@dataclass(frozen=True)
class NutrientProfile:
    """A reusable food from the user's library, expressed per 100 g.

    Calories are entered by the user and are not derived from the macros.
    """

    id: UUID
    name: str
    protein_per_100g: float
    carbs_per_100g: float
    fat_per_100g: float
    calories_per_100g: float
    created_at: datetime | None = None


@dataclass(frozen=True)
class MacroAmounts:
    """Absolute nutrient amounts for a consumed portion."""

    protein: float
    carbs: float
    fat: float
    calories: float


ZERO_AMOUNTS = MacroAmounts(protein=0.0, carbs=0.0, fat=0.0, calories=0.0)


def round_half_up(value: float) -> float:
    """Round to the nearest integer, ties away from negative infinity."""
    return float(math.floor(value + 0.5))


def round1(value: float) -> float:
    """Round to one decimal place."""
    return round_half_up(value * 10) / 10


def calculate_macros(profile: NutrientProfile, grams: float) -> MacroAmounts:
    """Scale a per-100g profile to the consumed grams."""
    return MacroAmounts(
        protein=round1(profile.protein_per_100g * grams / 100),
        carbs=round1(profile.carbs_per_100g * grams / 100),
        fat=round1(profile.fat_per_100g * grams / 100),
        calories=round_half_up(profile.calories_per_100g * grams / 100),
    )


def sum_amounts(amounts: Iterable[MacroAmounts]) -> MacroAmounts:
    """Component-wise total of several amounts."""
    total = ZERO_AMOUNTS
    for amount in amounts:
        total = MacroAmounts(
            protein=total.protein + amount.protein,
            carbs=total.carbs + amount.carbs,
            fat=total.fat + amount.fat,
            calories=total.calories + amount.calories,
        )
    return total


def round_day_totals(total: MacroAmounts) -> MacroAmounts:
    """Round macro grams to whole numbers for the day summary."""
    return MacroAmounts(
        protein=round_half_up(total.protein),
        carbs=round_half_up(total.carbs),
        fat=round_half_up(total.fat),
        calories=total.calories,
    )


def progress_percent(current: float, target: float) -> int:
    """Return progress towards a target, capped at 100."""
    if target <= 0:
        return 0
    return int(min(100.0, round_half_up(current / target * 100)))
