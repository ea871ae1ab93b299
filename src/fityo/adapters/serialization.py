"""Row and document conversions shared by the storage adapters."""

from datetime import date, datetime
from uuid import UUID

from fityo.domain.logs import FoodLog, FoodLogWithProfile
from fityo.domain.nutrition import MacroGoals, NutrientProfile
from fityo.domain.planner import DayData, Meal, MealPlan, PlannerState, Template
from fityo.domain.weight import WeightEntry

STORAGE_VERSION = "fityo-storage-v3"


def parse_food(row: dict[str, object]) -> NutrientProfile:
    """Parse a ``foods_library`` row into a domain model."""
    created_raw = row.get("created_at")
    return NutrientProfile(
        id=UUID(str(row["id"])),
        name=str(row.get("name", "")),
        protein_per_100g=float(row.get("protein_per_100g") or 0.0),
        carbs_per_100g=float(row.get("carbs_per_100g") or 0.0),
        fat_per_100g=float(row.get("fat_per_100g") or 0.0),
        calories_per_100g=float(row.get("calories_per_100g") or 0.0),
        created_at=(
            datetime.fromisoformat(created_raw)
            if isinstance(created_raw, str) and created_raw
            else None
        ),
    )


def parse_log(row: dict[str, object]) -> FoodLog:
    """Parse a ``daily_logs`` row."""
    return FoodLog(
        id=UUID(str(row["id"])),
        food_id=UUID(str(row["food_id"])),
        meal_type=str(row.get("meal_type", "")),
        amount_grams=float(row.get("amount_grams") or 0.0),
        logged_at=date.fromisoformat(str(row["logged_at"])),
    )


def parse_log_with_food(row: dict[str, object]) -> FoodLogWithProfile:
    """Parse a log row carrying an embedded ``foods_library`` record."""
    food_row = row.get("foods_library")
    return FoodLogWithProfile(
        log=parse_log(row),
        food=parse_food(food_row) if isinstance(food_row, dict) else None,
    )


def parse_weight(row: dict[str, object]) -> WeightEntry:
    """Parse a ``weight_history`` row."""
    return WeightEntry(
        logged_at=date.fromisoformat(str(row["logged_at"])),
        weight=float(row.get("weight") or 0.0),
    )


def dump_goals(goals: MacroGoals) -> dict[str, float]:
    return {
        "calories": goals.calories,
        "protein": goals.protein,
        "carbs": goals.carbs,
        "fat": goals.fat,
    }


def load_goals(raw: dict[str, object]) -> MacroGoals:
    return MacroGoals(
        calories=float(raw.get("calories") or 0),
        protein=float(raw.get("protein") or 0),
        carbs=float(raw.get("carbs") or 0),
        fat=float(raw.get("fat") or 0),
    )


def dump_planner_state(state: PlannerState) -> dict[str, object]:
    """Serialize templates, days and the selected date to JSON-ready data."""
    return {
        "selected_date": state.selected_date.isoformat(),
        "templates": [
            {
                "id": str(template.id),
                "name": template.name,
                "is_default": template.is_default,
                "daily_goals": dump_goals(template.daily_goals),
                "meals": [
                    {"name": meal.name, "goals": dump_goals(meal.goals)}
                    for meal in template.meals
                ],
            }
            for template in state.templates
        ],
        "days": [
            {
                "date": entry.day.isoformat(),
                "daily_goals": dump_goals(entry.daily_goals),
                "meals": [
                    {
                        "id": str(meal.id),
                        "name": meal.name,
                        "goals": dump_goals(meal.goals),
                    }
                    for meal in entry.meals
                ],
                "template_selected": entry.template_selected,
            }
            for entry in state.days
        ],
    }


def load_planner_state(payload: dict[str, object]) -> PlannerState:
    """Rebuild a planner state from ``dump_planner_state`` output."""
    templates = tuple(
        Template(
            id=UUID(str(raw["id"])),
            name=str(raw.get("name", "")),
            is_default=bool(raw.get("is_default", False)),
            daily_goals=load_goals(raw.get("daily_goals") or {}),
            meals=tuple(
                MealPlan(name=str(meal["name"]), goals=load_goals(meal["goals"]))
                for meal in raw.get("meals") or []
            ),
        )
        for raw in payload.get("templates") or []
    )
    days = tuple(
        DayData(
            day=date.fromisoformat(str(raw["date"])),
            daily_goals=load_goals(raw.get("daily_goals") or {}),
            meals=tuple(
                Meal(
                    id=UUID(str(meal["id"])),
                    name=str(meal["name"]),
                    goals=load_goals(meal["goals"]),
                )
                for meal in raw.get("meals") or []
            ),
            template_selected=bool(raw.get("template_selected", False)),
        )
        for raw in payload.get("days") or []
    )
    return PlannerState(
        selected_date=date.fromisoformat(str(payload["selected_date"])),
        templates=templates,
        days=days,
    )
