"""JSON serialization of domain objects for API responses."""

from fityo.domain.logs import FoodLog, FoodLogWithProfile
from fityo.domain.nutrition import MacroAmounts, MacroGoals, NutrientProfile
from fityo.domain.planner import DayData, Template
from fityo.domain.weight import WeightEntry
from fityo.services.dashboard import DayView, MealView
from fityo.services.history import HistoryView


def serialize_goals(goals: MacroGoals) -> dict[str, float]:
    return {
        "calories": goals.calories,
        "protein": goals.protein,
        "carbs": goals.carbs,
        "fat": goals.fat,
    }


def serialize_amounts(amounts: MacroAmounts) -> dict[str, float]:
    return {
        "protein": amounts.protein,
        "carbs": amounts.carbs,
        "fat": amounts.fat,
        "calories": amounts.calories,
    }


def serialize_food(food: NutrientProfile) -> dict[str, object]:
    return {
        "id": str(food.id),
        "name": food.name,
        "protein_per_100g": food.protein_per_100g,
        "carbs_per_100g": food.carbs_per_100g,
        "fat_per_100g": food.fat_per_100g,
        "calories_per_100g": food.calories_per_100g,
        "created_at": food.created_at.isoformat() if food.created_at else None,
    }


def serialize_food_log(log: FoodLog) -> dict[str, object]:
    return {
        "id": str(log.id),
        "food_id": str(log.food_id),
        "meal_type": log.meal_type,
        "amount_grams": log.amount_grams,
        "logged_at": log.logged_at.isoformat(),
    }


def serialize_log(entry: FoodLogWithProfile) -> dict[str, object]:
    """Serialize a log with its food; a deleted food is reported as null."""
    return {
        **serialize_food_log(entry.log),
        "food": serialize_food(entry.food) if entry.food else None,
    }


def serialize_weight(entry: WeightEntry | None) -> dict[str, object] | None:
    if entry is None:
        return None
    return {"logged_at": entry.logged_at.isoformat(), "weight": entry.weight}


def serialize_template(template: Template) -> dict[str, object]:
    return {
        "id": str(template.id),
        "name": template.name,
        "is_default": template.is_default,
        "daily_goals": serialize_goals(template.daily_goals),
        "meals": [
            {"name": meal.name, "goals": serialize_goals(meal.goals)}
            for meal in template.meals
        ],
    }


def serialize_day(day: DayData | None) -> dict[str, object] | None:
    if day is None:
        return None
    return {
        "date": day.day.isoformat(),
        "daily_goals": serialize_goals(day.daily_goals),
        "meals": [
            {
                "id": str(meal.id),
                "name": meal.name,
                "goals": serialize_goals(meal.goals),
            }
            for meal in day.meals
        ],
        "template_selected": day.template_selected,
    }


def _serialize_meal_view(view: MealView) -> dict[str, object]:
    return {
        "id": str(view.meal.id),
        "name": view.meal.name,
        "goals": serialize_goals(view.meal.goals),
        "totals": serialize_amounts(view.totals),
        "calorie_progress": view.calorie_progress,
        "items": [
            {
                "log_id": str(item.log_id),
                "food_id": str(item.food_id),
                "food_name": item.food_name,
                "amount_grams": item.amount_grams,
                "macros": serialize_amounts(item.macros),
            }
            for item in view.items
        ],
    }


def serialize_day_view(view: DayView) -> dict[str, object]:
    return {
        "date": view.day.isoformat(),
        "editable": view.editable,
        "needs_template_selection": view.needs_template_selection,
        "goals": serialize_goals(view.goals),
        "totals": serialize_amounts(view.totals),
        "calorie_progress": view.calorie_progress,
        "macro_progress": {
            "protein": view.macro_progress.protein,
            "carbs": view.macro_progress.carbs,
            "fat": view.macro_progress.fat,
        },
        "meals": [_serialize_meal_view(meal) for meal in view.meals],
    }


def serialize_history(view: HistoryView) -> dict[str, object]:
    return {
        "period": view.period.value,
        "start": view.start.isoformat(),
        "end": view.end.isoformat(),
        "daily": [
            {"date": entry.day.isoformat(), **serialize_amounts(entry.totals)}
            for entry in view.daily
        ],
        "averages": serialize_amounts(view.averages),
        "days_tracked": view.days_tracked,
        "weights": [serialize_weight(entry) for entry in view.weights],
        "today_weight": serialize_weight(view.today_weight),
    }
