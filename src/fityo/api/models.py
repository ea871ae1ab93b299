"""Request bodies accepted by the HTTP API."""

from datetime import date
from uuid import UUID

from pydantic import BaseModel, Field

from fityo.domain.nutrition import MacroGoals
from fityo.domain.planner import MealPlan


class MacroGoalsIn(BaseModel):
    """Macro targets in kcal and grams."""

    calories: float = Field(ge=0)
    protein: float = Field(ge=0)
    carbs: float = Field(ge=0)
    fat: float = Field(ge=0)

    def to_domain(self) -> MacroGoals:
        return MacroGoals(
            calories=self.calories,
            protein=self.protein,
            carbs=self.carbs,
            fat=self.fat,
        )


class FoodIn(BaseModel):
    """A new library food, per 100 g."""

    name: str = Field(min_length=1)
    protein_per_100g: float = Field(ge=0)
    carbs_per_100g: float = Field(ge=0)
    fat_per_100g: float = Field(ge=0)
    calories_per_100g: float = Field(ge=0)


class FoodUpdate(BaseModel):
    """Partial edit of a library food."""

    name: str | None = Field(default=None, min_length=1)
    protein_per_100g: float | None = Field(default=None, ge=0)
    carbs_per_100g: float | None = Field(default=None, ge=0)
    fat_per_100g: float | None = Field(default=None, ge=0)
    calories_per_100g: float | None = Field(default=None, ge=0)


class FoodLogIn(BaseModel):
    """Grams of a food eaten at a meal."""

    food_id: UUID
    meal_type: str = Field(min_length=1)
    amount_grams: float = Field(ge=0)
    logged_at: date | None = None


class WeightIn(BaseModel):
    weight: float = Field(gt=0)
    logged_at: date | None = None


class MealPlanIn(BaseModel):
    name: str = Field(min_length=1)
    goals: MacroGoalsIn

    def to_domain(self) -> MealPlan:
        return MealPlan(name=self.name, goals=self.goals.to_domain())


class TemplateIn(BaseModel):
    """A new day template."""

    name: str = Field(min_length=1)
    daily_goals: MacroGoalsIn
    meals: list[MealPlanIn] = Field(min_length=1)
    is_default: bool = False


class TemplateUpdate(BaseModel):
    """Partial edit of a template."""

    name: str | None = Field(default=None, min_length=1)
    daily_goals: MacroGoalsIn | None = None
    meals: list[MealPlanIn] | None = Field(default=None, min_length=1)
    is_default: bool | None = None

    def to_changes(self) -> dict[str, object]:
        changes: dict[str, object] = {}
        if self.name is not None:
            changes["name"] = self.name
        if self.daily_goals is not None:
            changes["daily_goals"] = self.daily_goals.to_domain()
        if self.meals is not None:
            changes["meals"] = [meal.to_domain() for meal in self.meals]
        if self.is_default is not None:
            changes["is_default"] = self.is_default
        return changes


class ApplyTemplateIn(BaseModel):
    """Switch a day to a template; ``confirm`` acknowledges losing its logs."""

    template_id: UUID
    confirm: bool = False


class MealIn(BaseModel):
    name: str = Field(min_length=1)
    goals: MacroGoalsIn


class MealUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1)
    goals: MacroGoalsIn | None = None


class ReorderIn(BaseModel):
    from_index: int = Field(ge=0)
    to_index: int = Field(ge=0)


class SelectDateIn(BaseModel):
    selected_date: date
