"""Domain models for multi-day meal plans."""

from dataclasses import dataclass, field
from datetime import date, datetime

from nutrient_planner.domain.enums import Goal, MealType, PlanStatus, PlanType
from nutrient_planner.domain.meals import MealTemplateFoodItem, MealTotals
from nutrient_planner.domain.nutrition import MacroNutrients


@dataclass(frozen=True)
class Meal:
    """A single meal within a plan day."""

    id: str
    meal_type: MealType
    food_items: tuple[MealTemplateFoodItem, ...]
    totals: MealTotals
    time: str | None = None
    template_id: str | None = None
    notes: str = ""
    is_completed: bool = False

    @property
    def calories(self) -> float:
        return self.totals.calories

    @property
    def macros(self) -> MacroNutrients:
        return self.totals.macros


@dataclass(frozen=True)
class DailyMeal:
    """All meals scheduled for one calendar day."""

    date: date
    day_of_week: str
    meals: tuple[Meal, ...] = ()
    total_calories: float = 0.0
    total_macros: MacroNutrients = field(default_factory=MacroNutrients)
    notes: str = ""
    is_completed: bool = False


@dataclass(frozen=True)
class MealPlan:
    """An eating schedule spanning a date range."""

    id: str
    owner_id: str
    name: str
    start_date: date
    end_date: date
    plan_type: PlanType
    goal: Goal
    target_calories: float
    daily_meals: tuple[DailyMeal, ...]
    target_macros: MacroNutrients = field(default_factory=MacroNutrients)
    description: str = ""
    total_calories: float = 0.0
    status: PlanStatus = PlanStatus.DRAFT
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def find_day(self, day: date) -> DailyMeal | None:
        for daily in self.daily_meals:
            if daily.date == day:
                return daily
        return None
