"""Meal plan composition service."""

import logging
from dataclasses import dataclass, replace
from datetime import UTC, date, datetime, timedelta
from uuid import uuid4

from nutrient_planner.domain.enums import Goal, MealType, PlanStatus, PlanType
from nutrient_planner.domain.errors import MealNotFoundError, ValidationError, Violation
from nutrient_planner.domain.meals import MealTemplate
from nutrient_planner.domain.plans import DailyMeal, Meal, MealPlan
from nutrient_planner.domain.requests import (
    FoodItemRequest,
    MealPlanDraft,
    MealPlanUpdate,
)
from nutrient_planner.services.calculator import (
    recompute_totals,
    sum_calories,
    sum_macros,
)
from nutrient_planner.services.meals import MealTemplateService
from nutrient_planner.services.plan_validator import PlanValidator
from nutrient_planner.services.validation import check_choice

_logger = logging.getLogger(__name__)


@dataclass
class MealPlanService:
    """Creates meal plans and keeps day and plan totals consistent."""

    validator: PlanValidator
    meal_service: MealTemplateService

    def create_plan(
        self, owner_id: str, draft: MealPlanDraft, today: date | None = None
    ) -> MealPlan:
        """Validate a plan definition and lay out one empty day per date."""
        self.validator.validate_create(draft, today=today).raise_for_violations()
        now = datetime.now(tz=UTC)
        plan = MealPlan(
            id=str(uuid4()),
            owner_id=owner_id,
            name=draft.name.strip(),
            description=draft.description,
            start_date=draft.start_date,
            end_date=draft.end_date,
            plan_type=PlanType(draft.plan_type),
            goal=Goal(draft.goal),
            target_calories=draft.target_calories,
            target_macros=draft.target_macros,
            daily_meals=tuple(
                _empty_day(day) for day in _date_range(draft.start_date, draft.end_date)
            ),
            status=PlanStatus.DRAFT,
            created_at=now,
            updated_at=now,
        )
        _logger.info(
            "Meal plan created: id=%s days=%s", plan.id, len(plan.daily_meals)
        )
        return plan

    def meal_from_template(
        self,
        template: MealTemplate,
        meal_type: MealType | None = None,
        time: str | None = None,
        notes: str = "",
    ) -> Meal:
        """Instantiate a plan meal from a template's line items."""
        time_violation = _check_time(time)
        if time_violation is not None:
            raise ValidationError([time_violation])
        return Meal(
            id=str(uuid4()),
            meal_type=meal_type or template.meal_type,
            food_items=template.food_items,
            totals=recompute_totals(template.food_items),
            time=time,
            template_id=template.id,
            notes=notes,
        )

    def build_meal(
        self,
        meal_type: str,
        requests: list[FoodItemRequest],
        time: str | None = None,
        notes: str = "",
    ) -> Meal:
        """Compose a plan meal directly from requested foods."""
        result = self.meal_service.validator.validate_add_items(requests)
        result.add(check_choice("meal_type", MealType, meal_type))
        result.add(_check_time(time))
        result.raise_for_violations()
        items = self.meal_service.build_line_items(requests)
        return Meal(
            id=str(uuid4()),
            meal_type=MealType(meal_type),
            food_items=tuple(items),
            totals=recompute_totals(items),
            time=time,
            notes=notes,
        )

    def add_meal(self, plan: MealPlan, day: date, meal: Meal) -> MealPlan:
        """Schedule a meal on a plan day."""
        if plan.find_day(day) is None:
            raise ValidationError(
                [
                    Violation(
                        "date",
                        "date is outside the plan's range",
                        value=day.isoformat(),
                        bound=[plan.start_date.isoformat(), plan.end_date.isoformat()],
                    )
                ]
            )
        days = tuple(
            replace(daily, meals=daily.meals + (meal,)) if daily.date == day else daily
            for daily in plan.daily_meals
        )
        return self.recompute_totals(replace(plan, daily_meals=days))

    def remove_meal(self, plan: MealPlan, meal_id: str) -> MealPlan:
        _find_meal(plan, meal_id)
        days = tuple(
            replace(
                daily, meals=tuple(meal for meal in daily.meals if meal.id != meal_id)
            )
            for daily in plan.daily_meals
        )
        return self.recompute_totals(replace(plan, daily_meals=days))

    def set_meal_completion(
        self, plan: MealPlan, meal_id: str, completed: bool
    ) -> MealPlan:
        """Mark a meal done or not done; a day is done when all its meals are."""
        _find_meal(plan, meal_id)
        days = []
        for daily in plan.daily_meals:
            meals = tuple(
                replace(meal, is_completed=completed) if meal.id == meal_id else meal
                for meal in daily.meals
            )
            days.append(
                replace(
                    daily,
                    meals=meals,
                    is_completed=bool(meals) and all(m.is_completed for m in meals),
                )
            )
        return replace(plan, daily_meals=tuple(days), updated_at=datetime.now(tz=UTC))

    def update_plan(
        self, plan: MealPlan, update: MealPlanUpdate, today: date | None = None
    ) -> MealPlan:
        """Apply supplied fields; a changed date range re-lays the days."""
        self.validator.validate_update(
            update, plan.start_date, plan.end_date, today=today
        ).raise_for_violations()
        updated = plan
        if update.name:
            updated = replace(updated, name=update.name.strip())
        if update.description:
            updated = replace(updated, description=update.description)
        if update.plan_type:
            updated = replace(updated, plan_type=PlanType(update.plan_type))
        if update.goal:
            updated = replace(updated, goal=Goal(update.goal))
        if update.target_calories is not None:
            updated = replace(updated, target_calories=update.target_calories)
        if update.status:
            updated = replace(updated, status=PlanStatus(update.status))
        if update.start_date is not None or update.end_date is not None:
            start = update.start_date or plan.start_date
            end = update.end_date or plan.end_date
            existing = {daily.date: daily for daily in plan.daily_meals}
            days = tuple(
                existing.get(day) or _empty_day(day) for day in _date_range(start, end)
            )
            updated = replace(updated, start_date=start, end_date=end, daily_meals=days)
        return self.recompute_totals(replace(updated, updated_at=datetime.now(tz=UTC)))

    def recompute_totals(self, plan: MealPlan) -> MealPlan:
        """Rebuild every meal, day and plan total from the line items."""
        days = []
        for daily in plan.daily_meals:
            meals = tuple(
                replace(meal, totals=recompute_totals(meal.food_items))
                for meal in daily.meals
            )
            days.append(
                replace(
                    daily,
                    meals=meals,
                    total_calories=sum_calories(meal.calories for meal in meals),
                    total_macros=sum_macros(meal.macros for meal in meals),
                )
            )
        return replace(
            plan,
            daily_meals=tuple(days),
            total_calories=sum_calories(daily.total_calories for daily in days),
        )


def _date_range(start: date, end: date) -> list[date]:
    return [start + timedelta(days=offset) for offset in range((end - start).days + 1)]


def _empty_day(day: date) -> DailyMeal:
    return DailyMeal(date=day, day_of_week=day.strftime("%A").lower())


def _check_time(time: str | None) -> Violation | None:
    if time is None:
        return None
    try:
        datetime.strptime(time, "%H:%M")
    except ValueError:
        return Violation("time", "must be formatted as HH:MM", value=time)
    return None


def _find_meal(plan: MealPlan, meal_id: str) -> Meal:
    for daily in plan.daily_meals:
        for meal in daily.meals:
            if meal.id == meal_id:
                return meal
    raise MealNotFoundError(meal_id)
