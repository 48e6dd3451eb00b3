"""Tests for meal plan composition."""

from datetime import timedelta

import pytest

from nutrient_planner.domain.enums import MealType, PlanStatus
from nutrient_planner.domain.errors import MealNotFoundError, ValidationError
from nutrient_planner.domain.plans import MealPlan
from nutrient_planner.domain.requests import FoodItemRequest, MealPlanUpdate
from nutrient_planner.services.meals import MealTemplateService
from nutrient_planner.services.plans import MealPlanService
from tests.conftest import OWNER_ID, TODAY, make_plan_draft, make_template_draft


def _plan(plan_service: MealPlanService) -> MealPlan:
    return plan_service.create_plan(OWNER_ID, make_plan_draft(), today=TODAY)


def test_create_plan_lays_out_days(plan_service: MealPlanService) -> None:
    plan = _plan(plan_service)

    assert len(plan.daily_meals) == 7
    assert plan.daily_meals[0].date == TODAY
    assert plan.daily_meals[0].day_of_week == "tuesday"
    assert plan.daily_meals[-1].date == TODAY + timedelta(days=6)
    assert plan.status == PlanStatus.DRAFT
    assert plan.total_calories == 0


def test_create_plan_rejects_invalid_draft(plan_service: MealPlanService) -> None:
    draft = make_plan_draft(target_calories=100, goal="bulk")

    with pytest.raises(ValidationError) as exc_info:
        plan_service.create_plan(OWNER_ID, draft, today=TODAY)

    assert exc_info.value.fields == ["goal", "target_calories"]


def test_add_meal_from_template_updates_totals(
    plan_service: MealPlanService, meal_service: MealTemplateService
) -> None:
    template = meal_service.create_template(OWNER_ID, make_template_draft())
    plan = _plan(plan_service)
    day = TODAY + timedelta(days=2)

    meal = plan_service.meal_from_template(template, time="12:30")
    updated = plan_service.add_meal(plan, day, meal)

    daily = updated.find_day(day)
    assert daily is not None
    assert daily.meals[0].template_id == template.id
    assert daily.meals[0].meal_type == MealType.LUNCH
    assert daily.total_calories == pytest.approx(template.total_calories)
    assert daily.total_macros.protein == pytest.approx(template.total_macros.protein)
    assert updated.total_calories == pytest.approx(template.total_calories)
    assert plan.total_calories == 0


def test_add_meal_outside_range_rejected(
    plan_service: MealPlanService, meal_service: MealTemplateService
) -> None:
    template = meal_service.create_template(OWNER_ID, make_template_draft())
    plan = _plan(plan_service)
    meal = plan_service.meal_from_template(template)

    with pytest.raises(ValidationError) as exc_info:
        plan_service.add_meal(plan, TODAY + timedelta(days=30), meal)

    assert exc_info.value.fields == ["date"]


def test_build_meal_from_requests(plan_service: MealPlanService) -> None:
    meal = plan_service.build_meal(
        "breakfast", [FoodItemRequest("apple", "piece", 2)], time="07:45"
    )

    assert meal.meal_type == MealType.BREAKFAST
    assert meal.calories == pytest.approx(63.8 * 3.64)
    assert meal.time == "07:45"


@pytest.mark.parametrize(
    ("meal_type", "time", "field"),
    [("brunch", None, "meal_type"), ("dinner", "25:00", "time")],
)
def test_build_meal_rejects_bad_input(
    plan_service: MealPlanService, meal_type: str, time: str | None, field: str
) -> None:
    with pytest.raises(ValidationError) as exc_info:
        plan_service.build_meal(
            meal_type, [FoodItemRequest("apple", "piece", 1)], time=time
        )

    assert exc_info.value.fields == [field]


def test_meal_completion_marks_day(plan_service: MealPlanService) -> None:
    plan = _plan(plan_service)
    breakfast = plan_service.build_meal(
        "breakfast", [FoodItemRequest("apple", "gram", 150)]
    )
    lunch = plan_service.build_meal("lunch", [FoodItemRequest("rice", "cup", 1)])
    plan = plan_service.add_meal(plan, TODAY, breakfast)
    plan = plan_service.add_meal(plan, TODAY, lunch)

    partly = plan_service.set_meal_completion(plan, breakfast.id, True)
    fully = plan_service.set_meal_completion(partly, lunch.id, True)

    assert not partly.daily_meals[0].is_completed
    assert fully.daily_meals[0].is_completed
    assert not fully.daily_meals[1].is_completed
    with pytest.raises(MealNotFoundError):
        plan_service.set_meal_completion(plan, "missing", True)


def test_remove_meal_resets_totals(plan_service: MealPlanService) -> None:
    plan = _plan(plan_service)
    meal = plan_service.build_meal("snack", [FoodItemRequest("apple", "piece", 1)])
    plan = plan_service.add_meal(plan, TODAY, meal)

    emptied = plan_service.remove_meal(plan, meal.id)

    assert emptied.daily_meals[0].meals == ()
    assert emptied.daily_meals[0].total_calories == 0
    assert emptied.total_calories == 0


def test_update_plan_extends_days_and_keeps_meals(
    plan_service: MealPlanService,
) -> None:
    plan = _plan(plan_service)
    meal = plan_service.build_meal(
        "dinner", [FoodItemRequest("chicken", "gram", 200)]
    )
    plan = plan_service.add_meal(plan, TODAY + timedelta(days=1), meal)

    updated = plan_service.update_plan(
        plan,
        MealPlanUpdate(end_date=TODAY + timedelta(days=13), status="active"),
        today=TODAY,
    )

    assert len(updated.daily_meals) == 14
    assert updated.status == PlanStatus.ACTIVE
    assert updated.daily_meals[1].meals == (meal,)
    assert updated.total_calories == pytest.approx(330)


def test_update_plan_rejects_unknown_status(plan_service: MealPlanService) -> None:
    plan = _plan(plan_service)

    with pytest.raises(ValidationError) as exc_info:
        plan_service.update_plan(plan, MealPlanUpdate(status="paused"), today=TODAY)

    assert exc_info.value.fields == ["status"]
