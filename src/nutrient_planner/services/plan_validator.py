"""Structural and temporal rules for meal plan definitions."""

from dataclasses import dataclass
from datetime import UTC, date, datetime

from nutrient_planner.domain.enums import Goal, PlanStatus, PlanType
from nutrient_planner.domain.errors import Violation
from nutrient_planner.domain.requests import MealPlanDraft, MealPlanUpdate
from nutrient_planner.services.validation import (
    ValidationResult,
    check_choice,
    check_max_length,
    check_name,
    check_range,
)


@dataclass
class PlanValidator:
    """Gate for meal plan create and update requests."""

    max_name_length: int = 100
    max_description_length: int = 500
    min_days: int = 1
    max_days: int = 90
    min_calories: float = 500
    max_calories: float = 5000

    def validate_create(
        self, draft: MealPlanDraft, today: date | None = None
    ) -> ValidationResult:
        result = ValidationResult()
        result.add(check_name("name", draft.name, self.max_name_length))
        if draft.description:
            result.add(
                check_max_length(
                    "description", draft.description, self.max_description_length
                )
            )
        result.add(
            self._validate_date_range(
                draft.start_date, draft.end_date, today or _today()
            )
        )
        result.add(check_choice("plan_type", PlanType, draft.plan_type))
        result.add(check_choice("goal", Goal, draft.goal))
        result.add(self._validate_target_calories(draft.target_calories))
        return result

    def validate_update(
        self,
        update: MealPlanUpdate,
        current_start: date,
        current_end: date,
        today: date | None = None,
    ) -> ValidationResult:
        """Validate supplied fields; dates are checked against the merged range.

        Only a newly supplied start date must not be in the past.
        """
        result = ValidationResult()
        if update.name:
            result.add(check_name("name", update.name, self.max_name_length))
        if update.description:
            result.add(
                check_max_length(
                    "description", update.description, self.max_description_length
                )
            )
        if update.start_date is not None or update.end_date is not None:
            result.add(
                self._validate_date_range(
                    update.start_date or current_start,
                    update.end_date or current_end,
                    today or _today(),
                    check_past_start=update.start_date is not None,
                )
            )
        if update.plan_type:
            result.add(check_choice("plan_type", PlanType, update.plan_type))
        if update.goal:
            result.add(check_choice("goal", Goal, update.goal))
        if update.target_calories is not None:
            result.add(self._validate_target_calories(update.target_calories))
        if update.status:
            result.add(check_choice("status", PlanStatus, update.status))
        return result

    def span_days(self, start: date, end: date) -> int:
        """Number of calendar days covered, counting both ends."""
        return (_as_date(end) - _as_date(start)).days + 1

    def _validate_date_range(
        self, start: date, end: date, today: date, check_past_start: bool = True
    ) -> Violation | None:
        start_day = _as_date(start)
        end_day = _as_date(end)
        if check_past_start and start_day < today:
            return Violation(
                "start_date",
                "start date cannot be in the past",
                value=start_day.isoformat(),
                bound=today.isoformat(),
            )
        if end_day <= start_day:
            return Violation(
                "end_date",
                "end date must be after start date",
                value=end_day.isoformat(),
                bound=start_day.isoformat(),
            )
        span = self.span_days(start_day, end_day)
        if span < self.min_days:
            return Violation(
                "end_date",
                f"date range must be at least {self.min_days} day(s)",
                value=span,
                bound=self.min_days,
            )
        if span > self.max_days:
            return Violation(
                "end_date",
                f"date range exceeds maximum ({self.max_days} days)",
                value=span,
                bound=self.max_days,
            )
        return None

    def _validate_target_calories(self, calories: float) -> Violation | None:
        return check_range(
            "target_calories", calories, self.min_calories, self.max_calories
        )


def _today() -> date:
    return datetime.now(tz=UTC).date()


def _as_date(value: date) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value
