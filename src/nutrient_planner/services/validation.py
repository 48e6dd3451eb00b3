"""Shared helpers for request validators."""

import math
from dataclasses import dataclass, field
from enum import StrEnum

from nutrient_planner.domain.enums import choice_values, parse_choice
from nutrient_planner.domain.errors import Violation, raise_for_violations


@dataclass
class ValidationResult:
    """Violations and non-blocking advisories collected by a validator."""

    violations: list[Violation] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.violations

    def add(self, violation: Violation | None) -> None:
        if violation is not None:
            self.violations.append(violation)

    def raise_for_violations(self) -> None:
        """Raise ValidationError (or ConsistencyError) if anything failed."""
        raise_for_violations(self.violations)


def check_name(field_name: str, value: str, max_length: int) -> Violation | None:
    """Require non-blank text within a length bound."""
    trimmed = value.strip()
    if not trimmed:
        return Violation(field_name, "cannot be empty", value=value)
    if len(trimmed) > max_length:
        return Violation(
            field_name,
            f"exceeds maximum length ({max_length} chars)",
            value=len(trimmed),
            bound=max_length,
        )
    return None


def check_max_length(field_name: str, value: str, max_length: int) -> Violation | None:
    if len(value) > max_length:
        return Violation(
            field_name,
            f"exceeds maximum length ({max_length} chars)",
            value=len(value),
            bound=max_length,
        )
    return None


def check_choice(
    field_name: str, choice: type[StrEnum], raw: object
) -> Violation | None:
    """Require a raw value to be a member of a closed enumeration."""
    if parse_choice(choice, raw) is not None:
        return None
    allowed = choice_values(choice)
    return Violation(
        field_name,
        f"invalid value '{raw}', must be one of: {', '.join(allowed)}",
        value=raw,
        bound=allowed,
    )


def check_range(
    field_name: str,
    value: float,
    minimum: float | None = None,
    maximum: float | None = None,
    unit: str = "",
) -> Violation | None:
    """Require minimum <= value <= maximum for whichever bounds are given."""
    suffix = f" {unit}" if unit else ""
    if not math.isfinite(value):
        return Violation(field_name, "must be a finite number", value=str(value))
    if minimum is not None and value < minimum:
        return Violation(
            field_name,
            f"{value:.2f} is below minimum ({minimum:.2f}{suffix})",
            value=value,
            bound=minimum,
        )
    if maximum is not None and value > maximum:
        return Violation(
            field_name,
            f"{value:.2f} exceeds maximum ({maximum:.2f}{suffix})",
            value=value,
            bound=maximum,
        )
    return None


def first_violation(*violations: Violation | None) -> Violation | None:
    for violation in violations:
        if violation is not None:
            return violation
    return None
