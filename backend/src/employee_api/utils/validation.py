"""Declarative field rules and the validator that applies them.

A rule set is an ordered, read-only mapping of field name to ``FieldRule``.
``validate`` walks every rule (it never stops at the first bad field) and
then reports unknown keys, so callers get the complete error list in one
round trip. Each field contributes at most one ``FieldError``: the first
check it fails.
"""

import dataclasses
import math
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import date, datetime
from enum import StrEnum
from types import MappingProxyType
from typing import Any

from email_validator import EmailNotValidError, validate_email

from employee_api.constants.validation import (
    ALLOWED_DEPARTMENTS,
    ALLOWED_EMPLOYEE_STATUSES,
    DEFAULT_EMPLOYEE_STATUS,
    ISO_DATE_PREFIX_PATTERN,
    MAX_NAME_LENGTH,
    MAX_POSITION_LENGTH,
    MIN_NAME_LENGTH,
    MIN_POSITION_LENGTH,
    NUMERIC_STRING_PATTERN,
    PHONE_PATTERN,
)
from employee_api.exceptions import ValidationFailedError

RuleSet = Mapping[str, "FieldRule"]


@dataclass(frozen=True)
class FieldError:
    """One constraint violation on one field."""

    field: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"field": self.field, "message": self.message}


class FieldType(StrEnum):
    """Value types a rule can require."""

    STRING = "string"
    NUMBER = "number"
    DATE = "date"


@dataclass(frozen=True)
class Constraint:
    """A predicate over an already type-checked value.

    ``message`` is a template; ``{label}`` is replaced with the field label.
    """

    check: Callable[[Any], bool]
    message: str


@dataclass(frozen=True)
class FieldRule:
    """Type, presence and constraints for a single field."""

    label: str
    type: FieldType
    required: bool = False
    constraints: tuple[Constraint, ...] = ()
    default: Any = None


# =============================================================================
# Constraint factories
# =============================================================================


def min_length(n: int) -> Constraint:
    return Constraint(lambda v: len(v) >= n, f"{{label}} must be at least {n} characters long")


def max_length(n: int) -> Constraint:
    return Constraint(lambda v: len(v) <= n, f"{{label}} must not exceed {n} characters")


def one_of(values: tuple[str, ...]) -> Constraint:
    allowed = frozenset(values)
    return Constraint(lambda v: v in allowed, f"{{label}} must be one of: {', '.join(values)}")


def matches(pattern, description: str = "a valid format") -> Constraint:
    return Constraint(lambda v: pattern.fullmatch(v) is not None, f"{{label}} must be {description}")


def positive() -> Constraint:
    return Constraint(lambda v: v > 0, "{label} must be a positive number")


def _is_email(value: str) -> bool:
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def email() -> Constraint:
    return Constraint(_is_email, "{label} must be a valid email address")


def _is_iso_date(value: str) -> bool:
    if not ISO_DATE_PREFIX_PATTERN.match(value):
        return False
    try:
        if len(value) == 10:
            date.fromisoformat(value)
        else:
            datetime.fromisoformat(value)
    except ValueError:
        return False
    return True


def iso_date() -> Constraint:
    return Constraint(_is_iso_date, "{label} must be in ISO format (YYYY-MM-DD)")


# =============================================================================
# Type coercion
# =============================================================================


def _coerce_string(value: Any) -> tuple[Any, str | None]:
    if not isinstance(value, str):
        return None, "{label} must be a string"
    if value == "":
        return None, "{label} is required"
    return value, None


def _coerce_number(value: Any) -> tuple[Any, str | None]:
    # bool is an int subclass but never a salary
    if isinstance(value, bool):
        return None, "{label} must be a number"
    if isinstance(value, str):
        if not NUMERIC_STRING_PATTERN.fullmatch(value):
            return None, "{label} must be a number"
    elif not isinstance(value, int | float):
        return None, "{label} must be a number"
    try:
        number = float(value)
    except OverflowError:
        return None, "{label} must be a number"
    if not math.isfinite(number):
        return None, "{label} must be a number"
    return number, None


def _coerce_date(value: Any) -> tuple[Any, str | None]:
    if not isinstance(value, str) or not value:
        return None, "{label} must be a valid date"
    return value, None


_COERCERS: dict[FieldType, Callable[[Any], tuple[Any, str | None]]] = {
    FieldType.STRING: _coerce_string,
    FieldType.NUMBER: _coerce_number,
    FieldType.DATE: _coerce_date,
}


# =============================================================================
# Rule tables
# =============================================================================


def _ruleset(rules: dict[str, FieldRule]) -> RuleSet:
    return MappingProxyType(dict(rules))


EMPLOYEE_RULES: RuleSet = _ruleset(
    {
        "firstName": FieldRule(
            "First name",
            FieldType.STRING,
            required=True,
            constraints=(min_length(MIN_NAME_LENGTH), max_length(MAX_NAME_LENGTH)),
        ),
        "lastName": FieldRule(
            "Last name",
            FieldType.STRING,
            required=True,
            constraints=(min_length(MIN_NAME_LENGTH), max_length(MAX_NAME_LENGTH)),
        ),
        "email": FieldRule("Email", FieldType.STRING, required=True, constraints=(email(),)),
        "phone": FieldRule(
            "Phone number", FieldType.STRING, required=True, constraints=(matches(PHONE_PATTERN),)
        ),
        "department": FieldRule(
            "Department",
            FieldType.STRING,
            required=True,
            constraints=(one_of(ALLOWED_DEPARTMENTS),),
        ),
        "position": FieldRule(
            "Position",
            FieldType.STRING,
            required=True,
            constraints=(min_length(MIN_POSITION_LENGTH), max_length(MAX_POSITION_LENGTH)),
        ),
        "salary": FieldRule("Salary", FieldType.NUMBER, required=True, constraints=(positive(),)),
        "hireDate": FieldRule("Hire date", FieldType.DATE, required=True, constraints=(iso_date(),)),
        "status": FieldRule(
            "Status",
            FieldType.STRING,
            constraints=(one_of(ALLOWED_EMPLOYEE_STATUSES),),
            default=DEFAULT_EMPLOYEE_STATUS,
        ),
    }
)


def optional_rules(rules: RuleSet) -> RuleSet:
    """Derive a rule set with identical constraints and nothing required.

    Defaults are dropped too, so a partial update never fills absent fields.
    """
    return _ruleset(
        {name: dataclasses.replace(rule, required=False, default=None) for name, rule in rules.items()}
    )


CREATE_RULES: RuleSet = EMPLOYEE_RULES
UPDATE_RULES: RuleSet = optional_rules(EMPLOYEE_RULES)


# =============================================================================
# Validator
# =============================================================================


def _check_field(rule: FieldRule, value: Any) -> str | None:
    coerced, problem = _COERCERS[rule.type](value)
    if problem is None:
        for constraint in rule.constraints:
            if not constraint.check(coerced):
                problem = constraint.message
                break
    return problem.format(label=rule.label) if problem else None


def validate(record: Any, rules: RuleSet) -> list[FieldError]:
    """Validate a payload against a rule set.

    Args:
        record: Decoded request body; anything but a mapping is rejected
        rules: Rule set to apply (``CREATE_RULES`` or ``UPDATE_RULES``)

    Returns:
        Every violation in rule declaration order followed by unknown keys
        in payload order. Empty when the payload is valid.
    """
    if not isinstance(record, Mapping):
        return [FieldError("body", "Request body must be a JSON object")]

    errors: list[FieldError] = []
    for name, rule in rules.items():
        if name not in record:
            if rule.required:
                errors.append(FieldError(name, f"{rule.label} is required"))
            continue
        message = _check_field(rule, record[name])
        if message:
            errors.append(FieldError(name, message))

    for name in record:
        if name not in rules:
            errors.append(FieldError(str(name), f"{name} is not allowed"))

    return errors


def ensure_valid(record: Any, rules: RuleSet) -> None:
    """Raise ``ValidationFailedError`` if ``record`` violates ``rules``."""
    errors = validate(record, rules)
    if errors:
        raise ValidationFailedError(errors)


def apply_defaults(record: Mapping[str, Any], rules: RuleSet) -> dict[str, Any]:
    """Return a copy of ``record`` with rule defaults filled for absent fields."""
    result = dict(record)
    for name, rule in rules.items():
        if name not in result and rule.default is not None:
            result[name] = rule.default
    return result
