from __future__ import annotations

import re
from datetime import date, time
from typing import Any, Callable, Optional, TypeVar

from ..core.constants import MAX_OVERTIME_HOURS, MIN_OVERTIME_HOURS
from ..core.exceptions import ValidationError
from .datetime_utils import parse_display_date, parse_hhmm

T = TypeVar("T")

EMPLOYEE_ID_RE = re.compile(r"^[A-Za-z0-9_-]+$")
# [^\W\d_] is a Unicode letter
PERSON_NAME_RE = re.compile(r"^(?:[^\W\d_]|[\s'-])+$")
DISPLAY_DATE_RE = re.compile(r"^[0-9]{2}\.[0-9]{2}\.[0-9]{4}$")
HHMM_RE = re.compile(r"^[0-9]{2}:[0-9]{2}$")
GRAPH_ID_RE = re.compile(r"^[A-Za-z0-9-]+$")
EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_length(value: Optional[str], field_name: str, min_len: int, max_len: int) -> str:
    v = (value or "").strip()
    if len(v) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    if len(v) > max_len:
        raise ValidationError(f"{field_name} must be at most {max_len} characters")
    return v


def validate_employee_id(value: Optional[str]) -> str:
    v = require_length(value, "Employee ID", 3, 20)
    if not EMPLOYEE_ID_RE.match(v):
        raise ValidationError("Employee ID can only contain letters, numbers, hyphens and underscores")
    return v


def validate_person_name(value: Optional[str]) -> str:
    v = require_length(value, "Name", 2, 100)
    if not PERSON_NAME_RE.match(v):
        raise ValidationError("Name can only contain letters, spaces, hyphens and apostrophes")
    return v


def validate_display_date(value: Optional[str], field_name: str = "Overtime date") -> date:
    v = require_non_empty(value, field_name)
    if not DISPLAY_DATE_RE.match(v):
        raise ValidationError("Date must be in format DD.MM.YYYY")
    try:
        return parse_display_date(v)
    except ValueError:
        raise ValidationError(f"{field_name} is not a valid calendar date")


def validate_hhmm(value: Optional[str], field_name: str = "Start time") -> time:
    v = require_non_empty(value, field_name)
    if not HHMM_RE.match(v):
        raise ValidationError("Time must be in format HH:MM")
    try:
        return parse_hhmm(v)
    except ValueError:
        raise ValidationError(f"{field_name} is not a valid time of day")


def validate_optional_hhmm(value: Optional[str], field_name: str) -> Optional[time]:
    if not value or not value.strip():
        return None
    return validate_hhmm(value, field_name)


def validate_overtime_hours(value: Any) -> float:
    try:
        hours = float(value)
    except (TypeError, ValueError):
        raise ValidationError("Plan overtime hours must be a number")
    if hours != hours:  # NaN
        raise ValidationError("Plan overtime hours must be a number")
    if hours < MIN_OVERTIME_HOURS:
        raise ValidationError(f"Minimum overtime is {MIN_OVERTIME_HOURS:g} hours")
    if hours > MAX_OVERTIME_HOURS:
        raise ValidationError(f"Maximum overtime is {MAX_OVERTIME_HOURS:g} hours")
    return hours


def validate_reason(value: Optional[str]) -> str:
    return require_length(value, "Reason", 10, 1000)


def validate_password(value: Optional[str]) -> str:
    v = value or ""
    if len(v) < 8:
        raise ValidationError("Password must be at least 8 characters")
    if len(v) > 100:
        raise ValidationError("Password must be less than 100 characters")
    if not re.search(r"[A-Z]", v):
        raise ValidationError("Password must contain at least one uppercase letter")
    if not re.search(r"[a-z]", v):
        raise ValidationError("Password must contain at least one lowercase letter")
    if not re.search(r"[0-9]", v):
        raise ValidationError("Password must contain at least one number")
    return v


def validate_graph_id(value: Optional[str], field_name: str) -> str:
    v = require_non_empty(value, field_name)
    if len(v) > 100:
        raise ValidationError(f"{field_name} too long")
    if not GRAPH_ID_RE.match(v):
        raise ValidationError(f"Invalid {field_name} format")
    return v


def validate_optional_email(value: Optional[str]) -> Optional[str]:
    v = (value or "").strip()
    if not v:
        return None
    if len(v) > 255 or not EMAIL_RE.match(v):
        raise ValidationError("Email address is not valid")
    return v


class FieldErrors:
    """Collects one message per field, then raises them together."""

    def __init__(self) -> None:
        self._errors: dict[str, str] = {}

    def check(self, field: str, fn: Callable[..., T], *args: Any) -> Optional[T]:
        try:
            return fn(*args)
        except ValidationError as e:
            self._errors.setdefault(field, str(e))
            return None

    def add(self, field: str, message: str) -> None:
        self._errors.setdefault(field, message)

    def has(self, field: str) -> bool:
        return field in self._errors

    def raise_if_any(self) -> None:
        if self._errors:
            raise ValidationError(errors=self._errors)
