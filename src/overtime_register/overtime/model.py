from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import Any, Mapping, Optional

from ..common.datetime_utils import iso_to_display


@dataclass(frozen=True)
class DerivedTimes:
    date_in: date
    date_out: date
    to_time: time


@dataclass
class OvertimeForm:
    """Raw form values, exactly as typed (strings)."""

    employee_id: str = ""
    overtime_date: str = ""
    calculation_based_on_time: str = "N"
    plan_overtime_hour: str = ""
    from_time: str = ""
    break_from_time: str = ""
    break_to_time: str = ""
    reason: str = ""
    employee_name: str = ""
    employee_section: str = ""
    employee_email: str = ""
    # Only used by the record edit path; the entry path derives them.
    date_in: str = ""
    date_out: str = ""
    to_time: str = ""

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "OvertimeForm":
        def get(key: str, default: str = "") -> str:
            return str(data.get(key) or default).strip()

        return cls(
            employee_id=get("employee_id"),
            overtime_date=_as_display_date(get("overtime_date")),
            calculation_based_on_time=get("calculation_based_on_time", "N").upper() or "N",
            plan_overtime_hour=get("plan_overtime_hour"),
            from_time=get("from_time"),
            break_from_time=get("break_from_time"),
            break_to_time=get("break_to_time"),
            reason=get("reason"),
            employee_name=get("employee_name"),
            employee_section=get("employee_section"),
            employee_email=get("employee_email"),
            date_in=_as_display_date(get("date_in")),
            date_out=_as_display_date(get("date_out")),
            to_time=get("to_time"),
        )


def _as_display_date(value: str) -> str:
    # <input type="date"> posts YYYY-MM-DD; typed values are already DD.MM.YYYY
    if len(value) == 10 and value[4] == "-" and value[7] == "-":
        return iso_to_display(value)
    return value


@dataclass(frozen=True)
class EmployeeDisplay:
    """Employee fields carried along with a submission so the employee can be upserted."""

    name: str
    section: Optional[str] = None
    email: Optional[str] = None


@dataclass(frozen=True)
class OvertimeEntry:
    """A validated entry with its derived fields filled in."""

    employee_id: str
    overtime_date: date
    calculation_based_on_time: bool
    plan_overtime_hour: float
    date_in: date
    from_time: time
    date_out: date
    to_time: time
    reason: str
    break_from_time: Optional[time] = None
    break_to_time: Optional[time] = None


@dataclass(frozen=True)
class OvertimeRecord:
    """Persisted overtime row, with the employee name joined in for listings."""

    id: int
    employee_id: str
    overtime_date: date
    calculation_based_on_time: bool
    plan_overtime_hour: float
    date_in: date
    from_time: time
    date_out: date
    to_time: time
    reason: str
    break_from_time: Optional[time] = None
    break_to_time: Optional[time] = None
    employee_name: Optional[str] = None
    created_at: Optional[datetime] = field(default=None, compare=False)
    updated_at: Optional[datetime] = field(default=None, compare=False)
