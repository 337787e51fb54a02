from __future__ import annotations

from typing import Optional

from loguru import logger

from ..common.datetime_utils import format_display_date, format_hhmm, format_hours
from ..common.validators import (
    FieldErrors,
    validate_display_date,
    validate_employee_id,
    validate_hhmm,
    validate_optional_email,
    validate_optional_hhmm,
    validate_overtime_hours,
    validate_person_name,
    validate_reason,
)
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from .derivation import derive_times
from .model import DerivedTimes, EmployeeDisplay, OvertimeEntry, OvertimeForm, OvertimeRecord
from .repository import OvertimeRepository


def _parse_flag(value: str) -> bool:
    v = (value or "N").strip().upper()
    if v not in {"Y", "N"}:
        raise ValidationError("Calculation based on time must be Y or N")
    return v == "Y"


def _validate_section(value: str) -> Optional[str]:
    v = (value or "").strip()
    if len(v) > 100:
        raise ValidationError("Section must be at most 100 characters")
    return v or None


class OvertimeService:
    """Use cases: preview, submit and edit overtime entries."""

    def __init__(self, overtime: OvertimeRepository, employees: EmployeeRepository):
        self._overtime = overtime
        self._employees = employees

    def preview(self, form: OvertimeForm) -> DerivedTimes:
        errors = FieldErrors()
        overtime_date = errors.check("overtime_date", validate_display_date, form.overtime_date)
        from_time = errors.check("from_time", validate_hhmm, form.from_time)
        hours = errors.check("plan_overtime_hour", validate_overtime_hours, form.plan_overtime_hour)
        errors.raise_if_any()
        return derive_times(overtime_date, from_time, hours)

    def build_entry(self, form: OvertimeForm) -> OvertimeEntry:
        errors = FieldErrors()
        entry = self._check_entry(form, errors)
        errors.raise_if_any()
        return entry

    def _check_entry(self, form: OvertimeForm, errors: FieldErrors) -> Optional[OvertimeEntry]:
        employee_id = errors.check("employee_id", validate_employee_id, form.employee_id)
        overtime_date = errors.check("overtime_date", validate_display_date, form.overtime_date)
        flag = errors.check("calculation_based_on_time", _parse_flag, form.calculation_based_on_time)
        hours = errors.check("plan_overtime_hour", validate_overtime_hours, form.plan_overtime_hour)
        from_time = errors.check("from_time", validate_hhmm, form.from_time)
        break_from = errors.check("break_from_time", validate_optional_hhmm, form.break_from_time, "Break from time")
        break_to = errors.check("break_to_time", validate_optional_hhmm, form.break_to_time, "Break to time")
        reason = errors.check("reason", validate_reason, form.reason)
        if None in (employee_id, overtime_date, flag, hours, from_time, reason):
            return None

        derived = derive_times(overtime_date, from_time, hours)
        return OvertimeEntry(
            employee_id=employee_id,
            overtime_date=overtime_date,
            calculation_based_on_time=flag,
            plan_overtime_hour=hours,
            date_in=derived.date_in,
            from_time=from_time,
            date_out=derived.date_out,
            to_time=derived.to_time,
            break_from_time=break_from,
            break_to_time=break_to,
            reason=reason,
        )

    def _check_employee(self, form: OvertimeForm, errors: FieldErrors) -> Optional[EmployeeDisplay]:
        name = None
        if form.employee_name.strip():
            name = errors.check("employee_name", validate_person_name, form.employee_name)
        email = errors.check("employee_email", validate_optional_email, form.employee_email)
        section = errors.check("employee_section", _validate_section, form.employee_section)

        existing = None
        if not errors.has("employee_id"):
            existing = self._employees.get_by_employee_id(form.employee_id.strip())
        if not form.employee_name.strip():
            if existing:
                name = existing.name
            elif not errors.has("employee_id"):
                errors.add("employee_name", "Name is required for a new employee")
        if name is None:
            return None

        return EmployeeDisplay(
            name=name,
            section=section if section is not None else (existing.section if existing else None),
            email=email if email is not None else (existing.email if existing else None),
        )

    def submit(self, form: OvertimeForm) -> int:
        """Validate, derive and store one entry.

        The employee upsert and the record insert happen in a single
        repository call; nothing is written when any field is invalid.
        """
        errors = FieldErrors()
        entry = self._check_entry(form, errors)
        employee = self._check_employee(form, errors)
        errors.raise_if_any()

        record_id = self._overtime.submit_entry(entry, employee)
        logger.info(
            "Overtime {} submitted for {} on {} ({}h)",
            record_id,
            entry.employee_id,
            format_display_date(entry.overtime_date),
            format_hours(entry.plan_overtime_hour),
        )
        return record_id

    def get_record(self, record_id: int) -> OvertimeRecord:
        record = self._overtime.get_by_id(int(record_id))
        if not record:
            raise NotFoundError("Overtime record not found")
        return record

    def update_record(self, *, current_role: Optional[Role], record_id: int, form: OvertimeForm) -> None:
        """Admin edit: stored values are replaced as given, nothing is re-derived."""
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission")
        self.get_record(record_id)

        errors = FieldErrors()
        employee_id = errors.check("employee_id", validate_employee_id, form.employee_id)
        overtime_date = errors.check("overtime_date", validate_display_date, form.overtime_date)
        flag = errors.check("calculation_based_on_time", _parse_flag, form.calculation_based_on_time)
        hours = errors.check("plan_overtime_hour", validate_overtime_hours, form.plan_overtime_hour)
        date_in = errors.check("date_in", validate_display_date, form.date_in, "Date in")
        from_time = errors.check("from_time", validate_hhmm, form.from_time)
        date_out = errors.check("date_out", validate_display_date, form.date_out, "Date out")
        to_time = errors.check("to_time", validate_hhmm, form.to_time, "End time")
        break_from = errors.check("break_from_time", validate_optional_hhmm, form.break_from_time, "Break from time")
        break_to = errors.check("break_to_time", validate_optional_hhmm, form.break_to_time, "Break to time")
        reason = errors.check("reason", validate_reason, form.reason)
        if employee_id and not self._employees.get_by_employee_id(employee_id):
            errors.add("employee_id", "Employee ID is not registered")
        errors.raise_if_any()

        entry = OvertimeEntry(
            employee_id=employee_id,
            overtime_date=overtime_date,
            calculation_based_on_time=flag,
            plan_overtime_hour=hours,
            date_in=date_in,
            from_time=from_time,
            date_out=date_out,
            to_time=to_time,
            break_from_time=break_from,
            break_to_time=break_to,
            reason=reason,
        )
        if not self._overtime.update_record(int(record_id), entry):
            raise NotFoundError("Overtime record not found")
        logger.info("Overtime {} updated", record_id)


def record_to_form(record: OvertimeRecord) -> OvertimeForm:
    """Prefill values for the edit form."""
    return OvertimeForm(
        employee_id=record.employee_id,
        overtime_date=format_display_date(record.overtime_date),
        calculation_based_on_time="Y" if record.calculation_based_on_time else "N",
        plan_overtime_hour=format_hours(record.plan_overtime_hour),
        from_time=format_hhmm(record.from_time),
        break_from_time=format_hhmm(record.break_from_time),
        break_to_time=format_hhmm(record.break_to_time),
        reason=record.reason,
        employee_name=record.employee_name or "",
        date_in=format_display_date(record.date_in),
        date_out=format_display_date(record.date_out),
        to_time=format_hhmm(record.to_time),
    )
