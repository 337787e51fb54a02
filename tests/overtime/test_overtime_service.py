from __future__ import annotations

from datetime import date, time

import pytest

from overtime_register.core.enums import Role
from overtime_register.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from overtime_register.overtime.model import OvertimeForm, OvertimeRecord
from overtime_register.overtime.service import OvertimeService, record_to_form


def _form(**overrides) -> OvertimeForm:
    values = dict(
        employee_id="MTI240264",
        overtime_date="19.08.2025",
        calculation_based_on_time="N",
        plan_overtime_hour="3",
        from_time="15:00",
        reason="Pemotongan sisa kabel proyek",
        employee_name="Budi Santoso",
    )
    values.update(overrides)
    return OvertimeForm(**values)


@pytest.fixture
def svc(overtime_repo, employees_repo) -> OvertimeService:
    return OvertimeService(overtime_repo, employees_repo)


def test_submit_derives_and_writes_once(svc, overtime_repo, employees_repo):
    rid = svc.submit(_form())

    assert len(overtime_repo.submit_calls) == 1
    rec = overtime_repo.get_by_id(rid)
    assert rec.date_in == date(2025, 8, 19)
    assert rec.date_out == date(2025, 8, 19)
    assert rec.to_time == time(18, 0)
    assert rec.calculation_based_on_time is False
    assert employees_repo.get_by_employee_id("MTI240264").name == "Budi Santoso"


def test_submit_new_employee_without_name_is_rejected(svc, overtime_repo):
    with pytest.raises(ValidationError) as exc:
        svc.submit(_form(employee_name=""))

    assert "employee_name" in exc.value.errors
    assert overtime_repo.submit_calls == []


def test_submit_existing_employee_keeps_registered_name(svc, overtime_repo, employees_repo):
    employees_repo.create(employee_id="MTI240264", name="Siti Rahma", email="siti@example.com", section="IT")

    svc.submit(_form(employee_name=""))

    _, employee = overtime_repo.submit_calls[0]
    assert employee.name == "Siti Rahma"
    assert employee.section == "IT"
    assert employee.email == "siti@example.com"


def test_submit_collects_one_message_per_field(svc, overtime_repo):
    with pytest.raises(ValidationError) as exc:
        svc.submit(_form(employee_id="ab", reason="too short", plan_overtime_hour="30", from_time="25:00"))

    assert set(exc.value.errors) >= {"employee_id", "reason", "plan_overtime_hour", "from_time"}
    assert overtime_repo.submit_calls == []


def test_submit_accepts_y_flag_and_breaks(svc, overtime_repo):
    rid = svc.submit(_form(calculation_based_on_time="Y", break_from_time="16:00", break_to_time="16:30"))

    rec = overtime_repo.get_by_id(rid)
    assert rec.calculation_based_on_time is True
    assert rec.break_from_time == time(16, 0)
    assert rec.break_to_time == time(16, 30)


def test_submit_rejects_bad_break_time(svc):
    with pytest.raises(ValidationError) as exc:
        svc.submit(_form(break_from_time="4pm"))
    assert "break_from_time" in exc.value.errors


def test_repository_failure_leaves_no_records(svc, overtime_repo, employees_repo):
    overtime_repo.fail_next_submit = True

    with pytest.raises(RuntimeError):
        svc.submit(_form())

    assert overtime_repo.records == {}
    assert employees_repo.get_by_employee_id("MTI240264") is None


def test_preview_crosses_midnight(svc):
    derived = svc.preview(OvertimeForm(overtime_date="01.01.2025", from_time="23:00", plan_overtime_hour="3"))
    assert derived.date_out == date(2025, 1, 2)
    assert derived.to_time == time(2, 0)


def test_preview_reports_missing_inputs(svc):
    with pytest.raises(ValidationError) as exc:
        svc.preview(OvertimeForm(overtime_date="", from_time="", plan_overtime_hour=""))
    assert set(exc.value.errors) == {"overtime_date", "from_time", "plan_overtime_hour"}


def _stored(overtime_repo, employees_repo) -> OvertimeRecord:
    employees_repo.create(employee_id="MTI240264", name="Budi Santoso", email=None, section=None)
    rec = OvertimeRecord(
        id=7,
        employee_id="MTI240264",
        overtime_date=date(2025, 8, 19),
        calculation_based_on_time=False,
        plan_overtime_hour=3.0,
        date_in=date(2025, 8, 19),
        from_time=time(15, 0),
        date_out=date(2025, 8, 19),
        to_time=time(18, 0),
        reason="Pemotongan sisa kabel proyek",
    )
    overtime_repo.add(rec)
    return rec


def test_update_record_keeps_values_as_entered(svc, overtime_repo, employees_repo):
    rec = _stored(overtime_repo, employees_repo)
    form = record_to_form(rec)
    form.plan_overtime_hour = "5"
    form.to_time = "17:15"

    svc.update_record(current_role=Role.ADMIN, record_id=7, form=form)

    updated = overtime_repo.get_by_id(7)
    assert updated.plan_overtime_hour == 5.0
    assert updated.to_time == time(17, 15)


def test_update_record_requires_admin(svc, overtime_repo, employees_repo):
    rec = _stored(overtime_repo, employees_repo)
    with pytest.raises(AuthorizationError):
        svc.update_record(current_role=Role.USER, record_id=7, form=record_to_form(rec))


def test_update_record_rejects_unknown_employee(svc, overtime_repo, employees_repo):
    rec = _stored(overtime_repo, employees_repo)
    form = record_to_form(rec)
    form.employee_id = "NOPE001"

    with pytest.raises(ValidationError) as exc:
        svc.update_record(current_role=Role.ADMIN, record_id=7, form=form)
    assert "employee_id" in exc.value.errors


def test_update_missing_record(svc):
    with pytest.raises(NotFoundError):
        svc.update_record(current_role=Role.ADMIN, record_id=99, form=OvertimeForm())


def test_form_from_mapping_accepts_browser_dates():
    form = OvertimeForm.from_mapping({"overtime_date": "2025-08-19", "employee_id": "  EMP-001 ", "plan_overtime_hour": 2.5})
    assert form.overtime_date == "19.08.2025"
    assert form.employee_id == "EMP-001"
    assert form.plan_overtime_hour == "2.5"
    assert form.calculation_based_on_time == "N"
