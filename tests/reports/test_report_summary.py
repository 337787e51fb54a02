from __future__ import annotations

from datetime import date, time

import pytest

from overtime_register.core.exceptions import IntegrationError, ValidationError
from overtime_register.overtime.model import OvertimeRecord
from overtime_register.reports.filters import ReportFilter
from overtime_register.reports.service import EmailReportService, ReportService


def _rec(rid: int, employee_id: str, day: date, hours: float) -> OvertimeRecord:
    return OvertimeRecord(
        id=rid,
        employee_id=employee_id,
        overtime_date=day,
        calculation_based_on_time=False,
        plan_overtime_hour=hours,
        date_in=day,
        from_time=time(15, 0),
        date_out=day,
        to_time=time(17, 0),
        reason="Preventive maintenance",
    )


@pytest.fixture
def svc(overtime_repo) -> ReportService:
    overtime_repo.add(_rec(1, "MTI240264", date(2025, 8, 19), 3))
    overtime_repo.add(_rec(2, "MTI240264", date(2025, 8, 20), 2))
    overtime_repo.add(_rec(3, "MTI240265", date(2025, 8, 19), 2.5))
    return ReportService(overtime_repo)


def test_summary_counts_filtered_rows(svc):
    data = svc.build_report(ReportFilter(start_date=date(2025, 8, 19), end_date=date(2025, 8, 19)))

    assert data.summary.total_records == 3
    assert data.summary.filtered_records == 2
    assert data.summary.total_hours == 5.5
    assert data.summary.unique_employees == 2
    assert {r["plan_overtime_hour"] for r in data.rows} == {"3", "2.5"}


def test_inverted_range_is_rejected(svc):
    with pytest.raises(ValidationError):
        svc.build_report(ReportFilter(start_date=date(2025, 8, 20), end_date=date(2025, 8, 19)))


def test_export_csv(svc, fixed_now):
    export = svc.export_csv(ReportFilter(search_text="mti240265"), today=fixed_now.date())

    assert export.filename == "overtime_report_2025-08-19.csv"
    assert export.row_count == 1
    assert export.content.split("\n")[1].startswith("MTI240265;19.08.2025;N;2.5;")


def test_email_requires_recipient_and_subject():
    with pytest.raises(ValidationError) as exc:
        EmailReportService().send_report(to_email="", subject="")
    assert set(exc.value.errors) == {"to_email", "subject"}


def test_email_always_needs_integration():
    with pytest.raises(IntegrationError):
        EmailReportService().send_report(to_email="boss@example.com", subject="Overtime August")


def test_old_records_survive_many_newer_ones(overtime_repo):
    overtime_repo.add(_rec(1, "MTI240264", date(2024, 1, 15), 2))
    for i in range(600):
        overtime_repo.add(_rec(100 + i, "MTI240265", date(2025, 8, 1), 1))
    svc = ReportService(overtime_repo)
    old_day = ReportFilter(start_date=date(2024, 1, 15), end_date=date(2024, 1, 15))

    export = svc.export_csv(old_day)
    data = svc.build_report(ReportFilter())

    assert export.row_count == 1
    assert export.content.split("\n")[1].startswith("MTI240264;15.01.2024;")
    assert data.summary.total_records == 601
    assert data.summary.filtered_records == 601
