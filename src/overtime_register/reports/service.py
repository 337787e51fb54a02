from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from loguru import logger

from ..common.datetime_utils import format_display_date, format_hhmm, format_hours, now_local
from ..common.validators import FieldErrors, require_non_empty, validate_optional_email
from ..core.exceptions import IntegrationError, ValidationError
from ..overtime.model import OvertimeRecord
from ..overtime.repository import OvertimeRepository
from .csv_export import export_filename, render_csv
from .filters import ReportFilter, filter_records


@dataclass(frozen=True)
class ReportSummary:
    total_records: int
    filtered_records: int
    total_hours: float
    unique_employees: int


@dataclass(frozen=True)
class ReportData:
    rows: list[dict]
    summary: ReportSummary


@dataclass(frozen=True)
class CsvExport:
    filename: str
    content: str
    row_count: int


def _to_row(r: OvertimeRecord) -> dict:
    return {
        "id": r.id,
        "employee_id": r.employee_id,
        "employee_name": r.employee_name or "-",
        "overtime_date": format_display_date(r.overtime_date),
        "calculation_based_on_time": "Y" if r.calculation_based_on_time else "N",
        "plan_overtime_hour": format_hours(r.plan_overtime_hour),
        "date_in": format_display_date(r.date_in),
        "from_time": format_hhmm(r.from_time),
        "date_out": format_display_date(r.date_out),
        "to_time": format_hhmm(r.to_time),
        "break_from_time": format_hhmm(r.break_from_time),
        "break_to_time": format_hhmm(r.break_to_time),
        "reason": r.reason,
    }


class ReportService:
    def __init__(self, overtime: OvertimeRepository):
        self._overtime = overtime

    def _check_range(self, start: Optional[date], end: Optional[date]) -> None:
        if start and end and start > end:
            raise ValidationError("Start date must not be after end date")

    def _matching(self, flt: ReportFilter) -> list[OvertimeRecord]:
        # date bounds narrow the query, the search text is matched here
        records = self._overtime.list_records(start_date=flt.start_date, end_date=flt.end_date)
        return filter_records(records, flt)

    def build_report(self, flt: ReportFilter) -> ReportData:
        self._check_range(flt.start_date, flt.end_date)
        kept = self._matching(flt)

        summary = ReportSummary(
            total_records=self._overtime.count_records(),
            filtered_records=len(kept),
            total_hours=sum(r.plan_overtime_hour for r in kept),
            unique_employees=len({r.employee_id for r in kept}),
        )
        return ReportData(rows=[_to_row(r) for r in kept], summary=summary)

    def export_csv(self, flt: ReportFilter, *, today: Optional[date] = None) -> CsvExport:
        self._check_range(flt.start_date, flt.end_date)
        kept = self._matching(flt)
        content = render_csv(kept)
        filename = export_filename(today or now_local().date())
        logger.info("Exported {} overtime rows to {}", len(kept), filename)
        return CsvExport(filename=filename, content=content, row_count=len(kept))


class EmailReportService:
    """Mailing a report needs the MS Graph integration, which is not built."""

    def send_report(self, *, to_email: str, subject: str, message: str = "") -> None:
        errors = FieldErrors()
        errors.check("to_email", require_non_empty, to_email, "Recipient")
        errors.check("to_email", validate_optional_email, to_email)
        errors.check("subject", require_non_empty, subject, "Subject")
        errors.raise_if_any()

        logger.warning("Email report to {} requested but no mail integration is available", to_email)
        raise IntegrationError("MS Graph integration required to send emails")

