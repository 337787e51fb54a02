"""Semicolon-separated overtime export.

Free text is written as-is: a reason containing ';' or a newline shifts the
columns of its row.
"""
from __future__ import annotations

from datetime import date
from typing import Iterable

from ..common.datetime_utils import format_display_date, format_hhmm, format_hours
from ..core.constants import CSV_DELIMITER, CSV_HEADER
from ..overtime.model import OvertimeRecord


def to_csv_row(record: OvertimeRecord) -> list[str]:
    return [
        record.employee_id,
        format_display_date(record.overtime_date),
        "Y" if record.calculation_based_on_time else "N",
        format_hours(record.plan_overtime_hour),
        format_display_date(record.date_in),
        format_hhmm(record.from_time),
        format_display_date(record.date_out),
        format_hhmm(record.to_time),
        format_hhmm(record.break_from_time),
        format_hhmm(record.break_to_time),
        record.reason,
    ]


def render_csv(records: Iterable[OvertimeRecord]) -> str:
    lines = [CSV_DELIMITER.join(CSV_HEADER)]
    lines.extend(CSV_DELIMITER.join(to_csv_row(r)) for r in records)
    return "\n".join(lines)


def export_filename(today: date) -> str:
    return f"overtime_report_{today.isoformat()}.csv"
