from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional

from ..overtime.model import OvertimeRecord


@dataclass(frozen=True)
class ReportFilter:
    search_text: str = ""
    start_date: Optional[date] = None
    end_date: Optional[date] = None


def matches(record: OvertimeRecord, flt: ReportFilter) -> bool:
    needle = (flt.search_text or "").strip().lower()
    if needle:
        haystack = (record.employee_id, record.reason, record.employee_name or "")
        if not any(needle in value.lower() for value in haystack):
            return False
    if flt.start_date and record.overtime_date < flt.start_date:
        return False
    if flt.end_date and record.overtime_date > flt.end_date:
        return False
    return True


def filter_records(records: Iterable[OvertimeRecord], flt: ReportFilter) -> list[OvertimeRecord]:
    """Search is a case-insensitive substring match; both date bounds are inclusive."""
    return [r for r in records if matches(r, flt)]
