from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import EmployeeDisplay, OvertimeEntry, OvertimeRecord


class OvertimeRepository(Protocol):
    def submit_entry(self, entry: OvertimeEntry, employee: EmployeeDisplay) -> int:
        """Upsert the employee and insert the record as one atomic write."""

        raise NotImplementedError

    def get_by_id(self, record_id: int) -> Optional[OvertimeRecord]:
        raise NotImplementedError

    def update_record(self, record_id: int, entry: OvertimeEntry) -> bool:
        raise NotImplementedError

    def list_records(
        self,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[OvertimeRecord]:
        """Every record whose overtime date lies in the inclusive range, newest first."""

        raise NotImplementedError

    def count_records(self) -> int:
        raise NotImplementedError
