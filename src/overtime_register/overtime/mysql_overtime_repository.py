from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.cursor import as_time, transaction
from .model import EmployeeDisplay, OvertimeEntry, OvertimeRecord
from .repository import OvertimeRepository

_SELECT = """
    SELECT o.id, o.employee_id, o.overtime_date, o.calculation_based_on_time, o.plan_overtime_hour,
           o.date_in, o.from_time, o.date_out, o.to_time, o.break_from_time, o.break_to_time,
           o.reason, o.created_at, o.updated_at, e.name AS employee_name
    FROM overtime_records o
    LEFT JOIN employees e ON e.employee_id = o.employee_id
"""


def _to_record(row: Dict[str, Any]) -> OvertimeRecord:
    return OvertimeRecord(
        id=int(row["id"]),
        employee_id=row["employee_id"],
        overtime_date=row["overtime_date"],
        calculation_based_on_time=bool(row["calculation_based_on_time"]),
        plan_overtime_hour=float(row["plan_overtime_hour"]),
        date_in=row["date_in"],
        from_time=as_time(row["from_time"]),
        date_out=row["date_out"],
        to_time=as_time(row["to_time"]),
        break_from_time=as_time(row.get("break_from_time")),
        break_to_time=as_time(row.get("break_to_time")),
        reason=row["reason"],
        employee_name=row.get("employee_name"),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


def _entry_params(entry: OvertimeEntry) -> tuple:
    return (
        entry.employee_id,
        entry.overtime_date,
        int(entry.calculation_based_on_time),
        entry.plan_overtime_hour,
        entry.date_in,
        entry.from_time,
        entry.date_out,
        entry.to_time,
        entry.break_from_time,
        entry.break_to_time,
        entry.reason,
    )


class MySQLOvertimeRepository(OvertimeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def submit_entry(self, entry: OvertimeEntry, employee: EmployeeDisplay) -> int:
        # Both statements share one connection; transaction() commits once or rolls back both.
        with transaction(self._conn_factory) as cur:
            cur.execute(
                """
                INSERT INTO employees(employee_id, name, section, email)
                VALUES(%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    name = VALUES(name),
                    section = COALESCE(VALUES(section), section),
                    email = COALESCE(VALUES(email), email)
                """,
                (entry.employee_id, employee.name, employee.section, employee.email),
            )
            cur.execute(
                """
                INSERT INTO overtime_records(
                    employee_id, overtime_date, calculation_based_on_time, plan_overtime_hour,
                    date_in, from_time, date_out, to_time, break_from_time, break_to_time, reason
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                _entry_params(entry),
            )
            return int(cur.lastrowid)

    def get_by_id(self, record_id: int) -> Optional[OvertimeRecord]:
        with transaction(self._conn_factory) as cur:
            cur.execute(_SELECT + " WHERE o.id=%s", (int(record_id),))
            row = cur.fetchone()
            return _to_record(row) if row else None

    def update_record(self, record_id: int, entry: OvertimeEntry) -> bool:
        with transaction(self._conn_factory) as cur:
            cur.execute(
                """
                UPDATE overtime_records
                SET employee_id=%s, overtime_date=%s, calculation_based_on_time=%s, plan_overtime_hour=%s,
                    date_in=%s, from_time=%s, date_out=%s, to_time=%s,
                    break_from_time=%s, break_to_time=%s, reason=%s
                WHERE id=%s
                """,
                _entry_params(entry) + (int(record_id),),
            )
            return cur.rowcount > 0

    def list_records(
        self,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[OvertimeRecord]:
        where: list[str] = []
        params: list[Any] = []
        if start_date:
            where.append("o.overtime_date >= %s")
            params.append(start_date)
        if end_date:
            where.append("o.overtime_date <= %s")
            params.append(end_date)

        sql = _SELECT
        if where:
            sql += " WHERE " + " AND ".join(where)
        sql += " ORDER BY o.overtime_date DESC, o.id DESC"

        with transaction(self._conn_factory) as cur:
            cur.execute(sql, tuple(params))
            return [_to_record(r) for r in cur.fetchall()]

    def count_records(self) -> int:
        with transaction(self._conn_factory) as cur:
            cur.execute("SELECT COUNT(*) AS n FROM overtime_records")
            row = cur.fetchone()
            return int(row["n"]) if row else 0
