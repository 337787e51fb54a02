from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.cursor import transaction
from .model import Employee
from .repository import EmployeeRepository

_COLUMNS = "id, employee_id, name, email, section, created_at, updated_at"


def _to_employee(row: Dict[str, Any]) -> Employee:
    return Employee(
        id=int(row["id"]),
        employee_id=row["employee_id"],
        name=row["name"],
        email=row.get("email"),
        section=row.get("section"),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_employee_id(self, employee_id: str) -> Optional[Employee]:
        with transaction(self._conn_factory) as cur:
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE employee_id=%s", (employee_id,))
            row = cur.fetchone()
            return _to_employee(row) if row else None

    def create(self, *, employee_id: str, name: str, email: Optional[str], section: Optional[str]) -> int:
        with transaction(self._conn_factory) as cur:
            cur.execute(
                "INSERT INTO employees(employee_id, name, email, section) VALUES(%s,%s,%s,%s)",
                (employee_id, name, email, section),
            )
            return int(cur.lastrowid)

    def update(self, employee_id: str, *, name: str, email: Optional[str], section: Optional[str]) -> bool:
        with transaction(self._conn_factory) as cur:
            cur.execute(
                "UPDATE employees SET name=%s, email=%s, section=%s WHERE employee_id=%s",
                (name, email, section, employee_id),
            )
            return cur.rowcount > 0

    def delete(self, employee_id: str) -> bool:
        with transaction(self._conn_factory) as cur:
            cur.execute("DELETE FROM employees WHERE employee_id=%s", (employee_id,))
            return cur.rowcount > 0

    def list_all(self) -> Sequence[Employee]:
        with transaction(self._conn_factory) as cur:
            cur.execute(f"SELECT {_COLUMNS} FROM employees ORDER BY employee_id")
            return [_to_employee(r) for r in cur.fetchall()]
