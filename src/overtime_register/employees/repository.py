from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Employee


class EmployeeRepository(Protocol):
    def get_by_employee_id(self, employee_id: str) -> Optional[Employee]:
        raise NotImplementedError

    def create(self, *, employee_id: str, name: str, email: Optional[str], section: Optional[str]) -> int:
        raise NotImplementedError

    def update(self, employee_id: str, *, name: str, email: Optional[str], section: Optional[str]) -> bool:
        raise NotImplementedError

    def delete(self, employee_id: str) -> bool:
        raise NotImplementedError

    def list_all(self) -> Sequence[Employee]:
        raise NotImplementedError
