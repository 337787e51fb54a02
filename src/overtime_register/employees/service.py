from __future__ import annotations

from typing import Optional, Sequence

from loguru import logger

from ..common.validators import (
    FieldErrors,
    require_length,
    validate_employee_id,
    validate_optional_email,
    validate_person_name,
)
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ConflictError, NotFoundError
from .model import Employee
from .repository import EmployeeRepository


def _validate_section(value: Optional[str]) -> Optional[str]:
    v = (value or "").strip()
    if not v:
        return None
    return require_length(v, "Section", 1, 100)


class EmployeeService:
    """Use cases: register employees (anyone), maintain the registry (admin)."""

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    @staticmethod
    def _require_admin(current_role: Optional[Role]) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission")

    def register(
        self,
        *,
        employee_id: str,
        name: str,
        email: str = "",
        section: str = "",
    ) -> Employee:
        errors = FieldErrors()
        employee_id_v = errors.check("employee_id", validate_employee_id, employee_id)
        name_v = errors.check("name", validate_person_name, name)
        email_v = errors.check("email", validate_optional_email, email)
        section_v = errors.check("section", _validate_section, section)
        errors.raise_if_any()

        if self._employees.get_by_employee_id(employee_id_v):
            raise ConflictError("Employee ID already exists")

        self._employees.create(employee_id=employee_id_v, name=name_v, email=email_v, section=section_v)
        logger.info("Registered employee {}", employee_id_v)
        return Employee(employee_id=employee_id_v, name=name_v, email=email_v, section=section_v)

    def get(self, employee_id: str) -> Optional[Employee]:
        return self._employees.get_by_employee_id((employee_id or "").strip())

    def list_employees(self, *, current_role: Optional[Role]) -> Sequence[Employee]:
        self._require_admin(current_role)
        return self._employees.list_all()

    def update(
        self,
        *,
        current_role: Optional[Role],
        employee_id: str,
        name: str,
        email: str = "",
        section: str = "",
    ) -> None:
        self._require_admin(current_role)

        errors = FieldErrors()
        name_v = errors.check("name", validate_person_name, name)
        email_v = errors.check("email", validate_optional_email, email)
        section_v = errors.check("section", _validate_section, section)
        errors.raise_if_any()

        if not self._employees.update(employee_id, name=name_v, email=email_v, section=section_v):
            raise NotFoundError("Employee not found")
        logger.info("Updated employee {}", employee_id)

    def delete(self, *, current_role: Optional[Role], employee_id: str) -> None:
        self._require_admin(current_role)
        if not self._employees.delete(employee_id):
            raise NotFoundError("Employee not found")
        logger.info("Deleted employee {}", employee_id)
