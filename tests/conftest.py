from __future__ import annotations

import time as _time
from dataclasses import replace
from datetime import datetime
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

from overtime_register.auth.model import Profile
from overtime_register.container import wire
from overtime_register.core.enums import Role
from overtime_register.employees.model import Employee
from overtime_register.main import create_app
from overtime_register.overtime.model import EmployeeDisplay, OvertimeEntry, OvertimeRecord
from overtime_register.settings.model import AdminSettings


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2025, 8, 19, 15, 0, 0)


class InMemoryProfiles:
    def __init__(self):
        self._by_user_id: dict[str, Profile] = {}
        self._next_id = 1

    def add(self, *, user_id: str, email: str, password: str, role: Role, display_name: Optional[str] = None) -> Profile:
        self.create_profile(
            user_id=user_id,
            email=email,
            display_name=display_name,
            role=role,
            password_hash=generate_password_hash(password),
        )
        return self._by_user_id[user_id]

    def get_by_email(self, email: str) -> Optional[Profile]:
        return next((p for p in self._by_user_id.values() if p.email == email), None)

    def get_by_user_id(self, user_id: str) -> Optional[Profile]:
        return self._by_user_id.get(user_id)

    def create_profile(self, *, user_id, email, display_name, role, password_hash) -> int:
        pid = self._next_id
        self._next_id += 1
        self._by_user_id[user_id] = Profile(
            id=pid,
            user_id=user_id,
            email=email,
            display_name=display_name,
            role=role,
            password_hash=password_hash,
            created_at=datetime(2025, 1, 1, 8, pid % 60),
        )
        return pid

    def _replace(self, user_id: str, **changes) -> bool:
        p = self._by_user_id.get(user_id)
        if not p:
            return False
        self._by_user_id[user_id] = replace(p, **changes)
        return True

    def update_profile(self, user_id, *, email, display_name) -> bool:
        return self._replace(user_id, email=email, display_name=display_name)

    def update_role(self, user_id, role) -> bool:
        return self._replace(user_id, role=role)

    def update_password_hash(self, user_id, password_hash) -> bool:
        return self._replace(user_id, password_hash=password_hash)

    def delete_by_user_id(self, user_id) -> bool:
        return self._by_user_id.pop(user_id, None) is not None

    def list_all(self):
        return sorted(self._by_user_id.values(), key=lambda p: p.created_at, reverse=True)


class InMemoryEmployees:
    def __init__(self):
        self.items: dict[str, Employee] = {}

    def get_by_employee_id(self, employee_id: str) -> Optional[Employee]:
        return self.items.get(employee_id)

    def create(self, *, employee_id, name, email, section) -> int:
        self.items[employee_id] = Employee(employee_id=employee_id, name=name, email=email, section=section, id=len(self.items) + 1)
        return len(self.items)

    def update(self, employee_id, *, name, email, section) -> bool:
        e = self.items.get(employee_id)
        if not e:
            return False
        self.items[employee_id] = replace(e, name=name, email=email, section=section)
        return True

    def delete(self, employee_id) -> bool:
        return self.items.pop(employee_id, None) is not None

    def list_all(self):
        return sorted(self.items.values(), key=lambda e: e.employee_id)


class InMemoryOvertime:
    """Mirrors the MySQL repository: submit upserts the employee and inserts the record together."""

    def __init__(self, employees: InMemoryEmployees):
        self._employees = employees
        self.records: dict[int, OvertimeRecord] = {}
        self.submit_calls: list[tuple[OvertimeEntry, EmployeeDisplay]] = []
        self.fail_next_submit = False
        self._next_id = 1

    def _to_record(self, record_id: int, entry: OvertimeEntry) -> OvertimeRecord:
        return OvertimeRecord(
            id=record_id,
            employee_id=entry.employee_id,
            overtime_date=entry.overtime_date,
            calculation_based_on_time=entry.calculation_based_on_time,
            plan_overtime_hour=entry.plan_overtime_hour,
            date_in=entry.date_in,
            from_time=entry.from_time,
            date_out=entry.date_out,
            to_time=entry.to_time,
            break_from_time=entry.break_from_time,
            break_to_time=entry.break_to_time,
            reason=entry.reason,
        )

    def submit_entry(self, entry: OvertimeEntry, employee: EmployeeDisplay) -> int:
        self.submit_calls.append((entry, employee))
        if self.fail_next_submit:
            self.fail_next_submit = False
            raise RuntimeError("connection lost")

        existing = self._employees.get_by_employee_id(entry.employee_id)
        if existing:
            self._employees.update(
                entry.employee_id,
                name=employee.name,
                email=employee.email if employee.email is not None else existing.email,
                section=employee.section if employee.section is not None else existing.section,
            )
        else:
            self._employees.create(
                employee_id=entry.employee_id,
                name=employee.name,
                email=employee.email,
                section=employee.section,
            )

        rid = self._next_id
        self._next_id += 1
        self.records[rid] = self._to_record(rid, entry)
        return rid

    def add(self, record: OvertimeRecord) -> None:
        self.records[record.id] = record
        self._next_id = max(self._next_id, record.id + 1)

    def get_by_id(self, record_id: int) -> Optional[OvertimeRecord]:
        r = self.records.get(int(record_id))
        if not r:
            return None
        e = self._employees.get_by_employee_id(r.employee_id)
        return replace(r, employee_name=e.name if e else r.employee_name)

    def update_record(self, record_id: int, entry: OvertimeEntry) -> bool:
        if int(record_id) not in self.records:
            return False
        self.records[int(record_id)] = self._to_record(int(record_id), entry)
        return True

    def list_records(self, *, start_date=None, end_date=None):
        items = [self.get_by_id(rid) for rid in self.records]
        if start_date:
            items = [r for r in items if r.overtime_date >= start_date]
        if end_date:
            items = [r for r in items if r.overtime_date <= end_date]
        items.sort(key=lambda r: (r.overtime_date, r.id), reverse=True)
        return items

    def count_records(self) -> int:
        return len(self.records)


class InMemorySettings:
    def __init__(self):
        self.items: dict[str, AdminSettings] = {}

    def get_for_user(self, user_id: str) -> Optional[AdminSettings]:
        return self.items.get(user_id)

    def upsert(self, settings: AdminSettings) -> None:
        self.items[settings.user_id] = settings


@pytest.fixture
def profiles() -> InMemoryProfiles:
    return InMemoryProfiles()


@pytest.fixture
def employees_repo() -> InMemoryEmployees:
    return InMemoryEmployees()


@pytest.fixture
def overtime_repo(employees_repo) -> InMemoryOvertime:
    return InMemoryOvertime(employees_repo)


@pytest.fixture
def settings_repo() -> InMemorySettings:
    return InMemorySettings()


@pytest.fixture
def container(profiles, employees_repo, overtime_repo, settings_repo):
    return wire(
        profiles_repo=profiles,
        employees_repo=employees_repo,
        overtime_repo=overtime_repo,
        settings_repo=settings_repo,
    )


@pytest.fixture
def app(container):
    app = create_app(container=container, settings_module="config.testing")
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login_as(client):
    """Put an identity straight into the session cookie."""

    def _login(role: Role, *, user_id: str = "u-1", email: str = "someone@example.com", last_seen: Optional[float] = None):
        with client.session_transaction() as sess:
            sess["user_id"] = user_id
            sess["email"] = email
            sess["display_name"] = email
            sess["role"] = role.value
            sess["last_seen"] = _time.time() if last_seen is None else last_seen

    return _login
