from __future__ import annotations

from dataclasses import dataclass

from .auth.mysql_profile_repository import MySQLProfileRepository
from .auth.repository import ProfileRepository
from .auth.service import AuthService, ProfileService
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import EmployeeService
from .overtime.mysql_overtime_repository import MySQLOvertimeRepository
from .overtime.repository import OvertimeRepository
from .overtime.service import OvertimeService
from .reports.service import EmailReportService, ReportService
from .settings.mysql_settings_repository import MySQLSettingsRepository
from .settings.repository import SettingsRepository
from .settings.service import SettingsService


@dataclass(frozen=True)
class Container:
    profiles_repo: ProfileRepository
    employees_repo: EmployeeRepository
    overtime_repo: OvertimeRepository
    settings_repo: SettingsRepository

    auth_service: AuthService
    profile_service: ProfileService
    employee_service: EmployeeService
    overtime_service: OvertimeService
    report_service: ReportService
    email_report_service: EmailReportService
    settings_service: SettingsService


def wire(
    *,
    profiles_repo: ProfileRepository,
    employees_repo: EmployeeRepository,
    overtime_repo: OvertimeRepository,
    settings_repo: SettingsRepository,
) -> Container:
    """Build the services on top of any set of repositories."""
    return Container(
        profiles_repo=profiles_repo,
        employees_repo=employees_repo,
        overtime_repo=overtime_repo,
        settings_repo=settings_repo,
        auth_service=AuthService(profiles_repo),
        profile_service=ProfileService(profiles_repo),
        employee_service=EmployeeService(employees_repo),
        overtime_service=OvertimeService(overtime_repo, employees_repo),
        report_service=ReportService(overtime_repo),
        email_report_service=EmailReportService(),
        settings_service=SettingsService(settings_repo),
    )


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    return wire(
        profiles_repo=MySQLProfileRepository(conn),
        employees_repo=MySQLEmployeeRepository(conn),
        overtime_repo=MySQLOvertimeRepository(conn),
        settings_repo=MySQLSettingsRepository(conn),
    )
