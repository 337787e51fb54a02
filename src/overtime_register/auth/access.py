"""Single authorization decision shared by route guards and the navigation bar."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from ..core.enums import NavDecision, Role


@dataclass(frozen=True)
class PageAccess:
    requires_admin: bool = False
    allows_guests: bool = False


PUBLIC = PageAccess(allows_guests=True)
SIGNED_IN = PageAccess()
ADMIN_ONLY = PageAccess(requires_admin=True)


def decide_navigation(*, is_authenticated: bool, role: Optional[Role], page: PageAccess) -> NavDecision:
    """Rules are evaluated in order; the first match wins."""
    if page.allows_guests:
        return NavDecision.RENDER
    if not is_authenticated:
        return NavDecision.REDIRECT_LOGIN
    if page.requires_admin and role != Role.ADMIN:
        return NavDecision.REDIRECT_HOME
    return NavDecision.RENDER


@dataclass(frozen=True)
class NavItem:
    name: str
    endpoint: str
    access: PageAccess


NAVIGATION: Sequence[NavItem] = (
    NavItem("Input Overtime", "overtime_input", PUBLIC),
    NavItem("Register Employee", "employee_registration", PUBLIC),
    NavItem("Reports", "reports", ADMIN_ONLY),
    NavItem("Export", "export", ADMIN_ONLY),
    NavItem("Employees", "admin_employees", ADMIN_ONLY),
    NavItem("Users", "admin_users", ADMIN_ONLY),
    NavItem("Settings", "settings", ADMIN_ONLY),
)


def visible_navigation(
    *,
    is_authenticated: bool,
    role: Optional[Role],
    items: Iterable[NavItem] = NAVIGATION,
) -> list[NavItem]:
    return [
        item
        for item in items
        if decide_navigation(is_authenticated=is_authenticated, role=role, page=item.access) == NavDecision.RENDER
    ]
