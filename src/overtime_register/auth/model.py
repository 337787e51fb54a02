from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Profile:
    """Domain entity: identity + authorization tier.

    Note: plain data object, no DB access code here.
    """

    id: int
    user_id: str
    email: str
    display_name: Optional[str]
    role: Role
    password_hash: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    user_id: str
    email: str
    display_name: str
    role: Role
