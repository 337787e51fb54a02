from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Authorization tier stored on the profile."""

    ADMIN = "admin"
    USER = "user"
    GUEST = "guest"

    @classmethod
    def parse(cls, value: str | None) -> "Role":
        """Unknown or missing roles degrade to GUEST."""
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return cls.GUEST


class NavDecision(str, Enum):
    RENDER = "render"
    REDIRECT_LOGIN = "redirect_login"
    REDIRECT_HOME = "redirect_home"
