"""Flask glue for identity: session helpers, the page guard and the idle check."""
from __future__ import annotations

import time
from functools import wraps
from typing import Optional

from flask import Flask, flash, redirect, session, url_for

from ..core.enums import NavDecision, Role
from .access import PageAccess, decide_navigation, visible_navigation
from .inactivity import session_expired
from .model import SessionUser

_SESSION_KEYS = ("user_id", "email", "display_name", "role", "last_seen")


def sign_in(user: SessionUser) -> None:
    session.clear()
    session["user_id"] = user.user_id
    session["email"] = user.email
    session["display_name"] = user.display_name
    session["role"] = user.role.value
    session["last_seen"] = time.time()


def sign_out() -> None:
    for key in _SESSION_KEYS:
        session.pop(key, None)


def is_authenticated() -> bool:
    return "user_id" in session


def current_role() -> Optional[Role]:
    if not is_authenticated():
        return None
    return Role.parse(session.get("role"))


def current_user_id() -> Optional[str]:
    return session.get("user_id")


def guarded(access: PageAccess):
    """Route decorator applying the navigation decision to the current session."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            decision = decide_navigation(
                is_authenticated=is_authenticated(),
                role=current_role(),
                page=access,
            )
            if decision == NavDecision.REDIRECT_LOGIN:
                flash("Please sign in to continue", "warning")
                return redirect(url_for("auth"))
            if decision == NavDecision.REDIRECT_HOME:
                flash("You do not have permission to view that page", "danger")
                return redirect(url_for("overtime_input"))
            return view(*args, **kwargs)

        return wrapper

    return decorator


def install(app: Flask, *, timeout_minutes: float) -> None:
    """Register the idle-session check and the template globals."""
    timeout_seconds = float(timeout_minutes) * 60

    @app.before_request
    def _check_inactivity():
        if not is_authenticated():
            return None
        now = time.time()
        if session_expired(session.get("last_seen"), now, timeout_seconds):
            sign_out()
            flash("Session expired due to inactivity", "warning")
            return redirect(url_for("auth"))
        session["last_seen"] = now
        return None

    @app.context_processor
    def _inject_identity():
        role = current_role()
        return {
            "current_user": {
                "email": session.get("email"),
                "display_name": session.get("display_name"),
                "role": role.value if role else None,
            }
            if role
            else None,
            "is_admin": role == Role.ADMIN,
            "navigation": visible_navigation(is_authenticated=is_authenticated(), role=role),
        }
