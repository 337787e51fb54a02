from __future__ import annotations

import uuid
from typing import Optional, Sequence

from loguru import logger
from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import (
    EMAIL_RE,
    FieldErrors,
    require_non_empty,
    validate_password,
)
from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from .model import Profile, SessionUser
from .repository import ProfileRepository


def _validate_email(value: Optional[str]) -> str:
    v = require_non_empty(value, "Email").lower()
    if len(v) > 255 or not EMAIL_RE.match(v):
        raise ValidationError("Email address is not valid")
    return v


def _validate_display_name(value: Optional[str]) -> Optional[str]:
    v = (value or "").strip()
    if len(v) > 255:
        raise ValidationError("Display name must be at most 255 characters")
    return v or None


def _to_session_user(profile: Profile) -> SessionUser:
    return SessionUser(
        user_id=profile.user_id,
        email=profile.email,
        display_name=profile.display_name or profile.email,
        role=profile.role,
    )


class AuthService:
    """Use cases: sign in, sign up, change own password."""

    def __init__(self, profiles: ProfileRepository):
        self._profiles = profiles

    def authenticate(self, email: str, password: str) -> SessionUser:
        profile = self._profiles.get_by_email((email or "").strip().lower())
        if not profile:
            raise AuthenticationError("Invalid email or password")

        try:
            ok = check_password_hash(profile.password_hash, password or "")
        except (TypeError, ValueError):
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            raise AuthenticationError("Invalid email or password")

        logger.info("Signed in {} ({})", profile.email, profile.role.value)
        return _to_session_user(profile)

    def sign_up(self, *, email: str, password: str, display_name: str = "") -> SessionUser:
        errors = FieldErrors()
        email_v = errors.check("email", _validate_email, email)
        password_v = errors.check("password", validate_password, password)
        display_v = errors.check("display_name", _validate_display_name, display_name)
        errors.raise_if_any()

        if self._profiles.get_by_email(email_v):
            raise ConflictError("An account with this email already exists")

        user_id = str(uuid.uuid4())
        self._profiles.create_profile(
            user_id=user_id,
            email=email_v,
            display_name=display_v or email_v,
            role=Role.GUEST,
            password_hash=generate_password_hash(password_v),
        )
        logger.info("Signed up {}", email_v)
        profile = self._profiles.get_by_user_id(user_id)
        if not profile:
            raise NotFoundError("Account could not be loaded after sign up")
        return _to_session_user(profile)

    def change_password(self, *, user_id: str, new_password: str, confirm_password: str) -> None:
        errors = FieldErrors()
        password_v = errors.check("new_password", validate_password, new_password)
        if (new_password or "") != (confirm_password or ""):
            errors.add("confirm_password", "Passwords do not match")
        errors.raise_if_any()

        if not self._profiles.update_password_hash(user_id, generate_password_hash(password_v)):
            raise NotFoundError("Account not found")
        logger.info("Password updated for {}", user_id)


class ProfileService:
    """Use case: manage user accounts (admin)."""

    def __init__(self, profiles: ProfileRepository):
        self._profiles = profiles

    @staticmethod
    def _require_admin(current_role: Role) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission")

    def list_profiles(self, *, current_role: Role) -> Sequence[Profile]:
        self._require_admin(current_role)
        return self._profiles.list_all()

    def create_profile(
        self,
        *,
        current_role: Role,
        email: str,
        password: str,
        display_name: str,
        role: str,
    ) -> str:
        self._require_admin(current_role)

        errors = FieldErrors()
        email_v = errors.check("email", _validate_email, email)
        password_v = errors.check("password", validate_password, password)
        display_v = errors.check("display_name", _validate_display_name, display_name)
        role_v = errors.check("role", self._parse_role, role)
        errors.raise_if_any()

        if self._profiles.get_by_email(email_v):
            raise ConflictError("An account with this email already exists")

        user_id = str(uuid.uuid4())
        self._profiles.create_profile(
            user_id=user_id,
            email=email_v,
            display_name=display_v or email_v,
            role=role_v,
            password_hash=generate_password_hash(password_v),
        )
        logger.info("Created account {} with role {}", email_v, role_v.value)
        return user_id

    def update_profile(self, *, current_role: Role, user_id: str, email: str, display_name: str) -> None:
        self._require_admin(current_role)

        errors = FieldErrors()
        email_v = errors.check("email", _validate_email, email)
        display_v = errors.check("display_name", _validate_display_name, display_name)
        errors.raise_if_any()

        existing = self._profiles.get_by_email(email_v)
        if existing and existing.user_id != user_id:
            raise ConflictError("An account with this email already exists")

        if not self._profiles.update_profile(user_id, email=email_v, display_name=display_v):
            raise NotFoundError("Account not found")

    def change_role(self, *, current_role: Role, user_id: str, role: str) -> None:
        self._require_admin(current_role)
        new_role = self._parse_role(role)
        if not self._profiles.update_role(user_id, new_role):
            raise NotFoundError("Account not found")
        logger.info("Role of {} changed to {}", user_id, new_role.value)

    def delete_profile(self, *, current_role: Role, current_user_id: str, user_id: str) -> None:
        self._require_admin(current_role)
        if user_id == current_user_id:
            raise ValidationError("You cannot delete your own account")
        if not self._profiles.delete_by_user_id(user_id):
            raise NotFoundError("Account not found")
        logger.info("Deleted account {}", user_id)

    @staticmethod
    def _parse_role(value: str) -> Role:
        try:
            return Role((value or "").strip().lower())
        except ValueError:
            raise ValidationError("Unknown role")
