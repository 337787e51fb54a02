from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import Profile


class ProfileRepository(Protocol):
    """Repository interface for profiles.

    Note (DIP): the service layer depends on this interface, not on a concrete DB.
    """

    def get_by_email(self, email: str) -> Optional[Profile]:
        raise NotImplementedError

    def get_by_user_id(self, user_id: str) -> Optional[Profile]:
        raise NotImplementedError

    def create_profile(
        self,
        *,
        user_id: str,
        email: str,
        display_name: Optional[str],
        role: Role,
        password_hash: str,
    ) -> int:
        raise NotImplementedError

    def update_profile(self, user_id: str, *, email: str, display_name: Optional[str]) -> bool:
        raise NotImplementedError

    def update_role(self, user_id: str, role: Role) -> bool:
        raise NotImplementedError

    def update_password_hash(self, user_id: str, password_hash: str) -> bool:
        raise NotImplementedError

    def delete_by_user_id(self, user_id: str) -> bool:
        raise NotImplementedError

    def list_all(self) -> Sequence[Profile]:
        raise NotImplementedError
