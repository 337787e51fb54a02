from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.cursor import transaction
from .model import Profile
from .repository import ProfileRepository

_COLUMNS = "id, user_id, email, display_name, role, password_hash, created_at, updated_at"


def _to_profile(row: Dict[str, Any]) -> Profile:
    return Profile(
        id=int(row["id"]),
        user_id=str(row["user_id"]),
        email=row["email"],
        display_name=row.get("display_name"),
        role=Role.parse(row.get("role")),
        password_hash=row["password_hash"],
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


class MySQLProfileRepository(ProfileRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_email(self, email: str) -> Optional[Profile]:
        with transaction(self._conn_factory) as cur:
            cur.execute(f"SELECT {_COLUMNS} FROM profiles WHERE email=%s", (email,))
            row = cur.fetchone()
            return _to_profile(row) if row else None

    def get_by_user_id(self, user_id: str) -> Optional[Profile]:
        with transaction(self._conn_factory) as cur:
            cur.execute(f"SELECT {_COLUMNS} FROM profiles WHERE user_id=%s", (user_id,))
            row = cur.fetchone()
            return _to_profile(row) if row else None

    def create_profile(
        self,
        *,
        user_id: str,
        email: str,
        display_name: Optional[str],
        role: Role,
        password_hash: str,
    ) -> int:
        with transaction(self._conn_factory) as cur:
            cur.execute(
                """
                INSERT INTO profiles(user_id, email, display_name, role, password_hash)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (user_id, email, display_name, role.value, password_hash),
            )
            return int(cur.lastrowid)

    def update_profile(self, user_id: str, *, email: str, display_name: Optional[str]) -> bool:
        with transaction(self._conn_factory) as cur:
            cur.execute(
                "UPDATE profiles SET email=%s, display_name=%s WHERE user_id=%s",
                (email, display_name, user_id),
            )
            return cur.rowcount > 0

    def update_role(self, user_id: str, role: Role) -> bool:
        with transaction(self._conn_factory) as cur:
            cur.execute("UPDATE profiles SET role=%s WHERE user_id=%s", (role.value, user_id))
            return cur.rowcount > 0

    def update_password_hash(self, user_id: str, password_hash: str) -> bool:
        with transaction(self._conn_factory) as cur:
            cur.execute("UPDATE profiles SET password_hash=%s WHERE user_id=%s", (password_hash, user_id))
            return cur.rowcount > 0

    def delete_by_user_id(self, user_id: str) -> bool:
        with transaction(self._conn_factory) as cur:
            cur.execute("DELETE FROM profiles WHERE user_id=%s", (user_id,))
            return cur.rowcount > 0

    def list_all(self) -> Sequence[Profile]:
        with transaction(self._conn_factory) as cur:
            cur.execute(f"SELECT {_COLUMNS} FROM profiles ORDER BY created_at DESC, id DESC")
            return [_to_profile(r) for r in cur.fetchall()]
