from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.cursor import transaction
from .model import AdminSettings
from .repository import SettingsRepository


class MySQLSettingsRepository(SettingsRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_user(self, user_id: str) -> Optional[AdminSettings]:
        with transaction(self._conn_factory) as cur:
            cur.execute(
                """
                SELECT user_id, ms_graph_enabled, ms_graph_tenant_id, ms_graph_client_id, created_at, updated_at
                FROM admin_settings
                WHERE user_id=%s
                """,
                (user_id,),
            )
            row = cur.fetchone()
            if not row:
                return None
            return AdminSettings(
                user_id=row["user_id"],
                ms_graph_enabled=bool(row["ms_graph_enabled"]),
                ms_graph_tenant_id=row.get("ms_graph_tenant_id"),
                ms_graph_client_id=row.get("ms_graph_client_id"),
                created_at=row.get("created_at"),
                updated_at=row.get("updated_at"),
            )

    def upsert(self, settings: AdminSettings) -> None:
        with transaction(self._conn_factory) as cur:
            cur.execute(
                """
                INSERT INTO admin_settings(user_id, ms_graph_enabled, ms_graph_tenant_id, ms_graph_client_id)
                VALUES(%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    ms_graph_enabled=VALUES(ms_graph_enabled),
                    ms_graph_tenant_id=VALUES(ms_graph_tenant_id),
                    ms_graph_client_id=VALUES(ms_graph_client_id)
                """,
                (
                    settings.user_id,
                    1 if settings.ms_graph_enabled else 0,
                    settings.ms_graph_tenant_id,
                    settings.ms_graph_client_id,
                ),
            )
