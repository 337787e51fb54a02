from __future__ import annotations

from typing import Optional

from loguru import logger

from ..common.validators import FieldErrors, validate_graph_id
from ..core.enums import Role
from ..core.exceptions import AuthorizationError
from .model import AdminSettings
from .repository import SettingsRepository


class SettingsService:
    """Use case: load and save the caller's integration settings (admin)."""

    def __init__(self, settings: SettingsRepository):
        self._settings = settings

    @staticmethod
    def _require_admin(current_role: Optional[Role]) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission")

    def get_settings(self, *, current_role: Optional[Role], user_id: str) -> AdminSettings:
        self._require_admin(current_role)
        return self._settings.get_for_user(user_id) or AdminSettings(user_id=user_id)

    def save_settings(
        self,
        *,
        current_role: Optional[Role],
        user_id: str,
        ms_graph_enabled: bool,
        tenant_id: str = "",
        client_id: str = "",
    ) -> AdminSettings:
        self._require_admin(current_role)

        tenant_v: Optional[str] = (tenant_id or "").strip()[:100] or None
        client_v: Optional[str] = (client_id or "").strip()[:100] or None
        if ms_graph_enabled:
            errors = FieldErrors()
            tenant_v = errors.check("ms_graph_tenant_id", validate_graph_id, tenant_id, "Tenant ID")
            client_v = errors.check("ms_graph_client_id", validate_graph_id, client_id, "Client ID")
            errors.raise_if_any()

        settings = AdminSettings(
            user_id=user_id,
            ms_graph_enabled=bool(ms_graph_enabled),
            ms_graph_tenant_id=tenant_v,
            ms_graph_client_id=client_v,
        )
        self._settings.upsert(settings)
        logger.info("Integration settings saved for {} (enabled={})", user_id, settings.ms_graph_enabled)
        return settings
