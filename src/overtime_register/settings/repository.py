from __future__ import annotations

from typing import Optional, Protocol

from .model import AdminSettings


class SettingsRepository(Protocol):
    def get_for_user(self, user_id: str) -> Optional[AdminSettings]:
        raise NotImplementedError

    def upsert(self, settings: AdminSettings) -> None:
        raise NotImplementedError
