from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class AdminSettings:
    """Per-admin integration flags. The Graph client secret is never stored."""

    user_id: str
    ms_graph_enabled: bool = False
    ms_graph_tenant_id: Optional[str] = None
    ms_graph_client_id: Optional[str] = None
    created_at: Optional[datetime] = field(default=None, compare=False)
    updated_at: Optional[datetime] = field(default=None, compare=False)
