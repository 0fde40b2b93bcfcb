from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import Field

from governance_service.schemas.common import CamelModel


class SystemStatistics(CamelModel):
    total_users: int = 0
    active_users: int = 0
    deleted_users: int = 0
    total_posts: int = 0
    active_posts: int = 0
    total_preferences: int = 0
    system_health: str = "Unknown"


class HealthStatus(CamelModel):
    status: str
    timestamp: datetime
    components: dict[str, Any] = Field(default_factory=dict)
