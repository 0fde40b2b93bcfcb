from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import Field

from governance_service.schemas.common import CamelModel


class UserPreferencesUpdate(CamelModel):
    theme: str | None = None
    language: str | None = None
    email_notifications: bool | None = None
    push_notifications: bool | None = None
    sms_notifications: bool | None = None
    profile_visible: bool | None = None
    show_email: bool | None = None
    show_last_seen: bool | None = None
    content_filter: str | None = None
    custom_settings: dict[str, Any] | None = None


class UserPreferencesRead(CamelModel):
    # id is None for defaults that were never saved.
    id: str | None = None
    user_id: str
    theme: str = "light"
    language: str = "en"
    email_notifications: bool = True
    push_notifications: bool = True
    sms_notifications: bool = False
    profile_visible: bool = True
    show_email: bool = False
    show_last_seen: bool = True
    content_filter: str = "moderate"
    custom_settings: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted: bool = False
