from __future__ import annotations

from datetime import datetime

from pydantic import Field

from governance_service.schemas.common import CamelModel
from governance_service.schemas.statistics import SystemStatistics
from governance_service.schemas.user_post import UserPostRead
from governance_service.schemas.user_preferences import UserPreferencesRead
from governance_service.schemas.user_profile import UserProfileRead


class DashboardView(CamelModel):
    statistics: SystemStatistics
    health: str
    rendered_at: datetime


class UsersPageView(CamelModel):
    users: list[UserProfileRead] = Field(default_factory=list)
    total_users: int = 0
    active_users: int = 0
    rendered_at: datetime


class UserDetailView(CamelModel):
    user: UserProfileRead
    posts: list[UserPostRead] = Field(default_factory=list)
    preferences: UserPreferencesRead | None = None
    # Hard delete is only offered once the user is soft-deleted.
    can_purge: bool = False
    rendered_at: datetime


class PreferencesPageView(CamelModel):
    user: UserProfileRead
    preferences: UserPreferencesRead | None = None
    rendered_at: datetime


class ActionResult(CamelModel):
    success: bool
    message: str
    resource_id: str | None = None
    redirect_to: str | None = None
