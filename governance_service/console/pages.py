"""Page loaders for the console screens.

Loaders read through :class:`ViewCache`, so repeated renders inside a cache window
do not touch the database. Sub-resources that cannot be read (posts or preferences
of a soft-deleted user) render as empty rather than failing the page.
"""

from __future__ import annotations

from sqlalchemy.orm import Session

from governance_service.console.cache import ViewCache, user_posts_tag, user_preferences_tag, user_tag
from governance_service.database import utcnow
from governance_service.exceptions import ResourceNotFoundError
from governance_service.schemas.console import DashboardView, PreferencesPageView, UserDetailView, UsersPageView
from governance_service.schemas.statistics import SystemStatistics
from governance_service.schemas.user_post import UserPostRead
from governance_service.schemas.user_preferences import UserPreferencesRead
from governance_service.schemas.user_profile import UserProfileRead
from governance_service.services import lifecycle
from governance_service.services.statistics_service import get_statistics
from governance_service.services.user_post_service import list_user_posts
from governance_service.services.user_preferences_service import get_preferences
from governance_service.services.user_profile_service import get_user, list_users


def fetch_users(db: Session, cache: ViewCache, *, revalidate: int | None = None) -> list[UserProfileRead]:
    return cache.fetch(
        "users",
        lambda: [UserProfileRead.model_validate(u) for u in list_users(db)],
        revalidate=revalidate,
    )


def fetch_user(db: Session, cache: ViewCache, user_id: str, *, revalidate: int | None = None) -> UserProfileRead:
    return cache.fetch(user_tag(user_id), lambda: UserProfileRead.model_validate(get_user(db, user_id)), revalidate=revalidate)


def fetch_user_posts(db: Session, cache: ViewCache, user_id: str) -> list[UserPostRead]:
    def load() -> list[UserPostRead]:
        try:
            return [UserPostRead.model_validate(p) for p in list_user_posts(db, user_id)]
        except ResourceNotFoundError:
            return []

    return cache.fetch(user_posts_tag(user_id), load)


def fetch_user_preferences(db: Session, cache: ViewCache, user_id: str) -> UserPreferencesRead | None:
    def load() -> UserPreferencesRead | None:
        try:
            return get_preferences(db, user_id)
        except ResourceNotFoundError:
            return None

    return cache.fetch(user_preferences_tag(user_id), load)


def fetch_statistics(db: Session, cache: ViewCache) -> SystemStatistics:
    return cache.fetch("stats", lambda: get_statistics(db))


def load_dashboard(db: Session, cache: ViewCache) -> DashboardView:
    stats = fetch_statistics(db, cache)
    return DashboardView(statistics=stats, health=stats.system_health, rendered_at=utcnow())


def load_users_page(db: Session, cache: ViewCache) -> UsersPageView:
    users = fetch_users(db, cache)
    return UsersPageView(
        users=users,
        total_users=len(users),
        active_users=lifecycle.count_active(users),
        rendered_at=utcnow(),
    )


def load_user_detail(db: Session, cache: ViewCache, user_id: str) -> UserDetailView:
    user = fetch_user(db, cache, user_id)
    return UserDetailView(
        user=user,
        posts=fetch_user_posts(db, cache, user_id),
        preferences=fetch_user_preferences(db, cache, user_id),
        can_purge=user.deleted,
        rendered_at=utcnow(),
    )


def load_preferences_page(db: Session, cache: ViewCache, user_id: str) -> PreferencesPageView:
    user = fetch_user(db, cache, user_id)
    return PreferencesPageView(
        user=user,
        preferences=fetch_user_preferences(db, cache, user_id),
        rendered_at=utcnow(),
    )
