from __future__ import annotations

import logging

from sqlalchemy import func, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from governance_service.models.user_post import UserPostRecord
from governance_service.models.user_preferences import UserPreferencesRecord
from governance_service.models.user_profile import UserProfileRecord
from governance_service.schemas.statistics import SystemStatistics


logger = logging.getLogger(__name__)


def check_database(db: Session) -> str:
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError:
        logger.warning("Database health check failed", exc_info=True)
        return "DOWN"
    return "UP"


def _count(db: Session, model, *criteria) -> int:
    q = db.query(func.count(model.id))
    if criteria:
        q = q.filter(*criteria)
    return int(q.scalar() or 0)


def get_statistics(db: Session) -> SystemStatistics:
    total_users = _count(db, UserProfileRecord)
    active_users = _count(db, UserProfileRecord, UserProfileRecord.deleted.is_(False))
    total_posts = _count(db, UserPostRecord)
    active_posts = _count(db, UserPostRecord, UserPostRecord.deleted.is_(False))
    total_preferences = _count(db, UserPreferencesRecord)

    return SystemStatistics(
        total_users=total_users,
        active_users=active_users,
        deleted_users=total_users - active_users,
        total_posts=total_posts,
        active_posts=active_posts,
        total_preferences=total_preferences,
        system_health=check_database(db),
    )
