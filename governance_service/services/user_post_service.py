# user_post_service.py
import logging

from sqlalchemy.orm import Session

from governance_service.database import utcnow
from governance_service.exceptions import BusinessRuleViolationError, ResourceNotFoundError
from governance_service.models.user_post import UserPostRecord
from governance_service.schemas.user_post import EngagementAction, UserPostCreate
from governance_service.services import lifecycle
from governance_service.services.user_profile_service import is_user_active


logger = logging.getLogger(__name__)


def create_post(db: Session, user_id: str, payload: UserPostCreate) -> UserPostRecord:
    logger.info("Creating new post for user ID: %s", user_id)
    if not is_user_active(db, user_id):
        raise BusinessRuleViolationError("Cannot create post for inactive or non-existent user")

    post = UserPostRecord(user_id=user_id, deleted=False, **payload.model_dump())
    db.add(post)
    db.commit()
    db.refresh(post)

    logger.info("Post created successfully with ID: %s for user ID: %s", post.id, user_id)
    return post


def list_user_posts(db: Session, user_id: str) -> list[UserPostRecord]:
    logger.info("Retrieving posts for user ID: %s", user_id)
    if not is_user_active(db, user_id):
        raise ResourceNotFoundError("User", user_id)
    return (
        db.query(UserPostRecord)
        .filter(UserPostRecord.user_id == user_id, UserPostRecord.deleted.is_(False))
        .order_by(UserPostRecord.created_at.desc())
        .all()
    )


def list_posts(db: Session) -> list[UserPostRecord]:
    # Includes soft-deleted posts for admin views.
    return db.query(UserPostRecord).order_by(UserPostRecord.created_at.desc()).all()


def get_post(db: Session, post_id: str) -> UserPostRecord:
    post = (
        db.query(UserPostRecord)
        .filter(UserPostRecord.id == post_id, UserPostRecord.deleted.is_(False))
        .first()
    )
    if not post:
        raise ResourceNotFoundError("Post", post_id)
    return post


def soft_delete_post(db: Session, post_id: str) -> UserPostRecord:
    logger.info("Soft deleting post with ID: %s", post_id)
    post = get_post(db, post_id)
    lifecycle.mark_deleted(post, utcnow())
    db.add(post)
    db.commit()
    db.refresh(post)

    logger.info("Post soft deleted successfully with ID: %s", post_id)
    return post


def record_engagement(db: Session, post_id: str, action: EngagementAction) -> UserPostRecord:
    post = get_post(db, post_id)
    if action == "view":
        post.view_count = (post.view_count or 0) + 1
    elif action == "like":
        post.like_count = (post.like_count or 0) + 1
    elif action == "unlike":
        post.like_count = max(0, (post.like_count or 0) - 1)
    elif action == "comment":
        post.comment_count = (post.comment_count or 0) + 1
    elif action == "uncomment":
        post.comment_count = max(0, (post.comment_count or 0) - 1)
    db.add(post)
    db.commit()
    db.refresh(post)
    return post
