# user_profile_service.py
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from governance_service.config import settings
from governance_service.database import utcnow
from governance_service.exceptions import ResourceConflictError, ResourceNotFoundError
from governance_service.models.user_post import UserPostRecord
from governance_service.models.user_preferences import UserPreferencesRecord
from governance_service.models.user_profile import UserProfileRecord
from governance_service.schemas.user_profile import UserProfileCreate, UserProfileUpdate
from governance_service.services import lifecycle


logger = logging.getLogger(__name__)


def list_users(db: Session) -> list[UserProfileRecord]:
    # Includes soft-deleted users; callers filter on `deleted` for active views.
    return db.query(UserProfileRecord).order_by(UserProfileRecord.created_at).all()


def get_user(db: Session, user_id: str) -> UserProfileRecord:
    user = db.query(UserProfileRecord).filter(UserProfileRecord.id == user_id).first()
    if not user:
        raise ResourceNotFoundError("User", user_id)
    return user


def get_active_user(db: Session, user_id: str) -> UserProfileRecord:
    user = (
        db.query(UserProfileRecord)
        .filter(UserProfileRecord.id == user_id, UserProfileRecord.deleted.is_(False))
        .first()
    )
    if not user:
        raise ResourceNotFoundError("User", user_id)
    return user


def user_exists(db: Session, user_id: str) -> bool:
    return db.query(UserProfileRecord.id).filter(UserProfileRecord.id == user_id).first() is not None


def is_user_active(db: Session, user_id: str) -> bool:
    return (
        db.query(UserProfileRecord.id)
        .filter(UserProfileRecord.id == user_id, UserProfileRecord.deleted.is_(False))
        .first()
        is not None
    )


def _username_taken(db: Session, username: str) -> bool:
    return db.query(UserProfileRecord.id).filter(UserProfileRecord.username == username).first() is not None


def _email_taken(db: Session, email: str) -> bool:
    return db.query(UserProfileRecord.id).filter(UserProfileRecord.email == email).first() is not None


def _commit_or_conflict(db: Session, username: str | None, email: str | None) -> None:
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        # A concurrent writer won the unique index; report which field collided.
        if username is not None and _username_taken(db, username):
            raise ResourceConflictError("User", "username", username) from exc
        raise ResourceConflictError("User", "email", email or "") from exc


def create_user(db: Session, payload: UserProfileCreate) -> UserProfileRecord:
    logger.info("Creating new user with username: %s", payload.username)

    # Uniqueness covers soft-deleted users too.
    if _username_taken(db, payload.username):
        raise ResourceConflictError("User", "username", payload.username)
    if _email_taken(db, payload.email):
        raise ResourceConflictError("User", "email", payload.email)

    data = payload.model_dump(mode="json", by_alias=False)
    user = UserProfileRecord(**data, deleted=False, audit_trail=[])
    lifecycle.append_audit(user, "CREATE", "User profile created")
    db.add(user)
    _commit_or_conflict(db, payload.username, payload.email)
    db.refresh(user)

    logger.info("User created successfully with ID: %s", user.id)
    return user


def update_user(db: Session, user_id: str, payload: UserProfileUpdate) -> UserProfileRecord:
    logger.info("Updating user with ID: %s", user_id)
    user = get_active_user(db, user_id)

    update_data = payload.model_dump(mode="json", by_alias=False, exclude_unset=True, exclude_none=True)
    new_email = update_data.pop("email", None)
    if new_email is not None and new_email != user.email:
        if _email_taken(db, new_email):
            raise ResourceConflictError("User", "email", new_email)
        user.email = new_email

    for field, value in update_data.items():
        setattr(user, field, value)

    lifecycle.append_audit(user, "UPDATE", "User profile updated")
    db.add(user)
    _commit_or_conflict(db, None, new_email)
    db.refresh(user)

    logger.info("User updated successfully with ID: %s", user.id)
    return user


def soft_delete_user(db: Session, user_id: str) -> UserProfileRecord:
    """Soft-delete a user and every active post they own, with one shared timestamp."""

    logger.info("Soft deleting user with ID: %s", user_id)
    user = get_active_user(db, user_id)

    stamp = lifecycle.mark_deleted(user, utcnow())
    lifecycle.append_audit(user, "SOFT_DELETE", "User profile soft deleted")
    cascaded = (
        db.query(UserPostRecord)
        .filter(UserPostRecord.user_id == user_id, UserPostRecord.deleted.is_(False))
        .update({"deleted": True, "deleted_at": stamp, "updated_at": stamp}, synchronize_session=False)
    )
    db.add(user)
    db.commit()
    db.refresh(user)

    logger.info("User %s soft deleted with %d associated posts", user_id, cascaded)
    return user


def restore_user(db: Session, user_id: str) -> UserProfileRecord:
    """Reactivate a soft-deleted user and the posts removed by the same soft delete."""

    logger.info("Restoring user with ID: %s", user_id)
    user = get_user(db, user_id)
    deleted_at = user.deleted_at

    lifecycle.restore(user)
    lifecycle.append_audit(user, "RESTORE", "User profile reactivated")
    restored = 0
    if deleted_at is not None:
        restored = (
            db.query(UserPostRecord)
            .filter(
                UserPostRecord.user_id == user_id,
                UserPostRecord.deleted.is_(True),
                UserPostRecord.deleted_at == deleted_at,
            )
            .update({"deleted": False, "deleted_at": None, "updated_at": utcnow()}, synchronize_session=False)
        )
    db.add(user)
    db.commit()
    db.refresh(user)

    logger.info("User %s restored with %d associated posts", user_id, restored)
    return user


def hard_delete_user(db: Session, user_id: str) -> None:
    logger.info("Attempting hard delete for user with ID: %s", user_id)
    user = get_user(db, user_id)

    lifecycle.ensure_purgeable(user, grace_period_hours=settings.hard_delete_grace_period_hours)

    db.query(UserPreferencesRecord).filter(UserPreferencesRecord.user_id == user_id).delete(synchronize_session=False)
    db.query(UserPostRecord).filter(UserPostRecord.user_id == user_id).delete(synchronize_session=False)
    db.delete(user)
    db.commit()

    logger.info("User and all associated data hard deleted successfully for ID: %s", user_id)
