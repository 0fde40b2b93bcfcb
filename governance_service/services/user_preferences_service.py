# user_preferences_service.py
import logging

from sqlalchemy.orm import Session

from governance_service.exceptions import BusinessRuleViolationError, ResourceNotFoundError
from governance_service.models.user_preferences import UserPreferencesRecord
from governance_service.schemas.user_preferences import UserPreferencesRead, UserPreferencesUpdate
from governance_service.services.user_profile_service import is_user_active, user_exists


logger = logging.getLogger(__name__)


def _find_preferences(db: Session, user_id: str) -> UserPreferencesRecord | None:
    return (
        db.query(UserPreferencesRecord)
        .filter(UserPreferencesRecord.user_id == user_id, UserPreferencesRecord.deleted.is_(False))
        .first()
    )


def build_preferences(record: UserPreferencesRecord | None, user_id: str) -> UserPreferencesRead:
    if record is None:
        return UserPreferencesRead(user_id=user_id)
    return UserPreferencesRead.model_validate(record)


def list_preferences(db: Session) -> list[UserPreferencesRecord]:
    return db.query(UserPreferencesRecord).order_by(UserPreferencesRecord.created_at).all()


def get_preferences(db: Session, user_id: str) -> UserPreferencesRead:
    """Return stored preferences, or unsaved defaults when the user never set any."""

    logger.info("Retrieving preferences for user ID: %s", user_id)
    if not is_user_active(db, user_id):
        raise ResourceNotFoundError("User", user_id)
    return build_preferences(_find_preferences(db, user_id), user_id)


def update_preferences(db: Session, user_id: str, payload: UserPreferencesUpdate) -> UserPreferencesRead:
    """Upsert preferences; only the fields present in ``payload`` change.

    ``custom_settings`` is merged key by key into the stored map.
    """

    logger.info("Updating preferences for user ID: %s", user_id)
    if not is_user_active(db, user_id):
        if not user_exists(db, user_id):
            raise ResourceNotFoundError("User", user_id)
        raise BusinessRuleViolationError("Cannot update preferences for inactive user")

    record = _find_preferences(db, user_id)
    if record is None:
        record = UserPreferencesRecord(user_id=user_id, deleted=False, custom_settings={})

    update_data = payload.model_dump(exclude_unset=True, exclude_none=True)
    custom = update_data.pop("custom_settings", None)
    for field, value in update_data.items():
        setattr(record, field, value)
    if custom is not None:
        record.custom_settings = {**(record.custom_settings or {}), **custom}

    db.add(record)
    db.commit()
    db.refresh(record)

    logger.info("Preferences updated successfully for user ID: %s", user_id)
    return build_preferences(record, user_id)
