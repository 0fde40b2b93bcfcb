# users.py
import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from governance_service.console.cache import ViewCache
from governance_service.database import get_db
from governance_service.routers.dependencies import get_view_cache
from governance_service.schemas.common import OperationAcknowledgment
from governance_service.schemas.user_profile import UserProfileCreate, UserProfileRead, UserProfileUpdate
from governance_service.services import user_profile_service


router = APIRouter()

logger = logging.getLogger(__name__)


@router.get("", response_model=list[UserProfileRead])
def list_users(db: Session = Depends(get_db)) -> list[UserProfileRead]:
    return [UserProfileRead.model_validate(u) for u in user_profile_service.list_users(db)]


@router.post("", response_model=UserProfileRead, status_code=status.HTTP_201_CREATED)
def create_user(
    payload: UserProfileCreate,
    db: Session = Depends(get_db),
    cache: ViewCache = Depends(get_view_cache),
) -> UserProfileRead:
    logger.info("Received request to create user with username: %s", payload.username)
    user = user_profile_service.create_user(db, payload)
    cache.user_created()
    return UserProfileRead.model_validate(user)


@router.get("/{user_id}", response_model=UserProfileRead)
def read_user(user_id: str, db: Session = Depends(get_db)) -> UserProfileRead:
    return UserProfileRead.model_validate(user_profile_service.get_user(db, user_id))


@router.put("/{user_id}", response_model=UserProfileRead)
def update_user(
    user_id: str,
    payload: UserProfileUpdate,
    db: Session = Depends(get_db),
    cache: ViewCache = Depends(get_view_cache),
) -> UserProfileRead:
    user = user_profile_service.update_user(db, user_id, payload)
    cache.user_changed(user_id)
    return UserProfileRead.model_validate(user)


@router.delete("/{user_id}", response_model=OperationAcknowledgment)
def soft_delete_user(
    user_id: str,
    db: Session = Depends(get_db),
    cache: ViewCache = Depends(get_view_cache),
) -> OperationAcknowledgment:
    user_profile_service.soft_delete_user(db, user_id)
    cache.user_changed(user_id)
    return OperationAcknowledgment(
        message="User has been successfully soft deleted. The user and all associated posts are now marked as deleted.",
        operation_type="SOFT_DELETE",
        resource_id=user_id,
    )


@router.post("/{user_id}/restore", response_model=UserProfileRead)
def restore_user(
    user_id: str,
    db: Session = Depends(get_db),
    cache: ViewCache = Depends(get_view_cache),
) -> UserProfileRead:
    user = user_profile_service.restore_user(db, user_id)
    cache.user_changed(user_id)
    return UserProfileRead.model_validate(user)


@router.post("/{user_id}/purge", response_model=OperationAcknowledgment)
def hard_delete_user(
    user_id: str,
    db: Session = Depends(get_db),
    cache: ViewCache = Depends(get_view_cache),
) -> OperationAcknowledgment:
    user_profile_service.hard_delete_user(db, user_id)
    cache.user_changed(user_id)
    return OperationAcknowledgment(
        message="User has been permanently deleted from the system. All associated data has been removed.",
        operation_type="HARD_DELETE",
        resource_id=user_id,
    )
