from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from governance_service.console.cache import ViewCache
from governance_service.database import get_db
from governance_service.routers.dependencies import get_view_cache
from governance_service.schemas.user_preferences import UserPreferencesRead, UserPreferencesUpdate
from governance_service.services import user_preferences_service


router = APIRouter(tags=["preferences"])


@router.get("/users/{user_id}/preferences", response_model=UserPreferencesRead)
def read_preferences(user_id: str, db: Session = Depends(get_db)) -> UserPreferencesRead:
    return user_preferences_service.get_preferences(db, user_id)


@router.put("/users/{user_id}/preferences", response_model=UserPreferencesRead)
def update_preferences(
    user_id: str,
    payload: UserPreferencesUpdate,
    db: Session = Depends(get_db),
    cache: ViewCache = Depends(get_view_cache),
) -> UserPreferencesRead:
    saved = user_preferences_service.update_preferences(db, user_id, payload)
    cache.preferences_changed(user_id)
    return saved


@router.get("/preferences", response_model=list[UserPreferencesRead])
def list_preferences(db: Session = Depends(get_db)) -> list[UserPreferencesRead]:
    return [UserPreferencesRead.model_validate(p) for p in user_preferences_service.list_preferences(db)]
