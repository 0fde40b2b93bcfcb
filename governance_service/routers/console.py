# console.py
from typing import Any

from fastapi import APIRouter, Body, Depends
from pydantic import Field
from sqlalchemy.orm import Session

from governance_service.console import actions, pages
from governance_service.console.cache import ViewCache
from governance_service.database import get_db
from governance_service.routers.dependencies import get_view_cache
from governance_service.schemas.common import CamelModel
from governance_service.schemas.console import (
    ActionResult,
    DashboardView,
    PreferencesPageView,
    UserDetailView,
    UsersPageView,
)


router = APIRouter(prefix="/console", tags=["console"])

FormBody = Body(default_factory=dict)


class PurgeConfirmation(CamelModel):
    confirm: bool = False
    confirm_again: bool = False


class StatusChange(CamelModel):
    status: str = Field(default="")


@router.get("", response_model=DashboardView)
def dashboard(db: Session = Depends(get_db), cache: ViewCache = Depends(get_view_cache)) -> DashboardView:
    return pages.load_dashboard(db, cache)


@router.get("/users", response_model=UsersPageView)
def users_page(db: Session = Depends(get_db), cache: ViewCache = Depends(get_view_cache)) -> UsersPageView:
    return pages.load_users_page(db, cache)


@router.get("/users/{user_id}", response_model=UserDetailView)
def user_detail_page(user_id: str, db: Session = Depends(get_db), cache: ViewCache = Depends(get_view_cache)) -> UserDetailView:
    return pages.load_user_detail(db, cache, user_id)


@router.get("/users/{user_id}/preferences", response_model=PreferencesPageView)
def preferences_page(
    user_id: str, db: Session = Depends(get_db), cache: ViewCache = Depends(get_view_cache)
) -> PreferencesPageView:
    return pages.load_preferences_page(db, cache, user_id)


@router.post("/users", response_model=ActionResult)
def submit_create_user(
    form: dict[str, Any] = FormBody, db: Session = Depends(get_db), cache: ViewCache = Depends(get_view_cache)
) -> ActionResult:
    return actions.create_user(db, cache, form)


@router.post("/users/{user_id}", response_model=ActionResult)
def submit_update_user(
    user_id: str,
    form: dict[str, Any] = FormBody,
    db: Session = Depends(get_db),
    cache: ViewCache = Depends(get_view_cache),
) -> ActionResult:
    return actions.update_user(db, cache, user_id, form)


@router.post("/users/{user_id}/status", response_model=ActionResult)
def submit_status(
    user_id: str, payload: StatusChange, db: Session = Depends(get_db), cache: ViewCache = Depends(get_view_cache)
) -> ActionResult:
    return actions.update_user_status(db, cache, user_id, payload.status)


@router.post("/users/{user_id}/delete", response_model=ActionResult)
def submit_soft_delete(user_id: str, db: Session = Depends(get_db), cache: ViewCache = Depends(get_view_cache)) -> ActionResult:
    return actions.soft_delete_user(db, cache, user_id)


@router.post("/users/{user_id}/restore", response_model=ActionResult)
def submit_restore(user_id: str, db: Session = Depends(get_db), cache: ViewCache = Depends(get_view_cache)) -> ActionResult:
    return actions.restore_user(db, cache, user_id)


@router.post("/users/{user_id}/purge", response_model=ActionResult)
def submit_purge(
    user_id: str,
    payload: PurgeConfirmation,
    db: Session = Depends(get_db),
    cache: ViewCache = Depends(get_view_cache),
) -> ActionResult:
    return actions.hard_delete_user(db, cache, user_id, confirmed=payload.confirm, confirmed_again=payload.confirm_again)


@router.post("/users/{user_id}/posts", response_model=ActionResult)
def submit_create_post(
    user_id: str,
    form: dict[str, Any] = FormBody,
    db: Session = Depends(get_db),
    cache: ViewCache = Depends(get_view_cache),
) -> ActionResult:
    return actions.create_post(db, cache, user_id, form)


@router.post("/users/{user_id}/posts/{post_id}/delete", response_model=ActionResult)
def submit_delete_post(
    user_id: str, post_id: str, db: Session = Depends(get_db), cache: ViewCache = Depends(get_view_cache)
) -> ActionResult:
    return actions.delete_post(db, cache, user_id, post_id)


@router.post("/users/{user_id}/preferences", response_model=ActionResult)
def submit_preferences(
    user_id: str,
    form: dict[str, Any] = FormBody,
    db: Session = Depends(get_db),
    cache: ViewCache = Depends(get_view_cache),
) -> ActionResult:
    return actions.update_preferences(db, cache, user_id, form)
