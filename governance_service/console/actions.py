"""Server-side form actions for the console.

Every action validates the raw form fields, calls the service layer, revalidates
the affected console paths and reports a single human-readable message. Actions
never raise for validation or domain errors.
"""

from __future__ import annotations

import logging
from typing import Any, Literal, Mapping
from urllib.parse import urlparse

from pydantic import ConfigDict, Field, ValidationError, field_validator
from sqlalchemy.orm import Session

from governance_service.console.cache import ViewCache
from governance_service.exceptions import GovernanceError, ResourceNotFoundError
from governance_service.schemas.common import CamelModel, validate_email_format
from governance_service.schemas.console import ActionResult
from governance_service.schemas.user_post import UserPostCreate
from governance_service.schemas.user_preferences import UserPreferencesUpdate
from governance_service.schemas.user_profile import UserProfileCreate, UserProfileUpdate
from governance_service.services import user_post_service, user_preferences_service, user_profile_service


logger = logging.getLogger(__name__)

FormRole = Literal["USER", "ADMIN", "MODERATOR"]

POST_CONTENT_MAX = 5000


def _check_url(value: str | None) -> str | None:
    if not value:
        return None
    parsed = urlparse(value)
    if not parsed.scheme or not parsed.netloc:
        raise ValueError("Invalid url")
    return value


def _check_email(value: str) -> str:
    try:
        return validate_email_format(value)
    except ValueError:
        raise ValueError("Invalid email address") from None


def _check_roles(value: list[str] | None, required: bool) -> list[str] | None:
    if value is None and not required:
        return None
    if not value:
        raise ValueError("At least one role is required")
    return value


class CreateUserForm(CamelModel):
    model_config = ConfigDict(validate_default=True)

    username: str = ""
    email: str = ""
    first_name: str = ""
    last_name: str = ""
    roles: list[FormRole] = Field(default_factory=list)
    bio: str | None = None
    profile_image_url: str | None = None

    @field_validator("username")
    @classmethod
    def _username(cls, v: str) -> str:
        if len(v.strip()) < 3:
            raise ValueError("Username must be at least 3 characters")
        return v.strip()

    @field_validator("email")
    @classmethod
    def _email(cls, v: str) -> str:
        return _check_email(v)

    @field_validator("first_name")
    @classmethod
    def _first_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("First name is required")
        return v.strip()

    @field_validator("last_name")
    @classmethod
    def _last_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Last name is required")
        return v.strip()

    @field_validator("roles")
    @classmethod
    def _roles(cls, v: list[str]) -> list[str]:
        return _check_roles(v, required=True)

    @field_validator("profile_image_url")
    @classmethod
    def _url(cls, v: str | None) -> str | None:
        return _check_url(v)


class UpdateUserForm(CamelModel):
    first_name: str | None = None
    last_name: str | None = None
    roles: list[FormRole] | None = None
    bio: str | None = None
    profile_image_url: str | None = None

    @field_validator("first_name")
    @classmethod
    def _first_name(cls, v: str | None) -> str | None:
        if v is not None and not v.strip():
            raise ValueError("First name is required")
        return v

    @field_validator("last_name")
    @classmethod
    def _last_name(cls, v: str | None) -> str | None:
        if v is not None and not v.strip():
            raise ValueError("Last name is required")
        return v

    @field_validator("roles")
    @classmethod
    def _roles(cls, v: list[str] | None) -> list[str] | None:
        return _check_roles(v, required=False)

    @field_validator("profile_image_url")
    @classmethod
    def _url(cls, v: str | None) -> str | None:
        return _check_url(v)


class CreatePostForm(CamelModel):
    model_config = ConfigDict(validate_default=True)

    title: str = ""
    content: str = ""
    is_public: bool = True

    @field_validator("title")
    @classmethod
    def _title(cls, v: str) -> str:
        if not v:
            raise ValueError("Title is required")
        if len(v) > 200:
            raise ValueError("Title too long")
        return v

    @field_validator("content")
    @classmethod
    def _content(cls, v: str) -> str:
        if not v:
            raise ValueError("Content is required")
        if len(v) > POST_CONTENT_MAX:
            raise ValueError("Content too long")
        return v

    @field_validator("is_public", mode="before")
    @classmethod
    def _is_public(cls, v: Any) -> Any:
        # HTML forms post checkboxes as strings.
        if isinstance(v, str):
            return v.strip().lower() == "true"
        return v


def validation_message(exc: ValidationError) -> str:
    messages: list[str] = []
    for err in exc.errors():
        msg = str(err.get("msg") or "Invalid value")
        if msg.startswith("Value error, "):
            msg = msg[len("Value error, "):]
        messages.append(msg)
    return ", ".join(messages)


def _as_list(value: Any) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, (list, tuple, set)):
        return list(value)
    return [value]


def _drop_empty(form: Mapping[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in form.items() if v is not None and v != "" and v != []}


def _failure(action: str, exc: Exception) -> ActionResult:
    logger.warning("%s failed: %s", action, exc)
    return ActionResult(success=False, message=str(exc))


def create_user(db: Session, cache: ViewCache, form: Mapping[str, Any]) -> ActionResult:
    raw = dict(form)
    raw["roles"] = _as_list(raw.get("roles"))
    try:
        data = CreateUserForm.model_validate(raw)
    except ValidationError as exc:
        return ActionResult(success=False, message=validation_message(exc))

    try:
        user = user_profile_service.create_user(
            db,
            UserProfileCreate(
                username=data.username,
                email=data.email,
                first_name=data.first_name,
                last_name=data.last_name,
                roles=data.roles,
                bio=data.bio or None,
                profile_image_url=data.profile_image_url,
            ),
        )
    except (GovernanceError, ValidationError) as exc:
        return _failure("Create user", exc)

    cache.user_created()
    return ActionResult(success=True, message="User created successfully!", resource_id=user.id, redirect_to="/users")


def update_user(db: Session, cache: ViewCache, user_id: str, form: Mapping[str, Any]) -> ActionResult:
    raw = _drop_empty(form)
    if "roles" in raw:
        raw["roles"] = _as_list(raw["roles"])
    try:
        data = UpdateUserForm.model_validate(raw)
    except ValidationError as exc:
        return ActionResult(success=False, message=validation_message(exc))

    try:
        user_profile_service.update_user(db, user_id, UserProfileUpdate(**data.model_dump(exclude_none=True)))
    except (GovernanceError, ValidationError) as exc:
        return _failure("Update user", exc)

    cache.user_changed(user_id)
    return ActionResult(success=True, message="User updated successfully!", resource_id=user_id, redirect_to=f"/users/{user_id}")


def update_user_status(db: Session, cache: ViewCache, user_id: str, status: str) -> ActionResult:
    if status not in ("active", "inactive"):
        return ActionResult(success=False, message="Status must be 'active' or 'inactive'")

    try:
        if status == "active":
            user_profile_service.restore_user(db, user_id)
        else:
            user_profile_service.soft_delete_user(db, user_id)
    except GovernanceError as exc:
        return _failure("Update user status", exc)

    cache.user_changed(user_id)
    verb = "activated" if status == "active" else "deactivated"
    return ActionResult(success=True, message=f"User {verb} successfully!", resource_id=user_id)


def soft_delete_user(db: Session, cache: ViewCache, user_id: str) -> ActionResult:
    try:
        user_profile_service.soft_delete_user(db, user_id)
    except GovernanceError as exc:
        return _failure("Soft delete user", exc)

    cache.user_changed(user_id)
    return ActionResult(success=True, message="User soft deleted successfully!", resource_id=user_id)


def restore_user(db: Session, cache: ViewCache, user_id: str) -> ActionResult:
    return update_user_status(db, cache, user_id, "active")


def hard_delete_user(db: Session, cache: ViewCache, user_id: str, *, confirmed: bool, confirmed_again: bool) -> ActionResult:
    if not (confirmed and confirmed_again):
        return ActionResult(success=False, message="Permanent deletion must be confirmed twice")

    try:
        user = user_profile_service.get_user(db, user_id)
        if not user.deleted:
            return ActionResult(success=False, message="User must be soft-deleted before permanent deletion")
        user_profile_service.hard_delete_user(db, user_id)
    except GovernanceError as exc:
        return _failure("Hard delete user", exc)

    cache.user_changed(user_id)
    return ActionResult(success=True, message="User permanently deleted!", resource_id=user_id, redirect_to="/users")


def create_post(db: Session, cache: ViewCache, user_id: str, form: Mapping[str, Any]) -> ActionResult:
    try:
        data = CreatePostForm.model_validate(dict(form))
    except ValidationError as exc:
        return ActionResult(success=False, message=validation_message(exc))

    try:
        post = user_post_service.create_post(
            db, user_id, UserPostCreate(title=data.title, content=data.content, is_public=data.is_public)
        )
    except (GovernanceError, ValidationError) as exc:
        return _failure("Create post", exc)

    cache.posts_changed(user_id)
    return ActionResult(success=True, message="Post created successfully!", resource_id=post.id)


def delete_post(db: Session, cache: ViewCache, user_id: str, post_id: str) -> ActionResult:
    try:
        post = user_post_service.get_post(db, post_id)
        if post.user_id != user_id:
            raise ResourceNotFoundError("Post", post_id)
        user_post_service.soft_delete_post(db, post_id)
    except GovernanceError as exc:
        return _failure("Delete post", exc)

    cache.posts_changed(user_id)
    return ActionResult(success=True, message="Post deleted successfully!", resource_id=post_id)


def update_preferences(db: Session, cache: ViewCache, user_id: str, form: Mapping[str, Any]) -> ActionResult:
    try:
        data = UserPreferencesUpdate.model_validate(dict(form))
    except ValidationError as exc:
        return ActionResult(success=False, message=validation_message(exc))

    try:
        user_preferences_service.update_preferences(db, user_id, data)
    except GovernanceError as exc:
        return _failure("Update preferences", exc)

    cache.preferences_changed(user_id)
    return ActionResult(success=True, message="Preferences updated successfully!", resource_id=user_id)
