from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import Field, field_validator

from governance_service.schemas.common import CamelModel, require_text, validate_email_format


class UserRole(str, Enum):
    ADMIN = "ADMIN"
    USER = "USER"
    MODERATOR = "MODERATOR"
    GUEST = "GUEST"


def _unique_roles(roles: list[UserRole] | None) -> list[UserRole] | None:
    if roles is None:
        return None
    # Roles behave as a set; keep first-seen order for stable output.
    return list(dict.fromkeys(roles))


def _strip(value: Any) -> Any:
    return value.strip() if isinstance(value, str) else value


class AuditEntry(CamelModel):
    action: str
    timestamp: datetime
    details: str | None = None
    performed_by: str = "SYSTEM"


class UserProfileCreate(CamelModel):
    username: str = Field(min_length=3, max_length=50)
    email: str
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    roles: list[UserRole] = Field(min_length=1)
    bio: str | None = None
    profile_image_url: str | None = None

    @field_validator("email")
    @classmethod
    def _validate_email(cls, v: str) -> str:
        return validate_email_format(v)

    @field_validator("username", "first_name", "last_name", mode="before")
    @classmethod
    def _strip_names(cls, v: Any) -> Any:
        # Strip first so the length limits apply to the stored value.
        return _strip(v)

    @field_validator("roles")
    @classmethod
    def _dedupe_roles(cls, v: list[UserRole]) -> list[UserRole]:
        return _unique_roles(v)


class UserProfileUpdate(CamelModel):
    # Username is immutable once created.
    email: str | None = None
    first_name: str | None = Field(default=None, min_length=1, max_length=100)
    last_name: str | None = Field(default=None, min_length=1, max_length=100)
    roles: list[UserRole] | None = Field(default=None, min_length=1)
    bio: str | None = None
    profile_image_url: str | None = None

    @field_validator("email")
    @classmethod
    def _validate_email(cls, v: str | None) -> str | None:
        return None if v is None else validate_email_format(v)

    @field_validator("first_name", mode="before")
    @classmethod
    def _validate_first_name(cls, v: Any) -> Any:
        return require_text(v, "First name") if isinstance(v, str) else v

    @field_validator("last_name", mode="before")
    @classmethod
    def _validate_last_name(cls, v: Any) -> Any:
        return require_text(v, "Last name") if isinstance(v, str) else v

    @field_validator("roles")
    @classmethod
    def _dedupe_roles(cls, v: list[UserRole] | None) -> list[UserRole] | None:
        return _unique_roles(v)


class UserProfileRead(CamelModel):
    id: str
    username: str
    email: str
    first_name: str
    last_name: str
    full_name: str
    roles: list[UserRole]
    bio: str | None = None
    profile_image_url: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted: bool = False
    deleted_at: datetime | None = None
    audit_trail: list[AuditEntry] = Field(default_factory=list)
