from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import Field, field_validator

from governance_service.schemas.common import CamelModel, require_text


PostStatus = Literal["DRAFT", "PUBLISHED", "ARCHIVED"]
EngagementAction = Literal["view", "like", "unlike", "comment", "uncomment"]


class UserPostCreate(CamelModel):
    title: str = Field(min_length=1, max_length=200)
    content: str = Field(min_length=1, max_length=10000)
    image_urls: list[str] | None = None
    tags: list[str] | None = None
    is_public: bool = True
    status: PostStatus = "PUBLISHED"

    @field_validator("title")
    @classmethod
    def _validate_title(cls, v: str) -> str:
        return require_text(v, "Title")

    @field_validator("content")
    @classmethod
    def _validate_content(cls, v: str) -> str:
        return require_text(v, "Content")


class UserPostRead(CamelModel):
    id: str
    user_id: str
    title: str
    content: str
    image_urls: list[str] | None = None
    tags: list[str] | None = None
    is_public: bool = True
    status: str = "PUBLISHED"
    view_count: int = 0
    like_count: int = 0
    comment_count: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted: bool = False
    deleted_at: datetime | None = None


class PostEngagementRequest(CamelModel):
    action: EngagementAction
