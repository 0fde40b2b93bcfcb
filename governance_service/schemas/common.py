from __future__ import annotations

import re
from datetime import datetime, timezone
from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from governance_service.config import settings


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class OperationAcknowledgment(CamelModel):
    message: str
    operation_type: str
    resource_id: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    success: bool = True


@lru_cache(maxsize=8)
def _email_regex(pattern: str) -> re.Pattern[str]:
    return re.compile(pattern)


def validate_email_format(value: str) -> str:
    email = (value or "").strip()
    if not _email_regex(settings.email_pattern).match(email):
        raise ValueError("Email must be in valid format")
    return email


def require_text(value: str | None, label: str) -> str | None:
    if value is None:
        return None
    text = value.strip()
    if not text:
        raise ValueError(f"{label} is required")
    return text
