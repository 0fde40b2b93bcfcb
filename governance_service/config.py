from __future__ import annotations

import json
import os
from functools import lru_cache
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Load project-root .env early so both pydantic-settings and any direct os.getenv access
# see consistent values, even if the process CWD is not the repo root.
_ENV_PATH = Path(__file__).resolve().parents[1] / ".env"
_IN_TEST = (os.getenv("ENVIRONMENT") or "").lower() == "test" or bool(os.getenv("PYTEST_CURRENT_TEST"))
if _ENV_PATH.exists() and not _IN_TEST:
    load_dotenv(dotenv_path=_ENV_PATH, override=True)


DEFAULT_EMAIL_PATTERN = r"^[A-Za-z0-9+_.-]+@([A-Za-z0-9.-]+\.[A-Za-z]{2,})$"


def _parse_str_list(raw: Any) -> list[str]:
    if raw is None:
        return []

    items: list[Any]
    if isinstance(raw, (list, tuple, set)):
        items = list(raw)
    elif isinstance(raw, str):
        s = raw.strip()
        if not s:
            return []

        # Support JSON array string or comma-separated string.
        if s.startswith("["):
            try:
                parsed = json.loads(s)
                items = parsed if isinstance(parsed, list) else [parsed]
            except ValueError:
                items = [p.strip() for p in s.strip("[]").split(",")]
        else:
            items = [p.strip() for p in s.split(",")]
    else:
        items = [raw]

    return [str(item).strip() for item in items if item is not None and str(item).strip()]


class Settings(BaseSettings):
    app_name: str = Field(default="Data Governance Service")
    api_prefix: str = Field(default="/api/v1")
    version: str = Field(default="1.0.0")
    environment: str = Field(default="development")
    debug: bool = Field(default=True)

    # Database configuration
    # ORM_DB_URL wins over DB_URL; both fall back to discrete MySQL DB_* settings
    # outside development.
    db_url: str | None = Field(default=None, validation_alias="DB_URL")
    orm_db_url: str | None = Field(default=None, validation_alias="ORM_DB_URL")
    orm_use_mysql: bool = Field(default=False, validation_alias="ORM_USE_MYSQL")
    db_host: str = Field(default="localhost", validation_alias="DB_HOST")
    db_port: int = Field(default=3306, validation_alias="DB_PORT")
    db_name: str = Field(default="data_governance_db", validation_alias="DB_NAME")
    db_user: str = Field(default="app_user", validation_alias="DB_USER")
    db_password: str = Field(default="app_password", validation_alias="DB_PASSWORD")
    db_charset: str = Field(default="utf8mb4", validation_alias="DB_CHARSET")

    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000", "http://127.0.0.1:3000"],
        validation_alias="CORS_ORIGINS",
    )

    # Data governance rules
    # Hours that must pass between a soft delete and a purge. 0 disables the wait.
    hard_delete_grace_period_hours: int = Field(default=24, ge=0, validation_alias="HARD_DELETE_GRACE_PERIOD_HOURS")
    email_pattern: str = Field(default=DEFAULT_EMAIL_PATTERN, validation_alias="EMAIL_PATTERN")

    # Console cache windows (seconds). 0 means "no-store".
    cache_users_seconds: int = Field(default=60, ge=0, validation_alias="CACHE_USERS_SECONDS")
    cache_user_detail_seconds: int = Field(default=300, ge=0, validation_alias="CACHE_USER_DETAIL_SECONDS")
    cache_posts_seconds: int = Field(default=30, ge=0, validation_alias="CACHE_POSTS_SECONDS")
    cache_preferences_seconds: int = Field(default=300, ge=0, validation_alias="CACHE_PREFERENCES_SECONDS")
    cache_stats_seconds: int = Field(default=60, ge=0, validation_alias="CACHE_STATS_SECONDS")

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _validate_cors_origins(cls, v: Any) -> list[str]:
        return _parse_str_list(v)

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()


def build_sqlalchemy_db_url(settings: Settings) -> str:
    if settings.orm_db_url:
        return settings.orm_db_url

    if settings.db_url:
        return settings.db_url

    # In development, default to sqlite unless ORM_USE_MYSQL=true.
    if settings.environment.lower() in ("development", "test") and not settings.orm_use_mysql:
        return "sqlite:///./dev.db"

    # NOTE: password may include special chars; prefer DB_URL for complex passwords.
    return (
        f"mysql+pymysql://{settings.db_user}:{settings.db_password}"
        f"@{settings.db_host}:{settings.db_port}/{settings.db_name}"
        f"?charset={settings.db_charset}"
    )
