from __future__ import annotations

import os
from datetime import timedelta
from typing import Any

import pytest
from fastapi.testclient import TestClient


API = "/api/v1"


def pytest_configure() -> None:
    # Ensure the SQLAlchemy engine is created against sqlite for tests.
    os.environ["ORM_DB_URL"] = "sqlite:///./test.db"
    os.environ["ORM_USE_MYSQL"] = "false"
    os.environ["ENVIRONMENT"] = "test"
    os.environ["API_PREFIX"] = API


def reset_database() -> None:
    from governance_service.database import Base, engine

    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)


@pytest.fixture()
def db_session() -> Any:
    from governance_service.database import SessionLocal

    reset_database()
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client() -> Any:
    from governance_service.main import create_app

    reset_database()
    app = create_app()
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def make_user(client: TestClient) -> Any:
    def _make(username: str = "jdoe", **overrides: Any) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "username": username,
            "email": f"{username}@example.com",
            "firstName": "John",
            "lastName": "Doe",
            "roles": ["USER"],
            "bio": "Hello there",
        }
        payload.update(overrides)
        r = client.post(f"{API}/users", json=payload)
        assert r.status_code == 201, r.text
        return r.json()

    return _make


@pytest.fixture()
def backdate_deletion() -> Any:
    """Move a user's soft-delete timestamp into the past so the grace period has elapsed."""

    from governance_service.database import SessionLocal
    from governance_service.models.user_profile import UserProfileRecord

    def _backdate(user_id: str, hours: int) -> None:
        with SessionLocal() as db:
            user = db.query(UserProfileRecord).filter(UserProfileRecord.id == user_id).first()
            assert user is not None and user.deleted_at is not None
            user.deleted_at = user.deleted_at - timedelta(hours=hours)
            db.commit()

    return _backdate
