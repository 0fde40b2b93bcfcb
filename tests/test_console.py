from __future__ import annotations

from governance_service.database import SessionLocal
from governance_service.models.user_profile import UserProfileRecord


API = "/api/v1"


def _create_form(**overrides):
    form = {
        "username": "consoleuser",
        "email": "console@example.com",
        "firstName": "Con",
        "lastName": "Sole",
        "roles": ["USER"],
    }
    form.update(overrides)
    return form


def test_dashboard_shows_statistics(client, make_user) -> None:
    make_user("alice")
    r = client.get("/console")
    assert r.status_code == 200
    body = r.json()
    assert body["statistics"]["totalUsers"] == 1
    assert body["health"] == "UP"


def test_create_user_action(client) -> None:
    r = client.post("/console/users", json=_create_form())
    body = r.json()
    assert body["success"] is True
    assert body["message"] == "User created successfully!"
    assert body["redirectTo"] == "/users"

    page = client.get("/console/users").json()
    assert page["totalUsers"] == 1
    assert page["activeUsers"] == 1


def test_create_user_action_reports_validation_messages(client) -> None:
    body = client.post("/console/users", json={}).json()
    assert body["success"] is False
    for message in (
        "Username must be at least 3 characters",
        "Invalid email address",
        "First name is required",
        "Last name is required",
        "At least one role is required",
    ):
        assert message in body["message"]

    body = client.post("/console/users", json=_create_form(profileImageUrl="not a url")).json()
    assert body == {"success": False, "message": "Invalid url", "resourceId": None, "redirectTo": None}


def test_create_user_action_reports_conflicts(client, make_user) -> None:
    make_user("taken")
    body = client.post("/console/users", json=_create_form(username="taken")).json()
    assert body["success"] is False
    assert "already exists" in body["message"]


def test_users_page_is_served_from_cache_until_revalidated(client, make_user) -> None:
    make_user("first")
    assert client.get("/console/users").json()["totalUsers"] == 1

    # Write behind the console's back; the cached page is still served.
    with SessionLocal() as db:
        db.add(
            UserProfileRecord(
                username="sneaky", email="sneaky@example.com", first_name="S", last_name="N", roles=["USER"]
            )
        )
        db.commit()
    assert client.get("/console/users").json()["totalUsers"] == 1

    # A console mutation revalidates the users listing.
    client.post("/console/users", json=_create_form())
    assert client.get("/console/users").json()["totalUsers"] == 3


def test_user_detail_and_status_changes(client, make_user) -> None:
    user = make_user("detail")
    uid = user["id"]

    page = client.get(f"/console/users/{uid}").json()
    assert page["user"]["username"] == "detail"
    assert page["canPurge"] is False
    assert page["preferences"]["theme"] == "light"

    body = client.post(f"/console/users/{uid}/status", json={"status": "inactive"}).json()
    assert body == {"success": True, "message": "User deactivated successfully!", "resourceId": uid, "redirectTo": None}

    page = client.get(f"/console/users/{uid}").json()
    assert page["user"]["deleted"] is True
    assert page["canPurge"] is True
    assert page["posts"] == []
    assert page["preferences"] is None

    body = client.post(f"/console/users/{uid}/status", json={"status": "active"}).json()
    assert body["message"] == "User activated successfully!"
    assert client.get(f"/console/users/{uid}").json()["user"]["deleted"] is False

    body = client.post(f"/console/users/{uid}/status", json={"status": "archived"}).json()
    assert body["success"] is False


def test_update_user_action_ignores_empty_fields(client, make_user) -> None:
    user = make_user("editme")
    uid = user["id"]
    client.get(f"/console/users/{uid}")

    body = client.post(f"/console/users/{uid}", json={"firstName": "Edited", "lastName": "", "bio": ""}).json()
    assert body["success"] is True
    assert body["message"] == "User updated successfully!"

    page = client.get(f"/console/users/{uid}").json()
    assert page["user"]["firstName"] == "Edited"
    assert page["user"]["lastName"] == "Doe"
    assert page["user"]["bio"] == "Hello there"


def test_soft_delete_and_restore_actions(client, make_user) -> None:
    uid = make_user("cycle")["id"]

    body = client.post(f"/console/users/{uid}/delete").json()
    assert body["message"] == "User soft deleted successfully!"

    body = client.post(f"/console/users/{uid}/delete").json()
    assert body["success"] is False

    body = client.post(f"/console/users/{uid}/restore").json()
    assert body["success"] is True
    assert client.get(f"{API}/users/{uid}").json()["deleted"] is False


def test_purge_action_requires_double_confirmation(client, make_user, backdate_deletion) -> None:
    uid = make_user("purgeme")["id"]

    body = client.post(f"/console/users/{uid}/purge", json={"confirm": True}).json()
    assert body["message"] == "Permanent deletion must be confirmed twice"

    body = client.post(f"/console/users/{uid}/purge", json={"confirm": True, "confirmAgain": True}).json()
    assert body["message"] == "User must be soft-deleted before permanent deletion"

    client.post(f"/console/users/{uid}/delete")
    body = client.post(f"/console/users/{uid}/purge", json={"confirm": True, "confirmAgain": True}).json()
    assert body["success"] is False
    assert "Grace period" in body["message"]

    backdate_deletion(uid, hours=25)
    body = client.post(f"/console/users/{uid}/purge", json={"confirm": True, "confirmAgain": True}).json()
    assert body == {"success": True, "message": "User permanently deleted!", "resourceId": uid, "redirectTo": "/users"}

    assert client.get(f"{API}/users/{uid}").status_code == 404
    assert client.get(f"/console/users/{uid}").status_code == 404
    assert client.get("/console/users").json()["totalUsers"] == 0


def test_post_actions(client, make_user) -> None:
    uid = make_user("poster")["id"]
    other = make_user("other")["id"]
    assert client.get(f"/console/users/{uid}").json()["posts"] == []

    body = client.post(f"/console/users/{uid}/posts", json={}).json()
    assert body["success"] is False
    assert "Title is required" in body["message"]
    assert "Content is required" in body["message"]

    body = client.post(f"/console/users/{uid}/posts", json={"title": "t", "content": "x" * 5001}).json()
    assert body["message"] == "Content too long"

    body = client.post(f"/console/users/{uid}/posts", json={"title": "Hi", "content": "Body", "isPublic": "false"}).json()
    assert body["message"] == "Post created successfully!"
    post_id = body["resourceId"]

    posts = client.get(f"/console/users/{uid}").json()["posts"]
    assert [p["id"] for p in posts] == [post_id]
    assert posts[0]["isPublic"] is False

    # A post cannot be deleted through another user's page.
    assert client.post(f"/console/users/{other}/posts/{post_id}/delete").json()["success"] is False

    body = client.post(f"/console/users/{uid}/posts/{post_id}/delete").json()
    assert body["message"] == "Post deleted successfully!"
    assert client.get(f"/console/users/{uid}").json()["posts"] == []


def test_preferences_page_and_action(client, make_user) -> None:
    uid = make_user("prefer")["id"]
    page = client.get(f"/console/users/{uid}/preferences").json()
    assert page["preferences"]["theme"] == "light"

    body = client.post(f"/console/users/{uid}/preferences", json={"theme": "dark", "language": "fr"}).json()
    assert body["message"] == "Preferences updated successfully!"

    page = client.get(f"/console/users/{uid}/preferences").json()
    assert page["preferences"]["theme"] == "dark"
    assert page["preferences"]["language"] == "fr"
    assert client.get(f"/console/users/{uid}").json()["preferences"]["theme"] == "dark"

    client.post(f"/console/users/{uid}/delete")
    body = client.post(f"/console/users/{uid}/preferences", json={"theme": "light"}).json()
    assert body["success"] is False
    assert body["message"] == "Cannot update preferences for inactive user"


def test_form_validation_messages_are_joined() -> None:
    from pydantic import ValidationError

    from governance_service.console.actions import CreatePostForm, CreateUserForm, validation_message

    try:
        CreateUserForm.model_validate({"username": "jo", "email": "jo@example.com", "firstName": "Jo", "lastName": "X", "roles": ["USER"]})
    except ValidationError as exc:
        assert validation_message(exc) == "Username must be at least 3 characters"
    else:
        raise AssertionError("short username accepted")

    try:
        CreatePostForm.model_validate({"title": "x" * 201, "content": ""})
    except ValidationError as exc:
        assert validation_message(exc) == "Title too long, Content is required"
    else:
        raise AssertionError("invalid post accepted")


def test_rest_user_mutations_revalidate_console_pages(client, make_user, monkeypatch) -> None:
    from governance_service.config import settings

    monkeypatch.setattr(settings, "hard_delete_grace_period_hours", 0)
    uid = make_user("restful")["id"]
    assert client.get("/console/users").json()["totalUsers"] == 1
    assert client.get(f"/console/users/{uid}").json()["user"]["deleted"] is False
    assert client.get("/console").json()["statistics"]["activeUsers"] == 1

    make_user("second")
    assert client.get("/console/users").json()["totalUsers"] == 2

    client.put(f"{API}/users/{uid}", json={"bio": "Changed over REST"})
    assert client.get(f"/console/users/{uid}").json()["user"]["bio"] == "Changed over REST"

    client.delete(f"{API}/users/{uid}")
    page = client.get(f"/console/users/{uid}").json()
    assert page["user"]["deleted"] is True
    assert page["canPurge"] is True
    assert client.get("/console/users").json()["activeUsers"] == 1
    assert client.get("/console").json()["statistics"]["activeUsers"] == 1

    client.post(f"{API}/users/{uid}/restore")
    assert client.get(f"/console/users/{uid}").json()["user"]["deleted"] is False

    client.delete(f"{API}/users/{uid}")
    assert client.post(f"{API}/users/{uid}/purge").status_code == 200
    assert client.get(f"/console/users/{uid}").status_code == 404
    assert client.get("/console/users").json()["totalUsers"] == 1


def test_rest_post_mutations_revalidate_console_pages(client, make_user) -> None:
    uid = make_user("blogger")["id"]
    assert client.get(f"/console/users/{uid}").json()["posts"] == []

    post = client.post(f"{API}/users/{uid}/posts", json={"title": "Over REST", "content": "Body"}).json()
    posts = client.get(f"/console/users/{uid}").json()["posts"]
    assert [p["id"] for p in posts] == [post["id"]]

    client.post(f"{API}/posts/{post['id']}/engagement", json={"action": "like"})
    assert client.get(f"/console/users/{uid}").json()["posts"][0]["likeCount"] == 1

    client.delete(f"{API}/posts/{post['id']}")
    assert client.get(f"/console/users/{uid}").json()["posts"] == []


def test_rest_preferences_update_revalidates_console_pages(client, make_user) -> None:
    uid = make_user("tuner")["id"]
    assert client.get(f"/console/users/{uid}/preferences").json()["preferences"]["theme"] == "light"
    assert client.get(f"/console/users/{uid}").json()["preferences"]["theme"] == "light"

    client.put(f"{API}/users/{uid}/preferences", json={"theme": "dark"})
    assert client.get(f"/console/users/{uid}/preferences").json()["preferences"]["theme"] == "dark"
    assert client.get(f"/console/users/{uid}").json()["preferences"]["theme"] == "dark"
