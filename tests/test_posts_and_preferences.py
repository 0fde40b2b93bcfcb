from __future__ import annotations


API = "/api/v1"


def _post(client, user_id: str, title: str = "Hello", **extra) -> dict:
    r = client.post(f"{API}/users/{user_id}/posts", json={"title": title, "content": "Body text", **extra})
    assert r.status_code == 201, r.text
    return r.json()


def test_create_and_list_posts(client, make_user) -> None:
    user = make_user("writer")
    post = _post(client, user["id"], tags=["news"], isPublic=False, status="DRAFT")
    assert post["userId"] == user["id"]
    assert post["isPublic"] is False
    assert post["status"] == "DRAFT"
    assert post["tags"] == ["news"]
    assert (post["viewCount"], post["likeCount"], post["commentCount"]) == (0, 0, 0)

    listed = client.get(f"{API}/users/{user['id']}/posts").json()
    assert [p["id"] for p in listed] == [post["id"]]

    r = client.get(f"{API}/posts/{post['id']}")
    assert r.status_code == 200


def test_post_validation(client, make_user) -> None:
    user = make_user("writer")
    r = client.post(f"{API}/users/{user['id']}/posts", json={"title": "", "content": "x", "status": "LIVE"})
    assert r.status_code == 400
    assert {"title", "status"} <= set(r.json()["validationErrors"])


def test_soft_delete_post_hides_it_from_listings(client, make_user) -> None:
    user = make_user("writer")
    first = _post(client, user["id"], "first")
    second = _post(client, user["id"], "second")

    r = client.delete(f"{API}/posts/{first['id']}")
    assert r.status_code == 200
    assert r.json()["operationType"] == "SOFT_DELETE"

    listed = client.get(f"{API}/users/{user['id']}/posts").json()
    assert [p["id"] for p in listed] == [second["id"]]
    assert client.get(f"{API}/posts/{first['id']}").status_code == 404
    assert client.delete(f"{API}/posts/{first['id']}").status_code == 404

    # The admin listing still shows the deleted post.
    all_posts = {p["id"]: p for p in client.get(f"{API}/posts").json()}
    assert all_posts[first["id"]]["deleted"] is True
    assert all_posts[first["id"]]["deletedAt"] is not None

    stats = client.get(f"{API}/statistics").json()
    assert stats["totalPosts"] == 2
    assert stats["activePosts"] == 1


def test_posts_for_inactive_or_unknown_user(client, make_user) -> None:
    user = make_user("quiet")
    client.delete(f"{API}/users/{user['id']}")

    r = client.post(f"{API}/users/{user['id']}/posts", json={"title": "t", "content": "c"})
    assert r.status_code == 403
    assert client.get(f"{API}/users/{user['id']}/posts").status_code == 404
    assert client.post(f"{API}/users/nobody/posts", json={"title": "t", "content": "c"}).status_code == 403


def test_user_soft_delete_cascades_and_restore_brings_posts_back(client, make_user) -> None:
    user = make_user("cascade")
    removed_earlier = _post(client, user["id"], "old")
    kept = _post(client, user["id"], "kept")
    client.delete(f"{API}/posts/{removed_earlier['id']}")

    client.delete(f"{API}/users/{user['id']}")
    all_posts = {p["id"]: p for p in client.get(f"{API}/posts").json()}
    assert all_posts[kept["id"]]["deleted"] is True

    assert client.post(f"{API}/users/{user['id']}/restore").status_code == 200
    listed = client.get(f"{API}/users/{user['id']}/posts").json()
    # Only posts removed by the user's soft delete come back.
    assert [p["id"] for p in listed] == [kept["id"]]


def test_engagement_counters(client, make_user) -> None:
    user = make_user("popular")
    post = _post(client, user["id"])
    url = f"{API}/posts/{post['id']}/engagement"

    client.post(url, json={"action": "view"})
    client.post(url, json={"action": "like"})
    client.post(url, json={"action": "unlike"})
    body = client.post(url, json={"action": "unlike"}).json()
    assert body["viewCount"] == 1
    assert body["likeCount"] == 0

    body = client.post(url, json={"action": "comment"}).json()
    assert body["commentCount"] == 1
    assert client.post(url, json={"action": "share"}).status_code == 400


def test_preferences_defaults_when_never_saved(client, make_user) -> None:
    user = make_user("prefs")
    r = client.get(f"{API}/users/{user['id']}/preferences")
    assert r.status_code == 200
    body = r.json()
    assert body["id"] is None
    assert body["userId"] == user["id"]
    assert body["theme"] == "light"
    assert body["language"] == "en"
    assert body["emailNotifications"] is True
    assert body["smsNotifications"] is False
    assert body["contentFilter"] == "moderate"
    assert body["customSettings"] == {}


def test_partial_preferences_update_leaves_other_fields(client, make_user) -> None:
    user = make_user("prefs")
    url = f"{API}/users/{user['id']}/preferences"

    r = client.put(url, json={"theme": "dark", "customSettings": {"fontSize": 14, "layout": "grid"}})
    assert r.status_code == 200
    first = r.json()
    assert first["id"] is not None

    r = client.put(url, json={"smsNotifications": True, "customSettings": {"layout": "list"}})
    assert r.status_code == 200
    body = r.json()
    assert body["id"] == first["id"]
    assert body["theme"] == "dark"
    assert body["smsNotifications"] is True
    assert body["language"] == "en"
    assert body["customSettings"] == {"fontSize": 14, "layout": "list"}

    assert client.get(url).json()["theme"] == "dark"
    assert len(client.get(f"{API}/preferences").json()) == 1


def test_preferences_for_inactive_or_unknown_user(client, make_user) -> None:
    user = make_user("prefs")
    client.delete(f"{API}/users/{user['id']}")

    assert client.put(f"{API}/users/{user['id']}/preferences", json={"theme": "dark"}).status_code == 403
    assert client.get(f"{API}/users/{user['id']}/preferences").status_code == 404
    assert client.put(f"{API}/users/nobody/preferences", json={"theme": "dark"}).status_code == 404
