from __future__ import annotations


API = "/api/v1"


def test_actuator_health_up(client) -> None:
    r = client.get("/actuator/health")
    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "UP"
    assert body["components"]["db"]["status"] == "UP"
    assert body["timestamp"]


def test_actuator_health_under_api_prefix(client) -> None:
    r = client.get(f"{API}/actuator/health")
    assert r.status_code == 200
    assert r.json()["status"] == "UP"


def test_statistics_on_empty_database(client) -> None:
    r = client.get(f"{API}/statistics")
    assert r.status_code == 200
    assert r.json() == {
        "totalUsers": 0,
        "activeUsers": 0,
        "deletedUsers": 0,
        "totalPosts": 0,
        "activePosts": 0,
        "totalPreferences": 0,
        "systemHealth": "UP",
    }
