"""
课程与仪表盘API端点测试
"""

from pathlib import Path
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from app.core.config import settings
from app.services.content_loader import load_lesson


def test_requires_session(client: TestClient):
    for method, path in [
        ("get", "/api/v1/dashboard"),
        ("get", "/api/v1/days/1"),
        ("post", "/api/v1/days/1/complete"),
    ]:
        response = getattr(client, method)(path)
        assert response.status_code == 401, path

    response = client.get("/api/v1/dashboard", headers={"Authorization": "Bearer unknown"})
    assert response.status_code == 401


def test_dashboard_for_new_user(client: TestClient, alice_headers):
    response = client.get("/api/v1/dashboard", headers=alice_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["code"] == 200
    data = body["data"]
    assert data["streak"]["current_streak"] == 0
    assert data["streak"]["longest_streak"] == 0
    assert data["completed_days"] == 0
    assert data["total_days"] == 30
    assert data["next_day"] == 1
    assert data["headline"] == "Start Your Journey"
    assert data["calendar"][0] == {"day_number": 1, "topic": "Introduction", "completed": False}


def test_open_then_complete_day(client: TestClient, clock, alice_headers):
    opened = client.get("/api/v1/days/1", headers=alice_headers)
    assert opened.status_code == 200
    assert opened.json()["data"]["completed"] is False
    assert opened.json()["data"]["title"] == "Day 1 - Introduction"

    clock.advance(minutes=10)
    completed = client.post("/api/v1/days/1/complete", headers=alice_headers)
    assert completed.status_code == 200
    body = completed.json()
    assert body["message"] == "🎉 Day 1 completed! Streak: 1 day!"
    assert body["data"]["streak"]["current_streak"] == 1
    assert body["data"]["next_path"] == "/day/2"

    reopened = client.get("/api/v1/days/1", headers=alice_headers)
    assert reopened.json()["data"]["completed"] is True


def test_streak_sequence_over_http(client: TestClient, clock, alice_headers):
    client.get("/api/v1/dashboard", headers=alice_headers)

    client.post("/api/v1/days/1/complete", headers=alice_headers)
    clock.advance(hours=10)
    second = client.post("/api/v1/days/2/complete", headers=alice_headers).json()["data"]
    assert (second["streak"]["current_streak"], second["streak"]["longest_streak"]) == (2, 2)

    clock.advance(hours=48)
    dashboard = client.get("/api/v1/dashboard", headers=alice_headers).json()["data"]
    assert dashboard["streak"]["current_streak"] == 0
    assert dashboard["streak"]["longest_streak"] == 2
    assert dashboard["next_day"] == 3

    third = client.post("/api/v1/days/3/complete", headers=alice_headers).json()["data"]
    assert (third["streak"]["current_streak"], third["streak"]["longest_streak"]) == (1, 2)
    assert third["streak_continued"] is False


def test_recompletion_is_idempotent(client: TestClient, clock, alice_headers):
    client.post("/api/v1/days/1/complete", headers=alice_headers)
    clock.advance(hours=1)
    again = client.post("/api/v1/days/1/complete", headers=alice_headers)

    assert again.status_code == 200
    assert again.json()["data"]["already_completed"] is True
    assert again.json()["data"]["streak"]["current_streak"] == 1


def test_completion_failure_asks_user_to_retry(client: TestClient, alice_headers):
    with patch(
        "app.services.progress_service.crud_streak.update",
        side_effect=OperationalError("UPDATE user_streaks", {}, Exception("database is locked")),
    ):
        response = client.post("/api/v1/days/1/complete", headers=alice_headers)

    assert response.status_code == 500
    assert response.json()["detail"] == "Failed to mark as complete. Please try again."

    dashboard = client.get("/api/v1/dashboard", headers=alice_headers).json()["data"]
    assert dashboard["completed_days"] == 0


@pytest.mark.parametrize("day", [0, 31, 100])
def test_unknown_day_is_404(client: TestClient, alice_headers, day):
    response = client.get(f"/api/v1/days/{day}", headers=alice_headers)
    assert response.status_code == 404
    assert response.json() == {
        "code": 404,
        "message": f"Day {day} does not exist",
        "data": None,
        "detail": f"Day {day} does not exist",
    }
    assert client.post(f"/api/v1/days/{day}/complete", headers=alice_headers).status_code == 404


def test_day_view_shows_lapsed_streak_as_zero(client: TestClient, clock, alice_headers):
    client.post("/api/v1/days/1/complete", headers=alice_headers)
    clock.advance(hours=10)
    client.post("/api/v1/days/2/complete", headers=alice_headers)

    clock.advance(hours=48)
    view = client.get("/api/v1/days/3", headers=alice_headers).json()["data"]
    assert view["streak"]["current_streak"] == 0
    assert view["streak"]["longest_streak"] == 2

    dashboard = client.get("/api/v1/dashboard", headers=alice_headers).json()["data"]
    assert [p["day_number"] for p in dashboard["progress"]] == [1, 2, 3]
    assert dashboard["streak"]["current_streak"] == 0


def test_users_do_not_see_each_other(client: TestClient):
    client.post("/api/v1/days/1/complete", headers={"Authorization": "Bearer token-alice"})
    bob = client.get("/api/v1/dashboard", headers={"Authorization": "Bearer token-bob"}).json()["data"]
    assert bob["completed_days"] == 0


def test_day_content_served_as_stored(client: TestClient, tmp_path: Path):
    (tmp_path / "day-2.html").write_text("<h1>Variables</h1>", encoding="utf-8")
    (tmp_path / "day-3.md").write_text("# Operators", encoding="utf-8")
    load_lesson.cache_clear()

    with patch.object(settings, "CONTENT_DIR", str(tmp_path)):
        html = client.get("/api/v1/days/2/content")
        markdown = client.get("/api/v1/days/3/content")
        missing = client.get("/api/v1/days/4/content")

    load_lesson.cache_clear()
    assert html.status_code == 200
    assert html.headers["content-type"].startswith("text/html")
    assert html.text == "<h1>Variables</h1>"
    assert markdown.headers["content-type"].startswith("text/markdown")
    assert markdown.text == "# Operators"
    assert missing.status_code == 404


def test_frontend_config(client: TestClient):
    data = client.get("/api/v1/config/").json()["data"]
    assert data["api_base_url"] == "/api/v1"
    assert data["total_days"] == 30
    assert data["streak_window_hours"] == 24
    assert "google" in data["oauth_providers"]


def test_health(client: TestClient):
    assert client.get("/health").json() == {"status": "ok"}
