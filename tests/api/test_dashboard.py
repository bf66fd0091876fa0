from __future__ import annotations

from fastapi.testclient import TestClient

from learning_api.api.dependencies import demo_store
from learning_api.models.study_session import StudySession
from learning_api.models.user import User
from tests.conftest import SEED_NOW, auth_headers


def test_dashboard_for_demo_user(client: TestClient) -> None:
    resp = client.get("/dashboard", headers=auth_headers(1))
    assert resp.status_code == 200
    assert resp.json() == {
        "totalCourses": 3,
        "completedCourses": 1,
        "totalVideos": 5,  # unpublished and un-enrolled videos excluded
        "watchedVideos": 2,
        "studyTime": 2,  # 8100 s in the last 7 days
    }


def test_dashboard_study_time_rounds_half_up(client: TestClient) -> None:
    demo_store.study_sessions.clear()
    demo_store.add_study_session(
        StudySession(
            id=1, user_id=1, session_start=SEED_NOW - 3600, duration_seconds=5400
        )
    )
    resp = client.get("/dashboard", headers=auth_headers(1))
    assert resp.json()["studyTime"] == 2


def test_dashboard_for_user_without_activity_is_all_zero(client: TestClient) -> None:
    demo_store.add_user(
        User.new(id=2, name="New", email="new@example.com", password_hash="x")
    )
    resp = client.get("/dashboard", headers=auth_headers(2))
    assert resp.status_code == 200
    assert resp.json() == {
        "totalCourses": 0,
        "completedCourses": 0,
        "totalVideos": 0,
        "watchedVideos": 0,
        "studyTime": 0,
    }
