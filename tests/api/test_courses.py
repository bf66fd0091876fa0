from __future__ import annotations

from fastapi.testclient import TestClient

from learning_api.api.dependencies import demo_store, get_category_labels
from learning_api.main import app
from learning_api.models.course import Category, Course, Enrollment
from learning_api.services.presentation import CategoryLabels
from tests.conftest import SEED_NOW, auth_headers


def test_courses_newest_enrollment_first(client: TestClient) -> None:
    resp = client.get("/courses", headers=auth_headers(1))
    assert resp.status_code == 200
    assert [c["id"] for c in resp.json()] == [4, 3, 1]


def test_course_shape(client: TestClient) -> None:
    first = client.get("/courses", headers=auth_headers(1)).json()[0]
    assert first == {
        "id": 4,
        "title": "UI/UX Principles",
        "description": "Layout, color, usability.",
        "duration": "8 horas",
        "level": "beginner",
        "progress": 10.0,
        "thumbnail": "🎨",
        "category": "Design",
    }


def test_courses_exclude_inactive_enrollments(client: TestClient) -> None:
    demo_store.add_enrollment(
        Enrollment(
            id=10,
            user_id=1,
            course_id=2,
            enrolled_at=SEED_NOW,
            is_active=False,
        )
    )
    ids = [c["id"] for c in client.get("/courses", headers=auth_headers(1)).json()]
    assert 2 not in ids


def test_unmapped_category_gets_default_label(client: TestClient) -> None:
    demo_store.add_category(Category(id=9, name="Música"))
    demo_store.add_course(
        Course(
            id=9,
            title="Guitar",
            description="",
            duration_hours=3,
            level="beginner",
            category_id=9,
        )
    )
    demo_store.add_enrollment(
        Enrollment(id=9, user_id=1, course_id=9, enrolled_at=SEED_NOW)
    )
    first = client.get("/courses", headers=auth_headers(1)).json()[0]
    assert first["id"] == 9
    assert first["thumbnail"] == "📚"


def test_labels_come_from_configuration(client: TestClient) -> None:
    labels = CategoryLabels.from_mapping({"Design": "D"}, "?")
    app.dependency_overrides[get_category_labels] = lambda: labels
    thumbnails = {
        c["category"]: c["thumbnail"]
        for c in client.get("/courses", headers=auth_headers(1)).json()
    }
    assert thumbnails == {
        "Design": "D",
        "Ciência de Dados": "?",
        "Desenvolvimento Web": "?",
    }


def test_courses_empty_for_user_without_enrollments(client: TestClient) -> None:
    resp = client.get("/courses", headers=auth_headers(42))
    assert resp.status_code == 200
    assert resp.json() == []
