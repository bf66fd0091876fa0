"""Demo catalogue served when no database is configured.

Log in as ``admin@example.com`` / ``password``.
"""

from __future__ import annotations

import time

from learning_api.models.course import Category, Course, Enrollment
from learning_api.models.study_session import StudySession
from learning_api.models.user import User
from learning_api.models.video import Video, VideoProgress
from learning_api.repos.memory_store import InMemoryStore
from learning_api.services import auth_service

DEMO_EMAIL = "admin@example.com"
DEMO_PASSWORD = "password"

_DAY = 24 * 3600

# (id, title, description, duration_hours, level, category_id)
_COURSES = (
    (1, "React Fundamentals", "Components, hooks and state.", 12, "beginner", 1),
    (2, "Flutter for Beginners", "Cross-platform mobile apps.", 20, "beginner", 2),
    (3, "Python for Data Science", "pandas, NumPy, plots.", 30, "intermediate", 3),
    (4, "UI/UX Principles", "Layout, color, usability.", 8, "beginner", 4),
)

# (id, course_id, title, duration_seconds, days since publish or None, views, likes)
_VIDEOS = (
    (1, 1, "Intro to React", 754, 40, 1200, 95),
    (2, 1, "Hooks in depth", 1325, 35, 980, 88),
    (3, 3, "NumPy arrays", 905, 20, 640, 51),
    (4, 3, "pandas DataFrames", 1510, 12, 410, 37),
    (5, 3, "Plotting with matplotlib", 600, None, 0, 0),
    (6, 4, "Design systems", 480, 3, 150, 12),
    (7, 2, "Flutter widgets", 700, 1, 300, 20),
)


def seed_demo_data(store: InMemoryStore, *, now: int | None = None) -> None:
    """Populate an empty store.  Does nothing if users already exist."""
    if store.users:
        return
    now = int(time.time()) if now is None else now

    store.add_user(
        User.new(
            id=1,
            name="Admin",
            email=DEMO_EMAIL,
            password_hash=auth_service.hash_password(DEMO_PASSWORD),
        )
    )

    for category_id, name in enumerate(
        ("Desenvolvimento Web", "Mobile Development", "Ciência de Dados", "Design"),
        start=1,
    ):
        store.add_category(Category(id=category_id, name=name))

    for course_id, title, description, hours, level, category_id in _COURSES:
        store.add_course(
            Course(
                id=course_id,
                title=title,
                description=description,
                duration_hours=hours,
                level=level,
                category_id=category_id,
            )
        )

    store.add_enrollment(
        Enrollment(
            id=1,
            user_id=1,
            course_id=1,
            enrolled_at=now - 30 * _DAY,
            progress_percentage=100.0,
            completed_at=now - 5 * _DAY,
        )
    )
    store.add_enrollment(
        Enrollment(
            id=2,
            user_id=1,
            course_id=3,
            enrolled_at=now - 10 * _DAY,
            progress_percentage=45.5,
        )
    )
    store.add_enrollment(
        Enrollment(
            id=3,
            user_id=1,
            course_id=4,
            enrolled_at=now - 2 * _DAY,
            progress_percentage=10.0,
        )
    )

    for video_id, course_id, title, seconds, age_days, views, likes in _VIDEOS:
        store.add_video(
            Video(
                id=video_id,
                course_id=course_id,
                title=title,
                description=f"{title}: lesson notes and exercises.",
                duration_seconds=seconds,
                is_published=age_days is not None,
                published_at=now - age_days * _DAY if age_days is not None else None,
                views=views,
                likes=likes,
            )
        )

    for video_id, watched, completed, days_ago in (
        (1, 754, True, 29),
        (2, 1325, True, 28),
        (3, 300, False, 9),
    ):
        store.progress[(1, video_id)] = VideoProgress(
            user_id=1,
            video_id=video_id,
            watched_seconds=watched,
            completed=completed,
            last_watched_at=now - days_ago * _DAY,
        )

    for session_id, (days_ago, seconds) in enumerate(
        ((1, 3600), (3, 2700), (6, 1800), (12, 7200)), start=1
    ):
        store.add_study_session(
            StudySession(
                id=session_id,
                user_id=1,
                session_start=now - days_ago * _DAY,
                duration_seconds=seconds,
            )
        )
