"""Demo: log in, read the dashboard, list courses and videos, report progress.

Runs the SDK against the in-process app with the seeded demo data, so no
server or database is needed.  Run with:
    python scripts/demo_learning_flow.py
"""

from __future__ import annotations

from fastapi.testclient import TestClient

from learning_api.client import ApiError, LearningPlatformClient
from learning_api.db.seed import DEMO_EMAIL, DEMO_PASSWORD
from learning_api.main import app


def main() -> None:
    api = LearningPlatformClient(TestClient(app))

    # ── Step 1: bad credentials ─────────────────────────────────────
    try:
        api.login(DEMO_EMAIL, "wrong")
    except ApiError as e:
        print(f"1. POST /auth (bad creds)  → {e.status_code}  {e.message}")

    # ── Step 2: login ───────────────────────────────────────────────
    session = api.login(DEMO_EMAIL, DEMO_PASSWORD)
    print(f"2. POST /auth               → 200  user={session.user['email']}")

    # ── Step 3: dashboard ───────────────────────────────────────────
    stats = api.get_dashboard(session)
    print(f"3. GET  /dashboard          → {stats}")

    # ── Step 4: courses ─────────────────────────────────────────────
    for course in api.get_courses(session):
        print(
            f"4. GET  /courses            → {course['thumbnail']} {course['title']}"
            f"  {course['progress']}%"
        )

    # ── Step 5: videos ──────────────────────────────────────────────
    videos = api.get_videos(session)
    for video in videos:
        mark = "x" if video["isWatched"] else " "
        print(
            f"5. GET  /videos             → [{mark}] {video['title']}"
            f"  ({video['duration']}, {video['publishedAt']})"
        )

    # ── Step 6: report progress on the first unwatched video ────────
    unwatched = next((v for v in videos if not v["isWatched"]), None)
    if unwatched is not None:
        result = api.update_video_progress(
            session, unwatched["id"], watched_seconds=120
        )
        print(f"6. POST /videos             → {result['message']}")

    session = api.logout(session)
    print(f"7. logout                   → authenticated={session.is_authenticated}")


if __name__ == "__main__":
    main()
