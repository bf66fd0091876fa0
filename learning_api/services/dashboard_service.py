from __future__ import annotations

import time

from learning_api.models.dashboard import DashboardCounts, DashboardStats
from learning_api.repos.user_repo import UserRepo

STUDY_WINDOW_SECONDS = 7 * 24 * 3600
SECONDS_PER_HOUR = 3600


def study_hours(total_seconds: int) -> int:
    """Whole hours, rounding half up: 5399 -> 1, 5400 -> 2."""
    if total_seconds <= 0:
        return 0
    return (total_seconds + SECONDS_PER_HOUR // 2) // SECONDS_PER_HOUR


def window_start(now: int) -> int:
    return now - STUDY_WINDOW_SECONDS


def merge_counts(counts: DashboardCounts) -> DashboardStats:
    return DashboardStats(
        total_courses=counts.total_courses,
        completed_courses=counts.completed_courses,
        total_videos=counts.total_videos,
        watched_videos=counts.watched_videos,
        study_time_hours=study_hours(counts.study_seconds),
    )


async def get_dashboard(
    repo: UserRepo, user_id: int, *, now: int | None = None
) -> DashboardStats:
    current = int(time.time()) if now is None else now
    counts = await repo.dashboard_counts(user_id, since=window_start(current))
    return merge_counts(counts)
