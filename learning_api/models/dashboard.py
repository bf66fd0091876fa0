from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class DashboardCounts:
    """Raw per-user aggregates as read from the store.

    Each field is computed independently of the others.
    """

    total_courses: int
    completed_courses: int
    total_videos: int
    watched_videos: int
    study_seconds: int


@dataclass(frozen=True, slots=True)
class DashboardStats:
    total_courses: int
    completed_courses: int
    total_videos: int
    watched_videos: int
    study_time_hours: int
