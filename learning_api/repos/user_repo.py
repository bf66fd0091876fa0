from __future__ import annotations

from typing import Protocol

from learning_api.models.dashboard import DashboardCounts
from learning_api.models.user import User
from learning_api.repos.memory_store import InMemoryStore


class UserRepo(Protocol):
    async def get_by_email(self, email: str) -> User | None: ...
    async def dashboard_counts(self, user_id: int, *, since: int) -> DashboardCounts:
        """Aggregate the five dashboard figures for one user.

        ``since`` is the Unix timestamp where the study-time window opens.
        """
        ...


class InMemoryUserRepo:
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def get_by_email(self, email: str) -> User | None:
        for user in self._store.users.values():
            if user.email == email:
                return user
        return None

    async def dashboard_counts(self, user_id: int, *, since: int) -> DashboardCounts:
        return DashboardCounts(
            total_courses=self._total_courses(user_id),
            completed_courses=self._completed_courses(user_id),
            total_videos=self._total_videos(user_id),
            watched_videos=self._watched_videos(user_id),
            study_seconds=self._study_seconds(user_id, since),
        )

    def _total_courses(self, user_id: int) -> int:
        return len(self._store.active_course_ids(user_id))

    def _completed_courses(self, user_id: int) -> int:
        return sum(
            1
            for e in self._store.enrollments.values()
            if e.user_id == user_id and e.is_completed
        )

    def _total_videos(self, user_id: int) -> int:
        course_ids = self._store.active_course_ids(user_id)
        return sum(
            1
            for v in self._store.videos.values()
            if v.is_published and v.course_id in course_ids
        )

    def _watched_videos(self, user_id: int) -> int:
        return sum(
            1
            for (uid, _vid), p in self._store.progress.items()
            if uid == user_id and p.completed
        )

    def _study_seconds(self, user_id: int, since: int) -> int:
        return sum(
            s.duration_seconds
            for s in self._store.study_sessions
            if s.user_id == user_id and s.session_start >= since
        )
