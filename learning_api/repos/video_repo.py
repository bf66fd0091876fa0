from __future__ import annotations

from typing import Protocol

from learning_api.models.video import ProgressUpdate, VideoListing, VideoProgress
from learning_api.repos.memory_store import InMemoryStore

DEFAULT_VIDEO_LIMIT = 20


class ProgressWriteError(Exception):
    """The store refused a progress write (e.g. the video does not exist)."""


class VideoRepo(Protocol):
    async def list_for_user(
        self, user_id: int, *, limit: int = DEFAULT_VIDEO_LIMIT
    ) -> list[VideoListing]:
        """Published videos of the user's enrolled courses, newest first."""
        ...

    async def upsert_progress(
        self, update: ProgressUpdate, *, now: int
    ) -> VideoProgress:
        """Create or update the single progress record for (user, video)."""
        ...

    async def get_progress(
        self, user_id: int, video_id: int
    ) -> VideoProgress | None: ...


class InMemoryVideoRepo:
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def list_for_user(
        self, user_id: int, *, limit: int = DEFAULT_VIDEO_LIMIT
    ) -> list[VideoListing]:
        course_ids = self._store.active_course_ids(user_id)
        videos = sorted(
            (
                v
                for v in self._store.videos.values()
                if v.is_published and v.course_id in course_ids
            ),
            key=lambda v: (v.published_at is not None, v.published_at or 0, v.id),
            reverse=True,
        )

        result: list[VideoListing] = []
        for v in videos:
            if len(result) >= limit:
                break
            course = self._store.courses.get(v.course_id)
            if course is None:
                continue
            progress = self._store.progress.get((user_id, v.id))
            result.append(
                VideoListing(
                    id=v.id,
                    course_id=v.course_id,
                    course_title=course.title,
                    title=v.title,
                    description=v.description,
                    duration_seconds=v.duration_seconds,
                    views=v.views,
                    likes=v.likes,
                    published_at=v.published_at,
                    is_watched=progress.completed if progress is not None else False,
                )
            )
        return result

    async def upsert_progress(
        self, update: ProgressUpdate, *, now: int
    ) -> VideoProgress:
        if update.video_id not in self._store.videos:
            raise ProgressWriteError(f"video {update.video_id} does not exist")

        key = (update.user_id, update.video_id)
        existing = self._store.progress.get(key)
        if update.completed is not None:
            completed = update.completed
        elif existing is not None:
            completed = existing.completed
        else:
            completed = False

        record = VideoProgress(
            user_id=update.user_id,
            video_id=update.video_id,
            watched_seconds=update.watched_seconds,
            completed=completed,
            last_watched_at=now,
        )
        # Single dict assignment, no await in between: nothing can interleave.
        self._store.progress[key] = record
        return record

    async def get_progress(
        self, user_id: int, video_id: int
    ) -> VideoProgress | None:
        return self._store.progress.get((user_id, video_id))
