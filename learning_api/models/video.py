from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Video:
    id: int
    course_id: int
    title: str
    description: str
    duration_seconds: int
    is_published: bool = False
    published_at: int | None = None
    views: int = 0
    likes: int = 0


@dataclass(frozen=True, slots=True)
class VideoProgress:
    """Per-user, per-video watch state.  Unique per (user_id, video_id)."""

    user_id: int
    video_id: int
    watched_seconds: int
    completed: bool
    last_watched_at: int


@dataclass(frozen=True, slots=True)
class ProgressUpdate:
    """One progress report from a client.

    ``completed`` is None when the client did not send the flag: a new
    record then starts as not completed and an existing one keeps its
    stored value.
    """

    user_id: int
    video_id: int
    watched_seconds: int
    completed: bool | None = None


@dataclass(frozen=True, slots=True)
class VideoListing:
    """A published video joined with its course title and the caller's state."""

    id: int
    course_id: int
    course_title: str
    title: str
    description: str
    duration_seconds: int
    views: int
    likes: int
    published_at: int | None
    is_watched: bool
