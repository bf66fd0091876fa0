"""Video listing and watch-progress tracking.

  GET  /videos  latest published videos from the caller's courses
  POST /videos  record how far the caller got in one video

POST is a single upsert keyed on (user, video): repeating a report
overwrites the previous one and never adds a row.
"""

from __future__ import annotations

import logging
import time
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, ConfigDict, StrictBool, StrictInt
from pydantic.alias_generators import to_camel
from sqlalchemy.exc import SQLAlchemyError

from learning_api.api.dependencies import CurrentUser, get_video_repo
from learning_api.core.metrics import VIDEO_PROGRESS_UPDATES
from learning_api.models.video import ProgressUpdate, VideoListing
from learning_api.repos.video_repo import (
    DEFAULT_VIDEO_LIMIT,
    ProgressWriteError,
    VideoRepo,
)
from learning_api.services.presentation import format_duration, format_publish_date

logger = logging.getLogger(__name__)

router = APIRouter(tags=["videos"])


class VideoOut(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int
    title: str
    description: str
    duration: str
    views: int
    likes: int
    course_id: int
    course_title: str
    published_at: str | None
    is_watched: bool


class ProgressIn(BaseModel):
    # Strict types: "12" or 1.5 are rejected rather than coerced.
    video_id: StrictInt | None = None
    watched_seconds: StrictInt | None = None
    completed: StrictBool | None = None


class MessageOut(BaseModel):
    message: str


def _to_video_out(video: VideoListing) -> VideoOut:
    return VideoOut(
        id=video.id,
        title=video.title,
        description=video.description,
        duration=format_duration(video.duration_seconds),
        views=video.views,
        likes=video.likes,
        course_id=video.course_id,
        course_title=video.course_title,
        published_at=format_publish_date(video.published_at),
        is_watched=video.is_watched,
    )


@router.get("/videos", response_model=list[VideoOut])
async def list_videos(
    principal: CurrentUser,
    repo: Annotated[VideoRepo, Depends(get_video_repo)],
) -> list[VideoOut]:
    videos = await repo.list_for_user(principal.user_id, limit=DEFAULT_VIDEO_LIMIT)
    return [_to_video_out(v) for v in videos]


def _bad_request(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


@router.post("/videos", response_model=MessageOut)
async def update_progress(
    principal: CurrentUser,
    repo: Annotated[VideoRepo, Depends(get_video_repo)],
    body: ProgressIn | None = None,
) -> MessageOut:
    if body is None or body.video_id is None or body.watched_seconds is None:
        raise _bad_request("Video ID and watched seconds are required")
    if body.video_id <= 0:
        raise _bad_request("Video ID must be a positive integer")
    if body.watched_seconds < 0:
        raise _bad_request("Watched seconds must be a non-negative integer")

    update = ProgressUpdate(
        user_id=principal.user_id,
        video_id=body.video_id,
        watched_seconds=body.watched_seconds,
        completed=body.completed,
    )
    try:
        await repo.upsert_progress(update, now=int(time.time()))
    except (ProgressWriteError, SQLAlchemyError):
        VIDEO_PROGRESS_UPDATES.labels(result="error").inc()
        logger.exception(
            "Progress update failed user=%s video=%s",
            update.user_id,
            update.video_id,
            extra={"user_id": update.user_id, "video_id": update.video_id},
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update progress",
        ) from None

    VIDEO_PROGRESS_UPDATES.labels(result="ok").inc()
    return MessageOut(message="Progress updated successfully")
