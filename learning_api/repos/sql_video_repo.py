"""SQL implementation of VideoRepo.

The progress write is a single INSERT ... ON CONFLICT (user_id, video_id)
DO UPDATE statement.  The unique constraint on video_progress makes the
store, not the application, arbitrate concurrent writers for one pair.
"""

from __future__ import annotations

from sqlalchemy import and_, func, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.engine import Row
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from learning_api.db.tables import CourseRow, EnrollmentRow, VideoProgressRow, VideoRow
from learning_api.models.video import ProgressUpdate, VideoListing, VideoProgress
from learning_api.repos.video_repo import DEFAULT_VIDEO_LIMIT, ProgressWriteError

_UPSERT_INSERTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


class SqlVideoRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_for_user(
        self, user_id: int, *, limit: int = DEFAULT_VIDEO_LIMIT
    ) -> list[VideoListing]:
        stmt = (
            select(
                VideoRow.id,
                VideoRow.course_id,
                CourseRow.title.label("course_title"),
                VideoRow.title,
                VideoRow.description,
                VideoRow.duration_seconds,
                VideoRow.views,
                VideoRow.likes,
                VideoRow.published_at,
                func.coalesce(VideoProgressRow.completed, False).label("is_watched"),
            )
            .select_from(VideoRow)
            .join(CourseRow, CourseRow.id == VideoRow.course_id)
            .join(
                EnrollmentRow,
                and_(
                    EnrollmentRow.course_id == CourseRow.id,
                    EnrollmentRow.user_id == user_id,
                    EnrollmentRow.is_active.is_(True),
                ),
            )
            .outerjoin(
                VideoProgressRow,
                and_(
                    VideoProgressRow.video_id == VideoRow.id,
                    VideoProgressRow.user_id == user_id,
                ),
            )
            .where(VideoRow.is_published.is_(True))
            .order_by(VideoRow.published_at.desc().nulls_last(), VideoRow.id.desc())
            .limit(limit)
        )
        rows = (await self._session.execute(stmt)).all()
        return [_row_to_listing(r) for r in rows]

    async def upsert_progress(
        self, update: ProgressUpdate, *, now: int
    ) -> VideoProgress:
        dialect = self._session.get_bind().dialect.name
        insert = _UPSERT_INSERTS.get(dialect)
        if insert is None:
            raise ProgressWriteError(f"progress upsert not supported on {dialect}")

        stmt = insert(VideoProgressRow).values(
            user_id=update.user_id,
            video_id=update.video_id,
            watched_seconds=update.watched_seconds,
            completed=bool(update.completed),
            last_watched_at=now,
        )
        set_ = {
            "watched_seconds": stmt.excluded.watched_seconds,
            "last_watched_at": stmt.excluded.last_watched_at,
        }
        if update.completed is not None:
            set_["completed"] = stmt.excluded.completed

        stmt = stmt.on_conflict_do_update(
            index_elements=[VideoProgressRow.user_id, VideoProgressRow.video_id],
            set_=set_,
        ).returning(
            VideoProgressRow.user_id,
            VideoProgressRow.video_id,
            VideoProgressRow.watched_seconds,
            VideoProgressRow.completed,
            VideoProgressRow.last_watched_at,
        )

        try:
            row = (await self._session.execute(stmt)).one()
        except IntegrityError as exc:
            # FK violation: unknown user or video
            raise ProgressWriteError(str(exc.orig)) from exc
        return _row_to_progress(row)

    async def get_progress(
        self, user_id: int, video_id: int
    ) -> VideoProgress | None:
        stmt = select(VideoProgressRow).where(
            VideoProgressRow.user_id == user_id,
            VideoProgressRow.video_id == video_id,
        )
        row = (await self._session.execute(stmt)).scalar_one_or_none()
        if row is None:
            return None
        return _row_to_progress(row)


def _row_to_listing(row: Row) -> VideoListing:
    return VideoListing(
        id=row.id,
        course_id=row.course_id,
        course_title=row.course_title,
        title=row.title,
        description=row.description or "",
        duration_seconds=row.duration_seconds,
        views=row.views,
        likes=row.likes,
        published_at=row.published_at,
        is_watched=bool(row.is_watched),
    )


def _row_to_progress(row: Row | VideoProgressRow) -> VideoProgress:
    return VideoProgress(
        user_id=row.user_id,
        video_id=row.video_id,
        watched_seconds=row.watched_seconds,
        completed=bool(row.completed),
        last_watched_at=row.last_watched_at,
    )
