"""SQL implementation of UserRepo."""

from __future__ import annotations

from sqlalchemy import distinct, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from learning_api.db.tables import (
    EnrollmentRow,
    StudySessionRow,
    UserRow,
    VideoProgressRow,
    VideoRow,
)
from learning_api.models.dashboard import DashboardCounts
from learning_api.models.user import User


class SqlUserRepo:
    """Satisfies the UserRepo Protocol using SQLAlchemy."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_email(self, email: str) -> User | None:
        stmt = select(UserRow).where(UserRow.email == email)
        row = (await self._session.execute(stmt)).scalar_one_or_none()
        if row is None:
            return None
        return _row_to_user(row)

    async def dashboard_counts(self, user_id: int, *, since: int) -> DashboardCounts:
        # Five independent scalar sub-selects, sent as one statement so the
        # figures come from the same snapshot.
        stmt = select(
            _total_courses(user_id).label("total_courses"),
            _completed_courses(user_id).label("completed_courses"),
            _total_videos(user_id).label("total_videos"),
            _watched_videos(user_id).label("watched_videos"),
            _study_seconds(user_id, since).label("study_seconds"),
        )
        row = (await self._session.execute(stmt)).one()
        return DashboardCounts(
            total_courses=int(row.total_courses or 0),
            completed_courses=int(row.completed_courses or 0),
            total_videos=int(row.total_videos or 0),
            watched_videos=int(row.watched_videos or 0),
            study_seconds=int(row.study_seconds or 0),
        )


def _total_courses(user_id: int):
    return (
        select(func.count())
        .select_from(EnrollmentRow)
        .where(EnrollmentRow.user_id == user_id, EnrollmentRow.is_active.is_(True))
        .scalar_subquery()
    )


def _completed_courses(user_id: int):
    return (
        select(func.count())
        .select_from(EnrollmentRow)
        .where(
            EnrollmentRow.user_id == user_id,
            EnrollmentRow.completed_at.is_not(None),
        )
        .scalar_subquery()
    )


def _total_videos(user_id: int):
    return (
        select(func.count(distinct(VideoRow.id)))
        .select_from(VideoRow)
        .join(EnrollmentRow, EnrollmentRow.course_id == VideoRow.course_id)
        .where(
            EnrollmentRow.user_id == user_id,
            EnrollmentRow.is_active.is_(True),
            VideoRow.is_published.is_(True),
        )
        .scalar_subquery()
    )


def _watched_videos(user_id: int):
    return (
        select(func.count())
        .select_from(VideoProgressRow)
        .where(
            VideoProgressRow.user_id == user_id,
            VideoProgressRow.completed.is_(True),
        )
        .scalar_subquery()
    )


def _study_seconds(user_id: int, since: int):
    return (
        select(func.coalesce(func.sum(StudySessionRow.duration_seconds), 0))
        .where(
            StudySessionRow.user_id == user_id,
            StudySessionRow.session_start >= since,
        )
        .scalar_subquery()
    )


def _row_to_user(row: UserRow) -> User:
    return User(
        id=row.id,
        name=row.name or "",
        email=row.email,
        password_hash=row.password_hash,
        is_active=row.is_active,
    )
