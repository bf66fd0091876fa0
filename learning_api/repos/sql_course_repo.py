"""SQL implementation of CourseRepo."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.engine import Row
from sqlalchemy.ext.asyncio import AsyncSession

from learning_api.db.tables import CategoryRow, CourseRow, EnrollmentRow
from learning_api.models.course import EnrolledCourse


class SqlCourseRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_enrolled(self, user_id: int) -> list[EnrolledCourse]:
        stmt = (
            select(
                CourseRow.id,
                CourseRow.title,
                CourseRow.description,
                CourseRow.duration_hours,
                CourseRow.level,
                EnrollmentRow.progress_percentage,
                EnrollmentRow.enrolled_at,
                CategoryRow.name.label("category_name"),
            )
            .join(EnrollmentRow, EnrollmentRow.course_id == CourseRow.id)
            .join(CategoryRow, CategoryRow.id == CourseRow.category_id)
            .where(EnrollmentRow.user_id == user_id, EnrollmentRow.is_active.is_(True))
            .order_by(EnrollmentRow.enrolled_at.desc(), EnrollmentRow.id.desc())
        )
        rows = (await self._session.execute(stmt)).all()
        return [_row_to_enrolled_course(r) for r in rows]


def _row_to_enrolled_course(row: Row) -> EnrolledCourse:
    return EnrolledCourse(
        id=row.id,
        title=row.title,
        description=row.description or "",
        duration_hours=row.duration_hours,
        level=row.level,
        progress_percentage=float(row.progress_percentage or 0),
        category_name=row.category_name,
        enrolled_at=row.enrolled_at,
    )
