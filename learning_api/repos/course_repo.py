from __future__ import annotations

from typing import Protocol

from learning_api.models.course import EnrolledCourse
from learning_api.repos.memory_store import InMemoryStore


class CourseRepo(Protocol):
    async def list_enrolled(self, user_id: int) -> list[EnrolledCourse]:
        """Active enrollments of the user, most recently enrolled first."""
        ...


class InMemoryCourseRepo:
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def list_enrolled(self, user_id: int) -> list[EnrolledCourse]:
        enrollments = sorted(
            (
                e
                for e in self._store.enrollments.values()
                if e.user_id == user_id and e.is_active
            ),
            key=lambda e: (e.enrolled_at, e.id),
            reverse=True,
        )

        result: list[EnrolledCourse] = []
        for e in enrollments:
            course = self._store.courses.get(e.course_id)
            if course is None:
                continue
            category = self._store.categories.get(course.category_id)
            if category is None:
                # INNER JOIN semantics: a course without a category is not listed
                continue
            result.append(
                EnrolledCourse(
                    id=course.id,
                    title=course.title,
                    description=course.description,
                    duration_hours=course.duration_hours,
                    level=course.level,
                    progress_percentage=float(e.progress_percentage),
                    category_name=category.name,
                    enrolled_at=e.enrolled_at,
                )
            )
        return result
