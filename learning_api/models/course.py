from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Category:
    id: int
    name: str


@dataclass(frozen=True, slots=True)
class Course:
    id: int
    title: str
    description: str
    duration_hours: int
    level: str  # beginner|intermediate|advanced
    category_id: int


@dataclass(frozen=True, slots=True)
class Enrollment:
    id: int
    user_id: int
    course_id: int
    enrolled_at: int
    progress_percentage: float = 0.0
    is_active: bool = True
    completed_at: int | None = None

    @property
    def is_completed(self) -> bool:
        return self.completed_at is not None


@dataclass(frozen=True, slots=True)
class EnrolledCourse:
    """A course joined with the caller's enrollment and category name."""

    id: int
    title: str
    description: str
    duration_hours: int
    level: str
    progress_percentage: float
    category_name: str
    enrolled_at: int
