"""GET /courses: the caller's active enrollments, newest first."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from learning_api.api.dependencies import (
    CurrentUser,
    get_category_labels,
    get_course_repo,
)
from learning_api.models.course import EnrolledCourse
from learning_api.repos.course_repo import CourseRepo
from learning_api.services.presentation import CategoryLabels, format_course_duration

router = APIRouter(tags=["courses"])


class CourseOut(BaseModel):
    id: int
    title: str
    description: str
    duration: str
    level: str
    progress: float
    thumbnail: str
    category: str


def _to_course_out(course: EnrolledCourse, labels: CategoryLabels) -> CourseOut:
    return CourseOut(
        id=course.id,
        title=course.title,
        description=course.description,
        duration=format_course_duration(course.duration_hours),
        level=course.level,
        progress=course.progress_percentage,
        thumbnail=labels.label_for(course.category_name),
        category=course.category_name,
    )


@router.get("/courses", response_model=list[CourseOut])
async def list_courses(
    principal: CurrentUser,
    repo: Annotated[CourseRepo, Depends(get_course_repo)],
    labels: Annotated[CategoryLabels, Depends(get_category_labels)],
) -> list[CourseOut]:
    courses = await repo.list_enrolled(principal.user_id)
    return [_to_course_out(c, labels) for c in courses]
