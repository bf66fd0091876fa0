"""Shared in-memory tables for the InMemory*Repo classes.

Used when DATABASE_URL is not configured (local dev, tests).  One store
backs all three repositories so joins across users, courses and videos
behave like the SQL versions.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from learning_api.models.course import Category, Course, Enrollment
from learning_api.models.study_session import StudySession
from learning_api.models.user import User
from learning_api.models.video import Video, VideoProgress


@dataclass
class InMemoryStore:
    users: dict[int, User] = field(default_factory=dict)
    categories: dict[int, Category] = field(default_factory=dict)
    courses: dict[int, Course] = field(default_factory=dict)
    enrollments: dict[int, Enrollment] = field(default_factory=dict)
    videos: dict[int, Video] = field(default_factory=dict)
    # keyed by (user_id, video_id), which is what keeps progress unique
    progress: dict[tuple[int, int], VideoProgress] = field(default_factory=dict)
    study_sessions: list[StudySession] = field(default_factory=list)

    def clear(self) -> None:
        self.users.clear()
        self.categories.clear()
        self.courses.clear()
        self.enrollments.clear()
        self.videos.clear()
        self.progress.clear()
        self.study_sessions.clear()

    # -- writers used by seeding and tests --

    def add_user(self, user: User) -> None:
        if any(u.email == user.email for u in self.users.values()):
            raise ValueError("email already exists")
        self.users[user.id] = user

    def add_category(self, category: Category) -> None:
        self.categories[category.id] = category

    def add_course(self, course: Course) -> None:
        self.courses[course.id] = course

    def add_enrollment(self, enrollment: Enrollment) -> None:
        if enrollment.is_active and any(
            e.is_active
            and e.user_id == enrollment.user_id
            and e.course_id == enrollment.course_id
            for e in self.enrollments.values()
        ):
            raise ValueError("user already has an active enrollment for course")
        self.enrollments[enrollment.id] = enrollment

    def add_video(self, video: Video) -> None:
        self.videos[video.id] = video

    def add_study_session(self, session: StudySession) -> None:
        self.study_sessions.append(session)

    def active_course_ids(self, user_id: int) -> set[int]:
        return {
            e.course_id
            for e in self.enrollments.values()
            if e.user_id == user_id and e.is_active
        }
