from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from learning_api.api.dependencies import CurrentUser, get_user_repo
from learning_api.repos.user_repo import UserRepo
from learning_api.services import dashboard_service

router = APIRouter(tags=["dashboard"])


class DashboardOut(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total_courses: int
    completed_courses: int
    total_videos: int
    watched_videos: int
    study_time: int  # whole hours over the last 7 days


@router.get("/dashboard", response_model=DashboardOut)
async def get_dashboard(
    principal: CurrentUser,
    repo: Annotated[UserRepo, Depends(get_user_repo)],
) -> DashboardOut:
    stats = await dashboard_service.get_dashboard(repo, principal.user_id)
    return DashboardOut(
        total_courses=stats.total_courses,
        completed_courses=stats.completed_courses,
        total_videos=stats.total_videos,
        watched_videos=stats.watched_videos,
        study_time=stats.study_time_hours,
    )
