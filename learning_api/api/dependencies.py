"""Shared FastAPI dependencies: repositories, the caller, display labels.

Repositories are chosen per request.  With DATABASE_URL configured each
request gets the SQL implementations bound to its own AsyncSession;
otherwise every request shares ``demo_store``, seeded once at import.
"""

from __future__ import annotations

import logging
from typing import Annotated

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from learning_api.core.config import SETTINGS
from learning_api.db.engine import async_session_factory, get_async_session
from learning_api.db.seed import seed_demo_data
from learning_api.models.principal import Principal
from learning_api.repos.course_repo import CourseRepo, InMemoryCourseRepo
from learning_api.repos.memory_store import InMemoryStore
from learning_api.repos.sql_course_repo import SqlCourseRepo
from learning_api.repos.sql_user_repo import SqlUserRepo
from learning_api.repos.sql_video_repo import SqlVideoRepo
from learning_api.repos.user_repo import InMemoryUserRepo, UserRepo
from learning_api.repos.video_repo import InMemoryVideoRepo, VideoRepo
from learning_api.services import token_service
from learning_api.services.presentation import CategoryLabels

logger = logging.getLogger(__name__)

demo_store = InMemoryStore()
if async_session_factory is None:
    seed_demo_data(demo_store)

SessionDep = Annotated[AsyncSession | None, Depends(get_async_session)]


def get_user_repo(session: SessionDep) -> UserRepo:
    if session is None:
        return InMemoryUserRepo(demo_store)
    return SqlUserRepo(session)


def get_course_repo(session: SessionDep) -> CourseRepo:
    if session is None:
        return InMemoryCourseRepo(demo_store)
    return SqlCourseRepo(session)


def get_video_repo(session: SessionDep) -> VideoRepo:
    if session is None:
        return InMemoryVideoRepo(demo_store)
    return SqlVideoRepo(session)


# --- authentication ---

bearer_scheme = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def require_user(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(bearer_scheme)
    ],
) -> Principal:
    """Resolve the caller of a protected endpoint.

    AUTH_MODE=jwt verifies the bearer token issued by POST /auth and takes
    the user id from its ``sub`` claim.  AUTH_MODE=legacy skips
    verification and acts as LEGACY_USER_ID for every request.
    """
    if SETTINGS.trusts_bearer_tokens:
        return Principal(user_id=SETTINGS.legacy_user_id)

    if credentials is None:
        raise _unauthorized("Not authenticated")

    try:
        claims = token_service.decode_access_token(credentials.credentials)
    except jwt.ExpiredSignatureError:
        logger.warning("Expired token rejected")
        raise _unauthorized("Token expired") from None
    except jwt.InvalidTokenError as e:
        logger.warning("Invalid token rejected: %s", e)
        raise _unauthorized("Invalid token") from None

    try:
        user_id = int(claims["sub"])
    except ValueError:
        logger.warning("Token subject is not a user id")
        raise _unauthorized("Invalid token") from None

    logger.debug("Token validated for user=%s", user_id)
    return Principal(user_id=user_id)


CurrentUser = Annotated[Principal, Depends(require_user)]


# --- presentation ---

CATEGORY_LABELS = CategoryLabels.from_mapping(
    SETTINGS.category_labels, SETTINGS.default_category_label
)


def get_category_labels() -> CategoryLabels:
    return CATEGORY_LABELS
