"""POST /auth: exchange email + password for a bearer token.

Every failure (unknown email, inactive account, wrong password) gets the
same 401 body so the response does not reveal which accounts exist.
Passwords and tokens never reach a log line.
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from learning_api.api.dependencies import get_user_repo
from learning_api.api.ratelimit import LOGIN_LIMIT, require_rate_limit
from learning_api.core.metrics import LOGIN_ATTEMPTS
from learning_api.repos.user_repo import UserRepo
from learning_api.services import auth_service, token_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


class LoginIn(BaseModel):
    email: str | None = None
    password: str | None = None


class UserOut(BaseModel):
    id: int
    name: str
    email: str


class LoginOut(BaseModel):
    message: str
    token: str
    user: UserOut


@router.post(
    "/auth",
    response_model=LoginOut,
    dependencies=[Depends(require_rate_limit(LOGIN_LIMIT))],
)
async def login(
    repo: Annotated[UserRepo, Depends(get_user_repo)],
    body: LoginIn | None = None,
) -> LoginOut:
    if body is None or not body.email or not body.password:
        LOGIN_ATTEMPTS.labels(result="missing_fields").inc()
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email and password are required.",
        )

    user = await auth_service.authenticate_user(repo, body.email, body.password)
    if user is None:
        LOGIN_ATTEMPTS.labels(result="invalid_credentials").inc()
        logger.info(
            "Login failed email=%s", auth_service.normalize_email(body.email)
        )
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Login failed. Invalid credentials.",
        )

    token = token_service.create_access_token(sub=str(user.id))
    LOGIN_ATTEMPTS.labels(result="success").inc()
    logger.info("Login succeeded user_id=%s", user.id, extra={"user_id": user.id})
    return LoginOut(
        message="Login successful",
        token=token,
        user=UserOut(id=user.id, name=user.name, email=user.email),
    )
