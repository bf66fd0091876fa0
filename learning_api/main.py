from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from learning_api.api.auth import router as auth_router
from learning_api.api.courses import router as courses_router
from learning_api.api.dashboard import router as dashboard_router
from learning_api.api.errors import install_error_handlers
from learning_api.api.health import router as health_router
from learning_api.api.metrics_endpoint import router as metrics_router
from learning_api.api.videos import router as videos_router
from learning_api.core.config import SETTINGS
from learning_api.core.logging import setup_logging
from learning_api.db.engine import lifespan_db
from learning_api.db.redis import lifespan_redis
from learning_api.middleware.metrics import MetricsMiddleware
from learning_api.middleware.request_context import RequestContextMiddleware

# Configure logging before anything else runs.
setup_logging(SETTINGS.log_level, json_format=SETTINGS.log_json)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    # Nested so Redis is closed before the database engine is disposed.
    async with lifespan_db():
        async with lifespan_redis():
            yield


app = FastAPI(
    title="learning-platform-api",
    lifespan=lifespan,
    docs_url="/docs" if SETTINGS.is_dev else None,
    redoc_url="/redoc" if SETTINGS.is_dev else None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(SETTINGS.cors_origins),
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "X-Requested-With"],
    max_age=3600,
)

# Last added runs first: RequestContext -> Metrics -> CORS -> route.
app.add_middleware(MetricsMiddleware)
app.add_middleware(RequestContextMiddleware)

install_error_handlers(app)

app.include_router(metrics_router)
app.include_router(health_router)
app.include_router(auth_router)
app.include_router(dashboard_router)
app.include_router(courses_router)
app.include_router(videos_router)

if SETTINGS.trusts_bearer_tokens:
    logger.warning(
        "AUTH_MODE=legacy: bearer tokens are NOT verified; every request acts as "
        "user_id=%d",
        SETTINGS.legacy_user_id,
    )

logger.info(
    "learning-platform-api started  env=%s log_level=%s port=%d auth_mode=%s",
    SETTINGS.app_env,
    SETTINGS.log_level,
    SETTINGS.port,
    SETTINGS.auth_mode,
)
