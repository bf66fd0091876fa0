"""Error rendering.

Every error leaves the API as ``{"message": "..."}``:

  400  request validation (missing fields, malformed JSON)
  401  authentication (generic wording, no detail about which check failed)
  429  rate limited
  500  persistence failure (logged with traceback, generic wording)
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


def error_response(
    status_code: int, message: str, headers: dict[str, str] | None = None
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code, content={"message": message}, headers=headers
    )


async def _http_exception_handler(
    _request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return error_response(exc.status_code, str(exc.detail), exc.headers)


async def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    # Field names only; the raw input may contain a password.
    fields = [".".join(str(p) for p in e.get("loc", ())) for e in exc.errors()]
    logger.warning(
        "Rejected malformed request path=%s fields=%s", request.url.path, fields
    )
    return error_response(status.HTTP_400_BAD_REQUEST, "Invalid request body")


async def _database_exception_handler(
    request: Request, exc: SQLAlchemyError
) -> JSONResponse:
    logger.error("Database error path=%s", request.url.path, exc_info=exc)
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error"
    )


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, _database_exception_handler)
