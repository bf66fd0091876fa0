"""Prometheus instrumentation for every HTTP request.

Counts requests by method, path and status, and times them.  The
``endpoint`` label is the raw URL path; every route here is static, so
the label set stays small.  Scrapes of /metrics are not counted.
"""

from __future__ import annotations

import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from learning_api.core.metrics import ACTIVE_REQUESTS, REQUEST_COUNT, REQUEST_DURATION


class MetricsMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path == "/metrics":
            return await call_next(request)

        ACTIVE_REQUESTS.inc()
        start = time.monotonic()
        status_code = "500"  # unless the handler returns
        try:
            response = await call_next(request)
            status_code = str(response.status_code)
            return response
        finally:
            ACTIVE_REQUESTS.dec()
            REQUEST_COUNT.labels(
                method=request.method,
                endpoint=request.url.path,
                status_code=status_code,
            ).inc()
            REQUEST_DURATION.labels(
                method=request.method, endpoint=request.url.path
            ).observe(time.monotonic() - start)
