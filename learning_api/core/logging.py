"""Logging setup for the learning platform API.

Everything goes to stdout through a single handler on the root logger.
Two output shapes are available:

  _ContainerFormatter
    One human-readable line per record, for local runs and `docker logs`.
    Records at WARNING and above carry a ``[file:line]`` suffix, and the
    current request id (see middleware/request_context.py) is shown in
    brackets when one is set.

  _JsonFormatter
    One JSON object per line, for log shippers.  Request context fields
    that the middleware attaches to records (request_id, method, path,
    status_code, duration_ms) become top-level keys, as do the user_id
    and video_id extras passed by the endpoints.

Pick JSON with LOG_JSON=true.

Handlers never receive passwords or tokens; log the user id or the email
instead.
"""

from __future__ import annotations

import json
import logging
import sys
from contextvars import ContextVar

# Set by RequestContextMiddleware for the duration of each request.
request_id_var: ContextVar[str] = ContextVar("request_id", default="-")

_NOISY_LOGGERS = (
    "uvicorn",
    "uvicorn.access",
    "uvicorn.error",
    "httpcore",
    "httpx",
    "sqlalchemy.engine",
    "aiosqlite",
)


class _RequestContextFilter(logging.Filter):
    """Copy the current request id onto every record passing the handler.

    Attached to the handler rather than the root logger: logger-level
    filters do not see records propagated from child loggers.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if getattr(record, "request_id", None) is None:
            record.request_id = request_id_var.get()
        return True


class _ContainerFormatter(logging.Formatter):
    _BASE_FMT = "%(asctime)s %(levelname)-8s %(name)s %(request_tag)s %(message)s"
    _LOC_SUFFIX = "  [%(filename)s:%(lineno)d]"

    def __init__(self) -> None:
        super().__init__(datefmt="%Y-%m-%dT%H:%M:%S%z")

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        base = super().formatTime(record, datefmt)
        # Splice milliseconds in front of the +HHMM offset.
        return f"{base[:-5]}.{int(record.msecs):03d}{base[-5:]}"

    def format(self, record: logging.LogRecord) -> str:
        request_id = getattr(record, "request_id", "-")
        record.request_tag = f"[{request_id}]" if request_id != "-" else ""
        if record.levelno >= logging.WARNING:
            self._style._fmt = self._BASE_FMT + self._LOC_SUFFIX
        else:
            self._style._fmt = self._BASE_FMT
        return super().format(record)


class _JsonFormatter(logging.Formatter):
    _CONTEXT_FIELDS = (
        "request_id",
        "method",
        "path",
        "status_code",
        "duration_ms",
        "user_id",
        "video_id",
    )

    def __init__(self) -> None:
        super().__init__(datefmt="%Y-%m-%dT%H:%M:%S%z")

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, object] = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for key in self._CONTEXT_FIELDS:
            value = getattr(record, key, None)
            if value is not None and value != "-":
                entry[key] = value

        if record.exc_info and record.exc_info[0] is not None:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str, ensure_ascii=False)


def setup_logging(level_name: str, *, json_format: bool = False) -> None:
    """Install the stdout handler on the root logger.

    Unknown level names fall back to INFO.  Third-party loggers are held
    at WARNING unless the requested level is stricter.
    """
    level = getattr(logging, level_name.upper(), logging.INFO)
    if not isinstance(level, int):
        level = logging.INFO

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(_JsonFormatter() if json_format else _ContainerFormatter())
    handler.addFilter(_RequestContextFilter())

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()
    root.addHandler(handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
