"""Structured Logging — JSON log lines plus one access-log record per request.

Invariants:
    - Every line carries timestamp, level, logger and message
    - Request context (method, path, status_code, duration_ms) and domain ids
      (user_id, order_id, error_code) are emitted only when the record has them
    - Requests that end in an unhandled exception are logged with status 500
    - setup_logging replaces the handler it installed earlier; calling it
      twice never duplicates output

Design Decisions:
    - Access log written by our own middleware so it shares the JSON format;
      uvicorn's access logger is silenced to avoid double lines
"""

import json
import logging
import time
from datetime import datetime, timezone

from fastapi import FastAPI, Request

access_logger = logging.getLogger("library_api.access")

LOG_CONTEXT_FIELDS = (
    "method", "path", "status_code", "duration_ms",
    "error_code", "user_id", "order_id",
)

_HANDLER_NAME = "library_api"


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update({
            key: record.__dict__[key]
            for key in LOG_CONTEXT_FIELDS
            if record.__dict__.get(key) is not None
        })
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    """Install the root handler (json or plain text)."""
    root = logging.getLogger()
    for existing in [h for h in root.handlers if h.get_name() == _HANDLER_NAME]:
        root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(
        JSONFormatter() if fmt == "json"
        else logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"),
    )
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    logging.getLogger("uvicorn.access").disabled = True


def install_access_log(app: FastAPI) -> None:
    """Log method, path, status and latency for every request."""

    @app.middleware("http")
    async def access_log(request: Request, call_next):
        started = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            access_logger.info(
                f"{request.method} {request.url.path} -> {status_code}",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "status_code": status_code,
                    "duration_ms": round((time.perf_counter() - started) * 1000, 2),
                },
            )
