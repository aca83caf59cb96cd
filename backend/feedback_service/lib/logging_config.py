"""Logging setup for the feedback alert server.

Every record is written to stdout on one line: JSON by default, or a plain
text line with ``LOG_FORMAT=simple``. Both formats carry the id of the HTTP
request being handled, which the request context middleware stores in
``request_id_var`` and ``ContextFilter`` copies onto each record.

``configure_logging()`` runs once when ``main`` is imported; modules log
through ``logging.getLogger(__name__)``.
"""

import json
import logging
import sys
import traceback
import uuid
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from feedback_service.config import get_log_format, get_log_level

REQUEST_ID_HEADER = "X-Request-ID"

request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


class ContextFilter(logging.Filter):
    """Copy the current request id onto records that do not carry one."""

    def filter(self, record: logging.LogRecord) -> bool:
        if getattr(record, "request_id", None) is None:
            record.request_id = request_id_var.get()  # type: ignore[attr-defined]
        return True


def _format_exception(record: logging.LogRecord) -> Optional[str]:
    if record.exc_info and record.exc_info[1] is not None:
        return "".join(traceback.format_exception(*record.exc_info))
    return None


class JsonFormatter(logging.Formatter):
    """One JSON object per record: timestamp, level, logger, message, request_id."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", None),
        }
        exc_text = _format_exception(record)
        if exc_text:
            entry["exc_info"] = exc_text
        return json.dumps(entry, default=str)


class SimpleFormatter(logging.Formatter):
    """Human-readable format for local development."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created, tz=timezone.utc).strftime("%Y-%m-%d %H:%M:%S")
        line = f"{timestamp} {record.levelname:<8} {record.name} - {record.getMessage()}"

        request_id = getattr(record, "request_id", None)
        if request_id:
            line += f" [request_id={request_id}]"

        exc_text = _format_exception(record)
        if exc_text:
            line += "\n" + exc_text
        return line


def configure_logging() -> None:
    """Install a single stdout handler on the root logger."""
    level = getattr(logging, get_log_level(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(SimpleFormatter() if get_log_format() == "simple" else JsonFormatter())
    handler.addFilter(ContextFilter())

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def create_request_context_middleware(app) -> None:
    """Register middleware that scopes a request id to each HTTP request.

    The id comes from the ``X-Request-ID`` header when the client sends one,
    otherwise 8 random hex characters. It is echoed back on the response.
    """
    from starlette.middleware.base import BaseHTTPMiddleware
    from starlette.requests import Request
    from starlette.responses import Response

    class RequestContextMiddleware(BaseHTTPMiddleware):
        async def dispatch(self, request: Request, call_next) -> Response:
            request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:8]
            token = request_id_var.set(request_id)
            try:
                response = await call_next(request)
            finally:
                request_id_var.reset(token)
            response.headers[REQUEST_ID_HEADER] = request_id
            return response

    app.add_middleware(RequestContextMiddleware)
