"""
Logging for the website, built on structlog.

Events are snake_case names with keyword fields. Development prints coloured
console lines; every other environment emits one JSON object per line.
Records from uvicorn and third-party libraries go through the same renderer.
"""
import logging
import sys
import time
import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from asocsemi.core.config import settings

# Chatty libraries only log warnings and above
QUIET_LOGGERS = ("uvicorn.access", "httpx", "httpcore", "aiobotocore", "botocore", "oauthlib")

# Static assets are not worth a log line per request
UNLOGGED_PATH_PREFIXES = ("/static/",)


def _renderer():
    if settings.environment == "development":
        return structlog.dev.ConsoleRenderer()
    return structlog.processors.JSONRenderer()


def setup_logging() -> None:
    """Route structlog and stdlib records through one handler. Call once at startup."""
    pre_chain = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]

    structlog.configure(
        processors=[
            *pre_chain,
            structlog.processors.StackInfoRenderer(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(),
            ],
        )
    )

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(logging.DEBUG if settings.debug else logging.INFO)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


request_logger = get_logger("asocsemi.request")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Bind a request id (taken from X-Request-ID or generated) to every log line
    of the request, echo it back, and log one request_completed event.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )

        started = time.perf_counter()
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id

        if not request.url.path.startswith(UNLOGGED_PATH_PREFIXES):
            user = getattr(request.state, "current_user", None)
            request_logger.info(
                "request_completed",
                status=response.status_code,
                duration_ms=round((time.perf_counter() - started) * 1000, 1),
                user_id=user.id if user else None,
            )
        return response
