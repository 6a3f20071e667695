"""Structured logging for the blog API.

Every record goes through structlog. Records emitted while a request is in
flight carry that request's ``request_id``, ``method`` and ``path`` through
structlog's context variables, so service events such as ``post_created``
can be tied back to the HTTP call that caused them.
"""

from __future__ import annotations

import logging
import sys
import uuid
from typing import Any

import structlog

from app.core.config import settings

REQUEST_ID_HEADER = "X-Request-ID"

# Third-party loggers and the level they run at outside debug mode.
# uvicorn's access log is replaced by the ``request_completed`` event.
QUIET_LOGGERS = {
    "uvicorn.access": logging.WARNING,
    "sqlalchemy.engine": logging.WARNING,
    "aiosqlite": logging.WARNING,
}


def setup_logging() -> None:
    """Configure structlog and the stdlib root logger."""
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if settings.debug:
        processors = shared_processors + [
            structlog.dev.ConsoleRenderer(colors=True)
        ]
    else:
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )

    for name in ("uvicorn", "uvicorn.error"):
        logging.getLogger(name).setLevel(log_level)

    for name, quiet_level in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(log_level if settings.debug else max(quiet_level, log_level))


def bind_request_context(method: str, path: str, request_id: str | None = None) -> str:
    """Attach request fields to every log record until cleared.

    Args:
        method: HTTP method.
        path: Request path.
        request_id: Caller-supplied ID; a new one is generated when missing.

    Returns:
        The request ID in use.
    """
    request_id = request_id or uuid.uuid4().hex
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(
        request_id=request_id,
        method=method,
        path=path,
    )
    return request_id


def clear_request_context() -> None:
    """Drop the fields bound by ``bind_request_context``."""
    structlog.contextvars.clear_contextvars()


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Optional logger name, usually the caller's ``__name__``.

    Returns:
        A bound structlog logger instance.
    """
    return structlog.get_logger(name)
