"""
Structured logging via structlog.

``init_logging`` configures structlog on top of the stdlib root logger (JSON
or console output, chosen by LOG_FORMAT). ``bind_request_id`` and
``clear_request_context`` are installed as Flask request hooks so every log
line emitted while handling a request carries the same ``request_id``, which
is also returned to the client in the X-Request-ID header.
"""
from __future__ import annotations

import logging
import uuid

import structlog
from flask import Flask, g
from structlog.contextvars import bind_contextvars, clear_contextvars

from jobly.core.config import settings

REQUEST_ID_HEADER = "X-Request-ID"


def init_logging() -> None:
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if settings.LOG_FORMAT == "json":
        final_processor = structlog.processors.JSONRenderer()
    else:
        final_processor = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=shared_processors + [final_processor],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    root_logger = logging.getLogger()
    if not root_logger.handlers:
        root_logger.addHandler(logging.StreamHandler())
    root_logger.setLevel(settings.LOG_LEVEL)

    # werkzeug logs every request line on its own
    logging.getLogger("werkzeug").setLevel(logging.WARNING)


def bind_request_id() -> None:
    clear_contextvars()
    g.request_id = uuid.uuid4().hex
    bind_contextvars(request_id=g.request_id)


def add_request_id_header(response):
    request_id = g.get("request_id")
    if request_id:
        response.headers[REQUEST_ID_HEADER] = request_id
    return response


def clear_request_context(_exc=None) -> None:
    clear_contextvars()


def install_request_logging(app: Flask) -> None:
    app.before_request(bind_request_id)
    app.after_request(add_request_id_header)
    app.teardown_request(clear_request_context)
