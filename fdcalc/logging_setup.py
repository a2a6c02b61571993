"""
Structured logging setup.

Every log line is a JSON object on stdout, and every line written while a
request is being served carries that request's id, e.g.

    {"event": "calc.completed", "level": "info", "timestamp": "...",
     "request_id": "3f2c...", "method": "POST", "path": "/api/calc/fd",
     "years": 5}

Clients may send their own id in ``X-Request-ID``; it is echoed back.
"""

from __future__ import annotations

import logging
import sys
import uuid

import structlog
from flask import Flask, g, request

from fdcalc.config import Settings

SERVICE_NAME = "fd-calculator"
REQUEST_ID_HEADER = "X-Request-ID"


def configure_logging(settings: Settings):
    """Configure structlog and return a logger bound with service metadata."""
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.log_level, logging.INFO),
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    return structlog.get_logger(SERVICE_NAME).bind(service=SERVICE_NAME, env=settings.env)


def init_request_logging(app: Flask) -> None:
    """Bind a request id (and method/path) to every log line of a request."""

    @app.before_request
    def _bind_request_id():
        g.request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=g.request_id,
            method=request.method,
            path=request.path,
        )

    @app.after_request
    def _echo_request_id(response):
        request_id = g.get("request_id")
        if request_id:
            response.headers[REQUEST_ID_HEADER] = request_id
        return response

    @app.teardown_request
    def _clear_request_id(exc):
        structlog.contextvars.clear_contextvars()
