"""Structured logging configuration with request correlation.

Every record leaves the process as one JSON line on stdout. Records emitted
while a request is active carry that request's id; the same id is echoed to
the client in ``X-Request-ID`` so a failed registration can be traced from the
response back to the log line.
"""

from __future__ import annotations

import json
import logging
import re
import sys
import time
from collections.abc import Iterable
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from flask import Flask, g, has_request_context, request

REQUEST_ID_HEADER = "X-Request-ID"
CORRELATION_HEADERS = ("X-Request-ID", "X-Correlation-ID")

# Incoming ids are echoed and logged verbatim, so only short, plain tokens are trusted
_SAFE_REQUEST_ID = re.compile(r"[A-Za-z0-9._:-]{1,128}")

# ``extra=`` keys copied into the JSON payload when present
EXTRA_KEYS = (
    "method",
    "path",
    "status",
    "endpoint",
    "elapsed_ms",
    "player_id",
    "picture_path",
)

access_log = logging.getLogger("players_api.access")


class JSONFormatter(logging.Formatter):
    """Render log records as JSON objects.

    :param extra_keys: Record attributes copied into the payload when set.
    """

    def __init__(self, extra_keys: Iterable[str] = EXTRA_KEYS) -> None:
        super().__init__()
        self.extra_keys = tuple(extra_keys)

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "time": datetime.now(timezone.utc).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", None),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        for key in self.extra_keys:
            if hasattr(record, key):
                payload[key] = getattr(record, key)
        return json.dumps(payload, default=str)


class RequestIdFilter(logging.Filter):
    """Fill ``request_id`` on records that were not given one explicitly."""

    def filter(self, record: logging.LogRecord) -> bool:
        if getattr(record, "request_id", None) is None:
            record.request_id = ensure_request_id() if has_request_context() else None
        return True


def _incoming_request_id() -> str | None:
    for header in CORRELATION_HEADERS:
        value = request.headers.get(header, "").strip()
        if value and _SAFE_REQUEST_ID.fullmatch(value):
            return value
    return None


def ensure_request_id() -> str:
    """Return the current request identifier, generating one when necessary.

    A client-supplied ``X-Request-ID`` (or ``X-Correlation-ID``) is reused when
    it is a short token; anything else is replaced by a fresh UUID.
    """

    if has_request_context():
        if hasattr(g, "request_id"):
            return g.request_id  # type: ignore[return-value]
        request_id = _incoming_request_id() or str(uuid4())
        g.request_id = request_id
        return request_id
    return str(uuid4())


def configure_logging(level: str | int = "INFO") -> None:
    """Configure the root logger with JSON-formatted stdout output."""

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter())
    handler.addFilter(RequestIdFilter())
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    level_value: int | str = level
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        level_value = resolved if isinstance(resolved, int) else level.upper()
    root.setLevel(level_value)


def init_app(app: Flask) -> None:
    """Inject request-id middleware and a one-line access log per request."""

    app.logger.addFilter(RequestIdFilter())

    @app.before_request
    def _seed_request_id() -> None:
        ensure_request_id()
        g.request_started = time.perf_counter()

    @app.after_request
    def _inject_response_header(response):
        response.headers.setdefault(REQUEST_ID_HEADER, ensure_request_id())
        started = g.get("request_started")
        access_log.info(
            "request.completed",
            extra={
                "method": request.method,
                "path": request.path,
                "status": response.status_code,
                "elapsed_ms": (
                    round((time.perf_counter() - started) * 1000, 2) if started else None
                ),
            },
        )
        return response


__all__ = [
    "configure_logging",
    "init_app",
    "ensure_request_id",
    "JSONFormatter",
    "RequestIdFilter",
]
