"""
Access logging for the catalog API.

One record per request, carrying the route template rather than the raw
path so that every ``/api/books/{book_id}`` call groups together, plus the
book id when the route has one. Records go through the standard
``logging`` module under ``libcatalog.api``; outside development they are
rendered as JSON lines by ``StructuredLogFormatter``.
"""

import json
import logging
import time
import uuid
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Callable, FrozenSet, Optional

from fastapi import FastAPI, Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

# Correlation id of the request being served
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

logger = logging.getLogger("libcatalog.api")


@dataclass
class LoggingConfig:
    """Access log settings."""

    enabled: bool = True

    # Include create/replace payloads in the record
    log_request_body: bool = False
    max_body_chars: int = 2000

    quiet_paths: FrozenSet[str] = frozenset({"/health", "/favicon.ico"})

    # Milliseconds
    slow_request_ms: float = 2000.0

    request_id_header: str = "X-Request-ID"

    extra_fields: tuple = ("request", "response", "duration_ms", "route", "book_id")


class StructuredLogFormatter(logging.Formatter):
    """Render records as single-line JSON objects."""

    def __init__(self, extra_fields: tuple = LoggingConfig.extra_fields):
        super().__init__()
        self.extra_fields = extra_fields

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if request_id_var.get():
            payload["request_id"] = request_id_var.get()

        payload.update(
            (name, getattr(record, name))
            for name in self.extra_fields
            if hasattr(record, name)
        )

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=str)


def get_request_id() -> str:
    return request_id_var.get()


def route_template(request: Request) -> str:
    """
    Full request path with each path parameter put back as ``{name}``.

    ``/api/books/3f2c...`` becomes ``/api/books/{book_id}`` whatever prefix
    the router is mounted under. Unmatched paths come back unchanged.
    """
    segments = request.url.path.split("/")
    for name, value in request.path_params.items():
        for i in range(len(segments) - 1, -1, -1):
            if segments[i] == str(value):
                segments[i] = "{" + name + "}"
                break
    return "/".join(segments)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Emit one access record per catalog request."""

    def __init__(self, app: FastAPI, config: Optional[LoggingConfig] = None):
        super().__init__(app)
        self.config = config or LoggingConfig()

    async def _body_for_log(self, request: Request) -> Optional[str]:
        if request.method not in ("POST", "PUT"):
            return None

        raw = await request.body()
        if not raw:
            return None

        text = raw.decode("utf-8", errors="replace")
        if len(text) > self.config.max_body_chars:
            return f"{text[:self.config.max_body_chars]}... ({len(raw)} bytes)"
        return text

    def _level_for(self, status_code: int, elapsed_ms: float) -> int:
        if status_code >= 500:
            return logging.ERROR
        if status_code >= 400 or elapsed_ms > self.config.slow_request_ms:
            return logging.WARNING
        return logging.INFO

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        header = self.config.request_id_header
        request_id = request.headers.get(header) or uuid.uuid4().hex[:8]
        request_id_var.set(request_id)

        if not self.config.enabled or request.url.path in self.config.quiet_paths:
            response = await call_next(request)
            response.headers[header] = request_id
            return response

        body = await self._body_for_log(request) if self.config.log_request_body else None

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = round((time.perf_counter() - started) * 1000, 2)

        response.headers[header] = request_id

        route = route_template(request)
        extra = {
            "route": route,
            "request": {"method": request.method, "path": request.url.path, "body": body},
            "response": {
                "status_code": response.status_code,
                "location": response.headers.get("location"),
            },
            "duration_ms": elapsed_ms,
        }
        book_id = request.path_params.get("book_id")
        if book_id is not None:
            extra["book_id"] = str(book_id)

        message = f"{request.method} {route} -> {response.status_code} in {elapsed_ms}ms"
        if elapsed_ms > self.config.slow_request_ms:
            message = f"[SLOW] {message}"

        logger.log(self._level_for(response.status_code, elapsed_ms), message, extra=extra)
        return response


def setup_logging(
    app: FastAPI,
    config: Optional[LoggingConfig] = None,
    structured: bool = True,
) -> None:
    """
    Install the access log middleware.

    With ``structured`` set, the ``libcatalog`` logger also gets a JSON
    handler (added once, however many apps are created).
    """
    config = config or LoggingConfig()

    if structured:
        root = logging.getLogger("libcatalog")
        if not any(isinstance(h.formatter, StructuredLogFormatter) for h in root.handlers):
            json_handler = logging.StreamHandler()
            json_handler.setFormatter(StructuredLogFormatter(config.extra_fields))
            root.addHandler(json_handler)
        root.setLevel(logging.INFO)

    app.add_middleware(RequestLoggingMiddleware, config=config)
