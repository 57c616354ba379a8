"""JSON logging for the closet service.

Every record is one JSON object carrying the service name, the event and the
correlation id of the request or CLI command that produced it. Structured
fields attached through ``log_event`` pass through :func:`redact_for_log`
so owner ids, brands and photo paths never reach the log sink.
"""

from __future__ import annotations

import contextlib
import contextvars
import json
import logging
import os
import re
import time
import uuid
from typing import Any, Dict, Iterator

SERVICE_NAME = "closet-harmony"

CORRELATION_ID: contextvars.ContextVar[str | None] = contextvars.ContextVar("correlation_id", default=None)

_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime", "taskName"}
_REDACTED_FIELDS = frozenset({"user_id", "email", "brand", "image_url"})
_EMAIL_PATTERN = re.compile(r"[\w.\-]+@[\w.\-]+")


class JsonFormatter(logging.Formatter):
    """Render a log record as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        message = record.getMessage()
        payload: Dict[str, Any] = {
            "timestamp": self.formatTime(record, datefmt="%Y-%m-%dT%H:%M:%S%z"),
            "level": record.levelname,
            "logger": record.name,
            "service": SERVICE_NAME,
            "event": getattr(record, "event", message),
            "correlation_id": getattr(record, "correlation_id", None) or CORRELATION_ID.get(),
        }
        if message != payload["event"]:
            payload["message"] = message
        for key, value in vars(record).items():
            if key not in _RECORD_ATTRS and key not in payload:
                payload[key] = redact_for_log(value)
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def configure_logging(level: int | str | None = None) -> None:
    """Route the root logger through :class:`JsonFormatter` on stderr."""

    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    logging.basicConfig(level=level or os.getenv("LOG_LEVEL", "INFO"), handlers=[handler], force=True)


def get_logger(name: str) -> logging.Logger:
    if not logging.getLogger().handlers:
        configure_logging()
    return logging.getLogger(name)


def redact_for_log(payload: Any) -> Any:
    """Scrub owner and purchase details from a log payload."""

    if isinstance(payload, dict):
        return {
            key: "[redacted]" if key in _REDACTED_FIELDS else redact_for_log(value)
            for key, value in payload.items()
        }
    if isinstance(payload, (list, tuple, set)):
        return [redact_for_log(value) for value in payload]
    if isinstance(payload, str):
        if payload.lower().startswith(("http://", "https://")):
            return "[redacted-url]"
        return _EMAIL_PATTERN.sub("[redacted-email]", payload)
    if payload is None or isinstance(payload, (bool, int, float)):
        return payload
    return str(payload)


def current_correlation_id() -> str:
    """Return the active correlation id, assigning one if none is set."""

    correlation_id = CORRELATION_ID.get()
    if correlation_id is None:
        correlation_id = uuid.uuid4().hex
        CORRELATION_ID.set(correlation_id)
    return correlation_id


@contextlib.contextmanager
def correlation_context(correlation_id: str | None = None) -> Iterator[str]:
    """Scope a correlation id, restoring the previous one on exit."""

    token = CORRELATION_ID.set(correlation_id or uuid.uuid4().hex)
    try:
        yield CORRELATION_ID.get()
    finally:
        CORRELATION_ID.reset(token)


def log_event(logger: logging.Logger, level: int, event: str, **fields: Any) -> None:
    """Emit ``event`` with redacted structured fields."""

    exc_info = fields.pop("exc_info", None)
    logger.log(
        level,
        event,
        exc_info=exc_info,
        extra={"event": event, "correlation_id": current_correlation_id(), **redact_for_log(fields)},
    )


@contextlib.contextmanager
def operation_context(name: str, logger: logging.Logger, **fields: Any) -> Iterator[str]:
    """Run a CLI command or job under its own correlation id and log its duration."""

    with correlation_context() as correlation_id:
        start = time.perf_counter()
        try:
            yield correlation_id
        finally:
            duration_ms = round((time.perf_counter() - start) * 1000, 2)
            log_event(logger, logging.INFO, f"{name}_finished", duration_ms=duration_ms, **fields)


__all__ = [
    "CORRELATION_ID",
    "JsonFormatter",
    "SERVICE_NAME",
    "configure_logging",
    "correlation_context",
    "current_correlation_id",
    "get_logger",
    "log_event",
    "operation_context",
    "redact_for_log",
]
