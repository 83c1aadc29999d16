"""Logging setup, correlation ids and request snapshots."""

from __future__ import annotations

import dataclasses
import json
import logging
import sys
from collections.abc import Callable, Collection, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import UTC, datetime
from enum import Enum
from typing import Any
from uuid import UUID

from taskforge.config import Settings

REDACTED = "[REDACTED]"
RedactedFields = Callable[[type], Collection[str]]

_correlation_id: ContextVar[str | None] = ContextVar("correlation_id", default=None)


def current_correlation_id() -> str | None:
    """Correlation id bound to the running request, if any."""
    return _correlation_id.get()


@contextmanager
def correlation_scope(correlation_id: str) -> Iterator[str]:
    """Bind ``correlation_id`` for log records emitted inside the block."""
    token = _correlation_id.set(correlation_id)
    try:
        yield correlation_id
    finally:
        _correlation_id.reset(token)


class CorrelationIdFilter(logging.Filter):
    """Attach the current correlation id to every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, "correlation_id", None):
            record.correlation_id = current_correlation_id() or "-"
        return True


class JsonFormatter(logging.Formatter):
    """One JSON object per line. Structured ``extra`` keys listed in ``fields`` are included."""

    fields = ("correlation_id", "request_type", "request")

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for name in self.fields:
            value = getattr(record, name, None)
            if value is not None:
                payload[name] = value
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str, ensure_ascii=False)


def configure_logging(settings: Settings) -> None:
    """Install a single stderr handler on the root logger."""
    handler = logging.StreamHandler(sys.stderr)
    handler.addFilter(CorrelationIdFilter())
    if settings.log_json:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s %(levelname)s [%(correlation_id)s] %(name)s: %(message)s"
            )
        )
    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(settings.log_level.upper())


def _nothing_redacted(request_type: type) -> Collection[str]:
    return ()


def _snapshot_value(value: Any, redact: RedactedFields, limit: int) -> Any:
    if value is None or isinstance(value, (bool, int, float)):
        return value
    if isinstance(value, str):
        return value if len(value) <= limit else value[: limit - 1] + "…"
    if isinstance(value, (UUID, datetime)):
        return str(value)
    if isinstance(value, Enum):
        return value.value
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return request_snapshot(value, redact, limit)
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_snapshot_value(item, redact, limit) for item in value]
    if isinstance(value, dict):
        return {str(k): _snapshot_value(v, redact, limit) for k, v in value.items()}
    return repr(value)


def request_snapshot(
    request: Any, redact: RedactedFields | None = None, limit: int = 240
) -> dict[str, Any]:
    """JSON-safe view of a request dataclass for logging.

    ``redact`` maps each dataclass type, nested ones included, to the field
    names replaced by ``[REDACTED]``.
    """
    redact = redact or _nothing_redacted
    if not dataclasses.is_dataclass(request) or isinstance(request, type):
        return {"value": _snapshot_value(request, redact, limit)}
    hidden = redact(type(request))
    snapshot: dict[str, Any] = {}
    for field in dataclasses.fields(request):
        if field.name in hidden:
            snapshot[field.name] = REDACTED
            continue
        snapshot[field.name] = _snapshot_value(getattr(request, field.name), redact, limit)
    return snapshot
