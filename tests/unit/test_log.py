"""Unit tests for logging helpers."""

import json
import logging
from dataclasses import dataclass
from uuid import uuid4

from taskforge.config import Settings
from taskforge.log import (
    CorrelationIdFilter,
    JsonFormatter,
    configure_logging,
    correlation_scope,
    current_correlation_id,
    request_snapshot,
)


@dataclass
class Inner:
    value: str


@dataclass
class Outer:
    name: str
    password: str
    inner: Inner
    items: list


def test_snapshot_redacts_and_recurses() -> None:
    snapshot = request_snapshot(
        Outer(name="Ada", password="hunter2", inner=Inner("x"), items=[1, "a"]),
        redact=lambda request_type: {"password"} if request_type is Outer else (),
    )
    assert snapshot == {
        "name": "Ada",
        "password": "[REDACTED]",
        "inner": {"value": "x"},
        "items": [1, "a"],
    }


def test_snapshot_redacts_by_nested_type() -> None:
    @dataclass
    class Login:
        password: str
        inner: Inner

    @dataclass
    class Wrapper:
        value: str
        login: Login

    hidden = {Login: {"password"}, Inner: {"value"}}
    snapshot = request_snapshot(
        Wrapper(value="shown", login=Login(password="hunter2", inner=Inner("also hidden"))),
        redact=lambda request_type: hidden.get(request_type, ()),
    )
    assert snapshot == {
        "value": "shown",
        "login": {"password": "[REDACTED]", "inner": {"value": "[REDACTED]"}},
    }


def test_snapshot_truncates_long_strings() -> None:
    snapshot = request_snapshot(Inner("y" * 500), limit=10)
    assert len(snapshot["value"]) == 10
    assert snapshot["value"].endswith("…")


def test_snapshot_of_non_dataclass() -> None:
    key = uuid4()
    assert request_snapshot(key) == {"value": str(key)}


def test_correlation_scope_binds_and_resets() -> None:
    assert current_correlation_id() is None
    with correlation_scope("abc"):
        assert current_correlation_id() == "abc"
    assert current_correlation_id() is None


def test_filter_attaches_correlation_id() -> None:
    record = logging.LogRecord("t", logging.INFO, __file__, 1, "msg", (), None)
    with correlation_scope("req-7"):
        CorrelationIdFilter().filter(record)
    assert record.correlation_id == "req-7"


def test_json_formatter_includes_structured_fields() -> None:
    record = logging.LogRecord("t", logging.WARNING, __file__, 1, "failed %s", ("x",), None)
    record.correlation_id = "req-1"
    record.request_type = "InsertUserCommand"
    payload = json.loads(JsonFormatter().format(record))
    assert payload["message"] == "failed x"
    assert payload["level"] == "WARNING"
    assert payload["correlation_id"] == "req-1"
    assert payload["request_type"] == "InsertUserCommand"


def test_configure_logging_installs_single_handler() -> None:
    root = logging.getLogger()
    previous_handlers, previous_level = root.handlers[:], root.level
    try:
        configure_logging(Settings(log_level="debug", log_json=False))
        configure_logging(Settings(log_level="debug", log_json=True))
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JsonFormatter)
        assert root.level == logging.DEBUG
    finally:
        root.handlers[:] = previous_handlers
        root.setLevel(previous_level)
