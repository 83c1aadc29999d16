"""Declarative validators with synchronous and asynchronous rules.

A validator declares one rule chain per field. Every check in every chain
runs; failures are collected rather than raised, so a single pass reports
all problems with a request.
"""

from __future__ import annotations

import asyncio
import inspect
import re
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from taskforge.application.cancellation import CancellationToken

RequestT = TypeVar("RequestT")

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

Check = Callable[[Any, Any, CancellationToken], bool | Awaitable[bool]]


@dataclass(frozen=True)
class ValidationFailure:
    """One failed check on one field."""

    field: str
    message: str


def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def display_name(field: str) -> str:
    """``parent_role_id`` -> ``Parent role id``."""
    return field.replace("_", " ").capitalize()


class RuleChain:
    """Ordered checks on a single request attribute."""

    def __init__(self, field: str, getter: Callable[[Any], Any] | None = None) -> None:
        self.field = field
        self._getter = getter or (lambda request: getattr(request, field, None))
        self._checks: list[tuple[Check, str]] = []

    def _add(self, check: Check, message: str) -> RuleChain:
        self._checks.append((check, message))
        return self

    def not_null(self, message: str = "{field} cannot be null") -> RuleChain:
        return self._add(lambda value, request, token: value is not None, message)

    def not_empty(self, message: str = "{field} cannot be empty") -> RuleChain:
        return self._add(lambda value, request, token: not _blank(value), message)

    def min_length(self, length: int, message: str | None = None) -> RuleChain:
        return self._add(
            lambda value, request, token: not value or len(value) >= length,
            message or f"{{field}} must be at least {length} characters long",
        )

    def max_length(self, length: int, message: str | None = None) -> RuleChain:
        return self._add(
            lambda value, request, token: not value or len(value) <= length,
            message or f"{{field}} must not exceed {length} characters",
        )

    def matches(self, pattern: str | re.Pattern[str], message: str) -> RuleChain:
        regex = re.compile(pattern) if isinstance(pattern, str) else pattern
        return self._add(
            lambda value, request, token: not value or regex.search(value) is not None,
            message,
        )

    def email(self, message: str = "{field} is not a valid email address") -> RuleChain:
        return self.matches(EMAIL_PATTERN, message)

    def must(self, predicate: Callable[[Any], bool], message: str) -> RuleChain:
        return self._add(lambda value, request, token: predicate(value), message)

    def must_with_request(self, predicate: Callable[[Any, Any], bool], message: str) -> RuleChain:
        return self._add(lambda value, request, token: predicate(value, request), message)

    def must_async(
        self,
        predicate: Callable[[Any, CancellationToken], Awaitable[bool]],
        message: str,
    ) -> RuleChain:
        return self._add(lambda value, request, token: predicate(value, token), message)

    def must_async_with_request(
        self,
        predicate: Callable[[Any, Any, CancellationToken], Awaitable[bool]],
        message: str,
    ) -> RuleChain:
        return self._add(predicate, message)

    async def run(self, request: Any, token: CancellationToken) -> list[ValidationFailure]:
        value = self._getter(request)
        failures: list[ValidationFailure] = []
        for check, message in self._checks:
            token.raise_if_cancelled()
            passed = check(value, request, token)
            if inspect.isawaitable(passed):
                passed = await passed
                token.raise_if_cancelled()
            if not passed:
                failures.append(
                    ValidationFailure(self.field, message.format(field=display_name(self.field)))
                )
        return failures


class Validator(Generic[RequestT]):
    """Base class: declare chains with ``rule_for`` in ``__init__``."""

    def __init__(self) -> None:
        self._chains: list[RuleChain] = []

    def rule_for(self, field: str, getter: Callable[[Any], Any] | None = None) -> RuleChain:
        chain = RuleChain(field, getter)
        self._chains.append(chain)
        return chain

    async def validate(
        self, request: RequestT, token: CancellationToken | None = None
    ) -> list[ValidationFailure]:
        """Run every chain; chains for different fields run concurrently."""
        token = token or CancellationToken()
        results = await gather_or_cancel(chain.run(request, token) for chain in self._chains)
        return [failure for failures in results for failure in failures]


async def gather_or_cancel(coroutines) -> list[Any]:
    """``asyncio.gather`` that cancels the remaining work when one coroutine fails."""
    tasks = [asyncio.ensure_future(coro) for coro in coroutines]
    try:
        return await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            task.cancel()
        raise


def group_failures(failures: list[ValidationFailure]) -> dict[str, list[str]]:
    """Field name -> messages, preserving the order failures were reported."""
    errors: dict[str, list[str]] = {}
    for failure in failures:
        errors.setdefault(failure.field, []).append(failure.message)
    return errors
