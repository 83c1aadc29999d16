"""Cooperative cancellation signal threaded through request processing."""

import asyncio

from taskforge.domain.exceptions import RequestCancelled


class CancellationToken:
    """Set once by the caller; checked by every stage at its suspension points."""

    def __init__(self) -> None:
        self._event = asyncio.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise RequestCancelled("Request was cancelled")
