"""Per-request processing state."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any
from uuid import uuid4

from taskforge.application.authorization.principal import Principal
from taskforge.application.cancellation import CancellationToken


class RequestState(StrEnum):
    RECEIVED = "Received"
    SANITIZING = "Sanitizing"
    VALIDATING = "Validating"
    REJECTED = "Rejected"
    DISPATCHING = "Dispatching"
    COMPLETED = "Completed"
    FAULTED = "Faulted"


TERMINAL_STATES = frozenset({RequestState.REJECTED, RequestState.COMPLETED, RequestState.FAULTED})

_TRANSITIONS: dict[RequestState, frozenset[RequestState]] = {
    RequestState.RECEIVED: frozenset(
        {RequestState.SANITIZING, RequestState.VALIDATING, RequestState.DISPATCHING, RequestState.FAULTED}
    ),
    RequestState.SANITIZING: frozenset(
        {RequestState.VALIDATING, RequestState.DISPATCHING, RequestState.FAULTED}
    ),
    RequestState.VALIDATING: frozenset(
        {RequestState.REJECTED, RequestState.DISPATCHING, RequestState.FAULTED}
    ),
    RequestState.DISPATCHING: frozenset({RequestState.COMPLETED, RequestState.FAULTED}),
    RequestState.REJECTED: frozenset(),
    RequestState.COMPLETED: frozenset(),
    RequestState.FAULTED: frozenset(),
}


class InvalidStateTransition(RuntimeError):
    """A request tried to move backwards or out of a terminal state."""

    def __init__(self, current: RequestState, target: RequestState) -> None:
        self.current = current
        self.target = target
        super().__init__(f"Cannot move request from {current} to {target}")


@dataclass
class RequestContext:
    """Everything a behavior or handler needs about the request being processed."""

    request: Any
    principal: Principal = field(default_factory=Principal.anonymous)
    token: CancellationToken = field(default_factory=CancellationToken)
    correlation_id: str = field(default_factory=lambda: str(uuid4()))
    state: RequestState = RequestState.RECEIVED
    history: list[RequestState] = field(default_factory=lambda: [RequestState.RECEIVED])

    @property
    def request_type(self) -> str:
        return type(self.request).__name__

    @property
    def is_terminal(self) -> bool:
        return self.state in TERMINAL_STATES

    def advance(self, target: RequestState) -> None:
        if target not in _TRANSITIONS[self.state]:
            raise InvalidStateTransition(self.state, target)
        self.state = target
        self.history.append(target)
