"""Request pipeline: a fixed chain of behaviors around one handler per request type."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping, Sequence
from typing import Any, Protocol
from uuid import uuid4

from taskforge.application.authorization.principal import Principal
from taskforge.application.cancellation import CancellationToken
from taskforge.application.pipeline.context import RequestContext, RequestState
from taskforge.application.pipeline.exception_capture import ExceptionCaptureBehavior
from taskforge.application.pipeline.sanitization import (
    SanitizationBehavior,
    SanitizationPolicy,
    Sanitizer,
)
from taskforge.application.pipeline.validation import ValidationBehavior
from taskforge.application.validation.rules import Validator
from taskforge.log import correlation_scope

Next = Callable[[RequestContext], Awaitable[Any]]


class Behavior(Protocol):
    """One stage of the chain. Calls ``call_next`` to continue, or raises to stop."""

    async def handle(self, context: RequestContext, call_next: Next) -> Any:
        ...


class Handler(Protocol):
    """Business operation for one request type."""

    async def execute(self, command: Any, context: RequestContext) -> Any:
        ...


class NoHandlerRegistered(LookupError):
    pass


def default_behaviors(
    policy: SanitizationPolicy | None = None,
    validators: Mapping[type, Sequence[Validator]] | None = None,
) -> list[Behavior]:
    """Exception capture, sanitization, validation; outermost first."""
    policy = policy or SanitizationPolicy()
    return [
        ExceptionCaptureBehavior(policy),
        SanitizationBehavior(Sanitizer(policy)),
        ValidationBehavior(validators),
    ]


class RequestPipeline:
    """Dispatches requests through ``behaviors`` in list order to their handler."""

    def __init__(self, behaviors: Sequence[Behavior], handlers: Mapping[type, Handler]) -> None:
        self._behaviors = tuple(behaviors)
        self._handlers = dict(handlers)

    async def send(
        self,
        request: Any,
        principal: Principal | None = None,
        token: CancellationToken | None = None,
        correlation_id: str | None = None,
    ) -> Any:
        context = RequestContext(
            request=request,
            principal=principal or Principal.anonymous(),
            token=token or CancellationToken(),
            correlation_id=correlation_id or str(uuid4()),
        )
        return await self.run(context)

    async def run(self, context: RequestContext) -> Any:
        """Dispatch with a caller-built context; the caller can inspect its state afterwards."""
        handler = self._handlers.get(type(context.request))
        if handler is None:
            raise NoHandlerRegistered(f"No handler registered for {context.request_type}")
        with correlation_scope(context.correlation_id):
            try:
                return await self._compose(handler)(context)
            except BaseException:
                if not context.is_terminal:
                    context.advance(RequestState.FAULTED)
                raise

    def _compose(self, handler: Handler) -> Next:
        async def dispatch(context: RequestContext) -> Any:
            context.token.raise_if_cancelled()
            context.advance(RequestState.DISPATCHING)
            result = await handler.execute(context.request, context)
            context.advance(RequestState.COMPLETED)
            return result

        call: Next = dispatch
        for behavior in reversed(self._behaviors):
            call = _bind(behavior, call)
        return call


def _bind(behavior: Behavior, call_next: Next) -> Next:
    async def call(context: RequestContext) -> Any:
        return await behavior.handle(context, call_next)

    return call
