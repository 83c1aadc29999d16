"""Validation stage of the request pipeline."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from taskforge.application.pipeline.context import RequestContext, RequestState
from taskforge.application.validation.rules import Validator, gather_or_cancel, group_failures
from taskforge.domain.exceptions import ValidationError

logger = logging.getLogger(__name__)


class ValidationBehavior:
    """Runs every validator registered for the request type and stops the chain on failure."""

    def __init__(self, validators: Mapping[type, Iterable[Validator]] | None = None) -> None:
        self._validators: dict[type, list[Validator]] = {
            request_type: list(items) for request_type, items in (validators or {}).items()
        }

    def validators_for(self, request_type: type) -> list[Validator]:
        return list(self._validators.get(request_type, ()))

    async def handle(self, context: RequestContext, call_next):
        context.token.raise_if_cancelled()
        context.advance(RequestState.VALIDATING)
        validators = self.validators_for(type(context.request))
        if validators:
            results = await gather_or_cancel(
                validator.validate(context.request, context.token) for validator in validators
            )
            context.token.raise_if_cancelled()
            errors = group_failures([failure for failures in results for failure in failures])
            if errors:
                context.advance(RequestState.REJECTED)
                logger.info(
                    "Validation rejected %s: %s",
                    context.request_type,
                    ", ".join(sorted(errors)),
                )
                raise ValidationError(errors)
        return await call_next(context)
