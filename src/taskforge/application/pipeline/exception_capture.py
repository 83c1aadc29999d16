"""Outermost pipeline stage: log failures with request context, then re-raise."""

from __future__ import annotations

import logging

from taskforge.application.pipeline.context import RequestContext
from taskforge.application.pipeline.sanitization import SanitizationPolicy
from taskforge.domain.exceptions import TaskforgeError
from taskforge.log import request_snapshot

logger = logging.getLogger(__name__)


class ExceptionCaptureBehavior:
    """Never swallows: every exception is logged and propagated unchanged.

    Expected failures (``TaskforgeError``) are logged at warning level, anything
    else with a traceback. Fields exempt from sanitization are redacted from the
    logged snapshot.
    """

    def __init__(self, policy: SanitizationPolicy | None = None) -> None:
        self._policy = policy or SanitizationPolicy()

    async def handle(self, context: RequestContext, call_next):
        try:
            return await call_next(context)
        except TaskforgeError as exc:
            logger.warning(
                "%s failed: %s",
                context.request_type,
                exc,
                extra=self._extra(context),
            )
            raise
        except Exception:
            logger.exception(
                "Unhandled exception for request %s",
                context.request_type,
                extra=self._extra(context),
            )
            raise

    def _extra(self, context: RequestContext) -> dict:
        return {
            "request_type": context.request_type,
            "request": request_snapshot(context.request, redact=self._policy.exempt_fields),
            "correlation_id": context.correlation_id,
        }
