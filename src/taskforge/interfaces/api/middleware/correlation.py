"""Correlation id middleware - reuses the caller's id or issues a new one."""

from uuid import uuid4

import falcon.asgi

_MAX_LENGTH = 128


class CorrelationIdMiddleware:
    """Sets ``req.context.correlation_id`` and echoes it on the response."""

    def __init__(self, header: str = "X-Correlation-ID") -> None:
        self._header = header

    async def process_request(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        incoming = (req.get_header(self._header) or "").strip()
        if not incoming or len(incoming) > _MAX_LENGTH or not incoming.isprintable():
            incoming = str(uuid4())
        req.context.correlation_id = incoming

    async def process_response(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, resource, req_succeeded: bool
    ) -> None:
        correlation_id = getattr(req.context, "correlation_id", None)
        if correlation_id:
            resp.set_header(self._header, correlation_id)
