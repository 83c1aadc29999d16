"""Translation of application exceptions into HTTP responses."""

import logging

import falcon
import falcon.asgi

from taskforge.domain.exceptions import (
    NotFound,
    PermissionDenied,
    RequestCancelled,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Client Closed Request; falcon has no constant for it
HTTP_499 = "499 Client Closed Request"


async def handle_validation_error(req, resp: falcon.asgi.Response, ex: ValidationError, params) -> None:
    resp.status = falcon.HTTP_400
    resp.media = {"title": str(ex), "errors": ex.errors}


async def handle_not_found(req, resp: falcon.asgi.Response, ex: NotFound, params) -> None:
    resp.status = falcon.HTTP_404
    resp.media = {"title": str(ex)}


async def handle_permission_denied(req, resp: falcon.asgi.Response, ex: PermissionDenied, params) -> None:
    resp.status = falcon.HTTP_403
    resp.media = {"title": "Forbidden"}


async def handle_cancelled(req, resp: falcon.asgi.Response, ex: RequestCancelled, params) -> None:
    resp.status = HTTP_499
    resp.media = {"title": "Request was cancelled"}


async def handle_unexpected(req, resp: falcon.asgi.Response, ex: Exception, params) -> None:
    # The pipeline already logged failures it saw; this catches everything else
    logger.error(
        "Unhandled %s on %s %s",
        type(ex).__name__,
        req.method,
        req.path,
        exc_info=(type(ex), ex, ex.__traceback__),
    )
    resp.status = falcon.HTTP_500
    resp.media = {"title": "500 Internal Server Error"}


def register_error_handlers(app: falcon.asgi.App) -> None:
    app.add_error_handler(Exception, handle_unexpected)
    app.add_error_handler(ValidationError, handle_validation_error)
    app.add_error_handler(NotFound, handle_not_found)
    app.add_error_handler(PermissionDenied, handle_permission_denied)
    app.add_error_handler(RequestCancelled, handle_cancelled)
