"""Request helpers shared by resources."""

from typing import Any
from uuid import UUID

import falcon
import falcon.asgi

from taskforge.application.authorization import AuthorizationService, Decision, Principal
from taskforge.domain.exceptions import PermissionDenied, ValidationError


def authenticated_principal(req: falcon.asgi.Request) -> Principal:
    """The caller's principal; 401 when the caller is anonymous or the token was rejected."""
    principal = getattr(req.context, "principal", None)
    if principal is None or not principal.user_id_claim:
        raise falcon.HTTPUnauthorized(title="Unauthorized")
    return principal


def request_principal(req: falcon.asgi.Request) -> Principal:
    """The caller's principal, anonymous allowed; 401 only for rejected tokens."""
    principal = getattr(req.context, "principal", None)
    if principal is None:
        raise falcon.HTTPUnauthorized(title="Unauthorized")
    return principal


async def require_policy(
    authorization: AuthorizationService, principal: Principal, *policies: str
) -> None:
    """Pass when any of ``policies`` allows ``principal``."""
    for policy in policies:
        if await authorization.authorize_policy(principal, policy) == Decision.ALLOW:
            return
    raise PermissionDenied(f"Requires {' or '.join(policies)}")


def path_uuid(value: str, name: str = "id") -> UUID:
    try:
        return UUID(value)
    except ValueError:
        raise falcon.HTTPBadRequest(title=f"Invalid {name}") from None


def body_uuid(body: dict[str, Any], key: str) -> UUID | None:
    """UUID from a JSON body; missing is None so validators can report it."""
    value = body.get(key)
    if value is None:
        return None
    try:
        return UUID(str(value))
    except ValueError:
        raise ValidationError({key: [f"'{value}' is not a valid id"]}) from None


def body_str(body: dict[str, Any], key: str) -> str | None:
    value = body.get(key)
    return value if value is None or isinstance(value, str) else str(value)


async def json_body(req: falcon.asgi.Request) -> dict[str, Any]:
    body = await req.get_media(default_when_empty={})
    if not isinstance(body, dict):
        raise falcon.HTTPBadRequest(title="Request body must be a JSON object")
    return body
