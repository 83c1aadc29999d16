"""Auth middleware - turns a bearer token into a Principal."""

import logging

import falcon.asgi

from taskforge.application.authorization import Principal

logger = logging.getLogger(__name__)


class AuthMiddleware:
    """Sets ``req.context.principal``.

    No Authorization header gives an anonymous principal; a token Keycloak does
    not accept gives None, which resources answer with 401.
    """

    def __init__(self, keycloak_provider=None) -> None:
        self._keycloak = keycloak_provider

    async def process_request(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        auth = req.get_header("Authorization")
        if not auth:
            req.context.principal = Principal.anonymous()
            return
        if not auth.startswith("Bearer ") or self._keycloak is None:
            req.context.principal = None
            return

        user = await self._keycloak.decode_token(auth[7:])
        if user is None:
            logger.info("Rejected bearer token")
            req.context.principal = None
            return
        role = user.system_role
        req.context.principal = Principal(
            user_id_claim=user.user_id,
            role_claim=role.value if role else None,
            email=user.email,
            username=user.username,
        )
