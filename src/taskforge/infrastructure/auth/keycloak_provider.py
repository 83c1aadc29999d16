"""Keycloak OIDC provider for bearer token introspection."""

import logging
from dataclasses import dataclass, field

from keycloak import KeycloakOpenID
from keycloak.exceptions import KeycloakError

from taskforge.domain.value_objects import SystemRole

logger = logging.getLogger(__name__)

# Highest-privilege realm role wins when a token carries several
_ROLE_PRECEDENCE = (SystemRole.ADMIN, SystemRole.MANAGER, SystemRole.DEVELOPER)


@dataclass
class OIDCUser:
    """Authenticated user from an OIDC token."""

    user_id: str
    email: str | None
    username: str | None
    realm_roles: list[str] = field(default_factory=list)

    @property
    def system_role(self) -> SystemRole | None:
        roles = {role.lower() for role in self.realm_roles}
        for candidate in _ROLE_PRECEDENCE:
            if candidate.value.lower() in roles:
                return candidate
        return None


class KeycloakProvider:
    """Keycloak OIDC - validates tokens and extracts user info."""

    def __init__(
        self,
        server_url: str,
        realm: str,
        client_id: str,
        client_secret: str = "",
    ) -> None:
        self._keycloak = KeycloakOpenID(
            server_url=server_url,
            realm_name=realm,
            client_id=client_id,
            client_secret_key=client_secret,
        )

    async def decode_token(self, token: str) -> OIDCUser | None:
        """Introspect ``token``; None when it is inactive or Keycloak rejects it."""
        try:
            token_info = await self._keycloak.a_introspect(token)
        except KeycloakError as exc:
            logger.warning("Token introspection failed: %s", exc)
            return None
        if not token_info.get("active"):
            return None
        return OIDCUser(
            user_id=token_info.get("sub", ""),
            email=token_info.get("email"),
            username=token_info.get("preferred_username"),
            realm_roles=token_info.get("realm_access", {}).get("roles", []),
        )
