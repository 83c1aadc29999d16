"""Effective permission resolution from role assignments."""

import logging
from uuid import UUID

from taskforge.application.cancellation import CancellationToken
from taskforge.application.ports import UnitOfWorkFactory
from taskforge.domain.entities import Permission

logger = logging.getLogger(__name__)


class PermissionResolver:
    """Computes the permissions a user holds through directly assigned roles.

    Parent roles are not walked: a role's ancestors do not contribute their
    permissions. Unknown users resolve to the empty set; no existence check is
    made. Every call reads the store.
    """

    def __init__(self, unit_of_work_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = unit_of_work_factory

    async def get_effective_permissions(
        self, user_id: UUID, token: CancellationToken | None = None
    ) -> set[Permission]:
        """Return the distinct permissions granted to ``user_id``."""
        token = token or CancellationToken()
        async with self._uow_factory() as uow:
            token.raise_if_cancelled()
            user_roles = await uow.user_roles.get_where(user_id=user_id)
            role_ids = {ur.role_id for ur in user_roles}
            if not role_ids:
                return set()

            token.raise_if_cancelled()
            role_permissions = await uow.role_permissions.get_where(role_id=role_ids)
            permission_ids = {rp.permission_id for rp in role_permissions}
            if not permission_ids:
                return set()

            token.raise_if_cancelled()
            permissions = await uow.permissions.get_where(id=permission_ids)

        logger.debug(
            "Resolved %d permissions for user %s from %d roles",
            len(permissions),
            user_id,
            len(role_ids),
        )
        return set(permissions)
