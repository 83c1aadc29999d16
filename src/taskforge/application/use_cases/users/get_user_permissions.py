"""Get user permissions query."""

from dataclasses import dataclass
from uuid import UUID

from taskforge.application.authorization import PermissionResolver
from taskforge.application.pipeline import RequestContext
from taskforge.application.ports import UnitOfWorkFactory
from taskforge.domain.entities import Permission
from taskforge.domain.exceptions import NotFound


@dataclass
class GetUserPermissionsQuery:
    user_id: UUID


class GetUserPermissionsUseCase:
    """Effective permissions of an existing user, ordered by name."""

    def __init__(
        self, unit_of_work_factory: UnitOfWorkFactory, resolver: PermissionResolver
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._resolver = resolver

    async def execute(
        self, query: GetUserPermissionsQuery, context: RequestContext
    ) -> list[Permission]:
        async with self._uow_factory() as uow:
            if await uow.users.get_by_id(query.user_id) is None:
                raise NotFound("User", query.user_id)

        permissions = await self._resolver.get_effective_permissions(query.user_id, context.token)
        return sorted(permissions, key=lambda p: p.name)
