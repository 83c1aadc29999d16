"""Assign permission to role use case."""

from dataclasses import dataclass
from uuid import UUID, uuid4

from taskforge.application.cancellation import CancellationToken
from taskforge.application.pipeline import RequestContext
from taskforge.application.ports import UnitOfWorkFactory
from taskforge.application.validation import Validator
from taskforge.domain.entities import RolePermission


@dataclass
class AssignPermissionCommand:
    role_id: UUID
    permission_id: UUID


class AssignPermissionValidator(Validator[AssignPermissionCommand]):
    """Both sides must exist and the role must not already have the permission."""

    def __init__(self, unit_of_work_factory: UnitOfWorkFactory) -> None:
        super().__init__()
        self._uow_factory = unit_of_work_factory
        (
            self.rule_for("role_id")
            .not_null("Role id is required")
            .must_async(self._role_exists, "Role does not exist")
        )
        (
            self.rule_for("permission_id")
            .not_null("Permission id is required")
            .must_async(self._permission_exists, "Permission does not exist")
            .must_async_with_request(self._not_assigned, "Role already has this permission")
        )

    async def _role_exists(self, role_id: UUID | None, token: CancellationToken) -> bool:
        if role_id is None:
            return True
        async with self._uow_factory() as uow:
            token.raise_if_cancelled()
            return await uow.roles.get_by_id(role_id) is not None

    async def _permission_exists(
        self, permission_id: UUID | None, token: CancellationToken
    ) -> bool:
        if permission_id is None:
            return True
        async with self._uow_factory() as uow:
            token.raise_if_cancelled()
            return await uow.permissions.get_by_id(permission_id) is not None

    async def _not_assigned(
        self,
        permission_id: UUID | None,
        command: AssignPermissionCommand,
        token: CancellationToken,
    ) -> bool:
        if permission_id is None or command.role_id is None:
            return True
        async with self._uow_factory() as uow:
            token.raise_if_cancelled()
            return not await uow.role_permissions.get_where(
                role_id=command.role_id, permission_id=permission_id
            )


class AssignPermissionUseCase:
    def __init__(self, unit_of_work_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, command: AssignPermissionCommand, context: RequestContext) -> UUID:
        role_permission = RolePermission(
            id=uuid4(), role_id=command.role_id, permission_id=command.permission_id
        )
        async with self._uow_factory() as uow:
            context.token.raise_if_cancelled()
            await uow.role_permissions.insert(role_permission)
            await uow.save_changes()
        return role_permission.id
