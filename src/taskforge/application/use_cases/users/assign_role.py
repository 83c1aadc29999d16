"""Assign role to user use case."""

from dataclasses import dataclass
from uuid import UUID, uuid4

from taskforge.application.cancellation import CancellationToken
from taskforge.application.pipeline import RequestContext
from taskforge.application.ports import UnitOfWorkFactory
from taskforge.application.validation import Validator
from taskforge.domain.entities import UserRole


@dataclass
class AssignRoleCommand:
    user_id: UUID
    role_id: UUID


class AssignRoleValidator(Validator[AssignRoleCommand]):
    """Both sides must exist and the user must not already hold the role."""

    def __init__(self, unit_of_work_factory: UnitOfWorkFactory) -> None:
        super().__init__()
        self._uow_factory = unit_of_work_factory
        (
            self.rule_for("user_id")
            .not_null("User id is required")
            .must_async(self._user_exists, "User does not exist")
        )
        (
            self.rule_for("role_id")
            .not_null("Role id is required")
            .must_async(self._role_exists, "Role does not exist")
            .must_async_with_request(self._not_assigned, "User already has this role")
        )

    async def _user_exists(self, user_id: UUID | None, token: CancellationToken) -> bool:
        if user_id is None:
            return True
        async with self._uow_factory() as uow:
            token.raise_if_cancelled()
            return await uow.users.get_by_id(user_id) is not None

    async def _role_exists(self, role_id: UUID | None, token: CancellationToken) -> bool:
        if role_id is None:
            return True
        async with self._uow_factory() as uow:
            token.raise_if_cancelled()
            return await uow.roles.get_by_id(role_id) is not None

    async def _not_assigned(
        self, role_id: UUID | None, command: AssignRoleCommand, token: CancellationToken
    ) -> bool:
        if role_id is None or command.user_id is None:
            return True
        async with self._uow_factory() as uow:
            token.raise_if_cancelled()
            return not await uow.user_roles.get_where(user_id=command.user_id, role_id=role_id)


class AssignRoleUseCase:
    def __init__(self, unit_of_work_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, command: AssignRoleCommand, context: RequestContext) -> UUID:
        user_role = UserRole(id=uuid4(), user_id=command.user_id, role_id=command.role_id)
        async with self._uow_factory() as uow:
            context.token.raise_if_cancelled()
            await uow.user_roles.insert(user_role)
            await uow.save_changes()
        return user_role.id
