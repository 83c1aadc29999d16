"""Update role use case."""

from dataclasses import dataclass
from uuid import UUID

from taskforge.application.cancellation import CancellationToken
from taskforge.application.pipeline import RequestContext
from taskforge.application.ports import UnitOfWorkFactory
from taskforge.application.validation import Validator
from taskforge.domain.exceptions import NotFound
from taskforge.domain.services import ensure_acyclic, find_cycle


@dataclass
class UpdateRoleCommand:
    id: UUID
    name: str
    parent_role_id: UUID | None = None


class UpdateRoleValidator(Validator[UpdateRoleCommand]):
    def __init__(self, unit_of_work_factory: UnitOfWorkFactory) -> None:
        super().__init__()
        self._uow_factory = unit_of_work_factory
        self.rule_for("id").not_null("Role id is required")
        (
            self.rule_for("name")
            .not_empty("Role name is required")
            .max_length(50)
            .must_async_with_request(self._name_available, "A role with this name already exists")
        )
        (
            self.rule_for("parent_role_id")
            .must_with_request(
                lambda parent_id, command: parent_id is None or parent_id != command.id,
                "A role cannot be its own parent",
            )
            .must_async(self._parent_exists, "Parent role does not exist")
            .must_async_with_request(
                self._keeps_hierarchy_acyclic, "Role hierarchy must not contain cycles"
            )
        )

    async def _name_available(
        self, name: str | None, command: UpdateRoleCommand, token: CancellationToken
    ) -> bool:
        if not name:
            return True
        async with self._uow_factory() as uow:
            token.raise_if_cancelled()
            roles = await uow.roles.get_where(name=name)
        return all(role.id == command.id for role in roles)

    async def _keeps_hierarchy_acyclic(
        self, parent_role_id: UUID | None, command: UpdateRoleCommand, token: CancellationToken
    ) -> bool:
        if parent_role_id is None or parent_role_id == command.id:
            return True
        async with self._uow_factory() as uow:
            token.raise_if_cancelled()
            roles = {role.id: role for role in await uow.roles.get_where()}
        return find_cycle(command.id, parent_role_id, roles) is None

    async def _parent_exists(self, parent_role_id: UUID | None, token: CancellationToken) -> bool:
        if parent_role_id is None:
            return True
        async with self._uow_factory() as uow:
            token.raise_if_cancelled()
            return await uow.roles.get_by_id(parent_role_id) is not None


class UpdateRoleUseCase:
    """Rename a role or move it in the hierarchy; cycles are rejected."""

    def __init__(self, unit_of_work_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, command: UpdateRoleCommand, context: RequestContext) -> None:
        async with self._uow_factory() as uow:
            role = await uow.roles.get_by_id(command.id)
            if role is None:
                raise NotFound("Role", command.id)

            # a concurrent update may have closed a loop since validation
            if command.parent_role_id is not None:
                roles = {r.id: r for r in await uow.roles.get_where()}
                ensure_acyclic(role.id, command.parent_role_id, roles)

            role.name = command.name
            role.parent_role_id = command.parent_role_id
            context.token.raise_if_cancelled()
            await uow.roles.update(role)
            await uow.save_changes()
