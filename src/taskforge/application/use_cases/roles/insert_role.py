"""Insert role use case."""

import logging
from dataclasses import dataclass
from uuid import UUID, uuid4

from taskforge.application.cancellation import CancellationToken
from taskforge.application.pipeline import RequestContext
from taskforge.application.ports import UnitOfWorkFactory
from taskforge.application.validation import Validator
from taskforge.domain.entities import Role
from taskforge.domain.exceptions import NotFound
from taskforge.domain.services import ensure_acyclic

logger = logging.getLogger(__name__)


@dataclass
class InsertRoleCommand:
    name: str
    parent_role_id: UUID | None = None


class InsertRoleValidator(Validator[InsertRoleCommand]):
    def __init__(self, unit_of_work_factory: UnitOfWorkFactory) -> None:
        super().__init__()
        self._uow_factory = unit_of_work_factory
        (
            self.rule_for("name")
            .not_empty("Role name is required")
            .max_length(50)
            .must_async(self._name_available, "A role with this name already exists")
        )
        self.rule_for("parent_role_id").must_async(
            self._parent_exists, "Parent role does not exist"
        )

    async def _name_available(self, name: str | None, token: CancellationToken) -> bool:
        if not name:
            return True
        async with self._uow_factory() as uow:
            token.raise_if_cancelled()
            return not await uow.roles.get_where(name=name)

    async def _parent_exists(self, parent_role_id: UUID | None, token: CancellationToken) -> bool:
        if parent_role_id is None:
            return True
        async with self._uow_factory() as uow:
            token.raise_if_cancelled()
            return await uow.roles.get_by_id(parent_role_id) is not None


class InsertRoleUseCase:
    def __init__(self, unit_of_work_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, command: InsertRoleCommand, context: RequestContext) -> UUID:
        role = Role(id=uuid4(), name=command.name, parent_role_id=command.parent_role_id)
        async with self._uow_factory() as uow:
            if role.parent_role_id is not None:
                roles = {r.id: r for r in await uow.roles.get_where()}
                if role.parent_role_id not in roles:
                    raise NotFound("Role", role.parent_role_id)
                ensure_acyclic(role.id, role.parent_role_id, roles)
            context.token.raise_if_cancelled()
            await uow.roles.insert(role)
            await uow.save_changes()

        logger.info("Created role %s (%s)", role.name, role.id)
        return role.id
