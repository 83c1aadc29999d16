"""Delete user use case."""

import logging
from dataclasses import dataclass
from uuid import UUID

from taskforge.application.pipeline import RequestContext
from taskforge.application.ports import UnitOfWorkFactory
from taskforge.application.validation import Validator
from taskforge.domain.exceptions import NotFound

logger = logging.getLogger(__name__)


@dataclass
class DeleteUserCommand:
    id: UUID


class DeleteUserValidator(Validator[DeleteUserCommand]):
    def __init__(self) -> None:
        super().__init__()
        self.rule_for("id").not_null("User id is required")


class DeleteUserUseCase:
    """Delete a user together with their role assignments."""

    def __init__(self, unit_of_work_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, command: DeleteUserCommand, context: RequestContext) -> None:
        async with self._uow_factory() as uow:
            user = await uow.users.get_by_id(command.id)
            if user is None:
                raise NotFound("User", command.id)

            for user_role in await uow.user_roles.get_where(user_id=user.id):
                await uow.user_roles.delete(user_role)
            await uow.users.delete(user)

            context.token.raise_if_cancelled()
            await uow.save_changes()

        logger.info("Deleted user %s", command.id)
