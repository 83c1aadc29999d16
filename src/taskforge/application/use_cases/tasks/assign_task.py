"""Assign task use case."""

import logging
from dataclasses import dataclass
from uuid import UUID

from taskforge.application.authorization import Decision, ResourceAuthorizationService
from taskforge.application.cancellation import CancellationToken
from taskforge.application.pipeline import RequestContext
from taskforge.application.ports import UnitOfWorkFactory
from taskforge.application.validation import Validator
from taskforge.domain.exceptions import NotFound, PermissionDenied
from taskforge.domain.value_objects import TaskOperation

logger = logging.getLogger(__name__)


@dataclass
class AssignTaskCommand:
    task_id: UUID
    assignee_id: UUID | None


class AssignTaskValidator(Validator[AssignTaskCommand]):
    def __init__(self, unit_of_work_factory: UnitOfWorkFactory) -> None:
        super().__init__()
        self._uow_factory = unit_of_work_factory
        self.rule_for("task_id").not_null("Task id is required")
        self.rule_for("assignee_id").must_async(self._assignee_exists, "Assignee does not exist")

    async def _assignee_exists(self, assignee_id: UUID | None, token: CancellationToken) -> bool:
        if assignee_id is None:
            return True
        async with self._uow_factory() as uow:
            token.raise_if_cancelled()
            return await uow.users.get_by_id(assignee_id) is not None


class AssignTaskUseCase:
    """Assign (or with ``assignee_id=None`` unassign) a task.

    The caller must satisfy the Task ``Assign`` requirement for the task.
    """

    def __init__(
        self,
        unit_of_work_factory: UnitOfWorkFactory,
        resource_authorization: ResourceAuthorizationService,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._resource_authorization = resource_authorization

    async def execute(self, command: AssignTaskCommand, context: RequestContext) -> None:
        decision = await self._resource_authorization.authorize_task(
            context.principal, command.task_id, TaskOperation.ASSIGN
        )
        if decision != Decision.ALLOW:
            raise PermissionDenied("Assign access to task denied")

        async with self._uow_factory() as uow:
            task = await uow.tasks.get_by_id(command.task_id)
            if task is None:
                raise NotFound("Task", command.task_id)
            task.assign_to(command.assignee_id)
            context.token.raise_if_cancelled()
            await uow.tasks.update(task)
            await uow.save_changes()

        logger.info("Task %s assigned to %s", command.task_id, command.assignee_id)
