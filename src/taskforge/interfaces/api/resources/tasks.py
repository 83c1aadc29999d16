"""Tasks API resources."""

import falcon
import falcon.asgi

from taskforge.application.pipeline import RequestPipeline
from taskforge.application.use_cases.tasks import AssignTaskCommand
from taskforge.interfaces.api.context import (
    authenticated_principal,
    body_uuid,
    json_body,
    path_uuid,
)


class TaskAssigneeResource:
    """PUT /v1/tasks/{task_id}/assignee - assign or unassign a task.

    Authorization happens in the use case against the TaskAssign policy.
    """

    def __init__(self, pipeline: RequestPipeline) -> None:
        self._pipeline = pipeline

    async def on_put(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, task_id: str
    ) -> None:
        principal = authenticated_principal(req)
        body = await json_body(req)
        command = AssignTaskCommand(
            task_id=path_uuid(task_id, "task id"),
            assignee_id=body_uuid(body, "assignee_id"),
        )
        await self._pipeline.send(
            command, principal=principal, correlation_id=req.context.correlation_id
        )
        resp.status = falcon.HTTP_204
