"""Roles API resources. Every endpoint requires the AdminOnly policy."""

import falcon
import falcon.asgi

from taskforge.application.authorization import AuthorizationService
from taskforge.application.pipeline import RequestPipeline
from taskforge.application.use_cases.roles import (
    AssignPermissionCommand,
    InsertRoleCommand,
    UpdateRoleCommand,
)
from taskforge.interfaces.api.context import (
    authenticated_principal,
    body_str,
    body_uuid,
    json_body,
    path_uuid,
    require_policy,
)


class _AdminResource:
    def __init__(self, pipeline: RequestPipeline, authorization: AuthorizationService) -> None:
        self._pipeline = pipeline
        self._authorization = authorization

    async def _admin(self, req: falcon.asgi.Request):
        principal = authenticated_principal(req)
        await require_policy(self._authorization, principal, "AdminOnly")
        return principal


class RolesResource(_AdminResource):
    """POST /v1/roles - create a role."""

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        principal = await self._admin(req)
        body = await json_body(req)
        command = InsertRoleCommand(
            name=body_str(body, "name"),
            parent_role_id=body_uuid(body, "parent_role_id"),
        )
        role_id = await self._pipeline.send(
            command, principal=principal, correlation_id=req.context.correlation_id
        )
        resp.media = {"id": str(role_id)}
        resp.status = falcon.HTTP_201


class RoleResource(_AdminResource):
    """PUT /v1/roles/{role_id} - rename or re-parent a role."""

    async def on_put(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, role_id: str
    ) -> None:
        principal = await self._admin(req)
        body = await json_body(req)
        command = UpdateRoleCommand(
            id=path_uuid(role_id, "role id"),
            name=body_str(body, "name"),
            parent_role_id=body_uuid(body, "parent_role_id"),
        )
        await self._pipeline.send(
            command, principal=principal, correlation_id=req.context.correlation_id
        )
        resp.status = falcon.HTTP_204


class RolePermissionsResource(_AdminResource):
    """POST /v1/roles/{role_id}/permissions - grant a permission to a role."""

    async def on_post(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, role_id: str
    ) -> None:
        principal = await self._admin(req)
        body = await json_body(req)
        command = AssignPermissionCommand(
            role_id=path_uuid(role_id, "role id"),
            permission_id=body_uuid(body, "permission_id"),
        )
        grant_id = await self._pipeline.send(
            command, principal=principal, correlation_id=req.context.correlation_id
        )
        resp.media = {"id": str(grant_id)}
        resp.status = falcon.HTTP_201
