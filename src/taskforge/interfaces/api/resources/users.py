"""Users API resources."""

import falcon
import falcon.asgi

from taskforge.application.authorization import AuthorizationService
from taskforge.application.pipeline import RequestPipeline
from taskforge.application.use_cases.users import (
    AssignRoleCommand,
    DeleteUserCommand,
    GetUserPermissionsQuery,
    InsertUserCommand,
    UpdateUserCommand,
)
from taskforge.interfaces.api.context import (
    authenticated_principal,
    body_str,
    body_uuid,
    json_body,
    path_uuid,
    request_principal,
    require_policy,
)


class UsersResource:
    """POST /v1/users - register a user."""

    def __init__(self, pipeline: RequestPipeline) -> None:
        self._pipeline = pipeline

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        principal = request_principal(req)
        body = await json_body(req)
        command = InsertUserCommand(
            name=body_str(body, "name"),
            email=body_str(body, "email"),
            password=body_str(body, "password"),
        )
        user_id = await self._pipeline.send(
            command, principal=principal, correlation_id=req.context.correlation_id
        )
        resp.media = {"id": str(user_id)}
        resp.status = falcon.HTTP_201


class UserResource:
    """PUT/DELETE /v1/users/{user_id}.

    Users may update themselves; admins may update or delete anyone.
    """

    def __init__(self, pipeline: RequestPipeline, authorization: AuthorizationService) -> None:
        self._pipeline = pipeline
        self._authorization = authorization

    async def on_put(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, user_id: str
    ) -> None:
        principal = authenticated_principal(req)
        target = path_uuid(user_id, "user id")
        if principal.user_id != target:
            await require_policy(self._authorization, principal, "AdminOnly")

        body = await json_body(req)
        command = UpdateUserCommand(
            id=target,
            name=body_str(body, "name"),
            email=body_str(body, "email"),
            password=body_str(body, "password"),
        )
        await self._pipeline.send(
            command, principal=principal, correlation_id=req.context.correlation_id
        )
        resp.status = falcon.HTTP_204

    async def on_delete(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, user_id: str
    ) -> None:
        principal = authenticated_principal(req)
        await require_policy(self._authorization, principal, "AdminOnly")
        await self._pipeline.send(
            DeleteUserCommand(id=path_uuid(user_id, "user id")),
            principal=principal,
            correlation_id=req.context.correlation_id,
        )
        resp.status = falcon.HTTP_204


class UserRolesResource:
    """POST /v1/users/{user_id}/roles - assign a role (admins only)."""

    def __init__(self, pipeline: RequestPipeline, authorization: AuthorizationService) -> None:
        self._pipeline = pipeline
        self._authorization = authorization

    async def on_post(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, user_id: str
    ) -> None:
        principal = authenticated_principal(req)
        await require_policy(self._authorization, principal, "AdminOnly")
        body = await json_body(req)
        command = AssignRoleCommand(
            user_id=path_uuid(user_id, "user id"),
            role_id=body_uuid(body, "role_id"),
        )
        assignment_id = await self._pipeline.send(
            command, principal=principal, correlation_id=req.context.correlation_id
        )
        resp.media = {"id": str(assignment_id)}
        resp.status = falcon.HTTP_201


class UserPermissionsResource:
    """GET /v1/users/{user_id}/permissions - own permissions, or anyone's for managers."""

    def __init__(self, pipeline: RequestPipeline, authorization: AuthorizationService) -> None:
        self._pipeline = pipeline
        self._authorization = authorization

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, user_id: str
    ) -> None:
        principal = authenticated_principal(req)
        target = path_uuid(user_id, "user id")
        await require_policy(self._authorization, principal, "CanAccessOwnResources")
        if principal.user_id != target:
            await require_policy(self._authorization, principal, "ManagerOrAdmin")

        permissions = await self._pipeline.send(
            GetUserPermissionsQuery(user_id=target),
            principal=principal,
            correlation_id=req.context.correlation_id,
        )
        resp.media = {"items": [{"id": str(p.id), "name": p.name} for p in permissions]}
        resp.status = falcon.HTTP_200
