"""Falcon ASGI application."""

import falcon.asgi
from falcon.asgi import App

from taskforge.application.authorization import AuthorizationService
from taskforge.application.pipeline import RequestPipeline
from taskforge.interfaces.api.errors import register_error_handlers
from taskforge.interfaces.api.middleware.auth import AuthMiddleware
from taskforge.interfaces.api.middleware.correlation import CorrelationIdMiddleware
from taskforge.interfaces.api.resources.health import HealthResource
from taskforge.interfaces.api.resources.roles import (
    RolePermissionsResource,
    RoleResource,
    RolesResource,
)
from taskforge.interfaces.api.resources.tasks import TaskAssigneeResource
from taskforge.interfaces.api.resources.users import (
    UserPermissionsResource,
    UserResource,
    UserRolesResource,
    UsersResource,
)


def create_app(
    pipeline: RequestPipeline,
    authorization: AuthorizationService,
    health_resource: HealthResource,
    keycloak_provider=None,
    correlation_header: str = "X-Correlation-ID",
    extra_middleware: list | None = None,
) -> App:
    """Create Falcon ASGI app with routes."""
    app = falcon.asgi.App(
        middleware=[
            *(extra_middleware or []),
            CorrelationIdMiddleware(correlation_header),
            AuthMiddleware(keycloak_provider),
        ],
    )
    register_error_handlers(app)

    app.add_route("/v1/health", health_resource)
    app.add_route("/v1/health/ready", health_resource, suffix="ready")
    app.add_route("/v1/users", UsersResource(pipeline))
    app.add_route("/v1/users/{user_id}", UserResource(pipeline, authorization))
    app.add_route("/v1/users/{user_id}/roles", UserRolesResource(pipeline, authorization))
    app.add_route(
        "/v1/users/{user_id}/permissions", UserPermissionsResource(pipeline, authorization)
    )
    app.add_route("/v1/roles", RolesResource(pipeline, authorization))
    app.add_route("/v1/roles/{role_id}", RoleResource(pipeline, authorization))
    app.add_route("/v1/roles/{role_id}/permissions", RolePermissionsResource(pipeline, authorization))
    app.add_route("/v1/tasks/{task_id}/assignee", TaskAssigneeResource(pipeline))
    return app
