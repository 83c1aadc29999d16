"""Application entry point and composition root."""

import logging

from taskforge import __version__
from taskforge.application.authorization import (
    AuthorizationService,
    PermissionResolver,
    ResourceAuthorizationService,
    build_policy_registry,
)
from taskforge.application.use_cases.registry import build_request_pipeline
from taskforge.config import get_settings
from taskforge.infrastructure.auth.keycloak_provider import KeycloakProvider
from taskforge.infrastructure.persistence.postgres.connection import create_pool, ping
from taskforge.infrastructure.persistence.postgres.unit_of_work import create_uow_factory
from taskforge.infrastructure.security.bcrypt_hasher import BcryptPasswordHasher
from taskforge.interfaces.api.app import create_app
from taskforge.interfaces.api.middleware.pool_lifespan import PoolLifespanMiddleware
from taskforge.interfaces.api.resources.health import HealthResource
from taskforge.log import configure_logging

logger = logging.getLogger(__name__)


def create_taskforge_app():
    """Composition root - build Falcon app with all dependencies."""
    settings = get_settings()
    configure_logging(settings)

    pool = create_pool(
        settings.database_url,
        min_size=settings.db_pool_min_size,
        max_size=settings.db_pool_max_size,
    )
    uow_factory = create_uow_factory(pool)

    keycloak = (
        KeycloakProvider(
            server_url=settings.keycloak_url,
            realm=settings.keycloak_realm,
            client_id=settings.keycloak_client_id,
            client_secret=settings.keycloak_client_secret,
        )
        if settings.keycloak_client_secret
        else None
    )
    if keycloak is None:
        logger.warning("Keycloak client secret not configured; bearer tokens will be rejected")

    resolver = PermissionResolver(uow_factory)
    authorization = AuthorizationService(build_policy_registry(uow_factory, resolver))
    resource_authorization = ResourceAuthorizationService(uow_factory, authorization)
    pipeline = build_request_pipeline(
        uow_factory,
        BcryptPasswordHasher(settings.bcrypt_rounds),
        resolver,
        resource_authorization,
        default_role_name=settings.default_role_name,
    )

    async def database_ready() -> bool:
        return await ping(pool)

    logger.info("Taskforge v%s starting (%s)", __version__, settings.environment)
    return create_app(
        pipeline,
        authorization,
        HealthResource(database_ready),
        keycloak_provider=keycloak,
        correlation_header=settings.correlation_header,
        extra_middleware=[PoolLifespanMiddleware(pool)],
    )


def main() -> None:
    """Run the API with uvicorn."""
    import uvicorn

    uvicorn.run(
        "taskforge.main:create_taskforge_app",
        factory=True,
        host="0.0.0.0",
        port=8000,
        log_config=None,
    )


if __name__ == "__main__":
    main()
