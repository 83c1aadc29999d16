"""Fixtures for API tests."""

from uuid import uuid4

import pytest
from falcon.testing import TestClient

from taskforge.application.use_cases.registry import build_request_pipeline
from taskforge.domain.value_objects import SystemRole
from taskforge.infrastructure.auth.keycloak_provider import OIDCUser
from taskforge.interfaces.api.app import create_app
from taskforge.interfaces.api.resources.health import HealthResource

from tests.conftest import FakeUnitOfWork


class FakeKeycloak:
    """Accepts tokens registered with ``issue``; everything else is rejected."""

    def __init__(self) -> None:
        self._tokens: dict[str, OIDCUser] = {}

    def issue(self, user_id, role: SystemRole | None) -> dict[str, str]:
        token = f"token-{uuid4()}"
        self._tokens[token] = OIDCUser(
            user_id=str(user_id),
            email=None,
            username=None,
            realm_roles=[role.value] if role else [],
        )
        return {"Authorization": f"Bearer {token}"}

    async def decode_token(self, token: str) -> OIDCUser | None:
        return self._tokens.get(token)


@pytest.fixture
def keycloak() -> FakeKeycloak:
    return FakeKeycloak()


@pytest.fixture
def app(uow_factory, hasher, resolver, authorization, resource_authorization, keycloak):
    """Falcon ASGI app over the in-memory unit of work."""
    pipeline = build_request_pipeline(uow_factory, hasher, resolver, resource_authorization)
    return create_app(pipeline, authorization, HealthResource(), keycloak_provider=keycloak)


@pytest.fixture
def client(app) -> TestClient:
    """Falcon ASGI test client."""
    return TestClient(app)


@pytest.fixture
def admin_headers(fake_uow: FakeUnitOfWork, keycloak: FakeKeycloak) -> dict[str, str]:
    return keycloak.issue(fake_uow.add_user("Root").id, SystemRole.ADMIN)
