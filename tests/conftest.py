"""Pytest fixtures for Taskforge tests."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any, Generic, TypeVar
from uuid import UUID, uuid4

import pytest

from taskforge.application.authorization import (
    AuthorizationService,
    PermissionResolver,
    Principal,
    ResourceAuthorizationService,
    build_policy_registry,
)
from taskforge.domain.entities import (
    Permission,
    Project,
    Role,
    RolePermission,
    Task,
    Team,
    TeamMember,
    User,
    UserRole,
)
from taskforge.domain.value_objects import TeamRole

EntityT = TypeVar("EntityT")


# --- Fake repositories ---


class FakeRepository(Generic[EntityT]):
    """In-memory repository keyed by entity id.

    ``get_where`` follows the port: collections match by membership,
    scalars by equality. ``writes`` counts rows touched since the last save.
    """

    def __init__(self) -> None:
        self._by_id: dict[UUID, EntityT] = {}
        self.writes = 0

    def add(self, *entities: EntityT) -> None:
        for entity in entities:
            self._by_id[entity.id] = entity

    def all(self) -> list[EntityT]:
        return list(self._by_id.values())

    async def get_by_id(self, entity_id: UUID) -> EntityT | None:
        return self._by_id.get(entity_id)

    async def get_where(self, **criteria: Any) -> list[EntityT]:
        def matches(entity: EntityT) -> bool:
            for name, expected in criteria.items():
                value = getattr(entity, name)
                if isinstance(expected, (set, frozenset, list, tuple)):
                    if value not in expected:
                        return False
                elif value != expected:
                    return False
            return True

        return [entity for entity in self._by_id.values() if matches(entity)]

    async def insert(self, entity: EntityT) -> EntityT:
        self._by_id[entity.id] = entity
        self.writes += 1
        return entity

    async def update(self, entity: EntityT) -> None:
        if entity.id in self._by_id:
            self._by_id[entity.id] = entity
            self.writes += 1

    async def delete(self, entity: EntityT) -> None:
        if self._by_id.pop(entity.id, None) is not None:
            self.writes += 1


class FakeUnitOfWork:
    """In-memory Unit of Work with fake repositories."""

    def __init__(self) -> None:
        self.users: FakeRepository[User] = FakeRepository()
        self.roles: FakeRepository[Role] = FakeRepository()
        self.permissions: FakeRepository[Permission] = FakeRepository()
        self.user_roles: FakeRepository[UserRole] = FakeRepository()
        self.role_permissions: FakeRepository[RolePermission] = FakeRepository()
        self.teams: FakeRepository[Team] = FakeRepository()
        self.team_members: FakeRepository[TeamMember] = FakeRepository()
        self.projects: FakeRepository[Project] = FakeRepository()
        self.tasks: FakeRepository[Task] = FakeRepository()
        self.saves = 0

    def _repositories(self) -> list[FakeRepository]:
        return [
            self.users,
            self.roles,
            self.permissions,
            self.user_roles,
            self.role_permissions,
            self.teams,
            self.team_members,
            self.projects,
            self.tasks,
        ]

    async def save_changes(self) -> int:
        count = 0
        for repository in self._repositories():
            count += repository.writes
            repository.writes = 0
        self.saves += 1
        return count

    async def rollback(self) -> None:
        pass

    # --- seeding helpers ---

    def add_user(self, name: str = "Ada", email: str | None = None) -> User:
        user = User(
            id=uuid4(),
            name=name,
            email=email or f"{name.lower()}@example.com",
            password_hash="hashed",
        )
        self.users.add(user)
        return user

    def add_role(self, name: str, parent: Role | None = None) -> Role:
        role = Role(id=uuid4(), name=name, parent_role_id=parent.id if parent else None)
        self.roles.add(role)
        return role

    def add_permission(self, name: str) -> Permission:
        permission = Permission(id=uuid4(), name=name)
        self.permissions.add(permission)
        return permission

    def grant(self, role: Role, permission: Permission) -> None:
        self.role_permissions.add(
            RolePermission(id=uuid4(), role_id=role.id, permission_id=permission.id)
        )

    def assign(self, user: User, role: Role) -> None:
        self.user_roles.add(UserRole(id=uuid4(), user_id=user.id, role_id=role.id))

    def add_team(self, name: str = "Core") -> Team:
        team = Team(id=uuid4(), name=name)
        self.teams.add(team)
        return team

    def add_member(self, team: Team, user: User, team_role: TeamRole = TeamRole.MEMBER) -> TeamMember:
        member = TeamMember(id=uuid4(), team_id=team.id, user_id=user.id, team_role=team_role)
        self.team_members.add(member)
        return member

    def add_project(self, team: Team, name: str = "Backend") -> Project:
        project = Project(id=uuid4(), team_id=team.id, name=name)
        self.projects.add(project)
        return project

    def add_task(self, project: Project, title: str = "Write tests", assignee: User | None = None) -> Task:
        task = Task(
            id=uuid4(),
            project_id=project.id,
            title=title,
            assigned_to_id=assignee.id if assignee else None,
        )
        self.tasks.add(task)
        return task


def shared_factory(uow: FakeUnitOfWork):
    """Factory that yields the same FakeUnitOfWork on every call."""

    @asynccontextmanager
    async def _factory() -> AsyncIterator[FakeUnitOfWork]:
        yield uow

    return _factory


def principal_for(user: User | None, role: str | None = None) -> Principal:
    return Principal(user_id_claim=str(user.id) if user else None, role_claim=role)


class PlainHasher:
    """PasswordHasher stand-in that keeps tests fast."""

    def hash(self, password: str) -> str:
        return f"hashed:{password}"


# --- Fixtures ---


@pytest.fixture
def fake_uow() -> FakeUnitOfWork:
    """Fresh in-memory UnitOfWork for each test."""
    return FakeUnitOfWork()


@pytest.fixture
def uow_factory(fake_uow: FakeUnitOfWork):
    """Factory returning async context manager over the test's FakeUnitOfWork."""
    return shared_factory(fake_uow)


@pytest.fixture
def resolver(uow_factory) -> PermissionResolver:
    return PermissionResolver(uow_factory)


@pytest.fixture
def authorization(uow_factory, resolver) -> AuthorizationService:
    return AuthorizationService(build_policy_registry(uow_factory, resolver))


@pytest.fixture
def resource_authorization(uow_factory, authorization) -> ResourceAuthorizationService:
    return ResourceAuthorizationService(uow_factory, authorization)


@pytest.fixture
def hasher() -> PlainHasher:
    return PlainHasher()
