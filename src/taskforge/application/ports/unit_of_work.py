"""Unit of Work port - transactional boundary."""

from contextlib import AbstractAsyncContextManager
from typing import Protocol

from taskforge.application.ports.repositories import Repository
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


class UnitOfWork(Protocol):
    """Unit of Work - manages transaction and repository access."""

    @property
    def users(self) -> Repository[User]: ...

    @property
    def roles(self) -> Repository[Role]: ...

    @property
    def permissions(self) -> Repository[Permission]: ...

    @property
    def user_roles(self) -> Repository[UserRole]: ...

    @property
    def role_permissions(self) -> Repository[RolePermission]: ...

    @property
    def teams(self) -> Repository[Team]: ...

    @property
    def team_members(self) -> Repository[TeamMember]: ...

    @property
    def projects(self) -> Repository[Project]: ...

    @property
    def tasks(self) -> Repository[Task]: ...

    async def save_changes(self) -> int:
        """Commit pending writes and return the number of affected rows."""
        ...

    async def rollback(self) -> None: ...


class UnitOfWorkFactory(Protocol):
    """Factory for creating UnitOfWork instances."""

    def __call__(self) -> AbstractAsyncContextManager[UnitOfWork]: ...
