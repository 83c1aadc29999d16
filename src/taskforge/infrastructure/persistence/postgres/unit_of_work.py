"""PostgreSQL Unit of Work implementation."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from psycopg_pool import AsyncConnectionPool

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
from taskforge.infrastructure.persistence.postgres import tables
from taskforge.infrastructure.persistence.postgres.repository import PostgresRepository


class PostgresUnitOfWork:
    """PostgreSQL Unit of Work - one connection, one transaction."""

    def __init__(self, pool: AsyncConnectionPool) -> None:
        self._pool = pool
        self._conn: object | None = None
        self._conn_cm: object | None = None
        self._pending = 0

    def _count(self, rowcount: int) -> None:
        self._pending += max(rowcount, 0)

    def _repository(self, table: tables.Table) -> PostgresRepository:
        return PostgresRepository(self._conn, table, self._count)

    async def __aenter__(self) -> "PostgresUnitOfWork":
        self._conn_cm = self._pool.connection()
        self._conn = await self._conn_cm.__aenter__()
        self._users = self._repository(tables.USERS)
        self._roles = self._repository(tables.ROLES)
        self._permissions = self._repository(tables.PERMISSIONS)
        self._user_roles = self._repository(tables.USER_ROLES)
        self._role_permissions = self._repository(tables.ROLE_PERMISSIONS)
        self._teams = self._repository(tables.TEAMS)
        self._team_members = self._repository(tables.TEAM_MEMBERS)
        self._projects = self._repository(tables.PROJECTS)
        self._tasks = self._repository(tables.TASKS)
        return self

    async def __aexit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        if exc_type and self._conn:
            await self._conn.rollback()
        if self._conn_cm:
            await self._conn_cm.__aexit__(exc_type, exc_val, exc_tb)

    @property
    def users(self) -> PostgresRepository[User]:
        return self._users

    @property
    def roles(self) -> PostgresRepository[Role]:
        return self._roles

    @property
    def permissions(self) -> PostgresRepository[Permission]:
        return self._permissions

    @property
    def user_roles(self) -> PostgresRepository[UserRole]:
        return self._user_roles

    @property
    def role_permissions(self) -> PostgresRepository[RolePermission]:
        return self._role_permissions

    @property
    def teams(self) -> PostgresRepository[Team]:
        return self._teams

    @property
    def team_members(self) -> PostgresRepository[TeamMember]:
        return self._team_members

    @property
    def projects(self) -> PostgresRepository[Project]:
        return self._projects

    @property
    def tasks(self) -> PostgresRepository[Task]:
        return self._tasks

    async def save_changes(self) -> int:
        """Commit and return the rows written since the previous save."""
        if self._conn:
            await self._conn.commit()
        count, self._pending = self._pending, 0
        return count

    async def rollback(self) -> None:
        if self._conn:
            await self._conn.rollback()
        self._pending = 0


def create_uow_factory(pool: AsyncConnectionPool) -> object:
    """Create UnitOfWork factory (async context manager).

    Work that was not saved with ``save_changes`` is rolled back on exit.
    """

    @asynccontextmanager
    async def factory() -> AsyncIterator[PostgresUnitOfWork]:
        uow = PostgresUnitOfWork(pool)
        async with uow:
            try:
                yield uow
            except BaseException:
                await uow.rollback()
                raise
            else:
                await uow.rollback()

    return factory
