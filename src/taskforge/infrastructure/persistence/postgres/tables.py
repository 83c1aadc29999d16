"""Table definitions mapping entities to rows."""

import dataclasses
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar

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
from taskforge.domain.value_objects import MemberStatus, TeamRole

EntityT = TypeVar("EntityT")


@dataclass(frozen=True)
class Table(Generic[EntityT]):
    """Table whose columns are the entity's dataclass fields, ``id`` first."""

    name: str
    entity: type[EntityT]
    converters: Mapping[str, Callable[[Any], Any]] = field(default_factory=dict)

    @property
    def columns(self) -> tuple[str, ...]:
        return tuple(f.name for f in dataclasses.fields(self.entity))

    def to_row(self, entity: EntityT) -> tuple:
        return tuple(
            value.value if isinstance(value, Enum) else value
            for value in (getattr(entity, column) for column in self.columns)
        )

    def from_row(self, row: tuple) -> EntityT:
        values = dict(zip(self.columns, row, strict=True))
        for column, convert in self.converters.items():
            if values[column] is not None:
                values[column] = convert(values[column])
        return self.entity(**values)


USERS = Table("app_user", User)
ROLES = Table("role", Role)
PERMISSIONS = Table("permission", Permission)
USER_ROLES = Table("user_role", UserRole)
ROLE_PERMISSIONS = Table("role_permission", RolePermission)
TEAMS = Table("team", Team)
TEAM_MEMBERS = Table(
    "team_member", TeamMember, converters={"team_role": TeamRole, "status": MemberStatus}
)
PROJECTS = Table("project", Project)
TASKS = Table("task", Task)
