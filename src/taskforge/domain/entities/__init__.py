"""Domain entities."""

from taskforge.domain.entities.permission import Permission
from taskforge.domain.entities.project import Project
from taskforge.domain.entities.role import Role
from taskforge.domain.entities.role_permission import RolePermission
from taskforge.domain.entities.task import Task
from taskforge.domain.entities.team import Team, TeamMember
from taskforge.domain.entities.user import User
from taskforge.domain.entities.user_role import UserRole

__all__ = [
    "Permission",
    "Project",
    "Role",
    "RolePermission",
    "Task",
    "Team",
    "TeamMember",
    "User",
    "UserRole",
]
