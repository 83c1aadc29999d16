"""Role use cases."""

from taskforge.application.use_cases.roles.assign_permission import (
    AssignPermissionCommand,
    AssignPermissionUseCase,
    AssignPermissionValidator,
)
from taskforge.application.use_cases.roles.insert_role import (
    InsertRoleCommand,
    InsertRoleUseCase,
    InsertRoleValidator,
)
from taskforge.application.use_cases.roles.update_role import (
    UpdateRoleCommand,
    UpdateRoleUseCase,
    UpdateRoleValidator,
)

__all__ = [
    "AssignPermissionCommand",
    "AssignPermissionUseCase",
    "AssignPermissionValidator",
    "InsertRoleCommand",
    "InsertRoleUseCase",
    "InsertRoleValidator",
    "UpdateRoleCommand",
    "UpdateRoleUseCase",
    "UpdateRoleValidator",
]
