"""User use cases."""

from taskforge.application.use_cases.users.assign_role import (
    AssignRoleCommand,
    AssignRoleUseCase,
    AssignRoleValidator,
)
from taskforge.application.use_cases.users.delete_user import (
    DeleteUserCommand,
    DeleteUserUseCase,
    DeleteUserValidator,
)
from taskforge.application.use_cases.users.get_user_permissions import (
    GetUserPermissionsQuery,
    GetUserPermissionsUseCase,
)
from taskforge.application.use_cases.users.insert_user import (
    INSERT_USER_EXEMPTIONS,
    InsertUserCommand,
    InsertUserUseCase,
    InsertUserValidator,
)
from taskforge.application.use_cases.users.update_user import (
    UPDATE_USER_EXEMPTIONS,
    UpdateUserCommand,
    UpdateUserUseCase,
    UpdateUserValidator,
)

__all__ = [
    "INSERT_USER_EXEMPTIONS",
    "UPDATE_USER_EXEMPTIONS",
    "AssignRoleCommand",
    "AssignRoleUseCase",
    "AssignRoleValidator",
    "DeleteUserCommand",
    "DeleteUserUseCase",
    "DeleteUserValidator",
    "GetUserPermissionsQuery",
    "GetUserPermissionsUseCase",
    "InsertUserCommand",
    "InsertUserUseCase",
    "InsertUserValidator",
    "UpdateUserCommand",
    "UpdateUserUseCase",
    "UpdateUserValidator",
]
